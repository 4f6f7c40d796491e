from sqlalchemy import Column, Integer, String, Float, Index

from vehiclempg.config import settings
from vehiclempg.db.database import Base


class Vehicle(Base):
    __tablename__ = settings.VEHICLE_TABLE

    id = Column(Integer, primary_key=True, autoincrement=True)
    make = Column(String(100))
    model = Column(String(200))
    year = Column(Integer)
    cylinders = Column(Integer)
    fuel_type = Column("fuelType", String(50))
    city = Column(Float)
    highway = Column(Float)
    combined = Column(Float)

    __table_args__ = (
        Index("ix_vehicle_make_year", "make", "year"),
        Index("ix_vehicle_cylinders", "cylinders"),
    )


# Public record field name -> mapped column
FIELD_COLUMNS = {
    "id": Vehicle.id,
    "make": Vehicle.make,
    "model": Vehicle.model,
    "year": Vehicle.year,
    "cylinders": Vehicle.cylinders,
    "fuelType": Vehicle.fuel_type,
    "city": Vehicle.city,
    "highway": Vehicle.highway,
    "combined": Vehicle.combined,
}

NUMERIC_FIELDS = {"year", "cylinders", "city", "highway", "combined"}
