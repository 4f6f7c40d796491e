from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class FilterCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    makes: list[str] | None = None
    cylinders: int | None = None
    year_from: int | None = None
    year_to: int | None = None
    # Single-attribute lookups
    make: str | None = None
    model: str | None = None
    year: int | None = None
    fuel_type: str | None = None


class VehicleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    make: str | None
    model: str | None
    year: int | None
    cylinders: int | None
    fuel_type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("fuelType", "fuel_type"),
        serialization_alias="fuelType",
    )
    city: float | None = None
    highway: float | None = None
    combined: float | None = None


class AverageStat(BaseModel):
    make: str | None
    year: int | None
    average: float | None


class FilterResponse(BaseModel):
    vehicles: list[VehicleResponse]
    averages: list[AverageStat]
