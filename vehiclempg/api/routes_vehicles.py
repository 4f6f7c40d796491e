from fastapi import APIRouter, Depends, Query, Request, Response

from vehiclempg.config import settings
from vehiclempg.db.store import StoreClient
from vehiclempg.schemas.vehicle import AverageStat, FilterCriteria, FilterResponse, VehicleResponse
from vehiclempg.services.merger import is_empty, merge_results
from vehiclempg.services.pipeline import build_average_pipeline
from vehiclempg.services.predicate import build_predicate, split_makes

router = APIRouter(prefix=f"{settings.API_PREFIX}/vehicles", tags=["vehicles"])


def get_store(request: Request) -> StoreClient:
    return request.app.state.store


async def _find(store: StoreClient, criteria: FilterCriteria):
    vehicles = await store.find(build_predicate(criteria))
    if not vehicles:
        return Response(status_code=204)
    return [VehicleResponse.model_validate(v) for v in vehicles]


@router.get("/all", response_model=list[VehicleResponse])
async def get_all_vehicles(store: StoreClient = Depends(get_store)):
    return await _find(store, FilterCriteria())


@router.get("/make", response_model=list[VehicleResponse])
async def get_vehicles_by_make(make: str, store: StoreClient = Depends(get_store)):
    return await _find(store, FilterCriteria(make=make))


@router.get("/model", response_model=list[VehicleResponse])
async def get_vehicles_by_model(model: str, store: StoreClient = Depends(get_store)):
    return await _find(store, FilterCriteria(model=model))


@router.get("/year", response_model=list[VehicleResponse])
async def get_vehicles_by_year(year: int, store: StoreClient = Depends(get_store)):
    return await _find(store, FilterCriteria(year=year))


@router.get("/years", response_model=list[VehicleResponse])
async def get_vehicles_between_years(
    year_from: int = Query(alias="from"),
    year_to: int = Query(alias="to"),
    store: StoreClient = Depends(get_store),
):
    return await _find(store, FilterCriteria(year_from=year_from, year_to=year_to))


@router.get("/cylinders", response_model=list[VehicleResponse])
async def get_vehicles_by_cylinders(cylinders: int, store: StoreClient = Depends(get_store)):
    return await _find(store, FilterCriteria(cylinders=cylinders))


@router.get("/fuel", response_model=list[VehicleResponse])
async def get_vehicles_by_fuel_type(fuel_type: str = Query(alias="type"), store: StoreClient = Depends(get_store)):
    return await _find(store, FilterCriteria(fuel_type=fuel_type))


@router.get("/makes", response_model=list[str])
async def get_vehicle_makes(store: StoreClient = Depends(get_store)):
    return await store.distinct("make")


@router.get("/averages", response_model=list[AverageStat])
async def get_averages(
    average_field: str = Query(alias="type"),
    makes: str | None = None,
    store: StoreClient = Depends(get_store),
):
    split = split_makes(makes) if makes is not None else None
    averages = await store.aggregate(build_average_pipeline(split, average_field))
    if not averages:
        return Response(status_code=204)
    return averages


@router.get("/filter", response_model=FilterResponse)
async def filter_vehicles(
    mpg: str,
    makes: str | None = None,
    cylinders: int | None = None,
    year_from: int | None = Query(default=None, alias="from"),
    year_to: int | None = Query(default=None, alias="to"),
    store: StoreClient = Depends(get_store),
):
    split = split_makes(makes) if makes is not None else None
    criteria = FilterCriteria(makes=split, cylinders=cylinders, year_from=year_from, year_to=year_to)

    vehicles = await store.find(build_predicate(criteria))
    averages = await store.aggregate(build_average_pipeline(split, mpg))

    result = merge_results(vehicles, averages)
    if is_empty(result):
        return Response(status_code=204)
    return result
