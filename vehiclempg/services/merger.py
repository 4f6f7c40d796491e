from typing import Mapping, Sequence

from vehiclempg.db.models import Vehicle
from vehiclempg.schemas.vehicle import AverageStat, FilterResponse, VehicleResponse


def merge_results(records: Sequence[Vehicle | Mapping], stats: Sequence[AverageStat]) -> FilterResponse:
    """Combine filtered vehicles and group averages into one payload.

    The two lists come from different filters and are not reconciled.
    """
    return FilterResponse(
        vehicles=[VehicleResponse.model_validate(r) for r in records],
        averages=list(stats),
    )


def is_empty(response: FilterResponse) -> bool:
    return not response.vehicles and not response.averages
