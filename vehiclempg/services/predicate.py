"""Translate optional filter criteria into a composable record predicate."""
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from vehiclempg.schemas.vehicle import FilterCriteria

Operator = Literal["eq", "in", "gte", "lte"]


class Condition(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    op: Operator
    value: Any


class Predicate(BaseModel):
    """Conjunction of conditions. No conditions matches every record."""

    model_config = ConfigDict(frozen=True)

    conditions: tuple[Condition, ...] = ()

    @property
    def is_identity(self) -> bool:
        return not self.conditions


def split_makes(raw: str) -> list[str]:
    """Split a comma-separated makes parameter. Tokens are not trimmed and
    empty tokens are kept, so "Toyota,," gives ["Toyota", "", ""]."""
    return raw.split(",")


def make_in(makes: list[str]) -> Condition:
    return Condition(field="make", op="in", value=tuple(makes))


def _eq(field: str, value) -> Condition:
    return Condition(field=field, op="eq", value=value)


def build_predicate(criteria: FilterCriteria) -> Predicate:
    conditions: list[Condition] = []

    # an empty makes list adds no constraint
    if criteria.makes:
        conditions.append(make_in(criteria.makes))
    if criteria.make is not None:
        conditions.append(_eq("make", criteria.make))
    if criteria.model is not None:
        conditions.append(_eq("model", criteria.model))
    if criteria.fuel_type is not None:
        conditions.append(_eq("fuelType", criteria.fuel_type))

    if criteria.cylinders is not None:
        conditions.append(_eq("cylinders", criteria.cylinders))

    if criteria.year is not None:
        conditions.append(_eq("year", criteria.year))

    # Options: no years, from only, to only, or both
    if criteria.year_from is not None and criteria.year_to is not None:
        conditions.append(Condition(field="year", op="gte", value=criteria.year_from))
        conditions.append(Condition(field="year", op="lte", value=criteria.year_to))
    elif criteria.year_from is not None:
        conditions.append(Condition(field="year", op="gte", value=criteria.year_from))
    elif criteria.year_to is not None:
        conditions.append(Condition(field="year", op="lte", value=criteria.year_to))

    return Predicate(conditions=tuple(conditions))
