"""Grouped-average aggregation pipelines built from explicit stage types."""
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from vehiclempg.services.predicate import Predicate, make_in

GROUP_KEYS = ("make", "year")


class Match(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["match"] = "match"
    predicate: Predicate


class Group(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["group"] = "group"
    keys: tuple[str, ...]
    average_field: str
    output: str = "average"


class Sort(BaseModel):
    """Order by a record field, or by a Group key or output label."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["sort"] = "sort"
    field: str
    descending: bool = False


Stage = Annotated[Union[Match, Group, Sort], Field(discriminator="kind")]


class Pipeline(BaseModel):
    model_config = ConfigDict(frozen=True)

    stages: tuple[Stage, ...]


def build_average_pipeline(makes: list[str] | None, average_field: str) -> Pipeline:
    """Group by make and year, average `average_field` per group, newest year first.

    `average_field` is used verbatim; a field that is missing or not numeric
    yields a null average for every group rather than an error. Order among
    groups sharing a year is left to the store.
    """
    stages: list[Match | Group | Sort] = []

    # filter on makes before grouping, same rule as build_predicate
    if makes:
        stages.append(Match(predicate=Predicate(conditions=(make_in(makes),))))

    stages.append(Group(keys=GROUP_KEYS, average_field=average_field))
    stages.append(Sort(field="year", descending=True))

    return Pipeline(stages=tuple(stages))
