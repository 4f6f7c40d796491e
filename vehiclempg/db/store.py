import logging
from abc import ABC, abstractmethod

from sqlalchemy import Float, cast, func, null, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from vehiclempg.db.database import make_engine
from vehiclempg.db.models import FIELD_COLUMNS, NUMERIC_FIELDS, Vehicle
from vehiclempg.schemas.vehicle import AverageStat
from vehiclempg.services.pipeline import Group, Match, Pipeline, Sort
from vehiclempg.services.predicate import Condition, Predicate

logger = logging.getLogger(__name__)


class StoreClient(ABC):
    """Read-only access to the vehicle record store."""

    @abstractmethod
    async def find(self, predicate: Predicate) -> list[Vehicle]:
        ...

    @abstractmethod
    async def aggregate(self, pipeline: Pipeline) -> list[AverageStat]:
        ...

    @abstractmethod
    async def distinct(self, field: str) -> list:
        ...

    @abstractmethod
    async def ping(self) -> None:
        ...

    async def close(self) -> None:
        pass


def _column(field: str):
    column = FIELD_COLUMNS.get(field)
    if column is None:
        raise ValueError(f"Unknown vehicle field: {field}")
    return column


def _clause(condition: Condition):
    column = _column(condition.field)
    if condition.op == "eq":
        return column == condition.value
    if condition.op == "in":
        return column.in_(condition.value)
    if condition.op == "gte":
        return column >= condition.value
    if condition.op == "lte":
        return column <= condition.value
    raise ValueError(f"Unsupported operator: {condition.op}")


def _where(predicate: Predicate) -> list:
    return [_clause(c) for c in predicate.conditions]


class SqlStoreClient(StoreClient):
    """StoreClient over an async SQLAlchemy engine. Owns the engine."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    @classmethod
    def from_url(cls, url: str | None = None, **engine_kwargs) -> "SqlStoreClient":
        return cls(make_engine(url, **engine_kwargs))

    async def find(self, predicate: Predicate) -> list[Vehicle]:
        query = select(Vehicle).where(*_where(predicate)).order_by(Vehicle.id)
        logger.debug(f"find: {'all records' if predicate.is_identity else predicate.conditions}")
        async with self._session() as db:
            result = await db.execute(query)
            return list(result.scalars().all())

    async def aggregate(self, pipeline: Pipeline) -> list[AverageStat]:
        query = self._compile(pipeline)
        logger.debug(f"aggregate: {pipeline.stages}")
        async with self._session() as db:
            result = await db.execute(query)
            return [AverageStat(**row._mapping) for row in result.all()]

    async def distinct(self, field: str) -> list:
        column = _column(field)
        async with self._session() as db:
            result = await db.execute(select(column).distinct().order_by(column))
            return list(result.scalars().all())

    async def ping(self) -> None:
        async with self._session() as db:
            await db.execute(text("SELECT 1"))

    async def close(self) -> None:
        await self.engine.dispose()

    @staticmethod
    def _compile(pipeline: Pipeline):
        """Turn Match/Group/Sort stages into one grouped SELECT.

        Only pipelines with a single Group and every Match ahead of it are
        supported. Sort fields may name a Group key, the Group output label
        or any record field.
        """
        group: Group | None = None
        where: list = []
        sorts: list[Sort] = []

        for stage in pipeline.stages:
            if isinstance(stage, Match):
                if group is not None:
                    raise ValueError("Match stage after Group is not supported")
                where.extend(_where(stage.predicate))
            elif isinstance(stage, Group):
                if group is not None:
                    raise ValueError("Only one Group stage is supported")
                group = stage
            elif isinstance(stage, Sort):
                sorts.append(stage)
            else:
                raise ValueError(f"Unknown pipeline stage: {stage!r}")

        if group is None:
            raise ValueError("Pipeline has no Group stage")

        if group.average_field in NUMERIC_FIELDS:
            average = func.avg(_column(group.average_field))
        else:
            # missing or non-numeric field
            average = cast(null(), Float)

        labels = {k: _column(k) for k in group.keys}
        labels[group.output] = average

        order_by = []
        for sort in sorts:
            expr = labels.get(sort.field)
            if expr is None:
                expr = _column(sort.field)
            order_by.append(expr.desc() if sort.descending else expr.asc())

        return (
            select(*[col.label(k) for k, col in labels.items()])
            .where(*where)
            .group_by(*[_column(k) for k in group.keys])
            .order_by(*order_by)
        )
