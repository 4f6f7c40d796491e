from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import DeclarativeBase

from vehiclempg.config import settings


class Base(DeclarativeBase):
    pass


def make_engine(url: str | None = None, **kwargs) -> AsyncEngine:
    kwargs.setdefault("echo", settings.DEBUG)
    return create_async_engine(url or settings.DATABASE_URL, **kwargs)


async def init_db(engine: AsyncEngine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
