"""Pytest fixtures: an in-memory SQLite vehicle store and an HTTP client."""

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from vehiclempg.db.database import init_db
from vehiclempg.db.models import Vehicle
from vehiclempg.db.store import SqlStoreClient
from vehiclempg.main import app

VEHICLES = [
    dict(make="Toyota", model="Camry", year=2018, cylinders=4, fuel_type="Regular", city=28, highway=39, combined=32),
    dict(make="Toyota", model="Tundra", year=2018, cylinders=8, fuel_type="Regular", city=13, highway=17, combined=15),
    dict(make="Toyota", model="Corolla", year=2012, cylinders=4, fuel_type="Regular", city=26, highway=34, combined=29),
    dict(make="Honda", model="Civic", year=2020, cylinders=4, fuel_type="Regular", city=30, highway=38, combined=33),
    dict(make="Honda", model="Accord", year=2020, cylinders=4, fuel_type="Regular", city=26, highway=28, combined=27),
    dict(make="Honda", model="Pilot", year=2016, cylinders=6, fuel_type="Regular", city=19, highway=27, combined=22),
    dict(make="BMW", model="M3", year=2021, cylinders=6, fuel_type="Premium", city=16, highway=23, combined=19),
    dict(make="Tesla", model="Model 3", year=2021, cylinders=None, fuel_type="Electricity", city=None, highway=None, combined=None),
]


@pytest.fixture
async def store():
    client = SqlStoreClient.from_url(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(client.engine)
    async with AsyncSession(client.engine) as db:
        db.add_all([Vehicle(**v) for v in VEHICLES])
        await db.commit()
    yield client
    await client.close()


@pytest.fixture
async def empty_store():
    client = SqlStoreClient.from_url(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(client.engine)
    yield client
    await client.close()


def _client(store, **transport_kwargs) -> httpx.AsyncClient:
    app.state.store = store
    transport = httpx.ASGITransport(app=app, **transport_kwargs)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
async def client(store):
    async with _client(store) as c:
        yield c


@pytest.fixture
async def empty_client(empty_store):
    async with _client(empty_store) as c:
        yield c
