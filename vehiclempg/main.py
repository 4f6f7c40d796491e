import logging
import traceback
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from vehiclempg.config import settings
from vehiclempg.db.database import init_db
from vehiclempg.db.store import SqlStoreClient
from vehiclempg.api.routes_vehicles import router as vehicles_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = SqlStoreClient.from_url(settings.DATABASE_URL)
    if settings.INIT_DB:
        await init_db(store.engine)
    app.state.store = store
    logger.info("Vehicle store opened")
    yield
    await store.close()
    logger.info("Vehicle store closed")


app = FastAPI(title="VehicleMPG", version="0.1.0", lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exc()
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}\n{tb}")
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc)},
    )


@app.get(f"{settings.API_PREFIX}/health")
async def health_check(request: Request):
    """Check store connectivity."""
    try:
        await request.app.state.store.ping()
        return {"status": "ok", "database": "connected"}
    except Exception as e:
        return {"status": "error", "database": str(e)}


app.include_router(vehicles_router)


def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level="debug" if settings.DEBUG else "info")
