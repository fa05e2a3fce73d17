"""Re.Ciclo points API: FastAPI backend."""
import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
from fastapi.middleware.cors import CORSMiddleware
from pymongo import MongoClient
from sqlalchemy.engine import Engine

from api.points import router as points_router
from api.search import router as search_router
from api.statistics import router as statistics_router
from db import create_document_client, create_sql_engine, enable_postgis, points_collection
from schemas.health import HealthResponse
from utils.config import Settings, get_settings, parse_cors_origins
from utils.errors import ConfigurationError

LOG = logging.getLogger(__name__)

SERVICE_NAME = "reciclo-api"
VERSION = "0.1.0"


def create_app(
    settings: Settings | None = None,
    *,
    document_client: MongoClient | None = None,
    sql_engine: Engine | None = None,
) -> FastAPI:
    """
    Build the application. Connections are opened at startup and kept on app.state.
    Settings default to the process environment; clients may be injected (tests).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        cfg = settings or get_settings()
        client = document_client or create_document_client(cfg)
        engine = sql_engine or create_sql_engine(cfg)
        enable_postgis(engine)
        app.state.settings = cfg
        app.state.points = points_collection(client, cfg.mongodb_database)
        app.state.sql_engine = engine
        try:
            yield
        finally:
            if document_client is None:
                client.close()
            if sql_engine is None:
                engine.dispose()
            LOG.info("Connections closed")

    app = FastAPI(
        title="Re.Ciclo",
        description="Donation and collection points on a map, with dashboard statistics",
        version=VERSION,
        lifespan=lifespan,
    )

    origins = settings.cors_origins if settings else parse_cors_origins(os.environ.get("CORS_ORIGINS"))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(points_router, prefix="/api")
    app.include_router(search_router, prefix="/api")
    app.include_router(statistics_router, prefix="/api")

    @app.get("/api/health", response_model=HealthResponse)
    def api_health() -> HealthResponse:
        return HealthResponse(service=SERVICE_NAME, version=VERSION)

    @app.get("/")
    def root() -> dict:
        """Root info."""
        return {"service": SERVICE_NAME, "docs": "/docs", "health": "/api/health"}

    return app


app = create_app()


def main() -> int:
    """Run the API with uvicorn on the configured port."""
    import uvicorn

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        LOG.error("Invalid configuration: %s", exc)
        return 1
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
