"""Document store (MongoDB) and relational store (PostgreSQL) connections."""
import logging

from fastapi import Request
from pymongo import MongoClient
from pymongo.collection import Collection
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from models.point import COLLECTION_NAME, ensure_indexes
from utils.config import Settings

LOG = logging.getLogger(__name__)


def create_document_client(settings: Settings) -> MongoClient:
    """Connect to MongoDB and fail fast if the server does not answer."""
    client: MongoClient = MongoClient(settings.mongodb_uri, tz_aware=True)
    client.admin.command("ping")
    LOG.info("Connected to MongoDB database %s", settings.mongodb_database)
    return client


def points_collection(client: MongoClient, database: str) -> Collection:
    """Return the points collection with its indexes in place."""
    collection = client[database][COLLECTION_NAME]
    ensure_indexes(collection)
    return collection


def create_sql_engine(settings: Settings) -> Engine:
    """Engine for the PostgreSQL database configured in settings."""
    return create_engine(settings.postgres_url, pool_pre_ping=True, echo=False)


def enable_postgis(engine: Engine) -> None:
    """Verify the relational connection and enable PostGIS. Other dialects are only checked."""
    with engine.begin() as conn:
        if engine.dialect.name != "postgresql":
            conn.execute(text("SELECT 1"))
            LOG.info("Relational store is %s; skipping PostGIS", engine.dialect.name)
            return
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS postgis"))
    LOG.info("PostGIS extension enabled")


def get_points_collection(request: Request) -> Collection:
    """FastAPI dependency: the points collection opened at startup."""
    return request.app.state.points
