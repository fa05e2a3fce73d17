# Shared fixtures: mongomock document store, SQLite relational engine, TestClient.
import os

import mongomock
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from db import get_points_collection
from main import create_app
from models.point import COLLECTION_NAME
from utils.config import Settings

TEST_DATABASE = "reciclo_test"


@pytest.fixture
def settings():
    """Settings pointing at throwaway stores; never read from the environment."""
    return Settings(
        mongodb_uri="mongodb://localhost:27017",
        postgres_host="localhost",
        postgres_port=5432,
        postgres_db="reciclo_test",
        postgres_user="test",
        postgres_password="test",
        port=3000,
        mongodb_database=TEST_DATABASE,
    )


@pytest.fixture
def mongo_client():
    """Fresh in-memory MongoDB per test."""
    return mongomock.MongoClient(tz_aware=True)


@pytest.fixture
def collection(mongo_client):
    """Points collection of the in-memory store."""
    return mongo_client[TEST_DATABASE][COLLECTION_NAME]


@pytest.fixture
def app(settings, mongo_client):
    """Application wired to mongomock and an in-memory SQLite engine."""
    return create_app(settings, document_client=mongo_client, sql_engine=create_engine("sqlite://"))


@pytest.fixture
def client(app, collection):
    """API test client; overrides get_points_collection with the test collection, cleared on teardown."""
    app.dependency_overrides[get_points_collection] = lambda: collection
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def real_collection():
    """Points collection on a real MongoDB (MONGODB_TEST_URI); dropped afterwards."""
    uri = os.environ.get("MONGODB_TEST_URI")
    if not uri:
        pytest.skip("MONGODB_TEST_URI not set")
    from pymongo import MongoClient

    from db import points_collection

    mongo = MongoClient(uri, tz_aware=True)
    coll = points_collection(mongo, TEST_DATABASE)
    try:
        yield coll
    finally:
        mongo.drop_database(TEST_DATABASE)
        mongo.close()
