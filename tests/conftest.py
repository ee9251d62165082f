"""Shared fixtures: an application wired to an in-memory MongoDB."""

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.core.config import Settings
from app.db import UserStore, init_database
from app.main import create_app


@pytest.fixture
def settings():
    return Settings(_env_file=None, secret_key="test-secret", database_name="signup_test")


@pytest.fixture
def client(settings):
    app = create_app(settings, mongo_client=AsyncMongoMockClient())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def store():
    database = await init_database(AsyncMongoMockClient(), "signup_test")
    return UserStore(database)


@pytest.fixture
def bob():
    return {
        "username": "bob",
        "name": "Bob",
        "email": "bob@x.com",
        "phone": "555",
        "dob": "1990-01-01",
        "password": "p1",
        "confirmPassword": "p1",
    }
