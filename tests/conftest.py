"""Shared fixtures: an in-memory SQLite store and a client bound to it."""

import pytest
from fastapi.testclient import TestClient

from database import create_db_engine, create_session_factory, init_db
from main import create_app
from store import UserStore


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return UserStore(create_session_factory(engine))


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as client:
        yield client


@pytest.fixture
def sample_user():
    return {
        "name": "asd",
        "dob": "1990-05-17",
        "address": "jln",
        "description": "dsc",
    }
