# tests/conftest.py

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from evaluation_api.main import app, get_router
from evaluation_api.router import Router
from evaluation_api.sheets import provision_tables
from evaluation_api.store import Base, RowStore

# 09:30:15 in Asia/Bangkok
FIXED_NOW = datetime(2025, 3, 1, 2, 30, 15, 123000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def session_factory():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return RowStore(session_factory, name="Test Store")


@pytest.fixture
def provisioned_store(store):
    provision_tables(store, seed_sample=False)
    return store


@pytest.fixture
def router(provisioned_store):
    return Router(provisioned_store, clock=lambda: FIXED_NOW, timezone_name="Asia/Bangkok")


@pytest.fixture
def client(router):
    app.dependency_overrides[get_router] = lambda: router
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_evaluation():
    return {
        "center": "A",
        "week": "1",
        "day": "Mon",
        "period": "AM",
        "instructor1": "X",
        "instructor2": "",
        "clarity": 5,
        "preparation": 4,
        "interaction": 5,
        "punctuality": 4,
        "satisfaction": 5,
        "comment": "ok",
    }


@pytest.fixture
def sample_schedule():
    return {
        "A": {
            "1": {
                "Mon": {
                    "AM": {"instructor1": "X", "instructor2": ""},
                    "PM": {"instructor1": "Y", "instructor2": "Z"},
                },
                "Tue": {"AM": {"instructor1": "", "instructor2": "W"}},
            },
            "2": {"Mon": {"AM": {"instructor1": "X", "instructor2": "Y"}}},
        },
        "B": {"1": {"Sat": {"AM": {"instructor1": "Q", "instructor2": ""}}}},
    }
