"""
Shared fixtures for the API and service tests.
Uses a throwaway SQLite file per test to avoid requiring a real PostgreSQL
connection.
"""

import random
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from transit_delay.config import Settings
from transit_delay.database import Database
from transit_delay.main import create_app
from transit_delay.models import QueryRecord
from transit_delay.services.predictor import DelayPredictor

BASE_TIME = datetime(2024, 3, 15, 9, 0, 0)


def ts(offset_sec=0):
    """Return a fixed naive UTC datetime offset by offset_sec seconds."""
    return BASE_TIME + timedelta(seconds=offset_sec)


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        log_level="WARNING",
    )


@pytest.fixture()
async def database(settings):
    """SQLite database with the queries table created."""
    db = Database(settings.async_database_url)
    await db.init_db()
    yield db
    await db.dispose()


@pytest.fixture()
async def session(database):
    async with database.session_maker() as s:
        yield s


@pytest.fixture()
def add_records(session):
    """
    Insert records with explicit predictions; created_at increases by one
    second per record unless given.
    """
    async def _add(route, predictions, start=0, created_at=None, stop="S1"):
        records = []
        for i, prediction in enumerate(predictions):
            record = QueryRecord(
                route=route,
                stop=stop,
                datetime=ts(),
                weather="Clear",
                prediction=prediction,
                confidence=80.0,
                created_at=created_at or ts(start + i),
            )
            session.add(record)
            records.append(record)
        await session.commit()
        return records

    return _add


@pytest.fixture()
def client(settings):
    """TestClient with a seeded predictor, running the app lifespan."""
    app = create_app(settings, predictor=DelayPredictor(rng=random.Random(1234)))
    with TestClient(app) as c:
        yield c
