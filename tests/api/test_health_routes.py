"""Health Routes - liveness always UP, readiness follows database connectivity."""

import pytest

import pension_sim.infrastructure.database as db_module
from pension_sim.infrastructure.database import DatabaseSessionManager


@pytest.fixture
def restore_db_manager():
    original = db_module.db_manager
    yield
    db_module.db_manager = original


async def test_liveness(client):
    res = await client.get("/api/v1/health/")

    assert res.status_code == 200
    assert res.json()["status"] == "UP"
    assert res.json()["service"] == "pension-simulation-api"


async def test_readiness_without_database_returns_503(client, restore_db_manager):
    db_module.db_manager = None

    res = await client.get("/api/v1/health/ready")

    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_with_database(client, restore_db_manager, tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'ready.db'}")
    db_module.db_manager = manager
    try:
        res = await client.get("/api/v1/health/ready")
    finally:
        await manager.dispose()

    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
