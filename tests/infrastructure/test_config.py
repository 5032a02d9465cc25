"""Settings - verifies URL normalization and positive deadline limits."""

import pytest
from pydantic import ValidationError

from pension_sim.config import Settings


def test_postgres_url_gets_asyncpg_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/pension")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/pension"


def test_sqlite_url_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///local.db")
    assert settings.database_url == "sqlite+aiosqlite:///local.db"


def test_defaults():
    settings = Settings()
    assert settings.simulation_timeout_ms == 30_000
    assert settings.kafka_topic == "pension-simulation-events"


@pytest.mark.parametrize("field", ["simulation_timeout_ms", "simulation_max_concurrency"])
@pytest.mark.parametrize("value", [0, -1])
def test_non_positive_limits_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SIMULATION_TIMEOUT_MS", "500")
    monkeypatch.setenv("KAFKA_ENABLED", "true")

    settings = Settings()

    assert settings.simulation_timeout_ms == 500
    assert settings.kafka_enabled is True
