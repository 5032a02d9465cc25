"""Root conftest - shared test configuration."""

import os

# Tests never reach a real Postgres or Kafka broker
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("KAFKA_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")
