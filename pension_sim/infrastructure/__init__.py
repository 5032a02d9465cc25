"""Infrastructure - database sessions, Kafka producer, logging setup.

Invariants:
    - Each module owns one external system; no business rules here

Design Decisions:
    - asyncpg driver for PostgreSQL, aiokafka for Kafka: native asyncio, no thread pool
"""
