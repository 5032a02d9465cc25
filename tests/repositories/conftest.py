"""Repository fixtures - file-backed SQLite database per test.

Invariants:
    - Every test gets a fresh database with all tables created
    - seeded_db holds two participants, 24 months of contributions for P001,
      ten years of fund rates and the current rules row

Design Decisions:
    - File-backed over :memory: so concurrent repository sessions (one per
      fetch) each get their own connection to the same data
      (ADR: PostgreSQL-specific features not exercised here)
"""

from datetime import date
from decimal import Decimal

import pytest

from pension_sim.db.base import Base
from pension_sim.infrastructure.database import DatabaseSessionManager
from pension_sim.models import Contribution, FundReturnRate, Participant, PensionRulesRow


@pytest.fixture
async def db(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'pension.db'}")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def seeded_db(db):
    async with db.session() as session:
        session.add_all([
            Participant(
                participant_id="P001", name="Budi Santoso",
                birth_date=date(1980, 5, 15), registration_date=date(2005, 3, 1),
                employer_name="PT Maju Jaya", current_salary=Decimal("15000000.00"),
            ),
            Participant(
                participant_id="P002", name="Siti Nurhaliza",
                birth_date=date(1975, 8, 20), registration_date=date(2000, 1, 10),
                employer_name="PT Sejahtera", current_salary=Decimal("20000000.00"),
            ),
        ])
        await session.flush()
        # Inserted newest first; the repository must order by month
        session.add_all([
            Contribution(
                participant_id="P001", month=date(2025 - i // 12, 12 - i % 12, 1),
                employee_contribution=Decimal("750000.00"),
                employer_contribution=Decimal("1050000.00"),
                salary_base=Decimal("15000000.00"),
            )
            for i in range(24)
        ])
        session.add_all([
            FundReturnRate(year=year, return_rate=Decimal(rate))
            for year, rate in [
                (2016, "0.080000"), (2017, "0.082000"), (2018, "0.078000"),
                (2019, "0.085000"), (2020, "0.070000"), (2021, "0.088000"),
                (2022, "0.090000"), (2023, "0.087000"), (2024, "0.089000"),
                (2025, "0.091000"),
            ]
        ])
        session.add(PensionRulesRow(effective_date=date(2024, 1, 1)))
        await session.commit()
    return db
