"""SQL Repositories - verifies row mapping, absence handling and error translation.

Invariants:
    - Missing data yields None, never an exception
    - SQLAlchemy failures surface as DatabaseError
    - Stored rules that break construction invariants raise ConfigurationInvariantError
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import update

from pension_sim.core.errors import ConfigurationInvariantError, DatabaseError
from pension_sim.infrastructure.database import DatabaseSessionManager
from pension_sim.models import PensionRulesRow
from pension_sim.repositories.contribution_repository import ContributionRepository
from pension_sim.repositories.fund_rate_repository import FundRateRepository
from pension_sim.repositories.participant_repository import ParticipantRepository
from pension_sim.repositories.pension_rules_repository import PensionRulesRepository


def _clock_2025():
    return datetime(2025, 6, 1, tzinfo=timezone.utc)


# ─── Participants ────────────────────────────────────────────────

async def test_find_participant_maps_row(seeded_db):
    profile = await ParticipantRepository(seeded_db).find_by_id("P001")

    assert profile.participant_id == "P001"
    assert profile.name == "Budi Santoso"
    assert profile.birth_date == date(1980, 5, 15)
    assert profile.registration_date == date(2005, 3, 1)
    assert profile.current_salary == Decimal("15000000")


async def test_find_unknown_participant_returns_none(seeded_db):
    assert await ParticipantRepository(seeded_db).find_by_id("P404") is None


# ─── Contributions ───────────────────────────────────────────────

async def test_contribution_history_ordered_and_summed(seeded_db):
    history = await ContributionRepository(seeded_db).find_by_participant_id("P001")

    months = [c.month for c in history.contributions]
    assert months == sorted(months)
    assert months[0] == date(2024, 1, 1)
    assert history.months_of_contribution == 24
    assert history.total_contributions == Decimal("43200000")


async def test_participant_without_contributions_returns_none(seeded_db):
    assert await ContributionRepository(seeded_db).find_by_participant_id("P002") is None


# ─── Fund rates ──────────────────────────────────────────────────

async def test_rate_snapshot_uses_clock_year(seeded_db):
    snapshot = await FundRateRepository(seeded_db, clock=_clock_2025).get_current_return_rate()

    assert snapshot.current_year == 2025
    assert snapshot.current_rate == Decimal("0.091")
    assert snapshot.average_rate_5_years == Decimal("0.089")
    assert snapshot.average_rate_10_years == Decimal("0.084")
    assert len(snapshot.historical_rates) == 10


async def test_no_rate_rows_returns_none(db):
    assert await FundRateRepository(db).get_current_return_rate() is None


# ─── Rules ───────────────────────────────────────────────────────

async def test_current_rules_mapped_with_defaults(seeded_db):
    rules = await PensionRulesRepository(seeded_db).get_current_rules()

    assert rules.normal_retirement_age == 58
    assert rules.early_retirement_penalty_rate == Decimal("0.05")
    assert rules.monthly_benefit_divisor == 180


async def test_missing_rules_row_returns_none(db):
    assert await PensionRulesRepository(db).get_current_rules() is None


async def test_zero_divisor_in_storage_raises_configuration_error(seeded_db):
    async with seeded_db.session() as session:
        await session.execute(update(PensionRulesRow).values(monthly_benefit_divisor=0))
        await session.commit()

    with pytest.raises(ConfigurationInvariantError):
        await PensionRulesRepository(seeded_db).get_current_rules()


# ─── Error translation ───────────────────────────────────────────

async def test_missing_table_surfaces_as_database_error(tmp_path):
    empty = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    try:
        with pytest.raises(DatabaseError) as exc_info:
            await ParticipantRepository(empty).find_by_id("P001")
    finally:
        await empty.dispose()

    assert exc_info.value.http_status == 503


async def test_health_check(db, tmp_path):
    assert await db.health_check() is True

    unreachable = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nowhere.db'}",
    )
    assert await unreachable.health_check() is False
    await unreachable.dispose()


async def test_unreachable_server_surfaces_as_database_error():
    """Connection refused by the real driver arrives as OSError and must still map."""
    unreachable = DatabaseSessionManager("postgresql+asyncpg://u:p@127.0.0.1:1/nodb")
    try:
        with pytest.raises(DatabaseError) as exc_info:
            await ParticipantRepository(unreachable).find_by_id("P001")
        assert await unreachable.health_check() is False
    finally:
        await unreachable.dispose()

    assert exc_info.value.operation == "connect"
    assert isinstance(exc_info.value.__cause__, OSError)
