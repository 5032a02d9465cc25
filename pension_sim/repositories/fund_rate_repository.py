"""Fund Rate Repository - builds the current return-rate snapshot (FundRateSource).

Invariants:
    - Snapshot derived fresh on every call (no caching)
    - No rate rows yields None (the orchestrator substitutes the fallback snapshot)

Design Decisions:
    - One query for the whole series; averages computed in core.fund_rates
    - Clock injectable so "current year" is deterministic in tests
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select

from pension_sim.core.fund_rates import (
    CurrentFundReturnRate, FundReturnRate, build_rate_snapshot,
)
from pension_sim.infrastructure.database import DatabaseSessionManager
from pension_sim.models.fund_return_rate import FundReturnRate as FundReturnRateRow

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FundRateRepository:
    def __init__(
        self, db: DatabaseSessionManager, clock: Callable[[], datetime] = _utcnow,
    ):
        self.db = db
        self.clock = clock

    async def get_current_return_rate(self) -> CurrentFundReturnRate | None:
        logger.debug("Fetching current fund return rate")
        async with self.db.session() as session:
            result = await session.execute(
                select(FundReturnRateRow).order_by(FundReturnRateRow.year.asc()),
            )
            rows = result.scalars().all()
        if not rows:
            return None
        return build_rate_snapshot(
            (FundReturnRate(year=r.year, return_rate=Decimal(r.return_rate)) for r in rows),
            current_year=self.clock().year,
        )
