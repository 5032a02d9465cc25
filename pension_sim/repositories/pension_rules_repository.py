"""Pension Rules Repository - reads the single current rules row (PensionRulesSource).

Invariants:
    - Missing row yields None (the orchestrator substitutes DEFAULT_PENSION_RULES)
    - An invalid stored row raises ConfigurationInvariantError when mapped
"""

import logging
from decimal import Decimal

from sqlalchemy import select

from pension_sim.core.pension_rules import PensionRules
from pension_sim.infrastructure.database import DatabaseSessionManager
from pension_sim.models.pension_rules import CURRENT_RULES_ID, PensionRulesRow

logger = logging.getLogger(__name__)


class PensionRulesRepository:
    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def get_current_rules(self) -> PensionRules | None:
        logger.debug("Fetching current pension rules")
        async with self.db.session() as session:
            result = await session.execute(
                select(PensionRulesRow).where(PensionRulesRow.id == CURRENT_RULES_ID),
            )
            row = result.scalar_one_or_none()
        if row is None:
            return None
        return PensionRules(
            normal_retirement_age=row.normal_retirement_age,
            early_retirement_age=row.early_retirement_age,
            minimum_years_of_service=row.minimum_years_of_service,
            early_retirement_penalty_rate=Decimal(row.early_retirement_penalty_rate),
            monthly_benefit_divisor=row.monthly_benefit_divisor,
        )
