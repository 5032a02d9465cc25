"""Contribution Repository - loads a participant's monthly contribution history (ContributionSource).

Invariants:
    - Contributions returned ordered by month ascending
    - A participant without rows yields None (the orchestrator substitutes an empty history)
"""

import logging
from decimal import Decimal

from sqlalchemy import select

from pension_sim.core.contributions import Contribution, ContributionHistory
from pension_sim.core.domain_types import ParticipantId
from pension_sim.infrastructure.database import DatabaseSessionManager
from pension_sim.models.contribution import Contribution as ContributionRow

logger = logging.getLogger(__name__)


class ContributionRepository:
    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def find_by_participant_id(
        self, participant_id: ParticipantId,
    ) -> ContributionHistory | None:
        logger.debug(
            "Fetching contribution history", extra={"participant_id": participant_id},
        )
        async with self.db.session() as session:
            result = await session.execute(
                select(ContributionRow)
                .where(ContributionRow.participant_id == participant_id)
                .order_by(ContributionRow.month.asc()),
            )
            rows = result.scalars().all()
        if not rows:
            return None
        return ContributionHistory(
            participant_id=participant_id,
            contributions=tuple(
                Contribution(
                    month=row.month,
                    employee_contribution=Decimal(row.employee_contribution),
                    employer_contribution=Decimal(row.employer_contribution),
                    salary_base=Decimal(row.salary_base),
                )
                for row in rows
            ),
        )
