"""Participant Repository - resolves participant ids to profiles (ParticipantLookup)."""

import logging

from sqlalchemy import select

from pension_sim.core.domain_types import ParticipantId
from pension_sim.core.participant import ParticipantProfile
from pension_sim.infrastructure.database import DatabaseSessionManager
from pension_sim.models.participant import Participant

logger = logging.getLogger(__name__)


def _to_profile(row: Participant) -> ParticipantProfile:
    return ParticipantProfile(
        participant_id=ParticipantId(row.participant_id),
        name=row.name,
        birth_date=row.birth_date,
        registration_date=row.registration_date,
        employer_name=row.employer_name,
        current_salary=row.current_salary,
    )


class ParticipantRepository:
    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def find_by_id(
        self, participant_id: ParticipantId,
    ) -> ParticipantProfile | None:
        logger.debug(
            "Fetching participant profile", extra={"participant_id": participant_id},
        )
        async with self.db.session() as session:
            result = await session.execute(
                select(Participant).where(Participant.participant_id == participant_id),
            )
            row = result.scalar_one_or_none()
        return _to_profile(row) if row else None
