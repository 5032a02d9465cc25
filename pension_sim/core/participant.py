"""Participant Profile - the entity record every simulation is gated on.

Invariants:
    - Immutable once fetched (frozen dataclass)
    - Age and years of participation are computed from a reference date, never stored
    - Whole years truncate: not incremented until the month/day anniversary is reached

Design Decisions:
    - Reference date is an argument, not date.today(): keeps the calculation deterministic
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from pension_sim.core.domain_types import ParticipantId


def whole_years_between(start: date, reference: date) -> int:
    """Completed years from start to reference (anniversary-based truncation)."""
    years = reference.year - start.year
    if (reference.month, reference.day) < (start.month, start.day):
        years -= 1
    return years


@dataclass(frozen=True)
class ParticipantProfile:
    participant_id: ParticipantId
    name: str
    birth_date: date
    registration_date: date
    employer_name: str
    current_salary: Decimal

    def age_on(self, reference: date) -> int:
        return whole_years_between(self.birth_date, reference)

    def years_of_participation_on(self, reference: date) -> int:
        return whole_years_between(self.registration_date, reference)
