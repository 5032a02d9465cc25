"""Contribution History - monthly employee/employer payments for one participant.

Invariants:
    - Contributions ordered by month ascending (as stored)
    - Read-only for the simulation core; an empty history is a valid value
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from pension_sim.core.domain_types import ParticipantId


@dataclass(frozen=True)
class Contribution:
    month: date
    employee_contribution: Decimal
    employer_contribution: Decimal
    salary_base: Decimal

    @property
    def total(self) -> Decimal:
        return self.employee_contribution + self.employer_contribution


@dataclass(frozen=True)
class ContributionHistory:
    participant_id: ParticipantId
    contributions: tuple[Contribution, ...] = ()

    @property
    def total_contributions(self) -> Decimal:
        return sum((c.total for c in self.contributions), Decimal("0"))

    @property
    def months_of_contribution(self) -> int:
        return len(self.contributions)


def empty_history(participant_id: ParticipantId) -> ContributionHistory:
    """Default used when a participant has no contribution rows."""
    return ContributionHistory(participant_id=participant_id, contributions=())
