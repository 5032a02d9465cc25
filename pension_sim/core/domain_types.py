"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - ParticipantId wraps str; never pass raw ids into domain logic
    - FALLBACK_RETURN_RATE is the single source of the default fund rate
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Decimal for money and rates: exact, deterministic arithmetic across runs
"""

from decimal import Decimal
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ParticipantId = NewType("ParticipantId", str)


# ─── Constants ───────────────────────────────────────────────────

FALLBACK_RETURN_RATE = Decimal("0.085")


# ─── Enums ───────────────────────────────────────────────────────

class CalculationMethod(str, Enum):
    """Tag recorded on every result so consumers know which formula produced it."""
    COMPOUND_INTEREST_WITH_PENALTY = "COMPOUND_INTEREST_WITH_PENALTY"


class EventType(str, Enum):
    """Event types emitted to the event sink."""
    BENEFIT_SIMULATION_COMPLETED = "BenefitSimulationCompleted"


class DataSource(str, Enum):
    """Names of the collaborators the orchestrator reads from (used in errors and logs)."""
    PARTICIPANTS = "participants"
    CONTRIBUTIONS = "contributions"
    FUND_RATES = "fund_return_rates"
    PENSION_RULES = "pension_rules"
