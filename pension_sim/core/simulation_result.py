"""Simulation Result - output record of one successful simulation.

Invariants:
    - Built only after the participant lookup succeeded
    - Never mutated after construction; duration stamping returns a new instance
"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal

from pension_sim.core.domain_types import CalculationMethod, ParticipantId


@dataclass(frozen=True)
class SimulationDetails:
    applied_return_rate: Decimal
    months_of_contribution: int
    retirement_age: int
    minimum_years_of_service: int
    calculation_method: CalculationMethod = CalculationMethod.COMPOUND_INTEREST_WITH_PENALTY


@dataclass(frozen=True)
class BenefitSimulationResult:
    participant_id: ParticipantId
    participant_name: str
    current_age: int
    years_of_service: int
    total_contributions: Decimal
    projected_fund_value: Decimal
    estimated_lump_sum: Decimal
    estimated_monthly_benefit: Decimal
    is_eligible_for_retirement: bool
    early_retirement_penalty: Decimal
    simulation_timestamp: datetime
    calculation_duration_ms: int
    details: SimulationDetails

    def with_duration(self, duration_ms: int) -> "BenefitSimulationResult":
        return replace(self, calculation_duration_ms=duration_ms)
