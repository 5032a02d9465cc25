"""Benefit Calculator - pure mapping from fetched records to a simulation result.

Invariants:
    - No IO, no async, no clock reads: `now` is passed in by the caller
    - Inputs are never None (the orchestrator substitutes defaults beforehand)
    - Projection is single-period: total * (1 + 10-year average), not an annuity formula
    - Penalty applies only below the normal retirement age
    - calculation_duration_ms is 0 here; the orchestrator stamps the measured value

Design Decisions:
    - Decimal arithmetic end to end: identical inputs give identical outputs, exactly
    - A zero divisor cannot reach this function (PensionRules refuses to construct it)
"""

from datetime import datetime
from decimal import Decimal

from pension_sim.core.contributions import ContributionHistory
from pension_sim.core.fund_rates import CurrentFundReturnRate
from pension_sim.core.participant import ParticipantProfile
from pension_sim.core.pension_rules import PensionRules
from pension_sim.core.simulation_result import BenefitSimulationResult, SimulationDetails


def project_fund_value(principal: Decimal, annual_rate: Decimal) -> Decimal:
    return principal * (1 + annual_rate)


def calculate_benefit(
    profile: ParticipantProfile,
    contributions: ContributionHistory,
    fund_rate: CurrentFundReturnRate,
    rules: PensionRules,
    now: datetime,
) -> BenefitSimulationResult:
    """Compute age, eligibility, penalty and benefit estimates. Pure, no IO."""
    reference = now.date()
    age = profile.age_on(reference)
    years_of_service = profile.years_of_participation_on(reference)
    total = contributions.total_contributions

    projected = project_fund_value(total, fund_rate.average_rate_10_years)
    penalty = rules.early_retirement_penalty(age)
    lump_sum = projected * (1 - penalty)
    monthly_benefit = lump_sum / rules.monthly_benefit_divisor

    return BenefitSimulationResult(
        participant_id=profile.participant_id,
        participant_name=profile.name,
        current_age=age,
        years_of_service=years_of_service,
        total_contributions=total,
        projected_fund_value=projected,
        estimated_lump_sum=lump_sum,
        estimated_monthly_benefit=monthly_benefit,
        is_eligible_for_retirement=rules.is_eligible_for_retirement(age, years_of_service),
        early_retirement_penalty=penalty,
        simulation_timestamp=now,
        calculation_duration_ms=0,
        details=SimulationDetails(
            applied_return_rate=fund_rate.average_rate_10_years,
            months_of_contribution=contributions.months_of_contribution,
            retirement_age=rules.normal_retirement_age,
            minimum_years_of_service=rules.minimum_years_of_service,
        ),
    )
