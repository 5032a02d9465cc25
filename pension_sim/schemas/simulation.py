"""Simulation Schemas - Pydantic models with field-level validation for API boundaries.

Invariants:
    - BatchSimulationRequest.participant_ids: 1-1000 ids, each stripped and non-empty
    - Responses are built from core results via from_result(), never from ORM rows
    - Decimal amounts leave the API as JSON numbers

Design Decisions:
    - Explicit from_result mapping: the core result type stays free of pydantic
    - float for amounts at the boundary: clients expect numbers, exact values stay in core
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from pension_sim.core.simulation_result import BenefitSimulationResult
from pension_sim.services.benefit_simulation import SimulationOutcome

MAX_BATCH_SIZE = 1000


class SimulationDetailsResponse(BaseModel):
    applied_return_rate: float
    months_of_contribution: int
    retirement_age: int
    minimum_years_of_service: int
    calculation_method: str


class SimulationResultResponse(BaseModel):
    """Benefit simulation result, public-facing."""

    participant_id: str
    participant_name: str
    current_age: int
    years_of_service: int
    total_contributions: float
    projected_fund_value: float
    estimated_lump_sum: float
    estimated_monthly_benefit: float
    is_eligible_for_retirement: bool
    early_retirement_penalty: float
    simulation_timestamp: datetime
    calculation_duration_ms: int
    details: SimulationDetailsResponse

    @classmethod
    def from_result(cls, result: BenefitSimulationResult) -> "SimulationResultResponse":
        details = result.details
        return cls(
            participant_id=result.participant_id,
            participant_name=result.participant_name,
            current_age=result.current_age,
            years_of_service=result.years_of_service,
            total_contributions=float(result.total_contributions),
            projected_fund_value=float(result.projected_fund_value),
            estimated_lump_sum=float(result.estimated_lump_sum),
            estimated_monthly_benefit=float(result.estimated_monthly_benefit),
            is_eligible_for_retirement=result.is_eligible_for_retirement,
            early_retirement_penalty=float(result.early_retirement_penalty),
            simulation_timestamp=result.simulation_timestamp,
            calculation_duration_ms=result.calculation_duration_ms,
            details=SimulationDetailsResponse(
                applied_return_rate=float(details.applied_return_rate),
                months_of_contribution=details.months_of_contribution,
                retirement_age=details.retirement_age,
                minimum_years_of_service=details.minimum_years_of_service,
                calculation_method=details.calculation_method.value,
            ),
        )


class AsyncSimulationResponse(BaseModel):
    """Simulation plus event publication status (202 Accepted)."""
    message: str
    participant_id: str
    event_id: str | None
    event_published: bool
    event_error: str | None = None
    result: SimulationResultResponse


class BatchSimulationRequest(BaseModel):
    participant_ids: list[str] = Field(min_length=1, max_length=MAX_BATCH_SIZE)
    publish_events: bool = False

    @field_validator("participant_ids")
    @classmethod
    def strip_ids(cls, v: list[str]) -> list[str]:
        stripped = [pid.strip() for pid in v]
        if any(not pid for pid in stripped):
            raise ValueError("participant_ids cannot contain empty values")
        return stripped


class BatchFailure(BaseModel):
    participant_id: str
    code: str
    message: str

    @classmethod
    def from_outcome(cls, outcome: SimulationOutcome) -> "BatchFailure":
        return cls(
            participant_id=outcome.participant_id,
            code=outcome.error.code,
            message=outcome.error.message,
        )


class BatchSimulationResponse(BaseModel):
    results: list[SimulationResultResponse]
    failures: list[BatchFailure] = []
    requested: int
    failed: int
    events_published: bool | None = None
