"""Event Mapper - converts completed simulations into versioned events for downstream consumers.

Invariants:
    - One BenefitSimulationCompletedEvent per successful simulation
    - event_id is a fresh UUID4 string unless supplied (tests pin it)
    - Monetary values are serialized as floats in the event payload; the
      authoritative Decimal values stay in BenefitSimulationResult

Design Decisions:
    - Pydantic models for events: model_dump(mode="json") gives a wire-ready dict
      without a custom encoder
    - EventEnvelope is generic over its payload and carries a schema version
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from pension_sim.core.domain_types import EventType
from pension_sim.core.simulation_result import BenefitSimulationResult

PayloadT = TypeVar("PayloadT")


class BenefitSimulationCompletedEvent(BaseModel):
    event_id: str
    event_type: EventType = EventType.BENEFIT_SIMULATION_COMPLETED
    timestamp: datetime
    participant_id: str
    participant_name: str
    current_age: int
    years_of_service: int
    estimated_lump_sum: float
    estimated_monthly_benefit: float
    is_eligible_for_retirement: bool
    calculation_duration_ms: int
    metadata: dict[str, Any] = Field(default_factory=dict)


class EventEnvelope(BaseModel, Generic[PayloadT]):
    event_id: str
    event_type: EventType
    timestamp: datetime
    payload: PayloadT
    version: str = "1.0"


def to_completed_event(
    result: BenefitSimulationResult,
    event_id: str | None = None,
    now: datetime | None = None,
) -> BenefitSimulationCompletedEvent:
    """Map a simulation result to its completion event."""
    return BenefitSimulationCompletedEvent(
        event_id=event_id or str(uuid.uuid4()),
        timestamp=now or datetime.now(timezone.utc),
        participant_id=result.participant_id,
        participant_name=result.participant_name,
        current_age=result.current_age,
        years_of_service=result.years_of_service,
        estimated_lump_sum=float(result.estimated_lump_sum),
        estimated_monthly_benefit=float(result.estimated_monthly_benefit),
        is_eligible_for_retirement=result.is_eligible_for_retirement,
        calculation_duration_ms=result.calculation_duration_ms,
        metadata={
            "total_contributions": float(result.total_contributions),
            "projected_fund_value": float(result.projected_fund_value),
            "early_retirement_penalty": float(result.early_retirement_penalty),
            "applied_return_rate": float(result.details.applied_return_rate),
            "calculation_method": result.details.calculation_method.value,
        },
    )


def wrap_in_envelope(
    event: BenefitSimulationCompletedEvent,
) -> EventEnvelope[BenefitSimulationCompletedEvent]:
    return EventEnvelope[BenefitSimulationCompletedEvent](
        event_id=event.event_id,
        event_type=event.event_type,
        timestamp=event.timestamp,
        payload=event,
    )
