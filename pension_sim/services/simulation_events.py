"""Simulation Events - publishes completed simulations to the optional event sink.

Invariants:
    - The sink is optional: None means "not configured", never an error
    - A publish failure never invalidates an already computed result; it is reported
      in PublishOutcome and logged, not raised
    - Exactly one event per published result

Design Decisions:
    - Outcome value over exception: the route decides how to surface a failed publish
      while still returning the result to the caller
"""

import logging
from dataclasses import dataclass

from pension_sim.core.errors import PensionSimError
from pension_sim.core.event_mapper import to_completed_event
from pension_sim.core.repository_protocols import SimulationEventSink
from pension_sim.core.simulation_result import BenefitSimulationResult

logger = logging.getLogger(__name__)

SINK_NOT_CONFIGURED = "event sink not configured"


@dataclass(frozen=True)
class PublishOutcome:
    event_id: str | None
    published: bool
    error: str | None = None


async def publish_simulation(
    result: BenefitSimulationResult, sink: SimulationEventSink | None,
) -> PublishOutcome:
    """Publish one completed simulation. Never raises for sink failures."""
    if sink is None:
        return PublishOutcome(event_id=None, published=False, error=SINK_NOT_CONFIGURED)

    event = to_completed_event(result)
    try:
        await sink.publish_simulation_completed(event)
    except PensionSimError as e:
        logger.warning(
            f"Event publish failed for participant: {result.participant_id}: {e.message}",
            extra={
                "participant_id": result.participant_id,
                "event_id": event.event_id,
                "error_code": e.code,
            },
        )
        return PublishOutcome(event_id=event.event_id, published=False, error=e.message)
    except Exception as e:
        logger.error(
            f"Unexpected event sink error for participant: {result.participant_id}",
            extra={"participant_id": result.participant_id, "event_id": event.event_id},
            exc_info=True,
        )
        return PublishOutcome(event_id=event.event_id, published=False, error=str(e))

    logger.info(
        f"Successfully published event for participant: {result.participant_id}",
        extra={"participant_id": result.participant_id, "event_id": event.event_id},
    )
    return PublishOutcome(event_id=event.event_id, published=True)


async def publish_simulations(
    results: list[BenefitSimulationResult], sink: SimulationEventSink | None,
) -> PublishOutcome:
    """Publish a batch of results as one sink call. Never raises for sink failures."""
    if sink is None:
        return PublishOutcome(event_id=None, published=False, error=SINK_NOT_CONFIGURED)
    events = [to_completed_event(r) for r in results]
    try:
        await sink.publish_batch(events)
    except Exception as e:
        logger.error(
            f"Batch event publish failed: {e}",
            extra={"batch_size": len(events)},
        )
        return PublishOutcome(event_id=None, published=False, error=str(e))
    return PublishOutcome(event_id=None, published=True)
