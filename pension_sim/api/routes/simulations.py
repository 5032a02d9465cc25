"""Simulation Routes - single, async (event-publishing) and batch benefit simulations.

Invariants:
    - GET /{participant_id}: 200 with the result; errors mapped by global handlers
      (404 not found, 504 timeout, 503 upstream)
    - POST /async/{participant_id}: 202 once the event is attempted; without an event
      sink it falls back to the synchronous 200 response
    - A failed publish still returns the computed result (event_published=false)
    - POST /batch never fails because of individual participants

Design Decisions:
    - Routes hold no business logic: simulate via BenefitSimulationService,
      publish via services.simulation_events
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse

from pension_sim.api.dependencies import get_event_sink, get_simulation_service
from pension_sim.core.repository_protocols import SimulationEventSink
from pension_sim.schemas.simulation import (
    AsyncSimulationResponse,
    BatchFailure,
    BatchSimulationRequest,
    BatchSimulationResponse,
    SimulationResultResponse,
)
from pension_sim.services.benefit_simulation import BenefitSimulationService
from pension_sim.services.simulation_events import publish_simulation, publish_simulations

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/simulations", tags=["simulations"])

ParticipantIdPath = Annotated[str, Path(min_length=1, max_length=50)]


@router.get("/{participant_id}", response_model=SimulationResultResponse)
async def simulate_benefit(
    participant_id: ParticipantIdPath,
    service: BenefitSimulationService = Depends(get_simulation_service),
):
    """Simulate benefit for a single participant."""
    logger.info(
        f"Received simulation request for participant: {participant_id}",
        extra={"participant_id": participant_id},
    )
    result = await service.simulate_benefit(participant_id)
    return SimulationResultResponse.from_result(result)


@router.post("/async/{participant_id}")
async def simulate_benefit_async(
    participant_id: ParticipantIdPath,
    service: BenefitSimulationService = Depends(get_simulation_service),
    sink: SimulationEventSink | None = Depends(get_event_sink),
):
    """Simulate, then publish a BenefitSimulationCompleted event."""
    logger.info(
        f"Received async simulation request for participant: {participant_id}",
        extra={"participant_id": participant_id},
    )
    result = await service.simulate_benefit(participant_id)
    response = SimulationResultResponse.from_result(result)

    if sink is None:
        logger.warning("Event sink not configured, returning synchronous response")
        return JSONResponse(
            status_code=status.HTTP_200_OK, content=response.model_dump(mode="json"),
        )

    outcome = await publish_simulation(result, sink)
    body = AsyncSimulationResponse(
        message=(
            "Simulation completed and event published" if outcome.published
            else "Simulation completed but event publication failed"
        ),
        participant_id=participant_id,
        event_id=outcome.event_id,
        event_published=outcome.published,
        event_error=outcome.error,
        result=response,
    )
    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED, content=body.model_dump(mode="json"),
    )


@router.post("/batch", response_model=BatchSimulationResponse)
async def simulate_benefit_batch(
    body: BatchSimulationRequest,
    service: BenefitSimulationService = Depends(get_simulation_service),
    sink: SimulationEventSink | None = Depends(get_event_sink),
):
    """Simulate benefits for many participants; failed items are reported, not raised."""
    logger.info(
        f"Received batch simulation request for {len(body.participant_ids)} participants",
        extra={"batch_size": len(body.participant_ids)},
    )
    outcomes = await service.run_batch(body.participant_ids)
    results = [o.result for o in outcomes if o.result is not None]
    failures = [BatchFailure.from_outcome(o) for o in outcomes if o.error is not None]

    events_published = None
    if body.publish_events and results:
        events_published = (await publish_simulations(results, sink)).published

    return BatchSimulationResponse(
        results=[SimulationResultResponse.from_result(r) for r in results],
        failures=failures,
        requested=len(body.participant_ids),
        failed=len(failures),
        events_published=events_published,
    )
