"""Route Dependencies - expose lifespan-built collaborators to route handlers.

Invariants:
    - The simulation service is built once per process (lifespan) and stored on app.state
    - The event sink may be absent; get_event_sink returns None in that case

Design Decisions:
    - app.state over module globals: tests override via app.dependency_overrides
"""

from fastapi import Request

from pension_sim.core.repository_protocols import SimulationEventSink
from pension_sim.services.benefit_simulation import BenefitSimulationService


def get_simulation_service(request: Request) -> BenefitSimulationService:
    service = getattr(request.app.state, "simulation_service", None)
    if service is None:
        raise RuntimeError("Simulation service not initialized")
    return service


def get_event_sink(request: Request) -> SimulationEventSink | None:
    return getattr(request.app.state, "event_sink", None)
