"""API test fixtures - FastAPI app with the service and event sink overridden.

Invariants:
    - get_simulation_service and get_event_sink overridden per test
    - Overrides cleared after each test

Design Decisions:
    - Lifespan not run: routes only see what the overrides provide, no database needed
"""

import pytest
from httpx import ASGITransport, AsyncClient

from pension_sim.api.dependencies import get_event_sink, get_simulation_service
from pension_sim.main import app
from pension_sim.services.benefit_simulation import BenefitSimulationService
from tests.fakes import (
    FakeContributions, FakeEventSink, FakeFundRates, FakeParticipants, FakeRules,
    fixed_clock, make_history, make_profile,
)


@pytest.fixture
def service():
    return BenefitSimulationService(
        participants=FakeParticipants([make_profile("P001"), make_profile("P002")]),
        contributions=FakeContributions(make_history()),
        fund_rates=FakeFundRates(),
        rules=FakeRules(),
        timeout_ms=2_000,
        clock=fixed_clock,
    )


@pytest.fixture
def event_sink():
    return FakeEventSink()


@pytest.fixture
async def client(service, event_sink):
    app.dependency_overrides[get_simulation_service] = lambda: service
    app.dependency_overrides[get_event_sink] = lambda: event_sink
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
