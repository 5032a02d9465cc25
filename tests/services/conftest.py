"""Service test fixtures - simulation service wired to in-memory fakes.

Invariants:
    - Every test gets fresh fakes (call counts and cancellation flags start clean)
    - The clock is fixed, so results are comparable across runs

Design Decisions:
    - make_service factory fixture: tests override only the collaborator they care about
"""

import pytest

from pension_sim.services.benefit_simulation import BenefitSimulationService
from tests.fakes import (
    FakeContributions, FakeFundRates, FakeParticipants, FakeRules,
    fixed_clock, make_history, make_profile,
)


@pytest.fixture
def participants():
    return FakeParticipants([make_profile("P001"), make_profile("P002"), make_profile("P003")])


@pytest.fixture
def contributions():
    return FakeContributions(make_history())


@pytest.fixture
def fund_rates():
    return FakeFundRates()


@pytest.fixture
def rules():
    return FakeRules()


@pytest.fixture
def make_service(participants, contributions, fund_rates, rules):
    def _make(**overrides) -> BenefitSimulationService:
        kwargs = {
            "participants": participants,
            "contributions": contributions,
            "fund_rates": fund_rates,
            "rules": rules,
            "timeout_ms": 2_000,
            "clock": fixed_clock,
        }
        kwargs.update(overrides)
        return BenefitSimulationService(**kwargs)
    return _make
