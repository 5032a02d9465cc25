"""Boundary Protocols - contracts between the simulation core and its collaborators.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Absence is a None return, never an exception
    - Hard failures raise (UpstreamError / DatabaseError or any exception the
      orchestrator wraps as UpstreamError)
    - Every method is read-only except SimulationEventSink.publish_*

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: implementations do IO; the calculator that consumes their
      records is never async
"""

from typing import Protocol

from pension_sim.core.contributions import ContributionHistory
from pension_sim.core.domain_types import ParticipantId
from pension_sim.core.event_mapper import BenefitSimulationCompletedEvent
from pension_sim.core.fund_rates import CurrentFundReturnRate
from pension_sim.core.participant import ParticipantProfile
from pension_sim.core.pension_rules import PensionRules


class ParticipantLookup(Protocol):
    """Resolves a participant id to a profile. Gates every simulation."""
    async def find_by_id(
        self, participant_id: ParticipantId,
    ) -> ParticipantProfile | None: ...


class ContributionSource(Protocol):
    async def find_by_participant_id(
        self, participant_id: ParticipantId,
    ) -> ContributionHistory | None: ...


class FundRateSource(Protocol):
    async def get_current_return_rate(self) -> CurrentFundReturnRate | None: ...


class PensionRulesSource(Protocol):
    async def get_current_rules(self) -> PensionRules | None: ...


class SimulationEventSink(Protocol):
    """Optional downstream consumer of completed simulations."""
    async def publish_simulation_completed(
        self, event: BenefitSimulationCompletedEvent,
    ) -> None: ...

    async def publish_batch(
        self, events: list[BenefitSimulationCompletedEvent],
    ) -> None: ...
