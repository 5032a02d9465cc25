"""Benefit Simulation Service - orchestrates lookup, concurrent fan-out and calculation.

Invariants:
    - The participant lookup completes before any auxiliary fetch starts;
      an unknown participant raises ParticipantNotFoundError with zero auxiliary fetches
    - Contributions, fund rate and rules are started together in one TaskGroup, so the
      fetch stage takes max(d1, d2, d3), never the sum
    - One deadline covers lookup + fan-out + calculation; on expiry the TaskGroup is
      cancelled (in-flight fetches observe CancelledError) and SimulationTimeoutError is raised
    - Only absence (None) is defaulted; any hard failure propagates as a PensionSimError
      (foreign exceptions wrapped in UpstreamError)
    - Elapsed time is stamped on the single execution that produced the result
    - Batch runs isolate failures per item: logged, omitted, never raised for the batch

Design Decisions:
    - asyncio.TaskGroup over gather: a failing fetch cancels its siblings instead of
      leaving them running (ADR: no orphan tasks)
    - asyncio.timeout around the whole run: cancellation reaches every child task
    - Batch concurrency bounded by a semaphore acquired before the per-item deadline
      starts; waiting for a slot never counts against an item's deadline
    - Clock injected: results are reproducible in tests
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TypeVar

from pension_sim.core.calculate_benefit import calculate_benefit
from pension_sim.core.contributions import empty_history
from pension_sim.core.domain_types import DataSource, ParticipantId
from pension_sim.core.errors import (
    ErrorContext,
    InvalidSimulationRequestError,
    ParticipantNotFoundError,
    PensionSimError,
    SimulationTimeoutError,
    UpstreamError,
)
from pension_sim.core.fund_rates import fallback_rate_snapshot
from pension_sim.core.pension_rules import DEFAULT_PENSION_RULES
from pension_sim.core.repository_protocols import (
    ContributionSource,
    FundRateSource,
    ParticipantLookup,
    PensionRulesSource,
)
from pension_sim.core.simulation_result import BenefitSimulationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _first_error(group: BaseExceptionGroup) -> BaseException:
    """First leaf exception of a (possibly nested) exception group."""
    exc = group.exceptions[0]
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc


@dataclass(frozen=True)
class SimulationOutcome:
    """Result-or-error value for one batch item."""
    participant_id: str
    result: BenefitSimulationResult | None = None
    error: PensionSimError | None = None

    @property
    def succeeded(self) -> bool:
        return self.result is not None


class BenefitSimulationService:
    """Runs benefit simulations for one participant or a batch of participants."""

    def __init__(
        self,
        participants: ParticipantLookup,
        contributions: ContributionSource,
        fund_rates: FundRateSource,
        rules: PensionRulesSource,
        timeout_ms: int = 30_000,
        max_concurrency: int = 64,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.participants = participants
        self.contributions = contributions
        self.fund_rates = fund_rates
        self.rules = rules
        self.timeout_ms = timeout_ms
        self.max_concurrency = max_concurrency
        self.clock = clock

    # ─── Single participant ──────────────────────────────────────

    async def simulate_benefit(
        self, participant_id: str, timeout_ms: int | None = None,
    ) -> BenefitSimulationResult:
        """Simulate one participant's benefit within a single deadline.

        Raises:
            ParticipantNotFoundError: id does not resolve to a profile.
            SimulationTimeoutError: deadline elapsed; in-flight fetches were cancelled.
            UpstreamError: a data source failed for a reason other than absence.
        """
        deadline_ms = self.timeout_ms if timeout_ms is None else timeout_ms
        if deadline_ms <= 0:
            raise InvalidSimulationRequestError(
                f"timeout_ms must be positive, got {deadline_ms}",
                ErrorContext(participant_id=participant_id),
            )
        pid = ParticipantId(participant_id)
        logger.info(
            f"Starting benefit simulation for participant: {pid}",
            extra={"participant_id": pid, "timeout_ms": deadline_ms},
        )

        started = time.perf_counter()
        try:
            async with asyncio.timeout(deadline_ms / 1000) as deadline:
                result = await self._run(pid)
        except TimeoutError as e:
            if not deadline.expired():
                raise
            logger.warning(
                f"Benefit simulation timed out for participant: {pid}",
                extra={"participant_id": pid, "timeout_ms": deadline_ms},
            )
            raise SimulationTimeoutError(pid, deadline_ms) from e
        duration_ms = int((time.perf_counter() - started) * 1000)

        logger.info(
            f"Benefit simulation completed for participant: {pid} in {duration_ms}ms",
            extra={"participant_id": pid, "duration_ms": duration_ms},
        )
        return result.with_duration(duration_ms)

    async def _run(self, pid: ParticipantId) -> BenefitSimulationResult:
        profile = await self._fetch(
            DataSource.PARTICIPANTS, pid, self.participants.find_by_id(pid),
        )
        if profile is None:
            raise ParticipantNotFoundError(pid)

        logger.debug(
            f"Fetching data in parallel for participant: {pid}",
            extra={"participant_id": pid},
        )
        try:
            async with asyncio.TaskGroup() as tg:
                contributions_task = tg.create_task(self._fetch(
                    DataSource.CONTRIBUTIONS, pid,
                    self.contributions.find_by_participant_id(pid),
                ))
                fund_rate_task = tg.create_task(self._fetch(
                    DataSource.FUND_RATES, pid,
                    self.fund_rates.get_current_return_rate(),
                ))
                rules_task = tg.create_task(self._fetch(
                    DataSource.PENSION_RULES, pid,
                    self.rules.get_current_rules(),
                ))
        except BaseExceptionGroup as group:
            raise _first_error(group) from None

        now = self.clock()
        contributions = contributions_task.result()
        fund_rate = fund_rate_task.result()
        rules = rules_task.result()
        # Absence is not an error: substitute defaults before the calculator sees it
        if contributions is None:
            contributions = empty_history(pid)
        if fund_rate is None:
            fund_rate = fallback_rate_snapshot(now.year)
        if rules is None:
            rules = DEFAULT_PENSION_RULES

        return calculate_benefit(profile, contributions, fund_rate, rules, now)

    async def _fetch(
        self, source: DataSource, pid: ParticipantId, call: Awaitable[T],
    ) -> T:
        """Await one collaborator call, mapping foreign failures to UpstreamError."""
        try:
            return await call
        except PensionSimError:
            raise
        except Exception as e:
            logger.error(
                f"Upstream {source.value} failed for participant: {pid}",
                extra={"participant_id": pid, "source": source.value},
                exc_info=True,
            )
            raise UpstreamError(
                str(e) or type(e).__name__, source.value,
                ErrorContext(participant_id=pid),
            ) from e

    # ─── Batch ───────────────────────────────────────────────────

    async def run_batch(
        self, participant_ids: Sequence[str],
    ) -> list[SimulationOutcome]:
        """Simulate every id concurrently; one outcome per id, in input order."""
        semaphore = asyncio.Semaphore(self.max_concurrency)
        return list(await asyncio.gather(
            *(self._simulate_isolated(pid, semaphore) for pid in participant_ids),
        ))

    async def simulate_benefit_batch(
        self, participant_ids: Sequence[str],
    ) -> list[BenefitSimulationResult]:
        """Simulate many participants; failed items are logged and omitted.

        This is the one place failures are intentionally swallowed: a batch never
        fails because of an individual participant.
        """
        logger.info(
            f"Starting batch benefit simulation for {len(participant_ids)} participants",
            extra={"batch_size": len(participant_ids)},
        )
        outcomes = await self.run_batch(participant_ids)
        results = [o.result for o in outcomes if o.result is not None]
        logger.info(
            f"Batch benefit simulation finished: {len(results)}/{len(participant_ids)} succeeded",
            extra={"batch_size": len(participant_ids), "succeeded": len(results)},
        )
        return results

    async def _simulate_isolated(
        self, participant_id: str, semaphore: asyncio.Semaphore,
    ) -> SimulationOutcome:
        async with semaphore:
            try:
                result = await self.simulate_benefit(participant_id)
            except ParticipantNotFoundError as e:
                logger.info(
                    f"Skipping unknown participant in batch: {participant_id}",
                    extra={"participant_id": participant_id, "error_code": e.code},
                )
                return SimulationOutcome(participant_id, error=e)
            except PensionSimError as e:
                logger.error(
                    f"Failed to simulate benefit for participant: {participant_id}: {e.message}",
                    extra={"participant_id": participant_id, "error_code": e.code},
                )
                return SimulationOutcome(participant_id, error=e)
            except Exception as e:
                logger.error(
                    f"Failed to simulate benefit for participant: {participant_id}",
                    extra={"participant_id": participant_id},
                    exc_info=True,
                )
                return SimulationOutcome(
                    participant_id,
                    error=UpstreamError(
                        str(e) or type(e).__name__, "simulation",
                        ErrorContext(participant_id=participant_id),
                    ),
                )
            return SimulationOutcome(participant_id, result=result)
