"""Fund Return Rates - point-in-time snapshot derived from the annual rate series.

Invariants:
    - Snapshot is computed fresh per request (never cached here)
    - Missing current year or empty windows fall back to FALLBACK_RETURN_RATE
    - Trailing averages use the N most recent years by year, not by insertion order
    - historical_rates sorted by year ascending

Design Decisions:
    - Derivation lives in core (pure), the repository only loads rows
      (ADR: functional core, imperative shell)
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from pension_sim.core.domain_types import FALLBACK_RETURN_RATE


@dataclass(frozen=True)
class FundReturnRate:
    year: int
    return_rate: Decimal


@dataclass(frozen=True)
class CurrentFundReturnRate:
    current_year: int
    current_rate: Decimal
    average_rate_5_years: Decimal
    average_rate_10_years: Decimal
    historical_rates: tuple[FundReturnRate, ...] = ()


def _trailing_average(newest_first: list[FundReturnRate], window: int) -> Decimal:
    recent = newest_first[:window]
    if not recent:
        return FALLBACK_RETURN_RATE
    return sum((r.return_rate for r in recent), Decimal("0")) / len(recent)


def build_rate_snapshot(
    historical_rates: Iterable[FundReturnRate], current_year: int,
) -> CurrentFundReturnRate:
    """Derive current rate and 5/10-year trailing averages from the rate series."""
    ordered = sorted(historical_rates, key=lambda r: r.year)
    newest_first = list(reversed(ordered))
    current = next(
        (r.return_rate for r in ordered if r.year == current_year),
        FALLBACK_RETURN_RATE,
    )
    return CurrentFundReturnRate(
        current_year=current_year,
        current_rate=current,
        average_rate_5_years=_trailing_average(newest_first, 5),
        average_rate_10_years=_trailing_average(newest_first, 10),
        historical_rates=tuple(ordered),
    )


def fallback_rate_snapshot(current_year: int) -> CurrentFundReturnRate:
    """Default used when no rate rows exist."""
    return CurrentFundReturnRate(
        current_year=current_year,
        current_rate=FALLBACK_RETURN_RATE,
        average_rate_5_years=FALLBACK_RETURN_RATE,
        average_rate_10_years=FALLBACK_RETURN_RATE,
        historical_rates=(),
    )
