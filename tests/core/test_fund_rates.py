"""Fund Return Rates - verifies snapshot derivation and fallback values.

Invariants:
    - Trailing averages use the newest N years regardless of input order
    - Missing current year falls back to 8.5%
"""

from decimal import Decimal

from pension_sim.core.domain_types import FALLBACK_RETURN_RATE
from pension_sim.core.fund_rates import (
    FundReturnRate, build_rate_snapshot, fallback_rate_snapshot,
)


def _series(first_year: int, last_year: int) -> list[FundReturnRate]:
    """Rate for year Y is Y - 2000 percent, e.g. 2025 -> 0.25."""
    return [
        FundReturnRate(year, Decimal(year - 2000) / 100)
        for year in range(first_year, last_year + 1)
    ]


def test_snapshot_averages_newest_years():
    rates = list(reversed(_series(2010, 2025)))
    snapshot = build_rate_snapshot(rates, 2025)

    assert snapshot.current_rate == Decimal("0.25")
    # 2021..2025 -> 21..25 percent
    assert snapshot.average_rate_5_years == Decimal("0.23")
    # 2016..2025 -> 16..25 percent
    assert snapshot.average_rate_10_years == Decimal("0.205")


def test_snapshot_history_sorted_ascending():
    rates = [FundReturnRate(2024, Decimal("0.07")), FundReturnRate(2022, Decimal("0.06"))]
    snapshot = build_rate_snapshot(rates, 2024)
    assert [r.year for r in snapshot.historical_rates] == [2022, 2024]


def test_short_series_averages_what_exists():
    snapshot = build_rate_snapshot(_series(2023, 2025), 2025)
    assert snapshot.average_rate_5_years == Decimal("0.24")
    assert snapshot.average_rate_10_years == Decimal("0.24")


def test_missing_current_year_uses_fallback_rate():
    snapshot = build_rate_snapshot(_series(2016, 2025), 2026)
    assert snapshot.current_year == 2026
    assert snapshot.current_rate == FALLBACK_RETURN_RATE


def test_empty_series_falls_back_everywhere():
    snapshot = build_rate_snapshot([], 2026)
    assert snapshot == fallback_rate_snapshot(2026)


def test_fallback_snapshot_uses_eight_and_a_half_percent():
    snapshot = fallback_rate_snapshot(2026)
    assert snapshot.current_rate == Decimal("0.085")
    assert snapshot.average_rate_5_years == Decimal("0.085")
    assert snapshot.average_rate_10_years == Decimal("0.085")
    assert snapshot.historical_rates == ()
