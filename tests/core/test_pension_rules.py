"""Pension Rules - verifies defaults, eligibility and construction invariants.

Invariants:
    - A zero or negative divisor can never be constructed
    - Penalty is linear below the normal age and zero at or above it
"""

from decimal import Decimal

import pytest

from pension_sim.core.errors import ConfigurationInvariantError
from pension_sim.core.pension_rules import DEFAULT_PENSION_RULES, PensionRules


def test_default_values():
    rules = DEFAULT_PENSION_RULES
    assert rules.normal_retirement_age == 58
    assert rules.early_retirement_age == 50
    assert rules.minimum_years_of_service == 5
    assert rules.early_retirement_penalty_rate == Decimal("0.05")
    assert rules.monthly_benefit_divisor == 180


@pytest.mark.parametrize(
    "kwargs, setting",
    [
        ({"monthly_benefit_divisor": 0}, "monthly_benefit_divisor"),
        ({"monthly_benefit_divisor": -180}, "monthly_benefit_divisor"),
        ({"early_retirement_penalty_rate": Decimal("-0.01")}, "early_retirement_penalty_rate"),
        ({"minimum_years_of_service": -1}, "minimum_years_of_service"),
        ({"early_retirement_age": 60}, "early_retirement_age"),
    ],
)
def test_invalid_rules_refuse_to_construct(kwargs, setting):
    with pytest.raises(ConfigurationInvariantError) as exc_info:
        PensionRules(**kwargs)
    assert exc_info.value.setting == setting
    assert exc_info.value.retryable is False


@pytest.mark.parametrize(
    "age, expected",
    [(45, Decimal("0.65")), (57, Decimal("0.05")), (58, Decimal("0")), (65, Decimal("0"))],
)
def test_early_retirement_penalty(age, expected):
    assert DEFAULT_PENSION_RULES.early_retirement_penalty(age) == expected


@pytest.mark.parametrize(
    "age, years, expected",
    [(50, 5, True), (49, 30, False), (60, 4, False), (58, 5, True)],
)
def test_eligibility_requires_age_and_service(age, years, expected):
    assert DEFAULT_PENSION_RULES.is_eligible_for_retirement(age, years) is expected


def test_normal_retirement_threshold():
    assert DEFAULT_PENSION_RULES.is_eligible_for_normal_retirement(58)
    assert not DEFAULT_PENSION_RULES.is_eligible_for_normal_retirement(57)
