"""Pension Rules - retirement thresholds, penalty rate and benefit divisor.

Invariants:
    - Rules that make the calculation meaningless cannot be constructed:
      divisor > 0, penalty rate >= 0, minimum service >= 0, early age <= normal age
    - DEFAULT_PENSION_RULES is immutable and safe for concurrent reads

Design Decisions:
    - Validation in __post_init__: invalid stored rules fail when loaded (or at startup),
      never halfway through a calculation (ADR: fail fast on configuration errors)
"""

from dataclasses import dataclass
from decimal import Decimal

from pension_sim.core.errors import ConfigurationInvariantError


@dataclass(frozen=True)
class PensionRules:
    normal_retirement_age: int = 58
    early_retirement_age: int = 50
    minimum_years_of_service: int = 5
    early_retirement_penalty_rate: Decimal = Decimal("0.05")
    monthly_benefit_divisor: int = 180

    def __post_init__(self):
        if self.monthly_benefit_divisor <= 0:
            raise ConfigurationInvariantError(
                f"must be positive, got {self.monthly_benefit_divisor}",
                "monthly_benefit_divisor",
            )
        if self.early_retirement_penalty_rate < 0:
            raise ConfigurationInvariantError(
                f"must not be negative, got {self.early_retirement_penalty_rate}",
                "early_retirement_penalty_rate",
            )
        if self.minimum_years_of_service < 0:
            raise ConfigurationInvariantError(
                f"must not be negative, got {self.minimum_years_of_service}",
                "minimum_years_of_service",
            )
        if self.early_retirement_age > self.normal_retirement_age:
            raise ConfigurationInvariantError(
                f"early age {self.early_retirement_age} exceeds "
                f"normal age {self.normal_retirement_age}",
                "early_retirement_age",
            )

    def is_eligible_for_retirement(self, age: int, years_of_service: int) -> bool:
        return (
            age >= self.early_retirement_age
            and years_of_service >= self.minimum_years_of_service
        )

    def is_eligible_for_normal_retirement(self, age: int) -> bool:
        return age >= self.normal_retirement_age

    def early_retirement_penalty(self, age: int) -> Decimal:
        """Fraction removed from the lump sum; zero at or above the normal age."""
        if age < self.normal_retirement_age:
            return (self.normal_retirement_age - age) * self.early_retirement_penalty_rate
        return Decimal("0")


DEFAULT_PENSION_RULES = PensionRules()
