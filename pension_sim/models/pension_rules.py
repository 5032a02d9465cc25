"""Pension Rules ORM - single-row configuration table.

Invariants:
    - Only the row with id = 1 exists (CHECK constraint)
    - Column defaults mirror core.pension_rules.PensionRules defaults

Design Decisions:
    - Single row over key/value table: the rules are one record read as a whole
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from pension_sim.db.base import Base
from pension_sim.models._columns import TimestampMixin

CURRENT_RULES_ID = 1


class PensionRulesRow(TimestampMixin, Base):
    __tablename__ = "pension_rules"
    __table_args__ = (CheckConstraint("id = 1", name="ck_pension_rules_single_row"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=CURRENT_RULES_ID)
    normal_retirement_age: Mapped[int] = mapped_column(Integer, nullable=False, default=58)
    early_retirement_age: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    minimum_years_of_service: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    early_retirement_penalty_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 4), nullable=False, default=Decimal("0.05"),
    )
    monthly_benefit_divisor: Mapped[int] = mapped_column(Integer, nullable=False, default=180)
    effective_date: Mapped[date] = mapped_column(Date, nullable=False)
