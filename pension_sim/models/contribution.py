"""Contribution ORM - one row per participant per month.

Invariants:
    - (participant_id, month) is unique
    - Rows are append-only from the simulation's point of view
    - Deleting a participant cascades to its contributions
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pension_sim.db.base import Base
from pension_sim.models._columns import BigIntPK, TimestampMixin


class Contribution(TimestampMixin, Base):
    __tablename__ = "contributions"
    __table_args__ = (
        UniqueConstraint("participant_id", "month", name="uk_participant_month"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    participant_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("participants.participant_id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    month: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    employee_contribution: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    employer_contribution: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    salary_base: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
