"""Participant ORM - pension fund members.

Invariants:
    - participant_id is the natural primary key (e.g. "P001")
    - birth_date and registration_date are calendar dates (no time component)
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from pension_sim.db.base import Base
from pension_sim.models._columns import TimestampMixin


class Participant(TimestampMixin, Base):
    __tablename__ = "participants"

    participant_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    registration_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    employer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    current_salary: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), nullable=False,
    )
