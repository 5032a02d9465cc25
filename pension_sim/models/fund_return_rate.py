"""Fund Return Rate ORM - annual return of the pension fund, one row per year."""

from decimal import Decimal

from sqlalchemy import Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from pension_sim.db.base import Base
from pension_sim.models._columns import BigIntPK, TimestampMixin


class FundReturnRate(TimestampMixin, Base):
    __tablename__ = "fund_return_rates"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    return_rate: Mapped[Decimal] = mapped_column(Numeric(10, 6), nullable=False)
