"""Seed demo data - three participants, their contribution history, rates and rules.

Revision ID: 002_seed_demo_data
Revises: 001_initial
Create Date: 2026-10-16

"""
from datetime import date
from decimal import Decimal
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_seed_demo_data"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_PARTICIPANTS = [
    ("P001", "Budi Santoso", date(1980, 5, 15), date(2005, 3, 1), "PT Maju Jaya", Decimal("15000000")),
    ("P002", "Siti Nurhaliza", date(1985, 8, 22), date(2010, 6, 15), "PT Sejahtera Mandiri", Decimal("12000000")),
    ("P003", "Ahmad Dhani", date(1975, 3, 10), date(2000, 1, 5), "PT Karya Abadi", Decimal("20000000")),
]

_RATES = {
    2016: "0.072", 2017: "0.081", 2018: "0.069", 2019: "0.078", 2020: "0.055",
    2021: "0.088", 2022: "0.091", 2023: "0.084", 2024: "0.093", 2025: "0.087",
}

# Employee 5% and employer 7% of salary, every month of 2024 and 2025
_EMPLOYEE_SHARE = Decimal("0.05")
_EMPLOYER_SHARE = Decimal("0.07")


def _contribution_rows() -> list[dict]:
    rows = []
    for participant_id, _, _, _, _, salary in _PARTICIPANTS:
        for year in (2024, 2025):
            for month in range(1, 13):
                rows.append({
                    "participant_id": participant_id,
                    "month": date(year, month, 1),
                    "employee_contribution": salary * _EMPLOYEE_SHARE,
                    "employer_contribution": salary * _EMPLOYER_SHARE,
                    "salary_base": salary,
                })
    return rows


def upgrade() -> None:
    participants = sa.table(
        "participants",
        sa.column("participant_id"), sa.column("name"), sa.column("birth_date"),
        sa.column("registration_date"), sa.column("employer_name"), sa.column("current_salary"),
    )
    contributions = sa.table(
        "contributions",
        sa.column("participant_id"), sa.column("month"), sa.column("employee_contribution"),
        sa.column("employer_contribution"), sa.column("salary_base"),
    )
    rates = sa.table("fund_return_rates", sa.column("year"), sa.column("return_rate"))
    rules = sa.table("pension_rules", sa.column("id"), sa.column("effective_date"))

    op.bulk_insert(participants, [
        {
            "participant_id": pid, "name": name, "birth_date": birth,
            "registration_date": registered, "employer_name": employer,
            "current_salary": salary,
        }
        for pid, name, birth, registered, employer, salary in _PARTICIPANTS
    ])
    op.bulk_insert(contributions, _contribution_rows())
    op.bulk_insert(rates, [
        {"year": year, "return_rate": Decimal(rate)} for year, rate in _RATES.items()
    ])
    op.bulk_insert(rules, [{"id": 1, "effective_date": date(2024, 1, 1)}])


def downgrade() -> None:
    op.execute("DELETE FROM pension_rules")
    op.execute("DELETE FROM fund_return_rates")
    op.execute("DELETE FROM contributions WHERE participant_id IN ('P001', 'P002', 'P003')")
    op.execute("DELETE FROM participants WHERE participant_id IN ('P001', 'P002', 'P003')")
