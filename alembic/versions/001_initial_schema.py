"""Initial schema - participants, contributions, fund_return_rates, pension_rules.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "participants",
        sa.Column("participant_id", sa.String(50), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("birth_date", sa.Date, nullable=False),
        sa.Column("registration_date", sa.Date, nullable=False),
        sa.Column("employer_name", sa.String(255), nullable=False),
        sa.Column("current_salary", sa.Numeric(15, 2), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_participants_birth_date", "participants", ["birth_date"])
    op.create_index("ix_participants_registration_date", "participants", ["registration_date"])

    op.create_table(
        "contributions",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column(
            "participant_id", sa.String(50),
            sa.ForeignKey("participants.participant_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("month", sa.Date, nullable=False),
        sa.Column("employee_contribution", sa.Numeric(15, 2), nullable=False),
        sa.Column("employer_contribution", sa.Numeric(15, 2), nullable=False),
        sa.Column("salary_base", sa.Numeric(15, 2), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("participant_id", "month", name="uk_participant_month"),
    )
    op.create_index("ix_contributions_participant_id", "contributions", ["participant_id"])
    op.create_index("ix_contributions_month", "contributions", ["month"])

    op.create_table(
        "fund_return_rates",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("year", sa.Integer, nullable=False, unique=True),
        sa.Column("return_rate", sa.Numeric(10, 6), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_fund_return_rates_year", "fund_return_rates", ["year"])

    op.create_table(
        "pension_rules",
        sa.Column("id", sa.Integer, primary_key=True, server_default="1"),
        sa.Column("normal_retirement_age", sa.Integer, nullable=False, server_default="58"),
        sa.Column("early_retirement_age", sa.Integer, nullable=False, server_default="50"),
        sa.Column("minimum_years_of_service", sa.Integer, nullable=False, server_default="5"),
        sa.Column("early_retirement_penalty_rate", sa.Numeric(5, 4), nullable=False, server_default="0.05"),
        sa.Column("monthly_benefit_divisor", sa.Integer, nullable=False, server_default="180"),
        sa.Column("effective_date", sa.Date, nullable=False),
        *_timestamps(),
        sa.CheckConstraint("id = 1", name="ck_pension_rules_single_row"),
    )


def downgrade() -> None:
    op.drop_table("pension_rules")
    op.drop_table("fund_return_rates")
    op.drop_table("contributions")
    op.drop_table("participants")
