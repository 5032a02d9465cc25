"""ORM Models - SQLAlchemy declarative models for the pension tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Models are persistence shapes only; repositories map them to core records

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from pension_sim.models.participant import Participant  # noqa: F401
from pension_sim.models.contribution import Contribution  # noqa: F401
from pension_sim.models.fund_return_rate import FundReturnRate  # noqa: F401
from pension_sim.models.pension_rules import PensionRulesRow  # noqa: F401
