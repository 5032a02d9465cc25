"""Repositories - SQL implementations of the core boundary protocols.

Invariants:
    - Each public method opens and closes its own AsyncSession
    - Absence returns None; SQLAlchemy failures surface as DatabaseError
    - ORM rows never leave this package (mapped to frozen core records)
"""
