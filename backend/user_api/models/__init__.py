"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the only entity; no relations

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all runs
"""

from user_api.models.user import User  # noqa: F401
