"""Domain Types — identity type and field bounds for the User record.

Invariants:
    - UserId wraps a UUID; the database assigns it on insert
    - USER_FIELDS lists every writable User field, all required text
    - Field bounds are inclusive on both ends

Design Decisions:
    - NewType over dataclass wrapper: zero runtime cost, full type-checker support
    - str Enum for field names: serializes to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)


# ─── Field Bounds ────────────────────────────────────────────────

FIELD_MIN_LENGTH = 3
FIELD_MAX_LENGTH = 255


class UserField(str, Enum):
    """Writable User fields. All required, all length-bounded text."""
    NAME = "name"
    EMAIL = "email"
    PASSWORD = "password"


USER_FIELDS: tuple[str, ...] = tuple(f.value for f in UserField)
