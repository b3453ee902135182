"""User ORM — persists the single User resource.

Invariants:
    - id is UUID primary key, assigned on insert
    - name, email, password are non-nullable text of 3-255 chars
    - Every assignment to a bounded field is validated (construction and update)
    - No uniqueness, no indexes beyond the primary key, password stored as given

Design Decisions:
    - @validates on the model: write-time constraint holds even for writes that
      bypass the request schemas
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, validates
from sqlalchemy.dialects.postgresql import UUID

from user_api.core.domain_types import FIELD_MAX_LENGTH, USER_FIELDS
from user_api.core.user_rules import check_field
from user_api.db.base import Base


class User(Base):
    """User record."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(FIELD_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(FIELD_MAX_LENGTH), nullable=False)
    password: Mapped[str] = mapped_column(String(FIELD_MAX_LENGTH), nullable=False)

    @validates(*USER_FIELDS)
    def validate_bounded_field(self, key: str, value: str) -> str:
        error = check_field(key, value)
        if error:
            raise error
        return value
