"""User Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - UserWrite: name, email, password all required, 3-255 chars, taken as submitted
    - UserResponse mirrors the stored record, including the assigned id

Design Decisions:
    - One write schema for create and update: update is a full replace
    - from_attributes on UserResponse: handlers return ORM objects directly
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from user_api.core.domain_types import FIELD_MAX_LENGTH, FIELD_MIN_LENGTH


class UserWrite(BaseModel):
    """User create/replace body."""
    name: str = Field(min_length=FIELD_MIN_LENGTH, max_length=FIELD_MAX_LENGTH)
    email: str = Field(min_length=FIELD_MIN_LENGTH, max_length=FIELD_MAX_LENGTH)
    password: str = Field(min_length=FIELD_MIN_LENGTH, max_length=FIELD_MAX_LENGTH)


class UserResponse(BaseModel):
    """User record as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    password: str


class DeleteConfirmation(BaseModel):
    message: str
