"""User Rules — pure field-level checks applied before any User write.

Invariants:
    - check_field returns an error value, never raises
    - Length counted on the value as submitted (no stripping)
    - None is reported as missing, non-str as wrong type

Design Decisions:
    - Return FieldValidationError | None: callers decide whether to raise or collect
"""

from user_api.core.domain_types import (
    FIELD_MAX_LENGTH, FIELD_MIN_LENGTH, USER_FIELDS,
)
from user_api.core.errors import FieldValidationError


def check_field(field: str, value: object) -> FieldValidationError | None:
    """Check a single User field against its presence and length bounds."""
    if value is None:
        return FieldValidationError(f"{field} is required", field)
    if not isinstance(value, str):
        return FieldValidationError(f"{field} must be a string", field)
    if len(value) < FIELD_MIN_LENGTH:
        return FieldValidationError(
            f"{field} must be at least {FIELD_MIN_LENGTH} characters", field,
        )
    if len(value) > FIELD_MAX_LENGTH:
        return FieldValidationError(
            f"{field} must be at most {FIELD_MAX_LENGTH} characters", field,
        )
    return None


def check_user_fields(fields: dict) -> list[FieldValidationError]:
    """Check every User field in `fields`; absent keys count as missing."""
    errors = []
    for name in USER_FIELDS:
        error = check_field(name, fields.get(name))
        if error:
            errors.append(error)
    return errors
