"""User Repository — SQLAlchemy implementation of the UserRepository protocol.

Invariants:
    - Fields checked before any write; the first violation is raised as FieldValidationError
    - Every write commits; any SQLAlchemy or connection failure rolls back and
      raises DatabaseError
    - Not-found is reported by return value: None from find_one/update_by_id,
      False from delete_by_id
    - update_by_id replaces all three fields, never a subset

Design Decisions:
    - Errors mapped here as well as in the session manager: repository calls run
      inside the request, before the session dependency exits
"""

import logging

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from user_api.core.domain_types import USER_FIELDS, UserId
from user_api.core.repository_protocols import UserRepository
from user_api.core.user_rules import check_user_fields
from user_api.infrastructure.database import get_db, map_db_error
from user_api.models.user import User

logger = logging.getLogger(__name__)

_DB_FAILURES = (SQLAlchemyError, OSError)


def _require_valid(fields: dict) -> None:
    errors = check_user_fields(fields)
    if errors:
        raise errors[0]


class SqlUserRepository:
    """User persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, fields: dict) -> User:
        _require_valid(fields)
        user = User(**{name: fields[name] for name in USER_FIELDS})
        self.db.add(user)
        await self._commit("insert")
        await self.db.refresh(user)
        logger.info(f"User {user.id} created", extra={"user_id": str(user.id)})
        return user

    async def find_all(self) -> list[User]:
        try:
            result = await self.db.execute(select(User))
        except _DB_FAILURES as e:
            raise map_db_error(e)
        return list(result.scalars().all())

    async def find_one(self, user_id: UserId) -> User | None:
        try:
            result = await self.db.execute(
                select(User).where(User.id == user_id),
            )
        except _DB_FAILURES as e:
            raise map_db_error(e)
        return result.scalar_one_or_none()

    async def update_by_id(self, user_id: UserId, fields: dict) -> User | None:
        _require_valid(fields)
        user = await self.find_one(user_id)
        if user is None:
            return None
        for name in USER_FIELDS:
            setattr(user, name, fields[name])
        await self._commit("update")
        await self.db.refresh(user)
        logger.info(f"User {user_id} updated", extra={"user_id": str(user_id)})
        return user

    async def delete_by_id(self, user_id: UserId) -> bool:
        user = await self.find_one(user_id)
        if user is None:
            return False
        await self.db.delete(user)
        await self._commit("delete")
        logger.info(f"User {user_id} deleted", extra={"user_id": str(user_id)})
        return True

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except _DB_FAILURES as e:
            await self.db.rollback()
            logger.error(f"User {operation} failed: {e}")
            raise map_db_error(e)


def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    """FastAPI dependency for the User repository."""
    return SqlUserRepository(db)
