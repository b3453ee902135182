"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell
    - Not-found is an explicit return value (None / False), never an exception

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; handlers await them
"""

from typing import Protocol

from user_api.core.domain_types import UserId


class UserLike(Protocol):
    """Structural contract for User records returned by a repository."""
    id: UserId
    name: str
    email: str
    password: str


class UserRepository(Protocol):
    """Contract for User persistence, implemented by shell."""
    async def create(self, fields: dict) -> UserLike: ...
    async def find_all(self) -> list[UserLike]: ...
    async def find_one(self, user_id: UserId) -> UserLike | None: ...
    async def update_by_id(
        self, user_id: UserId, fields: dict,
    ) -> UserLike | None: ...
    async def delete_by_id(self, user_id: UserId) -> bool: ...
