"""User Routes — create, list, get, replace and delete User records.

Invariants:
    - Bodies validated by UserWrite before reaching a handler
    - Handlers delegate to the repository and check its return values
    - Missing record on get/update/delete → 404 RESOURCE_NOT_FOUND, no state change
    - List returns every record, database-native order, no pagination

Design Decisions:
    - Repository injected via Depends: handlers never touch the session manager
    - Not-found on update/delete is an error, not a silent success
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from user_api.core.domain_types import UserId
from user_api.core.errors import ResourceNotFoundError
from user_api.core.repository_protocols import UserRepository
from user_api.infrastructure.user_repository import get_user_repository
from user_api.schemas.user import DeleteConfirmation, UserResponse, UserWrite

router = APIRouter(prefix="/user", tags=["user"])


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserWrite,
    repo: UserRepository = Depends(get_user_repository),
):
    """Create a User."""
    return await repo.create(body.model_dump())


@router.get("", response_model=list[UserResponse])
async def list_users(
    repo: UserRepository = Depends(get_user_repository),
):
    """List all Users."""
    return await repo.find_all()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    repo: UserRepository = Depends(get_user_repository),
):
    user = await repo.find_one(UserId(user_id))
    if user is None:
        raise ResourceNotFoundError("User", str(user_id))
    return user


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: UserWrite,
    repo: UserRepository = Depends(get_user_repository),
):
    """Replace name, email and password of an existing User."""
    user = await repo.update_by_id(UserId(user_id), body.model_dump())
    if user is None:
        raise ResourceNotFoundError("User", str(user_id))
    return user


@router.delete("/{user_id}", response_model=DeleteConfirmation)
async def delete_user(
    user_id: UUID,
    repo: UserRepository = Depends(get_user_repository),
):
    """Delete a User."""
    deleted = await repo.delete_by_id(UserId(user_id))
    if not deleted:
        raise ResourceNotFoundError("User", str(user_id))
    return DeleteConfirmation(message=f"User {user_id} deleted")
