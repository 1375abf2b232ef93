"""User management endpoints. Every route requires a valid token."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from accounts.api.deps import get_current_identity, get_user_service, require_admin
from accounts.schemas.auth import Identity
from accounts.schemas.users import (
    DeleteUserResponse,
    UpdateUserRequest,
    UserResponse,
    UsersListResponse,
)
from accounts.services.user_service import UserService

router = APIRouter(dependencies=[Depends(get_current_identity)])

UserId = Annotated[int, Path(ge=1, description="User id")]


@router.get("", response_model=UsersListResponse)
def list_users(
    admin: Annotated[Identity, Depends(require_admin)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UsersListResponse:
    """List all users (admin only)."""
    users = service.list_users(admin)
    return UsersListResponse(users=users, count=len(users))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: UserId,
    identity: Annotated[Identity, Depends(get_current_identity)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Users can read their own record; admins can read any."""
    user = service.get_user(identity, user_id)
    return UserResponse(message="User retrieved successfully", user=user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: UserId,
    body: UpdateUserRequest,
    identity: Annotated[Identity, Depends(get_current_identity)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """
    Users can update their own record; admins can update any.
    Only admins may send a role field; otherwise the whole request is rejected.
    """
    user = service.update_user(identity, user_id, body)
    return UserResponse(message="User updated successfully", user=user)


@router.delete("/{user_id}", response_model=DeleteUserResponse)
def delete_user(
    user_id: UserId,
    identity: Annotated[Identity, Depends(get_current_identity)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> DeleteUserResponse:
    """Users can delete their own account; admins can delete any account but their own."""
    user = service.delete_user(identity, user_id)
    return DeleteUserResponse(user=user)
