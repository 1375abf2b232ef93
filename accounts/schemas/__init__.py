"""Pydantic request/response schemas."""

from accounts.schemas.auth import (
    AuthenticatedUser,
    Identity,
    MessageResponse,
    SigninRequest,
    SigninResponse,
    SignupRequest,
    SignupResponse,
    UserRole,
)
from accounts.schemas.health import HealthResponse
from accounts.schemas.users import (
    DeletedUser,
    DeleteUserResponse,
    UpdateUserRequest,
    UserOut,
    UserResponse,
    UsersListResponse,
)

__all__ = [
    "AuthenticatedUser",
    "DeleteUserResponse",
    "DeletedUser",
    "HealthResponse",
    "Identity",
    "MessageResponse",
    "SigninRequest",
    "SigninResponse",
    "SignupRequest",
    "SignupResponse",
    "UpdateUserRequest",
    "UserOut",
    "UserResponse",
    "UserRole",
    "UsersListResponse",
]
