"""Request/response schemas for user management endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from accounts.schemas.auth import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    UserRole,
)


class UserOut(BaseModel):
    """Public user fields (never the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DeletedUser(BaseModel):
    """Summary of a removed account."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class UpdateUserRequest(BaseModel):
    """Partial update; at least one field must be present."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: EmailStr | None = None
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )
    role: UserRole | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def require_some_field(self) -> "UpdateUserRequest":
        if not self.model_fields_set or all(
            getattr(self, name) is None for name in self.model_fields_set
        ):
            raise ValueError("At least one field must be provided for update")
        return self


class UserResponse(BaseModel):
    message: str
    user: UserOut


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    message: str = "Successfully retrieved users"
    users: list[UserOut]
    count: int


class DeleteUserResponse(BaseModel):
    message: str = "User deleted successfully"
    user: DeletedUser
