"""Request/response schemas for auth endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

UserRole = Literal["user", "admin"]

NAME_MIN_LEN = 2
NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


class Identity(BaseModel):
    """Verified claim set carried by a token; immutable for the request."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def _normalize_email(v: str) -> str:
    return v.strip().lower()


class SignupRequest(BaseModel):
    """Registration payload. role defaults to 'user'."""

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: UserRole = "user"

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return _normalize_email(v) if isinstance(v, str) else v


class SigninRequest(BaseModel):
    """Credentials for sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return _normalize_email(v) if isinstance(v, str) else v


class AuthenticatedUser(BaseModel):
    """Result of signup/signin: public fields plus the issued token."""

    id: int
    name: str
    email: str
    role: UserRole
    token: str


class SignupUser(BaseModel):
    id: int
    name: str
    role: UserRole
    token: str


class SignupResponse(BaseModel):
    message: str = "User registered"
    user: SignupUser


class SigninUser(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    token: str


class SigninResponse(BaseModel):
    message: str = "User signed in successfully"
    user: SigninUser


class MessageResponse(BaseModel):
    message: str
