"""Signup, signin and signout endpoints. The token is returned in the body and set as a cookie."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from accounts.api.deps import get_auth_service, get_optional_identity
from accounts.core.config import settings
from accounts.core.security import TokenService, get_token_service
from accounts.schemas.auth import (
    Identity,
    MessageResponse,
    SigninRequest,
    SigninResponse,
    SigninUser,
    SignupRequest,
    SignupResponse,
    SignupUser,
)
from accounts.services.auth_service import AuthService

router = APIRouter()


def _set_token_cookie(response: Response, token: str, tokens: TokenService) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=int(tokens.expires_in.total_seconds()),
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    actor: Annotated[Identity | None, Depends(get_optional_identity)],
) -> SignupResponse:
    """
    Register an account and sign it in.
    Creating an admin account requires the caller to be signed in as an admin.
    """
    user = auth.signup(body, actor=actor)
    _set_token_cookie(response, user.token, tokens)
    return SignupResponse(
        user=SignupUser(id=user.id, name=user.name, role=user.role, token=user.token)
    )


@router.post("/signin", response_model=SigninResponse)
def signin(
    body: SigninRequest,
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> SigninResponse:
    """
    Authenticate with email and password; returns a JWT.
    Send it back as the token cookie or as: Authorization: Bearer <token>
    """
    user = auth.signin(body)
    _set_token_cookie(response, user.token, tokens)
    return SigninResponse(user=SigninUser(**user.model_dump()))


@router.post("/signout", response_model=MessageResponse)
def signout(
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Clear the token cookie. Tokens are stateless, so nothing changes server-side."""
    auth.signout()
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )
    return MessageResponse(message="User signed out successfully")
