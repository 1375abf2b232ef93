"""Request dependencies: the authentication gate and service providers."""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from accounts.core.config import settings
from accounts.core.database import get_db
from accounts.core.errors import InvalidToken, Unauthorized
from accounts.core.security import TokenService, get_token_service
from accounts.repositories.user_repository import UserRepository
from accounts.schemas.auth import Identity
from accounts.services.auth_service import AuthService
from accounts.services.policy import can_administer, enforce
from accounts.services.user_service import UserService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name=settings.AUTH_COOKIE_NAME, auto_error=False)


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_auth_service(
    repo: Annotated[UserRepository, Depends(get_user_repository)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    return AuthService(repo, tokens)


def get_user_service(
    repo: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserService:
    return UserService(repo)


def extract_token(
    cookie_token: str | None,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    """Pick the candidate token: the cookie wins over the Authorization header."""
    if cookie_token:
        return cookie_token
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return None


def get_current_identity(
    cookie_token: Annotated[str | None, Depends(cookie_scheme)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> Identity:
    """Dependency: require a valid token and return the identity it carries. Raises 401 if missing or invalid."""
    token = extract_token(cookie_token, credentials)
    if token is None:
        raise Unauthorized("Access token is required")
    try:
        identity = tokens.verify(token)
    except InvalidToken as e:
        logger.info("Authentication failed: %s", type(e.cause).__name__ if e.cause else "expired")
        raise Unauthorized("Invalid or expired token") from e
    logger.debug("User authenticated: id=%s", identity.id)
    return identity


def get_optional_identity(
    cookie_token: Annotated[str | None, Depends(cookie_scheme)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> Identity | None:
    """Like get_current_identity, but anonymous callers (no token or a bad one) get None."""
    token = extract_token(cookie_token, credentials)
    if token is None:
        return None
    try:
        return tokens.verify(token)
    except InvalidToken:
        return None


def require_admin(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> Identity:
    """Dependency: require authenticated identity with role 'admin'. Raises 403 for non-admin."""
    enforce(can_administer(identity), identity, "require_admin")
    return identity
