"""Password hashing and JWT issuance/verification for authentication."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError

from accounts.core.config import settings
from accounts.core.errors import CryptoFailure, InvalidToken
from accounts.schemas.auth import Identity

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

REQUIRED_CLAIMS = ["sub", "email", "role", "iat", "exp"]


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage with a fresh salt. Do not store plain passwords."""
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    try:
        digest = bcrypt.hashpw(_password_bytes(plain_password), bcrypt.gensalt(rounds=cost))
    except (ValueError, TypeError) as e:
        logger.error("Password hashing failed: %s", type(e).__name__)
        raise CryptoFailure("Error hashing password", cause=e) from e
    return digest.decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Returns False on mismatch. A digest bcrypt cannot parse is a library fault,
    not a failed login, and raises CryptoFailure.
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError) as e:
        logger.error("Password verification failed: %s", type(e).__name__)
        raise CryptoFailure("Error comparing password", cause=e) from e


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Issues and verifies stateless bearer tokens.

    A token is valid iff its signature verifies against the configured secret
    and the current time is strictly before its exp claim. There is no
    revocation list.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=1),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("TokenService requires a non-empty secret")
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in
        self._clock = clock

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in

    def issue(self, identity: Identity) -> str:
        """Sign a token carrying id, email and role plus iat/exp."""
        issued_at = int(self._clock().timestamp())
        payload: dict[str, Any] = {
            "sub": str(identity.id),
            "email": identity.email,
            "role": identity.role,
            "iat": issued_at,
            "exp": issued_at + int(self._expires_in.total_seconds()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str, now: datetime | None = None) -> Identity:
        """
        Decode and validate a token; return the embedded identity.
        Every failure collapses to InvalidToken.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as e:
            raise InvalidToken(cause=e) from e

        current = int((now or self._clock()).timestamp())
        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)) or current >= exp:
            raise InvalidToken()

        try:
            return Identity(
                id=int(payload["sub"]),
                email=payload["email"],
                role=payload["role"],
            )
        except (TypeError, ValueError, ValidationError) as e:
            raise InvalidToken(cause=e) from e


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service built once from settings."""
    return TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expires_in=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )
