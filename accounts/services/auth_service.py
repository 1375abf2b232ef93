"""Account lifecycle: signup, signin and signout."""

import logging
from functools import lru_cache

from accounts.core.errors import DuplicateEmail, InvalidCredentials
from accounts.core.security import TokenService, hash_password, verify_password
from accounts.models.user import User
from accounts.repositories.user_repository import UserRepository
from accounts.schemas.auth import AuthenticatedUser, Identity, SigninRequest, SignupRequest
from accounts.services.policy import can_assign_role, enforce

logger = logging.getLogger(__name__)


@lru_cache
def _dummy_hash() -> str:
    """Hash compared against when the email is unknown, so both failures cost the same."""
    return hash_password("not-a-real-password")


class AuthService:
    """Orchestrates the hasher, the token service and the user repository."""

    def __init__(self, repo: UserRepository, tokens: TokenService) -> None:
        self.repo = repo
        self.tokens = tokens

    def signup(self, body: SignupRequest, actor: Identity | None = None) -> AuthenticatedUser:
        """
        Register a new account and issue its token.

        role defaults to 'user'; requesting 'admin' requires an admin actor.
        Raises Forbidden or DuplicateEmail.
        """
        enforce(can_assign_role(actor, body.role), actor, "signup")

        if self.repo.find_by_email(body.email) is not None:
            logger.info("Signup rejected: email already registered")
            raise DuplicateEmail()

        user = self.repo.insert(
            name=body.name,
            email=body.email,
            password_hash=hash_password(body.password),
            role=body.role,
        )
        logger.info("User registered successfully: id=%s role=%s", user.id, user.role)
        return self._authenticated(user)

    def signin(self, body: SigninRequest) -> AuthenticatedUser:
        """Check credentials and issue a token. Unknown email and wrong password both raise InvalidCredentials."""
        user = self.repo.find_by_email(body.email)
        if user is None:
            verify_password(body.password, _dummy_hash())
            logger.warning("Signin failed: unknown email")
            raise InvalidCredentials()
        if not verify_password(body.password, user.password_hash):
            logger.warning("Signin failed: wrong password for user id=%s", user.id)
            raise InvalidCredentials()

        logger.info("User signed in successfully: id=%s", user.id)
        return self._authenticated(user)

    def signout(self) -> None:
        """Tokens are stateless; the caller only drops the client-held cookie."""
        logger.info("User signed out")

    def _authenticated(self, user: User) -> AuthenticatedUser:
        identity = Identity(id=user.id, email=user.email, role=user.role)
        return AuthenticatedUser(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            token=self.tokens.issue(identity),
        )
