"""Data access for the users table."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from accounts.core.errors import DuplicateEmail
from accounts.models.user import MAX_USER_ID, User

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Persistence collaborator for user accounts.

    The unique index on email is the source of truth for uniqueness: inserts
    and updates that hit it are rolled back and raised as DuplicateEmail, so a
    concurrent signup that passed the service pre-check still fails cleanly.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_email(self, email: str) -> User | None:
        return self.session.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> User | None:
        if not 1 <= user_id <= MAX_USER_ID:
            return None
        return self.session.get(User, user_id)

    def list_all(self) -> list[User]:
        return self.session.query(User).order_by(User.id).all()

    def insert(self, *, name: str, email: str, password_hash: str, role: str) -> User:
        """Persist a new user and return the refreshed row."""
        user = User(name=name, email=email, password_hash=password_hash, role=role)
        self.session.add(user)
        self._commit()
        self.session.refresh(user)
        return user

    def update(self, user: User, changes: dict[str, Any]) -> User:
        """Apply column changes, stamp updated_at and return the refreshed row."""
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = datetime.now(UTC)
        self._commit()
        self.session.refresh(user)
        return user

    def delete(self, user: User) -> None:
        self.session.delete(user)
        self.session.commit()

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("Unique constraint rejected write on users: %s", type(e.orig).__name__)
            raise DuplicateEmail() from e
