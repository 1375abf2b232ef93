"""User management: list, read, update and delete accounts under the authorization policy."""

import logging
from typing import Any

from accounts.core.errors import NotFound
from accounts.core.security import hash_password
from accounts.models.user import User
from accounts.repositories.user_repository import UserRepository
from accounts.schemas.auth import Identity
from accounts.schemas.users import DeletedUser, UpdateUserRequest, UserOut
from accounts.services.policy import (
    can_delete_user,
    can_list_users,
    can_read_user,
    can_update_user,
    enforce,
)

logger = logging.getLogger(__name__)


class UserService:
    """
    Every operation checks the policy before touching the repository, so
    authorization failures take precedence over not-found.
    """

    def __init__(self, repo: UserRepository) -> None:
        self.repo = repo

    def list_users(self, actor: Identity) -> list[UserOut]:
        enforce(can_list_users(actor), actor, "list_users")
        users = self.repo.list_all()
        logger.info("Listed %s users for admin id=%s", len(users), actor.id)
        return [UserOut.model_validate(u) for u in users]

    def get_user(self, actor: Identity, user_id: int) -> UserOut:
        enforce(can_read_user(actor, user_id), actor, "get_user")
        return UserOut.model_validate(self._require(actor, user_id, "get_user"))

    def update_user(self, actor: Identity, user_id: int, body: UpdateUserRequest) -> UserOut:
        enforce(can_update_user(actor, user_id, body.role), actor, "update_user")
        user = self._require(actor, user_id, "update_user")

        changes: dict[str, Any] = body.model_dump(
            exclude_unset=True, exclude_none=True, exclude={"password"}
        )
        if body.password is not None:
            changes["password_hash"] = hash_password(body.password)

        if "email" in changes and changes["email"] == user.email:
            del changes["email"]

        updated = self.repo.update(user, changes)
        logger.info(
            "User %s updated by id=%s fields=%s",
            user_id,
            actor.id,
            sorted(body.model_fields_set),
        )
        return UserOut.model_validate(updated)

    def delete_user(self, actor: Identity, user_id: int) -> DeletedUser:
        enforce(can_delete_user(actor, user_id), actor, "delete_user")
        user = self._require(actor, user_id, "delete_user")
        summary = DeletedUser.model_validate(user)
        self.repo.delete(user)
        logger.info("User %s deleted by id=%s", user_id, actor.id)
        return summary

    def _require(self, actor: Identity, user_id: int, operation: str) -> User:
        user = self.repo.find_by_id(user_id)
        if user is None:
            logger.warning(
                "User not found: operation=%s actor_id=%s target_id=%s",
                operation,
                actor.id,
                user_id,
            )
            raise NotFound("User not found")
        return user
