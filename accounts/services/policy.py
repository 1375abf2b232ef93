"""
Authorization policy for user resources.

Pure decision functions over the acting identity and the target id. They run
before any lookup, so a denied request never reveals whether the target exists.
"""

import logging
from dataclasses import dataclass

from accounts.core.errors import Forbidden
from accounts.schemas.auth import Identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""

    @classmethod
    def permit(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "Decision":
        return cls(allowed=False, reason=reason)


def _is_self_or_admin(actor: Identity, target_id: int) -> bool:
    return actor.id == target_id or actor.is_admin


def can_administer(actor: Identity) -> Decision:
    if actor.is_admin:
        return Decision.permit()
    return Decision.deny("Admin access required")


def can_list_users(actor: Identity) -> Decision:
    return can_administer(actor)


def can_read_user(actor: Identity, target_id: int) -> Decision:
    if _is_self_or_admin(actor, target_id):
        return Decision.permit()
    return Decision.deny("You can only access your own information")


def can_update_user(actor: Identity, target_id: int, requested_role: str | None) -> Decision:
    """Self or admin; any role field from a non-admin rejects the whole request."""
    if not _is_self_or_admin(actor, target_id):
        return Decision.deny("You can only update your own information")
    if requested_role is not None and not actor.is_admin:
        return Decision.deny("Only administrators can change user roles")
    return Decision.permit()


def can_delete_user(actor: Identity, target_id: int) -> Decision:
    """Self or admin, except that an admin may not delete their own account."""
    if not _is_self_or_admin(actor, target_id):
        return Decision.deny(
            "You can only delete your own account or admin can delete any account"
        )
    if actor.is_admin and actor.id == target_id:
        return Decision.deny("Administrators cannot delete their own accounts")
    return Decision.permit()


def can_assign_role(actor: Identity | None, role: str) -> Decision:
    """Creating an admin account requires an admin caller."""
    if role != "admin" or (actor is not None and actor.is_admin):
        return Decision.permit()
    return Decision.deny("Only administrators can create administrator accounts")


def enforce(decision: Decision, actor: Identity | None, operation: str) -> None:
    """Raise Forbidden for a denied decision, logging who tried what."""
    if decision.allowed:
        return
    logger.warning(
        "Authorization denied: operation=%s actor_id=%s actor_email=%s reason=%s",
        operation,
        actor.id if actor else None,
        actor.email if actor else None,
        decision.reason,
    )
    raise Forbidden(decision.reason)
