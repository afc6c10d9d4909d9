"""Authorization predicates shared by config, comment and user operations.

All helpers are pure functions over roles and owner ids so each policy can be
tested without a database.
"""

from __future__ import annotations

import enum
from datetime import datetime

from confighub.core.errors import PermissionDenied
from confighub.core.settings import settings
from confighub.db.time import ensure_utc, utcnow
from confighub.models.user import Role, User

STAFF_ROLES = frozenset({Role.ADMIN, Role.MODERATOR})


class DeletionMode(enum.Enum):
    """How a config delete request is carried out."""

    HARD = "hard"  # row removed, cascading to details, versions, votes, comments
    SOFT = "soft"  # is_hidden set, row kept


def is_staff(role: Role | None) -> bool:
    return role in STAFF_ROLES


def can_edit_content(role: Role, owner_id: int, user_id: int) -> bool:
    """Return True if the user may edit content owned by ``owner_id``."""
    if is_staff(role):
        return True
    return owner_id == user_id


def can_revert_config(role: Role, owner_id: int, user_id: int) -> bool:
    """Reverting follows the edit rule: owner, moderator or admin."""
    return can_edit_content(role, owner_id, user_id)


def can_delete_content(role: Role, owner_id: int, user_id: int) -> bool:
    """Admins may delete anything; everyone else only their own content."""
    if role == Role.ADMIN:
        return True
    return owner_id == user_id


def can_read_config(
    role: Role | None,
    is_hidden: bool,
    owner_id: int | None = None,
    user_id: int | None = None,
) -> bool:
    """Return True if a config with the given visibility can be read.

    Visible configs are public. Hidden configs are readable by their owner and
    by moderators and admins only.
    """
    if not is_hidden:
        return True
    if role is None or user_id is None:
        return False
    if is_staff(role):
        return True
    return owner_id == user_id


def deletion_policy(role: Role, owner_id: int, user_id: int) -> DeletionMode:
    """Decide how a delete request by ``user_id`` on owned content is handled.

    Raises:
        PermissionDenied: If the caller is neither an admin nor the owner.
    """
    if role == Role.ADMIN:
        return DeletionMode.HARD
    if owner_id == user_id:
        return DeletionMode.SOFT
    raise PermissionDenied("You don't have permission to delete this configuration")


def can_moderate_user(actor_role: Role, target_role: Role) -> bool:
    """Admins moderate anyone but other admins; moderators only plain users."""
    if actor_role == Role.ADMIN:
        return target_role != Role.ADMIN
    if actor_role == Role.MODERATOR:
        return target_role == Role.USER
    return False


def can_suspend_user(actor_role: Role, suspension_hours: int) -> bool:
    if actor_role == Role.ADMIN:
        return True
    if actor_role == Role.MODERATOR:
        return suspension_hours <= settings.moderator_max_suspension_hours
    return False


def is_suspended(user: User, now: datetime | None = None) -> bool:
    """Return True while ``user.suspended_until`` lies in the future."""
    until = ensure_utc(user.suspended_until)
    if until is None:
        return False
    return until > (now or utcnow())


def ensure_active(user: User) -> None:
    """Reject writes from suspended accounts."""
    if is_suspended(user):
        raise PermissionDenied("Your account is currently suspended")


def ensure_staff(user: User) -> None:
    if not is_staff(user.role):
        raise PermissionDenied("Forbidden: Insufficient permissions")


def ensure_admin(user: User) -> None:
    if user.role != Role.ADMIN:
        raise PermissionDenied("Forbidden: Admin access required")
