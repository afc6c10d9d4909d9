"""Profiles, administration statistics and user moderation."""

from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from confighub.core.errors import InternalError, NotFound, PermissionDenied, ValidationError
from confighub.core.settings import settings
from confighub.db.time import utcnow
from confighub.models import Config, Role, User
from confighub.schemas.user import UserModerationUpdate
from confighub.services import permissions

logger = logging.getLogger(__name__)

__all__ = [
    "get_user",
    "get_user_by_username",
    "get_profile",
    "admin_stats",
    "list_users",
    "moderate_user",
]

NEW_WINDOW = timedelta(days=7)


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def get_profile(
    db: Session,
    username: str,
    viewer: User | None = None,
) -> tuple[User, list[Config]]:
    """Return a user and the configs the viewer may see, newest first."""
    user = get_user_by_username(db, username)
    if user is None:
        raise NotFound("User not found")

    stmt = db.query(Config).options(selectinload(Config.game)).filter(Config.user_id == user.id)
    role = viewer.role if viewer else None
    viewer_id = viewer.id if viewer else None
    if not permissions.can_read_config(role, True, user.id, viewer_id):
        stmt = stmt.filter(Config.is_hidden.is_(False))
    return user, stmt.order_by(Config.created_at.desc()).all()


def admin_stats(db: Session) -> dict[str, dict[str, int]]:
    """Return user and config totals with 7-day windows, plus vote totals."""
    since = utcnow() - NEW_WINDOW
    upvotes, downvotes = db.query(
        func.coalesce(func.sum(Config.upvotes), 0),
        func.coalesce(func.sum(Config.downvotes), 0),
    ).one()
    return {
        "users": {
            "total": db.query(User).count(),
            "new": db.query(User).filter(User.created_at >= since).count(),
        },
        "configs": {
            "total": db.query(Config).count(),
            "new": db.query(Config).filter(Config.created_at >= since).count(),
        },
        "votes": {
            "upvotes": int(upvotes),
            "downvotes": int(downvotes),
            "total": int(upvotes) + int(downvotes),
        },
    }


def list_users(
    db: Session,
    page: int = 1,
    limit: int = 20,
    query: str | None = None,
) -> tuple[list[User], int]:
    """Return users, newest first, optionally filtered by username or email."""
    page = max(page, 1)
    limit = min(max(limit, 1), settings.max_page_size)
    stmt = db.query(User)
    if query:
        stmt = stmt.filter(
            or_(
                User.username.icontains(query, autoescape=True),
                User.email.icontains(query, autoescape=True),
            )
        )
    total = stmt.count()
    users = (
        stmt.order_by(User.created_at.desc(), User.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return users, total


def moderate_user(
    db: Session,
    actor: User,
    user_id: int,
    update: UserModerationUpdate,
) -> User:
    """Change a user's role and/or suspension.

    Args:
        db: Database session.
        actor: Moderator or admin performing the action.
        user_id: Identifier of the user being moderated.
        update: Requested role and/or suspension length in hours; 0 lifts
            an active suspension.

    Returns:
        The updated user.

    Raises:
        ValidationError: If the update requests nothing.
        NotFound: If the user does not exist.
        PermissionDenied: If the actor may not moderate this user, change
            roles, or suspend for the requested length.
        InternalError: If the transaction fails.
    """
    permissions.ensure_staff(actor)
    if update.role is None and update.suspend_hours is None:
        raise ValidationError("Nothing to update")

    target = get_user(db, user_id)
    if target is None:
        raise NotFound("User not found")
    if target.id == actor.id:
        raise PermissionDenied("You cannot moderate your own account")
    if not permissions.can_moderate_user(actor.role, target.role):
        logger.warning("User %s denied moderation of user %s", actor.id, user_id)
        raise PermissionDenied("You don't have permission to moderate this user")
    if update.role is not None and actor.role != Role.ADMIN:
        raise PermissionDenied("Only admins can change user roles")
    if update.suspend_hours is not None and not permissions.can_suspend_user(
        actor.role, update.suspend_hours
    ):
        raise PermissionDenied(
            f"Moderators can suspend for at most {settings.moderator_max_suspension_hours} hours"
        )

    try:
        if update.role is not None:
            target.role = update.role
        if update.suspend_hours is not None:
            if update.suspend_hours == 0:
                target.suspended_until = None
            else:
                target.suspended_until = utcnow() + timedelta(hours=update.suspend_hours)
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        logger.error("Moderation of user %s failed", user_id, exc_info=True)
        raise InternalError("Failed to update user") from err

    db.refresh(target)
    logger.info(
        "User %s moderated user %s (role=%s, suspend_hours=%s)",
        actor.id,
        user_id,
        update.role,
        update.suspend_hours,
    )
    return target
