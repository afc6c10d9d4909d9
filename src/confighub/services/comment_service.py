"""Comments on configs."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from confighub.core.errors import InternalError, NotFound, PermissionDenied, ValidationError
from confighub.core.settings import settings
from confighub.db.time import utcnow
from confighub.models import Comment, CommentVote, Config, User
from confighub.services import permissions

logger = logging.getLogger(__name__)


def _clean_content(content: str | None) -> str:
    text = (content or "").strip()
    if not text:
        raise ValidationError("Comment content is required")
    if len(text) > settings.comment_max_length:
        raise ValidationError(
            f"Comment must be {settings.comment_max_length} characters or less"
        )
    return text


def _readable_config(db: Session, config_id: int, viewer: User | None) -> Config:
    config = db.get(Config, config_id)
    if config is None:
        raise NotFound("Configuration not found")
    role = viewer.role if viewer else None
    viewer_id = viewer.id if viewer else None
    if not permissions.can_read_config(role, config.is_hidden, config.user_id, viewer_id):
        raise NotFound("Configuration not found")
    return config


def get_comment(db: Session, comment_id: int) -> Comment:
    comment = (
        db.query(Comment)
        .options(selectinload(Comment.user))
        .filter(Comment.id == comment_id)
        .first()
    )
    if comment is None:
        raise NotFound("Comment not found")
    return comment


def create_comment(db: Session, config_id: int, author: User, content: str) -> Comment:
    """Attach a comment to a readable config.

    Raises:
        ValidationError: If the trimmed content is empty or too long.
        NotFound: If the config does not exist or is hidden from the author.
        InternalError: If the transaction fails.
    """
    text = _clean_content(content)
    _readable_config(db, config_id, author)

    comment = Comment(content=text, user_id=author.id, config_id=config_id)
    try:
        db.add(comment)
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        logger.error("Comment creation failed on config %s", config_id, exc_info=True)
        raise InternalError("Failed to create comment") from err

    logger.info("User %s commented on config %s", author.id, config_id)
    return get_comment(db, comment.id)


def list_comments(
    db: Session,
    config_id: int,
    page: int = 1,
    limit: int = 20,
    viewer: User | None = None,
) -> tuple[list[Comment], int, dict[int, int]]:
    """Return a page of comments (newest first), the total and the viewer's votes."""
    _readable_config(db, config_id, viewer)
    page = max(page, 1)
    limit = min(max(limit, 1), settings.max_page_size)

    stmt = db.query(Comment).filter(Comment.config_id == config_id)
    total = stmt.count()
    comments = (
        stmt.options(selectinload(Comment.user))
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    user_votes: dict[int, int] = {}
    if viewer is not None and comments:
        rows = (
            db.query(CommentVote.comment_id, CommentVote.value)
            .filter(
                CommentVote.user_id == viewer.id,
                CommentVote.comment_id.in_([comment.id for comment in comments]),
            )
            .all()
        )
        user_votes = {comment_id: value for comment_id, value in rows}
    return comments, total, user_votes


def update_comment(db: Session, comment_id: int, editor: User, content: str) -> Comment:
    """Replace a comment's content (owner, moderator or admin)."""
    text = _clean_content(content)
    comment = get_comment(db, comment_id)
    if not permissions.can_edit_content(editor.role, comment.user_id, editor.id):
        logger.warning("User %s denied edit on comment %s", editor.id, comment_id)
        raise PermissionDenied("You don't have permission to edit this comment")

    try:
        comment.content = text
        comment.updated_at = utcnow()
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        logger.error("Comment update failed for comment %s", comment_id, exc_info=True)
        raise InternalError("Failed to update comment") from err

    db.refresh(comment)
    return comment


def delete_comment(db: Session, comment_id: int, actor: User) -> None:
    """Hard-delete a comment and its votes (owner, moderator or admin)."""
    comment = get_comment(db, comment_id)
    if not permissions.can_edit_content(actor.role, comment.user_id, actor.id):
        logger.warning("User %s denied delete on comment %s", actor.id, comment_id)
        raise PermissionDenied("You don't have permission to delete this comment")

    try:
        db.delete(comment)
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        logger.error("Comment delete failed for comment %s", comment_id, exc_info=True)
        raise InternalError("Failed to delete comment") from err

    logger.info("User %s deleted comment %s", actor.id, comment_id)
