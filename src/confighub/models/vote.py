"""Models capturing one user's current vote on a config or a comment."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from confighub.db.session import Base
from confighub.db.time import utcnow


class ConfigVote(Base):
    """Per-user vote on a config.

    A zero vote is never stored; clearing a vote deletes the row.
    """

    __tablename__ = "votes"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_votes_value"),
        UniqueConstraint("user_id", "config_id", name="uq_votes_user_config"),
        Index("ix_votes_config_id", "config_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    config_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("configs.id", ondelete="CASCADE"),
        nullable=False,
    )
    # 1 = upvote, -1 = downvote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class CommentVote(Base):
    """Per-user vote on a comment, same shape as ``ConfigVote``."""

    __tablename__ = "comment_votes"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_comment_votes_value"),
        UniqueConstraint("user_id", "comment_id", name="uq_comment_votes_user_comment"),
        Index("ix_comment_votes_comment_id", "comment_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    )
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
