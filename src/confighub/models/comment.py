"""SQLAlchemy model for comments attached to configs."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from confighub.db.session import Base
from confighub.db.time import utcnow
from confighub.models.user import User

if TYPE_CHECKING:
    from confighub.models.vote import CommentVote


class Comment(Base):
    """User comment on a config, carrying its own vote counters."""

    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_comments_upvotes_nonneg"),
        CheckConstraint("downvotes >= 0", name="ck_comments_downvotes_nonneg"),
        Index("ix_comments_config_id", "config_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
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
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    user: Mapped[User] = relationship("User")
    votes: Mapped[list[CommentVote]] = relationship("CommentVote", cascade="all, delete-orphan")
