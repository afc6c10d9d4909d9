"""Models for configs, their tunable details and their version history."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from confighub.db.session import Base
from confighub.db.time import utcnow
from confighub.models.game import Game
from confighub.models.user import User

if TYPE_CHECKING:
    from confighub.models.comment import Comment
    from confighub.models.vote import ConfigVote


class DirectXHubType(str, enum.Enum):
    DISABLE = "DISABLE"
    SIMPLE = "SIMPLE"
    COMPLETE = "COMPLETE"


class AudioDriverType(str, enum.Enum):
    PULSE = "PULSE"
    ALSA = "ALSA"


class Config(Base):
    """A user's configuration profile for one game.

    ``upvotes`` and ``downvotes`` cache the aggregate of the ``votes`` ledger
    and are only changed in the transaction that changes the ledger.
    """

    __tablename__ = "configs"
    __table_args__ = (
        UniqueConstraint("game_id", "user_id", name="uq_configs_game_user"),
        CheckConstraint("upvotes >= 0", name="ck_configs_upvotes_nonneg"),
        CheckConstraint("downvotes >= 0", name="ck_configs_downvotes_nonneg"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("games.id", ondelete="RESTRICT"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    gamehub_version: Mapped[str] = mapped_column(String(64), nullable=False)
    video_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    is_legacy: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Soft-delete flag; hidden configs are only visible to owners and staff.
    is_hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
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

    game: Mapped[Game] = relationship("Game")
    created_by: Mapped[User] = relationship("User")
    details: Mapped[ConfigDetails | None] = relationship(
        "ConfigDetails",
        back_populates="config",
        cascade="all, delete-orphan",
        uselist=False,
    )
    versions: Mapped[list[ConfigVersion]] = relationship(
        "ConfigVersion",
        back_populates="config",
        cascade="all, delete-orphan",
        order_by="ConfigVersion.version_number.desc()",
    )
    votes: Mapped[list[ConfigVote]] = relationship("ConfigVote", cascade="all, delete-orphan")
    comments: Mapped[list[Comment]] = relationship("Comment", cascade="all, delete-orphan")


class ConfigDetails(Base):
    """The live tunable fields of a config (1:1 with ``Config``)."""

    __tablename__ = "config_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    config_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("configs.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    language: Mapped[str | None] = mapped_column(String(32), nullable=True)
    game_resolution: Mapped[str] = mapped_column(String(32), nullable=False)
    directx_hub: Mapped[DirectXHubType] = mapped_column(
        Enum(DirectXHubType, name="directx_hub_type", native_enum=False),
        nullable=False,
    )
    env_vars: Mapped[str | None] = mapped_column(Text, nullable=True)
    command_line: Mapped[str | None] = mapped_column(Text, nullable=True)
    compat_layer: Mapped[str] = mapped_column(String(64), nullable=False)
    gpu_driver: Mapped[str] = mapped_column(String(64), nullable=False)
    audio_driver: Mapped[AudioDriverType] = mapped_column(
        Enum(AudioDriverType, name="audio_driver_type", native_enum=False),
        nullable=False,
    )
    dxvk_version: Mapped[str] = mapped_column(String(64), nullable=False)
    vkd3d_version: Mapped[str] = mapped_column(String(64), nullable=False)
    cpu_translator: Mapped[str] = mapped_column(String(64), nullable=False)
    cpu_core_limit: Mapped[str] = mapped_column(String(32), nullable=False)
    vram_limit: Mapped[str] = mapped_column(String(32), nullable=False)
    components: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    config: Mapped[Config] = relationship("Config", back_populates="details")


class ConfigVersion(Base):
    """Immutable, numbered snapshot of a config's details.

    Rows are insert-only: edits and reverts append a new version rather than
    touching existing ones.
    """

    __tablename__ = "config_versions"
    __table_args__ = (
        UniqueConstraint("config_id", "version_number", name="uq_config_versions_number"),
        Index("ix_config_versions_config_id", "config_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    config_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("configs.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    version_number: Mapped[int] = mapped_column(Integer, nullable=False)
    config_snapshot: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    change_summary: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    config: Mapped[Config] = relationship("Config", back_populates="versions")
    updated_by: Mapped[User] = relationship("User")
