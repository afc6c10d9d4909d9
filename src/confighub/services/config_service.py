"""Config persistence and append-only version history.

Every accepted write (create, edit, revert) appends a ``ConfigVersion`` whose
number is ``max(existing) + 1`` for that config, computed inside the same
transaction that changes the live details. Existing versions are never
modified; a revert copies an older snapshot forward as a new version.
"""

from __future__ import annotations

import copy
import enum
import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from sqlalchemy import Text, cast, func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from confighub.core.errors import (
    ConflictError,
    InternalError,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from confighub.core.settings import settings
from confighub.db.time import utcnow
from confighub.models import (
    AudioDriverType,
    Config,
    ConfigDetails,
    ConfigVersion,
    DirectXHubType,
    Game,
    User,
)
from confighub.schemas.config import ConfigChanges, ConfigCreate
from confighub.services import permissions
from confighub.services.permissions import DeletionMode

logger = logging.getLogger(__name__)

INITIAL_CHANGE_SUMMARY = "Initial configuration"
REVERT_SUMMARY_TEMPLATE = "Reverted to version {number}"

DETAIL_FIELDS = (
    "language",
    "game_resolution",
    "directx_hub",
    "env_vars",
    "command_line",
    "compat_layer",
    "gpu_driver",
    "audio_driver",
    "dxvk_version",
    "vkd3d_version",
    "cpu_translator",
    "cpu_core_limit",
    "vram_limit",
    "components",
)

# Fallbacks used when a stored snapshot lacks a field.
SNAPSHOT_DEFAULTS: dict[str, Any] = {
    "language": None,
    "game_resolution": "",
    "directx_hub": DirectXHubType.DISABLE.value,
    "env_vars": None,
    "command_line": None,
    "compat_layer": "",
    "gpu_driver": "",
    "audio_driver": AudioDriverType.ALSA.value,
    "dxvk_version": "",
    "vkd3d_version": "",
    "cpu_translator": "",
    "cpu_core_limit": "",
    "vram_limit": "",
    "components": [],
}
NULLABLE_FIELDS = frozenset(
    name for name, default in SNAPSHOT_DEFAULTS.items() if default is None
)

CONFIG_SORTS = {
    "popular": (Config.upvotes.desc(), Config.created_at.desc()),
    "newest": (Config.created_at.desc(),),
    "oldest": (Config.created_at.asc(),),
    "updated": (Config.updated_at.desc(),),
}

_SLUG_STRIP = re.compile(r"[^a-z0-9\s-]")
_SLUG_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """Return a lowercase, hyphen-separated URL slug for ``text``."""
    slug = _SLUG_STRIP.sub("", text.lower().strip())
    return _SLUG_SEPARATORS.sub("-", slug).strip("-")


def snapshot_details(details: ConfigDetails) -> dict[str, Any]:
    """Capture the live detail fields as a JSON-safe snapshot."""
    snapshot: dict[str, Any] = {}
    for name in DETAIL_FIELDS:
        value = getattr(details, name)
        if isinstance(value, enum.Enum):
            value = value.value
        elif isinstance(value, list):
            value = list(value)
        snapshot[name] = value
    return snapshot


def normalize_snapshot(snapshot: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a complete snapshot, filling absent or empty fields with defaults.

    Nullable fields keep whatever the snapshot holds (``None`` when absent);
    required fields fall back to ``SNAPSHOT_DEFAULTS`` so nothing is left
    undefined.
    """
    snapshot = snapshot or {}
    normalized: dict[str, Any] = {}
    for name, default in SNAPSHOT_DEFAULTS.items():
        value = snapshot.get(name)
        if name in NULLABLE_FIELDS:
            normalized[name] = value
        elif not value:
            normalized[name] = copy.copy(default)
        else:
            normalized[name] = value
    if not isinstance(normalized["components"], list):
        normalized["components"] = []
    return normalized


def _coerce_enum(enum_cls: type[enum.Enum], value: Any, default: enum.Enum) -> enum.Enum:
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _apply_snapshot(details: ConfigDetails, snapshot: Mapping[str, Any]) -> None:
    normalized = normalize_snapshot(snapshot)
    normalized["directx_hub"] = _coerce_enum(
        DirectXHubType, normalized["directx_hub"], DirectXHubType.DISABLE
    )
    normalized["audio_driver"] = _coerce_enum(
        AudioDriverType, normalized["audio_driver"], AudioDriverType.ALSA
    )
    for name, value in normalized.items():
        setattr(details, name, value)


def current_snapshot(config: Config) -> dict[str, Any] | None:
    """Return the snapshot held by the config's highest-numbered version."""
    if not config.versions:
        return None
    latest = max(config.versions, key=lambda version: version.version_number)
    return latest.config_snapshot


def _next_version_number(db: Session, config_id: int) -> int:
    current = (
        db.query(func.max(ConfigVersion.version_number))
        .filter(ConfigVersion.config_id == config_id)
        .scalar()
    )
    return (current or 0) + 1


def _lock_config(db: Session, config_id: int) -> Config:
    config = (
        db.query(Config)
        .filter(Config.id == config_id)
        .with_for_update()
        .populate_existing()
        .first()
    )
    if config is None:
        raise NotFound("Configuration not found")
    return config


def _ensure_details(db: Session, config: Config) -> ConfigDetails:
    if config.details is None:
        details = ConfigDetails(config_id=config.id)
        _apply_snapshot(details, {})
        db.add(details)
        config.details = details
    return config.details


def _unique_slug(db: Session, base: str) -> str:
    base = base or "config"
    slug = base
    suffix = 1
    while db.query(Config.id).filter(Config.slug == slug).first() is not None:
        suffix += 1
        slug = f"{base}-{suffix}"
    return slug


def _validate_change_summary(change_summary: str | None) -> str:
    summary = (change_summary or "").strip()
    if not summary:
        raise ValidationError("Change summary is required")
    if len(summary) > settings.change_summary_max_length:
        raise ValidationError(
            f"Change summary must be {settings.change_summary_max_length} characters or less"
        )
    return summary


def get_config(db: Session, config_id: int) -> Config | None:
    """Return a config with its details and versions loaded."""
    return (
        db.query(Config)
        .options(
            selectinload(Config.details),
            selectinload(Config.versions).selectinload(ConfigVersion.updated_by),
            selectinload(Config.game),
        )
        .filter(Config.id == config_id)
        .populate_existing()
        .first()
    )


def get_readable_config(db: Session, config_id: int, viewer: User | None) -> Config:
    """Return a config the viewer may see.

    Hidden configs the viewer may not read are reported as missing.
    """
    config = get_config(db, config_id)
    if config is None:
        raise NotFound("Configuration not found")
    role = viewer.role if viewer else None
    viewer_id = viewer.id if viewer else None
    if not permissions.can_read_config(role, config.is_hidden, config.user_id, viewer_id):
        raise NotFound("Configuration not found")
    return config


def list_versions(db: Session, config_id: int) -> list[ConfigVersion]:
    """Return every version of a config, newest first."""
    return (
        db.query(ConfigVersion)
        .options(selectinload(ConfigVersion.updated_by))
        .filter(ConfigVersion.config_id == config_id)
        .order_by(ConfigVersion.version_number.desc())
        .all()
    )


def create_config(db: Session, author: User, data: ConfigCreate) -> Config:
    """Create a config, its details and version 1 in one transaction.

    Raises:
        NotFound: If the game does not exist.
        ConflictError: If the author already has a config for the game.
        InternalError: If the transaction fails.
    """
    game = db.get(Game, data.game_id)
    if game is None:
        raise NotFound("Game or user not found")

    duplicate = (
        db.query(Config.id)
        .filter(Config.game_id == data.game_id, Config.user_id == author.id)
        .first()
    )
    if duplicate is not None:
        raise ConflictError("You already have a config for this game")

    try:
        config = Config(
            game_id=game.id,
            user_id=author.id,
            gamehub_version=data.gamehub_version,
            video_url=str(data.video_url) if data.video_url else None,
            tags=list(data.tags),
            slug=_unique_slug(db, slugify(f"{game.name}-by-{author.username}")),
        )
        details = ConfigDetails(**data.details.model_dump())
        config.details = details
        db.add(config)
        db.flush()

        db.add(
            ConfigVersion(
                config_id=config.id,
                user_id=author.id,
                version_number=1,
                config_snapshot=snapshot_details(details),
                change_summary=INITIAL_CHANGE_SUMMARY,
            )
        )
        db.commit()
    except IntegrityError as err:
        db.rollback()
        # Lost a race against a concurrent create for the same game.
        logger.warning("Duplicate config for user %s game %s", author.id, data.game_id)
        raise ConflictError("You already have a config for this game") from err
    except SQLAlchemyError as err:
        db.rollback()
        logger.error("Config creation failed for user %s", author.id, exc_info=True)
        raise InternalError("Failed to create configuration") from err

    logger.info("User %s created config %s for game %s", author.id, config.id, game.id)
    return get_config(db, config.id)  # type: ignore[return-value]


def update_config(
    db: Session,
    config_id: int,
    editor: User,
    changes: ConfigChanges,
    change_summary: str,
) -> Config:
    """Merge partial changes onto a config and append a new version.

    Fields absent from ``changes`` are left untouched; an explicit ``None`` on
    a nullable field clears it.

    Raises:
        ValidationError: If the change summary is blank or too long.
        NotFound: If the config does not exist.
        PermissionDenied: If the editor is not the owner, a moderator or an admin.
        InternalError: If the transaction fails.
    """
    summary = _validate_change_summary(change_summary)

    config = db.get(Config, config_id)
    if config is None:
        raise NotFound("Configuration not found")
    if not permissions.can_edit_content(editor.role, config.user_id, editor.id):
        logger.warning("User %s denied edit on config %s", editor.id, config_id)
        raise PermissionDenied("You don't have permission to edit this configuration")

    provided = changes.model_fields_set
    try:
        config = _lock_config(db, config_id)
        if "gamehub_version" in provided:
            config.gamehub_version = changes.gamehub_version
        if "video_url" in provided:
            config.video_url = str(changes.video_url) if changes.video_url else None
        if "tags" in provided:
            config.tags = list(changes.tags)

        details = _ensure_details(db, config)
        if changes.details is not None:
            for name, value in changes.details.model_dump(exclude_unset=True).items():
                setattr(details, name, value)
        config.updated_at = utcnow()
        db.flush()

        version_number = _next_version_number(db, config_id)
        db.add(
            ConfigVersion(
                config_id=config_id,
                user_id=editor.id,
                version_number=version_number,
                config_snapshot=snapshot_details(details),
                change_summary=summary,
            )
        )
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        logger.error("Config update failed for config %s", config_id, exc_info=True)
        raise InternalError("Failed to update configuration") from err

    logger.info("User %s updated config %s to version %s", editor.id, config_id, version_number)
    return get_config(db, config_id)  # type: ignore[return-value]


def revert_config_to_version(
    db: Session,
    config_id: int,
    version_id: int,
    actor: User,
) -> Config:
    """Make an earlier snapshot current by appending it as a new version.

    Raises:
        NotFound: If the config or the version (for this config) does not exist.
        PermissionDenied: If the actor is not the owner, a moderator or an admin.
        InternalError: If the transaction fails.
    """
    config = db.get(Config, config_id)
    if config is None:
        raise NotFound("Configuration not found")

    target = (
        db.query(ConfigVersion)
        .filter(ConfigVersion.id == version_id, ConfigVersion.config_id == config_id)
        .first()
    )
    if target is None:
        raise NotFound("Version not found")

    if not permissions.can_revert_config(actor.role, config.user_id, actor.id):
        logger.warning("User %s denied revert on config %s", actor.id, config_id)
        raise PermissionDenied("You don't have permission to revert this configuration")

    try:
        config = _lock_config(db, config_id)
        details = _ensure_details(db, config)
        _apply_snapshot(details, copy.deepcopy(target.config_snapshot))
        config.updated_at = utcnow()
        db.flush()

        version_number = _next_version_number(db, config_id)
        db.add(
            ConfigVersion(
                config_id=config_id,
                user_id=actor.id,
                version_number=version_number,
                config_snapshot=copy.deepcopy(target.config_snapshot),
                change_summary=REVERT_SUMMARY_TEMPLATE.format(number=target.version_number),
            )
        )
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        logger.error("Revert failed for config %s", config_id, exc_info=True)
        raise InternalError("Failed to revert configuration") from err

    logger.info(
        "User %s reverted config %s to version %s as version %s",
        actor.id,
        config_id,
        target.version_number,
        version_number,
    )
    return get_config(db, config_id)  # type: ignore[return-value]


def delete_config(db: Session, config_id: int, actor: User) -> DeletionMode:
    """Hard-delete (admins) or hide (owners) a config."""
    config = db.query(Config).filter(Config.id == config_id).populate_existing().first()
    if config is None:
        raise NotFound("Configuration not found")

    mode = permissions.deletion_policy(actor.role, config.user_id, actor.id)
    try:
        if mode is DeletionMode.HARD:
            db.delete(config)
        else:
            config.is_hidden = True
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        logger.error("Delete failed for config %s", config_id, exc_info=True)
        raise InternalError("Failed to delete configuration") from err

    logger.info("User %s deleted config %s (%s)", actor.id, config_id, mode.value)
    return mode


def _page_bounds(page: int, limit: int) -> tuple[int, int]:
    page = max(page, 1)
    limit = min(max(limit, 1), settings.max_page_size)
    return page, limit


def list_configs(
    db: Session,
    page: int = 1,
    limit: int = 20,
    sort: str = "popular",
    tags: list[str] | None = None,
    query: str | None = None,
) -> tuple[list[Config], int]:
    """Return one page of publicly visible configs and the total match count."""
    page, limit = _page_bounds(page, limit)
    stmt = db.query(Config).filter(Config.is_hidden.is_(False))
    if query:
        stmt = stmt.join(Game, Config.game_id == Game.id).filter(
            Game.name.icontains(query, autoescape=True)
        )
    if tags:
        # The JSON column stores json.dumps output, so each tag is searched
        # for in that same escaped form.
        tags_text = cast(Config.tags, Text)
        stmt = stmt.filter(
            or_(*(tags_text.contains(json.dumps(tag), autoescape=True) for tag in tags))
        )
    total = stmt.count()
    order_by = CONFIG_SORTS.get(sort, CONFIG_SORTS["popular"])
    configs = (
        stmt.options(selectinload(Config.game))
        .order_by(*order_by)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return configs, total


def list_configs_by_game(
    db: Session,
    game_id: int,
    page: int = 1,
    limit: int = 20,
) -> tuple[list[Config], int]:
    """Return visible configs for one game, most upvoted first."""
    if db.get(Game, game_id) is None:
        raise NotFound("Game not found")
    page, limit = _page_bounds(page, limit)
    stmt = db.query(Config).filter(Config.game_id == game_id, Config.is_hidden.is_(False))
    total = stmt.count()
    configs = (
        stmt.order_by(Config.upvotes.desc(), Config.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return configs, total
