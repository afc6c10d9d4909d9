# src/confighub/api/v1/endpoints/configs.py
"""Config endpoints: creation, listing, editing, history and deletion."""

from typing import Annotated, Literal

from fastapi import APIRouter, Query, status

from confighub.api.v1.dependencies import ActiveUserDep, OptionalUserDep, SessionDep
from confighub.core.settings import settings
from confighub.models import Config
from confighub.schemas.common import MessageResponse
from confighub.schemas.config import (
    ConfigCreate,
    ConfigListResponse,
    ConfigOut,
    ConfigUpdate,
    ConfigVersionOut,
    RevertResponse,
)
from confighub.services import config_service
from confighub.services.permissions import DeletionMode

router = APIRouter(prefix="/configs", tags=["configs"])

PageQuery = Annotated[int, Query(ge=1)]
LimitQuery = Annotated[int, Query(ge=1, le=settings.max_page_size)]


@router.post("", response_model=ConfigOut, status_code=status.HTTP_201_CREATED)
async def create_config(
    config_data: ConfigCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> Config:
    """Create a config for a game; the first version is recorded automatically."""
    return config_service.create_config(db, current_user, config_data)


@router.get("", response_model=ConfigListResponse)
async def list_configs(
    db: SessionDep,
    page: PageQuery = 1,
    limit: LimitQuery = settings.default_page_size,
    sort: Literal["popular", "newest", "oldest", "updated"] = "popular",
    tags: Annotated[list[str] | None, Query()] = None,
    q: str | None = None,
) -> dict[str, object]:
    """List publicly visible configs.

    ``tags`` may be repeated (``?tags=a&tags=b``) or comma-separated
    (``?tags=a,b``); a config matches when it carries any of them.
    """
    tag_filter = [tag.strip() for raw in tags or [] for tag in raw.split(",") if tag.strip()]
    configs, total = config_service.list_configs(
        db,
        page=page,
        limit=limit,
        sort=sort,
        tags=tag_filter or None,
        query=q,
    )
    return {"configs": configs, "total": total}


@router.get("/{config_id}", response_model=ConfigOut)
async def get_config(config_id: int, db: SessionDep, viewer: OptionalUserDep) -> Config:
    """Return a config with its details and version history."""
    return config_service.get_readable_config(db, config_id, viewer)


@router.get("/{config_id}/versions", response_model=list[ConfigVersionOut])
async def list_versions(config_id: int, db: SessionDep, viewer: OptionalUserDep) -> list:
    """Return the config's versions, newest first."""
    config_service.get_readable_config(db, config_id, viewer)
    return config_service.list_versions(db, config_id)


@router.patch("/{config_id}", response_model=ConfigOut)
async def update_config(
    config_id: int,
    update_data: ConfigUpdate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> Config:
    """Apply a partial edit and record it as a new version."""
    return config_service.update_config(
        db,
        config_id,
        current_user,
        update_data,
        update_data.change_summary,
    )


@router.post("/{config_id}/versions/{version_id}/revert", response_model=RevertResponse)
async def revert_config(
    config_id: int,
    version_id: int,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> dict[str, object]:
    """Make an earlier version current by appending it as the newest version."""
    config = config_service.revert_config_to_version(db, config_id, version_id, current_user)
    return {"message": "Configuration reverted successfully", "config": config}


@router.delete("/{config_id}", response_model=MessageResponse)
async def delete_config(
    config_id: int,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> dict[str, str]:
    """Delete a config: admins remove it, owners hide it."""
    mode = config_service.delete_config(db, config_id, current_user)
    if mode is DeletionMode.HARD:
        return {"message": "Configuration deleted successfully"}
    return {"message": "Configuration hidden successfully"}
