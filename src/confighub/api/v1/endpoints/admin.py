# src/confighub/api/v1/endpoints/admin.py
"""Administration endpoints: site statistics and user moderation."""

from typing import Annotated

from fastapi import APIRouter, Query

from confighub.api.v1.dependencies import ActiveUserDep, CurrentUserDep, SessionDep
from confighub.core.settings import settings
from confighub.models import User
from confighub.schemas.common import Pagination
from confighub.schemas.user import (
    AdminStats,
    AdminUserListResponse,
    AdminUserOut,
    UserModerationUpdate,
)
from confighub.services import permissions, user_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=AdminStats)
async def get_stats(current_user: CurrentUserDep, db: SessionDep) -> dict[str, object]:
    """Return site-wide counts (admins only)."""
    permissions.ensure_admin(current_user)
    return user_service.admin_stats(db)


@router.get("/users", response_model=AdminUserListResponse)
async def list_users(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=settings.max_page_size)] = settings.default_page_size,
    q: str | None = None,
) -> dict[str, object]:
    """List accounts with their email and suspension state (admins only)."""
    permissions.ensure_admin(current_user)
    users, total = user_service.list_users(db, page=page, limit=limit, query=q)
    return {"data": users, "meta": Pagination.build(total, page, limit)}


@router.patch("/users/{user_id}", response_model=AdminUserOut)
async def moderate_user(
    user_id: int,
    update: UserModerationUpdate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> User:
    """Change a user's role or suspension."""
    return user_service.moderate_user(db, current_user, user_id, update)
