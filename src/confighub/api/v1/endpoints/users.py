# src/confighub/api/v1/endpoints/users.py
"""Public user profile endpoints."""

from fastapi import APIRouter

from confighub.api.v1.dependencies import OptionalUserDep, SessionDep
from confighub.schemas.user import ProfileResponse
from confighub.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{username}", response_model=ProfileResponse)
async def get_profile(username: str, db: SessionDep, viewer: OptionalUserDep) -> dict[str, object]:
    """Return a user's public profile and the configs the caller may see."""
    user, configs = user_service.get_profile(db, username, viewer)
    return {"user": user, "configs": configs, "total": len(configs)}
