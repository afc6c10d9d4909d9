"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from confighub.models.user import Role
from confighub.schemas.common import Pagination
from confighub.schemas.config import ConfigSummary


class UserPublic(BaseModel):
    """Public profile fields; never includes email or suspension state."""

    id: int
    username: str
    image: str | None
    role: Role
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(BaseModel):
    user: UserPublic
    configs: list[ConfigSummary]
    total: int


class AdminUserOut(UserPublic):
    email: str | None
    suspended_until: datetime | None


class AdminUserListResponse(BaseModel):
    data: list[AdminUserOut]
    meta: Pagination


class UserModerationUpdate(BaseModel):
    """Role change and/or suspension; ``suspend_hours=0`` lifts a suspension."""

    role: Role | None = None
    suspend_hours: int | None = Field(None, ge=0)


class CountWindow(BaseModel):
    total: int
    new: int


class VoteTotals(BaseModel):
    upvotes: int
    downvotes: int
    total: int


class AdminStats(BaseModel):
    users: CountWindow
    configs: CountWindow
    votes: VoteTotals
