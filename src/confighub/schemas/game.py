"""Game-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from confighub.schemas.common import Pagination


class GameCreate(BaseModel):
    """Schema for registering a game directly (staff only)."""

    steam_id: str = Field(..., min_length=1, description="Steam App ID")
    name: str = Field(..., min_length=1)
    image_url: str = ""


class GameOut(BaseModel):
    id: int
    steam_id: str
    name: str
    image_url: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GameDetail(GameOut):
    config_count: int = 0


class GameListResponse(BaseModel):
    games: list[GameOut]
    pagination: Pagination
