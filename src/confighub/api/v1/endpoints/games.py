# src/confighub/api/v1/endpoints/games.py
"""Game catalogue endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from confighub.api.v1.dependencies import ActiveUserDep, SessionDep
from confighub.core.settings import settings
from confighub.models import Game
from confighub.schemas.common import Pagination
from confighub.schemas.config import ConfigListResponse
from confighub.schemas.game import GameCreate, GameDetail, GameListResponse, GameOut
from confighub.services import config_service, game_service, permissions

router = APIRouter(prefix="/games", tags=["games"])

PageQuery = Annotated[int, Query(ge=1)]
LimitQuery = Annotated[int, Query(ge=1, le=settings.max_page_size)]


@router.get("", response_model=GameListResponse)
async def list_games(
    db: SessionDep,
    page: PageQuery = 1,
    limit: LimitQuery = settings.default_page_size,
    q: str | None = None,
) -> dict[str, object]:
    """List games by name."""
    games, total = game_service.list_games(db, page=page, limit=limit, query=q)
    return {"games": games, "pagination": Pagination.build(total, page, limit)}


@router.get("/{game_id}", response_model=GameDetail)
async def get_game(game_id: int, db: SessionDep) -> GameDetail:
    """Return a game with the number of its visible configs."""
    game, config_count = game_service.get_game(db, game_id)
    return GameDetail.model_validate(game).model_copy(update={"config_count": config_count})


@router.get("/{game_id}/configs", response_model=ConfigListResponse)
async def list_game_configs(
    game_id: int,
    db: SessionDep,
    page: PageQuery = 1,
    limit: LimitQuery = settings.default_page_size,
) -> dict[str, object]:
    """List a game's visible configs, most upvoted first."""
    configs, total = config_service.list_configs_by_game(db, game_id, page=page, limit=limit)
    return {"configs": configs, "total": total}


@router.post("", response_model=GameOut, status_code=status.HTTP_201_CREATED)
async def create_game(
    game_data: GameCreate,
    response: Response,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> Game:
    """Register a game (moderators and admins); an existing Steam id is returned as is."""
    permissions.ensure_staff(current_user)
    game, created = game_service.create_game(db, game_data)
    if not created:
        response.status_code = status.HTTP_200_OK
    return game
