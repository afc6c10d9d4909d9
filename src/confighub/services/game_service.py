"""Game catalogue helpers."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from confighub.core.errors import InternalError, NotFound
from confighub.core.settings import settings
from confighub.models import Config, Game
from confighub.schemas.game import GameCreate

logger = logging.getLogger(__name__)


def list_games(
    db: Session,
    page: int = 1,
    limit: int = 20,
    query: str | None = None,
) -> tuple[list[Game], int]:
    """Return games ordered by name, optionally filtered by a name substring."""
    page = max(page, 1)
    limit = min(max(limit, 1), settings.max_page_size)
    stmt = db.query(Game)
    if query:
        stmt = stmt.filter(Game.name.icontains(query, autoescape=True))
    total = stmt.count()
    games = stmt.order_by(Game.name.asc()).offset((page - 1) * limit).limit(limit).all()
    return games, total


def get_game(db: Session, game_id: int) -> tuple[Game, int]:
    """Return a game and the number of its publicly visible configs."""
    game = db.get(Game, game_id)
    if game is None:
        raise NotFound("Game not found")
    config_count = (
        db.query(Config)
        .filter(Config.game_id == game_id, Config.is_hidden.is_(False))
        .count()
    )
    return game, config_count


def create_game(db: Session, data: GameCreate) -> tuple[Game, bool]:
    """Register a game, or return the existing one with the same Steam id.

    Returns:
        The game and whether it was newly created.
    """
    existing = db.query(Game).filter(Game.steam_id == data.steam_id).first()
    if existing is not None:
        return existing, False

    game = Game(steam_id=data.steam_id, name=data.name.strip(), image_url=data.image_url)
    try:
        db.add(game)
        db.commit()
    except IntegrityError as err:
        db.rollback()
        existing = db.query(Game).filter(Game.steam_id == data.steam_id).first()
        if existing is None:
            logger.error("Game creation failed for steam id %s", data.steam_id, exc_info=True)
            raise InternalError("Failed to create game") from err
        return existing, False
    except SQLAlchemyError as err:
        db.rollback()
        logger.error("Game creation failed for steam id %s", data.steam_id, exc_info=True)
        raise InternalError("Failed to create game") from err

    db.refresh(game)
    logger.info("Registered game %s (steam id %s)", game.id, game.steam_id)
    return game, True
