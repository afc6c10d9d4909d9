# src/confighub/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    comments_router,
    configs_router,
    games_router,
    users_router,
    votes_router,
)

__all__ = [
    "configs_router",
    "votes_router",
    "comments_router",
    "games_router",
    "users_router",
    "admin_router",
]
