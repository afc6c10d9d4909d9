# src/confighub/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .comments import router as comments_router
from .configs import router as configs_router
from .games import router as games_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "configs_router",
    "votes_router",
    "comments_router",
    "games_router",
    "users_router",
    "admin_router",
]
