"""SQLAlchemy models for the ConfigHub application."""

from .comment import Comment
from .config import (
    AudioDriverType,
    Config,
    ConfigDetails,
    ConfigVersion,
    DirectXHubType,
)
from .game import Game
from .user import Role, User
from .vote import CommentVote, ConfigVote

__all__ = [
    "AudioDriverType", "DirectXHubType",
    "Comment",
    "Config", "ConfigDetails", "ConfigVersion",
    "Game",
    "Role", "User",
    "CommentVote", "ConfigVote",
]
