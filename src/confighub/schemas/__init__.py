"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentListResponse, CommentOut, CommentWrite
from .common import ErrorResponse, MessageResponse, Pagination
from .config import (
    ConfigChanges,
    ConfigCreate,
    ConfigDetailsIn,
    ConfigDetailsPatch,
    ConfigOut,
    ConfigSummary,
    ConfigUpdate,
    ConfigVersionOut,
)
from .game import GameCreate, GameDetail, GameOut
from .user import AdminStats, ProfileResponse, UserModerationUpdate, UserPublic
from .vote import CommentVoteResponse, ConfigVoteResponse, UserVoteResponse, VoteCast

__all__ = [
    "CommentListResponse", "CommentOut", "CommentWrite",
    "ErrorResponse", "MessageResponse", "Pagination",
    "ConfigChanges", "ConfigCreate", "ConfigDetailsIn", "ConfigDetailsPatch",
    "ConfigOut", "ConfigSummary", "ConfigUpdate", "ConfigVersionOut",
    "GameCreate", "GameDetail", "GameOut",
    "AdminStats", "ProfileResponse", "UserModerationUpdate", "UserPublic",
    "CommentVoteResponse", "ConfigVoteResponse", "UserVoteResponse", "VoteCast",
]
