"""Vote-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class VoteCast(BaseModel):
    """Schema for casting, changing or clearing a vote."""

    value: Literal[-1, 0, 1] = Field(
        ...,
        description="1 for upvote, -1 for downvote, 0 to remove the vote",
    )


class VoteCounts(BaseModel):
    """Refreshed counters of a voted config."""

    id: int
    upvotes: int
    downvotes: int


class ConfigVoteResponse(BaseModel):
    """Result of casting a vote on a config."""

    message: str = "Vote processed successfully"
    config: VoteCounts


class UserVote(BaseModel):
    """The caller's stored vote on a config."""

    id: int
    value: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserVoteResponse(BaseModel):
    """Wrapper distinguishing "no vote" (``null``) from a stored vote."""

    vote: UserVote | None


class CommentVoteResponse(BaseModel):
    """Result of casting a vote on a comment."""

    value: int | None = Field(..., description="Caller's resulting vote, null when removed")
    upvotes: int
    downvotes: int
