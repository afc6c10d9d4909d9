"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from confighub.schemas.common import Pagination


class CommentWrite(BaseModel):
    """Body for creating or editing a comment; length rules live in the service."""

    content: str


class CommentAuthor(BaseModel):
    id: int
    username: str
    image: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CommentOut(BaseModel):
    """Comment with its vote counters and author."""

    id: int
    content: str
    user_id: int
    config_id: int
    upvotes: int
    downvotes: int
    created_at: datetime
    updated_at: datetime
    user: CommentAuthor

    model_config = ConfigDict(from_attributes=True)


class CommentDetail(CommentOut):
    user_vote: int | None = Field(None, description="Caller's vote on this comment, if any")


class CommentListResponse(BaseModel):
    comments: list[CommentOut]
    pagination: Pagination
    user_votes: dict[int, int] = Field(
        default_factory=dict,
        description="Caller's votes keyed by comment id",
    )
