# src/confighub/api/v1/endpoints/comments.py
"""Comment endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from confighub.api.v1.dependencies import ActiveUserDep, OptionalUserDep, SessionDep
from confighub.core.settings import settings
from confighub.models import Comment
from confighub.schemas.comment import (
    CommentDetail,
    CommentListResponse,
    CommentOut,
    CommentWrite,
)
from confighub.schemas.common import MessageResponse, Pagination
from confighub.services import comment_service
from confighub.services.votes import comment_votes

router = APIRouter(tags=["comments"])


@router.get("/configs/{config_id}/comments", response_model=CommentListResponse)
async def list_comments(
    config_id: int,
    db: SessionDep,
    viewer: OptionalUserDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=settings.max_page_size)] = settings.default_page_size,
) -> dict[str, object]:
    """List a config's comments, newest first, with the caller's votes."""
    comments, total, user_votes = comment_service.list_comments(
        db,
        config_id,
        page=page,
        limit=limit,
        viewer=viewer,
    )
    return {
        "comments": comments,
        "pagination": Pagination.build(total, page, limit),
        "user_votes": user_votes,
    }


@router.post(
    "/configs/{config_id}/comments",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    config_id: int,
    comment_data: CommentWrite,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> Comment:
    """Add a comment to a config."""
    return comment_service.create_comment(db, config_id, current_user, comment_data.content)


@router.get("/comments/{comment_id}", response_model=CommentDetail)
async def get_comment(
    comment_id: int,
    db: SessionDep,
    viewer: OptionalUserDep,
) -> CommentDetail:
    """Return one comment and, for signed-in callers, their vote on it."""
    comment = comment_service.get_comment(db, comment_id)
    detail = CommentDetail.model_validate(comment)
    if viewer is not None:
        vote = comment_votes.get_user_vote(db, viewer, comment_id)
        detail.user_vote = vote.value if vote else None
    return detail


@router.patch("/comments/{comment_id}", response_model=CommentOut)
async def update_comment(
    comment_id: int,
    comment_data: CommentWrite,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> Comment:
    """Edit a comment's content."""
    return comment_service.update_comment(db, comment_id, current_user, comment_data.content)


@router.delete("/comments/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> dict[str, str]:
    """Delete a comment together with its votes."""
    comment_service.delete_comment(db, comment_id, current_user)
    return {"message": "Comment deleted successfully"}
