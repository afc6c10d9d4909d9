# src/confighub/api/v1/endpoints/votes.py
"""Vote endpoints for configs and comments."""

from fastapi import APIRouter

from confighub.api.v1.dependencies import ActiveUserDep, CurrentUserDep, SessionDep
from confighub.schemas.vote import (
    CommentVoteResponse,
    ConfigVoteResponse,
    UserVoteResponse,
    VoteCast,
)
from confighub.services.votes import comment_votes, config_votes

router = APIRouter(tags=["votes"])


@router.post("/configs/{config_id}/vote", response_model=ConfigVoteResponse)
async def vote_on_config(
    config_id: int,
    vote_data: VoteCast,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> dict[str, object]:
    """Upvote, downvote or clear the caller's vote on a config."""
    outcome = config_votes.cast_vote(db, current_user, config_id, vote_data.value)
    return {
        "message": "Vote processed successfully",
        "config": {
            "id": outcome.target_id,
            "upvotes": outcome.upvotes,
            "downvotes": outcome.downvotes,
        },
    }


@router.get("/configs/{config_id}/vote/user", response_model=UserVoteResponse)
async def get_user_config_vote(
    config_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, object]:
    """Return the caller's current vote on a config, or null."""
    return {"vote": config_votes.get_user_vote(db, current_user, config_id)}


@router.post("/comments/{comment_id}/vote", response_model=CommentVoteResponse)
async def vote_on_comment(
    comment_id: int,
    vote_data: VoteCast,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> dict[str, object]:
    """Upvote, downvote or clear the caller's vote on a comment."""
    outcome = comment_votes.cast_vote(db, current_user, comment_id, vote_data.value)
    return {
        "value": outcome.value,
        "upvotes": outcome.upvotes,
        "downvotes": outcome.downvotes,
    }
