"""Vote ledger shared by configs and comments.

Each voter holds at most one vote row per target. The target's ``upvotes`` and
``downvotes`` columns cache the ledger aggregate and are adjusted with SQL-side
increments in the same transaction that inserts, flips or deletes the vote row,
while the target row is locked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from confighub.core.errors import InternalError, NotFound, PermissionDenied, ValidationError
from confighub.models import Comment, CommentVote, Config, ConfigVote, User

logger = logging.getLogger(__name__)

VALID_VOTE_VALUES = frozenset({-1, 0, 1})


@dataclass(frozen=True)
class VoteTarget:
    """Describes one kind of votable entity and its ledger table."""

    label: str
    model: type[Config] | type[Comment]
    vote_model: type[ConfigVote] | type[CommentVote]
    foreign_key: str


CONFIG_TARGET = VoteTarget(
    label="configuration",
    model=Config,
    vote_model=ConfigVote,
    foreign_key="config_id",
)
COMMENT_TARGET = VoteTarget(
    label="comment",
    model=Comment,
    vote_model=CommentVote,
    foreign_key="comment_id",
)


@dataclass(frozen=True)
class VoteOutcome:
    """Refreshed counters of a target and the caller's resulting vote."""

    target_id: int
    upvotes: int
    downvotes: int
    value: int | None


def _counter_for(value: int) -> str:
    return "upvotes" if value == 1 else "downvotes"


class VoteLedger:
    """Cast, change and clear votes on one kind of target."""

    def __init__(self, target: VoteTarget) -> None:
        self.target = target

    def _get_target_or_404(self, db: Session, target_id: int) -> Config | Comment:
        target = db.get(self.target.model, target_id)
        if target is None:
            raise NotFound(f"{self.target.label.capitalize()} not found")
        return target

    def _lock_target(self, db: Session, target_id: int) -> Config | Comment:
        model = self.target.model
        target = (
            db.query(model)
            .filter(model.id == target_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if target is None:
            raise NotFound(f"{self.target.label.capitalize()} not found")
        return target

    def _find_vote(
        self,
        db: Session,
        voter_id: int,
        target_id: int,
    ) -> ConfigVote | CommentVote | None:
        vote_model = self.target.vote_model
        return (
            db.query(vote_model)
            .filter(
                vote_model.user_id == voter_id,
                getattr(vote_model, self.target.foreign_key) == target_id,
            )
            .first()
        )

    def _shift_counters(self, db: Session, target_id: int, deltas: dict[str, int]) -> None:
        model = self.target.model
        values = {name: getattr(model, name) + delta for name, delta in deltas.items()}
        db.execute(
            update(model)
            .where(model.id == target_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

    def get_user_vote(
        self,
        db: Session,
        voter: User,
        target_id: int,
    ) -> ConfigVote | CommentVote | None:
        """Return the caller's stored vote on a target, or None."""
        self._get_target_or_404(db, target_id)
        return self._find_vote(db, voter.id, target_id)

    def cast_vote(self, db: Session, voter: User, target_id: int, value: int) -> VoteOutcome:
        """Apply ``value`` as the voter's vote on the target.

        Args:
            db: Database session; committed on success, rolled back on store errors.
            voter: Authenticated voter.
            target_id: Identifier of the config or comment.
            value: 1 (upvote), -1 (downvote) or 0 (clear).

        Returns:
            The target's refreshed counters and the caller's resulting vote.

        Raises:
            ValidationError: If ``value`` is not -1, 0 or 1.
            NotFound: If the target does not exist.
            PermissionDenied: If the voter owns the target.
            InternalError: If the transaction fails.
        """
        if isinstance(value, bool) or value not in VALID_VOTE_VALUES:
            raise ValidationError("Invalid vote value. Must be -1, 0, or 1")

        target = self._get_target_or_404(db, target_id)
        if target.user_id == voter.id:
            logger.warning(
                "Rejected self-vote by user %s on %s %s",
                voter.id,
                self.target.label,
                target_id,
            )
            raise PermissionDenied(f"You cannot vote on your own {self.target.label}")

        try:
            target = self._lock_target(db, target_id)
            existing = self._find_vote(db, voter.id, target_id)
            deltas: dict[str, int] = {}
            result: int | None

            if existing is None:
                if value == 0:
                    result = None
                else:
                    db.add(
                        self.target.vote_model(
                            user_id=voter.id,
                            value=value,
                            **{self.target.foreign_key: target_id},
                        )
                    )
                    deltas[_counter_for(value)] = 1
                    result = value
            elif value == 0:
                db.delete(existing)
                deltas[_counter_for(existing.value)] = -1
                result = None
            elif existing.value == value:
                result = value
            else:
                deltas[_counter_for(existing.value)] = -1
                deltas[_counter_for(value)] = 1
                existing.value = value
                result = value

            if deltas:
                db.flush()
                self._shift_counters(db, target_id, deltas)
            db.commit()
        except SQLAlchemyError as err:
            db.rollback()
            logger.error(
                "Vote transaction failed for %s %s",
                self.target.label,
                target_id,
                exc_info=True,
            )
            raise InternalError("Failed to process vote") from err

        db.refresh(target)
        if deltas:
            logger.info(
                "User %s voted %s on %s %s (%d/%d)",
                voter.id,
                value,
                self.target.label,
                target_id,
                target.upvotes,
                target.downvotes,
            )
        return VoteOutcome(
            target_id=target_id,
            upvotes=target.upvotes,
            downvotes=target.downvotes,
            value=result,
        )


config_votes = VoteLedger(CONFIG_TARGET)
comment_votes = VoteLedger(COMMENT_TARGET)
