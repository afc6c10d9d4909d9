# src/confighub/services/__init__.py
"""Business logic services for ConfigHub."""

from .votes import VoteLedger, VoteOutcome, comment_votes, config_votes

__all__ = [
    "VoteLedger",
    "VoteOutcome",
    "comment_votes",
    "config_votes",
]
