# tests/services/test_community_services.py
"""Service-level tests for comments, games, profiles and moderation."""

from datetime import timedelta

import pytest

from confighub.core.errors import NotFound, PermissionDenied, ValidationError
from confighub.db.time import utcnow
from confighub.models import Comment, CommentVote, Role
from confighub.schemas.game import GameCreate
from confighub.schemas.user import UserModerationUpdate
from confighub.services import comment_service, game_service, permissions, user_service
from confighub.services.votes import comment_votes, config_votes


def test_comment_is_trimmed(db_session, test_config, other_user) -> None:
    comment = comment_service.create_comment(db_session, test_config.id, other_user, "  nice  ")
    assert comment.content == "nice"
    assert comment.user.username == "voter"


@pytest.mark.parametrize("content", ["", "   ", "x" * 1001])
def test_comment_length_rules(db_session, test_config, other_user, content) -> None:
    with pytest.raises(ValidationError):
        comment_service.create_comment(db_session, test_config.id, other_user, content)
    assert db_session.query(Comment).count() == 0


def test_comment_on_missing_config(db_session, other_user) -> None:
    with pytest.raises(NotFound):
        comment_service.create_comment(db_session, 404, other_user, "hello")


def test_list_comments_with_viewer_votes(db_session, test_config, test_comment, test_user) -> None:
    newer = comment_service.create_comment(db_session, test_config.id, test_user, "thanks")
    comment_votes.cast_vote(db_session, test_user, test_comment.id, 1)

    comments, total, user_votes = comment_service.list_comments(
        db_session, test_config.id, viewer=test_user
    )

    assert total == 2
    assert [c.id for c in comments] == [newer.id, test_comment.id]
    assert user_votes == {test_comment.id: 1}


def test_comment_edit_and_delete_rules(
    db_session, test_comment, test_user, other_user, moderator
) -> None:
    with pytest.raises(PermissionDenied):
        comment_service.update_comment(db_session, test_comment.id, test_user, "mine now")

    updated = comment_service.update_comment(db_session, test_comment.id, other_user, "edited")
    assert updated.content == "edited"

    comment_votes.cast_vote(db_session, test_user, test_comment.id, -1)
    comment_service.delete_comment(db_session, test_comment.id, moderator)
    assert db_session.query(Comment).count() == 0
    assert db_session.query(CommentVote).count() == 0


def test_create_game_returns_existing_on_duplicate(db_session, test_game) -> None:
    game, created = game_service.create_game(
        db_session, GameCreate(steam_id=test_game.steam_id, name="Other")
    )
    assert created is False
    assert game.id == test_game.id

    game, created = game_service.create_game(
        db_session, GameCreate(steam_id="1245620", name=" Sekiro ")
    )
    assert created is True
    assert game.name == "Sekiro"


def test_get_game_counts_visible_configs(
    db_session, test_game, make_config, make_user
) -> None:
    make_config(make_user(), test_game)
    make_config(make_user(), test_game, is_hidden=True)

    game, config_count = game_service.get_game(db_session, test_game.id)
    assert game.id == test_game.id
    assert config_count == 1


def test_list_games_by_name(db_session, make_game) -> None:
    make_game("Zelda")
    make_game("Asteroids")
    games, total = game_service.list_games(db_session)
    assert [g.name for g in games] == ["Asteroids", "Zelda"]

    games, total = game_service.list_games(db_session, query="ZEL")
    assert total == 1


def test_profile_hides_hidden_configs_from_strangers(
    db_session, test_user, make_config, make_game, other_user, admin
) -> None:
    make_config(test_user, make_game())
    make_config(test_user, make_game(), is_hidden=True)

    _, configs = user_service.get_profile(db_session, "owner", None)
    assert len(configs) == 1
    _, configs = user_service.get_profile(db_session, "owner", other_user)
    assert len(configs) == 1
    _, configs = user_service.get_profile(db_session, "owner", test_user)
    assert len(configs) == 2
    _, configs = user_service.get_profile(db_session, "owner", admin)
    assert len(configs) == 2

    with pytest.raises(NotFound):
        user_service.get_profile(db_session, "nobody")


def test_admin_stats(db_session, test_config, other_user) -> None:
    config_votes.cast_vote(db_session, other_user, test_config.id, -1)
    stats = user_service.admin_stats(db_session)

    assert stats["users"] == {"total": 2, "new": 2}
    assert stats["configs"] == {"total": 1, "new": 1}
    assert stats["votes"] == {"upvotes": 0, "downvotes": 1, "total": 1}


def test_moderator_suspension_limits(db_session, moderator, other_user) -> None:
    with pytest.raises(PermissionDenied):
        user_service.moderate_user(
            db_session, moderator, other_user.id, UserModerationUpdate(suspend_hours=48)
        )

    user = user_service.moderate_user(
        db_session, moderator, other_user.id, UserModerationUpdate(suspend_hours=12)
    )
    assert permissions.is_suspended(user)

    user = user_service.moderate_user(
        db_session, moderator, other_user.id, UserModerationUpdate(suspend_hours=0)
    )
    assert user.suspended_until is None


def test_only_admins_change_roles(db_session, moderator, admin, other_user) -> None:
    with pytest.raises(PermissionDenied):
        user_service.moderate_user(
            db_session, moderator, other_user.id, UserModerationUpdate(role=Role.MODERATOR)
        )
    with pytest.raises(PermissionDenied):
        user_service.moderate_user(
            db_session, moderator, admin.id, UserModerationUpdate(suspend_hours=1)
        )

    user = user_service.moderate_user(
        db_session, admin, other_user.id, UserModerationUpdate(role=Role.MODERATOR)
    )
    assert user.role is Role.MODERATOR


def test_list_users_query(db_session, make_user) -> None:
    make_user(username="alice")
    make_user(username="bob")
    users, total = user_service.list_users(db_session, query="ali")
    assert total == 1
    assert users[0].username == "alice"


def test_suspension_expires(db_session, make_user) -> None:
    user = make_user(suspended_until=utcnow() - timedelta(minutes=1))
    assert not permissions.is_suspended(user)
