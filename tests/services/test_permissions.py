# tests/services/test_permissions.py
"""Tests for the pure authorization predicates."""

from datetime import UTC, datetime, timedelta

import pytest

from confighub.core.errors import PermissionDenied
from confighub.models import Role, User
from confighub.services import permissions
from confighub.services.permissions import DeletionMode

OWNER = 1
STRANGER = 2


@pytest.mark.parametrize(
    ("role", "user_id", "expected"),
    [
        (Role.USER, OWNER, True),
        (Role.USER, STRANGER, False),
        (Role.MODERATOR, STRANGER, True),
        (Role.ADMIN, STRANGER, True),
    ],
)
def test_edit_and_revert_rules(role, user_id, expected) -> None:
    assert permissions.can_edit_content(role, OWNER, user_id) is expected
    assert permissions.can_revert_config(role, OWNER, user_id) is expected


@pytest.mark.parametrize(
    ("role", "user_id", "expected"),
    [
        (Role.USER, OWNER, True),
        (Role.USER, STRANGER, False),
        (Role.MODERATOR, STRANGER, False),
        (Role.ADMIN, STRANGER, True),
    ],
)
def test_delete_rule(role, user_id, expected) -> None:
    assert permissions.can_delete_content(role, OWNER, user_id) is expected


def test_deletion_policy_dispatch() -> None:
    assert permissions.deletion_policy(Role.ADMIN, OWNER, STRANGER) is DeletionMode.HARD
    assert permissions.deletion_policy(Role.ADMIN, OWNER, OWNER) is DeletionMode.HARD
    assert permissions.deletion_policy(Role.USER, OWNER, OWNER) is DeletionMode.SOFT
    assert permissions.deletion_policy(Role.MODERATOR, OWNER, OWNER) is DeletionMode.SOFT


@pytest.mark.parametrize("role", [Role.USER, Role.MODERATOR])
def test_deletion_policy_rejects_non_owner(role) -> None:
    with pytest.raises(PermissionDenied):
        permissions.deletion_policy(role, OWNER, STRANGER)


def test_read_rules() -> None:
    assert permissions.can_read_config(None, False)
    assert not permissions.can_read_config(None, True, OWNER, None)
    assert permissions.can_read_config(Role.USER, True, OWNER, OWNER)
    assert not permissions.can_read_config(Role.USER, True, OWNER, STRANGER)
    assert permissions.can_read_config(Role.MODERATOR, True, OWNER, STRANGER)
    assert permissions.can_read_config(Role.ADMIN, True, OWNER, STRANGER)


def test_moderation_hierarchy() -> None:
    assert permissions.can_moderate_user(Role.ADMIN, Role.MODERATOR)
    assert permissions.can_moderate_user(Role.ADMIN, Role.USER)
    assert not permissions.can_moderate_user(Role.ADMIN, Role.ADMIN)
    assert permissions.can_moderate_user(Role.MODERATOR, Role.USER)
    assert not permissions.can_moderate_user(Role.MODERATOR, Role.MODERATOR)
    assert not permissions.can_moderate_user(Role.USER, Role.USER)


def test_suspension_limits() -> None:
    assert permissions.can_suspend_user(Role.ADMIN, 24 * 365)
    assert permissions.can_suspend_user(Role.MODERATOR, 24)
    assert not permissions.can_suspend_user(Role.MODERATOR, 25)
    assert not permissions.can_suspend_user(Role.USER, 1)


def test_is_suspended_handles_naive_timestamps() -> None:
    now = datetime(2026, 1, 1, 12, tzinfo=UTC)
    user = User(username="x", suspended_until=datetime(2026, 1, 1, 13))
    assert permissions.is_suspended(user, now)
    assert not permissions.is_suspended(user, now + timedelta(hours=2))
    assert not permissions.is_suspended(User(username="y"), now)


def test_ensure_active_rejects_suspended() -> None:
    user = User(username="x", suspended_until=datetime.now(UTC) + timedelta(hours=1))
    with pytest.raises(PermissionDenied, match="suspended"):
        permissions.ensure_active(user)
