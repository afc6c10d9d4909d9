# tests/v1/test_comments.py
"""Tests for comment endpoints."""

from fastapi import status

from confighub.models import Comment, CommentVote


def test_create_and_list_comments(client, test_config, other_auth_token, auth_token) -> None:
    url = f"/api/v1/configs/{test_config.id}/comments"
    response = client.post(url, json={"content": "  Works on Snapdragon  "}, headers=other_auth_token)

    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["content"] == "Works on Snapdragon"
    assert created["user"]["username"] == "voter"
    assert (created["upvotes"], created["downvotes"]) == (0, 0)

    client.post(f"/api/v1/comments/{created['id']}/vote", json={"value": 1}, headers=auth_token)

    response = client.get(url, headers=auth_token)
    data = response.json()
    assert data["pagination"] == {"total": 1, "pages": 1, "page": 1, "limit": 20}
    assert data["comments"][0]["upvotes"] == 1
    assert data["user_votes"] == {str(created["id"]): 1}


def test_list_comments_anonymous_has_no_votes(client, test_comment) -> None:
    response = client.get(f"/api/v1/configs/{test_comment.config_id}/comments")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user_votes"] == {}


def test_comment_too_long(client, test_config, other_auth_token) -> None:
    response = client.post(
        f"/api/v1/configs/{test_config.id}/comments",
        json={"content": "x" * 1001},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "validation_error"


def test_comment_requires_auth(client, test_config) -> None:
    response = client.post(f"/api/v1/configs/{test_config.id}/comments", json={"content": "hi"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_get_comment_with_caller_vote(client, test_comment, auth_token) -> None:
    url = f"/api/v1/comments/{test_comment.id}"
    assert client.get(url).json()["user_vote"] is None

    client.post(f"{url}/vote", json={"value": -1}, headers=auth_token)
    data = client.get(url, headers=auth_token).json()
    assert data["user_vote"] == -1
    assert data["downvotes"] == 1


def test_get_missing_comment(client) -> None:
    response = client.get("/api/v1/comments/31337")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "not_found", "detail": "Comment not found"}


def test_edit_comment_by_author(client, test_comment, other_auth_token, auth_token) -> None:
    url = f"/api/v1/comments/{test_comment.id}"
    response = client.patch(url, json={"content": "Runs at 45fps now"}, headers=other_auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["content"] == "Runs at 45fps now"

    response = client.patch(url, json={"content": "hijacked"}, headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "You don't have permission to edit this comment"


def test_delete_comment_removes_votes(
    client, db_session, test_comment, auth_token, moderator_token
) -> None:
    url = f"/api/v1/comments/{test_comment.id}"
    client.post(f"{url}/vote", json={"value": 1}, headers=auth_token)

    response = client.delete(url, headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = client.delete(url, headers=moderator_token)
    assert response.json() == {"message": "Comment deleted successfully"}
    assert db_session.query(Comment).count() == 0
    assert db_session.query(CommentVote).count() == 0


def test_comments_on_hidden_config_are_not_found(
    client, make_config, make_user, make_game, other_auth_token
) -> None:
    config = make_config(make_user(), make_game(), is_hidden=True)
    url = f"/api/v1/configs/{config.id}/comments"

    assert client.get(url).status_code == status.HTTP_404_NOT_FOUND
    response = client.post(url, json={"content": "hello"}, headers=other_auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
