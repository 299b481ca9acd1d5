from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from github_browser.models import (
    RepositoryOwner,
    decode_repositories,
    decode_search_response,
    decode_user,
    decode_users,
)


def _full_repository_payload() -> dict:
    return {
        "id": 1296269,
        "name": "Hello-World",
        "full_name": "octocat/Hello-World",
        "description": "This your first repo!",
        "language": "Python",
        "visibility": "public",
        "stargazers_count": 80,
        "forks_count": 9,
        "watchers_count": 80,
        "open_issues_count": 0,
        "owner": {"login": "octocat", "id": 1, "avatar_url": "https://github.com/images/error/octocat_happy.gif"},
    }


def test_decode_user_leaves_missing_optionals_empty():
    body = json.dumps({"id": 1, "login": "octocat", "avatar_url": "u", "followers": 100, "following": 50})

    user = decode_user(body)

    assert user.id == 1
    assert user.login == "octocat"
    assert user.avatar_url == "u"
    assert user.bio is None
    assert user.name is None
    assert user.public_repos is None
    assert user.followers == 100
    assert user.following == 50


def test_decode_user_ignores_unknown_fields():
    body = json.dumps(
        {
            "id": 7,
            "login": "hubot",
            "avatar_url": "https://avatars.githubusercontent.com/u/7",
            "public_repos": 3,
            "site_admin": False,
            "type": "User",
        }
    )

    user = decode_user(body)

    assert user.public_repos == 3
    assert not hasattr(user, "site_admin")


def test_decode_user_accepts_explicit_nulls():
    body = b'{"id": 2, "login": "nobody", "avatar_url": "a", "bio": null, "name": null}'

    user = decode_user(body)

    assert user.bio is None
    assert user.name is None


def test_repository_round_trip_preserves_every_field():
    payload = _full_repository_payload()

    [repo] = decode_repositories(json.dumps([payload]))

    assert repo.full_name == "octocat/Hello-World"
    assert repo.stargazers_count == 80
    assert repo.owner == RepositoryOwner(
        login="octocat", id=1, avatar_url="https://github.com/images/error/octocat_happy.gif"
    )
    assert repo.to_api() == payload
    assert decode_repositories(json.dumps([repo.to_api()])) == [repo]


def test_repository_with_only_required_fields():
    [repo] = decode_repositories(json.dumps([{"id": 5, "name": "minimal-repo", "visibility": "private"}]))

    assert repo.id == 5
    assert repo.name == "minimal-repo"
    assert repo.visibility == "private"
    assert repo.full_name is None
    assert repo.description is None
    assert repo.language is None
    assert repo.stargazers_count is None
    assert repo.forks_count is None
    assert repo.watchers_count is None
    assert repo.open_issues_count is None
    assert repo.owner is None


def test_repository_missing_required_field_is_rejected():
    with pytest.raises(ValidationError):
        decode_repositories(json.dumps([{"id": 5, "name": "no-visibility"}]))


def test_user_with_wrong_type_is_rejected():
    with pytest.raises(ValidationError):
        decode_user(json.dumps({"id": "not-a-number", "login": "octocat", "avatar_url": "u"}))


@pytest.mark.parametrize(
    "overrides",
    [
        {"id": "1"},
        {"followers": "100"},
        {"following": 50.0},
        {"login": 42},
    ],
)
def test_decode_user_does_not_coerce_types(overrides):
    payload = {"id": 1, "login": "octocat", "avatar_url": "u", "followers": 100, "following": 50}
    payload.update(overrides)

    with pytest.raises(ValidationError):
        decode_user(json.dumps(payload))


def test_search_response_flag_must_be_boolean():
    body = json.dumps({"total_count": 1, "incomplete_results": "false", "items": []})

    with pytest.raises(ValidationError):
        decode_search_response(body)


def test_non_json_body_is_rejected():
    with pytest.raises(ValidationError):
        decode_user(b"<html>oops</html>")


def test_search_response_keeps_item_order():
    body = json.dumps(
        {
            "total_count": 3,
            "incomplete_results": True,
            "items": [
                {"id": 3, "name": "c", "visibility": "public"},
                {"id": 1, "name": "a", "visibility": "public"},
                {"id": 2, "name": "b", "visibility": "public"},
            ],
        }
    )

    response = decode_search_response(body)

    assert response.total_count == 3
    assert response.incomplete_results is True
    assert [item.id for item in response.items] == [3, 1, 2]


def test_decode_users_accepts_empty_array():
    assert decode_users(b"[]") == []
