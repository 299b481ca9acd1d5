"""Domain models returned by the GitHub REST API."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from pydantic import TypeAdapter


@dataclass(slots=True, frozen=True)
class User:
    """A GitHub account as returned by ``/users/{username}`` and follower listings."""

    id: int
    login: str
    avatar_url: str
    bio: str | None = None
    name: str | None = None
    public_repos: int | None = None
    followers: int | None = None
    following: int | None = None

    def to_api(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class RepositoryOwner:
    """Reduced user reference embedded in repository payloads."""

    login: str
    id: int
    avatar_url: str


@dataclass(slots=True, frozen=True)
class Repository:
    """Normalized representation of a GitHub repository."""

    id: int
    name: str
    # "public" / "private" / "internal"; kept as sent by the server.
    visibility: str
    full_name: str | None = None
    description: str | None = None
    language: str | None = None
    stargazers_count: int | None = None
    forks_count: int | None = None
    watchers_count: int | None = None
    open_issues_count: int | None = None
    owner: RepositoryOwner | None = None

    def to_api(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class SearchResponse:
    """One page of ``/search/repositories`` results."""

    total_count: int
    incomplete_results: bool
    items: list[Repository] = field(default_factory=list)

    def to_api(self) -> dict[str, Any]:
        return asdict(self)


_USER = TypeAdapter(User)
_USERS = TypeAdapter(list[User])
_REPOSITORIES = TypeAdapter(list[Repository])
_SEARCH_RESPONSE = TypeAdapter(SearchResponse)


# Response bodies are validated in strict mode: "1" is not an int and 50.0 is
# not a count. Unknown keys are ignored. Failures raise pydantic.ValidationError,
# including bodies that are not JSON at all.


def decode_user(body: str | bytes) -> User:
    return _USER.validate_json(body, strict=True)


def decode_users(body: str | bytes) -> list[User]:
    return _USERS.validate_json(body, strict=True)


def decode_repositories(body: str | bytes) -> list[Repository]:
    return _REPOSITORIES.validate_json(body, strict=True)


def decode_search_response(body: str | bytes) -> SearchResponse:
    return _SEARCH_RESPONSE.validate_json(body, strict=True)


__all__ = [
    "Repository",
    "RepositoryOwner",
    "SearchResponse",
    "User",
    "decode_repositories",
    "decode_search_response",
    "decode_user",
    "decode_users",
]
