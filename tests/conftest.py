from __future__ import annotations

import asyncio
from typing import Any, Callable

import pytest

from github_browser.models import Repository, SearchResponse, User


def make_user(index: int = 1, login: str | None = None) -> User:
    return User(
        id=index,
        login=login or f"user{index}",
        avatar_url=f"https://avatars.githubusercontent.com/u/{index}",
        name=f"User {index}",
        followers=100,
        following=50,
    )


def make_repo(index: int) -> Repository:
    return Repository(
        id=index,
        name=f"repo{index}",
        full_name=f"user/repo{index}",
        visibility="public",
        stargazers_count=index * 100,
    )


def make_page(start: int, count: int, total_count: int) -> SearchResponse:
    return SearchResponse(
        total_count=total_count,
        incomplete_results=False,
        items=[make_repo(i) for i in range(start, start + count)],
    )


class FakeGitHubService:
    """In-memory stand-in for :class:`GitHubRESTClient`.

    Each ``*_result`` attribute is either a value to return, an exception to
    raise, or a callable producing one of those from the call arguments.
    Setting ``gate`` holds every call until the event is set.
    """

    def __init__(self) -> None:
        self.user_result: Any = make_user()
        self.repos_result: Any = [make_repo(1), make_repo(2)]
        self.followers_result: Any = [make_user(2), make_user(3)]
        self.search_result: Any = lambda page, per_page: make_page((page - 1) * per_page + 1, per_page, 100)
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    async def _respond(self, name: str, result: Any, *args: Any) -> Any:
        self.calls.append((name, args))
        if self.gate is not None:
            await self.gate.wait()
        if callable(result):
            result = result(*args)
        if isinstance(result, BaseException):
            raise result
        return result

    async def fetch_user(self, username: str) -> User:
        return await self._respond("fetch_user", self.user_result, username)

    async def fetch_repos(self, username: str) -> list[Repository]:
        return await self._respond("fetch_repos", self.repos_result, username)

    async def fetch_followers(self, username: str) -> list[User]:
        return await self._respond("fetch_followers", self.followers_result, username)

    async def search_popular_repositories(self, page: int, per_page: int) -> SearchResponse:
        return await self._respond("search", self.search_result, page, per_page)


@pytest.fixture
def service() -> FakeGitHubService:
    return FakeGitHubService()


def pages_from(responses: list[Any]) -> Callable[[int, int], Any]:
    """Serve ``responses`` in call order, one per search call."""

    queue = list(responses)

    def next_response(page: int, per_page: int) -> Any:
        return queue.pop(0)

    return next_response
