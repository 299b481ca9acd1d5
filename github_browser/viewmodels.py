"""Observable view models holding loading/error/data state for each screen."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Awaitable, Callable, Generic, TypeVar

from .github_client import GitHubError, GitHubService
from .models import Repository, SearchResponse, User
from .state import UNEXPECTED_ERROR_MESSAGE, Observable, PaginationState, ResourceState

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 30


def error_message_for(exc: Exception) -> str:
    """Translate a failure into the message shown to the user."""

    if isinstance(exc, GitHubError):
        return exc.message
    LOGGER.exception("Unexpected error while talking to GitHub")
    return UNEXPECTED_ERROR_MESSAGE


class ResourceViewModel(Observable[ResourceState[T]], Generic[T]):
    """Loads one resource at a time and keeps the last good value on failure."""

    def __init__(self, service: GitHubService) -> None:
        super().__init__(ResourceState())
        self._service = service

    @property
    def data(self) -> T | None:
        return self.state.data

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def error_message(self) -> str | None:
        return self.state.error_message

    def clear_error(self) -> None:
        self._publish(replace(self.state, error_message=None))

    async def _load(self, request: Callable[[], Awaitable[T]]) -> None:
        if self.state.is_loading:
            LOGGER.debug("%s: fetch already in flight, ignoring", type(self).__name__)
            return

        self._publish(replace(self.state, is_loading=True, error_message=None))
        try:
            try:
                data = await request()
            except Exception as exc:
                self._publish(replace(self.state, error_message=error_message_for(exc)))
            else:
                self._publish(replace(self.state, data=data, error_message=None))
        finally:
            self._publish(replace(self.state, is_loading=False))


class UserViewModel(ResourceViewModel[User]):
    @property
    def user(self) -> User | None:
        return self.state.data

    async def fetch_user(self, username: str) -> None:
        await self._load(lambda: self._service.fetch_user(username))


class ReposViewModel(ResourceViewModel[list[Repository]]):
    @property
    def repos(self) -> list[Repository]:
        return self.state.data or []

    async def fetch_repos(self, username: str) -> None:
        await self._load(lambda: self._service.fetch_repos(username))


class FollowersViewModel(ResourceViewModel[list[User]]):
    @property
    def followers(self) -> list[User]:
        return self.state.data or []

    async def fetch_followers(self, username: str) -> None:
        await self._load(lambda: self._service.fetch_followers(username))


class PopularReposViewModel(Observable[PaginationState]):
    """Accumulates pages of the most-starred repositories.

    Page 1 replaces the list, later pages are appended. A failed page keeps
    whatever was loaded before it so the caller can simply retry.
    """

    def __init__(self, service: GitHubService, per_page: int = DEFAULT_PAGE_SIZE) -> None:
        super().__init__(PaginationState())
        self._service = service
        self._per_page = per_page
        # Bumped by refresh(); fetches started under an older value are stale.
        self._generation = 0

    @property
    def per_page(self) -> int:
        return self._per_page

    @property
    def repositories(self) -> tuple[Repository, ...]:
        return self.state.repositories

    @property
    def current_page(self) -> int:
        return self.state.current_page

    @property
    def has_more_pages(self) -> bool:
        return self.state.has_more_pages

    @property
    def total_count(self) -> int:
        return self.state.total_count

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def error_message(self) -> str | None:
        return self.state.error_message

    async def fetch_popular_repositories(self, page: int = 1) -> None:
        if self.state.is_loading:
            LOGGER.debug("Popular repositories fetch already in flight, ignoring page %s", page)
            return

        generation = self._generation
        self._publish(replace(self.state, is_loading=True, error_message=None))
        try:
            try:
                response = await self._service.search_popular_repositories(page, self._per_page)
            except Exception as exc:
                message = error_message_for(exc)
                if generation == self._generation:
                    self._publish(replace(self.state, error_message=message))
            else:
                if generation == self._generation:
                    self._apply_page(page, response)
                else:
                    LOGGER.debug("Discarding page %s loaded before a refresh", page)
        finally:
            self._publish(replace(self.state, is_loading=False))

        # refresh() ran while this fetch was in flight; its page 1 request was skipped.
        if generation != self._generation:
            await self.fetch_popular_repositories(1)

    def _apply_page(self, page: int, response: SearchResponse) -> None:
        if page == 1:
            repositories = tuple(response.items)
        else:
            repositories = self.state.repositories + tuple(response.items)
        LOGGER.debug(
            "Loaded page %s with %s repositories (%s/%s)",
            page,
            len(response.items),
            len(repositories),
            response.total_count,
        )
        self._publish(
            replace(
                self.state,
                repositories=repositories,
                current_page=page,
                total_count=response.total_count,
                has_more_pages=len(repositories) < response.total_count,
            )
        )

    async def load_next_page(self) -> None:
        if not self.state.has_more_pages or self.state.is_loading:
            return
        await self.fetch_popular_repositories(self.state.current_page + 1)

    async def refresh(self) -> None:
        """Start over from page 1.

        A fetch already in flight is superseded: its result is dropped and it
        requests page 1 itself once it completes.
        """

        self._generation += 1
        self._publish(replace(self.state, current_page=1, has_more_pages=True, repositories=()))
        await self.fetch_popular_repositories(1)

    def clear_error(self) -> None:
        self._publish(replace(self.state, error_message=None))


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "FollowersViewModel",
    "PopularReposViewModel",
    "ReposViewModel",
    "ResourceViewModel",
    "UserViewModel",
    "error_message_for",
]
