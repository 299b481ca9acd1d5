"""HTTP client for interacting with GitHub's REST API."""

from __future__ import annotations

import logging
from typing import Callable, Protocol, TypeVar

import httpx
from pydantic import ValidationError

from .config import GitHubSettings
from .models import (
    Repository,
    SearchResponse,
    User,
    decode_repositories,
    decode_search_response,
    decode_user,
    decode_users,
)

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

POPULAR_QUERY = "stars:>1"


class GitHubError(RuntimeError):
    """Base class for every failure surfaced by :class:`GitHubRESTClient`.

    ``message`` is user facing and shown verbatim by the view models.
    """

    default_message = "GitHub request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidURLError(GitHubError):
    default_message = "Invalid URL"


class InvalidResponseError(GitHubError):
    default_message = "Invalid server response"

    def __init__(self, status_code: int | None = None) -> None:
        super().__init__()
        self.status_code = status_code


class InvalidDataError(GitHubError):
    default_message = "Invalid data"


class NotFoundError(GitHubError):
    default_message = "User or resource not found"


class ForbiddenError(GitHubError):
    default_message = "Access forbidden"


class RateLimitExceededError(GitHubError):
    default_message = "GitHub API rate limit exceeded. Try again later"


class NetworkError(GitHubError):
    """Transport level failure; the message is the underlying description."""


class GitHubService(Protocol):
    """Operations the view models need from a GitHub backend."""

    async def fetch_user(self, username: str) -> User:
        ...

    async def fetch_repos(self, username: str) -> list[Repository]:
        ...

    async def fetch_followers(self, username: str) -> list[User]:
        ...

    async def search_popular_repositories(self, page: int, per_page: int) -> SearchResponse:
        ...


class GitHubRESTClient:
    """Light-weight REST client: one GET per call, no retries, no caching.

    The client holds no per-call state and may be shared by any number of
    concurrent callers.
    """

    def __init__(self, settings: GitHubSettings, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._base_url = settings.api_url.rstrip("/")
        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": settings.user_agent,
        }
        self._client = client or httpx.AsyncClient(
            headers=self._headers,
            timeout=settings.request_timeout,
        )
        self._owns_client = client is None

    async def __aenter__(self) -> "GitHubRESTClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_user(self, username: str) -> User:
        return await self._get(f"{self._base_url}/users/{username}", decode_user)

    async def fetch_repos(self, username: str) -> list[Repository]:
        return await self._get(f"{self._base_url}/users/{username}/repos", decode_repositories)

    async def fetch_followers(self, username: str) -> list[User]:
        return await self._get(f"{self._base_url}/users/{username}/followers", decode_users)

    async def search_popular_repositories(self, page: int, per_page: int) -> SearchResponse:
        endpoint = (
            f"{self._base_url}/search/repositories"
            f"?q={POPULAR_QUERY}&sort=stars&order=desc&per_page={per_page}&page={page}"
        )
        return await self._get(endpoint, decode_search_response)

    async def _get(self, endpoint: str, decode: Callable[[bytes], T]) -> T:
        url = _parse_url(endpoint)

        LOGGER.debug("GET %s", url)
        try:
            response = await self._client.get(url, headers=self._headers)
        except httpx.RequestError as exc:
            LOGGER.warning("GitHub request error for %s: %r", url, exc)
            raise NetworkError(str(exc) or type(exc).__name__) from exc

        _raise_for_status(response)

        try:
            return decode(response.content)
        except ValidationError as exc:
            LOGGER.warning("GitHub body for %s is not valid JSON of the expected shape: %s", url, exc)
            raise InvalidDataError() from exc


def _parse_url(endpoint: str) -> httpx.URL:
    try:
        url = httpx.URL(endpoint)
    except httpx.InvalidURL as exc:
        raise InvalidURLError() from exc
    if url.scheme not in {"http", "https"} or not url.host:
        raise InvalidURLError()
    return url


def _raise_for_status(response: httpx.Response) -> None:
    status = response.status_code
    if 200 <= status < 300:
        return
    LOGGER.warning("GitHub HTTP %s for %s", status, response.request.url)
    if status == 404:
        raise NotFoundError()
    if status == 403:
        raise ForbiddenError()
    if status == 429:
        raise RateLimitExceededError()
    raise InvalidResponseError(status)


__all__ = [
    "ForbiddenError",
    "GitHubError",
    "GitHubRESTClient",
    "GitHubService",
    "InvalidDataError",
    "InvalidResponseError",
    "InvalidURLError",
    "NetworkError",
    "NotFoundError",
    "RateLimitExceededError",
]
