"""Application configuration helpers."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field, PositiveInt


DEFAULT_API_URL = "https://api.github.com"


class GitHubSettings(BaseModel):
    """Configuration options for the GitHub REST API."""

    api_url: str = Field(default=DEFAULT_API_URL, description="Base URL of the GitHub REST API.")
    request_timeout: float = Field(default=30.0, ge=1.0, description="Timeout for a single HTTP request in seconds.")
    user_agent: str = Field(default="github-browser", description="User-Agent header sent with every request.")
    search_page_size: PositiveInt = Field(
        default=30, le=100, description="Number of repositories requested per search page."
    )


class AppConfig(BaseModel):
    """Root configuration container."""

    github: GitHubSettings = Field(default_factory=GitHubSettings)

    @classmethod
    def from_env(cls, env: dict[str, str] | None = None, overrides: dict[str, Any] | None = None) -> "AppConfig":
        """Construct a configuration object from environment variables."""

        env = env if env is not None else os.environ
        overrides = overrides or {}

        github = GitHubSettings(
            api_url=overrides.get("github_api_url") or env.get("GITHUB_API_URL") or DEFAULT_API_URL,
            request_timeout=float(overrides.get("github_request_timeout") or env.get("GITHUB_REQUEST_TIMEOUT", 30.0)),
            user_agent=overrides.get("github_user_agent") or env.get("GITHUB_USER_AGENT") or "github-browser",
            search_page_size=int(overrides.get("github_search_page_size") or env.get("GITHUB_SEARCH_PAGE_SIZE", 30)),
        )

        return cls(github=github)


__all__ = ["AppConfig", "GitHubSettings", "DEFAULT_API_URL"]
