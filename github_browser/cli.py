"""Command line interface for browsing GitHub."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer

from .config import AppConfig
from .github_client import GitHubRESTClient
from .models import Repository, User
from .viewmodels import FollowersViewModel, PopularReposViewModel, ReposViewModel, UserViewModel

app = typer.Typer(add_completion=False)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _load_config(api_url: Optional[str]) -> AppConfig:
    overrides = {"github_api_url": api_url} if api_url else {}
    return AppConfig.from_env(overrides=overrides)


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _format_repository(repo: Repository) -> str:
    title = repo.full_name or repo.name
    stars = repo.stargazers_count if repo.stargazers_count is not None else "-"
    language = repo.language or "-"
    return f"{title}  ★ {stars}  [{language}]"


def _format_user(user: User) -> list[str]:
    lines = [f"{user.login} (id {user.id})"]
    if user.name:
        lines.append(f"Name:      {user.name}")
    if user.bio:
        lines.append(f"Bio:       {user.bio}")
    if user.public_repos is not None:
        lines.append(f"Repos:     {user.public_repos}")
    if user.followers is not None:
        lines.append(f"Followers: {user.followers}")
    if user.following is not None:
        lines.append(f"Following: {user.following}")
    lines.append(f"Avatar:    {user.avatar_url}")
    return lines


@app.command("user")
def user(
    username: str = typer.Argument(..., help="GitHub login"),
    api_url: Optional[str] = typer.Option(None, help="GitHub REST API base URL"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """Show a user's profile."""

    configure_logging(log_level)
    config = _load_config(api_url)

    async def runner() -> UserViewModel:
        async with GitHubRESTClient(config.github) as client:
            view_model = UserViewModel(client)
            await view_model.fetch_user(username)
            return view_model

    view_model = asyncio.run(runner())
    if view_model.error_message:
        _fail(view_model.error_message)
    if view_model.user is not None:
        for line in _format_user(view_model.user):
            typer.echo(line)


@app.command("repos")
def repos(
    username: str = typer.Argument(..., help="GitHub login"),
    api_url: Optional[str] = typer.Option(None, help="GitHub REST API base URL"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """List a user's public repositories."""

    configure_logging(log_level)
    config = _load_config(api_url)

    async def runner() -> ReposViewModel:
        async with GitHubRESTClient(config.github) as client:
            view_model = ReposViewModel(client)
            await view_model.fetch_repos(username)
            return view_model

    view_model = asyncio.run(runner())
    if view_model.error_message:
        _fail(view_model.error_message)
    if not view_model.repos:
        typer.echo("No repositories.")
    for repo in view_model.repos:
        typer.echo(_format_repository(repo))


@app.command("followers")
def followers(
    username: str = typer.Argument(..., help="GitHub login"),
    api_url: Optional[str] = typer.Option(None, help="GitHub REST API base URL"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """List a user's followers."""

    configure_logging(log_level)
    config = _load_config(api_url)

    async def runner() -> FollowersViewModel:
        async with GitHubRESTClient(config.github) as client:
            view_model = FollowersViewModel(client)
            await view_model.fetch_followers(username)
            return view_model

    view_model = asyncio.run(runner())
    if view_model.error_message:
        _fail(view_model.error_message)
    if not view_model.followers:
        typer.echo("No followers.")
    for follower in view_model.followers:
        typer.echo(follower.login)


@app.command("popular")
def popular(
    pages: int = typer.Option(1, min=1, help="Number of result pages to load"),
    per_page: Optional[int] = typer.Option(None, min=1, max=100, help="Repositories per page"),
    api_url: Optional[str] = typer.Option(None, help="GitHub REST API base URL"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """List the most-starred repositories on GitHub."""

    configure_logging(log_level)
    config = _load_config(api_url)
    page_size = per_page or config.github.search_page_size

    async def runner() -> PopularReposViewModel:
        async with GitHubRESTClient(config.github) as client:
            view_model = PopularReposViewModel(client, per_page=page_size)
            await view_model.fetch_popular_repositories()
            while view_model.current_page < pages and view_model.has_more_pages and not view_model.error_message:
                await view_model.load_next_page()
            return view_model

    view_model = asyncio.run(runner())
    for rank, repo in enumerate(view_model.repositories, start=1):
        typer.echo(f"{rank:>4}. {_format_repository(repo)}")
    if view_model.error_message:
        _fail(view_model.error_message)
    typer.echo(
        f"Showing {len(view_model.repositories)} of {view_model.total_count} repositories "
        f"(page {view_model.current_page})."
    )


__all__ = ["app"]
