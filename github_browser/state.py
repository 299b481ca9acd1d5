"""Immutable state snapshots and the observer plumbing shared by view models."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from .models import Repository

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


@dataclass(slots=True, frozen=True)
class ResourceState(Generic[T]):
    """State of a view model that loads a single resource."""

    data: T | None = None
    is_loading: bool = False
    error_message: str | None = None


@dataclass(slots=True, frozen=True)
class PaginationState:
    """State of the popular repositories browsing session."""

    repositories: tuple[Repository, ...] = ()
    current_page: int = 1
    has_more_pages: bool = True
    total_count: int = 0
    is_loading: bool = False
    error_message: str | None = None


class Observable(Generic[S]):
    """Holds a state snapshot and notifies callbacks whenever it is replaced.

    Each call to :meth:`_publish` is one discrete step: observers never see a
    partially updated snapshot.
    """

    def __init__(self, initial: S) -> None:
        self._state = initial
        self.callbacks: list[Callable[[S], None]] = []

    @property
    def state(self) -> S:
        return self._state

    def subscribe(self, callback: Callable[[S], None]) -> Callable[[], None]:
        """Register ``callback`` and return a function that removes it."""

        self.callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self.callbacks:
                self.callbacks.remove(callback)

        return unsubscribe

    def _publish(self, state: S) -> None:
        self._state = state
        for cb in list(self.callbacks):
            try:
                cb(state)
            except Exception:
                LOGGER.warning("State observer %r failed", cb, exc_info=True)


__all__ = ["Observable", "PaginationState", "ResourceState", "UNEXPECTED_ERROR_MESSAGE"]
