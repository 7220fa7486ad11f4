"""
Re-entrancy Guard

One mutual-exclusion flag per distributor instance. A guarded operation
entered while another guarded operation of the same instance is still
running (for example from a receive hook during a transfer) is rejected.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar

from core.schemas.errors import ReentrantCallException


F = TypeVar("F", bound=Callable[..., Any])


class ReentrancyGuard:
    def __init__(self) -> None:
        self._active: Optional[str] = None

    @property
    def locked(self) -> bool:
        return self._active is not None

    @property
    def active_operation(self) -> Optional[str]:
        return self._active

    @contextmanager
    def enter(self, operation: str) -> Iterator[None]:
        if self._active is not None:
            raise ReentrantCallException(operation, self._active)
        self._active = operation
        try:
            yield
        finally:
            self._active = None


def non_reentrant(method: F) -> F:
    """Run a method under its instance's `_guard`."""

    @functools.wraps(method)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        with self._guard.enter(method.__name__):
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]
