"""scopewatch error hierarchy.

All scopewatch-specific errors inherit from ScopeError for easy catching.
Reaction errors are deliberately absent: they propagate unwrapped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scopewatch.watcher import Watcher


class ScopeError(Exception):
    """Base error for all scopewatch operations."""


class ProbeEvaluationError(ScopeError):
    """A probe raised while being evaluated.

    Recovered inside the sweep; handed to the scope's ``on_probe_error``
    handler or logged, never raised out of ``settle``.
    """

    def __init__(self, watcher: Watcher, cause: BaseException) -> None:
        super().__init__(f"probe {watcher.name} raised {type(cause).__name__}: {cause}")
        self.watcher = watcher
        self.__cause__ = cause


class ConvergenceExceededError(ScopeError):
    """The iteration ceiling was reached while the scope was still dirty."""

    def __init__(self, ttl: int) -> None:
        super().__init__(f"{ttl} digest iterations reached")
        self.ttl = ttl
