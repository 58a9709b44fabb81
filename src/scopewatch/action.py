"""Actions and transactions — batched scope mutations.

Wrapping mutations in an @action(scope) or ``with transaction(scope)``
defers the digest until the outermost batch exits, so reactions see all
the changes at once instead of one digest per mutation.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, ParamSpec, TypeVar

if TYPE_CHECKING:
    from scopewatch.scope import Scope

P = ParamSpec("P")
R = TypeVar("R")


def action(scope: Scope) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator factory: run fn through ``scope.apply``.

    Usage:
        @action(scope)
        def rename(first, last):
            scope.first = first
            scope.last = last
            # one digest after both are set
    """

    def decorate(fn: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            return scope.apply(fn, *args, **kwargs)

        return wrapper

    return decorate


@contextmanager
def transaction(scope: Scope):
    """Context manager for batching mutations.

    Usage:
        with transaction(scope):
            scope.a = 1
            scope.b = 2
            # digest runs here, after both are set
    """
    scope._begin_batch()
    try:
        yield scope
    finally:
        scope._end_batch()
