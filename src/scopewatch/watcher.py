"""Watchers — one registered probe/reaction pair and its last observed value."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from scopewatch._sentinel import UNSET

if TYPE_CHECKING:
    from scopewatch.scope import Scope

Probe = Callable[["Scope"], Any]
Reaction = Callable[[Any, Any, "Scope"], None]


def noop(new_value: Any, old_value: Any, scope: Scope) -> None:
    """Default reaction."""


class Watcher:
    """A probe, the reaction to run when its value changes, and the baseline.

    ``last`` is owned by the convergence loop: it starts as UNSET and is
    only replaced when a sweep detects a change.
    """

    __slots__ = ("probe", "reaction", "deep", "last")

    def __init__(self, probe: Probe, reaction: Reaction = noop, deep: bool = False) -> None:
        self.probe = probe
        self.reaction = reaction
        self.deep = deep
        self.last: Any = UNSET

    @property
    def evaluated(self) -> bool:
        """Has the probe ever produced a value?"""
        return self.last is not UNSET

    @property
    def name(self) -> str:
        return getattr(self.probe, "__name__", repr(self.probe))

    def __repr__(self) -> str:
        mode = "deep" if self.deep else "ref"
        state = f"last={self.last!r}" if self.evaluated else "unevaluated"
        return f"Watcher({self.name}, {mode}, {state})"
