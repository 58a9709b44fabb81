"""Scope — a value bag whose watchers are re-checked by dirty-checking.

Callers set arbitrary attributes on a Scope, register watchers with
``watch()``, and call ``settle()`` (or ``digest()``) to run sweeps until no
probe reports a change. Reactions may write to the scope, which is what lets
one watcher's reaction feed another watcher's probe within a single run.

Attributes starting with an underscore are reserved for the loop's state.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, ParamSpec, TypeVar

from scopewatch._errors import ConvergenceExceededError, ProbeEvaluationError, ScopeError
from scopewatch._sentinel import UNSET
from scopewatch.equality import are_equal
from scopewatch.result import SettleResult
from scopewatch.watcher import Probe, Reaction, Watcher, noop

logger = logging.getLogger("scopewatch.scope")

P = ParamSpec("P")
R = TypeVar("R")

DEFAULT_TTL = 10

ProbeErrorHandler = Callable[[ProbeEvaluationError], None]


class Scope:
    """Container of user fields plus the ordered list of watchers.

    Usage:
        scope = Scope()
        scope.some_value = "a"
        scope.counter = 0

        scope.watch(
            lambda s: s.some_value,
            lambda new, old, s: setattr(s, "counter", s.counter + 1),
        )
        scope.digest()   # counter == 1
        scope.some_value = "b"
        scope.digest()   # counter == 2
        scope.digest()   # counter == 2 — nothing changed
    """

    def __init__(self, *, ttl: int = DEFAULT_TTL, on_probe_error: ProbeErrorHandler | None = None) -> None:
        if isinstance(ttl, bool) or not isinstance(ttl, int) or ttl < 1:
            raise ValueError(f"ttl must be a positive integer, got {ttl!r}")
        self._ttl = ttl
        self._on_probe_error = on_probe_error
        self._watchers: list[Watcher] = []
        self._last_dirty_watch: Watcher | None = None
        self._unevaluated = 0
        self._batch_depth = 0
        self._digesting = False

    @property
    def ttl(self) -> int:
        return self._ttl

    @property
    def watchers(self) -> tuple[Watcher, ...]:
        return tuple(self._watchers)

    # ─── Registration ────────────────────────────────────────────────────────

    def watch(self, probe: Probe, reaction: Reaction = noop, deep: bool = False) -> None:
        """Register ``reaction(new, old, scope)`` to run when ``probe(scope)`` changes.

        With ``deep=True`` the value is compared structurally and a deep
        copy is kept as the baseline, so in-place mutation is detected.
        """
        self._watchers.append(Watcher(probe, reaction, deep))
        self._unevaluated += 1
        # The new watcher has never run; a previous lap proves nothing about it.
        self._last_dirty_watch = None

    # ─── Convergence ─────────────────────────────────────────────────────────

    def settle(self) -> SettleResult:
        """Sweep until a pass reports no change or the ttl runs out.

        Never raises for non-convergence: the error is carried by the
        returned SettleResult. Reaction exceptions propagate unchanged.
        Calling it again from inside a reaction raises ScopeError.
        """
        if self._digesting:
            raise ScopeError("digest already in progress")
        self._digesting = True
        try:
            return self._converge()
        finally:
            self._digesting = False

    def _converge(self) -> SettleResult:
        remaining = self._ttl
        sweeps = 0
        self._last_dirty_watch = None

        while True:
            dirty = self._sweep()
            sweeps += 1
            if not dirty:
                logger.debug("Settled %d watchers in %d sweeps", len(self._watchers), sweeps)
                return SettleResult(sweeps)
            remaining -= 1
            if remaining == 0:
                error = ConvergenceExceededError(self._ttl)
                logger.warning("Gave up: %s (last dirty: %r)", error, self._last_dirty_watch)
                return SettleResult(sweeps, error)

    def digest(self) -> int:
        """settle(), raising ConvergenceExceededError on failure. Returns the sweep count."""
        result = self.settle()
        result.raise_for_error()
        return result.sweeps

    def _sweep(self) -> bool:
        """One pass over the watchers registered when the pass started."""
        dirty = False
        watchers = self._watchers
        for index in range(len(watchers)):
            watcher = watchers[index]
            ok, new_value = self._evaluate(watcher)
            if not ok:
                continue

            old_value = watcher.last
            if not are_equal(new_value, old_value, watcher.deep):
                ok, baseline = self._baseline(watcher, new_value)
                if not ok:
                    continue
                self._last_dirty_watch = watcher
                if old_value is UNSET:
                    self._unevaluated -= 1
                    old_value = new_value
                watcher.last = baseline
                watcher.reaction(new_value, old_value, self)
                dirty = True
            elif watcher is self._last_dirty_watch and not self._unevaluated:
                # A full lap since the last change: nothing after this can differ.
                break
        return dirty

    def _evaluate(self, watcher: Watcher) -> tuple[bool, Any]:
        try:
            return True, watcher.probe(self)
        except Exception as exc:
            self._probe_failed(ProbeEvaluationError(watcher, exc))
            return False, None

    def _baseline(self, watcher: Watcher, value: Any) -> tuple[bool, Any]:
        """The value to keep for the next comparison; a copy in deep mode.

        A value that cannot be deep-copied is reported like a probe failure
        and leaves the watcher untouched.
        """
        if not watcher.deep:
            return True, value
        try:
            return True, copy.deepcopy(value)
        except Exception as exc:
            self._probe_failed(ProbeEvaluationError(watcher, exc))
            return False, None

    def _probe_failed(self, error: ProbeEvaluationError) -> None:
        if self._on_probe_error is not None:
            self._on_probe_error(error)
        else:
            logger.exception("Probe %s failed, treating as unchanged", error.watcher.name)

    # ─── Batching ────────────────────────────────────────────────────────────

    def apply(self, fn: Callable[P, R], *args: P.args, **kwargs: P.kwargs) -> R:
        """Run ``fn`` then digest once. Nested applies digest on the outermost exit.

        The digest runs even when ``fn`` raises, so mutations made before
        the failure still reach reactions. Inside a reaction no digest is
        started: the running one picks the mutations up on its next sweep.
        """
        self._begin_batch()
        try:
            return fn(*args, **kwargs)
        finally:
            self._end_batch()

    def _begin_batch(self) -> None:
        self._batch_depth += 1

    def _end_batch(self) -> None:
        self._batch_depth -= 1
        if self._batch_depth == 0 and not self._digesting:
            self.digest()

    def __repr__(self) -> str:
        fields = {k: v for k, v in vars(self).items() if not k.startswith("_")}
        return f"Scope({fields!r}, watchers={len(self._watchers)})"
