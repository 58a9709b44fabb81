"""The outcome of one convergence run."""

from __future__ import annotations

from dataclasses import dataclass

from scopewatch._errors import ConvergenceExceededError


@dataclass(frozen=True, slots=True)
class SettleResult:
    """Whether ``Scope.settle()`` reached a fixed point, and in how many sweeps.

    Usage:
        result = scope.settle()
        if not result.ok:
            log.warning("scope unstable: %s", result.error)
        result.raise_for_error()  # or escalate
    """

    sweeps: int
    error: ConvergenceExceededError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error
