"""scopewatch: dirty-checking change detection for plain Python state."""

from importlib.metadata import version as _version

__version__ = _version("scopewatch")

from scopewatch._errors import ScopeError, ProbeEvaluationError, ConvergenceExceededError
from scopewatch._sentinel import UNSET
from scopewatch.equality import are_equal, deep_equal, is_nan
from scopewatch.watcher import Watcher, noop
from scopewatch.result import SettleResult
from scopewatch.scope import Scope, DEFAULT_TTL
from scopewatch.action import action, transaction

__all__ = [
    "Scope",
    "Watcher",
    "SettleResult",
    "UNSET",
    "DEFAULT_TTL",
    "noop",
    "are_equal",
    "deep_equal",
    "is_nan",
    "action",
    "transaction",
    "ScopeError",
    "ProbeEvaluationError",
    "ConvergenceExceededError",
]
