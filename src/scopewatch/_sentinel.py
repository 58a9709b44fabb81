"""The "never evaluated" marker stored in a fresh Watcher."""


class _Unset:
    """Singleton distinct from every value a probe can return, None included."""

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Unset, ())

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()
