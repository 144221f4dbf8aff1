"""
Process-wide invocation state: the current context and the user defaults.

Both stores hold a single value with overwrite semantics. A lineage (a base
invoker and everything derived from it through mixin()) shares one instance
of each; separately created invokers own separate ones.

ContextStore
- record(params) keeps a read-only copy of the merged parameters of the most
  recent dispatch; current() returns it wrapped in a Context. No history.

Defaults
- update(partial) merges over the previous defaults, reset() empties them,
  snapshot() returns a copy to merge into a call.

Access is serialized with a lock so concurrent callers keep last-write-wins.
"""
import threading
from collections import namedtuple
from collections.abc import Mapping
from types import MappingProxyType

from .utils import overlay

Context = namedtuple("Context", ("params",))
Context.__doc__ = """
Parameters recorded by the most recent dispatch (read-only mapping).
"""

_EMPTY = MappingProxyType({})


class ContextStore:
    __slots__ = ("_lock", "_params")

    def __init__(self):
        self._lock = threading.Lock()
        self._params = _EMPTY

    def record(self, params, /):
        """
        Overwrite the current context with a read-only copy of params.
        """
        if not isinstance(params, Mapping):
            raise TypeError("record() argument must be a mapping")
        frozen = MappingProxyType(dict(params))
        with self._lock:
            self._params = frozen

    def current(self):
        with self._lock:
            return Context(self._params)

    def clear(self):
        with self._lock:
            self._params = _EMPTY

    def __repr__(self):
        return f"{type(self).__name__}(params={dict(self._params)!r})"


class Defaults:
    """
    Mutable user-defaults layer applied to every call of a lineage.

    update() merges: keys given later replace earlier ones, other keys are
    kept. Unset values in a partial are ignored like anywhere else in the
    merge pipeline.
    """
    __slots__ = ("_lock", "_params")

    def __init__(self, params=_EMPTY, /):
        self._lock = threading.Lock()
        self._params = overlay(params)

    def update(self, partial, /):
        if not isinstance(partial, Mapping):
            raise TypeError("set_defaults() argument must be a mapping")
        with self._lock:
            self._params = overlay(self._params, partial)

    def reset(self):
        with self._lock:
            self._params = {}

    def snapshot(self):
        with self._lock:
            return dict(self._params)

    def __repr__(self):
        return f"{type(self).__name__}({self._params!r})"


__all__ = (
    "Context",
    "ContextStore",
    "Defaults",
)
