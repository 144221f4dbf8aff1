"""
Modalist utilities (internal helpers, carefully exposed)

Scope
- Core building blocks shared by the normalizer, the composer and the invoker
  so that "not provided", merging and member binding mean the same thing
  everywhere.

Overview
- UnsetType / Unset
  • Singleton sentinel for "value not provided" (the undefined of a call),
    distinct from None, which is an explicit user value.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, preserving None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated handlers.

- overlay(*layers)
  • Shallow, key-wise, last-write-wins merge of parameter layers where Unset
    values never override an earlier value.

- surface(function)
  • Mark a static member that must be bound to the invoker it is read from
    (the invoker is passed as the first argument, like a method).

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> overlay({"a": 1}, {"a": 2, "b": 3}, {"b": 4})
    {'a': 2, 'b': 4}
    >>> overlay({"html": "foo"}, {"html": Unset})
    {'html': 'foo'}
"""
import builtins
import functools
from collections.abc import Mapping
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    None is a legitimate option value (it deliberately clears a default), so
    the merge layer needs another marker for "the caller did not say". A
    single instance, Unset, is exposed for that purpose.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (updated in place)
    - rename(name) -> decorator

    Notes
    - Only metadata changes; behavior is untouched.
    - Built-in callables that refuse attribute updates raise TypeError.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def overlay(*layers):
    """
    Merge parameter layers in ascending precedence.

    Contract
    - Every layer must be a Mapping; layers are applied left to right.
    - Shallow and key-wise: a later layer replaces the value of an earlier one
      for the same key, nested mappings are not merged.
    - Unset never overrides: a key whose value is Unset is skipped, so an
      earlier (default) value survives. None is a real value and overrides.
    - The result is a new dict; no layer is mutated.

    Returns
    - dict with the merged parameters (keys holding only Unset are absent).
    """
    merged = {}
    for layer in layers:
        if not isinstance(layer, Mapping):
            raise TypeError("overlay() arguments must be mappings, not %s" % type(layer).__name__)
        for key, value in layer.items():
            if value is not Unset:
                merged[key] = value
    return merged


def surface(function, /):
    """
    Mark a function as a bound static member.

    A surface member is stored unbound in an invoker's member mapping (so two
    invokers of the same lineage expose the very same object) and is bound to
    the invoker on attribute access, receiving it as the first argument.
    """
    if not callable(function):
        raise TypeError("@surface must be applied to a callable")
    function.__surface__ = True
    return function


def issurface(object, /):
    """
    Return True when the object was marked with @surface.
    """
    return getattr(object, "__surface__", False) is True


Unset = UnsetType()
"""
Internal sentinel for "not provided".

Use Unset where None is a valid, user-meaningful value but "no input" must
still be told apart. overlay() skips it, args_to_params() drops it.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "overlay",
    "surface",
    "issurface",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
