"""
Mixin composition: derive new invokers from an existing one.

A mixin is one of two shapes, modelled as a closed tagged union:

- DataMixin(params)
  A parameter set overlaid on the invoker's built-in defaults. Dispatch and
  static members are inherited unchanged; call-time values still win.

- BehaviorMixin(factory)
  factory(invoker) is called once, at composition time, with the invoker as
  it was before this mixin. It returns either
  • handler                → the new dispatch handler, or
  • (handler, members)     → the new handler plus static members merged over
                             the inherited ones (an `args_to_params` member
                             replaces shorthand normalization).

compose(invoker, *specs) applies specs left to right, each one seeing the
invoker produced by the previous. Malformed specs fail right there, never on
first dispatch.

    >>> quiet = compose(modal, {"footer": "sent by the build bot"})
    >>> logged = compose(quiet, lambda invoker: lambda params: invoker(params))
"""
import logging
from collections.abc import Mapping

from .faults import MalformedMembersError, MalformedMixinError, MalformedPairError, MissingHandlerError
from .utils import overlay

logger = logging.getLogger(__name__)


class MixinSpec:
    """
    Base of the two mixin variants; not instantiable on its own.
    """
    __slots__ = ()

    def __new__(cls, *args, **kwargs):
        if cls is MixinSpec:
            raise TypeError("MixinSpec is abstract, use DataMixin or BehaviorMixin")
        return super().__new__(cls)

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(repr(getattr(self, name)) for name in self.__match_args__)})"


class DataMixin(MixinSpec):
    __slots__ = ("params",)
    __match_args__ = ("params",)

    def __init__(self, params, /):
        if not isinstance(params, Mapping):
            raise MalformedMixinError(f"data mixin expects a mapping, not {type(params).__name__}")
        self.params = dict(params)


class BehaviorMixin(MixinSpec):
    __slots__ = ("factory",)
    __match_args__ = ("factory",)

    def __init__(self, factory, /):
        if not callable(factory):
            raise MalformedMixinError(f"behavior mixin expects a callable, not {type(factory).__name__}")
        self.factory = factory


def resolve(spec, /):
    """
    Turn a raw mixin argument into its variant.

    - MixinSpec   → returned as-is
    - Mapping     → DataMixin
    - callable    → BehaviorMixin
    - anything else raises MalformedMixinError
    """
    match spec:
        case MixinSpec():
            return spec
        case Mapping():
            return DataMixin(spec)
        case _ if callable(spec):
            return BehaviorMixin(spec)
        case _:
            raise MalformedMixinError(
                f"mixin must be a mapping or a callable, not {type(spec).__name__}",
                spec=spec,
            )


def members_of(object, /, *, reserved=frozenset()):
    """
    Validate a static member mapping and return it as a plain dict.

    Names must be identifiers that do not collide with the invoker's own
    attributes (`reserved`).
    """
    if not isinstance(object, Mapping):
        raise MalformedMembersError(f"static members must be a mapping, not {type(object).__name__}")
    for name in object:
        if not isinstance(name, str) or not name.isidentifier():
            raise MalformedMembersError(f"static member name {name!r} is not an identifier", member=name)
        if name in reserved or name.startswith("_"):
            raise MalformedMembersError(f"static member name {name!r} is reserved", member=name)
    return dict(object)


def _unpack(result, /):
    match result:
        case _ if callable(result):
            return result, {}
        case (handler, members):
            if not callable(handler):
                raise MissingHandlerError(f"mixin pair starts with {type(handler).__name__}, not a handler")
            return handler, members
        case [*items]:
            raise MalformedPairError(f"mixin returned {len(items)} item(s), expected (handler, members)")
        case None:
            raise MissingHandlerError("mixin returned nothing")
        case _:
            raise MissingHandlerError(f"mixin returned {type(result).__name__}, not a handler")


def compose(invoker, /, *specs):
    """
    Derive a new invoker by applying mixin specs in argument order.

    Each application produces a fresh invoker through invoker.derive(); the
    input invoker is never modified. With no specs, an equivalent invoker is
    returned.
    """
    variants = [resolve(spec) for spec in specs]
    if not variants:
        return invoker.derive()
    current = invoker
    for index, variant in enumerate(variants, 1):
        match variant:
            case DataMixin(params):
                current = current.derive(defaults=overlay(current.defaults, params))
                logger.debug("mixin #%d overlays defaults %r", index, sorted(params))
            case BehaviorMixin(factory):
                handler, members = _unpack(factory(current))
                members = members_of(members, reserved=type(current).__reserved__)
                current = current.derive(handler=handler, members=dict(current.members) | members)
                logger.debug("mixin #%d wraps dispatch with %r (members: %r)", index, handler, sorted(members))
    return current


__all__ = (
    "MixinSpec",
    "DataMixin",
    "BehaviorMixin",
    "resolve",
    "members_of",
    "compose",
)
