"""
Modalist invoker layer: the callable entry point and its static surface.

What this module provides
- Invoker: a callable that turns a call (object form or shorthand) into a
  merged parameter set, records it as the current context and hands it to
  its dispatch handler. Its static members (mixin, set_defaults, ...) are
  read as attributes and never change after construction.
- create_invoker(...): build a base invoker over a presenter with a fresh
  lineage state (user defaults + context store).
- modal: the process-wide default invoker over a HeadlessPresenter.

Dispatch (one call)
1. A single mapping argument is used as-is; any other positional form goes
   through invoker.args_to_params(args), exactly once. Keyword options are
   layered on top.
2. Merge, lowest to highest: built-in defaults of the invoker, user defaults
   of the lineage, call parameters. Unset never overrides, None does.
3. Record the merged parameters in the lineage context.
4. Return handler(merged) unchanged; failures propagate.

Quick start
    from modalist import modal

    confirm = modal.mixin({"show_cancel_button": True, "confirm_button_text": "Delete"})
    confirm("Delete file?", "This cannot be undone", "warning").then(print)
    modal.click_confirm()

Design notes
- Invokers are immutable descriptions (handler + defaults + members + state).
  mixin() builds new ones through derive(); nothing is patched in place.
- Members marked with @surface are stored unbound and bound on access, so
  every invoker of a lineage exposes the very same member objects while
  mixin()/get_current_context() still act on the invoker they are read from.
"""
import functools
import logging
import operator
import re
from collections import namedtuple
from collections.abc import Mapping
from types import MappingProxyType, MethodType

from .context import ContextStore, Defaults
from .faults import ReadOnlySurfaceError
from .mixins import compose, members_of
from .params import args_to_params, isparams
from .presentation import HeadlessPresenter
from .utils import Unset, coalesce, issurface, overlay, rename, surface

logger = logging.getLogger(__name__)

State = namedtuple("State", ("presenter", "defaults", "context"))
State.__doc__ = """
Lineage handle shared by a base invoker and every invoker derived from it.
"""

# Presenter helpers re-exported on every base invoker, in surface order.
PRESENTATION = (
    "get_title",
    "get_content",
    "get_input",
    "is_visible",
    "click_confirm",
    "click_cancel",
    "close",
)


def _view(name):
    """
    Read-only property over the slot "_{name}"; mappings come back as proxies.
    """

    @rename(name)
    def getter(self):
        value = object.__getattribute__(self, "_" + name)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        return value

    return property(getter)


class InvokerType(type):
    """
    Metaclass giving invoker classes read-only introspection and stable reprs.

    Responsibilities
    - Publish every name in __introspectable__ as a read-only property over its
      "_{name}" slot.
    - Derive __typename__ from the class name and __reserved__ (the attribute
      names static members may not shadow).
    - Provide __repr__ / __rich_repr__ over __displayable__ (or
      __introspectable__ when unset).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: _view(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            fields = ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            return f"{type(self).__typename__}({fields})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                value = getattr(self, name)
                yield name, (tuple(value) if name == "members" else value)
        self.__rich_repr__ = __rich_repr__

        self.__reserved__ = frozenset(dir(self))
        return self


class Invoker(metaclass=InvokerType):
    """
    Callable dialog entry point with an immutable static member surface.

    Attributes
    - handler: callable receiving the merged parameters of each call.
    - defaults: built-in defaults (lowest precedence layer).
    - members: ordered static members; attribute access reads them.
    - state: lineage handle (presenter, user defaults, context store).
    """
    __introspectable__ = (
        "handler",
        "defaults",
        "members",
        "state",
    )
    __displayable__ = (
        "defaults",
        "members",
    )
    __slots__ = ("_handler", "_defaults", "_members", "_state")

    def __init__(self, handler, /, *, defaults, members, state):
        if not callable(handler):
            raise TypeError(f"{type(self).__typename__} handler must be callable")
        object.__setattr__(self, "_handler", handler)
        object.__setattr__(self, "_defaults", dict(defaults))
        object.__setattr__(self, "_members", dict(members))
        object.__setattr__(self, "_state", state)

    def __call__(self, *args, **options):
        if len(args) == 1 and isparams(args[0]):
            params = dict(args[0])
        else:
            params = self.args_to_params(list(args))
        merged = overlay(self._defaults, self._state.defaults.snapshot(), params, options)
        self._state.context.record(merged)
        logger.debug("dispatching %r to %r", sorted(merged), self._handler)
        return self._handler(merged)

    def __getattr__(self, name):
        if name.startswith("__"):
            raise AttributeError(name)
        try:
            value = object.__getattribute__(self, "_members")[name]
        except KeyError:
            raise AttributeError(f"{type(self).__typename__!r} object has no member {name!r}") from None
        return MethodType(value, self) if issurface(value) else value

    def __setattr__(self, name, value, /):
        raise ReadOnlySurfaceError(f"cannot set {name!r} on an invoker", member=name)

    def __delattr__(self, name, /):
        raise ReadOnlySurfaceError(f"cannot delete {name!r} from an invoker", member=name)

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self._members))

    def derive(self, *, handler=Unset, defaults=Unset, members=Unset):
        """
        Return a new invoker of the same lineage with the given parts replaced.
        """
        return type(self)(
            coalesce(handler, self._handler),
            defaults=coalesce(defaults, self._defaults),
            members=coalesce(members, self._members),
            state=self._state,
        )


@surface
def mixin(invoker, /, *specs):
    """
    Derive a new invoker from this one (see modalist.mixins.compose).
    """
    return compose(invoker, *specs)


@surface
def set_defaults(invoker, partial=MappingProxyType({}), /, **options):
    """
    Merge options into the user defaults of this invoker's lineage.
    """
    invoker.state.defaults.update(overlay(partial, options))


@surface
def reset_defaults(invoker):
    invoker.state.defaults.reset()


@surface
def get_current_context(invoker):
    """
    Return the Context recorded by the latest dispatch of this lineage.
    """
    return invoker.state.context.current()


def create_invoker(presenter=Unset, /, *, defaults=Unset, members=Unset):
    """
    Build a base invoker with a fresh lineage state.

    Parameters
    - presenter: object implementing the Presenter surface; a new
      HeadlessPresenter when omitted.
    - defaults: built-in defaults of the invoker (lowest precedence).
    - members: extra static members appended after the base surface.

    Raises
    - TypeError: when the presenter lacks part of the surface.
    - MalformedMembersError: when members is not a valid member mapping.
    """
    if presenter is Unset:
        presenter = HeadlessPresenter()
    for name in ("present", *PRESENTATION):
        if not callable(getattr(presenter, name, None)):
            raise TypeError(f"create_invoker() presenter must provide a callable {name}()")

    surface = {
        "mixin": mixin,
        "set_defaults": set_defaults,
        "reset_defaults": reset_defaults,
        "get_current_context": get_current_context,
        "args_to_params": args_to_params,
    } | {
        name: getattr(presenter, name) for name in PRESENTATION
    }
    if members is not Unset:
        surface |= members_of(members, reserved=Invoker.__reserved__)

    return Invoker(
        presenter.present,
        defaults=overlay(coalesce(defaults, {})),
        members=surface,
        state=State(presenter, Defaults(), ContextStore()),
    )


modal = create_invoker()


__all__ = (
    "State",
    "Invoker",
    "create_invoker",
    "modal",
)

# Keep the metaclass out of star-imports and autocompletion.
del InvokerType
