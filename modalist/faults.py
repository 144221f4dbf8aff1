"""
Modalist faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the
  composition core and the presentation layer can surface. Codes are grouped
  by domain so logs and searches stay predictable.
- ModalException / ModalWarning: base types that carry a message + options
  and know how to render themselves through rich.
- trigger(): central entry point to surface any fault (raise/warn, or print
  in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Integration
- The composer raises configuration faults synchronously while mixin() runs,
  before any invoker is returned.
- The headless presenter raises presentation faults and emits warnings for
  unknown options; the invoker propagates them unchanged.
- Hosts can restyle the rendering with a __styles__ mapping and relabel codes
  with a __codes__ mapping, both read from __main__.
"""
import inspect
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the package (stable identifiers).

    grouping (by high-level domain)
    - composition (211xx)
      • MALFORMED_MIXIN, MISSING_HANDLER, MALFORMED_PAIR, MALFORMED_MEMBERS,
        READONLY_SURFACE
    - presentation (212xx)
      • INVALID_PARAMETER, INACTIVE_DIALOG
    - warnings (22xxx)
      • UNKNOWN_PARAMETER
    """
    # --- composition errors (211xx) ---
    MALFORMED_MIXIN             = 21101
    MISSING_HANDLER             = 21102
    MALFORMED_PAIR              = 21103
    MALFORMED_MEMBERS           = 21104
    READONLY_SURFACE            = 21105

    # --- presentation errors (212xx) ---
    INVALID_PARAMETER           = 21201
    INACTIVE_DIALOG             = 21202

    # --- warnings (22xxx) ---
    UNKNOWN_PARAMETER           = 22201

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette):
    main = __import__("__main__")
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)
    fancy = fault.options.get("fancy", False)
    kind = "warning" if isinstance(fault, Warning) else "error"

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    code = fault.options.get("code")
    header = Text.assemble(
        "[ ",
        text(getattr(main, "__prog__", "modalist"), styler("prog-name")),
        " - ",
        text(code.normalize() if isinstance(code, FaultCode) else code, styler("code")),
        " | ",
        text(str(fault.options.get("title", kind)).title(), styler(f"{kind}-title")),
        " ]"
    )
    message = text(fault.message, styler(f"{kind}-message"))
    hint = Text.assemble(text(" -> ", styler("hint-arrow")), text(fault.options.get("hint"), styler("hint")))

    if fancy:
        return Panel(Group(message, hint), title=header, title_align="left")
    return Group(header, message, hint)


class ModalException(Exception):
    """
    base type for every error raised by the package.

    subclasses declare __defaults__ (code, title, hint); options given at
    construction time or through trigger() are layered over them.
    """
    __defaults__ = MappingProxyType({})

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(dict(type(self).__defaults__) | options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MalformedMixinError(ModalException):
    __defaults__ = MappingProxyType({
        "code": FaultCode.MALFORMED_MIXIN,
        "title": "malformed mixin",
        "hint": "pass a mapping of default options or a callable receiving the invoker",
    })


class MissingHandlerError(ModalException):
    __defaults__ = MappingProxyType({
        "code": FaultCode.MISSING_HANDLER,
        "title": "missing handler",
        "hint": "return a handler callable, or a (handler, members) pair, from the mixin",
    })


class MalformedPairError(ModalException):
    __defaults__ = MappingProxyType({
        "code": FaultCode.MALFORMED_PAIR,
        "title": "malformed pair",
        "hint": "a mixin returning a sequence must return exactly (handler, members)",
    })


class MalformedMembersError(ModalException):
    __defaults__ = MappingProxyType({
        "code": FaultCode.MALFORMED_MEMBERS,
        "title": "malformed members",
        "hint": "static members must be a mapping keyed by identifiers",
    })


class ReadOnlySurfaceError(ModalException, AttributeError):
    __defaults__ = MappingProxyType({
        "code": FaultCode.READONLY_SURFACE,
        "title": "read-only surface",
        "hint": "derive a new invoker with mixin() to change its members",
    })


class InvalidParameterError(ModalException):
    __defaults__ = MappingProxyType({
        "code": FaultCode.INVALID_PARAMETER,
        "title": "invalid parameter",
        "hint": "check the value given for this option",
    })


class InactiveDialogError(ModalException):
    __defaults__ = MappingProxyType({
        "code": FaultCode.INACTIVE_DIALOG,
        "title": "inactive dialog",
        "hint": "open a dialog before confirming, cancelling or closing it",
    })


class ModalWarning(ABC, Warning):
    """
    base type for every warning emitted by the package.
    """
    __defaults__ = MappingProxyType({})

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(dict(type(self).__defaults__) | options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownParameterWarning(ModalWarning):
    __defaults__ = MappingProxyType({
        "code": FaultCode.UNKNOWN_PARAMETER,
        "title": "unknown parameter",
        "hint": "the option is passed through but the presenter does not use it",
    })


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - with shell=True the fault is printed through the rich console on stderr;
      otherwise errors are raised and warnings go through warnings.warn.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ keyed by
    FaultCode; when no entry is found, None is returned.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ModalException",
    "MalformedMixinError",
    "MissingHandlerError",
    "MalformedPairError",
    "MalformedMembersError",
    "ReadOnlySurfaceError",
    "InvalidParameterError",
    "InactiveDialogError",
    "ModalWarning",
    "UnknownParameterWarning",
    "trigger",
    "getdoc",
)
