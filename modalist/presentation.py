"""
Presentation collaborator: the layer that shows a dialog and resolves it.

The composition core only needs a capability surface from this layer:
- present(params) -> Resolution, calling an `on_open` hook synchronously
  before returning,
- query helpers (get_title, get_content, get_input, is_visible) returning
  nodes that expose `text_content`,
- control helpers (click_confirm, click_cancel, close) that settle the
  pending Resolution.

HeadlessPresenter implements that surface in memory, which is what the
default invoker and the test-suite run against. Real front-ends subclass
Presenter.

Resolution
- A concurrent.futures.Future with a then(callback) method. Callbacks run as
  soon as the dialog settles (synchronously, on the settling thread), and
  immediately when registered on an already settled handle. A callback
  returning a future is flattened into the chain. Handles cannot be
  cancelled.
"""
import logging
from abc import ABC, abstractmethod
from collections import namedtuple
from concurrent.futures import Future
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .faults import InactiveDialogError, InvalidParameterError, UnknownParameterWarning, trigger
from .params import HOOKS, OPTIONS

logger = logging.getLogger(__name__)

INPUT_TYPES = frozenset({
    "text",
    "email",
    "password",
    "number",
    "tel",
    "url",
    "range",
    "textarea",
    "select",
    "radio",
    "checkbox",
    "file",
})

DialogResult = namedtuple("DialogResult", ("value", "dismiss"), defaults=(None, None))
DialogResult.__doc__ = """
Outcome of a dialog: `value` when confirmed, `dismiss` ("cancel"/"close") otherwise.
"""


class Resolution(Future):
    """
    Handle over the eventual outcome of a presented dialog.

    Only the presenter settles a handle; cancel() is refused.
    """

    def cancel(self):
        return False

    def then(self, callback, /):
        """
        Chain a callback on the outcome.

        Returns a new Resolution settled with the callback's return value, or
        failed with the exception it raised. When the callback returns another
        future, the new Resolution adopts that future's outcome instead of
        holding the future itself. A failure of this handle skips the callback
        and is forwarded as-is.
        """
        if not callable(callback):
            raise TypeError("then() argument must be callable")
        chained = Resolution()

        def adopt(future):
            try:
                value = future.result()
            except Exception as error:
                chained.set_exception(error)
                return
            chained.set_result(value)

        def settle(future):
            if (error := future.exception()) is not None:
                chained.set_exception(error)
                return
            try:
                value = callback(future.result())
            except Exception as error:
                chained.set_exception(error)
                return
            if isinstance(value, Future):
                value.add_done_callback(adopt)
            else:
                chained.set_result(value)

        self.add_done_callback(settle)
        return chained


class Node:
    """
    Minimal stand-in for a rendered element.
    """
    __slots__ = ("text_content", "value")

    def __init__(self, text_content="", value=None):
        self.text_content = text_content
        self.value = value

    def __repr__(self):
        return f"Node(text_content={self.text_content!r}, value={self.value!r})"


class Dialog:
    """
    One presented dialog: its parameters, its nodes and its pending resolution.
    """

    def __init__(self, params):
        self.params = MappingProxyType(dict(params))
        self.title = Node(_text(params.get("title")))
        self.content = Node(_text(params.get("html", params.get("text"))))
        self.footer = Node(_text(params.get("footer")))
        self.input = Node(value=params.get("input_value", "")) if params.get("input") else None
        self.resolution = Resolution()

    def __rich__(self):
        body = [Text(self.content.text_content)]
        if self.input is not None:
            body.append(Text(f"[{self.params['input']}] {self.input.value}", style="italic"))
        return Panel(
            Group(*body),
            title=Text(self.title.text_content, style="bold"),
            title_align="left",
            subtitle=Text(self.footer.text_content, style="dim") if self.footer.text_content else None,
        )


def _text(value):
    return "" if value is None else str(value)


class Presenter(ABC):
    """
    Capability surface consumed by the invoker.
    """

    @abstractmethod
    def present(self, params, /):
        """Show a dialog for params and return its Resolution."""

    @abstractmethod
    def get_title(self): ...

    @abstractmethod
    def get_content(self): ...

    @abstractmethod
    def get_input(self): ...

    @abstractmethod
    def is_visible(self): ...

    @abstractmethod
    def click_confirm(self): ...

    @abstractmethod
    def click_cancel(self): ...

    @abstractmethod
    def close(self): ...


class HeadlessPresenter(Presenter):
    """
    In-memory presenter with a single dialog slot.

    Presenting while a dialog is open replaces it; the replaced dialog is
    settled with dismiss="close". Option validation lives here, not in the
    composition core:
    - unknown option names emit UnknownParameterWarning,
    - non-callable hooks and unsupported input types raise InvalidParameterError.
    """

    def __init__(self):
        self._dialog = None

    @property
    def dialog(self):
        return self._dialog

    def present(self, params, /):
        self._validate(params)
        if self._dialog is not None:
            self._settle(DialogResult(dismiss="close"))
        self._dialog = dialog = Dialog(params)
        logger.debug("dialog opened with %r", sorted(dialog.params))
        if (hook := params.get("on_open")) is not None:
            try:
                hook()
            except Exception:
                # the hook may already have settled or replaced its dialog
                if self._dialog is dialog:
                    self._dialog = None
                    dialog.resolution.set_result(DialogResult(dismiss="close"))
                raise
        return dialog.resolution

    def get_title(self):
        return self._dialog.title if self._dialog else None

    def get_content(self):
        return self._dialog.content if self._dialog else None

    def get_input(self):
        return self._dialog.input if self._dialog else None

    def is_visible(self):
        return self._dialog is not None

    def click_confirm(self):
        dialog = self._active("click_confirm")
        value = dialog.input.value if dialog.input is not None else True
        self._settle(DialogResult(value=value))

    def click_cancel(self):
        self._active("click_cancel")
        self._settle(DialogResult(dismiss="cancel"))

    def close(self):
        self._active("close")
        self._settle(DialogResult(dismiss="close"))

    def _active(self, action):
        if self._dialog is None:
            raise InactiveDialogError(f"{action}() needs an open dialog")
        return self._dialog

    def _settle(self, result):
        dialog, self._dialog = self._dialog, None
        logger.debug("dialog settled with %r", result)
        try:
            if (hook := dialog.params.get("on_close")) is not None:
                hook()
        finally:
            dialog.resolution.set_result(result)

    def _validate(self, params):
        for name in params:
            if name not in OPTIONS:
                trigger(UnknownParameterWarning(f"unknown parameter {name!r}", parameter=name))
        for name in HOOKS:
            if (hook := params.get(name)) is not None and not callable(hook):
                raise InvalidParameterError(f"{name} must be callable, not {type(hook).__name__}", parameter=name)
        if (input := params.get("input")) and input not in INPUT_TYPES:
            raise InvalidParameterError(f"unsupported input type {input!r}", parameter="input")


__all__ = (
    "INPUT_TYPES",
    "DialogResult",
    "Resolution",
    "Node",
    "Dialog",
    "Presenter",
    "HeadlessPresenter",
)
