"""
Parameter normalization: shorthand positional calls to a parameter set.

An invoker accepts either a full option mapping or up to three positional
values. args_to_params() maps the positional form onto canonical option
names; it never dispatches and never validates values, which is the
presenter's concern.

    >>> args_to_params(["Saved", "Your changes are live", "success"])
    {'title': 'Saved', 'html': 'Your changes are live', 'type': 'success'}
    >>> args_to_params(["Saved"])
    {'title': 'Saved'}
    >>> args_to_params([{"title": "Saved", "footer": "ok"}])
    {'title': 'Saved', 'footer': 'ok'}
"""
import logging
from collections.abc import Mapping, Sequence

from .utils import Unset

logger = logging.getLogger(__name__)

# Positional slots of a shorthand call, in order.
SHORTHAND = ("title", "html", "type")

# Options understood by the headless presenter. The vocabulary stays open:
# other keys travel through the pipeline untouched.
OPTIONS = frozenset({
    "title",
    "html",
    "text",
    "type",
    "footer",
    "input",
    "input_value",
    "input_placeholder",
    "confirm_button_text",
    "cancel_button_text",
    "show_cancel_button",
    "on_open",
    "on_close",
})

# Options holding callbacks rather than plain values.
HOOKS = frozenset({"on_open", "on_close"})


def isparams(object, /):
    """
    Return True when a single call argument is already in object form.
    """
    return isinstance(object, Mapping)


def args_to_params(args, /):
    """
    Turn the argument list of a call into a parameter set.

    Contract
    - args: a sequence of positional call values.
      • exactly one mapping → a shallow copy of it (object form).
      • otherwise → values bound to SHORTHAND slots in order.
    - Slots that were not supplied, or supplied as Unset, are absent from the
      result; they are never filled with a placeholder.
    - Values past the last slot are dropped.

    Returns
    - dict: a new parameter set (the caller's mapping is never shared).
    """
    if isinstance(args, (str, bytes)) or not isinstance(args, Sequence):
        raise TypeError("args_to_params() argument must be a sequence of call arguments")
    if len(args) == 1 and isparams(args[0]):
        return dict(args[0])
    if len(args) > len(SHORTHAND):
        logger.debug("dropping %d shorthand argument(s) past %r", len(args) - len(SHORTHAND), SHORTHAND[-1])
    return {name: value for name, value in zip(SHORTHAND, args) if value is not Unset}


__all__ = (
    "SHORTHAND",
    "OPTIONS",
    "HOOKS",
    "isparams",
    "args_to_params",
)
