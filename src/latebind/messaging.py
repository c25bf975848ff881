"""Late-bound message sends."""

from __future__ import annotations

import logging
import os
from typing import Final

from .application import invoke
from .capabilities import MessageReceiver
from .combinators import prepend_arg
from .errors import LateBindError, SelectorError, classify_call_exception, does_not_understand

logger = logging.getLogger(__name__)

_RESOLVE_PRIVATE: Final[bool] = os.environ.get("LATEBIND_RESOLVE_PRIVATE", "0") == "1"

_UNRESOLVED: Final = object()


def send(receiver: object, selector: object, *args: object) -> object:
    """Send the message ``(selector, *args)`` to ``receiver``.

    A MessageReceiver is handed the whole message and owns the lookup. For any
    other value the selector names a public method, which is called with the
    remaining arguments through the same path as apply(). A receiver with no
    such method raises DoesNotUnderstand.
    """
    if isinstance(receiver, MessageReceiver):
        logger.debug("send %r delegated to MessageReceiver %s", selector, type(receiver).__name__)
        return receiver.receive(selector, *args)

    method = resolve_method(receiver, selector)
    if method is _UNRESOLVED:
        logger.debug("%s does not understand %r", type(receiver).__name__, selector)
        raise does_not_understand(receiver, *prepend_arg(selector, *args))
    return invoke(method, *args)


def resolve_method(receiver: object, selector: object) -> object:
    if not isinstance(selector, str):
        raise SelectorError(f"messages are selected by name, got {type(selector).__name__}")
    if selector.startswith("_") and not _RESOLVE_PRIVATE:
        return _UNRESOLVED
    method = getattr(receiver, selector, _UNRESOLVED)
    if method is _UNRESOLVED or not callable(method):
        return _UNRESOLVED
    return method


def responds_to(receiver: object, selector: object) -> bool:
    """Whether send() would find a method for ``selector`` without asking the receiver."""
    if isinstance(receiver, MessageReceiver):
        return True
    return resolve_method(receiver, selector) is not _UNRESOLVED


def send_with_errors(receiver: object, selector: object, *args: object) -> object:
    """send() with failures from the called method surfaced as LateBindError."""
    try:
        return send(receiver, selector, *args)
    except LateBindError:
        raise
    except Exception as err:
        raise classify_call_exception(err) from err
