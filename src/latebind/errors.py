"""Structured error types for late-bound dispatch."""

from __future__ import annotations


class LateBindError(Exception):
    """Base class for structured latebind errors."""


class ContractViolation(LateBindError):
    """A value of the wrong shape or a selector of the wrong kind was passed to a primitive."""


class SelectorError(ContractViolation):
    """Selector kind does not fit the container or message being addressed."""


class ShapeError(ContractViolation):
    """Primitive was handed a value it has no way to look into or call."""


class OrderingError(ContractViolation):
    """No native ordering exists and no Comparer override is present."""


class NullReferenceError(ContractViolation):
    """A reference wrapper was dereferenced while pointing at nothing."""


class DoesNotUnderstand(LateBindError):
    """Raised by send() when a receiver has no way to handle a message."""

    def __init__(self, receiver: object, message: tuple[object, ...]) -> None:
        message = tuple(message)
        super().__init__(receiver, message)
        self.receiver = receiver
        self.message = message

    @property
    def selector(self) -> object:
        return self.message[0] if self.message else None

    def __str__(self) -> str:
        rendered = ", ".join(repr(part) for part in self.message)
        return f"Object {self.receiver!r} does not understand ({rendered})"


def does_not_understand(receiver: object, *message: object) -> DoesNotUnderstand:
    return DoesNotUnderstand(receiver, message)


def classify_call_exception(err: Exception) -> LateBindError:
    """Best-effort classification of a failure raised from inside a dispatched call."""
    if isinstance(err, LateBindError):
        return err

    message = str(err) or type(err).__name__
    lowered = message.lower()

    if isinstance(err, (IndexError, KeyError)):
        return SelectorError(message)

    if isinstance(err, AttributeError) and "nonetype" in lowered:
        return NullReferenceError(message)

    selector_markers = (
        "index",
        "indices",
        "subscript",
        "selector",
        "unhashable",
    )
    if any(marker in lowered for marker in selector_markers):
        return SelectorError(message)

    ordering_markers = (
        "'<' not supported",
        "'>' not supported",
        "'<=' not supported",
        "'>=' not supported",
        "ordering",
    )
    if any(marker in lowered for marker in ordering_markers):
        return OrderingError(message)

    shape_markers = (
        "not callable",
        "argument",
        "positional",
        "unsupported operand",
        "nonetype",
        "must be",
    )
    if any(marker in lowered for marker in shape_markers):
        return ShapeError(message)

    return ContractViolation(message)
