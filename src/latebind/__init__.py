"""latebind public API."""

from .application import apply, apply_with_errors, invoke
from .capabilities import Applier, Comparer, Equaler, Finder, MessageReceiver
from .combinators import Bound, Composed, bind, compose, prepend_arg
from .errors import (
    ContractViolation,
    DoesNotUnderstand,
    LateBindError,
    NullReferenceError,
    OrderingError,
    SelectorError,
    ShapeError,
    does_not_understand,
)
from .lookup import at, find
from .messaging import responds_to, send, send_with_errors
from .ordering import compare, equal, equal_non_comparable
from .values import Ref, ResultTuple, Shape, ValueInfo, classify, value_info

__all__ = [
    "apply",
    "apply_with_errors",
    "invoke",
    "find",
    "at",
    "send",
    "send_with_errors",
    "responds_to",
    "equal",
    "equal_non_comparable",
    "compare",
    "compose",
    "bind",
    "prepend_arg",
    "Composed",
    "Bound",
    "Applier",
    "Finder",
    "MessageReceiver",
    "Equaler",
    "Comparer",
    "ResultTuple",
    "Ref",
    "Shape",
    "ValueInfo",
    "classify",
    "value_info",
    "LateBindError",
    "ContractViolation",
    "SelectorError",
    "ShapeError",
    "OrderingError",
    "NullReferenceError",
    "DoesNotUnderstand",
    "does_not_understand",
]
