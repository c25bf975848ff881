"""Generic application of Applier values, containers, and native callables."""

from __future__ import annotations

import inspect
import logging
import os
import typing
from typing import Final

from .capabilities import Applier, Finder
from .errors import LateBindError, SelectorError, ShapeError, classify_call_exception
from .lookup import at
from .values import ASSOCIATIVE_SHAPES, NO_ZERO, ResultTuple, Shape, shape_of, unwrap, zero_for_annotation

logger = logging.getLogger(__name__)

_ADAPT_NONE_ARGUMENTS: Final[bool] = os.environ.get("LATEBIND_DISABLE_ARG_ADAPTATION", "0") != "1"

_POSITIONAL_KINDS: Final = frozenset(
    {
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
        inspect.Parameter.VAR_POSITIONAL,
    }
)


def apply(target: object, *args: object) -> object:
    """Apply ``args`` to ``target``.

    An Applier gets the arguments verbatim and its result is returned as is.
    Containers (and bare Finders) treat the first argument as a selector and
    return what at() finds there. Anything else has to be callable; it is
    called positionally and its result normalized by invoke().
    """
    if isinstance(target, Applier):
        logger.debug("apply delegated to Applier %s", type(target).__name__)
        return target.apply(*args)

    value = unwrap(target)
    if isinstance(value, Applier):
        logger.debug("apply delegated to referenced Applier %s", type(value).__name__)
        return value.apply(*args)
    shape = shape_of(value)
    if shape in ASSOCIATIVE_SHAPES or isinstance(value, Finder):
        if not args:
            raise SelectorError(f"applying a {type(value).__name__} needs a selector argument")
        return at(value, args[0])
    if shape is Shape.CALLABLE:
        return invoke(value, *args)
    raise ShapeError(f"apply passed a non callable value of type {type(value).__name__}")


def invoke(fn, *args: object) -> object:
    """Call ``fn`` with adapted positional arguments and normalize what it returns."""
    return normalize_result(fn(*adapt_arguments(fn, args)))


def normalize_result(result: object) -> object:
    # Only a plain tuple is a multi-value return; tuple subclasses are data.
    if type(result) is tuple:
        return ResultTuple.pack(result)
    return result


def adapt_arguments(fn, args: tuple[object, ...]) -> tuple[object, ...]:
    """Swap None for the empty value of container-annotated parameters.

    Scalar and unannotated parameters receive None unchanged, which is expected
    to fail inside the call.
    """
    if not _ADAPT_NONE_ARGUMENTS or all(arg is not None for arg in args):
        return args

    annotations = _positional_annotations(fn)
    if annotations is None:
        return args

    var_annotation = annotations.get("*")
    adapted = list(args)
    for index, arg in enumerate(args):
        if arg is not None:
            continue
        annotation = annotations.get(index, var_annotation)
        if annotation is None or annotation is inspect.Parameter.empty:
            continue
        zero = zero_for_annotation(annotation)
        if zero is not NO_ZERO:
            adapted[index] = zero
    return tuple(adapted)


def _positional_annotations(fn) -> dict[object, object] | None:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return None

    hints = _resolved_hints(fn)
    out: dict[object, object] = {}
    position = 0
    for param in signature.parameters.values():
        if param.kind not in _POSITIONAL_KINDS:
            continue
        annotation = hints.get(param.name, param.annotation)
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            out["*"] = annotation
            continue
        out[position] = annotation
        position += 1
    return out


def _resolved_hints(fn) -> dict[str, object]:
    if isinstance(fn, type):
        owner = fn.__init__
    elif inspect.isroutine(fn):
        owner = fn
    else:
        owner = getattr(type(fn), "__call__", None)
    try:
        return typing.get_type_hints(owner)
    except (NameError, TypeError, AttributeError, SyntaxError):
        return {}


def apply_with_errors(target: object, *args: object) -> object:
    """apply() with any failure surfaced as a structured LateBindError."""
    try:
        return apply(target, *args)
    except LateBindError:
        raise
    except Exception as err:
        raise classify_call_exception(err) from err
