"""Associative lookup over Finder values and native containers."""

from __future__ import annotations

import logging

from .capabilities import Finder
from .errors import SelectorError, ShapeError
from .values import (
    Shape,
    element_at,
    field_by_index,
    field_by_name,
    is_int_selector,
    shape_of,
    unwrap,
    value_at,
)

logger = logging.getLogger(__name__)


def find(container: object, selector: object) -> tuple[object, bool]:
    """Look up ``selector`` in an associative value.

    A Finder answers for itself and its found flag is final, also when it sits
    behind one reference wrapper. Otherwise the dereferenced target is
    dispatched on its shape: records take an integer position or a field name,
    mappings take a key, sequences take an integer index. Misses come back as ``(None, False)``;
    a selector of the wrong kind or a value that cannot be looked into raises.
    """
    value = container if isinstance(container, Finder) else unwrap(container)
    if isinstance(value, Finder):
        logger.debug("find delegated to Finder %s", type(value).__name__)
        return value.find(selector)
    return _find_native(value, selector)


def _find_native(value: object, selector: object) -> tuple[object, bool]:
    shape = shape_of(value)
    if shape is Shape.RECORD:
        if is_int_selector(selector):
            return field_by_index(value, selector)
        if isinstance(selector, str):
            return field_by_name(value, selector)
        raise SelectorError("records can only be referenced by index or name")
    if shape is Shape.MAPPING:
        return value_at(value, selector)
    if shape is Shape.SEQUENCE:
        return element_at(value, selector)
    raise ShapeError(f"find passed a non associative value of type {type(value).__name__}")


def at(container: object, selector: object) -> object:
    """find() without the found flag; None when nothing is there."""
    out, _ = find(container, selector)
    return out
