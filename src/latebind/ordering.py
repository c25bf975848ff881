"""Generic equality and three-way ordering with per-type overrides."""

from __future__ import annotations

import decimal
import numbers

import jax.numpy as jnp

from .capabilities import Comparer, Equaler
from .errors import OrderingError
from .values import as_native_scalar, is_jax_array

# Decimal is not registered as numbers.Real but orders against ints, floats and Fractions.
_ORDERED_NUMBERS = (numbers.Real, decimal.Decimal)


def equal(a: object, b: object) -> bool:
    """Equaler on the left, then Equaler on the right, then native equality.

    Symmetry between the two override calls is the Equaler's business.
    """
    if isinstance(a, Equaler):
        return a.equal(b)
    if isinstance(b, Equaler):
        return b.equal(a)
    return native_equal(a, b)


def equal_non_comparable(a: object, b: object) -> bool:
    """Like equal(), but values with no native equality compare unequal instead of by content.

    An Equaler on either side is consulted before the comparability check, so an
    override always wins over the short-circuit.
    """
    if isinstance(a, Equaler):
        return a.equal(b)
    if isinstance(b, Equaler):
        return b.equal(a)
    if not is_comparable(a) or not is_comparable(b):
        return False
    return native_equal(a, b)


def is_comparable(value: object) -> bool:
    """Whether the value's kind has native equality (arrays and unhashable containers do not)."""
    if is_jax_array(value):
        return value.ndim == 0
    try:
        hash(value)
    except TypeError:
        return False
    return True


def native_equal(a: object, b: object) -> bool:
    if a is b:
        return True
    if is_jax_array(a) or is_jax_array(b):
        return _array_equal(a, b)
    return bool(a == b)


def _array_equal(a: object, b: object) -> bool:
    try:
        return bool(jnp.array_equal(jnp.asarray(a), jnp.asarray(b)))
    except (TypeError, ValueError):
        # Not convertible to an array, so it cannot equal one.
        return False


def _natively_ordered(a: object, b: object) -> bool:
    if isinstance(a, _ORDERED_NUMBERS) and isinstance(b, _ORDERED_NUMBERS):
        return True
    if isinstance(a, str) and isinstance(b, str):
        return True
    return isinstance(a, bytes) and isinstance(b, bytes)


def compare(a: object, b: object) -> int:
    """Three-way comparison returning -1, 0 or 1.

    Identical or natively equal values are 0. None orders before any present
    value. A Comparer on the left decides everything else; there is no fallback
    to the right operand. Numbers, strings and bytes use their native order.
    """
    if a is b:
        return 0
    if is_comparable(a) and is_comparable(b) and native_equal(a, b):
        return 0
    if a is None:
        return -1
    if b is None:
        return 1

    if isinstance(a, Comparer):
        return a.compare(b)
    x = as_native_scalar(a)
    y = as_native_scalar(b)
    if _natively_ordered(x, y):
        return (x > y) - (x < y)
    raise OrderingError(f"no ordering between {type(a).__name__} and {type(b).__name__}")
