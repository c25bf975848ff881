"""Runtime value model: shape classification and low-level element access."""

from __future__ import annotations

import collections.abc
import dataclasses
import numbers
import types
import typing
import weakref
from dataclasses import dataclass
from enum import Enum
from typing import Final

import jax.numpy as jnp

from .errors import NullReferenceError, SelectorError


class Shape(str, Enum):
    CALLABLE = "callable"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    RECORD = "record"
    REFERENCE = "reference"
    SCALAR = "scalar"


ASSOCIATIVE_SHAPES: Final[frozenset[Shape]] = frozenset({Shape.SEQUENCE, Shape.MAPPING, Shape.RECORD})


@dataclass(frozen=True)
class ValueInfo:
    shape: Shape
    type_name: str
    length: int | None


class ResultTuple(tuple):
    """Explicit container for a call that produced two or more values.

    Keeps a genuine multi-value return apart from a single return value that
    happens to be a sequence, so compose() knows when to spread.
    """

    @classmethod
    def pack(cls, values) -> object:
        values = tuple(values)
        if not values:
            return None
        if len(values) == 1:
            return values[0]
        return cls(values)

    def __repr__(self) -> str:
        return f"ResultTuple{tuple.__repr__(self)}"


@dataclass
class Ref:
    """Mutable single-slot cell used as an explicit pointer-like wrapper."""

    target: object = None


NO_ZERO: Final = object()

_TEXT_TYPES: Final[tuple[type, ...]] = (str, bytes, bytearray)
_SCALAR_ANNOTATIONS: Final[tuple[type, ...]] = (int, float, complex, str, bytes, bool)
_EMPTY_FACTORIES: Final[dict[object, typing.Callable[[], object]]] = {
    list: list,
    tuple: tuple,
    dict: dict,
    set: set,
    frozenset: frozenset,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
    collections.abc.Iterable: list,
    collections.abc.Collection: list,
}


def is_jax_array(value: object) -> bool:
    return isinstance(value, jnp.ndarray)


def is_reference(value: object) -> bool:
    return isinstance(value, (weakref.ReferenceType, Ref))


def _is_namedtuple(value: object) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def is_record(value: object) -> bool:
    if isinstance(value, type):
        return False
    return dataclasses.is_dataclass(value) or _is_namedtuple(value)


def is_sequence(value: object) -> bool:
    if is_jax_array(value):
        return value.ndim >= 1
    if _is_namedtuple(value):
        return False
    return isinstance(value, collections.abc.Sequence) and not isinstance(value, _TEXT_TYPES)


def is_int_selector(selector: object) -> bool:
    return isinstance(selector, numbers.Integral) and not isinstance(selector, bool)


def shape_of(value: object) -> Shape:
    """Classify a value without looking through reference wrappers."""
    if is_reference(value):
        return Shape.REFERENCE
    if isinstance(value, collections.abc.Mapping):
        return Shape.MAPPING
    if is_sequence(value):
        return Shape.SEQUENCE
    if callable(value):
        return Shape.CALLABLE
    if is_record(value):
        return Shape.RECORD
    return Shape.SCALAR


def deref(ref: object) -> object:
    if isinstance(ref, Ref):
        target = ref.target
    else:
        target = ref()
    if target is None:
        raise NullReferenceError(f"dereferenced an empty {type(ref).__name__}")
    return target


def unwrap(value: object) -> object:
    """Dereference at most one level of reference wrapper."""
    if is_reference(value):
        return deref(value)
    return value


def classify(value: object) -> Shape:
    return shape_of(unwrap(value))


def record_fields(record: object) -> tuple[str, ...]:
    if dataclasses.is_dataclass(record):
        return tuple(f.name for f in dataclasses.fields(record))
    return tuple(type(record)._fields)


def value_info(value: object) -> ValueInfo:
    shape = shape_of(value)
    length: int | None = None
    if shape is Shape.RECORD:
        length = len(record_fields(value))
    elif shape in ASSOCIATIVE_SHAPES:
        length = len(value)
    return ValueInfo(shape=shape, type_name=type(value).__name__, length=length)


def element_at(seq, index: object) -> tuple[object, bool]:
    if not is_int_selector(index):
        raise SelectorError(f"sequences can only be referenced by integer index, got {type(index).__name__}")
    if index < 0 or index >= len(seq):
        return None, False
    return seq[index], True


def value_at(mapping, key: object) -> tuple[object, bool]:
    # Membership first so defaulting mappings are never mutated by a lookup.
    try:
        present = key in mapping
    except TypeError as err:
        raise SelectorError(f"map cannot be keyed by {type(key).__name__}: {err}") from err
    if not present:
        return None, False
    return mapping[key], True


def field_by_index(record: object, index: object) -> tuple[object, bool]:
    if not is_int_selector(index):
        raise SelectorError(f"record fields are positioned by integer, got {type(index).__name__}")
    names = record_fields(record)
    if index < 0 or index >= len(names):
        return None, False
    return getattr(record, names[index]), True


def field_by_name(record: object, name: str) -> tuple[object, bool]:
    if name not in record_fields(record):
        return None, False
    return getattr(record, name), True


def zero_for_annotation(annotation: object) -> object:
    """Empty value a parameter with this annotation takes in place of None.

    Returns None for reference-like annotations whose zero is None itself and
    NO_ZERO for scalar annotations, which must not have None replaced.
    """
    if annotation is typing.Any or annotation is object:
        return None

    origin = typing.get_origin(annotation) or annotation
    if origin is typing.Union or origin is types.UnionType:
        return None
    if origin is jnp.ndarray:
        return jnp.asarray([], dtype=jnp.float32)

    factory = _EMPTY_FACTORIES.get(origin)
    if factory is not None:
        return factory()

    if isinstance(origin, type):
        if issubclass(origin, _SCALAR_ANNOTATIONS):
            return NO_ZERO
        return None
    return NO_ZERO


def as_native_scalar(value: object) -> object:
    if is_jax_array(value) and value.ndim == 0:
        return value.item()
    return value
