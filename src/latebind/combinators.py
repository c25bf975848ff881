"""Combinators built purely on apply()."""

from __future__ import annotations

from dataclasses import dataclass

from .application import apply
from .capabilities import Applier
from .values import ResultTuple


@dataclass(frozen=True)
class Composed(Applier):
    """``Composed((f, g, h))(x) == f(g(h(x)))``; a ResultTuple between stages is spread."""

    funcs: tuple[object, ...]

    def apply(self, *args: object) -> object:
        if not self.funcs:
            return ResultTuple.pack(args)
        result = apply(self.funcs[-1], *args)
        for func in reversed(self.funcs[:-1]):
            if isinstance(result, ResultTuple):
                result = apply(func, *result)
            else:
                result = apply(func, result)
        return result

    def __call__(self, *args: object) -> object:
        return self.apply(*args)


@dataclass(frozen=True)
class Bound(Applier):
    """Deferred application; every call applies ``func`` to ``args`` afresh."""

    func: object
    args: tuple[object, ...]

    def apply(self) -> object:
        return apply(self.func, *self.args)

    def __call__(self) -> object:
        return self.apply()


def compose(*funcs: object) -> Composed:
    return Composed(funcs=tuple(funcs))


def bind(func: object, *args: object) -> Bound:
    return Bound(func=func, args=tuple(args))


def prepend_arg(first: object, *args: object) -> list[object]:
    """New argument list with ``first`` in front of ``args``."""
    return [first, *args]
