"""Capability interfaces that let a value override the default dispatch of a primitive.

A value takes part only by subclassing (or being ``register``-ed with) one of
these ABCs. Methods that merely share a name, such as ``str.find``, never count.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Applier(ABC):
    """Knows how to apply arguments to itself and return a value."""

    @abstractmethod
    def apply(self, *args: object) -> object:
        raise NotImplementedError


class Finder(ABC):
    """Indexes itself, returning the value at a selector and whether one was there."""

    @abstractmethod
    def find(self, selector: object) -> tuple[object, bool]:
        raise NotImplementedError


class MessageReceiver(ABC):
    """Implements its own message semantics; send() hands it the whole message."""

    @abstractmethod
    def receive(self, selector: object, *args: object) -> object:
        raise NotImplementedError


class Equaler(ABC):
    @abstractmethod
    def equal(self, other: object) -> bool:
        raise NotImplementedError


class Comparer(ABC):
    @abstractmethod
    def compare(self, other: object) -> int:
        """Return -1, 0 or 1 as self orders before, with, or after other."""
        raise NotImplementedError


def is_applier(value: object) -> bool:
    return isinstance(value, Applier)


def is_finder(value: object) -> bool:
    return isinstance(value, Finder)


def is_receiver(value: object) -> bool:
    return isinstance(value, MessageReceiver)


def is_equaler(value: object) -> bool:
    return isinstance(value, Equaler)


def is_comparer(value: object) -> bool:
    return isinstance(value, Comparer)
