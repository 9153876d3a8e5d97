"""Ordered pair type and the row-major product used by binary comprehensions."""

from __future__ import annotations

from typing import Any, Generic, Iterable, NamedTuple, TypeVar

L = TypeVar("L")
R = TypeVar("R")


class Pair(NamedTuple, Generic[L, R]):
    """An immutable ordered 2-tuple.

    Compares equal to a plain tuple holding the same items, so results can be
    checked against ``[(1, 3), (1, 4)]`` directly.
    """

    left: L
    right: R

    @classmethod
    def of(cls, left: L, right: R) -> Pair[L, R]:
        return cls(left, right)

    def swap(self) -> Pair[R, L]:
        return Pair(self.right, self.left)


def row_major_product(outer: Iterable[Any], inner: Iterable[Any]) -> list[Pair]:
    """Pair every element of ``outer`` with every element of ``inner``.

    The outer sequence drives the outer loop, so all pairs for ``outer[0]``
    come first.
    """
    inner = list(inner)
    return [Pair(left, right) for left in outer for right in inner]
