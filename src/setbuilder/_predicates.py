"""Tagged predicate variants.

A binding stores its unary and binary predicates in separate lists, and the
two arities are distinguished by wrapper type rather than by inspecting the
wrapped callable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable


@dataclass(frozen=True)
class UnaryPredicate:
    """A single-argument boolean test ``T -> bool``."""

    test: Callable[[Any], bool]
    description: str = field(default="", compare=False)

    def __call__(self, value: Any) -> bool:
        return bool(self.test(value))


@dataclass(frozen=True)
class BinaryPredicate:
    """A relation ``(T, T) -> bool``.

    The first argument is a candidate of the binding that owns the predicate,
    the second a candidate of its partner.
    """

    test: Callable[[Any, Any], bool]
    description: str = field(default="", compare=False)

    def __call__(self, left: Any, right: Any) -> bool:
        return bool(self.test(left, right))


def _always_true(*_: Any) -> bool:
    return True


ALWAYS_TRUE = UnaryPredicate(_always_true, "true")
"""Seed of every binding's unary predicate list."""

ALWAYS_TRUE_RELATION = BinaryPredicate(_always_true, "true")
"""Seed of every binding's binary predicate list."""


def swap_arguments(predicate: BinaryPredicate) -> BinaryPredicate:
    """Return a relation that calls ``predicate`` with its arguments reversed."""
    test = predicate.test
    description = predicate.description
    return BinaryPredicate(
        lambda left, right: test(right, left),
        f"swapped({description})" if description else "",
    )


def as_unary(predicate: UnaryPredicate | Callable[[Any], bool]) -> UnaryPredicate:
    if isinstance(predicate, UnaryPredicate):
        return predicate
    return UnaryPredicate(predicate, getattr(predicate, "__name__", ""))


def as_binary(predicate: BinaryPredicate | Callable[[Any, Any], bool]) -> BinaryPredicate:
    if isinstance(predicate, BinaryPredicate):
        return predicate
    return BinaryPredicate(predicate, getattr(predicate, "__name__", ""))


def conjoin(predicates: Iterable[Callable[..., bool]], *args: Any) -> bool:
    """True when every predicate holds for ``args``; stops at the first failure."""
    return all(predicate(*args) for predicate in predicates)
