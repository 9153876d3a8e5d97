"""Binding: the bound variable of a set-builder comprehension."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, TypeVar, overload

from setbuilder._constants import DEFAULT_X_NAME, DEFAULT_Y_NAME
from setbuilder._expressions import compile_predicate, compile_relation
from setbuilder._pair import Pair, row_major_product
from setbuilder._predicates import (
    ALWAYS_TRUE,
    ALWAYS_TRUE_RELATION,
    BinaryPredicate,
    UnaryPredicate,
    as_binary,
    as_unary,
    conjoin,
    swap_arguments,
)

T = TypeVar("T")


def _intersect(domain: list[Any], sublists: list[list[Any]]) -> list[Any]:
    """Keep the domain elements equal to some element of every sub-list.

    Membership is by value equality, so equal duplicates in the domain
    survive together. Hash lookups are used when every element is hashable.
    """
    try:
        frozenset(domain)
        members: list[Any] = [frozenset(sublist) for sublist in sublists]
    except TypeError:
        members = sublists
    return [value for value in domain if all(value in m for m in members)]


class Binding(Generic[T]):
    """A variable ranging over a domain, constrained by predicates.

    Configured through chained calls inside a comprehension callback::

        x.restrict_to([1, 2, 3, 4]).require(lambda v: v % 2 == 0)

    The domain is a multiset of candidates kept in insertion order. Both
    predicate lists start with an always-true predicate so an unconstrained
    binding yields its whole domain.
    """

    def __init__(self, name: str = DEFAULT_X_NAME, partner_name: str = DEFAULT_Y_NAME) -> None:
        self.name = name
        self.partner_name = partner_name
        self._domain: list[T] = []
        self._predicates: list[UnaryPredicate] = [ALWAYS_TRUE]
        self._relations: list[BinaryPredicate] = [ALWAYS_TRUE_RELATION]

    def __repr__(self) -> str:
        return (
            f"Binding({self.name!r}, domain={len(self._domain)}, "
            f"predicates={len(self._predicates)}, relations={len(self._relations)})"
        )

    @property
    def domain(self) -> list[T]:
        return list(self._domain)

    @property
    def domain_size(self) -> int:
        return len(self._domain)

    @property
    def predicates(self) -> list[UnaryPredicate]:
        return list(self._predicates)

    @property
    def relations(self) -> list[BinaryPredicate]:
        return list(self._relations)

    # --- Configuration ---

    def restrict_to(self, domain: Iterable[T]) -> Binding[T]:
        """Append candidates to the domain. Duplicates are kept."""
        self._domain.extend(domain)
        return self

    belongs_to = restrict_to

    def require(
        self,
        predicate: UnaryPredicate | BinaryPredicate | Callable[[T], bool] | str,
    ) -> Binding[T]:
        """Add a condition on this variable.

        Strings are compiled as CEL over this binding's name. A
        ``BinaryPredicate`` is added as a relation with the partner.
        """
        if isinstance(predicate, BinaryPredicate):
            return self.require_relation(predicate)
        if isinstance(predicate, str):
            self._predicates.append(compile_predicate(predicate, self.name))
        else:
            self._predicates.append(as_unary(predicate))
        return self

    holds = require

    def require_relation(
        self,
        predicate: BinaryPredicate | Callable[[T, T], bool] | str,
    ) -> Binding[T]:
        """Add a relation between this variable (first argument) and its partner."""
        if isinstance(predicate, str):
            self._relations.append(
                compile_relation(predicate, self.name, self.partner_name)
            )
        else:
            self._relations.append(as_binary(predicate))
        return self

    # --- Evaluation ---

    @overload
    def filtered_value(self) -> list[T]: ...

    @overload
    def filtered_value(self, partner: Binding[T]) -> list[Pair[T, T]]: ...

    def filtered_value(self, partner: Binding[T] | None = None) -> list[Any]:
        """Materialize the values, or with ``partner`` the related pairs.

        Without a partner: filter the domain by each unary predicate
        separately, then keep the domain elements present in every result.

        With a partner: combine this binding's relations with the partner's
        relations (arguments swapped), take the row-major product of both
        filtered value lists and keep the pairs satisfying every relation.
        """
        if partner is None:
            sublists = [
                [value for value in self._domain if predicate(value)]
                for predicate in self._predicates
            ]
            return _intersect(self._domain, sublists)

        relations = self._relations + [swap_arguments(r) for r in partner._relations]
        candidates = row_major_product(self.filtered_value(), partner.filtered_value())
        return [pair for pair in candidates if conjoin(relations, pair.left, pair.right)]
