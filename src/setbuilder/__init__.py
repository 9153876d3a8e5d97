"""setbuilder - Set-builder comprehensions over in-memory collections."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("setbuilder")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0.dev0"

from typing import Any, Callable, Iterable

from setbuilder._binding import Binding
from setbuilder._comprehension import Comprehension
from setbuilder._errors import (
    ExpressionEvaluationError,
    ExpressionTooLongError,
    InvalidExpressionError,
    InvalidVariableNameError,
    SetBuilderError,
    UnboundVariableError,
    UnsupportedValueError,
)
from setbuilder._expressions import (
    compile_pair_transform,
    compile_predicate,
    compile_relation,
    compile_transform,
)
from setbuilder._pair import Pair, row_major_product
from setbuilder._predicates import (
    ALWAYS_TRUE,
    ALWAYS_TRUE_RELATION,
    BinaryPredicate,
    UnaryPredicate,
    swap_arguments,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "select",
    "transform",
    "product",
    "join",
    "compile_predicate",
    "compile_relation",
    "compile_transform",
    "compile_pair_transform",
    "swap_arguments",
    "row_major_product",
    "Binding",
    "Comprehension",
    "Pair",
    "UnaryPredicate",
    "BinaryPredicate",
    "ALWAYS_TRUE",
    "ALWAYS_TRUE_RELATION",
    "SetBuilderError",
    "InvalidVariableNameError",
    "InvalidExpressionError",
    "ExpressionTooLongError",
    "UnboundVariableError",
    "ExpressionEvaluationError",
    "UnsupportedValueError",
]


def select(domain: Iterable[Any], *predicates: Callable[[Any], bool] | str) -> list[Any]:
    """Return ``{ x | x ∈ domain, P1(x), P2(x), ... }``.

    Args:
        domain: The values to range over.
        *predicates: Callables or CEL expressions over ``x``.

    Returns:
        The values satisfying every predicate, in domain order.
    """

    def configure(x: Binding) -> None:
        x.restrict_to(domain)
        for predicate in predicates:
            x.require(predicate)

    return Comprehension().evaluate(configure)


def transform(domain: Iterable[Any], function: Callable[[Any], Any] | str) -> list[Any]:
    """Return ``{ f(x) | x ∈ domain }``.

    Args:
        domain: The values to range over.
        function: A callable or a CEL expression over ``x``.
    """
    return Comprehension().output_expression(function).evaluate(
        lambda x: x.restrict_to(domain)
    )


def product(xs: Iterable[Any], ys: Iterable[Any]) -> list[Pair]:
    """Return ``{ (x, y) | x ∈ xs, y ∈ ys }`` in row-major order."""
    return Comprehension().evaluate_binary(
        lambda x, y: (x.restrict_to(xs), y.restrict_to(ys))
    )


def join(
    xs: Iterable[Any],
    ys: Iterable[Any],
    relation: Callable[[Any, Any], bool] | str,
    *,
    output: Callable[[Any, Any], Any] | str | None = None,
) -> list[Any]:
    """Return ``{ g(x, y) | x ∈ xs, y ∈ ys, R(x, y) }``.

    Args:
        xs: Values of the first variable.
        ys: Values of the second variable.
        relation: A callable ``R(x, y)`` or a CEL expression over ``x`` and ``y``.
        output: Optional ``g(x, y)``; defaults to building a ``Pair``.

    Returns:
        One result per related pair, in row-major order.
    """

    def configure(x: Binding, y: Binding) -> None:
        x.restrict_to(xs)
        y.restrict_to(ys)
        x.require_relation(relation)

    return Comprehension().pair_output_expression(output).evaluate_binary(configure)
