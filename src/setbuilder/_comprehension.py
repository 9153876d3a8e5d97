"""Comprehension: the set-builder engine shell."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from setbuilder._binding import Binding
from setbuilder._constants import DEFAULT_X_NAME, DEFAULT_Y_NAME
from setbuilder._expressions import compile_pair_transform, compile_transform
from setbuilder._pair import Pair
from setbuilder._utils import validate_distinct_names, validate_variable_name

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _identity(value: Any) -> Any:
    return value


class Comprehension(Generic[T]):
    """Evaluates ``{ f(x) | x ∈ S, P(x) }`` and ``{ g(x, y) | x ∈ S, y ∈ T, R(x, y) }``.

    Each evaluation builds fresh bindings, hands them to a configuration
    callback, then materializes and transforms the result::

        evens = Comprehension().evaluate(
            lambda x: x.restrict_to([1, 2, 3, 4]).require(lambda v: v % 2 == 0)
        )

    Args:
        x_name: Name of the first variable in CEL expressions.
        y_name: Name of the second variable in CEL expressions.

    Raises:
        InvalidVariableNameError: If a name is not a usable CEL identifier,
            or both names are equal.
    """

    def __init__(self, *, x_name: str = DEFAULT_X_NAME, y_name: str = DEFAULT_Y_NAME) -> None:
        validate_variable_name(x_name)
        validate_variable_name(y_name)
        validate_distinct_names(x_name, y_name)
        self._x_name = x_name
        self._y_name = y_name
        self._output: Callable[[T], Any] = _identity
        self._pair_output: Callable[[T, T], Any] = Pair

    @property
    def x_name(self) -> str:
        return self._x_name

    @property
    def y_name(self) -> str:
        return self._y_name

    def output_expression(self, transform: Callable[[T], Any] | str | None) -> Comprehension[T]:
        """Set the transform applied to each value of a unary comprehension.

        ``None`` restores the identity; strings are compiled as CEL over ``x_name``.
        """
        if transform is None:
            self._output = _identity
        elif isinstance(transform, str):
            self._output = compile_transform(transform, self._x_name)
        else:
            self._output = transform
        return self

    def pair_output_expression(
        self, transform: Callable[[T, T], Any] | str | None
    ) -> Comprehension[T]:
        """Set the transform applied to each surviving pair of a binary comprehension.

        ``None`` restores the default, which builds a ``Pair``.
        """
        if transform is None:
            self._pair_output = Pair
        elif isinstance(transform, str):
            self._pair_output = compile_pair_transform(transform, self._x_name, self._y_name)
        else:
            self._pair_output = transform
        return self

    def evaluate(self, configure: Callable[[Binding[T]], Any]) -> list[Any]:
        """Run a one-variable comprehension and return the transformed values."""
        x: Binding[T] = Binding(self._x_name, self._y_name)
        configure(x)
        values = x.filtered_value()
        logger.debug(
            "comprehension over %s kept %d of %d candidates",
            self._x_name, len(values), x.domain_size,
        )
        output = self._output
        return [output(value) for value in values]

    def evaluate_binary(self, configure: Callable[[Binding[T], Binding[T]], Any]) -> list[Any]:
        """Run a two-variable comprehension and return one result per related pair.

        Results are row-major: all pairs for the first surviving x come first.
        """
        x: Binding[T] = Binding(self._x_name, self._y_name)
        y: Binding[T] = Binding(self._y_name, self._x_name)
        configure(x, y)
        pairs = x.filtered_value(y)
        logger.debug(
            "comprehension over %s, %s kept %d pairs from %d x %d candidates",
            self._x_name, self._y_name, len(pairs), x.domain_size, y.domain_size,
        )
        pair_output = self._pair_output
        return [pair_output(pair.left, pair.right) for pair in pairs]
