"""CEL source text compiled into predicates and transforms.

Expressions are parsed with celpy, checked for free identifiers with a lark
Interpreter walk, and evaluated with a celpy program. Values cross the
boundary through celpy's JSON adapter and come back as plain Python types.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from celpy import Environment
from celpy.celparser import CELParseError, CELParser
from celpy.evaluation import CELEvalError
from lark import Token, Tree
from lark.visitors import Interpreter

from setbuilder._constants import (
    CEL_MACROS,
    CEL_TYPE_NAMES,
    DEFAULT_X_NAME,
    DEFAULT_Y_NAME,
    MAX_EXPRESSION_LENGTH,
)
from setbuilder._errors import (
    ERR_MSG_EVALUATION_FAILED,
    ERR_MSG_EXPRESSION_TOO_LONG,
    ERR_MSG_INVALID_EXPRESSION,
    ERR_MSG_NOT_A_BOOLEAN,
    ERR_MSG_UNBOUND_VARIABLE,
    ExpressionEvaluationError,
    ExpressionTooLongError,
    InvalidExpressionError,
    UnboundVariableError,
)
from setbuilder._predicates import BinaryPredicate, UnaryPredicate
from setbuilder._utils import to_cel, to_python, validate_variable_name

logger = logging.getLogger(__name__)

_parser = CELParser()
_env = Environment()


def _ident_name(tree: Tree | Token) -> str | None:
    """Unwrap single-child nodes down to a bare identifier, if there is one."""
    node: Tree | Token = tree
    while isinstance(node, Tree):
        if node.data == "ident":
            return str(node.children[0])
        if len(node.children) == 1:
            node = node.children[0]
        else:
            return None
    if isinstance(node, Token) and node.type == "IDENT":
        return str(node)
    return None


class FreeIdentifierCollector(Interpreter):
    """Walks a CEL parse tree collecting identifiers that need a binding.

    Function names, field selections and message type names are not free;
    neither are CEL type names such as ``int``. A macro iteration variable is
    bound only inside that macro's arguments.
    """

    def __init__(self) -> None:
        self._seen: list[str] = []
        self._scope: list[str] = []

    @property
    def free_names(self) -> list[str]:
        return [name for name in self._seen if name not in CEL_TYPE_NAMES]

    def visit(self, tree: Tree) -> Any:
        if isinstance(tree, Token):
            return None
        return super().visit(tree)

    def _record(self, name: str) -> None:
        if name not in self._scope and name not in self._seen:
            self._seen.append(name)

    def ident(self, tree: Tree) -> None:
        self._record(str(tree.children[0]))

    def dot_ident(self, tree: Tree) -> None:
        # Leading dot resolves in the root scope, past any macro variable
        name = str(tree.children[0])
        if name not in self._seen:
            self._seen.append(name)

    def member_dot_arg(self, tree: Tree) -> None:
        obj = tree.children[0]
        method_name = str(tree.children[1])
        args_node = tree.children[2] if len(tree.children) > 2 else None
        args = args_node.children if args_node is not None else []

        iter_var = _ident_name(args[0]) if method_name in CEL_MACROS and args else None
        if iter_var is None:
            self.visit_children(tree)
            return

        self.visit(obj)
        self._scope.append(iter_var)
        try:
            for arg in args:
                self.visit(arg)
        finally:
            self._scope.pop()

    def member_object(self, tree: Tree) -> None:
        # The leading member names a message type; only field values are visited
        for child in tree.children[1:]:
            if isinstance(child, Tree):
                self.visit(child)


def _compile(source: str, variables: tuple[str, ...]) -> Any:
    """Parse, check and build a celpy program for ``source``."""
    for name in variables:
        validate_variable_name(name)

    if not source or not source.strip():
        raise InvalidExpressionError(
            ERR_MSG_INVALID_EXPRESSION,
            "empty expression source",
        )
    if len(source) > MAX_EXPRESSION_LENGTH:
        raise ExpressionTooLongError(
            ERR_MSG_EXPRESSION_TOO_LONG,
            f"expression length {len(source)} exceeds limit {MAX_EXPRESSION_LENGTH}",
        )

    try:
        tree = _parser.parse(source)
    except CELParseError as exc:
        raise InvalidExpressionError(
            ERR_MSG_INVALID_EXPRESSION,
            f"cannot parse {source!r}: {exc}",
            wrapped=exc,
        ) from exc

    collector = FreeIdentifierCollector()
    collector.visit(tree)
    unbound = [name for name in collector.free_names if name not in variables]
    if unbound:
        raise UnboundVariableError(
            ERR_MSG_UNBOUND_VARIABLE,
            f"expression {source!r} references {', '.join(unbound)}; "
            f"declared: {', '.join(variables)}",
        )

    program = _env.program(_env.compile(source))
    logger.debug("compiled CEL expression %r over %s", source, variables)
    return program


def _run(program: Any, source: str, activation: dict[str, Any]) -> Any:
    try:
        result = program.evaluate(activation)
    except CELEvalError as exc:
        raise ExpressionEvaluationError(
            ERR_MSG_EVALUATION_FAILED,
            f"evaluating {source!r}: {exc}",
            wrapped=exc,
        ) from exc
    if isinstance(result, CELEvalError):
        raise ExpressionEvaluationError(
            ERR_MSG_EVALUATION_FAILED,
            f"evaluating {source!r}: {result}",
            wrapped=result,
        )
    return to_python(result)


def _require_bool(result: Any, source: str) -> bool:
    if not isinstance(result, bool):
        raise ExpressionEvaluationError(
            ERR_MSG_NOT_A_BOOLEAN,
            f"{source!r} produced {type(result).__name__} value {result!r}",
        )
    return result


def compile_predicate(source: str, var: str = DEFAULT_X_NAME) -> UnaryPredicate:
    """Compile a CEL boolean expression over ``var`` into a unary predicate.

    Example:
        >>> compile_predicate("x % 2 == 0")(4)
        True
    """
    program = _compile(source, (var,))

    def test(value: Any) -> bool:
        return _require_bool(_run(program, source, {var: to_cel(value)}), source)

    return UnaryPredicate(test, source)


def compile_relation(
    source: str,
    left: str = DEFAULT_X_NAME,
    right: str = DEFAULT_Y_NAME,
) -> BinaryPredicate:
    """Compile a CEL boolean expression over ``left`` and ``right`` into a relation.

    The relation's first argument binds to ``left``, its second to ``right``.
    """
    program = _compile(source, (left, right))

    def test(a: Any, b: Any) -> bool:
        activation = {left: to_cel(a), right: to_cel(b)}
        return _require_bool(_run(program, source, activation), source)

    return BinaryPredicate(test, source)


def compile_transform(source: str, var: str = DEFAULT_X_NAME) -> Callable[[Any], Any]:
    """Compile a CEL expression over ``var`` into a one-argument function."""
    program = _compile(source, (var,))

    def transform(value: Any) -> Any:
        return _run(program, source, {var: to_cel(value)})

    transform.__name__ = "cel_transform"
    transform.__doc__ = source
    return transform


def compile_pair_transform(
    source: str,
    left: str = DEFAULT_X_NAME,
    right: str = DEFAULT_Y_NAME,
) -> Callable[[Any, Any], Any]:
    """Compile a CEL expression over ``left`` and ``right`` into a two-argument function."""
    program = _compile(source, (left, right))

    def transform(a: Any, b: Any) -> Any:
        return _run(program, source, {left: to_cel(a), right: to_cel(b)})

    transform.__name__ = "cel_pair_transform"
    transform.__doc__ = source
    return transform
