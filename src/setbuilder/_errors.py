"""Exception hierarchy for set-builder configuration and CEL expressions.

The engine itself never raises these for caller-supplied callables; exceptions
from predicates and transforms propagate unmodified.
"""


class SetBuilderError(Exception):
    """Base exception for setbuilder errors.

    Provides dual messaging: a sanitized user-facing message and
    internal details for logging.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class InvalidVariableNameError(SetBuilderError):
    """Raised when a bound variable name is empty, malformed or reserved."""


class InvalidExpressionError(SetBuilderError):
    """Raised when CEL source text cannot be parsed."""


class ExpressionTooLongError(InvalidExpressionError):
    """Raised when CEL source text exceeds the length limit."""


class UnboundVariableError(InvalidExpressionError):
    """Raised when a CEL expression references an undeclared variable."""


class ExpressionEvaluationError(SetBuilderError):
    """Raised when a compiled CEL expression fails at evaluation time."""


class UnsupportedValueError(ExpressionEvaluationError):
    """Raised when a value cannot be passed into or out of CEL."""


# Sanitized user-facing error message constants
ERR_MSG_INVALID_VARIABLE_NAME = "invalid variable name"
ERR_MSG_INVALID_EXPRESSION = "invalid expression"
ERR_MSG_EXPRESSION_TOO_LONG = "expression too long"
ERR_MSG_UNBOUND_VARIABLE = "expression references an unbound variable"
ERR_MSG_EVALUATION_FAILED = "expression evaluation failed"
ERR_MSG_NOT_A_BOOLEAN = "predicate did not evaluate to a boolean"
ERR_MSG_UNSUPPORTED_VALUE = "unsupported value"
