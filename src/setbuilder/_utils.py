"""Validation helpers and CEL value conversion utilities."""

from __future__ import annotations

import re
from typing import Any

from celpy import celtypes
from celpy.adapter import json_to_cel

from setbuilder._constants import CEL_RESERVED_WORDS, CEL_TYPE_NAMES
from setbuilder._errors import (
    ERR_MSG_INVALID_VARIABLE_NAME,
    ERR_MSG_UNSUPPORTED_VALUE,
    InvalidVariableNameError,
    UnsupportedValueError,
)

MAX_VARIABLE_NAME_LENGTH = 63

VARIABLE_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def validate_variable_name(name: str) -> None:
    """Validate the name a binding is exposed under in CEL expressions."""
    if not name:
        raise InvalidVariableNameError(
            "variable name cannot be empty",
            "empty variable name provided",
        )
    if len(name) > MAX_VARIABLE_NAME_LENGTH:
        raise InvalidVariableNameError(
            "variable name too long",
            f"variable name '{name}' exceeds {MAX_VARIABLE_NAME_LENGTH} characters",
        )
    if not VARIABLE_NAME_RE.match(name):
        raise InvalidVariableNameError(
            ERR_MSG_INVALID_VARIABLE_NAME,
            f"variable name '{name}' contains invalid characters",
        )
    if name in CEL_RESERVED_WORDS or name in CEL_TYPE_NAMES:
        raise InvalidVariableNameError(
            "variable name is a reserved CEL word",
            f"variable name '{name}' is reserved in CEL",
        )


def validate_distinct_names(first: str, second: str) -> None:
    """Reject a binary comprehension whose two variables share a name."""
    if first == second:
        raise InvalidVariableNameError(
            "variable names must differ",
            f"both bindings are named '{first}'",
        )


def to_cel(value: Any) -> Any:
    """Convert a native Python value into its CEL counterpart."""
    try:
        return json_to_cel(value)
    except (TypeError, ValueError) as exc:
        raise UnsupportedValueError(
            ERR_MSG_UNSUPPORTED_VALUE,
            f"cannot convert {type(value).__name__} value {value!r} to CEL",
            wrapped=exc,
        ) from exc


def to_python(value: Any) -> Any:
    """Convert a CEL result back into plain Python types.

    Timestamps and durations are already datetime subclasses and pass through.
    """
    if value is None or isinstance(value, celtypes.NullType):
        return None
    # BoolType is an int subclass, so it must be checked first
    if isinstance(value, celtypes.BoolType):
        return bool(value)
    if isinstance(value, (celtypes.IntType, celtypes.UintType)):
        return int(value)
    if isinstance(value, celtypes.DoubleType):
        return float(value)
    if isinstance(value, celtypes.StringType):
        return str(value)
    if isinstance(value, celtypes.BytesType):
        return bytes(value)
    if isinstance(value, celtypes.ListType):
        return [to_python(item) for item in value]
    if isinstance(value, celtypes.MapType):
        return {to_python(k): to_python(v) for k, v in value.items()}
    return value
