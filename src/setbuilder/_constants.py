"""Defaults and limits for set-builder comprehensions."""

DEFAULT_X_NAME = "x"
"""Variable name of the first binding when compiling CEL text."""

DEFAULT_Y_NAME = "y"
"""Variable name of the second binding when compiling CEL text."""

MAX_EXPRESSION_LENGTH = 4096
"""Maximum CEL source length accepted by the compiler."""

CEL_MACROS = frozenset({"all", "exists", "exists_one", "map", "filter"})
"""Macros whose first argument introduces a locally bound variable."""

CEL_TYPE_NAMES = frozenset({
    "bool", "bytes", "double", "int", "list", "map",
    "null_type", "string", "type", "uint",
})
"""Identifiers CEL resolves to type values rather than variables."""

CEL_RESERVED_WORDS = frozenset({
    "as", "break", "const", "continue", "else", "false", "for", "function",
    "if", "import", "in", "let", "loop", "package", "namespace", "null",
    "return", "true", "var", "void", "while",
})
"""Words CEL reserves and therefore cannot be used as variable names."""
