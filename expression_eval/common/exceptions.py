"""Errors raised while parsing or evaluating arithmetic expressions."""


class ExpressionError(ValueError):
    """Base class for every failure of the expression pipeline."""


class ParseError(ExpressionError):
    """The expression is syntactically invalid and no AST could be built."""


class TokenizeError(ParseError):
    """The expression contains a character or literal that cannot be tokenized."""


class EvaluationError(ExpressionError):
    """The AST is well formed but its value is undefined or not representable."""
