"""Token vocabulary shared by the tokenizer and the parser."""
from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TokenKind(Enum):
    """Kinds of lexical units, valued by their source character where they have one."""

    NUMBER = "number"
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    CARET = "^"
    AND = "&"
    OR = "|"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    EOF = "end of input"


class Precedence(IntEnum):
    """
    Binding strength of operators, weakest first.

    Tokens that are not binary operators map to DEFAULT_ZERO so that they always
    stop the parser from extending the current expression.
    """

    DEFAULT_ZERO = 0
    AND_OR = 1
    ADD_SUB = 2
    MUL_DIV = 3
    POWER = 4
    NEGATIVE = 5


# Single-character tokens
SYMBOLS: dict[str, TokenKind] = {
    kind.value: kind
    for kind in TokenKind
    if kind not in (TokenKind.NUMBER, TokenKind.EOF)
}

# Binary operators and their precedence level
PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.AND: Precedence.AND_OR,
    TokenKind.OR: Precedence.AND_OR,
    TokenKind.ADD: Precedence.ADD_SUB,
    TokenKind.SUBTRACT: Precedence.ADD_SUB,
    TokenKind.MULTIPLY: Precedence.MUL_DIV,
    TokenKind.DIVIDE: Precedence.MUL_DIV,
    TokenKind.CARET: Precedence.POWER,
}


class Token(BaseModel):
    """A single lexical unit: a number, an operator, a parenthesis or the end marker."""

    model_config = ConfigDict(frozen=True)

    kind: TokenKind = Field(..., description="Kind of lexical unit")
    value: Optional[float] = Field(default=None, description="Numeric value, set for NUMBER tokens only")

    @property
    def precedence(self) -> Precedence:
        """Return the binding strength of this token."""
        return PRECEDENCES.get(self.kind, Precedence.DEFAULT_ZERO)

    def __str__(self) -> str:
        if self.kind is TokenKind.NUMBER:
            return f"number {self.value!r}"
        return self.kind.name
