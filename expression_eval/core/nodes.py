"""AST nodes produced by the parser and consumed by the evaluator."""
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class Node(BaseModel):
    """
    Base class of every AST node.

    Nodes are frozen once built and compare structurally: two nodes are equal when
    they have the same type and equal children.
    """

    model_config = ConfigDict(frozen=True)


class Number(Node):
    """Numeric literal."""

    value: float = Field(..., description="Value of the literal")

    def __str__(self) -> str:
        return repr(self.value)


class Negative(Node):
    """Unary negation."""

    operand: Node = Field(..., description="Negated expression")

    def __str__(self) -> str:
        return f"(-{self.operand})"


class BinaryNode(Node):
    """Binary operation owning its left and right operands."""

    # Operator character, used for display only
    symbol: ClassVar[str] = "?"

    left: Node = Field(..., description="Left operand")
    right: Node = Field(..., description="Right operand")

    def __str__(self) -> str:
        return f"({self.left} {self.symbol} {self.right})"


class Add(BinaryNode):
    symbol: ClassVar[str] = "+"


class Subtract(BinaryNode):
    symbol: ClassVar[str] = "-"


class Multiply(BinaryNode):
    symbol: ClassVar[str] = "*"


class Divide(BinaryNode):
    symbol: ClassVar[str] = "/"


class Caret(BinaryNode):
    """Exponentiation."""

    symbol: ClassVar[str] = "^"


class And(BinaryNode):
    """Bitwise AND, defined for integral operands only."""

    symbol: ClassVar[str] = "&"


class Or(BinaryNode):
    """Bitwise OR, defined for integral operands only."""

    symbol: ClassVar[str] = "|"
