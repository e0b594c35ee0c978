"""Reduce an AST to a floating-point value."""
from collections.abc import Callable as ABCCallable
import math
import operator
import sys
from typing import Callable, Dict, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from expression_eval.common.exceptions import EvaluationError
from expression_eval.common.logger import logger
from expression_eval.core.nodes import (
    Add,
    And,
    BinaryNode,
    Caret,
    Divide,
    Multiply,
    Negative,
    Node,
    Number,
    Or,
    Subtract,
)


# Type alias for bitwise functions (taking two ints, returning an int)
BitwiseFn: ABCCallable[[int, int], int] = Callable[[int, int], int]

# Plain float arithmetic, no domain check needed
ARITHMETIC: Dict[Type[BinaryNode], Callable[[float, float], float]] = {
    Add: operator.add,
    Subtract: operator.sub,
    Multiply: operator.mul,
}

# Bitwise operators and the name used in error messages
BITWISE: Dict[Type[BinaryNode], Tuple[str, BitwiseFn]] = {
    And: ("AND", operator.and_),
    Or: ("OR", operator.or_),
}

# Signed 64-bit range accepted by bitwise operators
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1


class Evaluator(BaseModel):
    """
    Tree-walking evaluator for arithmetic ASTs.

    Every operation whose result would be undefined or not finite raises an
    EvaluationError instead of returning NaN or infinity:
        - division by a value closer to zero than ``epsilon``
        - zero raised to a negative power
        - negative base with a fractional exponent
        - overflow, in exponentiation or anywhere else
        - bitwise operators on non-integral or out-of-range operands
    """

    model_config = ConfigDict(frozen=True)

    epsilon: float = Field(
        default=sys.float_info.epsilon,
        gt=0,
        description="Tolerance for zero divisors and fractional exponents",
    )

    def evaluate(self, node: Node) -> float:
        """
        Compute the value of an AST.

        :param Node node: Root of the AST

        :return: Value of the expression
        :rtype: float
        :raises EvaluationError: If the value is undefined or not representable
        """
        try:
            result = self._eval(node)
        except RecursionError:
            raise EvaluationError("Expression nested too deeply") from None

        logger.debug(f"🧮 Evaluated {node} to {result}")
        return result

    def _eval(self, node: Node) -> float:
        result = self._eval_node(node)
        if not math.isfinite(result):
            raise EvaluationError(f"Result is not a finite number: {result}")
        return result

    def _eval_node(self, node: Node) -> float:
        if isinstance(node, Number):
            return float(node.value)

        if isinstance(node, Negative):
            return -self._eval(node.operand)

        if isinstance(node, Divide):
            # The divisor is checked before the dividend is evaluated
            denominator = self._eval(node.right)
            if abs(denominator) < self.epsilon:
                raise EvaluationError("Division by zero")
            return self._eval(node.left) / denominator

        if isinstance(node, Caret):
            return self._power(self._eval(node.left), self._eval(node.right))

        node_type = type(node)
        if node_type in ARITHMETIC:
            return ARITHMETIC[node_type](self._eval(node.left), self._eval(node.right))
        if node_type in BITWISE:
            name, func = BITWISE[node_type]
            return self._bitwise(name, func, self._eval(node.left), self._eval(node.right))

        raise EvaluationError(f"Unsupported node type: {node_type.__name__}")

    def _power(self, base: float, exponent: float) -> float:
        if base == 0.0 and exponent < 0.0:
            raise EvaluationError("0^negative is undefined")
        if base < 0.0 and abs(math.modf(exponent)[0]) > self.epsilon:
            raise EvaluationError("Negative base with fractional exponent")

        try:
            result = math.pow(base, exponent)
        except OverflowError:
            raise EvaluationError("Overflow in exponentiation") from None
        except ValueError as exc:
            # Fractional part below epsilon but not zero
            raise EvaluationError(f"Undefined exponentiation {base}^{exponent}: {exc}") from None

        if math.isinf(result):
            raise EvaluationError("Overflow in exponentiation")
        return result

    @staticmethod
    def _bitwise(name: str, func: BitwiseFn, left: float, right: float) -> float:
        """
        Apply a bitwise operator to two floats holding 64-bit integers.

        :param str name: Operator name, used in the error message
        :param BitwiseFn func: Operator on Python ints
        :param float left: Left operand
        :param float right: Right operand

        :return: Result converted back to float
        :rtype: float
        :raises EvaluationError: If an operand is not integral or not in the int64 range
        """
        for value in (left, right):
            if not (value.is_integer() and float(INT64_MIN) <= value <= float(INT64_MAX)):
                raise EvaluationError(
                    f"Cannot perform bitwise {name} with the following expressions: {left} and {right}"
                )

        # float(INT64_MAX) rounds up to 2**63, saturate like a 64-bit cast
        left_int = min(int(left), INT64_MAX)
        right_int = min(int(right), INT64_MAX)
        return float(func(left_int, right_int))


DEFAULT_EVALUATOR: Evaluator = Evaluator()


def evaluate(node: Node) -> float:
    """
    Compute the value of an AST with the default machine-epsilon tolerance.

    :param Node node: Root of the AST

    :return: Value of the expression
    :rtype: float
    :raises EvaluationError: If the value is undefined or not representable
    """
    return DEFAULT_EVALUATOR.evaluate(node)
