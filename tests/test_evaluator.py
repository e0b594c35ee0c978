"""Test class Evaluator and function evaluate."""
from pydantic import ValidationError
import pytest

from expression_eval.common.exceptions import EvaluationError
from expression_eval.core.evaluator import Evaluator, evaluate
from expression_eval.core.nodes import And, Divide, Negative, Number, Or
from expression_eval.core.parser import parse


@pytest.mark.parametrize("expr,expected", [
    ("1+2-3", 0.0),
    ("3+2-1*5/4", 3.75),     # tests precedence
    ("3+3 | 4", 6.0),
    ("42", 42.0),
    ("((2.5))", 2.5),
])
def test_evaluate_expressions(expr: str, expected: float) -> None:
    """Evaluate returns the expected value for valid expressions."""
    assert evaluate(parse(expr)) == expected


@pytest.mark.parametrize("expr,expected", [
    ("-5", -5.0),
    ("--3", 3.0),
    ("3+4", 7.0),
    ("-5+6", 1.0),
    ("-8+-1", -9.0),
    ("4-3", 1.0),
    ("3-6", -3.0),
    ("-2-7", -9.0),
    ("-5--10", 5.0),
    ("4*3", 12.0),
    ("-5*3", -15.0),
    ("-6*-4", 24.0),
    ("3*-7", -21.0),
    ("6/2", 3.0),
    ("-9/2", -4.5),
    ("10/-2", -5.0),
    ("-25/-4", 6.25),
])
def test_evaluate_arithmetic(expr: str, expected: float) -> None:
    """Signed addition, subtraction, multiplication and division."""
    assert evaluate(parse(expr)) == expected


@pytest.mark.parametrize("expr,expected", [
    ("2^3", 8.0),
    ("4^0.5", 2.0),
    ("-2^3", -8.0),
    ("-2^2", 4.0),          # unary minus binds tighter than ^
    ("2^3^2", 64.0),        # left-associative
    ("2^-1", 0.5),
    ("0^0", 1.0),
    ("-8^2.0", 64.0),
])
def test_evaluate_power(expr: str, expected: float) -> None:
    """Exponentiation within its domain."""
    assert evaluate(parse(expr)) == expected


@pytest.mark.parametrize("expr,expected", [
    ("6&2", 2.0),
    ("6|2", 6.0),
    ("-1|2", -1.0),
    ("6 & 3 | 1", 3.0),
    ("-8 & 12", 8.0),
])
def test_evaluate_bitwise(expr: str, expected: float) -> None:
    """Bitwise operators on integral operands."""
    assert evaluate(parse(expr)) == expected


@pytest.mark.parametrize("expr,expected", [
    ("(3.5 + 4.5) * 2 ^ ((7 & 3) | 1)", 64.0),
    ("(-2 + 3.5) * ((4 ^ 2) - (5.0 / (1 + 1)))", 20.25),
    ("(((10 / 2) + 3.0) ^ 2) & (15 ^ (8 | 2))", 64.0),
    ("((((5 + 3.0) ^ 2) - 1) / (4 - 1)) + ((12 & 7) | (3 ^ 1))", 28.0),
    ("(-5)4", -20.0),
    ("3(4)", 12.0),
    ("(1 + 2) (3 / 4)", 2.25),
])
def test_evaluate_composed(expr: str, expected: float) -> None:
    """Nested groups, implicit multiplication and mixed operators."""
    assert evaluate(parse(expr)) == expected


@pytest.mark.parametrize("expr,message", [
    ("1/0", "Division by zero"),
    ("(4 + 1) * (2 / (3 - 3))", "Division by zero"),
    ("0^-1", "0\\^negative is undefined"),
    ("-4^0.5", "Negative base with fractional exponent"),
    ("100000000^100", "Overflow in exponentiation"),
    ("6.5&2", "bitwise AND"),
    ("(8.5 & 3) + 2", "bitwise AND"),
    ("2|0.5", "bitwise OR"),
    ("2^70 & 1", "bitwise AND"),
])
def test_evaluate_errors(expr: str, message: str) -> None:
    """Undefined or unrepresentable values raise EvaluationError."""
    with pytest.raises(EvaluationError, match=message):
        evaluate(parse(expr))


@pytest.mark.parametrize("expr", [
    "1" + "0" * 400,            # literal too large for a float
    "10^200 * 10^200",
    "-(10^200) * 10^200",
])
def test_evaluate_non_finite(expr: str) -> None:
    """Infinite intermediate values are reported instead of returned."""
    with pytest.raises(EvaluationError, match="not a finite number"):
        evaluate(parse(expr))


def test_evaluate_checks_divisor_first() -> None:
    """A zero divisor is reported even when the dividend is invalid too."""
    node = Divide(left=And(left=Number(value=0.5), right=Number(value=1.0)), right=Number(value=0.0))
    with pytest.raises(EvaluationError, match="Division by zero"):
        evaluate(node)


def test_evaluate_bitwise_int64_bounds() -> None:
    """Bitwise operands saturate at the signed 64-bit range like a 64-bit cast."""
    top = Number(value=2.0**63)
    assert evaluate(Or(left=top, right=Number(value=0.0))) == float(2**63 - 1)
    with pytest.raises(EvaluationError):
        evaluate(Or(left=Number(value=2.0**64), right=Number(value=0.0)))


def test_evaluate_built_tree() -> None:
    """Trees built by hand evaluate like parsed ones."""
    node = Negative(operand=Divide(left=Number(value=9.0), right=Number(value=2.0)))
    assert evaluate(node) == -4.5


def test_evaluator_custom_epsilon() -> None:
    """Divisors below the configured tolerance are treated as zero."""
    ast = parse("1/0.25")
    assert evaluate(ast) == 4.0
    with pytest.raises(EvaluationError):
        Evaluator(epsilon=0.5).evaluate(ast)


def test_evaluator_invalid_epsilon() -> None:
    """Epsilon must be strictly positive."""
    with pytest.raises(ValidationError):
        Evaluator(epsilon=0)


def test_evaluator_is_frozen() -> None:
    """The evaluator configuration cannot change once built."""
    evaluator = Evaluator()
    with pytest.raises(ValidationError):
        evaluator.epsilon = 1.0


def test_nodes_are_frozen() -> None:
    """AST nodes cannot be modified once built."""
    node = parse("1+2")
    with pytest.raises(ValidationError):
        node.left = Number(value=5.0)


def test_evaluate_deep_tree() -> None:
    """Trees deeper than the interpreter stack raise EvaluationError."""
    node = Number(value=1.0)
    for _ in range(5000):
        node = Negative(operand=node)
    with pytest.raises(EvaluationError, match="nested too deeply"):
        evaluate(node)
