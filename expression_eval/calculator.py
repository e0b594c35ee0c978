"""Parse and evaluate arithmetic expressions in a single call."""
from typing import Iterable, List, Union

from expression_eval.common.exceptions import ExpressionError
from expression_eval.common.logger import logger
from expression_eval.common.models import OperationRequest, OperationResult
from expression_eval.core.evaluator import evaluate
from expression_eval.core.parser import Parser


def parse_and_evaluate(expression: str) -> float:
    """
    Evaluate an arithmetic expression.

    Supported syntax: numbers, ``+ - * / ^ & |``, unary ``-``, parentheses and
    implicit multiplication (``3(4)``, ``(1+2)(3+4)``).

    :param str expression: Arithmetic expression string

    :return: Computed result as float
    :rtype: float
    :raises ParseError: If the expression is malformed
    :raises EvaluationError: If its value is undefined or not representable
    """
    ast = Parser(expression).parse()
    return evaluate(ast)


def evaluate_operation(expression: str, line_number: int = 1) -> OperationResult:
    """
    Evaluate an expression and capture the result or the error message.

    :param str expression: Arithmetic expression
    :param int line_number: Position of the expression in its batch

    :return: Result holding either the value or the error message
    :rtype: OperationResult
    :raises pydantic.ValidationError: If the expression is blank or the line number is not positive
    """
    request = OperationRequest(expression=expression, line_number=line_number)
    logger.info(f"🏁 Evaluating line {request.line_number}: {request.expression}")

    result: Union[float, None] = None
    try:
        result = parse_and_evaluate(request.expression)
    except ExpressionError as exc:
        logger.error(
            f"❌ Failed on line {request.line_number}: {exc}\n"
            f"Invalid arithmetic expression, could not evaluate: {request.expression!r}"
        )
        return OperationResult(
            expression=request.expression,
            line_number=request.line_number,
            error=str(exc),
        )

    logger.info(f"✅ Finished line {request.line_number}: {result}")
    return OperationResult(
        expression=request.expression,
        line_number=request.line_number,
        result=result,
    )


def evaluate_many(expressions: Iterable[str]) -> List[OperationResult]:
    """
    Evaluate a batch of expressions, one result per non-blank expression.

    Blank entries are skipped; the others are numbered from 1 in input order.

    :param Iterable[str] expressions: Arithmetic expressions, e.g. the lines of a text

    :return: One result per non-blank expression, in input order
    :rtype: List[OperationResult]
    """
    # Skip empty lines, keep the others as given
    cleaned: List[str] = [expr for expr in expressions if expr.strip()]
    return [
        evaluate_operation(expr, line_number)
        for line_number, expr in enumerate(cleaned, start=1)
    ]
