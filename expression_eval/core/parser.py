"""Build an AST from an arithmetic expression by precedence climbing."""
from typing import Dict, Iterator, Type

from expression_eval.common.exceptions import ParseError
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
from expression_eval.core.tokenizer import tokenize
from expression_eval.core.tokens import Precedence, Token, TokenKind


# Mapping of operator tokens to the AST node they build
BINARY_NODES: Dict[TokenKind, Type[BinaryNode]] = {
    TokenKind.ADD: Add,
    TokenKind.SUBTRACT: Subtract,
    TokenKind.MULTIPLY: Multiply,
    TokenKind.DIVIDE: Divide,
    TokenKind.CARET: Caret,
    TokenKind.AND: And,
    TokenKind.OR: Or,
}


class Parser:
    """
    Single-use parser turning one arithmetic expression into an AST.

    The parser keeps exactly one token of lookahead (``current_token``) and pulls
    the next one from the tokenizer only when the current one is consumed.

    Algorithm (precedence climbing):
        1. Parse a primary expression: a number, a negation or a parenthesized group.
        2. While the lookahead is an operator binding tighter than the current
           minimum precedence, consume it and parse its right operand with the
           operator's own precedence as the new minimum.

    Operators of equal precedence are folded by the loop, so every binary operator,
    ``^`` included, is left-associative: ``2^3^2`` is ``(2^3)^2``. Unary ``-`` binds
    tighter than every binary operator, so ``-2^2`` is ``(-2)^2``.

    Implicit multiplication is accepted after a number (``3(4)``) and after a closing
    parenthesis (``(1+2)(3/4)``, ``(-5)4``), except when a ``-`` follows the
    parenthesis: ``(2)-1`` is a subtraction.
    """

    def __init__(self, text: str) -> None:
        """
        Prepare the parser and read the first token.

        :param str text: Arithmetic expression

        :raises ParseError: If the first token cannot be read
        """
        self.text: str = text
        self._tokens: Iterator[Token] = tokenize(text)
        self._used: bool = False
        # Number of tokens consumed so far
        self._consumed: int = 0
        self.current_token: Token = self._next_token()

    def parse(self) -> Node:
        """
        Parse the whole expression.

        :return: Root of the AST
        :rtype: Node
        :raises ParseError: If the expression is malformed
        """
        if self._used:
            raise ParseError("Parser has already been used, create a new one for each expression")
        self._used = True

        try:
            ast = self._generate_ast(Precedence.DEFAULT_ZERO)
        except RecursionError:
            raise ParseError("Expression nested too deeply") from None

        if self.current_token.kind is not TokenKind.EOF:
            raise ParseError(f"Unexpected {self.current_token} after the end of the expression")

        logger.debug(f"🌳 Parsed {self.text!r} into {ast}")
        return ast

    def _next_token(self) -> Token:
        try:
            return next(self._tokens)
        except StopIteration:
            raise ParseError("Unexpected end of input") from None

    def _advance(self) -> None:
        """Consume the current token. It stays current if the next one cannot be read."""
        self.current_token = self._next_token()
        self._consumed += 1

    def _generate_ast(self, min_precedence: Precedence) -> Node:
        left_expr = self._parse_primary()

        while min_precedence < self.current_token.precedence:
            if self.current_token.kind is TokenKind.EOF:
                break
            left_expr = self._convert_token_to_node(left_expr)

        return left_expr

    def _parse_primary(self) -> Node:
        token = self.current_token

        if token.kind is TokenKind.SUBTRACT:
            self._advance()
            return Negative(operand=self._generate_ast(Precedence.NEGATIVE))

        if token.kind is TokenKind.NUMBER:
            self._advance()
            number = Number(value=token.value)
            if self.current_token.kind is TokenKind.LEFT_PAREN:
                return Multiply(left=number, right=self._parse_primary())
            return number

        if token.kind is TokenKind.LEFT_PAREN:
            self._advance()
            expr = self._generate_ast(Precedence.DEFAULT_ZERO)
            self._expect(TokenKind.RIGHT_PAREN)

            if self.current_token.kind is TokenKind.SUBTRACT:
                return expr
            # Anything that parses as a primary right after the group multiplies it
            consumed = self._consumed
            try:
                return Multiply(left=expr, right=self._parse_primary())
            except ParseError:
                # A primary that started and then broke is an error of its own
                if self._consumed != consumed:
                    raise
                return expr

        raise ParseError(f"Unable to parse, unexpected {token}")

    def _expect(self, kind: TokenKind) -> None:
        """
        Consume the current token if it has the expected kind.

        :param TokenKind kind: Expected kind

        :raises ParseError: If the current token has another kind
        """
        if self.current_token.kind is not kind:
            raise ParseError(f"Expected {kind.name}, got {self.current_token}")
        self._advance()

    def _convert_token_to_node(self, left_expr: Node) -> Node:
        """
        Consume the operator under the lookahead and build its node.

        :param Node left_expr: Already parsed left operand

        :return: Binary node combining ``left_expr`` with the parsed right operand
        :rtype: Node
        :raises ParseError: If the current token is not a binary operator
        """
        operator_token = self.current_token
        node_type = BINARY_NODES.get(operator_token.kind)
        if node_type is None:
            raise ParseError(f"Please enter a valid operator, got {operator_token}")

        self._advance()
        right_expr = self._generate_ast(operator_token.precedence)
        return node_type(left=left_expr, right=right_expr)


def parse(text: str) -> Node:
    """
    Parse an arithmetic expression into an AST.

    :param str text: Arithmetic expression

    :return: Root of the AST
    :rtype: Node
    :raises ParseError: If the expression is malformed
    """
    return Parser(text).parse()
