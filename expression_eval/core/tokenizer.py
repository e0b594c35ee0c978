"""Convert the characters of an arithmetic expression into tokens, one at a time."""
from typing import Iterator, List, Tuple

from expression_eval.common.exceptions import TokenizeError
from expression_eval.core.tokens import SYMBOLS, Token, TokenKind


DIGITS: str = "0123456789"
# ASCII whitespace, also skipped inside numeric literals
WHITESPACE: str = " \t\n\r\f"


def _read_number(text: str, start: int) -> Tuple[float, int]:
    """
    Read the numeric literal starting at ``start``.

    Whitespace inside the literal is skipped, so ``"1 2 . 5"`` reads as ``12.5``.

    :param str text: Full expression
    :param int start: Index of the first digit of the literal

    :return: Value of the literal and the index right after it
    :rtype: Tuple[float, int]
    :raises TokenizeError: If the literal contains more than one decimal point
    """
    buffer: List[str] = [text[start]]
    has_decimal = False
    position = start + 1

    while position < len(text):
        char = text[position]
        if char in DIGITS:
            buffer.append(char)
        elif char == ".":
            if has_decimal:
                raise TokenizeError(f"Malformed number at position {start}: more than one decimal point")
            has_decimal = True
            buffer.append(char)
        elif char not in WHITESPACE:
            break
        position += 1

    return float("".join(buffer)), position


def tokenize(text: str) -> Iterator[Token]:
    """
    Lazily produce the tokens of an arithmetic expression.

    The generator yields exactly one EOF token once the input is consumed and then
    stops. It is forward-only and cannot be restarted.

    :param str text: Arithmetic expression

    :return: Iterator over the tokens of the expression
    :rtype: Iterator[Token]
    :raises TokenizeError: On a malformed number or an unrecognized character
    """
    position = 0
    while True:
        while position < len(text) and text[position] in WHITESPACE:
            position += 1

        if position >= len(text):
            yield Token(kind=TokenKind.EOF)
            return

        char = text[position]
        if char in DIGITS:
            value, position = _read_number(text, position)
            yield Token(kind=TokenKind.NUMBER, value=value)
        elif char in SYMBOLS:
            position += 1
            yield Token(kind=SYMBOLS[char])
        else:
            raise TokenizeError(f"Invalid character {char!r} at position {position}")
