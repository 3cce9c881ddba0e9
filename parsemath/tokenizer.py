"""Tokenizer for arithmetic expressions.

Scans the source text on demand and hands out one Token per call. Unary
minus is not resolved here: "-5" scans as SUBTRACT, NUMBER(5.0).
"""

from __future__ import annotations

from typing import Iterator

from parsemath.errors import MalformedNumber, UnrecognizedCharacter
from parsemath.models import Token, TokenKind

_WHITESPACE = " \t\n"

_SYMBOLS: dict[str, TokenKind] = {
    "+": TokenKind.ADD,
    "-": TokenKind.SUBTRACT,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    "^": TokenKind.CARET,
    "&": TokenKind.AND,
    "|": TokenKind.OR,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
}


def _is_digit(c: str) -> bool:
    # str.isdigit() also accepts superscripts and other scripts' digits
    return "0" <= c <= "9"


class Tokenizer:
    """Pull-based token stream over a single expression.

    ``next_token()`` keeps returning EOF once the input is exhausted. Iterating
    yields every token up to and including one EOF, then stops. The stream
    cannot be rewound; build a new Tokenizer to scan again.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self._done = False

    def next_token(self) -> Token:
        """Scan and return the next token.

        Raises:
            UnrecognizedCharacter: On a character outside the expression alphabet.
            MalformedNumber: When a run of digits and points is not a valid float.
        """
        src = self.source
        n = len(src)

        while self.pos < n and src[self.pos] in _WHITESPACE:
            self.pos += 1

        if self.pos >= n:
            return Token(TokenKind.EOF, pos=n)

        start = self.pos
        c = src[start]

        if _is_digit(c):
            return self._read_number(start)

        kind = _SYMBOLS.get(c)
        if kind is None:
            raise UnrecognizedCharacter(c, start)
        self.pos += 1
        return Token(kind, pos=start)

    def _read_number(self, start: int) -> Token:
        """Greedily consume digits and decimal points starting at ``start``."""
        src = self.source
        end = start
        while end < len(src) and (_is_digit(src[end]) or src[end] == "."):
            end += 1
        self.pos = end

        text = src[start:end]
        try:
            value = float(text)
        except ValueError:
            raise MalformedNumber(text, start) from None
        return Token(TokenKind.NUMBER, value, start)

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        if self._done:
            raise StopIteration
        tok = self.next_token()
        if tok.kind == TokenKind.EOF:
            self._done = True
        return tok


def tokenize(source: str) -> Iterator[Token]:
    """Lazily tokenize an expression string.

    Errors are raised when the offending token is pulled, not up front.
    """
    return Tokenizer(source)
