"""Error taxonomy for parsemath.

Every failure in the pipeline surfaces as a subclass of ParsemathError.
Parse-time errors are also ValueErrors and division by zero is also a
ZeroDivisionError, so callers that only know the built-in types still catch
them.
"""

from __future__ import annotations

from typing import Optional


class ParsemathError(Exception):
    """Base class for all parsemath errors."""

    kind: str = "error"

    def __init__(self, message: str, pos: Optional[int] = None) -> None:
        super().__init__(message)
        self.pos = pos


class ParseError(ParsemathError, ValueError):
    """The input text is not a valid expression."""

    kind = "parse error"


class TokenizeError(ParseError):
    """The input text could not be split into tokens."""

    kind = "invalid token"


class UnrecognizedCharacter(TokenizeError):
    kind = "unrecognized character"

    def __init__(self, char: str, pos: int) -> None:
        super().__init__(f"Unrecognized character {char!r} at position {pos}", pos)
        self.char = char


class MalformedNumber(TokenizeError):
    kind = "malformed number"

    def __init__(self, text: str, pos: int) -> None:
        super().__init__(f"Malformed number {text!r} at position {pos}", pos)
        self.text = text


class MissingOperand(ParseError):
    kind = "missing operand"


class UnclosedParenthesis(ParseError):
    """An opening parenthesis has no matching close. ``pos`` points at the '('."""

    kind = "unclosed parenthesis"


class TrailingInput(ParseError):
    kind = "trailing input"


class NestingTooDeep(ParseError):
    kind = "nesting too deep"

    def __init__(self, limit: int, pos: int) -> None:
        super().__init__(f"Expression nests deeper than {limit} levels at position {pos}", pos)
        self.limit = limit


class EvalError(ParsemathError, ArithmeticError):
    """Evaluation of a well-formed tree failed."""

    kind = "evaluation error"


class DivisionByZero(EvalError, ZeroDivisionError):
    kind = "division by zero"

    def __init__(self, message: str = "Division by zero") -> None:
        super().__init__(message)
