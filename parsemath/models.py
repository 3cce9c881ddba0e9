"""Data models for the parsemath expression pipeline.

TokenKind, Token and the AST node classes, the immutable structures that flow
through tokenizer → parser → evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union


class TokenKind(str, Enum):
    """Lexical token kinds."""

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
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """A single lexical unit.

    ``value`` is only set for NUMBER tokens. ``pos`` is the 0-based offset of
    the token in the source text and is ignored by equality, so expected
    tokens can be written without offsets in comparisons.
    """

    kind: TokenKind
    value: Optional[float] = None
    pos: int = field(default=0, compare=False)

    def __str__(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return repr(self.value)
        if self.kind == TokenKind.EOF:
            return "end of input"
        return self.kind.value


# ---------------------------------------------------------------------------
# AST nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Number:
    """Numeric literal leaf."""

    value: float


@dataclass(frozen=True)
class Negative:
    """Unary negation."""

    operand: Node


@dataclass(frozen=True)
class BinaryNode:
    """Base for the two-operand nodes. Never instantiated directly."""

    left: Node
    right: Node

    symbol: ClassVar[str] = ""


@dataclass(frozen=True)
class Add(BinaryNode):
    symbol: ClassVar[str] = "+"


@dataclass(frozen=True)
class Subtract(BinaryNode):
    symbol: ClassVar[str] = "-"


@dataclass(frozen=True)
class Multiply(BinaryNode):
    symbol: ClassVar[str] = "*"


@dataclass(frozen=True)
class Divide(BinaryNode):
    symbol: ClassVar[str] = "/"


@dataclass(frozen=True)
class Caret(BinaryNode):
    symbol: ClassVar[str] = "^"


@dataclass(frozen=True)
class And(BinaryNode):
    """Bitwise AND. Operands are truncated to int64 first, so fractions are lost."""

    symbol: ClassVar[str] = "&"


@dataclass(frozen=True)
class Or(BinaryNode):
    """Bitwise OR. Operands are truncated to int64 first, so fractions are lost."""

    symbol: ClassVar[str] = "|"


Node = Union[Number, Negative, BinaryNode]


# Binding strength per node type, low to high. Mirrors the parser's grammar
# levels and is used to decide where parentheses are needed when rendering.
PRECEDENCE: dict[type, int] = {
    Or: 1,
    And: 2,
    Add: 3,
    Subtract: 3,
    Multiply: 4,
    Divide: 4,
    Negative: 5,
    Caret: 6,
    Number: 7,
}

RIGHT_ASSOCIATIVE: frozenset[type] = frozenset({Caret})
