"""Recursive descent parser for arithmetic expressions.

Grammar (precedence low to high):
    expr      → or_expr
    or_expr   → and_expr ("|" and_expr)*
    and_expr  → add_expr ("&" add_expr)*
    add_expr  → mul_expr (("+"|"-") mul_expr)*
    mul_expr  → unary (("*"|"/") unary)*
    unary     → "-" unary | power
    power     → atom ("^" unary)?          right-associative
    atom      → NUMBER | "(" expr ")"

Tokens are pulled from the tokenizer one at a time with a single token of
lookahead, so a tokenizer error surfaces when the parser reaches it.
"""

from __future__ import annotations

from typing import Optional

from parsemath.config import Settings
from parsemath.errors import MissingOperand, NestingTooDeep, TrailingInput, UnclosedParenthesis
from parsemath.models import (
    Add,
    And,
    Caret,
    Divide,
    Multiply,
    Negative,
    Node,
    Number,
    Or,
    Subtract,
    Token,
    TokenKind,
)
from parsemath.tokenizer import Tokenizer

_ADD_OPS: dict[TokenKind, type] = {
    TokenKind.ADD: Add,
    TokenKind.SUBTRACT: Subtract,
}

_MUL_OPS: dict[TokenKind, type] = {
    TokenKind.MULTIPLY: Multiply,
    TokenKind.DIVIDE: Divide,
}


class _Parser:
    """One method per precedence level."""

    def __init__(self, tokens: Tokenizer, max_depth: int) -> None:
        self.tokens = tokens
        self.max_depth = max_depth
        self.depth = 0
        self.current = tokens.next_token()

    def advance(self) -> Token:
        tok = self.current
        self.current = self.tokens.next_token()
        return tok

    def match(self, *kinds: TokenKind) -> Optional[Token]:
        if self.current.kind in kinds:
            return self.advance()
        return None

    # -- Grammar rules --

    def parse_expr(self) -> Node:
        return self.parse_or()

    def parse_or(self) -> Node:
        """and_expr ('|' and_expr)*"""
        left = self.parse_and()
        while self.match(TokenKind.OR):
            left = Or(left, self.parse_and())
        return left

    def parse_and(self) -> Node:
        """add_expr ('&' add_expr)*"""
        left = self.parse_add()
        while self.match(TokenKind.AND):
            left = And(left, self.parse_add())
        return left

    def parse_add(self) -> Node:
        """mul_expr (('+' | '-') mul_expr)*"""
        left = self.parse_mul()
        while self.current.kind in _ADD_OPS:
            node_type = _ADD_OPS[self.advance().kind]
            left = node_type(left, self.parse_mul())
        return left

    def parse_mul(self) -> Node:
        """unary (('*' | '/') unary)*"""
        left = self.parse_unary()
        while self.current.kind in _MUL_OPS:
            node_type = _MUL_OPS[self.advance().kind]
            left = node_type(left, self.parse_unary())
        return left

    def parse_unary(self) -> Node:
        """'-' unary | power

        Every nested level (negation, parentheses, exponent) passes through
        here, so this is where the depth limit is enforced.
        """
        if self.depth >= self.max_depth:
            raise NestingTooDeep(self.max_depth, self.current.pos)
        self.depth += 1
        try:
            if self.match(TokenKind.SUBTRACT):
                return Negative(self.parse_unary())
            return self.parse_power()
        finally:
            self.depth -= 1

    def parse_power(self) -> Node:
        """atom ('^' unary)?"""
        base = self.parse_atom()
        if self.match(TokenKind.CARET):
            return Caret(base, self.parse_unary())
        return base

    def parse_atom(self) -> Node:
        """NUMBER | '(' expr ')'"""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return Number(tok.value)

        if tok.kind == TokenKind.LEFT_PAREN:
            self.advance()
            inner = self.parse_or()
            if not self.match(TokenKind.RIGHT_PAREN):
                raise UnclosedParenthesis(
                    f"Missing ')' for '(' at position {tok.pos} (found {self.current})",
                    tok.pos,
                )
            return inner

        raise MissingOperand(
            f"Expected a number or '(' at position {tok.pos}, found {tok}",
            tok.pos,
        )


def parse(source: str, settings: Optional[Settings] = None) -> Node:
    """Parse an expression string into an AST.

    Args:
        source: Expression text (e.g., "2 * (3 + 4) ^ 2").
        settings: Parser limits. Defaults to Settings().

    Returns:
        Root node of the expression tree.

    Raises:
        ParseError: Any subclass, for tokenizer and grammar errors.
    """
    settings = settings or Settings()
    parser = _Parser(Tokenizer(source), settings.max_depth)
    try:
        node = parser.parse_expr()
    except RecursionError:
        # max_depth set higher than the interpreter stack allows
        raise NestingTooDeep(settings.max_depth, parser.current.pos) from None

    # Ensure all tokens consumed
    if parser.current.kind != TokenKind.EOF:
        raise TrailingInput(
            f"Unexpected {parser.current} after expression at position {parser.current.pos}",
            parser.current.pos,
        )

    return node
