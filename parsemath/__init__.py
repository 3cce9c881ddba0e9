"""parsemath: arithmetic expression evaluator.

Tokenizer, recursive descent parser and tree-walking evaluator for
expressions over + - * / ^ & | unary minus and parentheses.

Usage:
    from parsemath import calculate, evaluate, parse

    tree = parse("3 + 2 * 5")
    evaluate(tree)          # 13.0
    calculate("2^3^2")      # 512.0

    python -m parsemath eval "2 * (3 + 4)"   # Single expression
    python -m parsemath tree "1 - 2 - 3"     # Show the parsed tree
    python -m parsemath repl                 # Interactive session
"""

from parsemath.config import Settings, load_settings
from parsemath.errors import (
    DivisionByZero,
    EvalError,
    MalformedNumber,
    MissingOperand,
    NestingTooDeep,
    ParseError,
    ParsemathError,
    TokenizeError,
    TrailingInput,
    UnclosedParenthesis,
    UnrecognizedCharacter,
)
from parsemath.evaluator import calculate, evaluate
from parsemath.formatter import format_expr
from parsemath.parser import parse
from parsemath.tokenizer import Tokenizer, tokenize

__all__ = [
    "DivisionByZero",
    "EvalError",
    "MalformedNumber",
    "MissingOperand",
    "NestingTooDeep",
    "ParseError",
    "ParsemathError",
    "Settings",
    "TokenizeError",
    "Tokenizer",
    "TrailingInput",
    "UnclosedParenthesis",
    "UnrecognizedCharacter",
    "calculate",
    "evaluate",
    "format_expr",
    "load_settings",
    "parse",
    "tokenize",
]
