"""Formatter tests: minimal parentheses and reparse stability."""

import pytest

from parsemath.evaluator import evaluate
from parsemath.formatter import format_expr
from parsemath.models import Add, Caret, Multiply, Negative, Number, Subtract
from parsemath.parser import parse


@pytest.mark.parametrize(
    "source, expected",
    [
        ("3+2*5", "3 + 2 * 5"),
        ("(3+2)*5", "(3 + 2) * 5"),
        ("((((7))))", "7"),
        ("10-(4-3)", "10 - (4 - 3)"),
        ("(10-4)-3", "10 - 4 - 3"),
        ("2^3^2", "2^3^2"),
        ("(2^3)^2", "(2^3)^2"),
        ("-2^2", "-2^2"),
        ("(-2)^2", "(-2)^2"),
        ("2^-1", "2^-1"),
        ("2^(1+1)", "2^(1 + 1)"),
        ("-(1+2)", "-(1 + 2)"),
        ("1--2", "1 - -2"),
        ("(1|2)&3", "(1 | 2) & 3"),
        ("1.50 * 2", "1.5 * 2"),
    ],
)
def test_format(source, expected):
    assert format_expr(parse(source)) == expected


def test_small_fraction_stays_positional():
    assert format_expr(Number(1e-7)) == "0.0000001"


def test_direct_tree():
    tree = Multiply(Subtract(Number(1.0), Number(2.0)), Negative(Caret(Number(3.0), Number(2.0))))
    assert format_expr(tree) == "(1 - 2) * -3^2"


@pytest.mark.parametrize(
    "source",
    ["1-(2-(3-4))", "2^(3^(4^5))", "((2^3)^4)^5", "-(-(-1))", "1|2|3&4&(5|6)", "3.25/(0.5*-4)+7"],
)
def test_reparse_gives_same_tree(source):
    tree = parse(source)
    assert parse(format_expr(tree)) == tree


def test_deep_chain_renders():
    node = Number(1.0)
    for _ in range(3000):
        node = Add(node, Number(1.0))
    assert format_expr(node).count("+") == 3000


def test_negative_literal_is_parenthesized():
    tree = Caret(Number(-2.0), Number(2.0))
    text = format_expr(tree)
    assert text == "(-2)^2"
    assert evaluate(parse(text)) == evaluate(tree) == 4.0


def test_negative_zero_keeps_sign():
    assert format_expr(Number(-0.0)) == "(-0)"
    assert format_expr(Negative(Number(-1.5))) == "-(-1.5)"
