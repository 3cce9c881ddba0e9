"""CLI tests via typer's CliRunner."""

import pytest
from typer.testing import CliRunner

from parsemath.__main__ import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("PARSEMATH_MAX_DEPTH", raising=False)
    monkeypatch.delenv("PARSEMATH_PRECISION", raising=False)


# --- eval ---

def test_eval_prints_result():
    result = runner.invoke(app, ["eval", "3 + 2 * 5"])
    assert result.exit_code == 0
    assert result.output.strip() == "13"


def test_eval_fractional_result():
    result = runner.invoke(app, ["eval", "15 / 4"])
    assert result.exit_code == 0
    assert result.output.strip() == "3.75"


def test_eval_leading_minus_after_separator():
    result = runner.invoke(app, ["eval", "--", "-5 + 3"])
    assert result.exit_code == 0
    assert result.output.strip() == "-2"


def test_eval_precision_option():
    result = runner.invoke(app, ["eval", "--precision", "3", "2 / 3"])
    assert result.exit_code == 0
    assert result.output.strip() == "0.667"


def test_eval_precision_from_env(monkeypatch):
    monkeypatch.setenv("PARSEMATH_PRECISION", "2")
    result = runner.invoke(app, ["eval", "1 / 3"])
    assert result.output.strip() == "0.33"


def test_eval_division_by_zero():
    result = runner.invoke(app, ["eval", "5/0"])
    assert result.exit_code == 1
    assert "division by zero" in result.output


def test_eval_marks_error_offset():
    result = runner.invoke(app, ["eval", "1 + $"])
    assert result.exit_code == 1
    assert "unrecognized character" in result.output
    assert "      ^" in result.output


def test_eval_unclosed_parenthesis():
    result = runner.invoke(app, ["eval", "(1+2"])
    assert result.exit_code == 1
    assert "unclosed parenthesis" in result.output


def test_eval_bad_config(monkeypatch):
    monkeypatch.setenv("PARSEMATH_MAX_DEPTH", "lots")
    result = runner.invoke(app, ["eval", "1"])
    assert result.exit_code == 2
    assert "Configuration error" in result.output


def test_eval_depth_limit_from_env(monkeypatch):
    monkeypatch.setenv("PARSEMATH_MAX_DEPTH", "2")
    result = runner.invoke(app, ["eval", "((1))"])
    assert result.exit_code == 1
    assert "nesting too deep" in result.output


# --- tokens / tree ---

def test_tokens_table():
    result = runner.invoke(app, ["tokens", "2^3"])
    assert result.exit_code == 0
    for name in ("NUMBER", "CARET", "EOF"):
        assert name in result.output


def test_tokens_error():
    result = runner.invoke(app, ["tokens", "1.2.3"])
    assert result.exit_code == 1
    assert "malformed number" in result.output


def test_tree_shows_nodes_and_normalized_form():
    result = runner.invoke(app, ["tree", "((1+2))*3"])
    assert result.exit_code == 0
    assert "Multiply" in result.output
    assert "Add" in result.output
    assert "(1 + 2) * 3" in result.output


def test_tree_error():
    result = runner.invoke(app, ["tree", "1 2"])
    assert result.exit_code == 1
    assert "trailing input" in result.output


# --- repl ---

def test_repl_evaluates_lines_until_quit():
    result = runner.invoke(app, ["repl"], input="1+2\n\n2^10\nquit\n9*9\n")
    assert result.exit_code == 0
    assert "= 3" in result.output
    assert "= 1024" in result.output
    assert "= 81" not in result.output


def test_repl_recovers_from_errors():
    result = runner.invoke(app, ["repl"], input="1/0\n6|3\n")
    assert result.exit_code == 0
    assert "division by zero" in result.output
    assert "= 7" in result.output


def test_repl_ends_on_eof():
    result = runner.invoke(app, ["repl"], input="")
    assert result.exit_code == 0


def test_no_args_shows_help():
    result = runner.invoke(app, [])
    assert "eval" in result.output
    assert "repl" in result.output


def test_eval_huge_depth_limit_reports_nesting_error(monkeypatch):
    monkeypatch.setenv("PARSEMATH_MAX_DEPTH", "100000")
    result = runner.invoke(app, ["eval", "(" * 400 + "1" + ")" * 400])
    assert result.exit_code == 1
    assert "nesting too deep" in result.output
    assert not isinstance(result.exception, RecursionError)


def test_error_marker_aligns_with_multiline_input():
    result = runner.invoke(app, ["tokens", "1\n+\t$"])
    assert result.exit_code == 1
    assert "  1 + $" in result.output
    assert "      ^" in result.output
