"""CLI for the parsemath expression evaluator.

Usage:
    python -m parsemath eval "3 + 2 * 5"         # Print the result
    python -m parsemath eval -- "-5 + 3"         # Leading '-' needs the -- separator
    python -m parsemath tokens "2^3"             # Show the token stream
    python -m parsemath tree "1 - (2 - 3)"       # Show the parsed tree
    python -m parsemath repl                     # Interactive session
"""

from __future__ import annotations

import math
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from parsemath.config import Settings, load_settings
from parsemath.errors import ParsemathError
from parsemath.evaluator import calculate
from parsemath.formatter import format_expr
from parsemath.models import BinaryNode, Negative, Node, Number, TokenKind
from parsemath.parser import parse
from parsemath.tokenizer import tokenize

app = typer.Typer(
    name="parsemath",
    help="Arithmetic expression evaluator",
    no_args_is_help=True,
)
out = Console(highlight=False)
console = Console(stderr=True, highlight=False)

_QUIT_WORDS = ("quit", "exit")


def _settings() -> Settings:
    """Load settings from the environment, exiting with a message if invalid."""
    try:
        return load_settings()
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(2)


def _format_result(value: float, precision: Optional[int]) -> str:
    """Format a result: significant digits if given, else shortest repr without '.0'."""
    if precision:
        return f"{value:.{precision}g}"
    text = repr(value)
    if math.isfinite(value) and text.endswith(".0"):
        return text[:-2]
    return text


def _report_error(source: str, error: ParsemathError) -> None:
    """Print an error with its kind and, where known, a marker under the offset."""
    console.print(f"[red]Error ({error.kind}):[/red] {escape(str(error))}")
    if error.pos is not None:
        # One column per character so the marker lines up
        flat = source.replace("\n", " ").replace("\t", " ")
        console.print(f"  {escape(flat)}", soft_wrap=True)
        console.print(f"  {' ' * error.pos}[red]^[/red]", soft_wrap=True)


def _label(node: Node) -> str:
    if isinstance(node, Number):
        return f"[cyan]{node.value!r}[/cyan]"
    if isinstance(node, Negative):
        return "[bold]Negative[/bold] (-)"
    if isinstance(node, BinaryNode):
        return f"[bold]{type(node).__name__}[/bold] ({escape(node.symbol)})"
    return type(node).__name__


def _children(node: Node) -> list[Node]:
    if isinstance(node, Negative):
        return [node.operand]
    if isinstance(node, BinaryNode):
        return [node.left, node.right]
    return []


def _build_tree(node: Node) -> Tree:
    """Mirror an AST as a Rich Tree without recursing on tree depth."""
    root = Tree(_label(node))
    stack = [(node, root)]
    while stack:
        current, branch = stack.pop()
        for child in _children(current):
            stack.append((child, branch.add(_label(child))))
    return root


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression to evaluate (e.g., '3 + 2 * 5')"),
    precision: Optional[int] = typer.Option(None, "--precision", "-p", min=1, help="Significant digits to print"),
) -> None:
    """Evaluate an expression and print the result."""
    settings = _settings()
    try:
        result = calculate(expression, settings)
    except ParsemathError as e:
        _report_error(expression, e)
        raise typer.Exit(1)
    out.print(_format_result(result, precision or settings.precision))


@app.command("tokens")
def cmd_tokens(
    expression: str = typer.Argument(help="Expression to tokenize"),
) -> None:
    """Show the token stream for an expression."""
    table = Table(title="Tokens", show_header=True, header_style="bold")
    table.add_column("Kind", style="green")
    table.add_column("Value")
    table.add_column("Offset", justify="right")

    try:
        for tok in tokenize(expression):
            value = repr(tok.value) if tok.kind == TokenKind.NUMBER else escape(str(tok))
            table.add_row(tok.kind.name, value, str(tok.pos))
    except ParsemathError as e:
        _report_error(expression, e)
        raise typer.Exit(1)

    out.print(table)


@app.command("tree")
def cmd_tree(
    expression: str = typer.Argument(help="Expression to parse"),
) -> None:
    """Show the parsed tree and its normalized infix form."""
    settings = _settings()
    try:
        node = parse(expression, settings)
    except ParsemathError as e:
        _report_error(expression, e)
        raise typer.Exit(1)

    out.print(_build_tree(node))
    out.print(f"[dim]Normalized:[/dim] {escape(format_expr(node))}")


@app.command("repl")
def cmd_repl(
    precision: Optional[int] = typer.Option(None, "--precision", "-p", min=1, help="Significant digits to print"),
) -> None:
    """Evaluate expressions interactively until 'quit', 'exit' or end of input."""
    settings = _settings()
    precision = precision or settings.precision

    out.print("[bold]parsemath[/bold] operators: + - * / ^ & | ( ) and unary -")
    out.print("[dim]Type 'quit' or press Ctrl-D to leave.[/dim]")

    while True:
        try:
            line = out.input("[bold cyan]> [/bold cyan]")
        except (EOFError, KeyboardInterrupt):
            out.print()
            break

        text = line.strip()
        if not text:
            continue
        if text in _QUIT_WORDS:
            break

        try:
            result = calculate(text, settings)
        except ParsemathError as e:
            _report_error(text, e)
            continue
        out.print(f"= {_format_result(result, precision)}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
