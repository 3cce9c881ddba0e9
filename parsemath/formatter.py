"""Render an expression tree back to infix text.

Only the parentheses needed to reparse into the same tree are emitted:
``Multiply(Add(1, 2), 3)`` renders as ``(1 + 2) * 3``.
"""

from __future__ import annotations

import math
from decimal import Decimal

from parsemath.models import PRECEDENCE, RIGHT_ASSOCIATIVE, BinaryNode, Caret, Negative, Node, Number

# The right operand of '^' is parsed at the unary level, so negation binds
# there without parentheses: 2^-1.
_CARET_RHS_PRECEDENCE = PRECEDENCE[Negative]


def _format_number(value: float) -> str:
    if not math.isfinite(value):
        return repr(value)
    if math.copysign(1.0, value) < 0:
        # Parenthesized so it binds as an atom: (-2)^2, (-0)
        return f"(-{_format_number(-value)})"
    if float(value).is_integer():
        return str(int(value))
    # Positional notation; the tokenizer has no exponent syntax.
    return format(Decimal(repr(float(value))), "f")


def _wrap(text: str, needed: bool) -> str:
    return f"({text})" if needed else text


def _join(node: BinaryNode, left: str, right: str) -> str:
    if isinstance(node, Caret):
        return f"{left}{node.symbol}{right}"
    return f"{left} {node.symbol} {right}"


def format_expr(node: Node) -> str:
    """Render ``node`` as infix text with minimal parentheses."""
    # Rendered operands waiting for their parent: (text, precedence)
    rendered: list[tuple[str, int]] = []
    stack: list[tuple[Node, bool]] = [(node, False)]

    while stack:
        current, children_done = stack.pop()
        prec = PRECEDENCE[type(current)]

        if isinstance(current, Number):
            rendered.append((_format_number(current.value), prec))
        elif not children_done:
            stack.append((current, True))
            if isinstance(current, Negative):
                stack.append((current.operand, False))
            else:
                stack.append((current.right, False))
                stack.append((current.left, False))
        elif isinstance(current, Negative):
            text, operand_prec = rendered.pop()
            rendered.append(("-" + _wrap(text, operand_prec < prec), prec))
        else:
            right, right_prec = rendered.pop()
            left, left_prec = rendered.pop()
            right_assoc = type(current) in RIGHT_ASSOCIATIVE

            left_parens = left_prec < prec or (left_prec == prec and right_assoc)
            if isinstance(current, Caret):
                right_parens = right_prec < _CARET_RHS_PRECEDENCE
            else:
                right_parens = right_prec < prec or (right_prec == prec and not right_assoc)

            rendered.append((_join(current, _wrap(left, left_parens), _wrap(right, right_parens)), prec))

    return rendered.pop()[0]
