"""Tree-walking evaluator for parsemath ASTs.

Pure evaluation: no I/O, no side effects, never calls Python's eval(). The
walk uses an explicit stack, so tree depth is not bounded by the interpreter's
recursion limit.
"""

from __future__ import annotations

import math
import operator
from typing import Callable, Optional

from parsemath.config import Settings
from parsemath.errors import DivisionByZero, EvalError
from parsemath.models import (
    Add,
    And,
    BinaryNode,
    Caret,
    Divide,
    Multiply,
    Negative,
    Node,
    Number,
    Or,
    Subtract,
)
from parsemath.parser import parse

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _to_i64(value: float) -> int:
    """Truncate toward zero into the int64 range, saturating at the bounds. NaN → 0."""
    if math.isnan(value):
        return 0
    if value >= _I64_MAX:
        return _I64_MAX
    if value <= _I64_MIN:
        return _I64_MIN
    return int(value)


def _divide(left: float, right: float) -> float:
    if right == 0.0:
        raise DivisionByZero()
    return left / right


def _odd_integer(value: float) -> bool:
    return value.is_integer() and value % 2 == 1


def _power(base: float, exponent: float) -> float:
    """IEEE pow: NaN for a negative base with a fractional exponent, ±inf on overflow."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # math.pow raises where C pow returns a value
        if base == 0.0:
            if math.copysign(1.0, base) < 0 and _odd_integer(exponent):
                return -math.inf
            return math.inf
        return math.nan


def _bitwise_and(left: float, right: float) -> float:
    return float(_to_i64(left) & _to_i64(right))


def _bitwise_or(left: float, right: float) -> float:
    return float(_to_i64(left) | _to_i64(right))


_BIN_OPS: dict[type, Callable[[float, float], float]] = {
    Add: operator.add,
    Subtract: operator.sub,
    Multiply: operator.mul,
    Divide: _divide,
    Caret: _power,
    And: _bitwise_and,
    Or: _bitwise_or,
}


def evaluate(node: Node) -> float:
    """Reduce an expression tree to a single float.

    Operands are evaluated left before right and the first error stops the
    walk.

    Args:
        node: Root of a parsed expression tree.

    Returns:
        The computed value.

    Raises:
        DivisionByZero: If a divisor evaluates to exactly zero.
        EvalError: If the tree contains an unknown node type.
    """
    values: list[float] = []
    # (node, children_done) pairs; children are pushed right-first so the
    # left operand is popped and evaluated first.
    stack: list[tuple[Node, bool]] = [(node, False)]

    while stack:
        current, children_done = stack.pop()

        if isinstance(current, Number):
            values.append(float(current.value))

        elif isinstance(current, Negative):
            if children_done:
                values.append(-values.pop())
            else:
                stack.append((current, True))
                stack.append((current.operand, False))

        elif isinstance(current, BinaryNode) and type(current) in _BIN_OPS:
            if children_done:
                right = values.pop()
                left = values.pop()
                values.append(_BIN_OPS[type(current)](left, right))
            else:
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))

        else:
            raise EvalError(f"Unknown expression node: {type(current).__name__}")

    return values.pop()


def calculate(source: str, settings: Optional[Settings] = None) -> float:
    """Parse and evaluate an expression string in one step."""
    return evaluate(parse(source, settings))
