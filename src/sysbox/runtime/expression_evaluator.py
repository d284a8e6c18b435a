import math
import operator
from typing import Callable

from ..frontend.ast_expressions import Binary, BinaryOp, Expression, Grouped, Literal
from ..writer import IndentingWriter
from .core import EvaluationError, RuntimeContext


def _divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _truncated_mod(left: float, right: float) -> float:
    # Both operands lose their fractional part first: 7.9 % 2 == 7 % 2.
    if not (math.isfinite(left) and math.isfinite(right)):
        return math.nan
    dividend, divisor = int(left), int(right)
    if divisor == 0:
        return math.nan
    remainder = abs(dividend) % abs(divisor)
    return float(-remainder if dividend < 0 else remainder)


_binary_ops: dict[BinaryOp, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
    "%": _truncated_mod,
}


def eval_expr(expr: Expression, context: RuntimeContext | None = None) -> float:
    """Reduce ``expr`` to a single value.

    The tree is walked with an explicit stack, so nesting depth is bounded
    by memory rather than by the interpreter's recursion limit. The left
    child of a ``Binary`` is always reduced before the right one, and the
    operator is only looked up once both children have values.
    """
    context = context or RuntimeContext()
    writer = context.writer

    values: list[float] = []
    pending: list[tuple[Expression, bool]] = [(expr, False)]
    depth = 0
    try:
        while pending:
            node, children_done = pending.pop()

            if isinstance(node, Literal):
                values.append(node.value)
            elif isinstance(node, Grouped):
                pending.append((node.expr, False))
            elif isinstance(node, Binary) and not children_done:
                writer.indent()
                depth += 1
                pending.append((node, True))
                pending.append((node.right, False))
                pending.append((node.left, False))
            elif isinstance(node, Binary):
                writer.dedent()
                depth -= 1
                right_value = values.pop()
                left_value = values.pop()
                values.append(_apply(node, left_value, right_value, writer))
            else:
                raise EvaluationError(
                    f"unknown expression node: {type(node).__name__}"
                )
    finally:
        for _ in range(depth):
            writer.dedent()

    [result] = values
    return result


def _apply(
    node: Binary, left_value: float, right_value: float, writer: IndentingWriter
) -> float:
    binary_op = _binary_ops.get(node.op)
    if binary_op is None:
        raise EvaluationError(f"unknown operator '{node.op}'")

    result = binary_op(left_value, right_value)
    writer.debugln(f"[{left_value!r} {node.op} {right_value!r} => {result!r}]")
    return result
