import math
import operator
from io import StringIO
from typing import Callable, cast

import pytest

from sysbox.frontend.ast_expressions import (
    Binary,
    BinaryOp,
    Expression,
    Grouped,
    Literal,
)
from sysbox.frontend.parser import parse_expression
from sysbox.runtime.core import EvaluationError, RuntimeContext
from sysbox.runtime.expression_evaluator import eval_expr
from sysbox.writer import IndentingWriter


def evaluate_source(source: str) -> float:
    return eval_expr(parse_expression(source))


# ===== Arithmetic =====
@pytest.mark.parametrize(
    ("symbol", "apply"),
    [
        ("+", operator.add),
        ("-", operator.sub),
        ("*", operator.mul),
        ("/", operator.truediv),
    ],
)
@pytest.mark.parametrize(("a", "b"), [(3.0, 4.0), (0.1, 0.2), (10.0, 3.0), (2.5, 1e3)])
def test_binary_ops_match_float_arithmetic(
    symbol: str, apply: Callable[[float, float], float], a: float, b: float
) -> None:
    assert evaluate_source(f"{a!r} {symbol} {b!r}") == apply(a, b)


def test_precedence() -> None:
    assert evaluate_source("2 + 3 * 4") == 14.0
    assert evaluate_source("(2 + 3) * 4") == 20.0


def test_grouped_is_transparent() -> None:
    assert eval_expr(Grouped(Grouped(Literal(4.5)))) == 4.5


# ===== Modulus =====
@pytest.mark.parametrize(("a", "b"), [(7.0, 2.0), (7.9, 2.0), (10.0, 3.5), (0.5, 2.0)])
def test_modulus_truncates_operands(a: float, b: float) -> None:
    assert evaluate_source(f"{a!r} % {b!r}") == float(int(a) % int(b))


def test_modulus_ignores_fraction_of_dividend() -> None:
    assert evaluate_source("7.9 % 2") == evaluate_source("7 % 2")


def test_modulus_remainder_takes_sign_of_dividend() -> None:
    assert eval_expr(Binary(Literal(-7.0), Literal(2.0), "%")) == -1.0
    assert eval_expr(Binary(Literal(7.0), Literal(-2.0), "%")) == 1.0
    assert evaluate_source("(0 - 7.5) % 4") == -3.0


def test_modulus_by_truncated_zero_is_nan() -> None:
    assert math.isnan(evaluate_source("5 % 0"))
    assert math.isnan(evaluate_source("5 % 0.9"))


def test_modulus_with_infinite_operand_is_nan() -> None:
    assert math.isnan(evaluate_source("(1 / 0) % 3"))


# ===== Division By Zero =====
def test_division_by_zero_is_infinite() -> None:
    assert evaluate_source("1 / 0") == math.inf
    assert evaluate_source("(0 - 1) / 0") == -math.inf


def test_division_by_negative_zero_flips_sign() -> None:
    assert eval_expr(Binary(Literal(1.0), Literal(-0.0), "/")) == -math.inf


def test_zero_divided_by_zero_is_nan() -> None:
    assert math.isnan(evaluate_source("0 / 0"))


# ===== Unsupported Trees =====
def test_unknown_operator_raises_evaluation_error() -> None:
    expression = Binary(Literal(1.0), Literal(2.0), cast(BinaryOp, "^"))
    with pytest.raises(EvaluationError, match="unknown operator '\\^'"):
        eval_expr(expression)


def test_unknown_node_raises_evaluation_error() -> None:
    class Call(Expression):
        pass

    with pytest.raises(EvaluationError, match="Call"):
        eval_expr(Call())


def test_unknown_node_deep_in_tree_is_not_swallowed() -> None:
    expression = Binary(
        Literal(1.0),
        Grouped(Binary(Literal(2.0), Expression(), "*")),
        "+",
    )
    with pytest.raises(EvaluationError):
        eval_expr(expression)


# ===== Tracing =====
def test_trace_prints_each_reduction_indented_by_depth() -> None:
    stream = StringIO()
    context = RuntimeContext(writer=IndentingWriter(stream=stream, enabled=True))

    assert eval_expr(parse_expression("1 + 2 * 3"), context) == 7.0
    assert stream.getvalue() == "   [2.0 * 3.0 => 6.0]\n[1.0 + 6.0 => 7.0]\n"


def test_trace_is_silent_by_default() -> None:
    stream = StringIO()
    context = RuntimeContext(writer=IndentingWriter(stream=stream))

    eval_expr(parse_expression("1 + 2"), context)
    assert stream.getvalue() == ""


def test_left_child_error_is_reported_before_bad_operator() -> None:
    class Call(Expression):
        pass

    expression = Binary(Call(), Literal(2.0), cast(BinaryOp, "^"))
    with pytest.raises(EvaluationError, match="unknown expression node: Call"):
        eval_expr(expression)


def test_trace_indentation_is_restored_after_error() -> None:
    stream = StringIO()
    context = RuntimeContext(writer=IndentingWriter(stream=stream, enabled=True))
    broken = Binary(Literal(1.0), Binary(Literal(2.0), Expression(), "*"), "+")

    with pytest.raises(EvaluationError):
        eval_expr(broken, context)
    eval_expr(parse_expression("1 + 2"), context)

    assert stream.getvalue() == "[1.0 + 2.0 => 3.0]\n"


# ===== Deep Trees =====
def test_long_left_leaning_chain_evaluates() -> None:
    expression: Expression = Literal(1.0)
    for _ in range(5000):
        expression = Binary(expression, Literal(1.0), "+")

    assert eval_expr(expression) == 5001.0


def test_long_right_leaning_chain_evaluates() -> None:
    expression: Expression = Literal(0.0)
    for _ in range(5000):
        expression = Binary(Literal(2.0), Grouped(expression), "-")

    assert eval_expr(expression) == 0.0


def test_deeply_grouped_literal_evaluates() -> None:
    expression: Expression = Literal(4.0)
    for _ in range(5000):
        expression = Grouped(expression)

    assert eval_expr(expression) == 4.0
