from dataclasses import dataclass
from typing import Literal as TypingLiteral

BinaryOp = TypingLiteral["+", "-", "*", "/", "%"]


class Expression:
    pass


@dataclass(frozen=True, slots=True)
class Literal(Expression):
    value: float


@dataclass(frozen=True, slots=True)
class Binary(Expression):
    left: Expression
    right: Expression
    op: BinaryOp


@dataclass(frozen=True, slots=True)
class Grouped(Expression):
    """A parenthesized sub-expression; evaluates to its inner expression."""

    expr: Expression
