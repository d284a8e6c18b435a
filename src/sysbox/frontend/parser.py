import logging
from functools import lru_cache
from importlib.resources import files
from typing import Any, cast

from lark import Lark, Token, Transformer_NonRecursive, Tree
from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
)

from .ast_expressions import Binary, BinaryOp, Expression, Grouped, Literal

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when source text is not a well-formed arithmetic expression."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"failed to parse {source!r}: {reason}")
        self.source = source
        self.reason = reason


class AstTransformer(Transformer_NonRecursive):
    def add(self, children: list[object]) -> Binary:
        return self._binary(children, "+")

    def sub(self, children: list[object]) -> Binary:
        return self._binary(children, "-")

    def mul(self, children: list[object]) -> Binary:
        return self._binary(children, "*")

    def div(self, children: list[object]) -> Binary:
        return self._binary(children, "/")

    def mod(self, children: list[object]) -> Binary:
        return self._binary(children, "%")

    def _binary(self, children: list[object], op: BinaryOp) -> Binary:
        [left, right] = children
        return Binary(self._as_expression(left), self._as_expression(right), op)

    def group(self, children: list[object]) -> Grouped:
        [expr] = children
        return Grouped(self._as_expression(expr))

    def number(self, children: list[object]) -> Literal:
        [number] = children
        assert isinstance(number, Token)
        return Literal(float(str(number)))

    def _as_expression(self, value: object) -> Expression:
        assert isinstance(value, Expression)
        return value


def _load_grammar_text() -> str:
    grammar_file = files("sysbox.frontend").joinpath("grammar.lark")
    return grammar_file.read_text(encoding="utf-8")


@lru_cache(maxsize=1)
def get_parser() -> Lark:
    grammar = _load_grammar_text()
    return Lark(grammar, start="start", parser="lalr")


def parse_tree(source: str) -> Tree[Token]:
    parser: Any = get_parser()
    tree = parser.parse(source)
    return cast(Tree[Token], tree)


def parse_expression(source: str) -> Expression:
    try:
        parsed = parse_tree(source)
    except UnexpectedInput as error:
        reason = _describe(error)
        logger.debug("rejected %r: %s", source, reason)
        raise ParseError(source, reason) from error

    expression = AstTransformer().transform(parsed)
    assert isinstance(expression, Expression)
    return expression


def _describe(error: UnexpectedInput) -> str:
    if isinstance(error, UnexpectedCharacters):
        return f"unexpected character {error.char!r} at column {error.column}"

    if isinstance(error, UnexpectedToken):
        if error.token.type == "$END":
            return "unexpected end of input"
        return f"unexpected token {str(error.token)!r} at column {error.column}"

    if isinstance(error, UnexpectedEOF):
        return "unexpected end of input"

    return str(error).strip().splitlines()[0]
