"""Batch and interactive drivers for the calculator.

Both modes share one per-input contract: parse, evaluate, format, then
print either the result or a single ``ERROR: ...`` line. Parse and
evaluation failures never escape these functions.
"""

import logging
import sys
from typing import Sequence, TextIO

from ..frontend.parser import ParseError, parse_expression
from .core import EvaluationError, RuntimeContext
from .expression_evaluator import eval_expr
from .formatter import format_result

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit")


def evaluate(source: str, context: RuntimeContext | None = None) -> str:
    expression = parse_expression(source)
    value = eval_expr(expression, context)
    logger.debug("evaluated %r => %r", source, value)
    return format_result(value)


def run_calc(
    args: Sequence[str],
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    context: RuntimeContext | None = None,
) -> int:
    if args:
        return run_batch(args, stdout=stdout, context=context)
    return run_interactive(stdin=stdin, stdout=stdout, context=context)


def run_batch(
    args: Sequence[str],
    stdout: TextIO | None = None,
    context: RuntimeContext | None = None,
) -> int:
    # Accepts `calc 3 + 4` as well as `calc '3 + 4'`.
    source = " ".join(args)
    stream = stdout if stdout is not None else sys.stdout

    return 0 if _evaluate_and_print(source, stream, context) else 1


def run_interactive(
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    context: RuntimeContext | None = None,
) -> int:
    in_stream = stdin if stdin is not None else sys.stdin
    out_stream = stdout if stdout is not None else sys.stdout
    context = context or RuntimeContext()

    _show_prompt(context, out_stream)
    try:
        for raw_line in in_stream:
            line = raw_line.strip()
            if line:
                if line.startswith(EXIT_COMMANDS):
                    return 0
                _evaluate_and_print(line, out_stream, context)
            _show_prompt(context, out_stream)
    except (OSError, UnicodeDecodeError) as error:
        logger.error("failed to read input: %s", error)

    return 0


def _evaluate_and_print(
    source: str, stream: TextIO, context: RuntimeContext | None
) -> bool:
    try:
        result = evaluate(source, context)
    except (ParseError, EvaluationError) as error:
        print(f"ERROR: {error}", file=stream)
        return False

    print(result, file=stream)
    return True


def _show_prompt(context: RuntimeContext, stream: TextIO) -> None:
    print(context.prompt, end="", file=stream, flush=True)
