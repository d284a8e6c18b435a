from __future__ import annotations

from dataclasses import dataclass, field

from ..writer import IndentingWriter

PROMPT = "calc> "


class EvaluationError(Exception):
    """An expression node or operator the evaluator does not support."""


@dataclass
class RuntimeContext:
    writer: IndentingWriter = field(default_factory=IndentingWriter)
    prompt: str = PROMPT
