from __future__ import annotations

import sys
from typing import TextIO


class IndentingWriter:
    """Debug trace output, indented one level per nested evaluation."""

    def __init__(
        self,
        indent_size: int = 3,
        stream: TextIO | None = None,
        enabled: bool = False,
    ) -> None:
        self._indent_size = indent_size
        self._indents = 0
        self._stream = stream
        self.enabled = enabled

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def debug(self, message: str) -> None:
        if self.enabled:
            self._print_indentation()
            print(message, end="", file=self.stream)

    def debugln(self, message: str) -> None:
        if self.enabled:
            self.debug(message)
            print(file=self.stream)

    def indent(self) -> None:
        if self.enabled:
            self._indents += 1

    def dedent(self) -> None:
        if self.enabled:
            self._indents -= 1

    def _print_indentation(self) -> None:
        print(" " * self._indent_size * self._indents, end="", file=self.stream)
