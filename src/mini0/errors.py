"""Diagnostics: positioned messages with formatted source context."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from mini0.tokens import Span


class DiagnosticKind(Enum):
    LEXICAL = "lexical"
    SYNTAX = "syntax"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single error message anchored at a source span."""

    message: str
    span: Span
    kind: DiagnosticKind = DiagnosticKind.SYNTAX

    @property
    def line(self) -> int:
        return self.span.start.line

    @property
    def column(self) -> int:
        return self.span.start.column

    def format_short(self, filename: str = "input.mini0") -> str:
        return f"{filename}:{self.line}:{self.column}: error: {self.message}"

    def format(self, source: str, filename: str = "input.mini0") -> str:
        lines = source.splitlines(keepends=True)
        line_idx = self.line - 1
        col = self.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class DiagnosticSink:
    """Append-only, ordered collection of diagnostics shared by one check run."""

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def report(
        self, message: str, span: Span, kind: DiagnosticKind = DiagnosticKind.SYNTAX
    ) -> Diagnostic:
        diag = Diagnostic(message, span, kind)
        self._items.append(diag)
        return diag

    @property
    def had_error(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
