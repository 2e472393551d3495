"""--tokens dump of the token stream to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from mini0.tokens import Token


def dump_tokens(tokens: Iterable[Token], *, file: TextIO | None = None) -> None:
    """Print one line per token to *file* (default stderr): position, type, lexeme, payload."""
    out = file if file is not None else sys.stderr
    for tok in tokens:
        out.write(f"{tok.line}:{tok.column} {tok.type.name} {tok.lexeme!r}")
        if tok.value is not None:
            out.write(f" = {tok.value!r}")
        out.write("\n")
