"""mini0 syntax checker."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mini0.parser import CheckResult

__version__ = "0.1.0"


def check(source: str, *, max_nesting: int | None = None) -> CheckResult:
    """Check mini0 source text and return the verdict with its diagnostics.

    *max_nesting* defaults to ``mini0.parser.DEFAULT_MAX_NESTING``.
    """
    from mini0.parser import DEFAULT_MAX_NESTING
    from mini0.parser import check as _check

    if max_nesting is None:
        max_nesting = DEFAULT_MAX_NESTING
    return _check(source, max_nesting=max_nesting)
