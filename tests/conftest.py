"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from mini0.lexer import tokenize
from mini0.parser import CheckResult, check
from mini0.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def check_source():
    """Return a helper that checks source and returns the CheckResult."""

    def _check(source: str, **kwargs) -> CheckResult:
        return check(source, **kwargs)

    return _check


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def messages(result: CheckResult) -> list[str]:
    """Return the diagnostic messages of a result, in order."""
    return [d.message for d in result.diagnostics]


def body(*lines: str) -> str:
    """Wrap statement lines in a function so they can be checked."""
    inner = "".join(f"  {line}\n" for line in lines)
    return f"fun f()\n{inner}end\n"


def assert_ok(result: CheckResult) -> None:
    """Assert that a check succeeded, showing diagnostics otherwise."""
    assert result.success, f"Unexpected diagnostics: {messages(result)}"
    assert result.diagnostics == ()
