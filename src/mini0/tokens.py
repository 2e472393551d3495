"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType


class TokenType(Enum):
    # Layout
    EOF = auto()
    NL = auto()  # one or more line breaks, collapsed

    # Literals and names
    NUMBER = auto()  # decimal or 0x hex; value is the int
    STRING = auto()  # "..."; value is the decoded text
    IDENTIFIER = auto()

    # Reserved words
    IF = auto()
    ELSE = auto()
    END = auto()
    WHILE = auto()
    LOOP = auto()
    FUN = auto()
    RETURN = auto()
    NEW = auto()
    KW_STRING = auto()
    KW_INT = auto()
    KW_CHAR = auto()
    KW_BOOL = auto()
    TRUE = auto()
    FALSE = auto()
    AND = auto()
    OR = auto()
    NOT = auto()

    # Arithmetic
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /

    # Relational
    GT = auto()  # >
    LT = auto()  # <
    GE = auto()  # >=
    LE = auto()  # <=
    EQ = auto()  # =
    NE = auto()  # <>

    # Punctuation
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    COMMA = auto()  # ,
    COLON = auto()  # :

    ERROR = auto()  # lexical error; value is the message


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with its source text and decoded payload.

    ``value`` is an ``int`` for NUMBER, the decoded ``str`` for STRING, the
    error message for ERROR, and ``None`` for everything else.
    """

    type: TokenType
    lexeme: str
    span: Span
    value: int | str | None = None

    @property
    def line(self) -> int:
        return self.span.start.line

    @property
    def column(self) -> int:
        return self.span.start.column


KEYWORDS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "if": TokenType.IF,
        "else": TokenType.ELSE,
        "end": TokenType.END,
        "while": TokenType.WHILE,
        "loop": TokenType.LOOP,
        "fun": TokenType.FUN,
        "return": TokenType.RETURN,
        "new": TokenType.NEW,
        "string": TokenType.KW_STRING,
        "int": TokenType.KW_INT,
        "char": TokenType.KW_CHAR,
        "bool": TokenType.KW_BOOL,
        "true": TokenType.TRUE,
        "false": TokenType.FALSE,
        "and": TokenType.AND,
        "or": TokenType.OR,
        "not": TokenType.NOT,
    }
)

# Fixed-text tokens, for messages that name the expected token
_FIXED_TEXT: dict[TokenType, str] = {tt: text for text, tt in KEYWORDS.items()}
_FIXED_TEXT.update(
    {
        TokenType.PLUS: "+",
        TokenType.MINUS: "-",
        TokenType.STAR: "*",
        TokenType.SLASH: "/",
        TokenType.GT: ">",
        TokenType.LT: "<",
        TokenType.GE: ">=",
        TokenType.LE: "<=",
        TokenType.EQ: "=",
        TokenType.NE: "<>",
        TokenType.LPAREN: "(",
        TokenType.RPAREN: ")",
        TokenType.LBRACKET: "[",
        TokenType.RBRACKET: "]",
        TokenType.COMMA: ",",
        TokenType.COLON: ":",
    }
)

_CATEGORY_NAMES: dict[TokenType, str] = {
    TokenType.EOF: "end of input",
    TokenType.NL: "newline",
    TokenType.NUMBER: "number",
    TokenType.STRING: "string literal",
    TokenType.IDENTIFIER: "identifier",
    TokenType.ERROR: "invalid token",
}


def describe(tt: TokenType) -> str:
    """Human-readable name of a token type: ``'('``, ``'loop'``, ``identifier``."""
    if tt in _FIXED_TEXT:
        return f"'{_FIXED_TEXT[tt]}'"
    return _CATEGORY_NAMES[tt]


def describe_token(tok: Token) -> str:
    """Describe an actual token for a "found ..." message."""
    if tok.type in (TokenType.EOF, TokenType.NL):
        return _CATEGORY_NAMES[tok.type]
    return f"'{tok.lexeme}'"


def is_ident_start(ch: str) -> bool:
    """Return True if ch can start an identifier (ASCII letter or underscore)."""
    return ch.isascii() and (ch.isalpha() or ch == "_")


def is_ident_char(ch: str) -> bool:
    """Return True if ch can continue an identifier."""
    return ch.isascii() and (ch.isalnum() or ch == "_")


def is_digit(ch: str) -> bool:
    """Return True if ch is a decimal digit."""
    return ch != "" and ch in "0123456789"


def is_hex_digit(ch: str) -> bool:
    """Return True if ch is a hexadecimal digit."""
    return ch != "" and ch in "0123456789abcdefABCDEF"
