"""mini0 lexer: pulls one token at a time from source text."""

from __future__ import annotations

from mini0.tokens import (
    KEYWORDS,
    Position,
    Span,
    Token,
    TokenType,
    is_digit,
    is_hex_digit,
    is_ident_char,
    is_ident_start,
)

_SINGLE_CHAR: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "=": TokenType.EQ,
    ">": TokenType.GT,
    "<": TokenType.LT,
}

_TWO_CHAR: dict[str, TokenType] = {
    ">=": TokenType.GE,
    "<=": TokenType.LE,
    "<>": TokenType.NE,
}

_STRING_ESCAPES: dict[str, str] = {"\\": "\\", "n": "\n", "t": "\t", '"': '"'}

_INT32_RANGE = 1 << 32
_INT32_MAX = (1 << 31) - 1


def wrap_int32(n: int) -> int:
    """Wrap a non-negative literal value to a signed 32-bit integer."""
    n %= _INT32_RANGE
    return n - _INT32_RANGE if n > _INT32_MAX else n


class Lexer:
    """Scan mini0 source text on demand, one Token per next_token() call.

    Malformed input never raises: it yields an ERROR token whose value is
    the message, and the next call carries on after the bad text.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1
        self._seen_token = False
        self.had_error = False
        self.error_message = ""

    def next_token(self) -> Token:
        self._skip_trivia()

        start = self._current_pos()
        ch = self._peek()

        if ch == "":
            return self._make(TokenType.EOF, start)

        self._seen_token = True

        if ch == "\n":
            return self._lex_newlines(start)

        if is_ident_start(ch):
            return self._lex_word(start)

        if is_digit(ch):
            return self._lex_number(start)

        if ch == '"':
            return self._lex_string(start)

        pair = ch + self._peek(1)
        if pair in _TWO_CHAR:
            self._advance()
            self._advance()
            return self._make(_TWO_CHAR[pair], start)

        if ch in _SINGLE_CHAR:
            self._advance()
            return self._make(_SINGLE_CHAR[ch], start)

        self._advance()
        return self._error(f"unexpected character {ch!r}", start)

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _make(self, tt: TokenType, start: Position, value: int | str | None = None) -> Token:
        end = self._current_pos()
        lexeme = self._source[start.offset : end.offset]
        return Token(tt, lexeme, Span(start, end), value)

    def _error(self, message: str, start: Position) -> Token:
        self.had_error = True
        self.error_message = message
        return self._make(TokenType.ERROR, start, message)

    # ------------------------------------------------------------------
    # Whitespace and comments
    # ------------------------------------------------------------------

    def _skip_trivia(self) -> None:
        while True:
            ch = self._peek()
            if ch in (" ", "\t", "\r"):
                self._advance()
            elif ch == "\n" and not self._seen_token:
                # Blank lines before the first token are not significant
                self._advance()
            elif ch == "/" and self._peek(1) == "/":
                while self._peek() not in ("", "\n"):
                    self._advance()
            elif ch == "/" and self._peek(1) == "*":
                self._skip_block_comment()
            else:
                return

    def _skip_block_comment(self) -> None:
        self._advance()  # /
        self._advance()  # *
        # An unclosed comment runs silently to end of input
        while self._pos < len(self._source):
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()

    # ------------------------------------------------------------------
    # Token scanners
    # ------------------------------------------------------------------

    def _lex_newlines(self, start: Position) -> Token:
        self._advance()
        while self._peek() in ("\n", " ", "\t", "\r"):
            self._advance()
        return self._make(TokenType.NL, start)

    def _lex_word(self, start: Position) -> Token:
        while is_ident_char(self._peek()):
            self._advance()
        text = self._source[start.offset : self._pos]
        return self._make(KEYWORDS.get(text, TokenType.IDENTIFIER), start)

    def _lex_number(self, start: Position) -> Token:
        first = self._advance()

        if first == "0" and self._peek() in ("x", "X"):
            self._advance()  # consume x
            if not is_hex_digit(self._peek()):
                return self._error("invalid hexadecimal literal", start)
            while is_hex_digit(self._peek()):
                self._advance()
            digits = self._source[start.offset + 2 : self._pos]
            return self._make(TokenType.NUMBER, start, wrap_int32(int(digits, 16)))

        while is_digit(self._peek()):
            self._advance()
        digits = self._source[start.offset : self._pos]
        return self._make(TokenType.NUMBER, start, wrap_int32(int(digits)))

    def _lex_string(self, start: Position) -> Token:
        self._advance()  # opening quote
        chars: list[str] = []
        bad_escape: str | None = None

        while True:
            ch = self._peek()
            if ch in ("", "\n"):
                # The newline is left for the next NL token
                return self._error("unterminated string", start)
            if ch == '"':
                self._advance()
                break
            if ch == "\\":
                self._advance()
                esc = self._peek()
                if esc in _STRING_ESCAPES:
                    self._advance()
                    chars.append(_STRING_ESCAPES[esc])
                elif esc not in ("", "\n"):
                    self._advance()
                    if bad_escape is None:
                        bad_escape = f"invalid escape sequence '\\{esc}'"
                continue
            chars.append(self._advance())

        if bad_escape is not None:
            return self._error(bad_escape, start)
        return self._make(TokenType.STRING, start, "".join(chars))


def tokenize(source: str) -> list[Token]:
    """Convenience function: scan source up to and including the first EOF."""
    lexer = Lexer(source)
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == TokenType.EOF:
            return tokens
