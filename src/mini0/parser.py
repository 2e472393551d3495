"""mini0 parser: recursive descent recognizer with panic-mode recovery.

The parser builds nothing: each grammar rule is a method that consumes the
tokens of its construct and reports what does not fit. It reads exactly one
token of lookahead (``current``) and never gives a token back.

Statements starting with an identifier (local declaration, assignment,
call) are one rule: the identifier is consumed first and the token after it
picks the branch.
"""

from __future__ import annotations

from dataclasses import dataclass

from mini0.errors import Diagnostic, DiagnosticKind, DiagnosticSink
from mini0.lexer import Lexer
from mini0.tokens import Token, TokenType, describe, describe_token

DEFAULT_MAX_NESTING = 64
# Each bracketed expression level costs about nine interpreter frames
MAX_NESTING_LIMIT = 80


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Verdict of one check run, with diagnostics in emission order."""

    success: bool
    diagnostics: tuple[Diagnostic, ...]


class Parser:
    """Recognize the mini0 grammar over tokens pulled from a Lexer."""

    def __init__(
        self,
        lexer: Lexer,
        sink: DiagnosticSink,
        max_nesting: int = DEFAULT_MAX_NESTING,
    ) -> None:
        if not 1 <= max_nesting <= MAX_NESTING_LIMIT:
            raise ValueError(
                f"max_nesting must be between 1 and {MAX_NESTING_LIMIT}, got {max_nesting}"
            )
        self._lexer = lexer
        self._sink = sink
        self._max_nesting = max_nesting
        self._depth = 0
        self.had_error = False
        self.panic_mode = False
        self.previous: Token | None = None
        self.current: Token = self._pull()

    def parse(self) -> bool:
        """Recognize a whole program; True iff nothing was reported."""
        self._program()
        return not self.had_error and not self._lexer.had_error

    # ------------------------------------------------------------------
    # Token interface
    # ------------------------------------------------------------------

    def _pull(self) -> Token:
        while True:
            tok = self._lexer.next_token()
            if tok.type != TokenType.ERROR:
                return tok
            self._error_at(tok, str(tok.value), DiagnosticKind.LEXICAL)

    def _advance(self) -> Token:
        self.previous = self.current
        self.current = self._pull()
        return self.previous

    def _check(self, tt: TokenType) -> bool:
        return self.current.type == tt

    def _match(self, tt: TokenType) -> bool:
        if self.current.type != tt:
            return False
        self._advance()
        return True

    def _consume(self, tt: TokenType, context: str) -> bool:
        if self.current.type == tt:
            self._advance()
            return True
        self._error_at_current(
            f"{context}: expected {describe(tt)}, found {describe_token(self.current)}"
        )
        return False

    # ------------------------------------------------------------------
    # Error reporting and recovery
    # ------------------------------------------------------------------

    def _error_at(
        self, tok: Token, message: str, kind: DiagnosticKind = DiagnosticKind.SYNTAX
    ) -> None:
        if self.panic_mode:
            return
        self.panic_mode = True
        self.had_error = True
        self._sink.report(message, tok.span, kind)

    def _error_at_current(self, message: str) -> None:
        self._error_at(self.current, message)

    def _error_expected(self, what: str) -> None:
        self._error_at_current(f"expected {what}, found {describe_token(self.current)}")

    def _synchronize(self) -> None:
        """Skip to the next safe place to resume: after a newline or at a
        declaration/statement keyword."""
        while self.current.type != TokenType.EOF:
            if self.previous is not None and self.previous.type == TokenType.NL:
                break
            if self.current.type in _SYNC_TOKENS:
                break
            self._advance()
        self.panic_mode = False

    def _enter_nesting(self) -> bool:
        if self._depth >= self._max_nesting:
            self._error_at_current(f"nesting too deep (limit {self._max_nesting})")
            return False
        self._depth += 1
        return True

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _program(self) -> None:
        while self._match(TokenType.NL):
            pass
        while not self._check(TokenType.EOF):
            self._declaration()

    def _declaration(self) -> None:
        if self.panic_mode:
            self._synchronize()
            if self._check(TokenType.EOF):
                return

        if self._check(TokenType.FUN):
            self._function()
        elif self._check(TokenType.IDENTIFIER):
            self._var_declaration("global declaration")
            self._nl("global declaration")
        else:
            self._error_expected("a declaration")
            self._advance()

    def _function(self) -> None:
        self._advance()  # fun
        self._consume(TokenType.IDENTIFIER, "function declaration")
        self._consume(TokenType.LPAREN, "function declaration")
        self._params()
        self._consume(TokenType.RPAREN, "function parameters")
        if self._match(TokenType.COLON):
            self._type()
        self._nl("function header")
        self._block()
        self._consume(TokenType.END, "function body")
        self._nl("function declaration")

    def _params(self) -> None:
        if self._check(TokenType.RPAREN):
            return
        self._var_declaration("parameter")
        while self._match(TokenType.COMMA):
            self._var_declaration("parameter")

    def _var_declaration(self, context: str) -> None:
        self._consume(TokenType.IDENTIFIER, context)
        self._consume(TokenType.COLON, context)
        self._type()

    def _type(self) -> None:
        while self._match(TokenType.LBRACKET):
            self._consume(TokenType.RBRACKET, "array type")
        if self.current.type in _BASE_TYPES:
            self._advance()
        else:
            self._error_expected("a type")
            self._advance()

    def _nl(self, context: str) -> None:
        """Newline separator; optional before end of input and block closers."""
        if self.current.type not in _NL_OPTIONAL_BEFORE:
            self._consume(TokenType.NL, context)
        while self._match(TokenType.NL):
            pass

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _block(self) -> None:
        if not self._enter_nesting():
            return
        try:
            while self.current.type not in _BLOCK_END:
                if self.panic_mode:
                    self._synchronize()
                    continue
                self._statement()
                self._nl("statement")
        finally:
            self._depth -= 1

    def _statement(self) -> None:
        tt = self.current.type
        if tt == TokenType.IDENTIFIER:
            self._advance()
            self._statement_tail()
        elif tt == TokenType.IF:
            self._if_statement()
        elif tt == TokenType.WHILE:
            self._while_statement()
        elif tt == TokenType.RETURN:
            self._advance()
            if self.current.type in _EXPR_START:
                self._expression()
        else:
            self._error_expected("a statement")
            self._advance()

    def _statement_tail(self) -> None:
        if self._match(TokenType.COLON):
            self._type()
        elif self._match(TokenType.LPAREN):
            self._arguments()
            self._consume(TokenType.RPAREN, "call")
        elif self.current.type in (TokenType.LBRACKET, TokenType.EQ):
            while self._match(TokenType.LBRACKET):
                self._expression()
                self._consume(TokenType.RBRACKET, "index")
            self._consume(TokenType.EQ, "assignment")
            self._expression()
        else:
            self._error_expected("':', '=', '[' or '(' after identifier")

    def _if_statement(self) -> None:
        self._advance()  # if
        self._expression()
        self._nl("if condition")
        self._block()
        while self._match(TokenType.ELSE):
            if self._match(TokenType.IF):
                self._expression()
                self._nl("else-if condition")
                self._block()
            else:
                self._nl("else")
                self._block()
                break
        self._consume(TokenType.END, "if statement")

    def _while_statement(self) -> None:
        self._advance()  # while
        self._expression()
        self._nl("while condition")
        self._block()
        self._consume(TokenType.LOOP, "while statement")

    def _arguments(self) -> None:
        if self._check(TokenType.RPAREN):
            return
        self._expression()
        while self._match(TokenType.COMMA):
            self._expression()

    # ------------------------------------------------------------------
    # Expressions, lowest precedence first
    # ------------------------------------------------------------------

    def _expression(self) -> None:
        if not self._enter_nesting():
            return
        try:
            self._or()
        finally:
            self._depth -= 1

    def _or(self) -> None:
        self._and()
        while self._match(TokenType.OR):
            self._and()

    def _and(self) -> None:
        self._relational()
        while self._match(TokenType.AND):
            self._relational()

    def _relational(self) -> None:
        self._additive()
        # Non-associative: at most one operator
        if self.current.type in _REL_OPS:
            self._advance()
            self._additive()

    def _additive(self) -> None:
        self._multiplicative()
        while self.current.type in (TokenType.PLUS, TokenType.MINUS):
            self._advance()
            self._multiplicative()

    def _multiplicative(self) -> None:
        self._unary()
        while self.current.type in (TokenType.STAR, TokenType.SLASH):
            self._advance()
            self._unary()

    def _unary(self) -> None:
        while self.current.type in (TokenType.NOT, TokenType.MINUS):
            self._advance()
        self._postfix()

    def _postfix(self) -> None:
        self._primary()
        while self._match(TokenType.LBRACKET):
            self._expression()
            self._consume(TokenType.RBRACKET, "index")

    def _primary(self) -> None:
        tt = self.current.type
        if tt in _LITERALS:
            self._advance()
        elif tt == TokenType.NEW:
            self._advance()
            self._consume(TokenType.LBRACKET, "new expression")
            self._expression()
            self._consume(TokenType.RBRACKET, "new expression")
            self._type()
        elif tt == TokenType.LPAREN:
            self._advance()
            self._expression()
            self._consume(TokenType.RPAREN, "parenthesized expression")
        elif tt == TokenType.IDENTIFIER:
            self._advance()
            if self._match(TokenType.LPAREN):
                self._arguments()
                self._consume(TokenType.RPAREN, "call")
        else:
            self._error_expected("an expression")
            self._advance()


_SYNC_TOKENS: frozenset[TokenType] = frozenset(
    {TokenType.FUN, TokenType.IF, TokenType.WHILE, TokenType.RETURN, TokenType.END}
)
_BLOCK_END: frozenset[TokenType] = frozenset(
    {TokenType.END, TokenType.ELSE, TokenType.LOOP, TokenType.EOF, TokenType.FUN}
)
_NL_OPTIONAL_BEFORE: frozenset[TokenType] = frozenset(
    {TokenType.EOF, TokenType.END, TokenType.ELSE, TokenType.LOOP}
)
_BASE_TYPES: frozenset[TokenType] = frozenset(
    {TokenType.KW_INT, TokenType.KW_BOOL, TokenType.KW_CHAR, TokenType.KW_STRING}
)
_REL_OPS: frozenset[TokenType] = frozenset(
    {TokenType.GT, TokenType.LT, TokenType.GE, TokenType.LE, TokenType.EQ, TokenType.NE}
)
_LITERALS: frozenset[TokenType] = frozenset(
    {TokenType.NUMBER, TokenType.STRING, TokenType.TRUE, TokenType.FALSE}
)
_EXPR_START: frozenset[TokenType] = _LITERALS | frozenset(
    {TokenType.IDENTIFIER, TokenType.NEW, TokenType.LPAREN, TokenType.NOT, TokenType.MINUS}
)


def check(source: str, *, max_nesting: int = DEFAULT_MAX_NESTING) -> CheckResult:
    """Convenience function: check source text and return the verdict."""
    sink = DiagnosticSink()
    success = Parser(Lexer(source), sink, max_nesting).parse()
    return CheckResult(success, tuple(sink))
