"""Test decimal and hexadecimal integer literals."""

from mini0.lexer import wrap_int32
from mini0.tokens import TokenType

from conftest import assert_types


class TestDecimal:
    def test_value(self, lex):
        tokens = lex("26")
        assert_types(tokens, [TokenType.NUMBER])
        assert tokens[0].value == 26
        assert tokens[0].lexeme == "26"

    def test_leading_zeros(self, lex):
        tokens = lex("007")
        assert tokens[0].value == 7

    def test_zero(self, lex):
        tokens = lex("0")
        assert_types(tokens, [TokenType.NUMBER])
        assert tokens[0].value == 0

    def test_digits_then_letters_split(self, lex):
        tokens = lex("12abc")
        assert_types(tokens, [TokenType.NUMBER, TokenType.IDENTIFIER])
        assert tokens[0].value == 12

    def test_negative_is_two_tokens(self, lex):
        tokens = lex("-5")
        assert_types(tokens, [TokenType.MINUS, TokenType.NUMBER])
        assert tokens[1].value == 5


class TestHex:
    def test_same_value_as_decimal(self, lex):
        hex_tok = lex("0x1A")[0]
        dec_tok = lex("26")[0]
        assert hex_tok.type == dec_tok.type == TokenType.NUMBER
        assert hex_tok.value == dec_tok.value == 26
        assert hex_tok.lexeme == "0x1A"

    def test_upper_prefix_lower_digits(self, lex):
        tokens = lex("0X1a")
        assert_types(tokens, [TokenType.NUMBER])
        assert tokens[0].value == 26

    def test_stops_at_non_hex(self, lex):
        tokens = lex("0x10g")
        assert_types(tokens, [TokenType.NUMBER, TokenType.IDENTIFIER])
        assert tokens[0].value == 16

    def test_prefix_only_is_error(self, lex):
        tokens = lex("0x")
        assert_types(tokens, [TokenType.ERROR])
        assert tokens[0].value == "invalid hexadecimal literal"
        assert tokens[0].lexeme == "0x"

    def test_prefix_then_non_hex_is_error(self, lex):
        tokens = lex("0xg")
        assert_types(tokens, [TokenType.ERROR, TokenType.IDENTIFIER])

    def test_only_zero_starts_hex(self, lex):
        tokens = lex("1x2")
        assert_types(tokens, [TokenType.NUMBER, TokenType.IDENTIFIER])
        assert tokens[0].value == 1


class TestOverflow:
    def test_int32_max_kept(self, lex):
        assert lex("2147483647")[0].value == 2147483647

    def test_decimal_wraps(self, lex):
        assert lex("2147483648")[0].value == -2147483648

    def test_hex_wraps(self, lex):
        assert lex("0xFFFFFFFF")[0].value == -1

    def test_wide_hex_wraps(self, lex):
        assert lex("0x100000001")[0].value == 1

    def test_wrap_helper(self):
        assert wrap_int32(0) == 0
        assert wrap_int32(1 << 32) == 0
        assert wrap_int32((1 << 31) + 5) == -(1 << 31) + 5
