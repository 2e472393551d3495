"""Test top-level declarations: globals, functions, parameters, types."""

import pytest

from conftest import assert_ok, messages


class TestProgram:
    def test_empty(self, check_source):
        assert_ok(check_source(""))

    def test_blank_and_comments(self, check_source):
        assert_ok(check_source("\n\n// nothing here\n/* or here */\n"))

    def test_leading_blank_lines(self, check_source):
        assert_ok(check_source("\n\n\nx: int\n"))


class TestGlobals:
    def test_simple(self, check_source):
        assert_ok(check_source("x: int\n"))

    def test_without_trailing_newline(self, check_source):
        assert_ok(check_source("x: int"))

    @pytest.mark.parametrize("type_text", ["int", "bool", "char", "string", "[]int", "[][]string"])
    def test_types(self, check_source, type_text):
        assert_ok(check_source(f"x: {type_text}\n"))

    def test_several(self, check_source):
        assert_ok(check_source("a: [][]string\nb: bool\n\n\nc: char\n"))

    def test_missing_newline_between(self, check_source):
        result = check_source("x: int y: int\n")
        assert not result.success
        assert messages(result) == ["global declaration: expected newline, found 'y'"]

    def test_missing_colon(self, check_source):
        result = check_source("x: int\ny int\n")
        assert messages(result) == ["global declaration: expected ':', found 'int'"]
        assert result.diagnostics[0].line == 2
        assert result.diagnostics[0].column == 3

    def test_missing_type(self, check_source):
        result = check_source("x:\n")
        assert messages(result) == ["expected a type, found newline"]

    def test_unknown_type(self, check_source):
        result = check_source("x: foo\n")
        assert messages(result) == ["expected a type, found 'foo'"]

    def test_unclosed_array_type(self, check_source):
        result = check_source("x: [int\n")
        assert messages(result) == ["array type: expected ']', found 'int'"]

    def test_assignment_is_not_a_declaration(self, check_source):
        result = check_source("x = 1\n")
        assert messages(result) == ["global declaration: expected ':', found '='"]

    def test_statement_keyword_at_top_level(self, check_source):
        result = check_source("return 1\n")
        assert messages(result) == ["expected a declaration, found 'return'"]


class TestFunctions:
    def test_minimal(self, check_source):
        assert_ok(check_source("fun f()\nend\n"))

    def test_parameters_and_return_type(self, check_source):
        assert_ok(check_source("fun f(a: int): int\n  return a\nend\n"))

    def test_many_parameters(self, check_source):
        assert_ok(check_source("fun f(a: int, b: []char, c: bool): [][]string\nend\n"))

    def test_several_functions_and_globals(self, check_source):
        source = "g: int\nfun f(): int\n  return g\nend\nh: bool\nfun main()\n  f()\nend\n"
        assert_ok(check_source(source))

    def test_end_without_trailing_newline(self, check_source):
        assert_ok(check_source("fun f()\n  return\nend"))

    def test_missing_name(self, check_source):
        result = check_source("fun ()\nend\n")
        assert messages(result)[0] == "function declaration: expected identifier, found '('"

    def test_missing_parameter_colon(self, check_source):
        result = check_source("fun f(a int)\nend\n")
        assert messages(result) == ["parameter: expected ':', found 'int'"]

    def test_trailing_comma(self, check_source):
        result = check_source("fun f(a: int,)\nend\n")
        assert messages(result) == ["parameter: expected identifier, found ')'"]

    def test_missing_header_newline(self, check_source):
        result = check_source("fun f() return 1 end\n")
        assert messages(result) == ["function header: expected newline, found 'return'"]

    def test_missing_end_reported_at_next_function(self, check_source):
        source = "fun f()\n  x = 1\nfun g()\nend\n"
        result = check_source(source)
        assert messages(result) == ["function body: expected 'end', found 'fun'"]
        assert result.diagnostics[0].line == 3

    def test_missing_end_at_end_of_input(self, check_source):
        result = check_source("fun f()\n  x = 1\n")
        assert messages(result) == ["function body: expected 'end', found end of input"]
