import io

import pytest

from compiler.error import EndOfFileError, UnexpectedCharError
from compiler.scanner import Scanner
from compiler.source_location import SourceLocation
from compiler.token import *


def scan(source):
    scanner = Scanner(io.StringIO(source), "t.vn")
    tokens = []

    while True:
        token = scanner.get_token()

        if token.type is BasicTokenType.NO:
            break

        if token.type not in (BasicTokenType.WHITE_SPACE, BasicTokenType.COMMENT):
            tokens.append(token)

    return tokens


def test_keywords_and_identifiers():
    tokens = scan("let x_1 = true; fn print_it")
    assert [token.type for token in tokens] == [
        BasicTokenType.LET_KEYWORD,
        BasicTokenType.IDENTIFIER,
        ExtraTokenType("="),
        BasicTokenType.TRUE_KEYWORD,
        ExtraTokenType(";"),
        BasicTokenType.FN_KEYWORD,
        BasicTokenType.IDENTIFIER,
    ]
    assert tokens[1].data == "x_1"
    assert tokens[6].data == "print_it"


@pytest.mark.parametrize("source", ["0", "42", "3.25", ".5", "1.", "1e3", "2.5E-2"])
def test_number_literals(source):
    tokens = scan(source)
    assert len(tokens) == 1
    assert tokens[0].type is BasicTokenType.NUMBER_LITERAL
    assert tokens[0].data == source


def test_two_char_operators():
    tokens = scan("<= >= == != < > = !")
    assert [token.data for token in tokens] == ["<=", ">=", "==", "!=", "<", ">", "=", "!"]
    assert tokens[0].type is ExtraTokenType("<=")


def test_comments_are_skipped():
    tokens = scan("1 // one\n/* two\n */ 3 / 4")
    assert [token.data for token in tokens] == ["1", "3", "/", "4"]


def test_string_literal_keeps_raw_text():
    tokens = scan(r'"a\tb\"c"')
    assert tokens[0].type is BasicTokenType.STRING_LITERAL
    assert tokens[0].data == r'"a\tb\"c"'


def test_source_locations():
    tokens = scan("let a\n  = 1;")
    assert tokens[0].source_location == SourceLocation("t.vn", 1, 1)
    assert tokens[1].source_location == SourceLocation("t.vn", 1, 5)
    assert tokens[2].source_location == SourceLocation("t.vn", 2, 3)
    assert str(tokens[3].source_location) == "t.vn:2:5"


def test_unexpected_char():
    with pytest.raises(UnexpectedCharError) as exc_info:
        scan("let a = @;")

    assert str(exc_info.value) == "t.vn:1:9: unexpected char '@'"


def test_bad_escape_sequence():
    with pytest.raises(UnexpectedCharError):
        scan(r'"\q"')


def test_unterminated_string():
    with pytest.raises(EndOfFileError):
        scan('"abc')


def test_unterminated_comment():
    with pytest.raises(EndOfFileError):
        scan("/* abc")


def test_keyword_table():
    assert KEYWORD_2_BASIC_TOKEN_TYPE["while"] is BasicTokenType.WHILE_KEYWORD
    assert len(KEYWORD_2_BASIC_TOKEN_TYPE) == 10
    assert "identifier" not in KEYWORD_2_BASIC_TOKEN_TYPE


def test_token_type_descriptions():
    assert str(BasicTokenType.NO) == "<end-of-file>"
    assert str(BasicTokenType.NUMBER_LITERAL) == "<number-literal>"
    assert str(BasicTokenType.ELSE_KEYWORD) == "keyword 'else'"
    assert str(ExtraTokenType.LEFT_BRACE) == "`{`"
