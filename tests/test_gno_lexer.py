import pytest
from renamatic import gno_lexer
from renamatic.errors import ParseError


def significant_types(text):
    stream = gno_lexer.tokenize(text)
    return [token.type for token in stream.tokens if token.type not in gno_lexer.trivia_types]


def test_tokens_reproduce_source_exactly():
    source = ("package main // trailing\r\n"
              "\r\n"
              "/* block\n   comment */\n"
              "var s = `raw\nstring`\n"
              "func f() {\n\tx := 'a' + \"b\\\"c\"\t// tabs\n}")
    stream = gno_lexer.tokenize(source)
    assert "".join(token.value for token in stream.tokens) == source


def test_semicolons_inserted_at_line_ends():
    assert significant_types("x := 1\ny++\n") == ['IDENT', 'DEFINE', 'INT', 'SEMICOLON', 'IDENT', 'INC', 'SEMICOLON']


def test_no_semicolon_after_operator():
    assert significant_types("a +\nb") == ['IDENT', 'ADD', 'IDENT', 'SEMICOLON']


def test_semicolon_after_keywords_and_closing_brackets():
    assert significant_types("return\n") == ['RETURN', 'SEMICOLON']
    assert significant_types("f()\n") == ['IDENT', 'LPAREN', 'RPAREN', 'SEMICOLON']
    assert significant_types("}\n") == ['RBRACE', 'SEMICOLON']
    assert significant_types("func {\n") == ['FUNC', 'LBRACE']


def test_semicolon_before_trailing_comment():
    stream = gno_lexer.tokenize("x // comment\ny")
    types = [token.type for token in stream.tokens]
    assert types == ['IDENT', 'SEMICOLON', 'WHITESPACE', 'LINE_COMMENT', 'NEWLINE', 'IDENT', 'SEMICOLON']
    assert stream.tokens[1].value == ''


def test_literals():
    assert significant_types("1 1.5 0x1F 2i 'a' \"s\" `raw`") == \
        ['INT', 'FLOAT', 'INT', 'IMAG', 'CHAR', 'STRING', 'STRING', 'SEMICOLON']


def test_operators():
    assert significant_types("a &^= b <- c ... := != <= <<") == \
        ['IDENT', 'AND_NOT_ASSIGN', 'IDENT', 'ARROW', 'IDENT', 'ELLIPSIS', 'DEFINE', 'NEQ', 'LEQ', 'SHL']


def test_token_positions():
    stream = gno_lexer.tokenize("package main\n\n  func f() {}")
    func_token = [token for token in stream.tokens if token.type == 'FUNC'][0]
    assert func_token.lineno == 3
    assert func_token.column == 3


def test_invalid_character():
    with pytest.raises(ParseError) as info:
        gno_lexer.tokenize("x := @")
    assert info.value.line == 1
    assert info.value.column == 6
    assert "invalid character" in str(info.value)


def test_unterminated_string():
    with pytest.raises(ParseError) as info:
        gno_lexer.tokenize('package main\nvar s = "abc\n')
    assert info.value.line == 2
    assert "string literal not terminated" in str(info.value)


def test_unterminated_comment():
    with pytest.raises(ParseError) as info:
        gno_lexer.tokenize("package main\n/* never closed")
    assert info.value.line == 2
    assert info.value.column == 1
    assert "comment not terminated" in str(info.value)


def test_leading_byte_order_mark_kept_as_whitespace():
    source = "\ufeffpackage main\n"
    stream = gno_lexer.tokenize(source)
    assert stream.tokens[0].type == 'WHITESPACE'
    assert stream.tokens[0].value == "\ufeff"
    assert significant_types(source) == ['PACKAGE', 'IDENT', 'SEMICOLON']
    assert "".join(token.value for token in stream.tokens) == source


def test_byte_order_mark_after_start():
    with pytest.raises(ParseError) as info:
        gno_lexer.tokenize("package main\n\ufeff")
    assert info.value.line == 2
    assert info.value.column == 1
    assert "invalid BOM" in str(info.value)
