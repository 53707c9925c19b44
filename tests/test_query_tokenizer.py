import pytest

from query_errors import (
    ParseError,
    UnexpectedCharacter,
    UnexpectedLetter,
    UnterminatedQuote,
)
from query_tokenizer import Token, TokenType, tokenize


def types(query):
    return [token.type for token in tokenize(query)]


def test_operators_and_parentheses():
    assert types('!("a" & "b") | "c"') == [
        TokenType.NOT,
        TokenType.LPAREN,
        TokenType.KEYWORD,
        TokenType.AND,
        TokenType.KEYWORD,
        TokenType.RPAREN,
        TokenType.OR,
        TokenType.KEYWORD,
    ]


def test_whitespace_is_skipped():
    assert types(' \t"a"\n&\r\n"b" ') == [
        TokenType.KEYWORD,
        TokenType.AND,
        TokenType.KEYWORD,
    ]


def test_keyword_keeps_inner_text_verbatim():
    tokens = tokenize('"i phone" | "  spaced  "')
    assert tokens[0] == Token(TokenType.KEYWORD, "i phone", 0)
    assert tokens[2].text == "  spaced  "


def test_single_quotes_open_keywords():
    tokens = tokenize("'hello'|'hi'")
    assert [t.text for t in tokens if t.type is TokenType.KEYWORD] == ["hello", "hi"]


def test_only_the_matching_quote_closes_a_keyword():
    tokens = tokenize("\"it's\" & 'say \"hi\"'")
    assert tokens[0].text == "it's"
    assert tokens[2].text == 'say "hi"'


def test_operators_inside_quotes_are_literal():
    tokens = tokenize('"a & (b | !c)"')
    assert len(tokens) == 1
    assert tokens[0].text == "a & (b | !c)"


def test_empty_keyword_and_empty_input():
    assert tokenize('""') == [Token(TokenType.KEYWORD, "", 0)]
    assert tokenize("") == []


def test_token_positions():
    tokens = tokenize('"a" & "bc"')
    assert [t.position for t in tokens] == [0, 4, 6]


def test_bare_letter_is_rejected():
    with pytest.raises(UnexpectedLetter) as excinfo:
        tokenize('"a" & b')
    assert excinfo.value.position == 6
    assert excinfo.value.character == "b"


def test_unquoted_word():
    with pytest.raises(UnexpectedLetter):
        tokenize("iphone")


def test_unknown_symbol_is_rejected():
    with pytest.raises(UnexpectedCharacter) as excinfo:
        tokenize('"a" # "b"')
    assert excinfo.value.position == 4

    with pytest.raises(UnexpectedCharacter):
        tokenize("1")


def test_unterminated_quote():
    with pytest.raises(UnterminatedQuote) as excinfo:
        tokenize('"a" & "abc')
    assert excinfo.value.position == 6

    with pytest.raises(UnterminatedQuote):
        tokenize("'abc\"")


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        tokenize("x")
    assert issubclass(UnterminatedQuote, ParseError)
