from concurrent.futures import ThreadPoolExecutor

import pytest

from boolean_parser import AndExpression, Keyword, OrExpression
from query_errors import UnclosedGroup, UnexpectedLetter, UnterminatedQuote
from query_matcher import QueryMatcher, compile_query


def test_end_to_end_example():
    matcher = compile_query('("this" | "that") & "these" & "those"')
    assert matcher.matches("this these those")
    assert matcher.matches("that these those")
    assert not matcher.matches("this that these")


def test_alternatives():
    iphone = compile_query('"iphone" | "i phone"')
    assert iphone.matches("I love my new iphone!")
    assert iphone.matches("my i phone broke")
    assert not iphone.matches("my android broke")


def test_groups():
    greeting = compile_query('("hello" | "hi") & "there"')
    assert greeting.matches("hi there, my name is Kyuss Caesar")
    assert greeting.matches("hello there, this should also be a greeting")
    assert not greeting.matches("hello, this is not a greeting")


def test_case_insensitive():
    assert compile_query('"Foo"').matches("the FOO is here")

    greeting = compile_query("('hello'|'hi'|'ho') & 'there'")
    for text in ["HELLO THERE", "hI THERE", "Hi there!"]:
        assert greeting.matches(text), text


def test_not_binds_tighter_than_and():
    matcher = compile_query('!"a" & "b"')
    assert matcher.matches("b only")
    assert not matcher.matches("a and b")


def test_precedence_shape():
    matcher = compile_query('"a" | "b" & "c"')
    assert matcher.root == OrExpression(
        Keyword("a"), AndExpression(Keyword("b"), Keyword("c"))
    )
    assert matcher.matches("a")
    assert not matcher.matches("b")


def test_grouping_shape():
    matcher = compile_query('("a" | "b") & "c"')
    assert matcher.root == AndExpression(
        OrExpression(Keyword("a"), Keyword("b")), Keyword("c")
    )
    assert not matcher.matches("a")
    assert matcher.matches("b c")


def test_compile_errors():
    with pytest.raises(UnexpectedLetter):
        compile_query("iphone")
    with pytest.raises(UnclosedGroup):
        compile_query('("a"')
    with pytest.raises(UnterminatedQuote):
        compile_query('"a')


def test_empty_keyword_matches_everything():
    matcher = compile_query('""')
    assert matcher.matches("")
    assert matcher.matches("any text at all")
    assert not compile_query('!""').matches("any text at all")


def test_repeated_calls_are_deterministic():
    matcher = compile_query('"x" & !"y"')
    results = [matcher.matches("x marks the spot") for _ in range(5)]
    assert results == [True] * 5
    assert matcher.source == '"x" & !"y"'


def test_matcher_is_immutable_and_callable():
    matcher = QueryMatcher.compile('"abc"')
    assert matcher("xxABCxx")
    with pytest.raises(AttributeError):
        matcher.source = '"def"'


def test_concurrent_evaluation():
    matcher = compile_query('("red" | "blue") & !"green"')
    texts = ["red car", "blue sky", "green red", "yellow"] * 50
    expected = [True, True, False, False] * 50

    with ThreadPoolExecutor(max_workers=4) as executor:
        assert list(executor.map(matcher.matches, texts)) == expected
