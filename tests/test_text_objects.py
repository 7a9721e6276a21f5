from __future__ import annotations

from vig.motions import a_word, bracketed, inner_word, quoted

LINE = 'foo "hello" bar'


def test_inner_double_quote_excludes_quotes() -> None:
    span = quoted('"', inner=True)(LINE, 6)

    assert span is not None
    assert LINE[span[0] : span[1] + 1] == "hello"


def test_a_double_quote_includes_quotes() -> None:
    span = quoted('"', inner=False)(LINE, 6)

    assert span is not None
    assert LINE[span[0] : span[1] + 1] == '"hello"'


def test_quote_object_searches_forward_from_cursor() -> None:
    span = quoted('"', inner=True)(LINE, 0)

    assert span is not None
    assert LINE[span[0] : span[1] + 1] == "hello"


def test_quote_without_pair_on_line_is_none() -> None:
    assert quoted('"', inner=True)('say "hi', 5) is None


def test_empty_quotes_have_no_inner_span() -> None:
    assert quoted('"', inner=True)('x = ""', 4) is None
    assert quoted('"', inner=False)('x = ""', 4) == (4, 5)


def test_inner_word_and_a_word() -> None:
    line = "alpha beta gamma"

    assert inner_word(line, 7) == (6, 9)
    assert a_word(line, 7) == (6, 10)
    assert a_word(line, 13) == (10, 15)


def test_nested_brackets_pick_innermost_enclosing_pair() -> None:
    line = "call(a, (b + c), d)"
    inner = bracketed("(", ")", inner=True)
    around = bracketed("(", ")", inner=False)

    span = inner(line, 10)
    assert span is not None
    assert line[span[0] : span[1] + 1] == "b + c"

    span = around(line, 5)
    assert span is not None
    assert line[span[0] : span[1] + 1] == "(a, (b + c), d)"


def test_bracket_opened_on_another_line_is_none() -> None:
    assert bracketed("{", "}", inner=True)("    return value", 6) is None
    assert bracketed("{", "}", inner=False)("  x: 1 }", 3) is None
