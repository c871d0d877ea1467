import pytest

from argot.exceptions import LexError
from argot.lexer import LongFlag, ShortFlag, Value, is_flag, lex


def test_long_flag():
    tokens = list(lex(["--size"]))
    assert len(tokens) == 1
    assert isinstance(tokens[0], LongFlag)
    assert tokens[0].name == "size"
    assert tokens[0].inline_value is None
    assert tokens[0].flag == "--size"


def test_long_flag_inline_value():
    (token,) = lex(["--size=large"])
    assert isinstance(token, LongFlag)
    assert token.name == "size"
    assert token.inline_value == "large"
    assert token.raw == "--size=large"


def test_inline_value_keeps_later_equals():
    (token,) = lex(["--filter=a=b"])
    assert token.inline_value == "a=b"


def test_short_flag_cluster_expands():
    tokens = list(lex(["-abc"]))
    assert [token.letter for token in tokens] == ["a", "b", "c"]
    assert all(isinstance(token, ShortFlag) for token in tokens)
    assert all(token.inline_value is None for token in tokens)


def test_short_flag_inline_value_not_clustered():
    (token,) = lex(["-s=5"])
    assert isinstance(token, ShortFlag)
    assert token.letter == "s"
    assert token.inline_value == "5"


def test_cluster_with_inline_value_goes_to_last_letter():
    tokens = list(lex(["-ab=5"]))
    assert [(token.letter, token.inline_value) for token in tokens] == [
        ("a", None),
        ("b", "5"),
    ]


@pytest.mark.parametrize("arg", ["-", "-5", "-2.5", "-.5", "-1e3", "order", ""])
def test_values(arg):
    (token,) = lex([arg])
    assert isinstance(token, Value)
    assert token.text == arg
    assert not is_flag(token)


def test_terminator_turns_remaining_tokens_into_values():
    tokens = list(lex(["-c", "--", "--size", "-x", "--"]))
    assert isinstance(tokens[0], ShortFlag)
    assert tokens[1:] == [Value("--size"), Value("-x"), Value("--")]


@pytest.mark.parametrize("arg", ["--size=", "--=x", "-=x", "-s=", "---size"])
def test_malformed_tokens(arg):
    with pytest.raises(LexError) as excinfo:
        list(lex([arg]))
    assert excinfo.value.kind == "lex"
    assert excinfo.value.name == arg


def test_non_string_argument():
    with pytest.raises(LexError):
        list(lex(["order", 5]))


def test_stream_is_restartable():
    stream = lex(["order", "-cp", "--size=large", "--", "-x"])
    first = list(stream)
    second = list(stream)
    assert first == second
    assert len(first) == 5


def test_stream_copies_input():
    argv = ["--size", "large"]
    stream = lex(argv)
    argv.append("--cheese")
    assert len(list(stream)) == 2


def test_values_after_terminator_are_literal():
    tokens = list(lex(["x", "--", "y"]))
    assert [token.literal for token in tokens] == [False, True]
