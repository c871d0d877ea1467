import pytest
from prompt_toolkit.completion import Completion
from prompt_toolkit.document import Document

from argot import Program
from argot.completer import ArgotCompleter


@pytest.fixture
def program():
    program = Program(name="pizza", version="1.0.0")
    (
        program.command("order.o <name>", "Order a pizza")
        .option("--size, -s <size>", "Pizza size", choices=["small", "medium", "large"])
        .option("--cheese.c", "Add cheese")
    )
    program.command("ship <city>", "Ship a pizza")
    return program


@pytest.fixture
def completer(program):
    return ArgotCompleter(program)


def complete(completer, text):
    return list(completer.get_completions(Document(text), None))


def test_suggest_commands(completer):
    assert set(completer._suggest_commands("o")) == {"order", "o"}
    assert set(completer._suggest_commands("")) >= {"order", "o", "ship", "help", "version"}
    assert not list(completer._suggest_commands("z"))


def test_get_completions_no_input(completer):
    results = complete(completer, "")
    assert all(isinstance(c, Completion) for c in results)
    assert {"order", "ship", "help", "version"} <= {c.text for c in results}


def test_get_completions_single_command(completer):
    results = complete(completer, "or")
    assert [c.text for c in results] == ["order"]
    assert results[0].start_position == -2


def test_get_completions_flags(completer):
    results = complete(completer, "order --s")
    assert [c.text for c in results] == ["--size"]
    assert results[0].start_position == -3


def test_get_completions_choices(completer):
    assert [c.text for c in complete(completer, "order --size ")] == [
        "large",
        "medium",
        "small",
    ]
    assert [c.text for c in complete(completer, "o -s m")] == ["medium"]


def test_get_completions_skips_used_flags(completer):
    texts = {c.text for c in complete(completer, "order -c ")}
    assert "--cheese" not in texts
    assert "--size" in texts


def test_get_completions_no_match(completer):
    assert not complete(completer, "z")
    assert not complete(completer, "order --z")


def test_get_completions_unbalanced_quote(completer):
    assert not complete(completer, 'order "Marco')


def test_lcp_completions_quote_spaces():
    program = Program(name="pizza")
    program.command("ship").arg("<city>", choices=["New York", "Newark", "Boston"])
    completer = ArgotCompleter(program)
    results = complete(completer, "ship N")
    texts = [c.text for c in results]
    assert texts[0] == "New"
    assert '"New York"' in texts
    assert "Newark" in texts
    assert "Boston" not in texts


def test_default_command_completion():
    program = Program(name="tool")
    program.root.option("--verbose.v", "Verbose output")
    completer = ArgotCompleter(program)
    assert [c.text for c in complete(completer, "--v")] == ["--verbose"]
    assert [c.text for c in complete(completer, "notes.txt --v")] == ["--verbose"]
