import pytest

from argot import Program
from argot.help import build_help, print_help, render_help, render_version
from argot.signals import HelpSignal


@pytest.fixture
def program():
    program = Program(
        name="pizza",
        version="1.0.0",
        description="Order pizza from the command line",
        license="MIT",
        epilog="Copyright 2025",
    )
    (
        program.command("order.o <name> --tries [tries:number:2]", "Order a pizza")
        .option("--size, -s <size>", "Size", choices=["small", "large"], default="small")
        .option("--cheese.c", "Add cheese")
        .option("--address <address>", "Where to deliver")
        .demand("address")
        .example("pizza order Marco -c --address home", "Cheese pizza delivered home")
    )
    program.command("menu", "Show the menu")
    return program


def test_program_help_sections_in_order(program):
    text = render_help(program)
    expected_order = [
        "pizza v1.0.0",
        "Order pizza from the command line",
        "License: MIT",
        "usage: pizza <command> [options]",
        "options:",
        "-h, --help",
        "--version",
        "commands:",
        "order, o",
        "menu",
        "Copyright 2025",
    ]
    positions = [text.index(fragment) for fragment in expected_order]
    assert positions == sorted(positions)


def test_command_help(program):
    text = render_help(program, program.get_command("order"))
    assert "usage: pizza order --address ADDRESS [options] <name>" in text
    assert "aliases: o" in text
    assert "arguments:" in text
    assert "<name>" in text
    assert "--size, -s {small,large}" in text
    assert "(choices: small, large) (default: small)" in text
    assert "--cheese, -c, --no-cheese" in text
    assert "--tries [TRIES]" in text
    assert "(default: 2)" in text
    assert "Where to deliver (required)" in text
    assert "examples:" in text
    assert "Cheese pizza delivered home" in text
    assert "commands:" not in text
    assert "--version" not in text


def test_help_is_plain_text(program):
    assert "\x1b[" not in render_help(program)
    assert "[argot." not in render_help(program, program.get_command("order"))


def test_rendering_is_repeatable(program):
    order = program.get_command("order")
    assert render_help(program, order) == render_help(program, order)
    assert build_help(program, order) == build_help(program, order)


def test_help_signal_carries_rendered_help(program):
    with pytest.raises(HelpSignal) as excinfo:
        program.parse(["menu", "--help"])
    assert excinfo.value.text == render_help(program, program.get_command("menu"))


def test_long_flags_wrap_help_text():
    program = Program(name="tool")
    program.root.option(
        "--a-very-long-option-name-indeed <value>", "Explained on the next line"
    )
    lines = render_help(program).splitlines()
    index = next(i for i, line in enumerate(lines) if "--a-very-long" in line)
    assert lines[index + 1].strip() == "Explained on the next line"


def test_markup_in_user_text_is_escaped():
    program = Program(name="tool", description="Uses [bold]brackets[/bold]")
    assert "[bold]brackets[/bold]" in render_help(program)


@pytest.mark.parametrize(
    "version, expected",
    [("1.0.0", "pizza v1.0.0"), ("v2", "pizza v2"), ("", "pizza")],
)
def test_render_version(version, expected):
    assert render_version(Program(name="pizza", version=version)) == expected


def test_print_help(program, capsys):
    print_help(program, program.get_command("order"))
    assert "Where to deliver" in capsys.readouterr().out
