# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Help and version rendering for Argot programs.

Help is built as a list of rich markup lines, in a fixed order:

    name/version line, description, license, usage, arguments, options,
    examples, commands (program help only), epilog

`print_help()` writes those lines to a themed console. `render_help()` exports
the same lines to plain text, which is what the parser attaches to a
`HelpSignal`. Rendering only reads the program and command schemas.
"""
from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from argot.console import console as argot_console
from argot.themes import get_argot_theme
from argot.utils import format_value

if TYPE_CHECKING:
    from argot.command import Command
    from argot.program import Program

COLUMN_WIDTH = 30
HELP_LINE = ("-h, --help", "Show this help message.")
VERSION_LINE = ("--version", "Show version information.")


def render_version(program: Program) -> str:
    """Return the `name vX.Y.Z` line, or just the name if no version is set."""
    if not program.version:
        return program.name
    version = program.version
    return f"{program.name} {version if version.startswith('v') else 'v' + version}"


def _row(left: str, right: str = "") -> str:
    if right and len(left) > COLUMN_WIDTH:
        return f"  [argot.flag]{escape(left)}[/]\n{'':<{COLUMN_WIDTH + 3}}{escape(right)}"
    padding = " " * (COLUMN_WIDTH - len(left) + 1) if right else ""
    return f"  [argot.flag]{escape(left)}[/]{padding}{escape(right)}"


def _detail_text(help_text: str, default, choices, required: bool, show_default: bool) -> str:
    parts = [help_text] if help_text else []
    if choices:
        parts.append(f"(choices: {', '.join(format_value(choice) for choice in choices)})")
    if show_default and default is not None and default != []:
        if isinstance(default, list):
            shown = " ".join(format_value(item) for item in default)
        else:
            shown = format_value(default)
        parts.append(f"(default: {shown})")
    if required:
        parts.append("(required)")
    return " ".join(parts)


def _argument_lines(command: Command) -> list[str]:
    lines = []
    for positional in command.positionals:
        lines.append(
            _row(
                positional.get_usage_text(),
                _detail_text(
                    positional.help,
                    positional.default,
                    positional.choices,
                    required=False,
                    show_default=True,
                ),
            )
        )
    return lines


def _option_lines(command: Command, include_version: bool) -> list[str]:
    lines = []
    for option in command.options:
        flags = ", ".join(option.flags)
        if option.is_boolean and option.primary_flag.startswith("--"):
            flags = f"{flags}, --no-{option.primary_flag[2:]}"
        choice_text = option.get_choice_text()
        if choice_text and not option.value_required:
            choice_text = f"[{choice_text}]"
        left = f"{flags} {choice_text}" if choice_text else flags
        lines.append(
            _row(
                left,
                _detail_text(
                    option.help,
                    option.default,
                    option.choices,
                    required=option.required,
                    show_default=not option.is_boolean,
                ),
            )
        )
    help_flags = HELP_LINE[0] if command.is_help_flag("-h") else "--help"
    lines.append(_row(help_flags, HELP_LINE[1]))
    if include_version and command.is_version_flag("--version"):
        lines.append(_row(*VERSION_LINE))
    return lines


def _command_lines(program: Program) -> list[str]:
    lines = []
    for command in program.named_commands():
        names = ", ".join([command.name, *command.aliases])
        lines.append(_row(names, command.description))
    return lines


def build_help(program: Program, command: Command | None = None) -> list[str]:
    """
    Build the help lines for a program, or for one of its commands.

    Args:
        program (Program): The program being described.
        command (Command | None): A named command; None describes the program
            and its default command.

    Returns:
        list[str]: Rich markup lines.
    """
    target = command or program.root
    is_program_help = command is None or command is program.root
    lines: list[str] = [f"[argot.title]{escape(render_version(program))}[/]"]

    description = program.description if is_program_help else target.description
    if description:
        lines.extend(["", escape(description)])
    if is_program_help and program.license:
        lines.append(f"[argot.muted]License: {escape(program.license)}[/]")

    if is_program_help:
        usage = target.usage(program.name, show_name=False)
        if program.named_commands():
            usage = f"{program.name} <command> [options]"
            if target.positionals or target.options:
                usage += f"\n       {target.usage(program.name, show_name=False)}"
    else:
        usage = target.usage(program.name)
    lines.extend(["", f"[argot.heading]usage:[/] {escape(usage)}"])

    if target.aliases and not is_program_help:
        lines.append(f"[argot.muted]aliases: {escape(', '.join(target.aliases))}[/]")

    argument_lines = _argument_lines(target)
    if argument_lines:
        lines.extend(["", "[argot.heading]arguments:[/]", *argument_lines])

    lines.extend(
        ["", "[argot.heading]options:[/]", *_option_lines(target, is_program_help)]
    )

    if target.examples:
        lines.extend(["", "[argot.heading]examples:[/]"])
        for example in target.examples:
            lines.append(f"  {escape(example.usage)}")
            if example.description:
                lines.append(f"[argot.muted]      {escape(example.description)}[/]")

    if is_program_help:
        command_lines = _command_lines(program)
        if command_lines:
            lines.extend(["", "[argot.heading]commands:[/]", *command_lines])

    if program.epilog:
        lines.extend(["", f"[argot.muted]{escape(program.epilog)}[/]"])
    return lines


def print_help(
    program: Program, command: Command | None = None, console: Console | None = None
) -> None:
    """Print help for a program or command to a themed console."""
    console = console or argot_console
    for line in build_help(program, command):
        console.print(line, highlight=False)


def render_help(program: Program, command: Command | None = None, width: int = 80) -> str:
    """Render help for a program or command as plain text."""
    buffer = StringIO()
    plain = Console(
        file=buffer,
        width=width,
        color_system=None,
        force_terminal=False,
        theme=get_argot_theme(),
    )
    for line in build_help(program, command):
        plain.print(line, highlight=False)
    return "\n".join(line.rstrip() for line in buffer.getvalue().rstrip().splitlines())
