# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Functional interface to Argot.

These functions wrap the fluent `Program` / `Command` methods for callers that
prefer plain function calls:

    program = register_program("pizza", "1.0.0", description="Order pizza")
    order = register_command(program, "order.o <name>", "Order a pizza")
    add_option(order, "--size, -s <size>", "Pizza size", choices=["small", "large"])
    set_default(order, "size", "small")
    result = parse(program, ["order", "Marco"])
"""
from __future__ import annotations

from typing import Any, Iterable

from argot.command import Command
from argot.option import Option, Positional
from argot.program import Program
from argot.result import ParseResult


def register_program(
    name: str,
    version: str,
    description: str | None = None,
    license: str | None = None,
    epilog: str | None = None,
) -> Program:
    """Create a new Program."""
    return Program(
        name=name,
        version=version,
        description=description or "",
        license=license or "",
        epilog=epilog or "",
    )


def register_command(program: Program, spec: str, description: str = "") -> Command:
    """Register a command on `program` from a spec such as `"order.o <name>"`."""
    return program.command(spec, description)


def add_option(
    command: Command,
    spec: str,
    help_text: str = "",
    default: Any = None,
    choices: Iterable | None = None,
) -> Option | Positional:
    """Add an option (`"--size, -s <size:string:small>"`, bare `"--flag"` for booleans)."""
    return command.add_option(spec, help_text, default=default, choices=choices)


def set_default(command: Command, option_name: str, value: Any) -> None:
    command.default(option_name, value)


def parse(program: Program, argv: Iterable[str]) -> ParseResult:
    return program.parse(argv)
