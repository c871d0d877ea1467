# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module defines `Program`, the registry at the top of an Argot CLI.

A Program owns the metadata shown in help (name, version, description, license,
epilog) and an insertion-ordered set of named `Command`s. A reserved default
command, reachable as `program.root`, handles argument vectors whose first
token names no command.

Configuration is fluent; each setter returns the same Program:

    program = (
        Program()
        .set_name("pizza")
        .set_version("1.0.0")
        .set_description("Order pizza from the command line")
        .set_epilog("Copyright 2025")
    )
    program.command("order.o <name>", "Order a pizza").option("--size, -s <size>")
    result = program.parse(["order", "Marco", "--size", "large"])

`parse()` is pure and returns a `ParseResult` or raises. `run()` is the CLI
layer on top: it prints help, version or errors to the console and exits with
the matching status code.
"""
from __future__ import annotations

import shlex
import sys
from typing import Any, Callable, Iterable

from prompt_toolkit import PromptSession
from rich.console import Console
from rich.markup import escape

from argot.command import Command
from argot.completer import ArgotCompleter
from argot.console import console
from argot.exceptions import ArgotError, CommandAlreadyExistsError, SchemaError, ValidationError
from argot.help import print_help, render_help, render_version
from argot.lexer import LongFlag, ShortFlag, lex_token
from argot.logger import logger
from argot.parser import parse_argv
from argot.result import ParseResult
from argot.signals import HelpSignal, VersionSignal
from argot.spec_parser import parse_command_spec
from argot.themes import OneColors

DEFAULT_COMMAND = "__default__"


class Program:
    """
    Registry of commands plus the metadata used for help and version output.

    Attributes:
        name (str): Program name shown in usage lines.
        version (str): Version string.
        description (str): Description shown under the title.
        license (str): License line shown in program help.
        epilog (str): Text shown at the end of help.
        strict (bool): Raise `UnknownCommandError` for an unknown selector
            token instead of falling back to the default command.
        commands (dict[str, Command]): Named commands in registration order.
        root (Command): The default command.
    """

    def __init__(
        self,
        name: str = "",
        version: str = "",
        description: str = "",
        license: str = "",
        epilog: str = "",
        strict: bool = False,
        console: Console = console,
    ) -> None:
        self.name: str = name or "program"
        self.version: str = version
        self.description: str = description
        self.license: str = license
        self.epilog: str = epilog
        self.strict: bool = strict
        self.console: Console = console
        self.commands: dict[str, Command] = {}
        self.root: Command = Command(DEFAULT_COMMAND, program_name=self.name)
        self._selectors: tuple[tuple, dict[str, Command]] = ((), {})

    def set_name(self, name: str) -> Program:
        if not name or not isinstance(name, str):
            raise SchemaError("Program name must be a non-empty string")
        self.name = name
        for command in [self.root, *self.commands.values()]:
            command.program_name = name
        return self

    def set_version(self, version: str) -> Program:
        self.version = str(version)
        return self

    def set_description(self, description: str) -> Program:
        self.description = description
        return self

    def set_license(self, license: str) -> Program:
        self.license = license
        return self

    def set_epilog(self, epilog: str) -> Program:
        self.epilog = epilog
        return self

    def set_strict(self, strict: bool = True) -> Program:
        self.strict = strict
        return self

    def named_commands(self) -> list[Command]:
        return list(self.commands.values())

    def _name_map(self) -> dict[str, Command]:
        """
        Return the mapping of selector tokens to commands. Names are registered
        before aliases so an exact name always wins. If an alias collides, logs
        a warning and keeps the first registered command.

        The mapping is rebuilt only when a command name or alias has changed
        since the last call, so each conflict is reported once.
        """
        key = tuple(
            (id(command), command.name, tuple(command.aliases))
            for command in self.commands.values()
        )
        cached_key, cached = self._selectors
        if key == cached_key:
            return cached
        mapping: dict[str, Command] = {}

        def register(token: str, command: Command):
            if token in mapping:
                existing = mapping[token]
                if existing is not command:
                    logger.warning(
                        "[alias conflict] '%s' already assigned to '%s'. Skipping for '%s'.",
                        token,
                        existing.name,
                        command.name,
                    )
            else:
                mapping[token] = command

        for command in self.commands.values():
            register(command.name, command)
        for command in self.commands.values():
            for alias in command.aliases:
                register(alias, command)
        self._selectors = (key, mapping)
        return mapping

    def find_command(self, token: str) -> Command | None:
        """Resolve a selector token by exact name, then alias."""
        return self._name_map().get(token)

    def get_command(self, name: str | None) -> Command | None:
        """Return a command by name or alias; the default command by its reserved name."""
        if name is None:
            return None
        if name == DEFAULT_COMMAND:
            return self.root
        return self.find_command(name)

    def _validate_command_name(self, name: str) -> None:
        """Validates the command name to ensure it is unique."""
        if name.startswith("-"):
            raise SchemaError(f"Command name '{name}' must not start with '-'")
        if name == DEFAULT_COMMAND:
            raise CommandAlreadyExistsError(
                f"Command name '{name}' is reserved for the default command."
            )
        if name in self.commands:
            raise CommandAlreadyExistsError(f"Command '{name}' is already registered.")

    def command(
        self,
        spec: str,
        description: str = "",
        aliases: Iterable[str] | None = None,
    ) -> Command:
        """
        Register a command from a spec string and return it for further configuration.

        A spec without a name (`"<file> --verbose"`) adds its positionals and
        options to the default command instead.

        Raises:
            SchemaError: If the spec is malformed.
            CommandAlreadyExistsError: If the name is already registered.
        """
        parsed = parse_command_spec(spec)
        if parsed.name is None:
            command = self.root
            if description:
                command.describe(description)
        else:
            self._validate_command_name(parsed.name)
            command = Command(
                parsed.name,
                aliases=[*parsed.aliases, *(aliases or [])],
                description=description,
                program_name=self.name,
            )
        for placeholder in parsed.positionals:
            command.add_placeholder(placeholder)
        for flag_spec in parsed.options:
            command.add_flag_spec(flag_spec)
        if command is not self.root:
            self.commands[command.name] = command
            logger.debug("[%s] Registered command '%s'", self.name, command.name)
            self._name_map()
        return command

    def remove_command(self, name: str) -> Program:
        command = self.get_command(name)
        if command is None or command is self.root:
            raise ArgotError(f"No command named '{name}' to remove")
        del self.commands[command.name]
        return self

    def parse(self, argv: Iterable[str] | None = None) -> ParseResult:
        """
        Parse an argument vector (defaults to `sys.argv[1:]`).

        Raises:
            ValidationError: The first violated constraint.
            HelpSignal / VersionSignal: Help or version was requested.
        """
        return parse_argv(self, sys.argv[1:] if argv is None else argv)

    def exec(self, argv: Iterable[str] | None = None) -> Any:
        """Parse, then call the resolved command's action with the result."""
        result = self.parse(argv)
        command = self.get_command(result.command) or self.root
        if command.callback is None:
            return result
        logger.debug("[%s] Running action for '%s'", self.name, command.name)
        return command.callback(result)

    def render_help(self, command: str | Command | None = None) -> str:
        if isinstance(command, str):
            command = self.get_command(command)
        return render_help(self, command)

    def render_version(self) -> str:
        return render_version(self)

    def print_help(self, command: str | Command | None = None) -> None:
        if isinstance(command, str):
            command = self.get_command(command)
        print_help(self, command, self.console)

    def _command_for(self, argv: list[str]) -> Command | None:
        if not argv:
            return None
        try:
            tokens = lex_token(argv[0])
        except ValidationError:
            return None
        if len(tokens) == 1 and not isinstance(tokens[0], (LongFlag, ShortFlag)):
            return self.find_command(argv[0])
        return None

    def run(self, argv: Iterable[str] | None = None) -> Any:
        """
        Run the program as a CLI: parse, call the action and handle output.

        Help and version requests print to the console and exit with status 0.
        A validation failure prints the error followed by the command's help and
        exits with status 1.
        """
        args = list(sys.argv[1:] if argv is None else argv)
        try:
            return self.exec(args)
        except HelpSignal as signal:
            self.print_help(self.get_command(signal.command))
            sys.exit(0)
        except VersionSignal as signal:
            self.console.print(signal.text, highlight=False, markup=False)
            sys.exit(0)
        except ValidationError as error:
            self._report_error(error, args)
            sys.exit(1)

    def interact(
        self,
        prompt_session: PromptSession | None = None,
        message: str | None = None,
        on_result: Callable[[Any], None] | None = None,
    ) -> None:
        """
        Read command lines from a prompt with completion and run each one.

        Help, version and validation errors are printed instead of exiting.
        The loop ends on EOF (Ctrl-D) or Ctrl-C.

        Args:
            prompt_session (PromptSession | None): Session to read from.
            message (str | None): Prompt text, `"<name> > "` by default.
            on_result (Callable | None): Called with each action's return value.
        """
        prompt_session = prompt_session or PromptSession()
        completer = ArgotCompleter(self)
        message = message or f"{self.name} > "
        while True:
            try:
                line = prompt_session.prompt(message, completer=completer)
            except (EOFError, KeyboardInterrupt):
                break
            try:
                args = shlex.split(line)
            except ValueError as error:
                self.console.print(f"[{OneColors.DARK_RED}]❌ {escape(str(error))}[/]")
                continue
            if not args:
                continue
            try:
                result = self.exec(args)
            except HelpSignal as signal:
                self.print_help(self.get_command(signal.command))
            except VersionSignal as signal:
                self.console.print(signal.text, highlight=False, markup=False)
            except ValidationError as error:
                self._report_error(error, args)
            else:
                if on_result is not None:
                    on_result(result)

    def _report_error(self, error: ValidationError, args: list[str]) -> None:
        logger.debug("[%s] Validation failed: %r", self.name, error)
        self.console.print(f"[{OneColors.DARK_RED}]❌ {escape(error.message)}[/]")
        self.print_help(self._command_for(args))

    def __str__(self) -> str:
        return f"Program(name='{self.name}', commands={list(self.commands)})"
