# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements the Argot parser: it resolves the target command, binds
lexed tokens against the command schema, applies defaults, validates and
produces a `ParseResult`.

One `ArgumentBinder` is created per parse and discarded afterwards. It reads the
program and command schemas but never writes to them, so any number of parses
may run against the same `Program` at once.

Binding rules:
- A flag resolves through the command's flag map. `--no-<name>` sets a boolean
  option to False. Unknown flags are kept as leftovers.
- A value binds to the immediately preceding flag when that flag expects a
  value and has none yet, otherwise to the next unfilled positional (a
  variadic positional keeps absorbing), otherwise it is a leftover. Values
  after `--` never bind to a flag.
- A repeated flag keeps its last value.

Validation runs in a fixed order and stops at the first failure:
    (a) MissingRequiredError  (b) ArgumentTypeError  (c) InvalidChoiceError
    (d) DependencyError       (e) OptionCountError / ArgumentCountError

`help`, `help <command>`, `--help`, `version` and `--version` interrupt the
parse with a `HelpSignal` or `VersionSignal` carrying the rendered text.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from argot.command import Command
from argot.exceptions import (
    ArgumentCountError,
    ArgumentTypeError,
    DependencyError,
    InvalidChoiceError,
    MissingRequiredError,
    OptionCountError,
    UnknownCommandError,
    ValidationError,
)
from argot.help import render_help, render_version
from argot.lexer import Token, Value, is_flag, lex
from argot.logger import logger
from argot.option import Option, Positional
from argot.result import ParseResult, ParseState
from argot.signals import HelpSignal, VersionSignal
from argot.utils import coerce_value, format_value

if TYPE_CHECKING:
    from argot.program import Program

HELP_SELECTOR = "help"
VERSION_SELECTOR = "version"


class _Missing:
    """Marks a flag that expects a value but received none."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING = _Missing()


def _has_value(value: Any) -> bool:
    return value is not None and value is not False and value != []


class ArgumentBinder:
    """Binds one argument vector against a program. Use once, then discard."""

    def __init__(self, program: Program) -> None:
        self.program = program
        self.state: ParseState = ParseState.START
        self.command: Command = program.root
        self.selected: bool = False
        self.bound: dict[str, Any] = {}
        self.leftovers: list[str] = []

    def _transition(self, state: ParseState) -> None:
        logger.debug("[%s] Parse state %s -> %s", self.program.name, self.state.name, state.name)
        self.state = state

    def parse(self, argv: Iterable[str]) -> ParseResult:
        try:
            self._transition(ParseState.LEXING)
            tokens = list(lex(argv))
            tokens = self._resolve_command(tokens)
            self._transition(ParseState.BINDING)
            self._bind(tokens)
            self._transition(ParseState.VALIDATING)
            values = self._validate()
        except ValidationError as error:
            self._transition(ParseState.FAILED)
            logger.debug("[%s] Parse failed: %r", self.program.name, error)
            raise
        self._transition(ParseState.SUCCESS)
        return ParseResult(
            command=self.command.name,
            values=values,
            explicit=frozenset(self.bound),
            leftovers=tuple(self.leftovers),
            positional_names=tuple(positional.name for positional in self.command.positionals),
            option_flags={option.name: option.primary_flag for option in self.command.options},
            selected=self.selected,
        )

    def _resolve_command(self, tokens: list[Token]) -> list[Token]:
        first = tokens[0] if tokens else None
        if isinstance(first, Value):
            command = self.program.find_command(first.text)
            if command is not None:
                self.command = command
                self.selected = True
                logger.debug("[%s] Resolved command '%s'", self.program.name, command.name)
                self._transition(ParseState.COMMAND_RESOLVED)
                return tokens[1:]
            if first.text == HELP_SELECTOR:
                self._raise_help_selector(tokens[1:])
            if first.text == VERSION_SELECTOR:
                raise VersionSignal(render_version(self.program))
            if self.program.strict and self.program.named_commands() and not self.program.root.positionals:
                raise UnknownCommandError(f"Unknown command '{first.text}'", name=first.text)
        self._transition(ParseState.COMMAND_RESOLVED)
        return tokens

    def _raise_help_selector(self, rest: list[Token]) -> None:
        target = rest[0] if rest else None
        command = None
        if isinstance(target, Value):
            command = self.program.find_command(target.text)
        text = render_help(self.program, command)
        raise HelpSignal(text, command=command.name if command else None)

    def _next_positional(self) -> Positional | None:
        for positional in self.command.positionals:
            if positional.variadic or positional.name not in self.bound:
                return positional
        return None

    def _bind(self, tokens: list[Token]) -> None:
        pending: Option | None = None
        for token in tokens:
            if is_flag(token):
                pending = None
                flag = token.flag
                if self.command.is_help_flag(flag):
                    command = None if self.command is self.program.root else self.command
                    raise HelpSignal(
                        render_help(self.program, command),
                        command=self.command.name,
                    )
                if self.command.is_version_flag(flag):
                    raise VersionSignal(render_version(self.program))
                option, negated = self.command.resolve_flag(flag)
                if option is None:
                    self.leftovers.append(token.raw)
                    continue
                self.bound.pop(option.name, None)
                if option.is_boolean:
                    if negated:
                        self.bound[option.name] = (
                            False if token.inline_value is None else MISSING
                        )
                    else:
                        self.bound[option.name] = (
                            True if token.inline_value is None else token.inline_value
                        )
                elif token.inline_value is not None:
                    self.bound[option.name] = token.inline_value
                else:
                    self.bound[option.name] = MISSING
                    pending = option
                continue

            if token.literal:
                pending = None
            if pending is not None:
                self.bound[pending.name] = token.text
                pending = None
                continue

            positional = self._next_positional()
            if positional is None:
                self.leftovers.append(token.text)
            elif positional.variadic:
                self.bound.setdefault(positional.name, []).append(token.text)
            else:
                self.bound[positional.name] = token.text

    def _flag_for(self, name: str) -> str:
        option = self.command.get_option(name)
        return option.primary_flag if option else f"<{name}>"

    def _parameter(self, name: str) -> Option | Positional:
        parameter = self.command.get_option(name) or self.command.get_positional(name)
        assert parameter is not None, f"unknown bound name {name!r}"
        return parameter

    def _validate(self) -> dict[str, Any]:
        command = self.command

        # (a) required
        for positional in command.positionals:
            if (
                positional.required
                and positional.name not in self.bound
                and positional.default is None
            ):
                raise MissingRequiredError(
                    f"Missing required argument <{positional.name}>", name=positional.name
                )
        for option in command.options:
            bare = self.bound.get(option.name) is MISSING and not option.value_required
            supplied = option.name in self.bound and not bare
            if option.required and not supplied and option.default is None:
                raise MissingRequiredError(
                    f"Missing required option {option.primary_flag}", name=option.name
                )

        # (b) types
        values: dict[str, Any] = {}
        for name, raw in self.bound.items():
            parameter = self._parameter(name)
            values[name] = self._coerce(parameter, raw)

        # (c) choices
        for name, value in values.items():
            parameter = self._parameter(name)
            if not parameter.choices or value is None:
                continue
            for item in value if isinstance(value, list) else [value]:
                if item not in parameter.choices:
                    allowed = ", ".join(format_value(choice) for choice in parameter.choices)
                    raise InvalidChoiceError(
                        f"Invalid value '{format_value(item)}' for {self._flag_for(name)}: "
                        f"choose from {allowed}",
                        name=name,
                    )

        for positional in command.positionals:
            if positional.name not in values:
                default = positional.default
                if positional.variadic:
                    default = list(default) if default is not None else []
                values[positional.name] = default
        for option in command.options:
            if option.name not in values:
                values[option.name] = option.default

        # (d) dependencies
        for option in command.options:
            if option.name not in self.bound:
                continue
            for target in option.depends_on:
                if not _has_value(values.get(target)):
                    raise DependencyError(
                        f"Option {option.primary_flag} requires {self._flag_for(target)}",
                        name=option.name,
                    )

        # (e) counts
        option_count = sum(1 for option in command.options if option.name in self.bound)
        self._check_count(
            option_count,
            command.min_option_count,
            command.max_option_count,
            "options",
            OptionCountError,
        )
        argument_count = 0
        for positional in command.positionals:
            raw = self.bound.get(positional.name)
            if isinstance(raw, list):
                argument_count += len(raw)
            elif raw is not None:
                argument_count += 1
        self._check_count(
            argument_count,
            command.min_argument_count,
            command.max_argument_count,
            "arguments",
            ArgumentCountError,
        )
        return values

    def _coerce(self, parameter: Option | Positional, raw: Any) -> Any:
        if raw is MISSING:
            if isinstance(parameter, Option) and parameter.is_boolean:
                raise ArgumentTypeError(
                    f"Negated option --no-{parameter.primary_flag.lstrip('-')} does not take a value",
                    name=parameter.name,
                )
            if isinstance(parameter, Option) and not parameter.value_required:
                return parameter.default
            raise ArgumentTypeError(
                f"Option {self._flag_for(parameter.name)} expects a {parameter.value_type} value",
                name=parameter.name,
            )
        if isinstance(raw, list):
            return [self._coerce(parameter, item) for item in raw]
        try:
            return coerce_value(raw, parameter.value_type)
        except ValueError as error:
            raise ArgumentTypeError(
                f"Invalid {parameter.value_type} value for {self._flag_for(parameter.name)}: {error}",
                name=parameter.name,
            ) from error

    def _check_count(self, count, minimum, maximum, label, error_type) -> None:
        if minimum is not None and not minimum.allows_min(count):
            raise error_type(
                f"Command '{self.command.name}' expects the number of {label} to be "
                f"{minimum.describe('greater')}, got {count}",
                name=self.command.name,
            )
        if maximum is not None and not maximum.allows_max(count):
            raise error_type(
                f"Command '{self.command.name}' expects the number of {label} to be "
                f"{maximum.describe('less')}, got {count}",
                name=self.command.name,
            )


def parse_argv(program: Program, argv: Iterable[str]) -> ParseResult:
    """Parse `argv` (program name already stripped) against `program`."""
    return ArgumentBinder(program).parse(argv)
