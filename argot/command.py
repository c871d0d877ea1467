# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `Command`, the schema of one named command: its aliases,
ordered positionals, flagged options, defaults, demands, dependencies, count
bounds, examples and optional action callback.

Commands are usually created through `Program.command()` from a spec string and
then configured fluently:

    program.command("order.o <name> --tries [tries:number:2]", "Order a pizza")
        .option("--size, -s <size>", "Pizza size", choices=["small", "medium", "large"])
        .option("--cheese.c", "Add cheese")
        .demand("size")
        .when("cheese", "size")
        .min_options(1)
        .example("order Marco --size large -c", "A large cheese pizza")

Every configuration method validates its input immediately and raises
`SchemaError` on a definition mistake, so a schema that reaches the parser is
always consistent. The parser only reads a Command; it never mutates it.

Key Features:
- Spec-string registration for options and positionals
- Defaults coerced and checked against choices at definition time
- `--no-<name>` negation for boolean options
- Automatic `-h/--help` handling
- Inclusive or exclusive min/max bounds for option and positional counts
- `suggest_next()` for interactive completion
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable

from argot.exceptions import SchemaError
from argot.logger import logger
from argot.option import Option, Positional
from argot.spec_parser import (
    FlagSpec,
    Placeholder,
    parse_option_spec,
    parse_placeholder,
    split_spec,
    to_dest,
)
from argot.utils import coerce_value, format_value
from argot.value_type import ValueType

HELP_FLAGS = ("--help", "-h")
VERSION_FLAG = "--version"
NEGATION_PREFIX = "--no-"
RESERVED_NAMES = {"help"}


@dataclass(frozen=True)
class Example:
    usage: str
    description: str


@dataclass(frozen=True)
class CountBound:
    """A min or max bound on a count, inclusive unless `exclusive` is set."""

    value: int
    exclusive: bool = False

    def allows_min(self, count: int) -> bool:
        return count > self.value if self.exclusive else count >= self.value

    def allows_max(self, count: int) -> bool:
        return count < self.value if self.exclusive else count <= self.value

    def describe(self, relation: str) -> str:
        if self.exclusive:
            return f"{relation} than {self.value}"
        return f"{relation} than or equal to {self.value}"


class Command:
    """
    Schema of a single command.

    Attributes:
        name (str): Command name, used as the selector token.
        aliases (list[str]): Alternative selector tokens.
        description (str): One-line description shown in help.
        program_name (str): Program name used in usage lines.
        examples (list[Example]): Usage examples shown in help.
        callback (Callable | None): Called by `Program.exec()` with the result.
        min_option_count / max_option_count (CountBound | None): Bounds on the
            number of explicitly supplied options.
        min_argument_count / max_argument_count (CountBound | None): Bounds on
            the number of supplied positional values.
    """

    def __init__(
        self,
        name: str,
        aliases: Iterable[str] | None = None,
        description: str = "",
        program_name: str = "",
    ) -> None:
        if not name or not isinstance(name, str):
            raise SchemaError("Command name must be a non-empty string")
        self.name: str = name
        self.aliases: list[str] = []
        self.description: str = description
        self.program_name: str = program_name
        self.examples: list[Example] = []
        self.callback: Callable[..., Any] | None = None
        self.min_option_count: CountBound | None = None
        self.max_option_count: CountBound | None = None
        self.min_argument_count: CountBound | None = None
        self.max_argument_count: CountBound | None = None
        self._positionals: list[Positional] = []
        self._options: dict[str, Option] = {}
        self._flag_map: dict[str, str] = {}
        self._dest_set: set[str] = set(RESERVED_NAMES)
        for alias in aliases or []:
            self.alias(alias)

    @property
    def options(self) -> tuple[Option, ...]:
        return tuple(self._options.values())

    @property
    def positionals(self) -> tuple[Positional, ...]:
        return tuple(self._positionals)

    @property
    def flags(self) -> tuple[str, ...]:
        return tuple(self._flag_map)

    def get_option(self, name: str) -> Option | None:
        return self._options.get(name)

    def get_positional(self, name: str) -> Positional | None:
        for positional in self._positionals:
            if positional.name == name:
                return positional
        return None

    def _get_parameter(self, name: str) -> Option | Positional:
        key = self._flag_map.get(name, name)
        parameter = self._options.get(key) or self.get_positional(to_dest(key))
        if parameter is None:
            raise SchemaError(f"Command '{self.name}' has no option or argument '{name}'")
        return parameter

    def resolve_flag(self, flag: str) -> tuple[Option | None, bool]:
        """
        Resolve a flag string to its option.

        Returns:
            tuple[Option | None, bool]: The option (or None if unknown) and
            whether the flag was the `--no-` negation of a boolean option.
        """
        name = self._flag_map.get(flag)
        if name is not None:
            return self._options[name], False
        if flag.startswith(NEGATION_PREFIX):
            option = self._options.get(self._flag_map.get(f"--{flag[len(NEGATION_PREFIX):]}", ""))
            if option is not None and option.is_boolean:
                return option, True
        return None, False

    def is_help_flag(self, flag: str) -> bool:
        return flag in HELP_FLAGS and flag not in self._flag_map

    def is_version_flag(self, flag: str) -> bool:
        return flag == VERSION_FLAG and flag not in self._flag_map

    def _validate_flags(self, flags: tuple[str, ...]) -> None:
        """Validate the flags provided for an option."""
        if not flags:
            raise SchemaError("No flags provided")
        for flag in flags:
            if flag == "--help":
                raise SchemaError(f"Flag '{flag}' is reserved for help")
            if flag in self._flag_map:
                raise SchemaError(
                    f"Flag '{flag}' is already used by option '{self._flag_map[flag]}'"
                )
            if flag.startswith(NEGATION_PREFIX) and f"--{flag[len(NEGATION_PREFIX):]}" in self._flag_map:
                raise SchemaError(f"Flag '{flag}' collides with a negated boolean option")

    def _validate_dest(self, dest: str) -> None:
        if dest[0].isdigit():
            raise SchemaError(f"Name '{dest}' must not start with a digit")
        if dest in self._dest_set:
            raise SchemaError(f"Name '{dest}' is already used in command '{self.name}'")

    def _normalize_choices(
        self, choices: Iterable | None, value_type: ValueType, name: str
    ) -> tuple[Any, ...]:
        if choices is None:
            return ()
        if value_type == ValueType.BOOLEAN:
            raise SchemaError(f"choices cannot be specified for boolean option '{name}'")
        if isinstance(choices, (str, dict)):
            raise SchemaError(f"choices for '{name}' must be a list, tuple or set")
        try:
            items = list(choices)
        except TypeError as error:
            raise SchemaError(
                f"choices for '{name}' must be iterable (like list, tuple, or set)"
            ) from error
        normalized = []
        for choice in items:
            try:
                normalized.append(coerce_value(choice, value_type))
            except ValueError as error:
                raise SchemaError(
                    f"Invalid choice {choice!r} for '{name}': not coercible to {value_type}: {error}"
                ) from error
        return tuple(normalized)

    def _coerce_default(
        self,
        default: Any,
        value_type: ValueType,
        choices: tuple[Any, ...],
        name: str,
        variadic: bool = False,
    ) -> Any:
        """Coerce a default to the declared type and check it against the choices."""
        if default is None:
            return None
        if variadic:
            items = default if isinstance(default, (list, tuple)) else [default]
            return [self._coerce_default(item, value_type, choices, name) for item in items]
        try:
            value = coerce_value(default, value_type)
        except ValueError as error:
            raise SchemaError(
                f"Default value {default!r} for '{name}' cannot be coerced to {value_type}: {error}"
            ) from error
        if choices and value not in choices:
            allowed = ", ".join(format_value(choice) for choice in choices)
            raise SchemaError(
                f"Default value {default!r} for '{name}' is not one of: {allowed}"
            )
        return value

    def _register_option(self, option: Option) -> Option:
        self._validate_flags(option.flags)
        self._validate_dest(option.name)
        for flag in option.flags:
            self._flag_map[flag] = option.name
        self._dest_set.add(option.name)
        self._options[option.name] = option
        return option

    def _register_positional(self, positional: Positional) -> Positional:
        self._validate_dest(positional.name)
        if self._positionals and self._positionals[-1].variadic:
            raise SchemaError(
                f"Argument '{positional.name}' cannot follow variadic argument "
                f"'{self._positionals[-1].name}'"
            )
        if positional.required and any(
            not existing.required for existing in self._positionals
        ):
            raise SchemaError(
                f"Required argument '{positional.name}' cannot follow an optional argument"
            )
        logger.debug("[%s] Registered argument '%s'", self.name, positional.name)
        self._dest_set.add(positional.name)
        self._positionals.append(positional)
        return positional

    def add_flag_spec(
        self,
        flag_spec: FlagSpec,
        help: str = "",
        default: Any = None,
        choices: Iterable | None = None,
        required: bool = False,
        value_type: ValueType | str | None = None,
        depends_on: Iterable[str] | None = None,
    ) -> Option:
        placeholder = flag_spec.placeholder
        if value_type is not None:
            value_type = ValueType(value_type)
        elif placeholder is None:
            value_type = ValueType.BOOLEAN
        else:
            value_type = placeholder.value_type or ValueType.STRING
        if value_type == ValueType.BOOLEAN and required:
            raise SchemaError(f"Boolean option '{flag_spec.name}' cannot be required")
        if default is None and placeholder is not None:
            default = placeholder.default
        if value_type == ValueType.BOOLEAN and default is None:
            default = False
        normalized_choices = self._normalize_choices(choices, value_type, flag_spec.name)
        option = Option(
            name=flag_spec.name,
            flags=flag_spec.flags,
            value_type=value_type,
            default=self._coerce_default(default, value_type, normalized_choices, flag_spec.name),
            choices=normalized_choices,
            required=required,
            depends_on=tuple(depends_on or ()),
            help=help or (placeholder.help if placeholder else ""),
            metavar=placeholder.name if placeholder else "",
            value_required=placeholder.required if placeholder else False,
        )
        return self._register_option(option)

    def add_placeholder(
        self,
        placeholder: Placeholder,
        help: str = "",
        default: Any = None,
        choices: Iterable | None = None,
        value_type: ValueType | str | None = None,
    ) -> Positional:
        resolved_type = (
            ValueType(value_type)
            if value_type is not None
            else placeholder.value_type or ValueType.STRING
        )
        if default is None:
            default = placeholder.default
        normalized_choices = self._normalize_choices(choices, resolved_type, placeholder.name)
        positional = Positional(
            name=placeholder.name,
            value_type=resolved_type,
            default=self._coerce_default(
                default,
                resolved_type,
                normalized_choices,
                placeholder.name,
                variadic=placeholder.variadic,
            ),
            required=placeholder.required,
            variadic=placeholder.variadic,
            choices=normalized_choices,
            help=help or placeholder.help,
        )
        return self._register_positional(positional)

    def add_option(
        self,
        spec: str,
        help: str = "",
        default: Any = None,
        choices: Iterable | None = None,
        required: bool = False,
        value_type: ValueType | str | None = None,
        depends_on: Iterable[str] | None = None,
    ) -> Option | Positional:
        """
        Register an option from a spec string and return its schema.

        A spec made of a single placeholder registers a positional instead.

        Args:
            spec (str): e.g. `"--size, -s <size>"`, `"--cheese.c"`, `"<name:number:35>"`.
            help (str): Help text.
            default (Any): Default value, coerced to the declared type.
            choices (Iterable | None): Allowed values.
            required (bool): Whether the option must end up with a value.
            value_type (ValueType | str | None): Overrides the type named in the spec.
            depends_on (Iterable[str] | None): Options that must be present alongside.

        Raises:
            SchemaError: If the spec or any argument is invalid.
        """
        parsed = parse_option_spec(spec)
        if isinstance(parsed, Placeholder):
            if required or depends_on:
                raise SchemaError(
                    f"Positional '{parsed.name}' does not accept required or depends_on; "
                    "use <name> for required arguments"
                )
            return self.add_placeholder(parsed, help, default, choices, value_type)
        return self.add_flag_spec(
            parsed, help, default, choices, required, value_type, depends_on
        )

    def option(self, spec: str, help: str = "", **kwargs) -> Command:
        """Fluent form of `add_option()`."""
        self.add_option(spec, help, **kwargs)
        return self

    def arg(
        self,
        spec: str,
        help: str = "",
        default: Any = None,
        choices: Iterable | None = None,
        value_type: ValueType | str | None = None,
    ) -> Command:
        """Register a positional from `<name:type:default>`, `[name]` or a bare name."""
        pieces = split_spec(spec)
        if len(pieces) != 1:
            raise SchemaError(f"Argument spec '{spec}' must be a single placeholder")
        piece = pieces[0]
        if piece[:1] not in "<[":
            piece = f"<{piece}>"
        self.add_placeholder(parse_placeholder(piece), help, default, choices, value_type)
        return self

    def alias(self, *aliases: str) -> Command:
        for alias in aliases:
            for part in alias.split("."):
                if not part:
                    continue
                if part.startswith("-"):
                    raise SchemaError(f"Command alias '{part}' must not start with '-'")
                if part != self.name and part not in self.aliases:
                    self.aliases.append(part)
        return self

    def describe(self, description: str) -> Command:
        self.description = description
        return self

    def default(self, name: str, value: Any) -> Command:
        """Set the default of an option (by name or flag) or positional."""
        parameter = self._get_parameter(name)
        parameter.default = self._coerce_default(
            value,
            parameter.value_type,
            parameter.choices,
            parameter.name,
            variadic=isinstance(parameter, Positional) and parameter.variadic,
        )
        return self

    def demand(self, *names: str) -> Command:
        """Mark options (by name or flag) as required."""
        for name in names:
            parameter = self._get_parameter(name)
            if isinstance(parameter, Option) and parameter.is_boolean:
                raise SchemaError(f"Boolean option '{parameter.name}' cannot be required")
            if isinstance(parameter, Positional) and not parameter.required:
                raise SchemaError(
                    f"Optional argument '{parameter.name}' cannot be demanded; declare it as <{parameter.name}>"
                )
            parameter.required = True
        return self

    def when(self, name: str, requires: str | Iterable[str], converse: bool = False) -> Command:
        """
        Require `requires` to have a value whenever option `name` is supplied.

        With `converse`, supplying any of `requires` also requires `name`.
        """
        targets = [requires] if isinstance(requires, str) else list(requires)
        source = self._get_parameter(name)
        if not isinstance(source, Option):
            raise SchemaError(f"'{name}' is not an option of command '{self.name}'")
        resolved = [self._get_parameter(target).name for target in targets]
        if source.name in resolved:
            raise SchemaError(f"Option '{source.name}' cannot depend on itself")
        source.depends_on = tuple(dict.fromkeys(source.depends_on + tuple(resolved)))
        if converse:
            for target in resolved:
                option = self._options.get(target)
                if option is None:
                    raise SchemaError(f"'{target}' is not an option of command '{self.name}'")
                option.depends_on = tuple(dict.fromkeys(option.depends_on + (source.name,)))
        return self

    def min_options(self, count: int, exclusive: bool = False) -> Command:
        self.min_option_count = self._make_bound(count, exclusive, "min_options")
        return self

    def max_options(self, count: int, exclusive: bool = False) -> Command:
        self.max_option_count = self._make_bound(count, exclusive, "max_options")
        return self

    def min_arguments(self, count: int, exclusive: bool = False) -> Command:
        self.min_argument_count = self._make_bound(count, exclusive, "min_arguments")
        return self

    def max_arguments(self, count: int, exclusive: bool = False) -> Command:
        self.max_argument_count = self._make_bound(count, exclusive, "max_arguments")
        return self

    def _make_bound(self, count: int, exclusive: bool, label: str) -> CountBound:
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise SchemaError(f"{label} must be a non-negative integer, got {count!r}")
        return CountBound(count, exclusive)

    def example(self, usage: str, description: str = "") -> Command:
        if not isinstance(usage, str) or not usage.strip():
            raise SchemaError("Example usage must be a non-empty string")
        self.examples.append(Example(usage=usage, description=description))
        return self

    def action(self, callback: Callable[..., Any]) -> Command:
        if not callable(callback):
            raise SchemaError(f"Action for command '{self.name}' must be callable")
        self.callback = callback
        return self

    def usage(self, program_name: str | None = None, show_name: bool = True) -> str:
        """Return the plain-text usage line for this command."""
        parts = [program_name if program_name is not None else self.program_name]
        if show_name:
            parts.append(self.name)
        for option in self._options.values():
            if option.required:
                parts.append(option.get_usage_text())
        if any(not option.required for option in self._options.values()):
            parts.append("[options]")
        parts.extend(positional.get_usage_text() for positional in self._positionals)
        return " ".join(part for part in parts if part)

    def suggest_next(self, args: list[str], cursor_at_end_of_token: bool = False) -> list[str]:
        """
        Suggest completions for the next argument based on current input.

        Args:
            args (list[str]): Tokens typed so far, excluding the command name.
            cursor_at_end_of_token (bool): True if the input ends with a space.

        Returns:
            list[str]: Sorted suggestions (flags or allowed values).
        """
        consumed: set[str] = set()
        filled = 0
        expecting: Option | None = None
        completed = args if cursor_at_end_of_token else args[:-1]
        for token in completed:
            option, _ = self.resolve_flag(token.split("=", 1)[0])
            if option is not None:
                consumed.add(option.name)
                expecting = option if option.expects_value and "=" not in token else None
            elif expecting is not None:
                expecting = None
            elif not token.startswith("-"):
                filled += 1

        remaining_flags = [
            flag for flag, name in self._flag_map.items() if name not in consumed
        ]
        last = "" if cursor_at_end_of_token or not args else args[-1]
        suggestions: list[str] = []

        if expecting is not None:
            suggestions.extend(
                format_value(choice)
                for choice in expecting.choices
                if format_value(choice).startswith(last)
            )
        elif last.startswith("-"):
            suggestions.extend(flag for flag in remaining_flags if flag.startswith(last))
            if "--help".startswith(last):
                suggestions.append("--help")
        else:
            positional = self._next_positional(filled)
            if positional is not None and positional.choices:
                suggestions.extend(
                    format_value(choice)
                    for choice in positional.choices
                    if format_value(choice).startswith(last)
                )
            elif not last:
                suggestions.extend(remaining_flags)
        return sorted(set(suggestions))

    def _next_positional(self, filled: int) -> Positional | None:
        if filled < len(self._positionals):
            return self._positionals[filled]
        if self._positionals and self._positionals[-1].variadic:
            return self._positionals[-1]
        return None

    def __str__(self) -> str:
        return f"Command(name='{self.name}', aliases={self.aliases})"

    def __repr__(self) -> str:
        return (
            f"Command(name={self.name!r}, aliases={self.aliases!r}, "
            f"positionals={[p.name for p in self._positionals]!r}, "
            f"options={list(self._options)!r})"
        )
