# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Option` and `Positional` dataclasses, the in-memory schema of one
declared command-line parameter.

Both are created by `Command.option()` / `Command.arg()` (usually from a spec
string) and are read-only while parsing. Defaults and choices are stored already
coerced to the declared `ValueType`.

Key Attributes:
- `name`: Canonical name, used as the key in the parse result
- `flags`: Long flag first, then short or long aliases (options only)
- `value_type`: Declared `ValueType`
- `default`: Fallback value when not supplied
- `choices`: Allowed values; empty means unconstrained
- `required`: Whether a value must be supplied or defaulted
- `depends_on`: Other option names that must be present alongside (options only)
- `variadic`: Collect all remaining values into a list (positionals only)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from argot.utils import format_value
from argot.value_type import ValueType


def _choice_text(choices: tuple[Any, ...]) -> str:
    return f"{{{','.join(format_value(choice) for choice in choices)}}}"


@dataclass
class Option:
    """
    Represents a flagged command-line option.

    Attributes:
        name (str): Canonical name (e.g. `size` for `--size, -s`).
        flags (tuple[str, ...]): All flag strings, long flag first.
        value_type (ValueType): Declared value type.
        default (Any): Coerced default value, or None.
        choices (tuple[Any, ...]): Allowed values.
        required (bool): True if the option must end up with a value.
        depends_on (tuple[str, ...]): Names of options that must also be present.
        help (str): Help text.
        metavar (str): Placeholder shown in usage (`<size>`).
        value_required (bool): False when the spec wrote `[value]`; the flag may
            then appear alone and takes its default.
    """

    name: str
    flags: tuple[str, ...]
    value_type: ValueType = ValueType.STRING
    default: Any = None
    choices: tuple[Any, ...] = ()
    required: bool = False
    depends_on: tuple[str, ...] = ()
    help: str = ""
    metavar: str = ""
    value_required: bool = True

    @property
    def is_boolean(self) -> bool:
        return self.value_type == ValueType.BOOLEAN

    @property
    def expects_value(self) -> bool:
        return not self.is_boolean

    @property
    def primary_flag(self) -> str:
        return self.flags[0]

    @property
    def aliases(self) -> tuple[str, ...]:
        return self.flags[1:]

    def get_choice_text(self) -> str:
        """Get the value placeholder text for the option."""
        if self.is_boolean:
            return ""
        if self.choices:
            text = _choice_text(self.choices)
        else:
            text = (self.metavar or self.name).upper()
        return text

    def get_usage_text(self) -> str:
        choice_text = self.get_choice_text()
        if choice_text and not self.value_required:
            choice_text = f"[{choice_text}]"
        text = f"{self.primary_flag} {choice_text}" if choice_text else self.primary_flag
        return text if self.required else f"[{text}]"


@dataclass
class Positional:
    """
    Represents a positional argument.

    Attributes:
        name (str): Name of the argument and its key in the parse result.
        value_type (ValueType): Declared value type.
        default (Any): Coerced default value, or None.
        required (bool): True if a value must be supplied or defaulted.
        variadic (bool): True if the argument collects all remaining values.
        choices (tuple[Any, ...]): Allowed values.
        help (str): Help text.
    """

    name: str
    value_type: ValueType = ValueType.STRING
    default: Any = None
    required: bool = True
    variadic: bool = False
    choices: tuple[Any, ...] = field(default_factory=tuple)
    help: str = ""

    def get_usage_text(self) -> str:
        text = _choice_text(self.choices) if self.choices else self.name
        if self.variadic:
            text = f"{text}..."
        return f"<{text}>" if self.required else f"[{text}]"
