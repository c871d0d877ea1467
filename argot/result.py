# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ParseResult`, the immutable outcome of a successful parse, and
`ParseState`, the states a parse moves through.

A `ParseResult` holds plain data only: the resolved command name, the coerced
values keyed by option/positional name, the names that were bound explicitly
and the tokens that matched nothing. It keeps no reference to the command
schema, so it can be passed around, compared and serialized freely.

`to_argv()` re-encodes the result as a canonical argument vector. Parsing that
vector against the same program produces an equal `ParseResult`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from argot.lexer import NEGATIVE_NUMBER_EXP, TERMINATOR
from argot.utils import format_value


class ParseState(Enum):
    """States of a single parse, in order."""

    START = "start"
    LEXING = "lexing"
    COMMAND_RESOLVED = "command_resolved"
    BINDING = "binding"
    VALIDATING = "validating"
    SUCCESS = "success"
    FAILED = "failed"


def _looks_like_flag(text: str) -> bool:
    return text.startswith("-") and text != "-" and not NEGATIVE_NUMBER_EXP.match(text)


@dataclass(frozen=True)
class ParseResult:
    """
    Result of parsing an argument vector against a command.

    Attributes:
        command (str): Name of the resolved command.
        values (Mapping[str, Any]): Read-only mapping of name to coerced value.
        explicit (frozenset[str]): Names bound by an explicit token.
        leftovers (tuple[str, ...]): Raw tokens that matched nothing.
        positional_names (tuple[str, ...]): Positional names in declaration order.
        option_flags (Mapping[str, str]): Primary flag of each option.
        selected (bool): Whether a selector token named the command.
    """

    command: str
    values: Mapping[str, Any] = field(default_factory=dict)
    explicit: frozenset[str] = frozenset()
    leftovers: tuple[str, ...] = ()
    positional_names: tuple[str, ...] = ()
    option_flags: Mapping[str, str] = field(default_factory=dict)
    selected: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(self, "option_flags", MappingProxyType(dict(self.option_flags)))
        object.__setattr__(self, "explicit", frozenset(self.explicit))
        object.__setattr__(self, "leftovers", tuple(self.leftovers))
        object.__setattr__(self, "positional_names", tuple(self.positional_names))

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def is_explicit(self, name: str) -> bool:
        return name in self.explicit

    def as_dict(self) -> dict[str, Any]:
        """Return a plain dict suitable for JSON output."""
        return {
            "command": self.command,
            "values": dict(self.values),
            "explicit": sorted(self.explicit),
            "leftovers": list(self.leftovers),
        }

    def to_argv(self) -> list[str]:
        """
        Re-encode the result as a canonical argument vector.

        Options come first (`--name value`, `--name=value` when the value starts
        with `-`, `--flag` / `--no-flag` for booleans), then positional values,
        then leftovers. A `--` is inserted before the positionals when one of
        them would otherwise read as a flag, or when an option with an optional
        value was given without one; in that case leftover flags are
        re-read as plain values.
        """
        argv: list[str] = [self.command] if self.selected else []
        bare_value_flag = False

        for name, flag in self.option_flags.items():
            if name not in self.explicit:
                continue
            value = self.values.get(name)
            if isinstance(value, bool):
                if value:
                    argv.append(flag)
                elif flag.startswith("--"):
                    argv.append(f"--no-{flag[2:]}")
                else:
                    argv.append(f"{flag}=false")
            elif value is None:
                argv.append(flag)
                bare_value_flag = True
            else:
                text = format_value(value)
                if text.startswith("-"):
                    argv.append(f"{flag}={text}")
                else:
                    argv.extend([flag, text])

        positional_texts: list[str] = []
        for name in self.positional_names:
            if name not in self.explicit:
                continue
            value = self.values.get(name)
            items = value if isinstance(value, list) else [value]
            positional_texts.extend(format_value(item) for item in items)
        if any(_looks_like_flag(text) for text in positional_texts) or (
            bare_value_flag and (positional_texts or self.leftovers)
        ):
            argv.append(TERMINATOR)
        argv.extend(positional_texts)
        argv.extend(self.leftovers)
        return argv

    def __repr__(self) -> str:
        return (
            f"ParseResult(command={self.command!r}, values={dict(self.values)!r}, "
            f"explicit={sorted(self.explicit)!r}, leftovers={list(self.leftovers)!r})"
        )
