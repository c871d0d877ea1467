# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Splits a raw argument vector into typed tokens.

The lexer knows nothing about any command schema. It only classifies each
argv element by its shape:

- `--name` / `--name=value`   → `LongFlag`
- `-s` / `-s=value`           → `ShortFlag`
- `-abc`                      → `ShortFlag('a')`, `ShortFlag('b')`, `ShortFlag('c')`
- `--`                        → dropped; every later element is a literal `Value`
- `-`, `-5`, `-2.5`, anything else → `Value`

`lex()` returns a `TokenStream`, which re-lexes its own copy of the input each
time it is iterated. Nothing survives between iterations, so the same stream
can be walked any number of times with the same result.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence, Union

from argot.exceptions import LexError

NEGATIVE_NUMBER_EXP = re.compile(r"^-(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
TERMINATOR = "--"


@dataclass(frozen=True)
class LongFlag:
    name: str
    inline_value: str | None = None
    raw: str = ""

    @property
    def flag(self) -> str:
        return f"--{self.name}"


@dataclass(frozen=True)
class ShortFlag:
    letter: str
    inline_value: str | None = None
    raw: str = ""

    @property
    def flag(self) -> str:
        return f"-{self.letter}"


@dataclass(frozen=True)
class Value:
    text: str
    literal: bool = field(default=False, compare=False)

    @property
    def raw(self) -> str:
        return self.text


Token = Union[LongFlag, ShortFlag, Value]


def is_flag(token: Token) -> bool:
    return isinstance(token, (LongFlag, ShortFlag))


def _split_inline(body: str, arg: str) -> tuple[str, str | None]:
    if "=" not in body:
        return body, None
    name, _, value = body.partition("=")
    if not name:
        raise LexError(f"Malformed option '{arg}': missing name before '='", name=arg)
    if value == "":
        raise LexError(f"Malformed option '{arg}': dangling '=' without a value", name=arg)
    return name, value


def lex_token(arg: str) -> list[Token]:
    """Classify a single argv element. `--` is handled by `TokenStream`."""
    if arg.startswith("---"):
        raise LexError(f"Malformed option '{arg}': too many leading dashes", name=arg)

    if arg.startswith("--"):
        name, inline_value = _split_inline(arg[2:], arg)
        return [LongFlag(name, inline_value, raw=arg)]

    if arg == "-" or NEGATIVE_NUMBER_EXP.match(arg):
        return [Value(arg)]

    if arg.startswith("-"):
        letters, inline_value = _split_inline(arg[1:], arg)
        if inline_value is not None:
            # only the last letter of -ab=5 takes the inline value
            tokens: list[Token] = [ShortFlag(c, raw=f"-{c}") for c in letters[:-1]]
            tokens.append(ShortFlag(letters[-1], inline_value, raw=f"-{letters[-1]}={inline_value}"))
            return tokens
        return [ShortFlag(c, raw=f"-{c}") for c in letters]

    return [Value(arg)]


class TokenStream:
    """Lazy, finite, restartable sequence of tokens over a copy of argv."""

    def __init__(self, argv: Iterable[str]) -> None:
        self.argv: tuple[str, ...] = tuple(argv)

    def __iter__(self) -> Iterator[Token]:
        terminated = False
        for arg in self.argv:
            if not isinstance(arg, str):
                raise LexError(f"Argument {arg!r} is not a string", name=repr(arg))
            if terminated:
                yield Value(arg, literal=True)
            elif arg == TERMINATOR:
                terminated = True
            else:
                yield from lex_token(arg)

    def __len__(self) -> int:
        return len(self.argv)

    def __repr__(self) -> str:
        return f"TokenStream({list(self.argv)!r})"


def lex(argv: Sequence[str] | Iterable[str]) -> TokenStream:
    """
    Lex an argument vector (program name already stripped).

    Raises:
        LexError: When iterated over a malformed token.
    """
    return TokenStream(argv)
