# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Translates spec strings into structured option, positional and command specs.

Grammar:
    placeholder := "<" name [":" type [":" default [":" help]]] ["..."] ">"   (required)
                 | "[" name [":" type [":" default [":" help]]] ["..."] "]"   (optional)
    flag        := "--" long | "-" short | "--" long "." alias ...
    option      := flag ("," | "|" | " ") flag ... [placeholder]
    command     := [name ["." alias ...]] (placeholder | flag [placeholder]) ...

Examples:
    "--size, -s <size>"                → option `size`, flags (--size, -s), required value
    "--cheese.c"                       → boolean option `cheese`, flags (--cheese, -c)
    "[tries:number:2]"                 → optional positional `tries`, number, default "2"
    "order.o <name> --tries [n:number]" → command `order`, alias `o`, one positional, one option

Defaults are returned as raw text; the command coerces them to the declared type.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from argot.exceptions import SchemaError
from argot.value_type import ValueType

PIECE_EXP = re.compile(r"<[^>]*>|\[[^\]]*\]|[^,|\s]+")
PLACEHOLDER_OPENERS = {"<": ">", "[": "]"}
VARIADIC = "..."


@dataclass(frozen=True)
class Placeholder:
    name: str
    value_type: ValueType | None = None
    default: str | None = None
    required: bool = True
    variadic: bool = False
    help: str = ""


@dataclass(frozen=True)
class FlagSpec:
    name: str
    flags: tuple[str, ...]
    placeholder: Placeholder | None = None

    @property
    def is_boolean(self) -> bool:
        return self.placeholder is None


@dataclass(frozen=True)
class CommandSpec:
    name: str | None
    aliases: tuple[str, ...] = ()
    positionals: tuple[Placeholder, ...] = ()
    options: tuple[FlagSpec, ...] = field(default_factory=tuple)


def split_spec(spec: str) -> list[str]:
    if not isinstance(spec, str):
        raise SchemaError(f"Spec must be a string, got {type(spec).__name__}")
    return PIECE_EXP.findall(spec)


def is_placeholder(piece: str) -> bool:
    return piece[:1] in PLACEHOLDER_OPENERS


def is_flag_piece(piece: str) -> bool:
    return piece.startswith("-")


def to_dest(text: str) -> str:
    """Convert a flag or placeholder name to a result key."""
    dest = text.lstrip("-").replace("-", "_")
    if not dest or not dest.replace("_", "").isalnum():
        raise SchemaError(
            f"Invalid name '{text}': use letters, digits, dashes and underscores only"
        )
    return dest


def parse_placeholder(piece: str) -> Placeholder:
    """Parse `<name:type:default:help>` or `[name:type:default:help]`."""
    opener = piece[:1]
    closer = PLACEHOLDER_OPENERS.get(opener)
    if closer is None or not piece.endswith(closer) or len(piece) < 3:
        raise SchemaError(f"Malformed placeholder '{piece}': expected <name> or [name]")
    inner = piece[1:-1]
    variadic = False
    if inner.endswith(VARIADIC):
        variadic = True
        inner = inner[: -len(VARIADIC)]
    parts = inner.split(":", 3)
    name = parts[0]
    if name.endswith(VARIADIC):
        variadic = True
        name = name[: -len(VARIADIC)]
    raw_type = parts[1] if len(parts) > 1 and parts[1] else None
    default = parts[2] if len(parts) > 2 and parts[2] != "" else None
    help_text = parts[3] if len(parts) > 3 else ""
    try:
        value_type = ValueType(raw_type) if raw_type else None
    except ValueError as error:
        raise SchemaError(f"Placeholder '{piece}': {error}") from error
    return Placeholder(
        name=to_dest(name),
        value_type=value_type,
        default=default,
        required=opener == "<",
        variadic=variadic,
        help=help_text,
    )


def normalize_flags(piece: str) -> list[str]:
    """Expand `--size.s` into `['--size', '-s']`."""
    flags = []
    for part in piece.split("."):
        bare = part.lstrip("-")
        if not bare:
            raise SchemaError(f"Malformed flag '{piece}'")
        if part.startswith("-") and not part.startswith("--") and len(bare) > 1:
            raise SchemaError(
                f"Flag '{part}' must be a single character or start with '--'"
            )
        if part.startswith("---"):
            raise SchemaError(f"Flag '{part}' has too many leading dashes")
        flag = f"--{bare}" if len(bare) > 1 else f"-{bare}"
        if "=" in flag:
            raise SchemaError(f"Flag '{part}' must not contain '='")
        if flag not in flags:
            flags.append(flag)
    return flags


def _build_flag_spec(flags: list[str], placeholder: Placeholder | None) -> FlagSpec:
    ordered = sorted(flags, key=lambda flag: not flag.startswith("--"))
    if placeholder is not None and placeholder.variadic:
        raise SchemaError(
            f"Option {ordered[0]} cannot take a variadic value, only positionals can"
        )
    return FlagSpec(name=to_dest(ordered[0]), flags=tuple(ordered), placeholder=placeholder)


def parse_option_spec(spec: str) -> FlagSpec | Placeholder:
    """
    Parse an option spec string.

    A spec made of a single placeholder (`"<name:number:35>"`) describes a
    positional and is returned as a `Placeholder`.
    """
    pieces = split_spec(spec)
    if not pieces:
        raise SchemaError("Option spec is empty")

    if is_placeholder(pieces[0]):
        if len(pieces) > 1:
            raise SchemaError(f"Positional spec '{spec}' must be a single placeholder")
        return parse_placeholder(pieces[0])

    flags: list[str] = []
    placeholder: Placeholder | None = None
    for index, piece in enumerate(pieces):
        if is_flag_piece(piece):
            if placeholder is not None:
                raise SchemaError(f"Option spec '{spec}': flags must precede the value")
            flags.extend(flag for flag in normalize_flags(piece) if flag not in flags)
        elif is_placeholder(piece):
            if index != len(pieces) - 1:
                raise SchemaError(f"Option spec '{spec}': only one value placeholder allowed")
            placeholder = parse_placeholder(piece)
        else:
            raise SchemaError(
                f"Option spec '{spec}': token '{piece}' is missing -, <, or ["
            )
    return _build_flag_spec(flags, placeholder)


def parse_command_spec(spec: str) -> CommandSpec:
    """
    Parse a command spec string such as `"order.o <name> --tries [tries:number:2]"`.

    A spec starting with a placeholder or flag has no name and configures the
    default command.
    """
    pieces = split_spec(spec)
    name: str | None = None
    aliases: list[str] = []
    if pieces and not is_placeholder(pieces[0]) and not is_flag_piece(pieces[0]):
        names = [part for part in pieces.pop(0).split(".") if part]
        if not names:
            raise SchemaError(f"Command spec '{spec}' has an empty name")
        name, aliases = names[0], names[1:]

    positionals: list[Placeholder] = []
    options: list[FlagSpec] = []
    index = 0
    while index < len(pieces):
        piece = pieces[index]
        if is_placeholder(piece):
            positionals.append(parse_placeholder(piece))
            index += 1
        elif is_flag_piece(piece):
            placeholder = None
            following = pieces[index + 1] if index + 1 < len(pieces) else ""
            if following and is_placeholder(following):
                placeholder = parse_placeholder(following)
                index += 1
            options.append(_build_flag_spec(normalize_flags(piece), placeholder))
            index += 1
        else:
            raise SchemaError(
                f"Command spec '{spec}': token '{piece}' is missing -, <, or ["
            )

    variadics = [positional for positional in positionals if positional.variadic]
    if len(variadics) > 1:
        raise SchemaError(
            f"Command spec '{spec}' has {len(variadics)} variadic arguments, only one is permitted"
        )
    return CommandSpec(
        name=name,
        aliases=tuple(aliases),
        positionals=tuple(positionals),
        options=tuple(options),
    )
