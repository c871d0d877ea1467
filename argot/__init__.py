"""
Argot CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .api import add_option, parse, register_command, register_program, set_default
from .command import Command
from .completer import ArgotCompleter
from .exceptions import (
    ArgotError,
    ArgumentCountError,
    ArgumentTypeError,
    CommandAlreadyExistsError,
    DependencyError,
    InvalidChoiceError,
    LexError,
    MissingRequiredError,
    OptionCountError,
    SchemaError,
    UnknownCommandError,
    ValidationError,
)
from .option import Option, Positional
from .program import DEFAULT_COMMAND, Program
from .result import ParseResult
from .signals import HelpSignal, VersionSignal
from .value_type import ValueType

logger = logging.getLogger("argot")


__all__ = [
    "Program",
    "Command",
    "ArgotCompleter",
    "Option",
    "Positional",
    "ParseResult",
    "ValueType",
    "DEFAULT_COMMAND",
    "register_program",
    "register_command",
    "add_option",
    "set_default",
    "parse",
    "HelpSignal",
    "VersionSignal",
    "ArgotError",
    "SchemaError",
    "CommandAlreadyExistsError",
    "ValidationError",
    "LexError",
    "UnknownCommandError",
    "MissingRequiredError",
    "ArgumentTypeError",
    "InvalidChoiceError",
    "DependencyError",
    "OptionCountError",
    "ArgumentCountError",
]
