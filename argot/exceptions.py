# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by Argot.

Definition mistakes (bad spec strings, duplicate flags, defaults outside the
allowed choices) raise at configuration time. A failed parse raises exactly one
`ValidationError` subclass, chosen by the fixed constraint order of the parser,
so failure reporting is deterministic.

Exception Hierarchy:
- ArgotError
    ├── SchemaError
    ├── CommandAlreadyExistsError
    └── ValidationError
          ├── LexError
          ├── UnknownCommandError
          ├── MissingRequiredError
          ├── ArgumentTypeError
          ├── InvalidChoiceError
          ├── DependencyError
          ├── OptionCountError
          └── ArgumentCountError
"""


class ArgotError(Exception):
    """Base exception for Argot."""


class SchemaError(ArgotError):
    """Raised when a program, command, option or positional is defined incorrectly."""


class CommandAlreadyExistsError(ArgotError):
    """Raised when a command name or alias is already registered on the program."""


class ValidationError(ArgotError):
    """
    Raised when an argument vector does not satisfy the command schema.

    Attributes:
        kind (str): Machine-readable failure kind (e.g. "missing_required").
        name (str | None): The offending option, positional or raw token.
        message (str): Human-readable description of the failure.
    """

    kind: str = "validation"

    def __init__(self, message: str, name: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r}, name={self.name!r}, message={self.message!r})"


class LexError(ValidationError):
    """Raised for a malformed token such as `--name=` or `--=value`."""

    kind = "lex"


class UnknownCommandError(ValidationError):
    """Raised in strict mode when the selector token names no registered command."""

    kind = "unknown_command"


class MissingRequiredError(ValidationError):
    """Raised when a required option or positional has no value."""

    kind = "missing_required"


class ArgumentTypeError(ValidationError):
    """Raised when a value cannot be coerced to its declared type."""

    kind = "type"


class InvalidChoiceError(ValidationError):
    """Raised when a value is not one of the allowed choices."""

    kind = "invalid_choice"


class DependencyError(ValidationError):
    """Raised when an option is supplied without the options it depends on."""

    kind = "dependency"


class OptionCountError(ValidationError):
    """Raised when the number of supplied options is outside the command bounds."""

    kind = "option_count"


class ArgumentCountError(ValidationError):
    """Raised when the number of supplied positional values is outside the command bounds."""

    kind = "argument_count"
