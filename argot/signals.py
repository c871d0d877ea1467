# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals raised by the Argot parser.

Help and version requests are not failures, so they are raised as signals that
inherit from `BaseException` and bypass ordinary `except Exception` blocks. Each
signal carries the rendered plain text; the surrounding CLI layer decides where
to write it.

Signals:
- HelpSignal: Help was requested (`help`, `help <command>`, `--help`).
- VersionSignal: Version was requested (`version`, `--version`).
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Argot.

    These are not errors. They interrupt parsing so the caller can print
    the attached text and exit cleanly.
    """

    def __init__(self, message: str, text: str = "", command: str | None = None):
        super().__init__(message)
        self.text = text
        self.command = command


class HelpSignal(FlowSignal):
    """Raised when help output was requested."""

    def __init__(self, text: str = "", command: str | None = None):
        super().__init__("Help signal received.", text=text, command=command)


class VersionSignal(FlowSignal):
    """Raised when version output was requested."""

    def __init__(self, text: str = ""):
        super().__init__("Version signal received.", text=text)
