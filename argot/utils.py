# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value coercion and logging helpers for Argot.

Coercion functions convert argv text into the Python value of a declared
`ValueType`. They raise `ValueError` on failure; the parser wraps that into an
`ArgumentTypeError` naming the offending option.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_number: Convert decimal text to `int` or `float`.
- coerce_value: General-purpose coercion to a `ValueType`.
- format_value: Render a coerced value back to canonical argv text.
- setup_logging: Attach Rich or JSON handlers to the `argot` logger.
"""
from __future__ import annotations

import logging
import math
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Any

import pythonjsonlogger.json
from dateutil import parser as date_parser
from rich.logging import RichHandler

from argot.value_type import ValueType

INTEGER_EXP = re.compile(r"^[+-]?\d+$")
DECIMAL_EXP = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

TRUE_WORDS = {"true", "t", "1", "yes", "y", "on"}
FALSE_WORDS = {"false", "f", "0", "no", "n", "off"}

JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")


def coerce_bool(value: Any) -> bool:
    """
    Convert a string to a boolean.

    Accepts the usual truthy and falsy words such as 'true', 'yes', '0', 'off'.

    Raises:
        ValueError: If the text is not a recognised boolean word.
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_WORDS:
        return True
    if text in FALSE_WORDS:
        return False
    raise ValueError(f"'{value}' is not a boolean (expected true or false)")


def coerce_number(value: Any) -> int | float:
    """
    Convert decimal text to a number.

    Integral text gives an `int`, anything else a `float`. Non-finite values
    are rejected so that a parsed number always renders back to the same text.

    Raises:
        ValueError: If the text is not a finite decimal number.
    """
    if isinstance(value, bool):
        raise ValueError(f"'{value}' is not a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"'{value}' is not a finite number")
        return value
    text = str(value).strip()
    if INTEGER_EXP.match(text):
        return int(text)
    if DECIMAL_EXP.match(text):
        number = float(text)
        if math.isfinite(number):
            return number
    raise ValueError(f"'{value}' is not a number")


def coerce_value(value: Any, value_type: ValueType) -> Any:
    """
    Attempt to convert a raw value to the given value type.

    Args:
        value (Any): Text from argv, or an already typed default.
        value_type (ValueType): The declared type.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If conversion fails.
    """
    if value is None:
        raise ValueError("a value is required")

    if value_type == ValueType.STRING:
        if isinstance(value, (bool, dict, list, tuple, set)):
            raise ValueError(f"'{value}' is not a string")
        return value if isinstance(value, str) else str(value)

    if value_type == ValueType.BOOLEAN:
        return coerce_bool(value)

    if value_type == ValueType.NUMBER:
        return coerce_number(value)

    if value_type == ValueType.INTEGER:
        number = coerce_number(value)
        if isinstance(number, float):
            raise ValueError(f"'{value}' is not an integer")
        return number

    if value_type == ValueType.FLOAT:
        return float(coerce_number(value))

    if value_type == ValueType.DATE:
        if isinstance(value, datetime):
            return value
        try:
            return date_parser.parse(str(value))
        except (ValueError, OverflowError) as error:
            raise ValueError(f"'{value}' could not be parsed as a date") from error

    raise ValueError(f"Unsupported value type: {value_type}")


def format_value(value: Any) -> str:
    """Render a coerced value as the argv text that coerces back to it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def running_in_container() -> bool:
    try:
        content = Path("/proc/1/cgroup").read_text(encoding="UTF-8")
    except OSError:
        return False
    return any(marker in content for marker in CONTAINER_MARKERS)


def setup_logging(
    mode: str | None = None,
    log_file: str | Path | None = None,
    level: int | str | None = None,
) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the `argot` logger.

    Args:
        mode (str | None): "cli" for a Rich console handler or "json" for
            python-json-logger records on stderr. Falls back to `ARGOT_LOG_MODE`,
            then to "json" inside a container and "cli" elsewhere.
        log_file (str | Path | None): Also write every record, at DEBUG, to
            this file in the same format as the console.
        level (int | str | None): Console level. Falls back to
            `ARGOT_LOG_LEVEL`, then WARNING.

    Returns:
        logging.Logger: The configured `argot` logger.

    Raises:
        ValueError: If `mode` or `level` is not recognised.
    """
    mode = mode or os.getenv("ARGOT_LOG_MODE") or (
        "json" if running_in_container() else "cli"
    )
    if mode == "cli":
        console_handler: logging.Handler = RichHandler(
            show_path=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
        file_formatter = logging.Formatter(
            "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        file_formatter = pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT)
        console_handler.setFormatter(file_formatter)
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    level = level or os.getenv("ARGOT_LOG_LEVEL", "WARNING")
    console_handler.setLevel(level.upper() if isinstance(level, str) else level)

    argot_logger = logging.getLogger("argot")
    for handler in list(argot_logger.handlers):
        argot_logger.removeHandler(handler)
        handler.close()
    argot_logger.setLevel(logging.DEBUG)
    argot_logger.propagate = False
    argot_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, "a", "UTF-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        argot_logger.addHandler(file_handler)

    argot_logger.debug("Logging initialized in '%s' mode.", mode)
    return argot_logger
