# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ValueType`, the enum of value types an option or positional may declare.

Spec strings name the type after the second colon (`<tries:number:2>`), so the
enum accepts its values case-insensitively and resolves a few shorthand aliases.

Example:
    ValueType("number") → ValueType.NUMBER
    ValueType("int")    → ValueType.INTEGER (via alias)
    ValueType("Bool")   → ValueType.BOOLEAN (via alias)
"""
from __future__ import annotations

from enum import Enum


class ValueType(Enum):
    """
    Declared value type of an option or positional.

    Members:
        STRING: Passed through unchanged.
        NUMBER: Decimal number, `int` when the text is integral, else `float`.
        INTEGER: Whole number only.
        FLOAT: Always a `float`.
        BOOLEAN: `True`/`False`; a bare flag means `True`.
        DATE: Parsed with `dateutil`.

    Aliases:
        - "str" → "string"
        - "num" → "number"
        - "int" → "integer"
        - "bool" → "boolean"
        - "datetime" → "date"
    """

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"

    @classmethod
    def choices(cls) -> list[ValueType]:
        """Return a list of all value types."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "num": "number",
            "int": "integer",
            "bool": "boolean",
            "datetime": "date",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ValueType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def is_numeric(self) -> bool:
        return self in (ValueType.NUMBER, ValueType.INTEGER, ValueType.FLOAT)

    def __str__(self) -> str:
        """Return the string representation of the value type."""
        return self.value
