"""Primitive kind names and the absent-value sentinel."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Final


class Kind(StrEnum):
    """Primitive kinds accepted as descriptor names."""

    STRING = "string"
    BOOLEAN = "boolean"
    STRICTBOOLEAN = "strictboolean"
    OBJECT = "object"
    ARRAY = "array"
    FUNCTION = "function"
    NULL = "null"
    ANY = "any"
    OPTIONAL = "optional"
    UNDEFINED = "undefined"
    INT = "int"
    ROUNDINT = "roundint"
    STRICTINT = "strictint"
    FLOAT = "float"
    STRICTFLOAT = "strictfloat"
    NUMBER = "number"
    VOID = "void"


# Kinds that mean "the value may be absent".
OPTIONAL_KINDS: Final = frozenset({Kind.OPTIONAL, Kind.UNDEFINED})
# Kinds satisfied only by an absent value.
ABSENT_KINDS: Final = OPTIONAL_KINDS | {Kind.VOID}

INT_KINDS: Final = frozenset({Kind.INT, Kind.ROUNDINT, Kind.STRICTINT})
FLOAT_KINDS: Final = frozenset({Kind.FLOAT, Kind.NUMBER, Kind.STRICTFLOAT})


class _Missing:
    """Marker for "no value was supplied", distinct from ``None``."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


def kind_of(value: object) -> str:
    """Name the runtime kind of *value* the way error messages report it."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, list | tuple):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, type) or callable(value):
        return "function"
    return type(value).__name__
