"""Canonical schema variants and the one-time normalization pass.

INVARIANT: downstream code switches on the schema variant only. The raw
shape passed by the user is inspected here and nowhere else.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias

from validated_method.domain.descriptors import (
    DESCRIPTOR_TYPES,
    Descriptor,
    Primitive,
    normalize_descriptor,
)
from validated_method.domain.types import MISSING, Kind
from validated_method.errors import ConfigurationError

# Field name used when a single-value schema reports an error.
SINGLE_VALUE_FIELD = "value"


@dataclass(frozen=True, slots=True)
class ObjectSchema:
    """Named parameters, checked in declaration order."""

    fields: tuple[tuple[str, Descriptor], ...]
    _view: Mapping[str, Descriptor] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_view", MappingProxyType(dict(self.fields)))

    @property
    def by_name(self) -> Mapping[str, Descriptor]:
        """Read-only name -> descriptor view."""
        return self._view


@dataclass(frozen=True, slots=True)
class PositionalSchema:
    """An ordered list of descriptors matched against ``*args``."""

    descriptors: tuple[Descriptor, ...]


@dataclass(frozen=True, slots=True)
class SingleValueSchema:
    """Exactly one value, validated like a single named field."""

    descriptor: Descriptor


@dataclass(frozen=True, slots=True)
class ZeroArgSchema:
    """No arguments accepted."""


Schema: TypeAlias = ObjectSchema | PositionalSchema | SingleValueSchema | ZeroArgSchema

SCHEMA_TYPES: tuple[type, ...] = (ObjectSchema, PositionalSchema, SingleValueSchema, ZeroArgSchema)


def normalize_schema(raw: Any) -> Schema:
    """Build the canonical schema for a raw schema argument.

    Raises:
        ConfigurationError: *raw* has no schema reading.
    """
    if isinstance(raw, SCHEMA_TYPES):
        return raw
    if raw is None or raw is MISSING:
        return ZeroArgSchema()
    if isinstance(raw, str) and raw == Kind.VOID:
        return ZeroArgSchema()
    if isinstance(raw, Primitive) and raw.kind is Kind.VOID:
        return ZeroArgSchema()
    if isinstance(raw, list | tuple):
        if not raw:
            return ZeroArgSchema()
        return PositionalSchema(tuple(normalize_descriptor(entry) for entry in raw))
    if isinstance(raw, Mapping):
        return _object_schema(raw)
    if isinstance(raw, (str, re.Pattern, type, *DESCRIPTOR_TYPES)) or callable(raw):
        return SingleValueSchema(normalize_descriptor(raw))
    msg = f"Schema must be a mapping, a type, or a list of types; got {type(raw).__name__}"
    raise ConfigurationError(msg)


def _object_schema(raw: Mapping[Any, Any]) -> ObjectSchema:
    fields: list[tuple[str, Descriptor]] = []
    for name, entry in raw.items():
        if not isinstance(name, str):
            msg = f"Parameter names must be strings, got {name!r}"
            raise ConfigurationError(msg)
        try:
            fields.append((name, normalize_descriptor(entry)))
        except ConfigurationError as exc:
            msg = f"Invalid descriptor for parameter {name!r}: {exc}"
            raise ConfigurationError(msg) from exc
    return ObjectSchema(tuple(fields))


def normalize_returns(raw: Any) -> Descriptor | None:
    """Build the return descriptor; ``None`` disables return checking."""
    if raw is None or raw is MISSING:
        return None
    return normalize_descriptor(raw)
