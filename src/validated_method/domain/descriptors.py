"""Descriptor variants and their normalization from raw schema entries.

A descriptor states what one field, position or return value must look
like. Raw entries are turned into descriptors once, at construction:

- a kind name (``"string"``, ``"int"``, ...) becomes :class:`Primitive`
- a class becomes :class:`NominalType`
- a compiled regular expression becomes :class:`Pattern`
- any other callable becomes :class:`Predicate`
- a list or tuple of the above becomes :class:`Union`

``NominalType(cls)`` and ``Predicate(fn)`` can also be written out
explicitly when the declaration should not depend on what the object is.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

from validated_method.domain.types import ABSENT_KINDS, Kind
from validated_method.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class Primitive:
    """One of the built-in :class:`Kind` names."""

    kind: Kind

    @property
    def label(self) -> str:
        return self.kind.value


@dataclass(frozen=True, slots=True)
class NominalType:
    """Accepts instances of ``cls`` (subclasses included)."""

    cls: type

    def __post_init__(self) -> None:
        if not isinstance(self.cls, type):
            msg = f"NominalType expects a class, got {self.cls!r}"
            raise ConfigurationError(msg)

    @property
    def label(self) -> str:
        return self.cls.__name__


@dataclass(frozen=True, slots=True)
class Pattern:
    """Accepts values whose string form matches ``regex``."""

    regex: re.Pattern[str]

    @property
    def label(self) -> str:
        return f"/{self.regex.pattern}/"


@dataclass(frozen=True, slots=True)
class Predicate:
    """A synchronous ``value -> truthy`` check."""

    fn: Callable[[Any], Any]
    name: str | None = None

    def __post_init__(self) -> None:
        if not callable(self.fn) or isinstance(self.fn, type):
            msg = f"Predicate expects a plain callable, got {self.fn!r}"
            raise ConfigurationError(msg)

    @property
    def label(self) -> str:
        return self.name or "custom validator"


@dataclass(frozen=True, slots=True)
class Union:
    """Satisfied when any member is; members are never unions themselves."""

    members: tuple[Descriptor, ...]

    @property
    def label(self) -> str:
        return "[" + ", ".join(m.label for m in self.members) + "]"

    @property
    def allows_absent(self) -> bool:
        return any(is_optional_marker(m) for m in self.members)

    @property
    def checked_members(self) -> tuple[Descriptor, ...]:
        """Members other than the optional/undefined/void markers."""
        return tuple(m for m in self.members if not is_optional_marker(m))


Descriptor: TypeAlias = Primitive | NominalType | Pattern | Predicate | Union

DESCRIPTOR_TYPES: tuple[type, ...] = (Primitive, NominalType, Pattern, Predicate, Union)


def is_optional_marker(descriptor: Descriptor) -> bool:
    return isinstance(descriptor, Primitive) and descriptor.kind in ABSENT_KINDS


def allows_absent(descriptor: Descriptor) -> bool:
    """True if a field with this descriptor may be omitted."""
    if isinstance(descriptor, Union):
        return descriptor.allows_absent
    return is_optional_marker(descriptor)


def parse_kind(name: str) -> Kind:
    try:
        return Kind(name)
    except ValueError:
        known = ", ".join(k.value for k in Kind)
        msg = f"Unknown type name {name!r} (expected one of: {known})"
        raise ConfigurationError(msg) from None


def normalize_descriptor(raw: Any) -> Descriptor:
    """Turn one raw schema entry into a :class:`Descriptor`.

    Raises:
        ConfigurationError: *raw* is not a recognised descriptor shape.
    """
    if isinstance(raw, DESCRIPTOR_TYPES):
        return raw
    if isinstance(raw, Kind):
        return Primitive(raw)
    if isinstance(raw, str):
        return Primitive(parse_kind(raw))
    if isinstance(raw, re.Pattern):
        return Pattern(raw)
    if isinstance(raw, type):
        return NominalType(raw)
    if isinstance(raw, list | tuple):
        return _normalize_union(raw)
    if callable(raw):
        return Predicate(raw)
    msg = f"Invalid type descriptor: {raw!r}"
    raise ConfigurationError(msg)


def _normalize_union(raw: list[Any] | tuple[Any, ...]) -> Union:
    members: list[Descriptor] = []
    for entry in raw:
        descriptor = normalize_descriptor(entry)
        if isinstance(descriptor, Union):
            members.extend(descriptor.members)
        else:
            members.append(descriptor)
    if not members:
        msg = "A union of types must list at least one type"
        raise ConfigurationError(msg)
    return Union(tuple(members))
