"""Type matching and coercion for a single value against one descriptor.

Two modes:

- coercing (default): used for plain parameter descriptors. Numeric
  strings become numbers, ``boolean`` applies truthiness, patterns yield
  the string form.
- strict (``coerce=False``): used for union members and return values.
  The value must already have the target kind and is never changed.

Pure functions, no state.
"""

from __future__ import annotations

import inspect
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from validated_method.domain.descriptors import (
    Descriptor,
    NominalType,
    Pattern,
    Predicate,
    Primitive,
    Union,
)
from validated_method.domain.types import (
    ABSENT_KINDS,
    FLOAT_KINDS,
    INT_KINDS,
    MISSING,
    Kind,
    kind_of,
)


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of matching one value.

    Attributes:
        ok: Whether the value satisfies the descriptor.
        value: The (possibly coerced) value when ``ok``.
        reason: Failure text without the field suffix.
        cause: Exception raised by a predicate, if any.
        fatal: The predicate itself misbehaved (raised, or returned an
            awaitable); unions report this instead of trying other members.
    """

    ok: bool
    value: Any = None
    reason: str | None = None
    cause: BaseException | None = None
    fatal: bool = False


def _ok(value: Any) -> MatchResult:
    return MatchResult(ok=True, value=value)


def _fail(
    reason: str,
    cause: BaseException | None = None,
    *,
    fatal: bool = False,
) -> MatchResult:
    fatal = fatal or cause is not None
    return MatchResult(ok=False, reason=reason, cause=cause, fatal=fatal)


def is_real_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def parse_number(value: Any) -> int | float | None:
    """Parse *value* as a finite number; None when it has no numeric reading."""
    if is_real_number(value):
        number: int | float = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
    else:
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number


def round_half_up(number: int | float) -> int:
    if isinstance(number, int):
        return number
    return math.floor(number + 0.5)


def string_form(value: Any) -> str | None:
    """String form used for pattern matching; None for opaque values."""
    if isinstance(value, str):
        return value
    if value is MISSING or isinstance(value, bytes | bytearray | memoryview):
        return None
    cls = type(value)
    if cls.__str__ is object.__str__ and cls.__repr__ is object.__repr__:
        return None
    return str(value)


def _match_primitive(value: Any, kind: Kind, *, coerce: bool) -> MatchResult:
    actual = kind_of(value)

    if kind is Kind.ANY:
        if value is MISSING:
            return _fail("Expected any value, got undefined")
        return _ok(value)
    if kind in ABSENT_KINDS:
        if value is MISSING:
            return _ok(value)
        return _fail(f"Expected {kind.value}, got {actual}")
    if kind is Kind.NULL:
        return _ok(value) if value is None else _fail(f"Expected null, got {actual}")
    if kind is Kind.STRING:
        return _ok(value) if isinstance(value, str) else _fail(f"Expected string, got {actual}")
    if kind is Kind.OBJECT:
        if isinstance(value, Mapping):
            return _ok(value)
        return _fail(f"Expected object, got {actual}")
    if kind is Kind.ARRAY:
        if isinstance(value, list | tuple):
            return _ok(value)
        return _fail(f"Expected Array, got {actual}")
    if kind is Kind.FUNCTION:
        return _ok(value) if callable(value) else _fail(f"Expected function, got {actual}")
    if kind is Kind.STRICTBOOLEAN or (kind is Kind.BOOLEAN and not coerce):
        if isinstance(value, bool):
            return _ok(value)
        return _fail(f"Expected boolean, got {actual}")
    if kind is Kind.BOOLEAN:
        return _ok(bool(value))
    if kind in INT_KINDS:
        return _match_int(value, kind, actual, coerce=coerce)
    if kind in FLOAT_KINDS:
        return _match_float(value, kind, actual, coerce=coerce)
    msg = f"unhandled kind {kind!r}"
    raise AssertionError(msg)


def _match_int(value: Any, kind: Kind, actual: str, *, coerce: bool) -> MatchResult:
    if kind is Kind.STRICTINT or not coerce:
        if not is_real_number(value):
            return _fail(f"Expected integer, got {actual}")
        if isinstance(value, int):
            return _ok(value)
        if not coerce or not math.isfinite(value) or not value.is_integer():
            return _fail(f"Expected integer, got {value!r}")
        return _ok(int(value))

    number = parse_number(value)
    if number is None:
        return _fail(f"Cannot convert {value!r} to integer")
    if kind is Kind.ROUNDINT:
        return _ok(round_half_up(number))
    return _ok(math.trunc(number))


def _match_float(value: Any, kind: Kind, actual: str, *, coerce: bool) -> MatchResult:
    if kind is Kind.STRICTFLOAT or not coerce:
        if not is_real_number(value):
            return _fail(f"Expected number, got {actual}")
        return _ok(float(value) if coerce else value)

    number = parse_number(value)
    if number is None:
        return _fail(f"Cannot convert {value!r} to float")
    return _ok(float(number))


def _match_pattern(value: Any, descriptor: Pattern, *, coerce: bool) -> MatchResult:
    if not coerce and not isinstance(value, str):
        return _fail(f"Expected string matching {descriptor.label}, got {kind_of(value)}")
    text = string_form(value)
    if text is None:
        return _fail(f"Cannot convert {kind_of(value)} to string")
    if descriptor.regex.search(text) is None:
        return _fail(f'Value "{text}" does not match pattern {descriptor.label}')
    return _ok(text)


def _match_predicate(value: Any, descriptor: Predicate, field: str | int | None) -> MatchResult:
    try:
        verdict = descriptor.fn(value)
    except Exception as exc:
        where = f" for {_describe(field)}" if field is not None else ""
        return _fail(f"Validator raised{where}: {exc}", cause=exc)
    if inspect.isawaitable(verdict):
        close = getattr(verdict, "close", None)
        if close is not None:
            close()
        return _fail("Invalid validator: validators must be synchronous", fatal=True)
    if not verdict:
        return _fail(f"Value {value!r} failed validation")
    return _ok(value)


def _match_union(value: Any, descriptor: Union, field: str | int | None) -> MatchResult:
    if value is MISSING:
        if descriptor.allows_absent:
            return _ok(value)
        return _fail(f"Expected one of {descriptor.label}, got undefined")
    if value is None:
        return _ok(value)
    for member in descriptor.checked_members:
        result = match(value, member, coerce=False, field=field)
        if result.ok:
            return _ok(value)
        if result.fatal:
            return result
    return _fail(f"Expected one of {descriptor.label}, got {kind_of(value)}")


def match(
    value: Any,
    descriptor: Descriptor,
    *,
    coerce: bool = True,
    field: str | int | None = None,
) -> MatchResult:
    """Match *value* against *descriptor*.

    Args:
        value: The actual value; ``MISSING`` when it was not supplied.
        descriptor: Normalized descriptor.
        coerce: False for strict checks (union members, return values).
        field: Field name or position, used only in predicate error text.
    """
    if isinstance(descriptor, Primitive):
        return _match_primitive(value, descriptor.kind, coerce=coerce)
    if isinstance(descriptor, NominalType):
        if isinstance(value, descriptor.cls):
            return _ok(value)
        return _fail(f"Expected {descriptor.label}, got {kind_of(value)}")
    if isinstance(descriptor, Pattern):
        return _match_pattern(value, descriptor, coerce=coerce)
    if isinstance(descriptor, Predicate):
        return _match_predicate(value, descriptor, field)
    if isinstance(descriptor, Union):
        return _match_union(value, descriptor, field)
    msg = f"Not a descriptor: {descriptor!r}"
    raise TypeError(msg)


def _describe(field: str | int) -> str:
    if isinstance(field, int):
        return f"argument {field}"
    return field
