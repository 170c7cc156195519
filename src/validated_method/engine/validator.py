"""Apply a schema to one call's arguments.

Each call gets a fresh ValueBag (a dict for object and single-value
schemas, a list for positional ones). Coerced values are written into the
bag, never into the caller's own objects.

INVARIANT: validation is fail-fast. The first fatal problem ends the pass
and is the only one reported. Unexpected named parameters are diagnostics,
never failures.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import structlog

from validated_method.domain.descriptors import Descriptor, allows_absent
from validated_method.domain.schema import (
    SINGLE_VALUE_FIELD,
    ObjectSchema,
    PositionalSchema,
    Schema,
    SingleValueSchema,
    ZeroArgSchema,
)
from validated_method.domain.types import MISSING, kind_of
from validated_method.engine.matcher import match
from validated_method.engine.result import Failure, FailureKind, Outcome

logger = logging.getLogger(__name__)
diagnostics = structlog.get_logger("validated_method.validator")


def _field_label(field: str | int) -> str:
    if isinstance(field, int):
        return f"argument {field}"
    return field


def check_fields(
    bag: dict[str, Any],
    fields: tuple[tuple[str, Descriptor], ...],
) -> Failure | None:
    """Check named fields in declaration order, writing coercions into *bag*."""
    for name, descriptor in fields:
        value = bag.get(name, MISSING)
        if value is MISSING:
            if allows_absent(descriptor):
                continue
            return Failure(
                kind=FailureKind.MISSING_REQUIRED,
                message=f"Missing required parameter: {name}",
                field=name,
                expected=descriptor.label,
                actual="undefined",
            )
        failure = check_value(bag, name, value, descriptor)
        if failure is not None:
            return failure
    return None


def check_value(
    bag: dict[str, Any] | list[Any],
    key: str | int,
    value: Any,
    descriptor: Descriptor,
) -> Failure | None:
    result = match(value, descriptor, field=key)
    if not result.ok:
        reason = result.reason or "Invalid value"
        message = reason if result.cause is not None else f"{reason} for {_field_label(key)}"
        return Failure(
            kind=FailureKind.TYPE_MISMATCH,
            message=message,
            field=key,
            expected=descriptor.label,
            actual=kind_of(value),
            cause=result.cause,
        )
    if result.value is not value:
        bag[key] = result.value  # type: ignore[index]
    return None


def report_unexpected(
    bag: Mapping[str, Any],
    schema: ObjectSchema,
    *,
    quiet: bool,
    method: str | None = None,
) -> list[str]:
    """Return the names in *bag* the schema does not declare, logging each one."""
    declared = schema.by_name
    extras = [key for key in bag if key not in declared]
    if not quiet:
        for key in extras:
            diagnostics.warning("unexpected_parameter", parameter=key, method=method)
    return extras


def _arity_failure(expected: int, got: int) -> Failure:
    return Failure(
        kind=FailureKind.ARITY,
        message=f"Expected {expected} arguments, got {got}",
        expected=str(expected),
        actual=str(got),
    )


def _keywords_failure(kwargs: dict[str, Any]) -> Failure:
    names = sorted(kwargs)
    return Failure(
        kind=FailureKind.ARITY,
        message=f"Unexpected keyword arguments: {', '.join(names)}",
        field=names[0],
    )


def _object_bag(args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any] | Failure:
    if len(args) > 1:
        return Failure(
            kind=FailureKind.ARITY,
            message=f"Expected a single mapping of named parameters, got {len(args)} arguments",
            expected="1",
            actual=str(len(args)),
        )
    bag: dict[str, Any] = {}
    if args and args[0] is not None:
        source = args[0]
        if not isinstance(source, Mapping):
            return Failure(
                kind=FailureKind.TYPE_MISMATCH,
                message=f"Expected object of named parameters, got {kind_of(source)}",
                expected="object",
                actual=kind_of(source),
            )
        bag.update(source)
    bag.update(kwargs)
    return bag


def validate_object(
    schema: ObjectSchema,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    *,
    quiet: bool,
    method: str | None = None,
) -> Outcome:
    bag = _object_bag(args, kwargs)
    if isinstance(bag, Failure):
        return Outcome.fail(bag)
    report_unexpected(bag, schema, quiet=quiet, method=method)
    failure = check_fields(bag, schema.fields)
    if failure is not None:
        return Outcome.fail(failure)
    return Outcome.success(bag)


def validate_positional(
    schema: PositionalSchema,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Outcome:
    if kwargs:
        return Outcome.fail(_keywords_failure(kwargs))
    expected = len(schema.descriptors)
    if len(args) < expected:
        return Outcome.fail(_arity_failure(expected, len(args)))
    bag = list(args)
    for index, descriptor in enumerate(schema.descriptors):
        failure = check_value(bag, index, bag[index], descriptor)
        if failure is not None:
            return Outcome.fail(failure)
    return Outcome.success(bag)


def validate_single(
    schema: SingleValueSchema,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Outcome:
    if kwargs:
        return Outcome.fail(_keywords_failure(kwargs))
    bag: dict[str, Any] = {}
    if args:
        bag[SINGLE_VALUE_FIELD] = args[0]
    failure = check_fields(bag, ((SINGLE_VALUE_FIELD, schema.descriptor),))
    if failure is not None:
        return Outcome.fail(failure)
    return Outcome.success(bag, rest=args[1:])


def validate_zero(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Outcome:
    got = len(args) + len(kwargs)
    if got:
        return Outcome.fail(_arity_failure(0, got))
    return Outcome.success(None)


def validate_call(
    schema: Schema,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    *,
    quiet: bool = False,
    method: str | None = None,
) -> Outcome:
    """Validate one call's arguments against *schema*.

    Args:
        schema: Normalized schema.
        args: Positional arguments as received.
        kwargs: Keyword arguments as received.
        quiet: Suppress unexpected-parameter diagnostics.
        method: Method name for diagnostics.

    Returns:
        A successful Outcome carrying the coerced bag, or a failed one
        carrying the first violation.
    """
    if isinstance(schema, ObjectSchema):
        outcome = validate_object(schema, args, kwargs, quiet=quiet, method=method)
    elif isinstance(schema, PositionalSchema):
        outcome = validate_positional(schema, args, kwargs)
    elif isinstance(schema, SingleValueSchema):
        outcome = validate_single(schema, args, kwargs)
    elif isinstance(schema, ZeroArgSchema):
        outcome = validate_zero(args, kwargs)
    else:
        msg = f"Not a schema: {schema!r}"
        raise TypeError(msg)
    if outcome.failure is not None:
        logger.debug("Validation failed for %s: %s", method, outcome.failure.message)
    return outcome
