"""Return-value checking.

Return values are matched in strict mode: nothing is coerced, and the
value handed back to the caller is the one the callback produced.

Return-side readings differ from the parameter side. A Python function
with no ``return`` yields ``None``, so ``None`` plays the absent role:

- ``void``: the result must be ``None``
- ``any``: the result must not be ``None``
- ``optional``/``undefined``: return checking is skipped
- union: ``optional``/``undefined``/``void`` or ``null`` members admit
  ``None``; otherwise any member must match
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable
from typing import Any

from validated_method.domain.descriptors import (
    Descriptor,
    Predicate,
    Primitive,
    Union,
    is_optional_marker,
)
from validated_method.domain.types import OPTIONAL_KINDS, Kind, kind_of
from validated_method.engine.matcher import match
from validated_method.engine.result import Failure, FailureKind
from validated_method.errors import ReturnTypeMismatchError

logger = logging.getLogger(__name__)


def _return_label(descriptor: Descriptor) -> str:
    if isinstance(descriptor, Predicate):
        return "custom validator"
    return descriptor.label


def skips_return_check(descriptor: Descriptor | None) -> bool:
    return descriptor is None or (
        isinstance(descriptor, Primitive) and descriptor.kind in OPTIONAL_KINDS
    )


def _accepts(value: Any, descriptor: Descriptor) -> bool:
    if isinstance(descriptor, Primitive):
        if descriptor.kind is Kind.VOID:
            return value is None
        if descriptor.kind is Kind.ANY:
            return value is not None
        if descriptor.kind in OPTIONAL_KINDS:
            return True
    if isinstance(descriptor, Union):
        if value is None:
            return any(
                is_optional_marker(m) or (isinstance(m, Primitive) and m.kind is Kind.NULL)
                for m in descriptor.members
            )
        return any(_accepts(value, m) for m in descriptor.checked_members)
    result = match(value, descriptor, coerce=False, field="return value")
    if result.fatal:
        raise ReturnTypeMismatchError(
            result.reason or "Return validator raised",
            field="return",
            expected=_return_label(descriptor),
            actual=kind_of(value),
        ) from result.cause
    return result.ok


def check_return(value: Any, descriptor: Descriptor | None) -> Failure | None:
    """Check a resolved callback result; None means it is acceptable."""
    if skips_return_check(descriptor):
        return None
    assert descriptor is not None
    if _accepts(value, descriptor):
        return None
    label = _return_label(descriptor)
    logger.debug("Return value %r rejected by %s", value, label)
    return Failure(
        kind=FailureKind.RETURN_TYPE_MISMATCH,
        message=f"Return value {value!r} does not match type {label}",
        field="return",
        expected=label,
        actual=kind_of(value),
    )


def ensure_return(value: Any, descriptor: Descriptor | None) -> Any:
    """Return *value* unchanged, or raise ReturnTypeMismatchError."""
    failure = check_return(value, descriptor)
    if failure is not None:
        raise failure.to_exception()
    return value


async def _checked(pending: Awaitable[Any], descriptor: Descriptor) -> Any:
    value = await pending
    return ensure_return(value, descriptor)


def handle_result(result: Any, descriptor: Descriptor | None) -> Any:
    """Apply return checking to a callback result, synchronous or not.

    An awaitable result is not awaited here: it is wrapped in a coroutine
    that awaits it once, checks the resolved value, and returns it.
    Exceptions raised by the awaitable propagate unchanged.
    """
    if skips_return_check(descriptor):
        return result
    assert descriptor is not None
    if inspect.isawaitable(result):
        return _checked(result, descriptor)
    return ensure_return(result, descriptor)
