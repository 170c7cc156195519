"""Outcome and Failure, the result contract of one validation pass.

INVARIANT: the validator reports call-time problems through an Outcome.
Only the dispatcher turns a failed Outcome into an exception.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from validated_method.errors import (
    ArityError,
    CallValidationError,
    MissingRequiredError,
    ReturnTypeMismatchError,
    TypeMismatchError,
)


class FailureKind(StrEnum):
    """Call-time failure categories."""

    ARITY = "arity"
    MISSING_REQUIRED = "missing_required"
    TYPE_MISMATCH = "type_mismatch"
    RETURN_TYPE_MISMATCH = "return_type_mismatch"


_ERROR_CLASSES: dict[FailureKind, type[CallValidationError]] = {
    FailureKind.ARITY: ArityError,
    FailureKind.MISSING_REQUIRED: MissingRequiredError,
    FailureKind.TYPE_MISMATCH: TypeMismatchError,
    FailureKind.RETURN_TYPE_MISMATCH: ReturnTypeMismatchError,
}


class Failure(BaseModel):
    """A single, terminal validation failure.

    Attributes:
        kind: Failure category.
        message: Human-readable description.
        field: Parameter name or positional index, when one is involved.
        expected: Label of the expected descriptor.
        actual: Kind name of the offending value.
        cause: Exception raised inside a predicate, if that is what failed.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: FailureKind
    message: str
    field: str | int | None = None
    expected: str | None = None
    actual: str | None = None
    cause: BaseException | None = None

    def to_exception(self) -> CallValidationError:
        """Build the exception matching :attr:`kind`, chained to :attr:`cause`."""
        exc = _ERROR_CLASSES[self.kind](
            self.message,
            field=self.field,
            expected=self.expected,
            actual=self.actual,
        )
        if self.cause is not None:
            exc.__cause__ = self.cause
        return exc


class Outcome(BaseModel):
    """Result of validating one call.

    ``bag`` holds the coerced arguments: a dict for object and single-value
    schemas, a list for positional schemas. ``rest`` holds the unchecked
    positional arguments that follow a single value.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: bool
    bag: dict[str, Any] | list[Any] | None = None
    rest: tuple[Any, ...] = ()
    failure: Failure | None = None

    @classmethod
    def success(
        cls,
        bag: dict[str, Any] | list[Any] | None,
        rest: tuple[Any, ...] = (),
    ) -> Outcome:
        return cls.model_construct(ok=True, bag=bag, rest=tuple(rest), failure=None)

    @classmethod
    def fail(cls, failure: Failure) -> Outcome:
        return cls.model_construct(ok=False, bag=None, rest=(), failure=failure)

    def raise_for_failure(self) -> None:
        if self.failure is not None:
            raise self.failure.to_exception()
