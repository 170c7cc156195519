"""Typed error taxonomy for validated methods.

Two failure domains are kept apart:

- :class:`ConfigurationError` is raised while a validated method is being
  built (malformed schema, unknown kind name, non-callable callback).
- :class:`CallValidationError` and its subclasses are raised while a
  particular call is being checked.

Both derive from ``TypeError`` so code written against plain argument
errors keeps working.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ArityError",
    "CallValidationError",
    "ConfigurationError",
    "MissingRequiredError",
    "ReturnTypeMismatchError",
    "TypeMismatchError",
    "ValidatedMethodError",
    "format_error",
]


class ValidatedMethodError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(ValidatedMethodError, TypeError):
    """The schema, return descriptor or callback given at construction is malformed."""


class CallValidationError(ValidatedMethodError, TypeError):
    """A single call was rejected.

    Attributes:
        field: Parameter name or positional index that failed, if any.
        expected: Human-readable form of the descriptor that was expected.
        actual: Kind name of the value that was received.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | int | None = None,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.expected = expected
        self.actual = actual

    def detail(self) -> dict[str, Any]:
        return {"field": self.field, "expected": self.expected, "actual": self.actual}


class ArityError(CallValidationError):
    """Too few positional arguments, or arguments given to a zero-argument method."""


class MissingRequiredError(CallValidationError):
    """A required named parameter was not supplied."""


class TypeMismatchError(CallValidationError):
    """Kind mismatch, failed coercion, pattern mismatch or failed predicate."""


class ReturnTypeMismatchError(CallValidationError):
    """The callback's result does not satisfy the declared return descriptor."""


def format_error(e: BaseException) -> str:
    """Return a short message like ``'ArityError: Expected 2 arguments, got 1'``."""
    name = e.__class__.__name__
    msg = str(e).strip()
    return f"{name}: {msg}" if msg else name
