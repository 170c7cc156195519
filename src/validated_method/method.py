"""ValidatedMethod, the invocable wrapper around a user callback.

Per call: build the ValueBag for the schema kind, validate it, invoke the
callback with the bag reshaped to the callback's calling convention, then
hand the result to the return checker when a return descriptor is set.

Usage::

    add = ValidatedMethod(["number", "number"], lambda a, b: a + b)
    add("40", 2)  # 42.0

    @validated({"name": "string", "retries": ["int", "optional"]}, returns="string")
    def greet(opts):
        return f"hello {opts['name']}"
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from validated_method.config.models import ValidationConfig
from validated_method.config.settings import resolve_quiet
from validated_method.domain.descriptors import Descriptor
from validated_method.domain.schema import (
    SINGLE_VALUE_FIELD,
    ObjectSchema,
    PositionalSchema,
    Schema,
    SingleValueSchema,
    normalize_returns,
    normalize_schema,
)
from validated_method.engine.result import Outcome
from validated_method.engine.returns import handle_result
from validated_method.engine.validator import validate_call
from validated_method.errors import ConfigurationError


class ValidatedMethod:
    """A callable that validates its arguments before running ``callback``.

    Attributes:
        schema: Normalized argument schema.
        returns: Normalized return descriptor, or None when unchecked.
        config: Per-method options.
        callback: The wrapped user function.
    """

    def __init__(
        self,
        schema: Any,
        callback: Callable[..., Any],
        returns: Any = None,
        *,
        config: ValidationConfig | None = None,
    ) -> None:
        if not callable(callback):
            msg = f"Callback must be callable, got {type(callback).__name__}"
            raise ConfigurationError(msg)
        functools.update_wrapper(self, callback)
        self.schema: Schema = normalize_schema(schema)
        self.returns: Descriptor | None = normalize_returns(returns)
        self.config = config or ValidationConfig()
        self.callback = callback

    @property
    def name(self) -> str:
        if self.config.name:
            return self.config.name
        return getattr(self.callback, "__qualname__", None) or repr(self.callback)

    def check(self, *args: Any, **kwargs: Any) -> Outcome:
        """Validate arguments without calling the callback."""
        return validate_call(
            self.schema,
            args,
            kwargs,
            quiet=resolve_quiet(self.config),
            method=self.name,
        )

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._invoke((), args, kwargs)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        bound = functools.partial(self._bound_call, instance)
        return functools.update_wrapper(bound, self.callback)

    def __repr__(self) -> str:
        return f"<ValidatedMethod {self.name} schema={self.schema!r}>"

    def _bound_call(self, instance: Any, *args: Any, **kwargs: Any) -> Any:
        return self._invoke((instance,), args, kwargs)

    def _invoke(
        self,
        bound: tuple[Any, ...],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        outcome = self.check(*args, **kwargs)
        outcome.raise_for_failure()
        result = self.callback(*bound, *self._callback_args(outcome))
        return handle_result(result, self.returns)

    def _callback_args(self, outcome: Outcome) -> tuple[Any, ...]:
        schema = self.schema
        bag = outcome.bag
        if isinstance(schema, ObjectSchema):
            return (bag,)
        if isinstance(schema, PositionalSchema):
            return tuple(bag or ())
        if isinstance(schema, SingleValueSchema):
            assert isinstance(bag, dict)
            if SINGLE_VALUE_FIELD in bag:
                return (bag[SINGLE_VALUE_FIELD], *outcome.rest)
            return ()
        return ()


def validated(
    schema: Any,
    returns: Any = None,
    *,
    config: ValidationConfig | None = None,
) -> Callable[[Callable[..., Any]], ValidatedMethod]:
    """Decorator form of :class:`ValidatedMethod`."""

    def decorator(callback: Callable[..., Any]) -> ValidatedMethod:
        return ValidatedMethod(schema, callback, returns, config=config)

    return decorator

