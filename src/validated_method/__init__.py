"""Runtime argument and return-value contracts for Python callables."""

from validated_method.config.models import ValidationConfig
from validated_method.config.settings import is_quiet, set_quiet
from validated_method.domain.descriptors import (
    NominalType,
    Pattern,
    Predicate,
    Primitive,
    Union,
)
from validated_method.domain.schema import (
    ObjectSchema,
    PositionalSchema,
    SingleValueSchema,
    ZeroArgSchema,
    normalize_schema,
)
from validated_method.domain.types import MISSING, Kind
from validated_method.engine.result import Failure, FailureKind, Outcome
from validated_method.errors import (
    ArityError,
    CallValidationError,
    ConfigurationError,
    MissingRequiredError,
    ReturnTypeMismatchError,
    TypeMismatchError,
    ValidatedMethodError,
)
from validated_method.method import ValidatedMethod, validated

__all__ = [
    "MISSING",
    "ArityError",
    "CallValidationError",
    "ConfigurationError",
    "Failure",
    "FailureKind",
    "Kind",
    "MissingRequiredError",
    "NominalType",
    "ObjectSchema",
    "Outcome",
    "Pattern",
    "PositionalSchema",
    "Predicate",
    "Primitive",
    "ReturnTypeMismatchError",
    "SingleValueSchema",
    "TypeMismatchError",
    "Union",
    "ValidatedMethod",
    "ValidatedMethodError",
    "ValidationConfig",
    "ZeroArgSchema",
    "is_quiet",
    "normalize_schema",
    "set_quiet",
    "validated",
]
