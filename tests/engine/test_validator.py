"""Tests for validate_call across the four schema kinds."""

from __future__ import annotations

from typing import Any

import pytest

from validated_method.domain.descriptors import normalize_descriptor
from validated_method.domain.schema import normalize_schema
from validated_method.engine.result import FailureKind
from validated_method.engine.validator import validate_call


def run(raw: Any, *args: Any, quiet: bool = False, **kwargs: Any) -> Any:
    return validate_call(normalize_schema(raw), args, kwargs, quiet=quiet, method="probe")


class TestObjectSchema:
    def test_coercions_written_to_bag(self) -> None:
        outcome = run({"a": "number", "b": "number"}, {"a": "40", "b": "2"})
        assert outcome.ok
        assert outcome.bag == {"a": 40.0, "b": 2.0}

    def test_caller_mapping_not_mutated(self) -> None:
        supplied = {"n": "7"}
        outcome = run({"n": "int"}, supplied)
        assert outcome.bag == {"n": 7}
        assert supplied == {"n": "7"}

    def test_keywords_form_the_bag(self) -> None:
        outcome = run({"a": "string"}, a="x")
        assert outcome.bag == {"a": "x"}

    def test_keywords_override_mapping(self) -> None:
        outcome = run({"a": "string"}, {"a": "from-map"}, a="from-kw")
        assert outcome.bag == {"a": "from-kw"}

    @pytest.mark.parametrize("args", [(), (None,), ({},)])
    def test_all_optional_accepts_nothing(self, args: tuple[Any, ...]) -> None:
        outcome = run({"a": "optional", "b": ["string", "optional"]}, *args)
        assert outcome.ok
        assert outcome.bag == {}

    def test_missing_required(self) -> None:
        outcome = run({"required": "string"}, {})
        assert not outcome.ok
        assert outcome.failure.kind is FailureKind.MISSING_REQUIRED
        assert outcome.failure.message == "Missing required parameter: required"
        assert outcome.failure.field == "required"

    def test_type_mismatch_names_field(self) -> None:
        outcome = run({"required": "string"}, {"required": 42})
        assert outcome.failure.kind is FailureKind.TYPE_MISMATCH
        assert outcome.failure.message == "Expected string, got number for required"
        assert outcome.failure.expected == "string"
        assert outcome.failure.actual == "number"

    def test_fail_fast_in_declaration_order(self) -> None:
        outcome = run({"first": "string", "second": "number"}, {"first": 1, "second": "x"})
        assert outcome.failure.field == "first"

    def test_missing_reported_before_later_mismatch(self) -> None:
        outcome = run({"a": "string", "b": "number"}, {"b": "not a number"})
        assert outcome.failure.kind is FailureKind.MISSING_REQUIRED
        assert outcome.failure.field == "a"

    def test_union_optional_left_absent(self) -> None:
        outcome = run({"a": ["string", "optional"], "b": "string"}, {"b": "x"})
        assert outcome.ok
        assert "a" not in outcome.bag

    def test_union_present_must_match_member(self) -> None:
        outcome = run({"a": ["string", "optional"]}, {"a": 1})
        assert outcome.failure.message == "Expected one of [string, optional], got number for a"

    def test_null_on_nullable_union(self) -> None:
        outcome = run({"a": ["string", "null"]}, {"a": None})
        assert outcome.bag == {"a": None}

    def test_null_on_plain_string_fails(self) -> None:
        outcome = run({"a": "string"}, {"a": None})
        assert outcome.failure.message == "Expected string, got null for a"

    def test_non_mapping_argument(self) -> None:
        outcome = run({"a": "string"}, "a")
        assert outcome.failure.kind is FailureKind.TYPE_MISMATCH

    def test_two_positional_arguments(self) -> None:
        outcome = run({"a": "string"}, {"a": "x"}, {"a": "y"})
        assert outcome.failure.kind is FailureKind.ARITY

    def test_predicate_exception_carries_cause(self) -> None:
        def boom(value: Any) -> bool:
            raise ValueError("Validator error")

        outcome = run({"a": boom}, {"a": 1})
        assert isinstance(outcome.failure.cause, ValueError)
        assert outcome.failure.message == "Validator raised for a: Validator error"

    def test_predicate_failure_message(self) -> None:
        outcome = run({"even": lambda n: n % 2 == 0}, {"even": 43})
        assert outcome.failure.message == "Value 43 failed validation for even"


class TestUnexpectedParameters:
    def test_one_diagnostic_per_extra(self, captured_logs: list[dict[str, Any]]) -> None:
        outcome = run({"name": "string"}, {"name": "a", "extra": 1})
        assert outcome.ok
        assert outcome.bag == {"name": "a", "extra": 1}
        events = [e for e in captured_logs if e["event"] == "unexpected_parameter"]
        assert len(events) == 1
        assert events[0]["parameter"] == "extra"
        assert events[0]["method"] == "probe"
        assert events[0]["log_level"] == "warning"

    def test_order_follows_call(self, captured_logs: list[dict[str, Any]]) -> None:
        run({"expected": "string"}, {"expected": "v", "unexpected1": True, "unexpected2": 42})
        assert [e["parameter"] for e in captured_logs] == ["unexpected1", "unexpected2"]

    def test_quiet_suppresses(self, captured_logs: list[dict[str, Any]]) -> None:
        outcome = run({"name": "string"}, {"name": "a", "extra": 1}, quiet=True)
        assert outcome.ok
        assert captured_logs == []

    def test_diagnostic_emitted_even_when_call_fails(
        self, captured_logs: list[dict[str, Any]]
    ) -> None:
        outcome = run({"name": "string"}, {"extra": 1})
        assert not outcome.ok
        assert len(captured_logs) == 1


class TestPositionalSchema:
    def test_coerces_each_position(self) -> None:
        outcome = run(["number", "int"], "40", "2.9")
        assert outcome.bag == [40.0, 2]

    def test_too_few_arguments(self) -> None:
        outcome = run(["number", "number"], 1)
        assert outcome.failure.kind is FailureKind.ARITY
        assert outcome.failure.message == "Expected 2 arguments, got 1"

    def test_extra_arguments_ignored(self, captured_logs: list[dict[str, Any]]) -> None:
        outcome = run(["number"], 1, "anything", object)
        assert outcome.ok
        assert outcome.bag[0] == 1.0
        assert outcome.bag[1:] == ["anything", object]
        assert captured_logs == []

    def test_error_names_position(self) -> None:
        outcome = run(["number", "number"], "not", "numbers")
        assert outcome.failure.field == 0
        assert outcome.failure.message == "Cannot convert 'not' to float for argument 0"

    def test_keywords_rejected(self) -> None:
        outcome = run(["number"], 1, extra=2)
        assert outcome.failure.kind is FailureKind.ARITY


class TestSingleValueSchema:
    def test_value_coerced(self) -> None:
        outcome = run("int", "41.5")
        assert outcome.bag == {"value": 41}

    def test_trailing_arguments_kept_unchecked(self) -> None:
        outcome = run("int", "41.5", "extra", None)
        assert outcome.bag == {"value": 41}
        assert outcome.rest == ("extra", None)

    def test_mismatch(self) -> None:
        outcome = run("string", 42)
        assert outcome.failure.message == "Expected string, got number for value"

    def test_missing(self) -> None:
        outcome = run("string")
        assert outcome.failure.kind is FailureKind.MISSING_REQUIRED

    def test_optional_may_be_omitted(self) -> None:
        outcome = run("optional")
        assert outcome.ok
        assert outcome.bag == {}

    def test_optional_union_descriptor(self) -> None:
        nullable = normalize_descriptor(["string", "optional"])
        assert run(nullable).bag == {}
        assert run(nullable, "x").bag == {"value": "x"}
        assert not run(nullable, 1).ok


class TestZeroArgSchema:
    def test_no_arguments(self) -> None:
        assert run(None).ok

    def test_arguments_rejected(self) -> None:
        outcome = run(None, 42)
        assert outcome.failure.kind is FailureKind.ARITY
        assert outcome.failure.message == "Expected 0 arguments, got 1"

    def test_keywords_count(self) -> None:
        outcome = run("void", a=1, b=2)
        assert outcome.failure.message == "Expected 0 arguments, got 2"


class TestIdempotence:
    @pytest.mark.parametrize(
        ("schema", "supplied"),
        [
            ({"a": "int", "b": "roundint", "c": "number", "d": "boolean"}, {
                "a": "42.9",
                "b": "42.5",
                "c": "3.5",
                "d": "yes",
            }),
            ({"s": "strictint", "f": "strictfloat"}, {"s": 3.0, "f": 2}),
        ],
    )
    def test_revalidating_coerced_bag_is_noop(
        self, schema: dict[str, Any], supplied: dict[str, Any]
    ) -> None:
        first = run(schema, supplied)
        second = run(schema, dict(first.bag))
        assert second.ok
        assert second.bag == first.bag
        assert {k: type(v) for k, v in second.bag.items()} == {
            k: type(v) for k, v in first.bag.items()
        }
