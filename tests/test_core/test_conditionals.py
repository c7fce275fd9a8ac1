"""Conditional overrides declared with ``when_field``."""

from __future__ import annotations

import pytest

from mdc_validator import Validator


def conditional_validator(**options: object) -> Validator:
    return Validator(**options).field("a").string().when_field("b", True, {"required": True})


class TestConditionalResolution:
    def test_then_branch_applies_when_dependent_matches(self) -> None:
        result = conditional_validator().validate({"b": True})

        assert result.errors == {"a": "Ce champ est requis"}

    def test_no_override_when_dependent_differs(self) -> None:
        result = conditional_validator().validate({"b": False})

        assert result.is_valid

    def test_dependent_comparison_is_strict(self) -> None:
        result = conditional_validator().validate({"b": 1})

        assert result.is_valid

    def test_missing_dependent_matches_none(self) -> None:
        validator = Validator().field("a").string().when_field("b", None, {"required": True})

        assert validator.validate({}).errors == {"a": "Ce champ est requis"}

    def test_otherwise_branch(self) -> None:
        validator = (
            Validator(persist_conditionals=False)
            .field("code").string()
            .when_field("country", "FR", {"pattern": r"^\d{5}$"}, {"min": 3})
        )

        assert validator.validate({"country": "FR", "code": "75001"}).is_valid
        assert validator.validate({"country": "FR", "code": "7500"}).errors == {
            "code": "La valeur ne correspond pas au format requis"
        }
        assert validator.validate({"country": "US", "code": "12"}).errors == {
            "code": "La valeur minimale est 3"
        }

    def test_override_can_change_kind(self) -> None:
        validator = (
            Validator(persist_conditionals=False)
            .field("amount").string()
            .when_field("numeric", True, {"kind": "number"})
        )

        assert validator.validate({"numeric": True, "amount": 3}).is_valid
        assert validator.validate({"numeric": False, "amount": 3}).errors == {"amount": "Le type doit être string"}

    def test_override_applies_after_transform(self) -> None:
        validator = (
            Validator()
            .field("a").string()
            .transform(lambda value: value or "")
            .when_field("b", True, {"required": True})
        )

        assert validator.validate({"b": True}).errors == {"a": "Ce champ est requis"}


class TestConditionalPersistence:
    def test_override_persists_across_calls_by_default(self) -> None:
        # Known defect kept for compatibility: the applied override is written
        # into the stored rule and still applies on the next call.
        validator = conditional_validator()

        first = validator.validate({"b": True})
        second = validator.validate({"b": False})

        assert first.errors == {"a": "Ce champ est requis"}
        assert second.errors == {"a": "Ce champ est requis"}
        assert validator.schema["a"].required is True

    def test_overrides_stack_across_calls(self) -> None:
        validator = (
            Validator()
            .field("a").string()
            .when_field("b", True, {"min": 5}, {"max": 2})
        )

        validator.validate({"b": True, "a": "abcdef"})
        result = validator.validate({"b": False, "a": "abc"})

        # min from the first call and max from the second are both active now;
        # both fail and the max check runs last.
        assert result.errors == {"a": "La valeur maximale est 2"}
        rule = validator.schema["a"]
        assert (rule.min, rule.max) == (5, 2)

    def test_fresh_overlay_when_persistence_disabled(self) -> None:
        validator = conditional_validator(persist_conditionals=False)

        first = validator.validate({"b": True})
        second = validator.validate({"b": False})

        assert first.errors == {"a": "Ce champ est requis"}
        assert second.is_valid
        assert validator.schema["a"].required is False

    @pytest.mark.parametrize("persist", [True, False])
    def test_unrelated_fields_untouched(self, persist: bool) -> None:
        validator = conditional_validator(persist_conditionals=persist).field("c").number()

        validator.validate({"b": True})

        assert validator.schema["c"].required is False
