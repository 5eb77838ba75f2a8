"""Unit tests for ValidationResult value type"""

import itertools

import pytest

from domain.validation import ValidationResult


class TestValidationResultConstructors:
    """Test named constructors and the validity invariant"""

    def test_success(self):
        result = ValidationResult.success()
        assert result.is_valid is True
        assert result.errors == ()
        assert result.warnings == ()

    def test_success_with_warnings(self):
        result = ValidationResult.success_with_warnings(["long title"])
        assert result.is_valid is True
        assert result.errors == ()
        assert result.warnings == ("long title",)

    def test_failure_with_single_message(self):
        result = ValidationResult.failure("Title cannot be empty")
        assert result.is_valid is False
        assert result.errors == ("Title cannot be empty",)

    def test_failure_requires_errors(self):
        with pytest.raises(ValueError):
            ValidationResult.failure([])

    def test_inconsistent_direct_construction_rejected(self):
        with pytest.raises(ValueError):
            ValidationResult(is_valid=True, errors=("boom",))
        with pytest.raises(ValueError):
            ValidationResult(is_valid=False)

    def test_immutable(self):
        result = ValidationResult.success()
        with pytest.raises(AttributeError):
            result.is_valid = False

    def test_from_messages(self):
        assert ValidationResult.from_messages([], []) == ValidationResult.success()
        assert ValidationResult.from_messages([], ["w"]).warnings == ("w",)
        failed = ValidationResult.from_messages(["e"], ["w"])
        assert failed.is_valid is False
        assert failed.warnings == ("w",)


class TestValidationResultCombine:
    """Test combine semantics"""

    def test_combine_concatenates_in_order(self):
        first = ValidationResult.failure(["e1"], ["w1"])
        second = ValidationResult.failure(["e2"], ["w2"])

        combined = first.combine(second)

        assert combined.is_valid is False
        assert combined.errors == ("e1", "e2")
        assert combined.warnings == ("w1", "w2")

    def test_combine_does_not_mutate_operands(self):
        first = ValidationResult.success_with_warnings(["w1"])
        second = ValidationResult.failure("e1")

        first.combine(second)

        assert first.warnings == ("w1",)
        assert first.is_valid is True
        assert second.errors == ("e1",)

    def test_combine_validity_is_logical_and(self):
        results = [
            ValidationResult.success(),
            ValidationResult.success_with_warnings("w"),
            ValidationResult.failure("e"),
        ]
        for left, right in itertools.product(results, repeat=2):
            assert left.combine(right).is_valid == (left.is_valid and right.is_valid)

    def test_combine_is_associative(self):
        a = ValidationResult.failure(["a"], ["wa"])
        b = ValidationResult.success_with_warnings(["wb"])
        c = ValidationResult.failure(["c"])

        assert a.combine(b).combine(c) == a.combine(b.combine(c))


class TestValidationResultPresentation:
    """Test summary and dictionary output"""

    def test_summary_lists_errors_and_warnings(self):
        result = ValidationResult.failure(["Title cannot be empty"], ["Author name is a single word"])
        summary = result.summary()

        assert summary.startswith("Validation failed")
        assert "  - Title cannot be empty" in summary
        assert "Warnings:" in summary
        assert str(result) == summary

    def test_to_dict(self):
        result = ValidationResult.success_with_warnings(["w"])
        assert result.to_dict() == {"is_valid": True, "errors": [], "warnings": ["w"]}

    def test_has_errors_and_warnings(self):
        result = ValidationResult.failure("e")
        assert result.has_errors is True
        assert result.has_warnings is False
