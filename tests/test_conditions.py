"""Tests for step condition evaluation."""

from __future__ import annotations

from typing import Any

import pytest

from litestar_approvals.core.definition import Condition
from litestar_approvals.engine.conditions import evaluate_condition, evaluate_conditions


@pytest.mark.unit
class TestEvaluateConditions:
    """Tests for the AND-combination of step conditions."""

    @pytest.mark.parametrize("conditions", [[], (), None])
    def test_no_conditions_always_hold(self, conditions: Any) -> None:
        """Test that a step without conditions always runs."""
        assert evaluate_conditions(conditions, {}) is True
        assert evaluate_conditions(conditions, {"amount": 1}) is True

    def test_all_conditions_must_hold(self) -> None:
        """Test that conditions are combined with logical AND."""
        conditions = [
            Condition(field="amount", operator="greater_than", value=1000),
            Condition(field="department", operator="equals", value="Finance"),
        ]

        assert evaluate_conditions(conditions, {"amount": 5000, "department": "Finance"}) is True
        assert evaluate_conditions(conditions, {"amount": 5000, "department": "Sales"}) is False
        assert evaluate_conditions(conditions, {"amount": 10, "department": "Finance"}) is False

    def test_amount_threshold_scenario(self) -> None:
        """Test the typical amount threshold gating a step."""
        data = {"amount": 5000}

        assert evaluate_conditions([Condition(field="amount", operator="greater_than", value=1000)], data)
        assert not evaluate_conditions([Condition(field="amount", operator="greater_than", value=10000)], data)


@pytest.mark.unit
class TestEqualityOperators:
    """Tests for string-coerced equality."""

    @pytest.mark.parametrize(
        ("field_value", "value", "expected"),
        [
            ("Finance", "Finance", True),
            ("Finance", "finance", False),
            (5000, "5000", True),
            (5000.0, "5000", True),
            (True, "true", True),
            (False, "true", False),
            (None, "", True),
            ([1, 2], "1,2", True),
            (["a", None, 3.0], "a,,3", True),
            (float("nan"), "NaN", True),
            (float("-inf"), "-Infinity", True),
        ],
    )
    def test_equals(self, field_value: Any, value: Any, expected: bool) -> None:
        """Test equals coerces both sides to strings."""
        condition = Condition(field="f", operator="equals", value=value)
        assert evaluate_condition(condition, {"f": field_value}) is expected

    def test_missing_field_compares_as_empty_string(self) -> None:
        """Test that an absent field equals an empty value."""
        assert evaluate_condition(Condition(field="f", operator="equals", value=""), {}) is True
        assert evaluate_condition(Condition(field="f", operator="equals", value="x"), {}) is False

    @pytest.mark.parametrize("field_value", ["Finance", "Sales", 42, 0, True])
    def test_equals_and_not_equals_are_complements(self, field_value: Any) -> None:
        """Test not_equals is always the negation of equals."""
        data = {"f": field_value}
        equals = evaluate_condition(Condition(field="f", operator="equals", value="Finance"), data)
        not_equals = evaluate_condition(Condition(field="f", operator="not_equals", value="Finance"), data)

        assert equals is not not_equals


@pytest.mark.unit
class TestNumericOperators:
    """Tests for numeric-coerced comparisons."""

    @pytest.mark.parametrize(
        ("field_value", "expected"),
        [(5000, True), ("5000", True), (" 1500 ", True), (1000, False), (10, False)],
    )
    def test_greater_than(self, field_value: Any, expected: bool) -> None:
        """Test greater_than coerces strings to numbers."""
        condition = Condition(field="amount", operator="greater_than", value="1000")
        assert evaluate_condition(condition, {"amount": field_value}) is expected

    def test_less_than(self) -> None:
        """Test less_than with numeric and string values."""
        condition = Condition(field="amount", operator="less_than", value=100)

        assert evaluate_condition(condition, {"amount": 99.5}) is True
        assert evaluate_condition(condition, {"amount": "100"}) is False

    @pytest.mark.parametrize("field_value", ["abc", "1_000", "inf", "infinity", "nan", "NaN", "0x", "1e", {"a": 1}])
    def test_non_numeric_values_never_compare(self, field_value: Any) -> None:
        """Test that uncoercible values make both comparisons false without raising."""
        data = {"amount": field_value}

        assert evaluate_condition(Condition(field="amount", operator="greater_than", value=0), data) is False
        assert evaluate_condition(Condition(field="amount", operator="less_than", value=0), data) is False

    def test_missing_field_never_compares(self) -> None:
        """Test that an absent field is NaN for both comparisons."""
        assert evaluate_condition(Condition(field="amount", operator="greater_than", value=0), {}) is False
        assert evaluate_condition(Condition(field="amount", operator="less_than", value=0), {}) is False

    @pytest.mark.parametrize(
        ("field_value", "operator", "threshold", "expected"),
        [
            ("1_000", "greater_than", "999", False),
            ("inf", "greater_than", "1", False),
            ("Infinity", "greater_than", "1", True),
            ("-Infinity", "less_than", "1", True),
            ("", "less_than", "1", True),
            ("   ", "less_than", "1", True),
            (None, "less_than", "1", True),
            ("0x10", "greater_than", 15, True),
            ("0b11", "less_than", 4, True),
            ("0o17", "greater_than", 14, True),
            ("-0x10", "less_than", 0, False),
            ("1e3", "greater_than", 999, True),
            (".5", "less_than", 1, True),
            ([7], "greater_than", 6, True),
            ([], "less_than", 1, True),
            ([1, 2], "greater_than", 0, False),
            (True, "greater_than", 0, True),
        ],
    )
    def test_coercion_matches_builder_number_rules(
        self, field_value: Any, operator: str, threshold: Any, expected: bool
    ) -> None:
        """Test numeric coercion accepts exactly what the builder's Number() accepts."""
        condition = Condition(field="x", operator=operator, value=threshold)
        assert evaluate_condition(condition, {"x": field_value}) is expected
        assert evaluate_condition(Condition(field="amount", operator="less_than", value=0), data) is False

    def test_non_numeric_threshold_never_compares(self) -> None:
        """Test that an uncoercible condition value makes the comparison false."""
        condition = Condition(field="amount", operator="greater_than", value="lots")
        assert evaluate_condition(condition, {"amount": 5000}) is False


@pytest.mark.unit
class TestContainsOperator:
    """Tests for the case-insensitive substring operator."""

    def test_contains_is_case_insensitive(self) -> None:
        """Test contains ignores case on both sides."""
        condition = Condition(field="title", operator="contains", value="LAPTOP")

        assert evaluate_condition(condition, {"title": "New laptop for design team"}) is True
        assert evaluate_condition(condition, {"title": "Office chairs"}) is False

    def test_contains_coerces_numbers(self) -> None:
        """Test contains works on string-coerced numbers."""
        condition = Condition(field="code", operator="contains", value=42)
        assert evaluate_condition(condition, {"code": 14201}) is True

    def test_contains_on_missing_field(self) -> None:
        """Test contains against an absent field only matches an empty value."""
        assert evaluate_condition(Condition(field="x", operator="contains", value="a"), {}) is False
        assert evaluate_condition(Condition(field="x", operator="contains", value=""), {}) is True


@pytest.mark.unit
class TestBetweenOperator:
    """Tests for the inclusive range operator."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [(15, True), (10, True), (20, True), (25, False), (9.99, False), ("12", True)],
    )
    def test_between_is_inclusive(self, amount: Any, expected: bool) -> None:
        """Test both bounds are included."""
        condition = Condition(field="amount", operator="between", value=10, value2=20)
        assert evaluate_condition(condition, {"amount": amount}) is expected

    @pytest.mark.parametrize("value2", [None, ""])
    def test_missing_upper_bound_defaults_to_lower(self, value2: Any) -> None:
        """Test that without value2 the range collapses to the single point value."""
        condition = Condition(field="amount", operator="between", value=10, value2=value2)

        assert evaluate_condition(condition, {"amount": 10}) is True
        assert evaluate_condition(condition, {"amount": 11}) is False
        assert evaluate_condition(condition, {"amount": 9}) is False

    def test_between_non_numeric_is_false(self) -> None:
        """Test that an uncoercible field value is outside any range."""
        condition = Condition(field="amount", operator="between", value=0, value2=100)
        assert evaluate_condition(condition, {"amount": "n/a"}) is False


@pytest.mark.unit
class TestUnknownOperator:
    """Tests for operators the evaluator does not recognise."""

    def test_unknown_operator_holds(self) -> None:
        """Test that unknown operators evaluate to true."""
        condition = Condition(field="amount", operator="matches_regex", value="^1")
        assert evaluate_condition(condition, {"amount": 5000}) is True
        assert evaluate_conditions([condition], {}) is True
