"""Step condition evaluation.

Conditions compare a request data field against a configured value. All conditions
of a step must hold for the step to execute. Evaluation never raises: values that
cannot be coerced to numbers become NaN, and every comparison against NaN is false.

Numeric coercion follows the rules of JavaScript's ``Number()``, which the workflow
builder assumes: blank strings and ``null`` are 0, an absent field is NaN, and only
``Infinity`` and the ``0x``/``0o``/``0b`` prefixes extend plain decimal notation.
Text coercion renders ``null`` and absent fields as the empty string.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from litestar_approvals.core.types import ConditionOperator, RequestData

if TYPE_CHECKING:
    from litestar_approvals.core.definition import Condition

__all__ = ["evaluate_condition", "evaluate_conditions"]

_MISSING = object()
_DECIMAL = re.compile(r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_PREFIXED_DIGITS = re.compile(r"[0-9a-fA-F]+")
_PREFIX_BASES = {"0x": 16, "0o": 8, "0b": 2}


def _to_text(value: Any) -> str:
    if value is None or value is _MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(_to_text(item) for item in value)
    return str(value)


def _parse_number(text: str) -> float:
    text = text.strip()
    if not text:
        return 0.0

    base = _PREFIX_BASES.get(text[:2].lower())
    if base is not None:
        digits = text[2:]
        if not _PREFIXED_DIGITS.fullmatch(digits):
            return math.nan
        try:
            return float(int(digits, base))
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf

    if not _DECIMAL.fullmatch(text):
        return math.nan
    return float(text)


def _to_number(value: Any) -> float:
    if value is _MISSING:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, (list, tuple)):
        return _parse_number(_to_text(value))
    if isinstance(value, str):
        return _parse_number(value)
    return math.nan


def evaluate_condition(condition: Condition, request_data: RequestData) -> bool:
    """Evaluate a single condition against the request data.

    Args:
        condition: The condition to evaluate.
        request_data: Submitted request fields.

    Returns:
        Whether the condition holds. Unknown operators always hold.
    """
    field_value = request_data.get(condition.field, _MISSING)
    operator = condition.operator

    if operator == ConditionOperator.EQUALS:
        return _to_text(field_value) == _to_text(condition.value)
    if operator == ConditionOperator.NOT_EQUALS:
        return _to_text(field_value) != _to_text(condition.value)
    if operator == ConditionOperator.GREATER_THAN:
        return _to_number(field_value) > _to_number(condition.value)
    if operator == ConditionOperator.LESS_THAN:
        return _to_number(field_value) < _to_number(condition.value)
    if operator == ConditionOperator.CONTAINS:
        return _to_text(condition.value).lower() in _to_text(field_value).lower()
    if operator == ConditionOperator.BETWEEN:
        upper = condition.value2 if condition.value2 not in (None, "") else condition.value
        number = _to_number(field_value)
        return _to_number(condition.value) <= number <= _to_number(upper)

    return True


def evaluate_conditions(conditions: Iterable[Condition] | None, request_data: RequestData) -> bool:
    """Check whether a step should run.

    Args:
        conditions: The step's conditions. ``None`` or empty means the step always runs.
        request_data: Submitted request fields.

    Returns:
        True if every condition holds.

    Example:
        >>> evaluate_conditions(
        ...     [Condition(field="amount", operator="greater_than", value=1000)],
        ...     {"amount": 5000},
        ... )
        True
    """
    if not conditions:
        return True
    return all(evaluate_condition(condition, request_data) for condition in conditions)
