"""
Condition evaluation for ``condition`` steps.

A condition step compares one field of a task result against a
configured value. Evaluation is a fixed operator table; no expression
is ever executed.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union


class ConditionOperator(str, Enum):
    """Comparison operators available to condition steps."""
    EQ = "eq"
    NEQ = "neq"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    GT = "gt"
    LT = "lt"


TRUE_BRANCH = "true"
FALSE_BRANCH = "false"


def _stringify(raw: Any) -> str:
    # Render result values the way they read in the JSON task result
    if raw is None:
        return ""
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw)


def _to_number(value: str) -> Optional[float]:
    # Blank compares as 0
    if not value.strip():
        return 0.0
    try:
        return float(value)
    except ValueError:
        return None


def _compare_numbers(
    left: str, right: str, op: Callable[[float, float], bool],
) -> bool:
    a, b = _to_number(left), _to_number(right)
    if a is None or b is None:
        return False
    return op(a, b)


_OPERATORS: Dict[str, Callable[[str, str], bool]] = {
    ConditionOperator.EQ.value: lambda actual, expected: actual == expected,
    ConditionOperator.NEQ.value: lambda actual, expected: actual != expected,
    ConditionOperator.CONTAINS.value: lambda actual, expected: expected in actual,
    ConditionOperator.NOT_CONTAINS.value: lambda actual, expected: expected not in actual,
    ConditionOperator.GT.value: lambda actual, expected: _compare_numbers(
        actual, expected, lambda a, b: a > b,
    ),
    ConditionOperator.LT.value: lambda actual, expected: _compare_numbers(
        actual, expected, lambda a, b: a < b,
    ),
}


def evaluate_condition(
    field: Optional[str],
    operator: Union[ConditionOperator, str, None],
    value: Optional[str],
    task_result: Optional[Mapping[str, Any]],
) -> bool:
    """Evaluate a condition against a task result.

    Returns ``False`` when there is no result, no field, or an unknown
    operator. A field missing from the result compares as ``""``;
    booleans compare as ``"true"`` / ``"false"`` and integral floats
    without a fractional part. ``gt`` / ``lt`` compare numerically, a
    blank side counting as 0, and are ``False`` when either side is not
    a number.
    """
    if task_result is None or not field:
        return False

    op_key = operator.value if isinstance(operator, ConditionOperator) else operator
    compare = _OPERATORS.get(op_key or "")
    if compare is None:
        return False

    actual = _stringify(task_result.get(field))
    return compare(actual, value or "")


def branch_for(result: bool) -> str:
    """Map an evaluation result to its edge label."""
    return TRUE_BRANCH if result else FALSE_BRANCH
