# application/services/assertion_checker.py
from __future__ import annotations

import json
import math
from typing import Any, Callable, Dict, Optional, Tuple

from application.outcome import ResultAssertion
from application.ports.http_client import HttpResponse
from application.services.json_path import JsonLeaf, JsonQueryError, LeafKind, query, to_path
from application.services.response_extractor import elapsed_ms
from domain.steps.assertion import AssertionSource, AssertionSpec, Comparison

_MISSING = object()


class AssertionChecker:
    """
    Check one declared assertion against a response.

    Never raises: an unresolved value or a non numeric operand gives a
    failed ResultAssertion with a message.
    """

    def __init__(self) -> None:
        self._comparisons: Dict[Comparison, Callable[[Any, str], Tuple[bool, str]]] = {
            Comparison.EQUAL: self._equal,
            Comparison.NOT_EQUAL: self._not_equal,
            Comparison.EMPTY: self._empty,
            Comparison.NOT_EMPTY: self._not_empty,
            Comparison.CONTAINS: self._contains,
            Comparison.DOES_NOT_CONTAIN: self._does_not_contain,
            Comparison.IS_A_NUMBER: self._is_a_number,
            Comparison.EQUAL_NUMBER: self._numeric(lambda a, b: a == b, "=="),
            Comparison.IS_LESS_THAN: self._numeric(lambda a, b: a < b, "<"),
            Comparison.IS_LESS_THAN_OR_EQUAL: self._numeric(lambda a, b: a <= b, "<="),
            Comparison.IS_GREATER_THAN: self._numeric(lambda a, b: a > b, ">"),
            Comparison.IS_GREATER_THAN_OR_EQUAL: self._numeric(lambda a, b: a >= b, ">="),
            Comparison.IS_NULL: self._is_null,
            Comparison.HAS_KEY: self._has_key,
            Comparison.HAS_VALUE: self._has_value,
        }

    def check(self, spec: AssertionSpec, response: HttpResponse) -> ResultAssertion:
        actual, error = self._resolve(spec, response)
        if actual is _MISSING:
            return self._result(spec, False, None, error)

        compare = self._comparisons.get(spec.comparison)
        if compare is None:
            return self._result(spec, False, _render(actual), f"unknown comparison: {spec.comparison}")

        success, message = compare(actual, spec.value or "")
        return self._result(spec, success, _render(actual), message)

    def _resolve(self, spec: AssertionSpec, response: HttpResponse) -> Tuple[Any, str]:
        source = spec.source
        if source == AssertionSource.RESPONSE_STATUS:
            return response.status, ""
        if source == AssertionSource.RESPONSE_TIME:
            return elapsed_ms(response.elapsed), ""
        if source == AssertionSource.RESPONSE_HEADER:
            values = response.header_values(spec.property)
            if not values:
                return _MISSING, f"header {spec.property} not found"
            return values[0], ""
        if source == AssertionSource.RESPONSE_JSON:
            try:
                return query(response.body, to_path(spec.property)), ""
            except JsonQueryError as exc:
                return _MISSING, str(exc)
        return _MISSING, f"unknown assertion source: {source}"

    def _result(self, spec: AssertionSpec, success: bool, actual: Optional[str], message: str) -> ResultAssertion:
        return ResultAssertion(
            source=_enum_value(spec.source),
            comparison=_enum_value(spec.comparison),
            success=success,
            property=spec.property,
            expected=spec.value,
            actual=actual,
            message=message,
        )

    def _equal(self, actual: Any, expected: str) -> Tuple[bool, str]:
        rendered = _render(actual)
        return rendered == expected, f"{rendered!r} == {expected!r}"

    def _not_equal(self, actual: Any, expected: str) -> Tuple[bool, str]:
        rendered = _render(actual)
        return rendered != expected, f"{rendered!r} != {expected!r}"

    def _empty(self, actual: Any, _expected: str) -> Tuple[bool, str]:
        return _is_empty(actual), f"{_render(actual)!r} is empty"

    def _not_empty(self, actual: Any, _expected: str) -> Tuple[bool, str]:
        return not _is_empty(actual), f"{_render(actual)!r} is not empty"

    def _contains(self, actual: Any, expected: str) -> Tuple[bool, str]:
        return _contains(actual, expected), f"{_render(actual)!r} contains {expected!r}"

    def _does_not_contain(self, actual: Any, expected: str) -> Tuple[bool, str]:
        return not _contains(actual, expected), f"{_render(actual)!r} does not contain {expected!r}"

    def _is_a_number(self, actual: Any, _expected: str) -> Tuple[bool, str]:
        return _to_number(actual) is not None, f"{_render(actual)!r} is a number"

    def _is_null(self, actual: Any, _expected: str) -> Tuple[bool, str]:
        return actual is None, f"{_render(actual)!r} is null"

    def _has_key(self, actual: Any, expected: str) -> Tuple[bool, str]:
        return isinstance(actual, dict) and expected in actual, f"object has key {expected!r}"

    def _has_value(self, actual: Any, expected: str) -> Tuple[bool, str]:
        if isinstance(actual, dict):
            items = list(actual.values())
        elif isinstance(actual, list):
            items = actual
        else:
            return False, f"{_render(actual)!r} is not an object or an array"
        return any(_render(item) == expected for item in items), f"has value {expected!r}"

    def _numeric(self, op: Callable[[float, float], bool], symbol: str) -> Callable[[Any, str], Tuple[bool, str]]:
        def compare(actual: Any, expected: str) -> Tuple[bool, str]:
            left = _to_number(actual)
            right = _to_number(expected)
            if left is None or right is None:
                return False, f"cannot compare {_render(actual)!r} {symbol} {expected!r} as numbers"
            return op(left, right), f"{_render(actual)} {symbol} {expected}"
        return compare


def _render(value: Any) -> str:
    leaf = JsonLeaf.of(value)
    if leaf.kind is not LeafKind.UNSUPPORTED:
        return leaf.render()
    return json.dumps(value, ensure_ascii=False)


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    raw = value if isinstance(value, (int, float)) else str(value).strip()
    try:
        number = float(raw)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    return False


def _contains(value: Any, expected: str) -> bool:
    if isinstance(value, dict):
        return expected in value
    if isinstance(value, list):
        return any(_render(item) == expected for item in value)
    return expected in _render(value)


def _enum_value(value: Any) -> str:
    return getattr(value, "value", str(value))
