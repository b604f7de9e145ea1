# domain/steps/assertion.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AssertionSource(str, Enum):
    RESPONSE_STATUS = "response_status"
    RESPONSE_HEADER = "response_header"
    RESPONSE_JSON = "response_json"
    RESPONSE_TIME = "response_time"


class Comparison(str, Enum):
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    EMPTY = "empty"
    NOT_EMPTY = "not_empty"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "does_not_contain"
    IS_A_NUMBER = "is_a_number"
    EQUAL_NUMBER = "equal_number"
    IS_LESS_THAN = "is_less_than"
    IS_LESS_THAN_OR_EQUAL = "is_less_than_or_equal"
    IS_GREATER_THAN = "is_greater_than"
    IS_GREATER_THAN_OR_EQUAL = "is_greater_than_or_equal"
    IS_NULL = "is_null"
    HAS_KEY = "has_key"
    HAS_VALUE = "has_value"


@dataclass(frozen=True)
class AssertionSpec:
    source: AssertionSource
    comparison: Comparison
    property: str = ""
    value: str = ""
