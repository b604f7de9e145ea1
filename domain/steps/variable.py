# domain/steps/variable.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class VariableSource(str, Enum):
    RESPONSE_TIME = "response_time"
    RESPONSE_STATUS = "response_status"
    RESPONSE_HEADER = "response_header"
    RESPONSE_JSON = "response_json"


@dataclass(frozen=True)
class VariableSpec:
    """
    A value to export from a response into the variable store.
    property: header name for response_header, key path for response_json.
    """
    name: str
    source: VariableSource
    property: str = ""
