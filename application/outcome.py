# application/outcome.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from application.exceptions import ExtractionError
from application.ports.http_client import HttpRequest, HttpResponse
from domain.steps.base import StepKind


class VariableKind(str, Enum):
    USED = "used"
    CREATED = "created"


@dataclass(frozen=True)
class ResultVariable:
    """
    used: key is the patched field (body, URL, headers.<k>, params[<k>])
    created: key is the variable name, value or error is set
    """
    key: str
    kind: VariableKind
    value: Optional[str] = None
    error: Optional[ExtractionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ResultAssertion:
    source: str
    comparison: str
    success: bool
    property: str = ""
    expected: str = ""
    actual: Optional[str] = None
    message: str = ""


@dataclass(frozen=True)
class ResultStep:
    kind: StepKind
    step_time: float = 0.0  # seconds
    request: Optional[HttpRequest] = None
    response: Optional[HttpResponse] = None
    assertions: List[ResultAssertion] = field(default_factory=list)
    variables_used: List[ResultVariable] = field(default_factory=list)
    variables_created: List[ResultVariable] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(a.success for a in self.assertions)
