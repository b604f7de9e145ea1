# domain/steps/request.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from domain.steps.assertion import AssertionSpec
from domain.steps.base import Step, StepKind
from domain.steps.variable import VariableSpec


@dataclass(frozen=True)
class RequestStep(Step):
    method: str = "GET"
    url: str = ""
    headers: Dict[str, List[str]] = field(default_factory=dict)  # multi-value, first one is sent
    body: str = ""
    assertions: List[AssertionSpec] = field(default_factory=list)
    variables: List[VariableSpec] = field(default_factory=list)

    @property
    def kind(self) -> StepKind:
        return StepKind.REQUEST
