# application/executor/handler_registry.py
from __future__ import annotations

from typing import List

from application.exceptions import InvalidStepKindError
from application.handlers.base import StepHandler
from domain.steps.base import Step


class HandlerRegistry:
    def __init__(self, handlers: List[StepHandler]):
        self._handlers = handlers

    def get_handler(self, step: Step) -> StepHandler:
        for h in self._handlers:
            if h.supports(step):
                return h
        raise InvalidStepKindError(f"{_kind_name(step)} is an invalid step kind (step {step.id})")


def _kind_name(step: Step) -> str:
    try:
        return step.kind.value
    except NotImplementedError:
        return type(step).__name__
