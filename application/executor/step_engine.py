# application/executor/step_engine.py
from __future__ import annotations

from application.executor.handler_registry import HandlerRegistry
from application.handlers.pause_handler import PauseStepHandler
from application.handlers.request_handler import RequestStepHandler
from application.outcome import ResultStep
from application.ports.http_client import HttpClientPort
from application.services.execution_deps import ExecutionDeps
from domain.run import RunContext
from domain.steps.base import Step


class StepEngine:
    """
    Run a single step through the handler supporting its kind.

    Errors (StepError subclasses) propagate to the caller, carrying the
    partial ResultStep when one exists.
    """

    def __init__(self, registry: HandlerRegistry):
        self._registry = registry

    def run(self, step: Step, ctx: RunContext, deps: ExecutionDeps) -> ResultStep:
        handler = self._registry.get_handler(step)
        result = handler.handle(step, ctx, deps)
        if result is None:
            raise RuntimeError(
                f"Handler returned None: handler={type(handler).__name__}, step={step.id} ({type(step).__name__})"
            )
        return result


def build_step_engine(http_client: HttpClientPort) -> StepEngine:
    return StepEngine(
        HandlerRegistry([
            PauseStepHandler(),
            RequestStepHandler(http_client),
        ])
    )
