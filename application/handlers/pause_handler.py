# application/handlers/pause_handler.py
from __future__ import annotations

import time
from typing import Callable

from application.handlers.base import StepHandler
from application.outcome import ResultStep
from application.services.execution_deps import ExecutionDeps
from domain.run import RunContext
from domain.steps.base import StepKind
from domain.steps.pause import PauseStep


class PauseStepHandler(StepHandler):
    """Blocks the calling thread for the step duration. No variable activity."""

    def __init__(
        self,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._sleep = sleep
        self._clock = clock

    def supports(self, step) -> bool:
        return isinstance(step, PauseStep)

    def handle(self, step: PauseStep, ctx: RunContext, deps: ExecutionDeps) -> ResultStep:
        t0 = self._clock()
        deps.logger.info("pause.wait", step_id=step.id, duration_sec=step.duration)

        if step.duration > 0:
            self._sleep(step.duration)

        return ResultStep(kind=StepKind.PAUSE, step_time=self._clock() - t0)
