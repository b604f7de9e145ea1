# application/executor/step_executor.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional
import time
import uuid

from application.exceptions import StepError
from application.executor.step_engine import StepEngine
from application.outcome import ResultStep
from application.services.execution_deps import ExecutionDeps
from domain.run import RunContext
from domain.steps.base import Step


@dataclass(frozen=True)
class ExecutionResult:
    ok: bool
    results: List[ResultStep] = field(default_factory=list)
    failed_step_index: Optional[int] = None
    error_message: Optional[str] = None

    @property
    def assertions_passed(self) -> int:
        return sum(1 for r in self.results for a in r.assertions if a.success)

    @property
    def assertions_failed(self) -> int:
        return sum(1 for r in self.results for a in r.assertions if not a.success)


class StepExecutor:
    """
    Run the steps of one scenario, strictly one after another.

    - failed assertions are recorded and the run goes on
    - a StepError stops the run; its partial result is kept
    """

    def __init__(self, engine: StepEngine):
        self._engine = engine

    def execute(self, steps: List[Step], ctx: RunContext, deps: ExecutionDeps) -> ExecutionResult:
        # keep a run_id given by the caller
        if not getattr(ctx, "run_id", ""):
            ctx.run_id = uuid.uuid4().hex

        deps = deps.with_logger(deps.logger.bind(run_id=ctx.run_id))

        results: List[ResultStep] = []
        for index, step in enumerate(steps):
            deps.logger.info("step.start", step_id=step.id, index=index, step_type=type(step).__name__)
            t0 = time.perf_counter()

            try:
                result = self._engine.run(step, ctx, deps)
            except StepError as exc:
                if exc.result is not None:
                    results.append(exc.result)
                deps.logger.error(
                    "step.end",
                    step_id=step.id,
                    ok=False,
                    error=str(exc),
                    error_type=type(exc).__name__,
                    elapsed_ms=int((time.perf_counter() - t0) * 1000),
                )
                deps.logger.info("run.end", ok=False, steps=len(results))
                return ExecutionResult(
                    ok=False,
                    results=results,
                    failed_step_index=index,
                    error_message=str(exc),
                )

            results.append(result)
            deps.logger.info(
                "step.end",
                step_id=step.id,
                ok=result.ok,
                elapsed_ms=int((time.perf_counter() - t0) * 1000),
            )

        ok = all(r.ok for r in results)
        deps.logger.info("run.end", ok=ok, steps=len(results), variables=len(ctx.store))
        return ExecutionResult(ok=ok, results=results)
