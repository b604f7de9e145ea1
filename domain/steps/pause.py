# domain/steps/pause.py
from __future__ import annotations

from dataclasses import dataclass

from domain.steps.base import Step, StepKind


@dataclass(frozen=True)
class PauseStep(Step):
    duration: int = 0  # seconds

    @property
    def kind(self) -> StepKind:
        return StepKind.PAUSE
