# domain/steps/base.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StepKind(str, Enum):
    PAUSE = "pause"
    REQUEST = "request"


@dataclass(frozen=True)
class Step:
    id: str
    name: str

    @property
    def kind(self) -> StepKind:
        raise NotImplementedError(f"{type(self).__name__} has no step kind")
