# domain/scenario.py
"""
Scenario domain model
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from domain.steps.base import Step


@dataclass(frozen=True)
class ScenarioMeta:
    name: str
    description: str = ""
    version: str = "1"


@dataclass(frozen=True)
class Scenario:
    """
    Scenario aggregate root
    """
    meta: ScenarioMeta
    steps: List[Step] = field(default_factory=list)
