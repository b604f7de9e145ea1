# domain/run.py
from __future__ import annotations

from dataclasses import dataclass, field

from domain.variable_store import VariableStore


@dataclass
class RunContext:
    run_id: str = ""
    # one store per run, never shared between concurrent runs
    store: VariableStore = field(default_factory=VariableStore)
