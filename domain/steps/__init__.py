from domain.steps.base import Step, StepKind
from domain.steps.pause import PauseStep
from domain.steps.request import RequestStep
from domain.steps.assertion import AssertionSpec, AssertionSource, Comparison
from domain.steps.variable import VariableSpec, VariableSource

__all__ = [
    "Step",
    "StepKind",
    "PauseStep",
    "RequestStep",
    "AssertionSpec",
    "AssertionSource",
    "Comparison",
    "VariableSpec",
    "VariableSource",
]
