# application/exceptions.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from application.outcome import ResultStep


class StepError(Exception):
    """
    A step could not complete. `result` holds whatever was assembled before
    the failure (None when nothing was).
    """

    def __init__(self, message: str, result: Optional["ResultStep"] = None):
        super().__init__(message)
        self.result = result


class InvalidStepKindError(StepError):
    pass


class RequestBuildError(StepError):
    pass


class TransportError(StepError):
    pass


class ExtractionError(Exception):
    """Recorded on a created variable, never raised to the step caller."""

    def __init__(self, variable_name: str, message: str):
        super().__init__(f"variable {variable_name!r}: {message}")
        self.variable_name = variable_name
