from dataclasses import FrozenInstanceError, dataclass

import pytest

from domain.steps import (
    AssertionSource,
    AssertionSpec,
    Comparison,
    PauseStep,
    RequestStep,
    Step,
    StepKind,
    VariableSource,
    VariableSpec,
)


@dataclass(frozen=True)
class BareStep(Step):
    pass


class TestStepKinds:
    def test_pause_step(self):
        step = PauseStep(id="p1", name="wait", duration=3)
        assert step.kind is StepKind.PAUSE
        assert step.kind.value == "pause"

    def test_request_step_defaults(self):
        step = RequestStep(id="r1", name="get")
        assert step.kind is StepKind.REQUEST
        assert step.method == "GET"
        assert step.headers == {}
        assert step.body == ""
        assert step.assertions == []
        assert step.variables == []

    def test_step_without_kind(self):
        with pytest.raises(NotImplementedError):
            BareStep(id="x", name="x").kind

    def test_steps_are_immutable(self):
        step = PauseStep(id="p1", name="wait")
        with pytest.raises(FrozenInstanceError):
            step.duration = 5


class TestSpecs:
    def test_enums_parse_wire_names(self):
        assert VariableSource("response_json") is VariableSource.RESPONSE_JSON
        assert AssertionSource("response_header") is AssertionSource.RESPONSE_HEADER
        assert Comparison("is_less_than_or_equal") is Comparison.IS_LESS_THAN_OR_EQUAL

    def test_spec_defaults(self):
        var = VariableSpec(name="ms", source=VariableSource.RESPONSE_TIME)
        assertion = AssertionSpec(source=AssertionSource.RESPONSE_STATUS, comparison=Comparison.EQUAL)
        assert var.property == ""
        assert assertion.property == ""
        assert assertion.value == ""
