# tests/application/executor/test_step_executor.py
import pytest

from application.exceptions import TransportError
from application.executor.handler_registry import HandlerRegistry
from application.executor.step_engine import StepEngine, build_step_engine
from application.executor.step_executor import ExecutionResult, StepExecutor
from application.handlers.base import StepHandler
from application.outcome import ResultAssertion, ResultStep
from application.ports.requests_client import RequestsSessionHttpClient
from application.services.execution_deps import ExecutionDeps
from domain.run import RunContext
from domain.steps.assertion import AssertionSource, AssertionSpec, Comparison
from domain.steps.base import Step, StepKind
from domain.steps.pause import PauseStep
from domain.steps.request import RequestStep
from domain.steps.variable import VariableSource, VariableSpec
from tests.mock_http_client import MockHttpClient, RecordingLogger, json_response

API = "https://api.example.com"


class ScriptedHandler(StepHandler):
    """Returns prepared results per step id, raises prepared errors."""

    def __init__(self, results=None, errors=None):
        self.results = results or {}
        self.errors = errors or {}
        self.handled_steps = []

    def supports(self, step: Step) -> bool:
        return True

    def handle(self, step, ctx, deps):
        self.handled_steps.append(step.id)
        if step.id in self.errors:
            raise self.errors[step.id]
        return self.results.get(step.id, ResultStep(kind=StepKind.PAUSE))


def failed_assertion() -> ResultAssertion:
    return ResultAssertion(source="response_status", comparison="equal", success=False, expected="200", actual="500")


def make_executor(handler: StepHandler) -> StepExecutor:
    return StepExecutor(StepEngine(HandlerRegistry([handler])))


def pause(step_id: str) -> PauseStep:
    return PauseStep(id=step_id, name=step_id)


class TestStepExecutor:
    def test_executes_steps_in_order(self):
        handler = ScriptedHandler()
        logger = RecordingLogger()

        result = make_executor(handler).execute(
            [pause("s1"), pause("s2"), pause("s3")], RunContext(), ExecutionDeps(logger=logger)
        )

        assert isinstance(result, ExecutionResult)
        assert result.ok is True
        assert len(result.results) == 3
        assert handler.handled_steps == ["s1", "s2", "s3"]
        assert result.failed_step_index is None

    def test_failed_assertion_does_not_stop_the_run(self):
        handler = ScriptedHandler(
            results={"s1": ResultStep(kind=StepKind.REQUEST, assertions=[failed_assertion()])}
        )

        result = make_executor(handler).execute(
            [pause("s1"), pause("s2")], RunContext(), ExecutionDeps(logger=RecordingLogger())
        )

        assert handler.handled_steps == ["s1", "s2"]
        assert result.ok is False
        assert result.failed_step_index is None
        assert result.assertions_failed == 1
        assert result.assertions_passed == 0

    def test_step_error_stops_the_run_and_keeps_partial_result(self):
        partial = ResultStep(kind=StepKind.REQUEST, step_time=0.5)
        handler = ScriptedHandler(errors={"s2": TransportError("connection refused", result=partial)})

        result = make_executor(handler).execute(
            [pause("s1"), pause("s2"), pause("s3")], RunContext(), ExecutionDeps(logger=RecordingLogger())
        )

        assert handler.handled_steps == ["s1", "s2"]
        assert result.ok is False
        assert result.failed_step_index == 1
        assert result.error_message == "connection refused"
        assert result.results[-1] is partial

    def test_run_id_is_generated_and_bound_to_logs(self):
        logger = RecordingLogger()
        ctx = RunContext()

        make_executor(ScriptedHandler()).execute([pause("s1")], ctx, ExecutionDeps(logger=logger))

        assert ctx.run_id
        assert all(r["run_id"] == ctx.run_id for r in logger.records)
        assert logger.events() == ["step.start", "step.end", "run.end"]

    def test_given_run_id_is_kept(self):
        ctx = RunContext(run_id="run-1")

        make_executor(ScriptedHandler()).execute([], ctx, ExecutionDeps(logger=RecordingLogger()))

        assert ctx.run_id == "run-1"


class TestScenarioFlow:
    def test_variables_flow_between_steps(self):
        client = MockHttpClient()
        client.add("POST", f"{API}/login", json_response(200, {"token": "abc", "user": {"id": 7}}))
        client.add("GET", f"{API}/users/7", json_response(200, {"name": "bob"}, headers={"X-Req": ["r1"]}))
        steps = [
            RequestStep(
                id="login",
                name="login",
                method="POST",
                url=f"{API}/login",
                body='{"user": "${user}"}',
                variables=[
                    VariableSpec("token", VariableSource.RESPONSE_JSON, "token"),
                    VariableSpec("uid", VariableSource.RESPONSE_JSON, "user.id"),
                ],
            ),
            PauseStep(id="wait", name="wait", duration=0),
            RequestStep(
                id="profile",
                name="profile",
                url=API + "/users/${uid}?trace=${token}",
                headers={"Authorization": ["Bearer ${token}"]},
                assertions=[AssertionSpec(AssertionSource.RESPONSE_JSON, Comparison.EQUAL, "name", "bob")],
                variables=[VariableSpec("req", VariableSource.RESPONSE_HEADER, "x-req")],
            ),
        ]
        ctx = RunContext()
        ctx.store.add("user", "bob")

        result = StepExecutor(build_step_engine(client)).execute(steps, ctx, ExecutionDeps(logger=RecordingLogger()))

        assert result.ok is True
        assert client.sent[0].body == b'{"user": "bob"}'
        profile = client.sent[1]
        assert profile.base_url == f"{API}/users/7"
        assert profile.query_params == {"trace": "abc"}
        assert profile.headers == {"Authorization": "Bearer abc"}
        assert ctx.store.snapshot() == {"user": "bob", "token": "abc", "uid": "7", "req": "r1"}

        used = [v.key for v in result.results[2].variables_used]
        assert used == ["URL", "params[trace]", "headers.Authorization"]

    def test_transport_failure_stops_before_later_steps(self):
        client = MockHttpClient(fail=True)
        steps = [
            RequestStep(id="a", name="a", url=f"{API}/a"),
            RequestStep(id="b", name="b", url=f"{API}/b"),
        ]

        result = StepExecutor(build_step_engine(client)).execute(
            steps, RunContext(), ExecutionDeps(logger=RecordingLogger())
        )

        assert len(client.sent) == 1
        assert result.failed_step_index == 0
        assert result.results[0].response is None
        assert result.results[0].request.base_url == f"{API}/a"

    def test_unencodable_header_value_ends_the_run_with_partial_result(self):
        class LatinOnlySession:
            def request(self, **kwargs):
                for value in kwargs["headers"].values():
                    value.encode("latin-1")
                raise AssertionError("not reached")

        client = RequestsSessionHttpClient(session=LatinOnlySession())
        ctx = RunContext()
        ctx.store.add("name", "山田")
        step = RequestStep(id="u", name="u", url=f"{API}/u", headers={"X-User": ["${name}"]})

        result = StepExecutor(build_step_engine(client)).execute([step], ctx, ExecutionDeps(logger=RecordingLogger()))

        assert result.ok is False
        assert result.failed_step_index == 0
        assert "latin-1" in result.error_message
        assert result.results[0].request.headers == {"X-User": "山田"}
        assert result.results[0].response is None


@pytest.mark.parametrize("count", [0, 1])
def test_empty_or_single_pause_is_ok(count):
    result = make_executor(ScriptedHandler()).execute(
        [pause(f"s{i}") for i in range(count)], RunContext(), ExecutionDeps(logger=RecordingLogger())
    )
    assert result.ok is True
    assert len(result.results) == count
