# application/handlers/request_handler.py
from __future__ import annotations

import json
import time
from dataclasses import replace
from typing import Callable, List, Optional

from application.exceptions import RequestBuildError, TransportError
from application.handlers.base import StepHandler
from application.outcome import ResultAssertion, ResultStep, ResultVariable
from application.ports.http_client import HttpClientPort, HttpRequest, HttpResponse
from application.services.assertion_checker import AssertionChecker
from application.services.execution_deps import ExecutionDeps
from application.services.redactor import mask_dict, mask_field
from application.services.request_builder import RequestBuilder
from application.services.response_extractor import ResponseExtractor
from domain.run import RunContext
from domain.steps.assertion import AssertionSpec
from domain.steps.base import StepKind
from domain.steps.request import RequestStep


def _with_json_body(raw: HttpResponse, elapsed: float) -> HttpResponse:
    body = None
    if raw.text and raw.text.strip():
        try:
            body = json.loads(raw.text)
        except ValueError:
            body = None
    return replace(raw, body=body, elapsed=elapsed)


class RequestStepHandler(StepHandler):
    """
    build -> send -> assert -> extract.

    Build and transport failures raise (RequestBuildError / TransportError)
    without running assertions or extraction. Assertions always run before
    variables are extracted into the store.
    """

    def __init__(
        self,
        http_client: HttpClientPort,
        builder: Optional[RequestBuilder] = None,
        checker: Optional[AssertionChecker] = None,
        extractor: Optional[ResponseExtractor] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._http = http_client
        self._builder = builder or RequestBuilder()
        self._checker = checker or AssertionChecker()
        self._extractor = extractor or ResponseExtractor()
        self._clock = clock

    def supports(self, step) -> bool:
        return isinstance(step, RequestStep)

    def handle(self, step: RequestStep, ctx: RunContext, deps: ExecutionDeps) -> ResultStep:
        try:
            built = self._builder.build(step, ctx.store, deps.override_headers())
        except RequestBuildError as exc:
            deps.logger.error("request.build_failed", step_id=step.id, url=step.url, error=str(exc))
            raise

        result = ResultStep(
            kind=StepKind.REQUEST,
            request=built.request,
            variables_used=built.variables_used,
        )
        self._log_request(step, built.request, built.variables_used, deps)

        t0 = self._clock()
        try:
            raw = self._http.send(built.request)
        except TransportError as exc:
            elapsed = self._clock() - t0
            deps.logger.error("request.failed", step_id=step.id, url=built.request.url, error=str(exc))
            raise TransportError(str(exc), result=replace(result, step_time=elapsed)) from exc
        elapsed = self._clock() - t0

        response = _with_json_body(raw, elapsed)
        deps.logger.info(
            "response.received",
            step_id=step.id,
            status=response.status,
            elapsed_ms=int(elapsed * 1000),
        )

        assertions = self._assert(step.assertions, response, step.id, deps)
        created = self._extractor.extract(response, step.variables, ctx.store)
        self._log_created(created, step.id, deps)

        return replace(
            result,
            step_time=elapsed,
            response=response,
            assertions=assertions,
            variables_created=created,
        )

    def _assert(
        self,
        specs: List[AssertionSpec],
        response: HttpResponse,
        step_id: str,
        deps: ExecutionDeps,
    ) -> List[ResultAssertion]:
        results: List[ResultAssertion] = []
        for spec in specs or []:
            outcome = self._checker.check(spec, response)
            results.append(outcome)
            log = deps.logger.info if outcome.success else deps.logger.warning
            log(
                "assertion.result",
                step_id=step_id,
                source=outcome.source,
                property=outcome.property,
                comparison=outcome.comparison,
                expected=outcome.expected,
                actual=outcome.actual,
                success=outcome.success,
                message=outcome.message,
            )
        return results

    def _log_request(
        self,
        step: RequestStep,
        request: HttpRequest,
        used: List[ResultVariable],
        deps: ExecutionDeps,
    ) -> None:
        deps.logger.info("request.send", step_id=step.id, method=request.method, url=request.url)
        deps.logger.debug(
            "request.detail",
            step_id=step.id,
            headers=mask_dict(request.headers),
            body=request.body.decode("utf-8", errors="replace"),
        )
        if used:
            deps.logger.info(
                "request.variables_used",
                step_id=step.id,
                fields={v.key: mask_field(v.key, v.value) for v in used},
            )

    def _log_created(self, created: List[ResultVariable], step_id: str, deps: ExecutionDeps) -> None:
        for var in created:
            if var.ok:
                deps.logger.info("variable.created", step_id=step_id, name=var.key, value=var.value)
            else:
                deps.logger.warning("variable.failed", step_id=step_id, name=var.key, error=str(var.error))
