# application/services/request_builder.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from application.exceptions import RequestBuildError
from application.outcome import ResultVariable, VariableKind
from application.ports.http_client import HttpRequest
from application.services.url_decomposer import UrlDecomposeError, decompose_url
from domain.steps.request import RequestStep
from domain.variable_store import VariableStore


@dataclass(frozen=True)
class BuiltRequest:
    request: HttpRequest
    variables_used: List[ResultVariable]


class RequestBuilder:
    """
    Build the concrete HTTP request of a RequestStep.

    - URL is split into base URL + query parameters before patching
    - only the first value of each step header is sent
    - override headers (configuration) win over step headers of the same name
    - body, URL, each param and each header are patched independently,
      every field that changed gets one "used" record, in that order
    """

    def build(
        self,
        step: RequestStep,
        store: VariableStore,
        override_headers: Optional[Dict[str, str]] = None,
    ) -> BuiltRequest:
        try:
            base_url, query_params = decompose_url(step.url)
        except UrlDecomposeError as exc:
            raise RequestBuildError(f"cannot build request: {exc}") from exc

        headers: Dict[str, str] = {}
        for key, values in (step.headers or {}).items():
            if values:
                headers[key] = values[0]
        for key, value in (override_headers or {}).items():
            headers[key] = value

        used: List[ResultVariable] = []
        body = self._patch(step.body or "", "body", store, used)
        url = self._patch(base_url, "URL", store, used)
        params = {
            key: self._patch(value, f"params[{key}]", store, used)
            for key, value in query_params.items()
        }
        patched_headers = {
            key: self._patch(value, f"headers.{key}", store, used)
            for key, value in headers.items()
        }

        request = HttpRequest(
            method=(step.method or "GET").upper(),
            base_url=url,
            headers=patched_headers,
            query_params=params,
            body=body.encode("utf-8"),
        )
        return BuiltRequest(request=request, variables_used=used)

    def _patch(self, initial: str, field_name: str, store: VariableStore, used: List[ResultVariable]) -> str:
        patched = store.patch(initial)
        if patched != initial:
            used.append(ResultVariable(key=field_name, kind=VariableKind.USED, value=patched))
        return patched
