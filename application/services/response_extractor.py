# application/services/response_extractor.py
from __future__ import annotations

import math
from typing import List, Optional

from application.exceptions import ExtractionError
from application.outcome import ResultVariable, VariableKind
from application.ports.http_client import HttpResponse
from application.services.json_path import JsonLeaf, JsonQueryError, LeafKind, query, to_path
from domain.steps.variable import VariableSource, VariableSpec
from domain.variable_store import VariableStore


def elapsed_ms(seconds: float) -> int:
    # half rounds up: 123.5ms -> 124
    return int(math.floor(seconds * 1000 + 0.5))


class ResponseExtractor:
    """
    Export values of a response into the variable store.

    One "created" record per declaration, in declaration order, except:
      - declarations without a name are skipped
      - response_header declarations whose header is missing or empty are
        skipped (only the first header value is exported)
    A failed response_json extraction stores nothing and records the error.
    """

    def extract(
        self,
        response: HttpResponse,
        variables: List[VariableSpec],
        store: VariableStore,
    ) -> List[ResultVariable]:
        result: List[ResultVariable] = []

        for variable in variables or []:
            if not variable.name:
                continue

            record = self._extract_one(response, variable)
            if record is None:
                continue
            if record.ok:
                store.add(variable.name, record.value)
            result.append(record)

        return result

    def _extract_one(self, response: HttpResponse, variable: VariableSpec) -> Optional[ResultVariable]:
        source = variable.source

        if source == VariableSource.RESPONSE_TIME:
            return self._created(variable, str(elapsed_ms(response.elapsed)))

        if source == VariableSource.RESPONSE_STATUS:
            return self._created(variable, str(response.status))

        if source == VariableSource.RESPONSE_HEADER:
            values = response.header_values(variable.property)
            if not values:
                return None
            return self._created(variable, values[0])

        if source == VariableSource.RESPONSE_JSON:
            return self._extract_json(response, variable)

        return self._failed(variable, f"unknown variable source: {source}")

    def _extract_json(self, response: HttpResponse, variable: VariableSpec) -> ResultVariable:
        try:
            value = query(response.body, to_path(variable.property))
        except JsonQueryError as exc:
            return self._failed(variable, str(exc))

        leaf = JsonLeaf.of(value)
        if leaf.kind is LeafKind.UNSUPPORTED:
            return self._failed(variable, f"type {leaf.type_name} not valid type to export as a variable")
        return self._created(variable, leaf.render())

    def _created(self, variable: VariableSpec, value: str) -> ResultVariable:
        return ResultVariable(key=variable.name, kind=VariableKind.CREATED, value=value)

    def _failed(self, variable: VariableSpec, message: str) -> ResultVariable:
        return ResultVariable(
            key=variable.name,
            kind=VariableKind.CREATED,
            error=ExtractionError(variable.name, message),
        )
