# infrastructure/scenario/base_loader.py
"""
Build Scenario domain objects from parsed scenario files (json / yaml).

    name: users
    steps:
      - step_type: request
        method: GET
        url: https://api.example.com/users/${user_id}
        headers: {Accept: [application/json]}
        assertions: [{source: response_status, comparison: equal_number, value: "200"}]
        variables: [{name: email, source: response_json, property: data.email}]
      - step_type: pause
        duration: 2
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Type, TypeVar

from domain.scenario import Scenario, ScenarioMeta
from domain.steps.assertion import AssertionSource, AssertionSpec, Comparison
from domain.steps.base import Step
from domain.steps.pause import PauseStep
from domain.steps.request import RequestStep
from domain.steps.variable import VariableSource, VariableSpec

E = TypeVar("E", bound=Enum)


class ScenarioLoadError(Exception):
    pass


class ScenarioLoaderBase(ABC):
    def load_from_file(self, path: str) -> Scenario:
        p = Path(path)
        if not p.exists():
            raise ScenarioLoadError(f"Scenario file not found: {path}")

        try:
            data = self._load_file(p)
        except ScenarioLoadError:
            raise
        except Exception as exc:
            raise ScenarioLoadError(f"Scenario file cannot be parsed: {path}: {exc}") from exc

        if data is None:
            raise ScenarioLoadError(f"Scenario file is empty: {path}")
        if not isinstance(data, dict):
            raise ScenarioLoadError(f"Scenario file is invalid: {path}")

        return self.load_from_dict(data)

    @abstractmethod
    def _load_file(self, path: Path) -> Any:
        ...

    def load_from_dict(self, data: Dict[str, Any]) -> Scenario:
        meta = ScenarioMeta(
            name=str(data.get("name", "")),
            description=str(data.get("description", "") or ""),
            version=str(data.get("version", "1")),
        )
        steps_data = data.get("steps", []) or []
        if not isinstance(steps_data, list):
            raise ScenarioLoadError("steps must be a list")
        steps = [self._load_step(i, s) for i, s in enumerate(steps_data)]
        return Scenario(meta=meta, steps=steps)

    def _load_step(self, index: int, data: Any) -> Step:
        if not isinstance(data, dict):
            raise ScenarioLoadError(f"step {index} must be a mapping")

        step_type = str(data.get("step_type", "")).lower()
        step_id = str(data.get("id") or f"step-{index + 1}")
        common = {"id": step_id, "name": str(data.get("name") or step_id)}

        if step_type == "pause":
            return self._load_pause_step(data, common)
        if step_type == "request":
            return self._load_request_step(data, common)

        raise ScenarioLoadError(f"{step_id}: {step_type or '<empty>'} is an invalid step_type")

    def _load_pause_step(self, data: Dict[str, Any], common: Dict[str, Any]) -> PauseStep:
        duration = data.get("duration", 0)
        if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
            raise ScenarioLoadError(f"{common['id']}: duration must be a non-negative integer, got {duration!r}")
        return PauseStep(duration=duration, **common)

    def _load_request_step(self, data: Dict[str, Any], common: Dict[str, Any]) -> RequestStep:
        url = data.get("url")
        if not url:
            raise ScenarioLoadError(f"{common['id']}: request step needs an url")

        return RequestStep(
            method=str(data.get("method", "GET")).upper(),
            url=str(url),
            headers=self._load_headers(data.get("headers") or {}, common["id"]),
            body=self._load_body(data.get("body")),
            assertions=[self._load_assertion(a, common["id"]) for a in _entries(data, "assertions", common["id"])],
            variables=[self._load_variable(v, common["id"]) for v in _entries(data, "variables", common["id"])],
            **common,
        )

    def _load_headers(self, data: Any, step_id: str) -> Dict[str, List[str]]:
        if not isinstance(data, dict):
            raise ScenarioLoadError(f"{step_id}: headers must be a mapping")
        headers: Dict[str, List[str]] = {}
        for key, value in data.items():
            values = value if isinstance(value, list) else [value]
            if any(isinstance(v, (dict, list)) for v in values):
                raise ScenarioLoadError(f"{step_id}: header {key} must be a string or a list of strings")
            if isinstance(value, list):
                headers[str(key)] = [str(v) for v in value]
            elif value is None:
                headers[str(key)] = []
            else:
                headers[str(key)] = [str(value)]
        return headers

    def _load_body(self, body: Any) -> str:
        if body is None:
            return ""
        if isinstance(body, str):
            return body
        # inline object in a yaml / json scenario
        return json.dumps(body, ensure_ascii=False)

    def _load_assertion(self, data: Dict[str, Any], step_id: str) -> AssertionSpec:
        if not isinstance(data, dict):
            raise ScenarioLoadError(f"{step_id}: assertion must be a mapping, got {data!r}")
        value = data.get("value", "")
        return AssertionSpec(
            source=_enum(AssertionSource, data.get("source"), step_id, "assertion source"),
            comparison=_enum(Comparison, data.get("comparison"), step_id, "comparison"),
            property=str(data.get("property", "") or ""),
            value="" if value is None else _scalar_text(value),
        )

    def _load_variable(self, data: Dict[str, Any], step_id: str) -> VariableSpec:
        if not isinstance(data, dict):
            raise ScenarioLoadError(f"{step_id}: variable must be a mapping, got {data!r}")
        return VariableSpec(
            name=str(data.get("name", "") or ""),
            source=_enum(VariableSource, data.get("source"), step_id, "variable source"),
            property=str(data.get("property", "") or ""),
        )


def _entries(data: Dict[str, Any], key: str, step_id: str) -> List[Any]:
    entries = data.get(key) or []
    if not isinstance(entries, list):
        raise ScenarioLoadError(f"{step_id}: {key} must be a list")
    return entries


def _enum(enum_type: Type[E], raw: Any, step_id: str, label: str) -> E:
    try:
        return enum_type(str(raw).lower())
    except ValueError:
        raise ScenarioLoadError(f"{step_id}: unknown {label}: {raw!r}") from None


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
