# infrastructure/scenario/json_loader.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from infrastructure.scenario.base_loader import ScenarioLoadError, ScenarioLoaderBase


class JsonScenarioLoader(ScenarioLoaderBase):
    def _load_file(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as handle:
            try:
                return json.load(handle)
            except json.JSONDecodeError as exc:
                raise ScenarioLoadError(
                    f"Invalid JSON in {path} (line {exc.lineno}, column {exc.colno}): {exc.msg}"
                ) from exc
