# infrastructure/scenario/__init__.py
from pathlib import Path
from typing import Union

from domain.scenario import Scenario
from infrastructure.scenario.base_loader import ScenarioLoadError, ScenarioLoaderBase
from infrastructure.scenario.json_loader import JsonScenarioLoader
from infrastructure.scenario.loader_registry import ScenarioLoaderRegistry
from infrastructure.scenario.yaml_loader import YamlScenarioLoader


def load_scenario(path: Union[str, Path]) -> Scenario:
    return ScenarioLoaderRegistry().load(Path(path))


__all__ = [
    "ScenarioLoadError",
    "ScenarioLoaderBase",
    "ScenarioLoaderRegistry",
    "YamlScenarioLoader",
    "JsonScenarioLoader",
    "load_scenario",
]
