# infrastructure/config/settings.py
from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Tuple

from dotenv import dotenv_values

DEFAULT_ENV_PATH = Path(__file__).parent.parent.parent / ".env"
ENV_PREFIX = "API_SCENARIO_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class SettingsError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    timeout_sec: float = 20
    log_level: str = "INFO"
    headers: Dict[str, str] = field(default_factory=dict)

    def with_headers(self, headers: Mapping[str, str]) -> "Settings":
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)


def load_settings(
    env_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Settings from the .env file and the process environment.
    Values of the .env file win over the environment.

      API_SCENARIO_TIMEOUT_SEC  transport timeout (default 20)
      API_SCENARIO_LOG_LEVEL    DEBUG / INFO / WARNING / ERROR (default INFO)
      API_SCENARIO_HEADERS      JSON object of override headers
    """
    path = env_path or DEFAULT_ENV_PATH
    values: Dict[str, Optional[str]] = dict(dotenv_values(path)) if path.exists() else {}
    for key, value in (os.environ if environ is None else environ).items():
        if key not in values:
            values[key] = value

    settings = Settings()

    raw_timeout = values.get(ENV_PREFIX + "TIMEOUT_SEC")
    if raw_timeout:
        settings = replace(settings, timeout_sec=parse_timeout(raw_timeout, ENV_PREFIX + "TIMEOUT_SEC"))

    raw_level = values.get(ENV_PREFIX + "LOG_LEVEL")
    if raw_level:
        settings = replace(settings, log_level=parse_log_level(raw_level, ENV_PREFIX + "LOG_LEVEL"))

    raw_headers = values.get(ENV_PREFIX + "HEADERS")
    if raw_headers:
        settings = replace(settings, headers=_parse_headers_json(raw_headers))

    return settings


def parse_header_flags(flags: Iterable[str]) -> Dict[str, str]:
    """["Authorization: Bearer ${token}"] -> {"Authorization": "Bearer ${token}"}"""
    headers: Dict[str, str] = {}
    for flag in flags or []:
        name, sep, value = flag.partition(":")
        if not sep or not name.strip():
            raise SettingsError(f"header must look like 'Name: value', got {flag!r}")
        headers[name.strip()] = value.strip()
    return headers


def parse_var_flags(flags: Iterable[str]) -> Dict[str, str]:
    """["tenant=acme"] -> {"tenant": "acme"}"""
    variables: Dict[str, str] = {}
    for flag in flags or []:
        name, value = _split_pair(flag, "=")
        variables[name] = value
    return variables


def _split_pair(flag: str, sep: str) -> Tuple[str, str]:
    name, found, value = flag.partition(sep)
    if not found or not name.strip():
        raise SettingsError(f"variable must look like 'name{sep}value', got {flag!r}")
    return name.strip(), value


def parse_timeout(raw: str, label: str = "timeout") -> float:
    try:
        timeout = float(raw)
    except ValueError:
        raise SettingsError(f"{label} must be a number, got {raw!r}") from None
    if not math.isfinite(timeout) or timeout <= 0:
        raise SettingsError(f"{label} must be a positive number, got {raw!r}")
    return timeout


def parse_log_level(raw: str, label: str = "log level") -> str:
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise SettingsError(f"{label} must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return level


def _parse_headers_json(raw: str) -> Dict[str, str]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SettingsError(f"{ENV_PREFIX}HEADERS is not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise SettingsError(f"{ENV_PREFIX}HEADERS must be a JSON object")
    return {str(k): "" if v is None else str(v) for k, v in parsed.items()}
