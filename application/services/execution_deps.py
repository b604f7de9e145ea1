# application/services/execution_deps.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict

from application.ports.header_provider import HeaderProviderPort
from application.ports.logger import LoggerPort


@dataclass(frozen=True)
class NoHeaders:
    def get(self) -> Dict[str, str]:
        return {}


@dataclass(frozen=True)
class ExecutionDeps:
    logger: LoggerPort
    header_provider: HeaderProviderPort = field(default_factory=NoHeaders)

    def override_headers(self) -> Dict[str, str]:
        return dict(self.header_provider.get() or {})

    # copy with another logger (run_id binding)
    def with_logger(self, logger: LoggerPort) -> "ExecutionDeps":
        return replace(self, logger=logger)
