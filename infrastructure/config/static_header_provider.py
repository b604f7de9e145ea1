# infrastructure/config/static_header_provider.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class StaticHeaderProvider:
    headers: Dict[str, str] = field(default_factory=dict)

    def get(self) -> Dict[str, str]:
        return dict(self.headers)
