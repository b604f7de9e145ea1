# application/ports/header_provider.py
from __future__ import annotations

from typing import Dict, Protocol


class HeaderProviderPort(Protocol):
    def get(self) -> Dict[str, str]:
        """Override headers, applied on top of the step headers."""
        ...
