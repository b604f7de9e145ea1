# application/ports/http_client.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode


@dataclass(frozen=True)
class HttpRequest:
    method: str
    base_url: str
    headers: Dict[str, str] = field(default_factory=dict)
    query_params: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def url(self) -> str:
        if not self.query_params:
            return self.base_url
        return f"{self.base_url}?{urlencode(self.query_params)}"


@dataclass(frozen=True)
class HttpResponse:
    status: int
    headers: Dict[str, List[str]] = field(default_factory=dict)
    text: str = ""
    body: Any = None      # parsed JSON tree, None when the payload is not JSON
    elapsed: float = 0.0  # seconds

    def header_values(self, name: str) -> Optional[List[str]]:
        if name in self.headers:
            return self.headers[name]
        lowered = name.lower()
        for key, values in self.headers.items():
            if key.lower() == lowered:
                return values
        return None


class HttpClientPort(ABC):
    @abstractmethod
    def send(self, request: HttpRequest) -> HttpResponse:
        """Raises TransportError on network / IO failures."""
        ...
