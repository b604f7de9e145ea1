# application/ports/requests_client.py
from __future__ import annotations

from typing import Dict, List, Optional

import requests

from application.exceptions import TransportError
from application.ports.http_client import HttpClientPort, HttpRequest, HttpResponse


class RequestsSessionHttpClient(HttpClientPort):
    def __init__(
        self,
        timeout_sec: float = 20,
        session: Optional[requests.Session] = None,
    ):
        self._session = session or requests.Session()
        self._timeout = timeout_sec

    def send(self, request: HttpRequest) -> HttpResponse:
        # header values outside latin-1 and bad timeouts fail below requests
        try:
            resp = self._session.request(
                method=request.method.upper(),
                url=request.base_url,
                params=request.query_params or None,
                headers=request.headers,
                data=request.body or None,
                timeout=self._timeout,
            )
        except (requests.RequestException, UnicodeError, ValueError) as exc:
            raise TransportError(f"{request.method.upper()} {request.url} failed: {exc}") from exc

        return HttpResponse(
            status=resp.status_code,
            headers=_header_lists(resp),
            text=resp.text,
        )


def _header_lists(resp: requests.Response) -> Dict[str, List[str]]:
    # requests folds repeated headers into one comma separated value,
    # urllib3 keeps them apart
    raw_headers = getattr(resp.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return {key: list(raw_headers.getlist(key)) for key in raw_headers.keys()}
    return {key: [value] for key, value in resp.headers.items()}
