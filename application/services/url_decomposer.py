# application/services/url_decomposer.py
from __future__ import annotations

import re
from typing import Dict, Tuple
from urllib.parse import parse_qsl, urlsplit

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class UrlDecomposeError(ValueError):
    pass


def decompose_url(url: str) -> Tuple[str, Dict[str, str]]:
    """
    Split a (possibly templated) URL into base URL and query parameters.

    - fragment is dropped
    - repeated query keys keep the first value
    - a URL without scheme (e.g. "${base}/users") keeps its path as base
    """
    if url is None or not url.strip():
        raise UrlDecomposeError("empty URL")
    if _CONTROL_CHARS.search(url):
        raise UrlDecomposeError(f"invalid control character in URL: {url!r}")
    if _BAD_ESCAPE.search(url):
        raise UrlDecomposeError(f"invalid URL escape in: {url}")

    try:
        parts = urlsplit(url.strip())
    except ValueError as exc:
        raise UrlDecomposeError(f"cannot parse URL {url}: {exc}") from exc

    if parts.scheme and parts.netloc:
        base_url = f"{parts.scheme}://{parts.netloc}{parts.path}"
    elif parts.scheme:
        raise UrlDecomposeError(f"missing host in URL: {url}")
    else:
        base_url = parts.path

    params: Dict[str, str] = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        params.setdefault(key, value)

    return base_url, params
