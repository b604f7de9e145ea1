# application/services/redactor.py
from __future__ import annotations

from typing import Any, Dict

SENSITIVE_KEYS = {"password", "passwd", "pass", "authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key"}


def mask_value(key: str, value: Any) -> Any:
    if key.lower() in SENSITIVE_KEYS and value is not None:
        return "********"
    return value


def mask_dict(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: mask_value(k, v) for k, v in d.items()}


def mask_field(field_name: str, value: Any) -> Any:
    """field_name as recorded for patched fields: "headers.<key>", "params[<key>]", "body", "URL"."""
    if field_name.startswith("headers."):
        return mask_value(field_name[len("headers."):], value)
    if field_name.startswith("params[") and field_name.endswith("]"):
        return mask_value(field_name[len("params["):-1], value)
    return value
