# application/services/json_path.py
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, List


class JsonQueryError(Exception):
    pass


def to_path(key: str) -> List[str]:
    """
    Convert a property key into path segments.
      user.age        -> ["user", "age"]
      items[0].id     -> ["items", "0", "id"]
      [1].name        -> ["1", "name"]
      $.data.id       -> ["data", "id"]
    """
    if key is None:
        return []
    s = key.strip()
    if s.startswith("$"):
        s = s[1:]
    s = s.replace("[", ".").replace("]", "")
    return [part for part in s.split(".") if part != ""]


def query(body: Any, path: List[str]) -> Any:
    cur = body
    for i, part in enumerate(path):
        where = ".".join(path[: i + 1])
        if isinstance(cur, dict):
            if part not in cur:
                raise JsonQueryError(f"key not found: {where}")
            cur = cur[part]
        elif isinstance(cur, list):
            if not part.isdigit():
                raise JsonQueryError(f"index is not a number: {where}")
            idx = int(part)
            if idx >= len(cur):
                raise JsonQueryError(f"index out of range: {where} (len={len(cur)})")
            cur = cur[idx]
        else:
            raise JsonQueryError(f"cannot go into {_type_name(cur)} at: {where}")
    return cur


class LeafKind(str, Enum):
    STRING = "string"
    BOOL = "bool"
    NUMBER = "number"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class JsonLeaf:
    kind: LeafKind
    value: Any

    @classmethod
    def of(cls, value: Any) -> "JsonLeaf":
        # bool before number: bool is an int subclass
        if isinstance(value, str):
            return cls(LeafKind.STRING, value)
        if isinstance(value, bool):
            return cls(LeafKind.BOOL, value)
        if isinstance(value, int) or (isinstance(value, float) and math.isfinite(value)):
            return cls(LeafKind.NUMBER, value)
        # NaN / Infinity (accepted by json.loads) have no portable text form
        return cls(LeafKind.UNSUPPORTED, value)

    @property
    def type_name(self) -> str:
        return _type_name(self.value)

    def render(self) -> str:
        if self.kind is LeafKind.STRING:
            return self.value
        if self.kind is LeafKind.BOOL:
            return "true" if self.value else "false"
        if self.kind is LeafKind.NUMBER:
            return format_number(self.value)
        raise JsonQueryError(f"type {self.type_name} not valid type to export as a variable")


def format_number(value: float) -> str:
    """Shortest round-trippable form: 30.0 -> "30", 0.1 -> "0.1", 1e21 -> "1e+21"."""
    if isinstance(value, int):
        return str(value)
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, float) and not math.isfinite(value):
        return "non-finite number"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__
