# domain/variable_store.py
from __future__ import annotations

import re
from typing import Dict, Optional

# ${name} / ${ name }
PLACEHOLDER_PATTERN = re.compile(r"\$\{\s*([A-Za-z0-9_.\-]+)\s*\}")


class VariableStore:
    """
    Run-scoped variable table.

    - add: last write wins, there is no delete
    - patch: replaces ${name} placeholders in a single pass. Names missing
      from the store are left as-is in the output. Replacement text is never
      re-scanned.

    Not synchronized: one instance per scenario run.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = {}
        for name, value in (initial or {}).items():
            self.add(name, value)

    def add(self, name: str, value: str) -> None:
        self._values[name] = str(value)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(name, default)

    def patch(self, template: Optional[str]) -> str:
        if not template:
            return template or ""
        if "${" not in template:
            return template
        return PLACEHOLDER_PATTERN.sub(self._replace, template)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._values)

    def _replace(self, match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in self._values:
            return self._values[name]
        return match.group(0)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)
