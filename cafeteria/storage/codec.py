from __future__ import annotations

import json
import re
from datetime import date, datetime
from typing import Any

# Same shape the stored documents use for timestamps: 2025-09-15T00:00:00...
_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")


def _json_default(o: Any) -> Any:
    if isinstance(o, (date, datetime)):
        return o.isoformat()
    raise TypeError(f"Object of type {o.__class__.__name__} is not JSON serializable")


def _revive(value: Any) -> Any:
    if isinstance(value, str) and _TIMESTAMP_RE.match(value):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    if isinstance(value, list):
        return [_revive(v) for v in value]
    if isinstance(value, dict):
        return {k: _revive(v) for k, v in value.items()}
    return value


def dumps(data: Any, *, indent: int | None = 2) -> str:
    return json.dumps(data, ensure_ascii=False, indent=indent, default=_json_default)


def loads(text: str, *, revive: bool = True) -> Any:
    """Parse JSON; with revive, ISO timestamp strings come back as ``datetime``."""
    data = json.loads(text)
    return _revive(data) if revive else data
