"""Value Sanitization — coerce loosely-typed model output fields into plain strings.

Invariants:
    - sanitize_string always returns str (never None); True renders as "true"
    - Dicts resolve to the first truthy well-known text field, else compact JSON
"""

import json
from typing import Any

_TEXT_FIELDS = (
    "text", "content", "value", "name", "title", "description", "message",
)


def sanitize_string(val: Any) -> str:
    """Models sometimes return {"text": ...} or numbers where a string was asked for."""
    if not val:
        return ""
    if isinstance(val, str):
        return val
    if isinstance(val, bool):
        return "true"
    if isinstance(val, (int, float)):
        return str(val)
    if isinstance(val, dict):
        for key in _TEXT_FIELDS:
            if val.get(key):
                return sanitize_string(val[key])
        return json.dumps(val, ensure_ascii=False, separators=(",", ":"))
    if isinstance(val, list):
        return json.dumps(val, ensure_ascii=False, separators=(",", ":"))
    return str(val)


def sanitize_list(val: Any) -> list[str]:
    """Coerce a list-ish field into a list of strings; scalars become one item."""
    if not val:
        return []
    if isinstance(val, list):
        return [s for s in (sanitize_string(v) for v in val) if s]
    return [sanitize_string(val)]
