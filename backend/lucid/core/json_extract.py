"""JSON Extraction — recover a balanced JSON object/array from raw model output.

Invariants:
    - extract_json never raises and never returns an empty string
    - "{}" is returned when no JSON-like content exists
    - Only the chosen open/close pair is balanced; brackets inside strings are ignored
    - All functions are pure (no IO, no async)

Design Decisions:
    - Balanced scan over "first { to last }": a stray brace inside a string
      value must not end the span early
    - Truncated output falls back to the last closing char, then to end-of-text;
      the caller's parse decides whether the result is usable
"""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

EMPTY_OBJECT = "{}"

_LEADING_JSON_FENCE = re.compile(r"^```json\s*", re.IGNORECASE)
_LEADING_FENCE = re.compile(r"^```\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")


def strip_code_fence(text: str) -> str:
    """Drop a leading ```json / ``` marker and a trailing ``` marker."""
    text = _LEADING_JSON_FENCE.sub("", text, count=1)
    text = _LEADING_FENCE.sub("", text, count=1)
    return _TRAILING_FENCE.sub("", text, count=1)


def extract_json(raw: str | None) -> str:
    """Return the best-effort JSON object/array span found in raw.

    The result is not guaranteed to parse; callers must still handle
    json.JSONDecodeError (see parse_json_or).
    """
    if not raw:
        return EMPTY_OBJECT
    cleaned = strip_code_fence(raw.strip())

    first_brace = cleaned.find("{")
    first_bracket = cleaned.find("[")
    if first_brace == -1 and first_bracket == -1:
        return EMPTY_OBJECT

    if first_bracket == -1 or (first_brace != -1 and first_brace < first_bracket):
        start, open_char, close_char = first_brace, "{", "}"
    else:
        start, open_char, close_char = first_bracket, "[", "]"

    end = _find_matching_close(cleaned, start, open_char, close_char)
    if end != -1:
        return cleaned[start:end + 1]

    # Truncated: last closing char, else everything from the opening char
    last = cleaned.rfind(close_char)
    if last > start:
        return cleaned[start:last + 1]
    return cleaned[start:]


def parse_json_or(raw: str | None, default: Any) -> Any:
    """Extract and parse JSON from raw; return default if it doesn't parse."""
    cleaned = extract_json(raw)
    try:
        return json.loads(cleaned)
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning(
            f"Model output is not valid JSON: {e}",
            extra={"preview": cleaned[:200]},
        )
        return default


def _find_matching_close(
    text: str, start: int, open_char: str, close_char: str,
) -> int:
    """Index of the close char balancing text[start], or -1."""
    balance = 0
    in_string = False
    escape = False
    for i in range(start, len(text)):
        char = text[i]
        if escape:
            escape = False
            continue
        if char == "\\":
            escape = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if char == open_char:
            balance += 1
        elif char == close_char:
            balance -= 1
            if balance == 0:
                return i
    return -1
