"""
Result Normalizer - Shared helpers for mapping raw source payloads

Every source has its own response envelope and field names. The helpers
here unwrap envelopes and read fields with explicit defaults, so a missing
or malformed field never leaks an undefined value into a SearchResult.
"""

import json
import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from thinksearch.models.search_schemas import SearchResult

DEFAULT_TITLE = "No title"
DEFAULT_SOURCE = "Unknown source"

_JSON_ARRAY = re.compile(r"\[.*\]", re.DOTALL)


def unwrap_items(payload: Any, *keys: str) -> List[Dict[str, Any]]:
    """Return the record list from a bare array, a wrapped object or a single object.

    ``keys`` are the wrapper names to try in order (defaults to "results").
    Non-dict entries are dropped.
    """
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict):
        for key in keys or ("results",):
            wrapped = payload.get(key)
            if isinstance(wrapped, list):
                items = wrapped
                break
        else:
            items = [payload] if payload else []
    else:
        items = []
    return [item for item in items if isinstance(item, dict)]


def text_field(raw: Dict[str, Any], *keys: str, default: str = "") -> str:
    """First non-empty string (or number) found under ``keys``."""
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
    return default


def optional_text(raw: Dict[str, Any], *keys: str) -> Optional[str]:
    return text_field(raw, *keys) or None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """ISO-8601 string (a trailing 'Z' included) to datetime, else None."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_duration(value: Any) -> Optional[int]:
    """Seconds from an int, a numeric string or a clock string like '1:02:03'."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value) if value >= 0 else None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    parts = text.split(":")
    if not all(part.isdigit() for part in parts) or len(parts) > 3:
        return None
    seconds = 0
    for part in parts:
        seconds = seconds * 60 + int(part)
    return seconds


def extract_json_array(text: str) -> List[Any]:
    """Parse the first JSON array embedded in free text (e.g. inside code fences)."""
    if not text:
        return []
    match = _JSON_ARRAY.search(text)
    if not match:
        return []
    parsed = json.loads(match.group(0))
    return parsed if isinstance(parsed, list) else []


def ensure_unique_ids(results: Iterable[SearchResult]) -> List[SearchResult]:
    """Re-key duplicate ids with a numeric suffix, keeping order."""
    seen = set()
    unique = []
    for result in results:
        candidate = result.id
        suffix = 2
        while candidate in seen:
            candidate = f"{result.id}-{suffix}"
            suffix += 1
        seen.add(candidate)
        unique.append(result if candidate == result.id else result.model_copy(update={"id": candidate}))
    return unique
