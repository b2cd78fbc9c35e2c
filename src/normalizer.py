"""Turn free-form oracle text into a validated set of 1-based group indices.

Everything here is pure: no I/O, never raises on bad model output.
"""
import json
import logging
import math
import re
from typing import Any

from src.constants import (
    INDEX_ARRAY_PATTERN,
    NUMERIC_STRING_PATTERN,
    MSG_DIRECT_PARSE_FAILED,
    MSG_FALLBACK_PARSE_FAILED,
    MSG_NO_ARRAY_FOUND,
)

logger = logging.getLogger(__name__)

_INDEX_ARRAY_RE = re.compile(INDEX_ARRAY_PATTERN, re.ASCII)
_NUMERIC_RE = re.compile(NUMERIC_STRING_PATTERN, re.ASCII)


def _coerce_number(text: str) -> int | float | None:
    stripped = text.strip()
    if _NUMERIC_RE.fullmatch(stripped) is None:
        return None
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        return float(stripped)
    except ValueError:
        return None


def _as_index(value: Any) -> int | None:
    """Return value as an int when it is a whole number, else None."""
    match value:
        case bool():
            return None
        case int():
            return value
        case float() if math.isfinite(value) and value.is_integer():
            return int(value)
        case str():
            return _as_index(_coerce_number(value))
        case _:
            return None


def normalize_indices(raw: Any, group_count: int) -> list[int]:
    """Clean the oracle's index list against the number of group photos.

    Non-list input fails open to an empty list. Numeric strings are coerced,
    anything that is not a whole number or falls outside ``[1, group_count]``
    is dropped, and the survivors are deduplicated and sorted.
    """
    items = raw if isinstance(raw, (list, tuple)) else []
    indices = filter(lambda n: n is not None and 1 <= n <= group_count, map(_as_index, items))
    return sorted(set(indices))


def parse_model_output(text: Any) -> Any:
    """Best-effort structured parse of raw model text.

    Tries the whole text as JSON first, then the first bracketed
    digits/commas/whitespace run. Returns None when both fail.
    """
    if not isinstance(text, str):
        return None
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        logger.debug(MSG_DIRECT_PARSE_FAILED)

    match _INDEX_ARRAY_RE.search(text):
        case None:
            logger.debug(MSG_NO_ARRAY_FOUND)
            return None
        case found:
            try:
                return json.loads(found.group(0))
            except (ValueError, RecursionError) as exc:
                logger.warning(MSG_FALLBACK_PARSE_FAILED, exc)
                return None


def extract_match_indices(text: Any, group_count: int) -> list[int]:
    return normalize_indices(parse_model_output(text), group_count)
