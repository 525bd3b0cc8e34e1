"""
Field Extractor - Tolerant field lookup over untyped level payloads

Upstream payloads differ between API versions and endpoints. Each logical
field has an ordered list of candidate key-paths (dotted paths walk nested
objects); the first present value that survives coercion wins. Adding a new
field-name variant is a table edit, not a code change.

Nothing in this module raises: an unresolvable field is None ("unknown").
"""
import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Optional, Union

from .domain import CandidateRef, DetailRecord
from .errors import LevelDataError
from .levelstring import object_ids_from_level_string

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Candidate key-paths per logical field, in lookup order
FIELD_PATHS: dict[str, tuple[str, ...]] = {
    "level_id": ("id", "levelID", "levelId", "level_id"),
    "name": ("name", "levelName", "level_name", "title"),
    "author": ("author", "creator.name", "creatorName", "creator", "username"),
    "object_count": (
        "objectCount",
        "object_count",
        "objects",
        "parsed.meta.objectCount",
        "stats.objects",
    ),
    "length_seconds": (
        "lengthSeconds",
        "length_seconds",
        "parsed.meta.lengthSeconds",
        "parsed.meta.length",
        "parsed.meta.realLength",
        "meta.lengthSeconds",
        "length.seconds",
        "length.raw",
        "length",
    ),
    "difficulty_code": ("difficultyCode", "difficulty_code", "difficulty.code", "diff", "difficulty"),
    "difficulty": ("difficulty.name", "difficulty", "difficultyFace"),
}

NUMERIC_FIELDS = frozenset({"object_count", "length_seconds", "difficulty_code"})

# Where an already-parsed object list may live
OBJECT_LIST_PATHS = ("objectIds", "object_ids", "parsed.data", "parsed.objects", "objectList")

# Where a raw (possibly compressed) level string may live
LEVEL_STRING_PATHS = ("levelString", "level_string", "data", "parsed.levelString")

_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)")

_MISSING = object()


def get_path(record: Any, path: str) -> Any:
    """Walk a dotted key-path; returns _MISSING when any step is absent"""
    current = record
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _finite(value: Number) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


def coerce_number(value: Any) -> Optional[Number]:
    """
    Numbers pass through, strings yield their first decimal number.

    NaN, infinities and values too large for a float are unknown (None).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if _finite(value) else None
    if isinstance(value, str):
        m = _NUMBER_RE.search(value)
        if m:
            number = float(m.group(1))
            return number if _finite(number) else None
    return None


def _coerce_text(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def extract(record: Any, field: str) -> Any:
    """
    Resolve a logical field out of an untyped record.

    Args:
        record: Decoded JSON payload (any shape)
        field: Key of FIELD_PATHS

    Returns:
        The coerced value, or None when no candidate path yields one
    """
    coerce = coerce_number if field in NUMERIC_FIELDS else _coerce_text
    for path in FIELD_PATHS.get(field, ()):
        try:
            raw = get_path(record, path)
        except TypeError:
            # Unhashable key lookups on odd containers
            continue
        if raw is _MISSING or raw is None:
            continue
        value = coerce(raw)
        if value is not None:
            return value
    return None


def _as_int(value: Optional[Number]) -> Optional[int]:
    return int(value) if value is not None else None


def _ids_from_list(items: list) -> list[int]:
    ids = []
    for item in items:
        if isinstance(item, Mapping):
            item = item.get("id")
        number = coerce_number(item)
        if number is not None:
            ids.append(int(number))
    return ids


def extract_object_ids(record: Any) -> Optional[list[int]]:
    """Constituent object type ids, or None when no object list is obtainable"""
    for path in OBJECT_LIST_PATHS:
        items = get_path(record, path)
        if isinstance(items, list):
            return _ids_from_list(items)

    for path in LEVEL_STRING_PATHS:
        data = get_path(record, path)
        if not isinstance(data, str) or not data.strip():
            continue
        try:
            return object_ids_from_level_string(data)
        except LevelDataError as e:
            logger.debug(f"Ignoring undecodable level string at '{path}': {e}")
    return None


def normalize_candidate(item: Any) -> Optional[CandidateRef]:
    """Turn one search result item into a CandidateRef (None if it has no id)"""
    if isinstance(item, (int, str)) and not isinstance(item, bool):
        level_id = _coerce_text(item)
        return CandidateRef(level_id=level_id) if level_id else None

    level_id = extract(item, "level_id")
    if level_id is None:
        return None
    return CandidateRef(
        level_id=level_id,
        name=extract(item, "name"),
        author=extract(item, "author"),
        raw=dict(item) if isinstance(item, Mapping) else {},
    )


def normalize_detail(level_id: str, raw: Any) -> DetailRecord:
    """
    Build a DetailRecord from a detail payload.

    A decoded object list is authoritative for the object count (metadata
    counts are capped upstream); otherwise the metadata count is used.
    """
    object_ids = extract_object_ids(raw)
    if object_ids is not None:
        object_count = len(object_ids)
    else:
        object_count = _as_int(extract(raw, "object_count"))

    length = extract(raw, "length_seconds")

    return DetailRecord(
        level_id=str(level_id),
        name=extract(raw, "name"),
        author=extract(raw, "author"),
        object_count=object_count,
        length_seconds=float(length) if length is not None else None,
        difficulty_code=_as_int(extract(raw, "difficulty_code")),
        difficulty_text=extract(raw, "difficulty"),
        object_ids=tuple(object_ids) if object_ids is not None else None,
        raw=dict(raw) if isinstance(raw, Mapping) else {},
    )
