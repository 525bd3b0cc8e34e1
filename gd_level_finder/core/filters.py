"""
Filter Predicate - Local re-filtering of level detail

The remote search cannot express object counts, required object ids or
exact durations, so every candidate's detail record is checked here.

Missing-data policy per check:
- object count: unknown passes (cannot verify, do not reject)
- required object ids: no object list rejects
- exact length: unknown rejects
- difficulty: neither code nor text passes
"""
from dataclasses import dataclass, field
from typing import Optional

from .domain import Difficulty, DetailRecord, FilterSpec

# Absorbs rounding in upstream timing metadata
LENGTH_TOLERANCE = 0.3


def _default_codes() -> dict[str, int]:
    return {"easy": 1, "normal": 2, "hard": 3, "harder": 4, "insane": 5}


@dataclass(frozen=True)
class DifficultyScale:
    """
    Mapping from requested difficulty labels to the remote numeric scale.

    The remote encoding is best-effort; these values are configuration and
    can be replaced without touching the predicate.
    """
    codes: dict[str, int] = field(default_factory=_default_codes)
    demon_threshold: int = 6  # any code >= threshold is a demon
    demon_marker: str = "demon"


DEFAULT_SCALE = DifficultyScale()


def difficulty_matches(
    requested: Difficulty,
    code: Optional[int],
    text: Optional[str],
    scale: DifficultyScale = DEFAULT_SCALE
) -> Optional[bool]:
    """True/False when decidable, None when neither code nor text is known"""
    is_demon = requested is Difficulty.DEMON

    if code is not None:
        if is_demon:
            return code >= scale.demon_threshold
        return code == scale.codes.get(requested.value)

    if text:
        lowered = text.lower()
        if is_demon:
            return scale.demon_marker in lowered
        if scale.demon_marker in lowered:
            return False
        words = lowered.replace("-", " ").split()
        return bool(words) and words[0] == requested.value

    return None


def rejection_reason(
    spec: FilterSpec,
    record: DetailRecord,
    scale: DifficultyScale = DEFAULT_SCALE
) -> Optional[str]:
    """
    Check a detail record against the active filters.

    Returns:
        None when the record is accepted, otherwise why it was rejected
    """
    # 1. Object count (permissive when unknown)
    count = record.object_count
    if count is not None:
        if spec.exact_objects is not None:
            if count != spec.exact_objects:
                return f"object count {count} != {spec.exact_objects}"
        else:
            if count < spec.min_objects:
                return f"object count {count} < {spec.min_objects}"
            if spec.max_objects is not None and count > spec.max_objects:
                return f"object count {count} > {spec.max_objects}"

    # 2. Required object ids (strict)
    if spec.required_object_ids:
        if record.object_ids is None:
            return "no object list to check required ids"
        missing = spec.required_object_ids.difference(record.object_ids)
        if missing:
            return f"missing object ids {sorted(missing)}"

    # 3. Exact length (strict)
    if spec.exact_length_seconds is not None:
        if record.length_seconds is None:
            return "length unknown"
        if abs(record.length_seconds - spec.exact_length_seconds) > LENGTH_TOLERANCE:
            return f"length {record.length_seconds}s != {spec.exact_length_seconds}s"

    # 4. Difficulty (permissive when unverifiable)
    if spec.difficulty_active:
        decided = difficulty_matches(spec.difficulty, record.difficulty_code, record.difficulty_text, scale)
        if decided is False:
            return f"difficulty is not {spec.difficulty.value}"

    return None


def accepts(spec: FilterSpec, record: DetailRecord, scale: DifficultyScale = DEFAULT_SCALE) -> bool:
    """Keep/reject decision for one detail record"""
    return rejection_reason(spec, record, scale) is None
