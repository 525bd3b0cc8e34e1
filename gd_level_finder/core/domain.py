"""
Domain Models - Pure business entities

No external dependencies. These represent the core business concepts:
the parsed command filters, remote search candidates, normalized level
detail and the matches that survive filtering.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .errors import InvalidFilter

# Candidates examined per command
MAX_CHECK = 100
DEFAULT_CHECK_LIMIT = 30


class LengthCategory(str, Enum):
    """Remote-side length bucket"""
    SHORT = "short"
    NORMAL = "normal"
    LONG = "long"
    XL = "xl"


class Difficulty(str, Enum):
    """Requested difficulty; AUTO disables the filter"""
    AUTO = "auto"
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    HARDER = "harder"
    INSANE = "insane"
    DEMON = "demon"


def clamp_check_limit(limit: Optional[int]) -> int:
    """Clamp the number of candidates to examine into [1, MAX_CHECK]"""
    if limit is None:
        return DEFAULT_CHECK_LIMIT
    return min(max(limit, 1), MAX_CHECK)


def parse_id_list(raw: Optional[str]) -> frozenset[int]:
    """Parse a comma-separated object id list ("1, 57,100")"""
    if not raw:
        return frozenset()

    ids = set()
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            value = int(token)
        except ValueError:
            raise InvalidFilter(f"Object id '{token}' is not an integer") from None
        if value < 0:
            raise InvalidFilter(f"Object id {value} must not be negative")
        ids.add(value)
    return frozenset(ids)


def _parse_enum(enum_type, raw: Optional[str], option: str):
    if raw is None or raw == "":
        return None
    try:
        return enum_type(raw.strip().lower())
    except ValueError:
        choices = "|".join(member.value for member in enum_type)
        raise InvalidFilter(f"{option} must be one of {choices}, got '{raw}'") from None


@dataclass(frozen=True)
class FilterSpec:
    """Parsed, validated /findlevel options"""
    query: Optional[str] = None
    length_category: Optional[LengthCategory] = None
    min_objects: int = 0
    max_objects: Optional[int] = None  # None = no upper bound
    exact_objects: Optional[int] = None  # overrides min/max when set
    required_object_ids: frozenset[int] = frozenset()
    exact_length_seconds: Optional[float] = None
    difficulty: Difficulty = Difficulty.AUTO
    check_limit: int = DEFAULT_CHECK_LIMIT

    def __post_init__(self):
        for name in ("min_objects", "max_objects", "exact_objects", "exact_length_seconds"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise InvalidFilter(f"{name} must not be negative")

        if self.exact_objects is None and self.max_objects is not None and self.min_objects > self.max_objects:
            raise InvalidFilter(
                f"min_objects ({self.min_objects}) is greater than max_objects ({self.max_objects})"
            )

        if not 1 <= self.check_limit <= MAX_CHECK:
            raise InvalidFilter(f"check_limit must be within 1..{MAX_CHECK}")

    @classmethod
    def from_options(
        cls,
        query: Optional[str] = None,
        lengthcategory: Optional[str] = None,
        exactlengthseconds: Optional[float] = None,
        minobjects: Optional[int] = None,
        maxobjects: Optional[int] = None,
        exactobjects: Optional[int] = None,
        requiredobjectids: Optional[str] = None,
        difficulty: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> "FilterSpec":
        """
        Build a FilterSpec from raw command options.

        Option names follow the /findlevel command surface. Missing options
        take their defaults; `limit` is clamped rather than rejected.

        Raises:
            InvalidFilter: an option cannot be parsed or violates a bound
        """
        query = query.strip() if query else None
        return cls(
            query=query or None,
            length_category=_parse_enum(LengthCategory, lengthcategory, "lengthcategory"),
            min_objects=minobjects if minobjects is not None else 0,
            max_objects=maxobjects,
            exact_objects=exactobjects,
            required_object_ids=parse_id_list(requiredobjectids),
            exact_length_seconds=float(exactlengthseconds) if exactlengthseconds is not None else None,
            difficulty=_parse_enum(Difficulty, difficulty, "difficulty") or Difficulty.AUTO,
            check_limit=clamp_check_limit(limit),
        )

    @property
    def difficulty_active(self) -> bool:
        return self.difficulty is not Difficulty.AUTO


@dataclass(frozen=True)
class CandidateRef:
    """A remote search result item before its detail is fetched"""
    level_id: str
    name: Optional[str] = None
    author: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class DetailRecord:
    """Normalized full detail for one level"""
    level_id: str
    name: Optional[str]
    author: Optional[str]
    object_count: Optional[int]  # None = unknown
    length_seconds: Optional[float]
    difficulty_code: Optional[int]
    difficulty_text: Optional[str]
    object_ids: Optional[tuple[int, ...]]  # None = no object list obtainable
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class Match:
    """A detail record that passed every active filter"""
    level_id: str
    display_name: str
    author: str
    object_count: Optional[int]
    length_seconds: Optional[float]
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_record(cls, record: DetailRecord) -> "Match":
        return cls(
            level_id=record.level_id,
            display_name=record.name or "Unknown",
            author=record.author or "Unknown",
            object_count=record.object_count,
            length_seconds=record.length_seconds,
            raw=record.raw,
        )


@dataclass
class SearchReport:
    """Outcome of one pipeline run"""
    spec: FilterSpec
    matches: list[Match]
    examined: int = 0
    rejected: int = 0
    skipped: int = 0
    error: Optional[str] = None  # set when the remote index was unavailable

    @property
    def remote_ok(self) -> bool:
        return self.error is None
