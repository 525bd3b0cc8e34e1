"""
Core - Domain logic and ports

This package contains:
- domain.py: Pure domain models
- errors.py: Typed error taxonomy
- extract.py: Tolerant field extraction from untyped payloads
- levelstring.py: Level string decoding
- filters.py: Local filter predicate
- ports.py: Port interfaces (abstractions for external dependencies)
- services.py: Application services (use cases)
- pagination.py: Result sessions and page windows
"""
from .domain import (
    CandidateRef,
    DetailRecord,
    Difficulty,
    FilterSpec,
    LengthCategory,
    Match,
    SearchReport,
)
from .errors import (
    DetailFetchFailed,
    InvalidFilter,
    LevelDataError,
    LevelFinderError,
    RemoteUnavailable,
    SessionAccessDenied,
    SessionError,
    SessionExpired,
)
from .filters import DEFAULT_SCALE, DifficultyScale, accepts, rejection_reason
from .pagination import NavAction, Page, PaginationSession, SessionStore, page_window
from .ports import LevelIndex
from .services import FindLevelsService

__all__ = [
    # Domain models
    "CandidateRef",
    "DetailRecord",
    "Difficulty",
    "FilterSpec",
    "LengthCategory",
    "Match",
    "SearchReport",
    # Errors
    "LevelFinderError",
    "RemoteUnavailable",
    "DetailFetchFailed",
    "LevelDataError",
    "InvalidFilter",
    "SessionError",
    "SessionAccessDenied",
    "SessionExpired",
    # Filtering
    "DifficultyScale",
    "DEFAULT_SCALE",
    "accepts",
    "rejection_reason",
    # Pagination
    "NavAction",
    "Page",
    "PaginationSession",
    "SessionStore",
    "page_window",
    # Ports
    "LevelIndex",
    # Services
    "FindLevelsService",
]
