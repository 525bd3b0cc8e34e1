"""
Pagination - Per-command result sessions

A session holds an immutable match list, a page cursor, the requester's
identity and a hard expiry. Sessions live in an explicit store keyed by
session id; navigation events are (session_id, action) pairs.
"""
import logging
import math
import time
import uuid
from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .domain import Match
from .errors import SessionAccessDenied, SessionExpired

logger = logging.getLogger(__name__)

PAGE_SIZE = 5
SESSION_TTL_SECONDS = 120.0


class NavAction(str, Enum):
    PREV = "prev"
    NEXT = "next"


@dataclass(frozen=True)
class Page:
    """One rendered page window"""
    number: int  # 0-based
    total_pages: int
    items: tuple[Match, ...]
    page_size: int
    total_matches: int

    @property
    def is_empty(self) -> bool:
        return self.total_matches == 0

    @property
    def has_prev(self) -> bool:
        return self.number > 0

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages - 1

    @property
    def first_index(self) -> int:
        """1-based index of the first item shown (0 when empty)"""
        return self.number * self.page_size + 1 if self.items else 0

    @property
    def last_index(self) -> int:
        return self.number * self.page_size + len(self.items)


def count_pages(total: int, page_size: int = PAGE_SIZE) -> int:
    """max(1, ceil(total / page_size)); an empty list still has one page"""
    return max(1, math.ceil(total / page_size))


def page_window(matches: Sequence[Match], page: int, page_size: int = PAGE_SIZE) -> Page:
    """Slice out one page; `page` is clamped into range"""
    total_pages = count_pages(len(matches), page_size)
    page = min(max(page, 0), total_pages - 1)
    start = page * page_size
    return Page(
        number=page,
        total_pages=total_pages,
        items=tuple(matches[start:start + page_size]),
        page_size=page_size,
        total_matches=len(matches)
    )


class PaginationSession:
    """Cursor over one command's matches, owned by the requester"""

    def __init__(
        self,
        owner_id: Hashable,
        matches: Sequence[Match],
        page_size: int = PAGE_SIZE,
        ttl: float = SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        session_id: Optional[str] = None,
        query: Optional[str] = None
    ):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.session_id = session_id or uuid.uuid4().hex
        self.owner_id = owner_id
        self.matches = tuple(matches)
        self.page_size = page_size
        self.query = query
        self.current_page = 0
        self.ttl = ttl
        self._clock = clock
        self.expires_at = clock() + ttl
        self._closed = False

    @property
    def total_pages(self) -> int:
        return count_pages(len(self.matches), self.page_size)

    def is_expired(self) -> bool:
        return self._closed or self._clock() >= self.expires_at

    def remaining(self) -> float:
        """Seconds until expiry (0 once expired)"""
        if self._closed:
            return 0.0
        return max(0.0, self.expires_at - self._clock())

    def close(self) -> None:
        """Explicit end of life; no further transitions are accepted"""
        self._closed = True

    def current(self) -> Page:
        return page_window(self.matches, self.current_page, self.page_size)

    def navigate(self, actor_id: Hashable, action: NavAction) -> Page:
        """
        Move the cursor one page and return the new page.

        Raises:
            SessionExpired: lifetime elapsed or session closed
            SessionAccessDenied: actor is not the requester
        """
        if self.is_expired():
            raise SessionExpired(f"Session {self.session_id} has expired")
        if actor_id != self.owner_id:
            raise SessionAccessDenied(f"User {actor_id} does not own session {self.session_id}")

        if NavAction(action) is NavAction.PREV:
            self.current_page = max(0, self.current_page - 1)
        else:
            self.current_page = min(self.total_pages - 1, self.current_page + 1)
        return self.current()

    def prev(self, actor_id: Hashable) -> Page:
        return self.navigate(actor_id, NavAction.PREV)

    def next(self, actor_id: Hashable) -> Page:
        return self.navigate(actor_id, NavAction.NEXT)


class SessionStore:
    """Process-wide map of live sessions: create on command, remove on expiry or close"""

    def __init__(
        self,
        page_size: int = PAGE_SIZE,
        ttl: float = SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.page_size = page_size
        self.ttl = ttl
        self._clock = clock
        self._sessions: dict[str, PaginationSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self, owner_id: Hashable, matches: Sequence[Match], query: Optional[str] = None) -> PaginationSession:
        """Start a session for one command invocation"""
        self.purge_expired()
        session = PaginationSession(
            owner_id,
            matches,
            page_size=self.page_size,
            ttl=self.ttl,
            clock=self._clock,
            query=query
        )
        self._sessions[session.session_id] = session
        logger.debug(f"Session {session.session_id} created ({len(session.matches)} matches)")
        return session

    def get(self, session_id: str) -> PaginationSession:
        """
        Raises:
            SessionExpired: unknown (already removed) session
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionExpired(f"Session {session_id} is not active")
        return session

    def navigate(self, session_id: str, actor_id: Hashable, action: NavAction) -> Page:
        """Dispatch one (session_id, action) navigation event"""
        session = self.get(session_id)
        try:
            return session.navigate(actor_id, action)
        except SessionExpired:
            self.close(session_id)
            raise

    def close(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.close()
            logger.debug(f"Session {session_id} closed")

    def purge_expired(self) -> int:
        """Drop expired sessions, return how many were removed"""
        expired = [sid for sid, session in self._sessions.items() if session.is_expired()]
        for sid in expired:
            self.close(sid)
        return len(expired)
