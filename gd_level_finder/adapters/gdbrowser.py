"""
GDBrowser Adapter

Implements LevelIndex port against the GDBrowser JSON API using httpx.
"""
import logging
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import quote

import httpx

from ..core.domain import CandidateRef, DetailRecord
from ..core.errors import DetailFetchFailed, RemoteUnavailable
from ..core.extract import normalize_candidate, normalize_detail
from ..core.ports import LevelIndex

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://gdbrowser.com"
DEFAULT_TIMEOUT = 15.0
DEFAULT_USER_AGENT = "gd-level-finder/0.1"

# Known wrapper keys for the level list, probed in order
LIST_KEYS = ("results", "data", "levels", "items", "rows")

# Neutral filter values -> GDBrowser search parameters
DIFFICULTY_PARAMS = {
    "easy": "1",
    "normal": "2",
    "hard": "3",
    "harder": "4",
    "insane": "5",
    "demon": "-2",
}
LENGTH_PARAMS = {
    "short": "1",
    "normal": "2",  # "medium" upstream
    "long": "3",
    "xl": "4",
}
FILTER_PARAMS = {
    "difficulty": ("diff", DIFFICULTY_PARAMS),
    "length": ("len", LENGTH_PARAMS),
}


def _first_list(value: Any) -> Optional[list]:
    """Depth-first search for the first list, in key insertion order"""
    if isinstance(value, list):
        return value
    if isinstance(value, Mapping):
        for child in value.values():
            found = _first_list(child)
            if found is not None:
                return found
    return None


def locate_level_list(body: Any) -> list:
    """
    Find the level list in a search response body.

    Probe order: top-level array, known wrapper keys, first array anywhere,
    otherwise empty (GDBrowser answers "-1" when nothing matched).
    """
    if isinstance(body, list):
        return body
    if not isinstance(body, Mapping):
        return []

    for key in LIST_KEYS:
        if isinstance(body.get(key), list):
            return body[key]

    return _first_list(body) or []


def search_params(limit: int, sort: Optional[str], filters: Optional[dict[str, str]]) -> dict[str, str]:
    """Translate neutral search options into GDBrowser query parameters"""
    params = {"count": str(limit)}
    if sort:
        params["type"] = sort

    for name, value in (filters or {}).items():
        if name not in FILTER_PARAMS:
            logger.debug(f"Ignoring unsupported search filter {name}={value}")
            continue
        param, mapping = FILTER_PARAMS[name]
        code = mapping.get(str(value).lower())
        if code is None:
            logger.debug(f"Ignoring unsupported {name} value {value!r}")
            continue
        params[param] = code
    return params


class GDBrowserIndex(LevelIndex):
    """Remote level index backed by GDBrowser"""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
        user_agent: str = DEFAULT_USER_AGENT
    ):
        self.base_url = base_url.rstrip("/")
        # One client per process; it holds no per-request state
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            follow_redirects=True
        )

    async def __aenter__(self) -> "GDBrowserIndex":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def search(
        self,
        query: Optional[str],
        limit: int,
        sort: Optional[str] = None,
        filters: Optional[dict[str, str]] = None
    ) -> list[CandidateRef]:
        """Search GDBrowser, return at most `limit` candidates"""
        term = query.strip() if query else ""
        url = f"{self.base_url}/api/search/{quote(term, safe='') if term else '*'}"
        params = search_params(limit, sort, filters)

        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteUnavailable(f"Level search returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise RemoteUnavailable(f"Level search failed: {type(e).__name__}: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteUnavailable("Level search returned a non-JSON body") from e

        items = locate_level_list(body)
        candidates = []
        for item in items:
            candidate = normalize_candidate(item)
            if candidate is None:
                logger.debug(f"Search item without level id ignored: {item!r:.80}")
                continue
            candidates.append(candidate)

        return candidates[:limit]

    async def get_detail(self, level_id: str) -> DetailRecord:
        """Fetch full detail (with level data); fall back once to the brief record"""
        url = f"{self.base_url}/api/level/{quote(str(level_id), safe='')}"

        try:
            payload = await self._get_level(url, {"download": ""})
        except (httpx.HTTPError, ValueError) as first:
            logger.info(f"Full detail for level {level_id} failed ({first}), trying brief record")
            try:
                payload = await self._get_level(url)
            except (httpx.HTTPError, ValueError) as second:
                raise DetailFetchFailed(level_id, str(second)) from second

        return normalize_detail(level_id, payload)

    async def _get_level(self, url: str, params: Optional[dict[str, str]] = None) -> Mapping:
        response = await self.client.get(url, params=params)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, Mapping):
            # "-1" means the level does not exist
            raise ValueError(f"unexpected level payload {payload!r:.40}")
        return payload


def preview_url(level_id: str) -> str:
    """Browser page for a level"""
    return f"{DEFAULT_BASE_URL}/level/{level_id}"
