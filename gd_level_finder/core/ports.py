"""
Ports - Interfaces for external dependencies

These define HOW the core interacts with the remote level index,
but NOT the implementation details.
"""
from abc import ABC, abstractmethod
from typing import Optional

from .domain import CandidateRef, DetailRecord


class LevelIndex(ABC):
    """Port for the remote level index"""

    @abstractmethod
    async def search(
        self,
        query: Optional[str],
        limit: int,
        sort: Optional[str] = None,
        filters: Optional[dict[str, str]] = None
    ) -> list[CandidateRef]:
        """
        Search the index, return at most `limit` candidates in remote order.

        `filters` uses neutral names ("length", "difficulty") that the
        adapter translates into its own parameters.

        Raises:
            RemoteUnavailable: transport failure or non-success response
        """
        pass

    @abstractmethod
    async def get_detail(self, level_id: str) -> DetailRecord:
        """
        Fetch full detail for one level (one fallback attempt at most).

        Raises:
            DetailFetchFailed: both the full and the brief variant failed
        """
        pass
