"""
Dependency Injection Container

Wires together the hexagonal architecture by creating and injecting dependencies.
"""
from typing import Optional

import httpx

from .adapters.gdbrowser import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, GDBrowserIndex
from .core import FindLevelsService, SessionStore
from .core.filters import DEFAULT_SCALE, DifficultyScale
from .core.pagination import SESSION_TTL_SECONDS
from .core.services import DEFAULT_CONCURRENCY


class Container:
    """Dependency injection container for the application"""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        concurrency: int = DEFAULT_CONCURRENCY,
        session_ttl: float = SESSION_TTL_SECONDS,
        scale: DifficultyScale = DEFAULT_SCALE,
        client: Optional[httpx.AsyncClient] = None
    ):
        # Adapters (infrastructure)
        self.index = GDBrowserIndex(base_url=base_url, timeout=timeout, client=client)

        # Services (use cases)
        self.find_levels = FindLevelsService(
            index=self.index,
            concurrency=concurrency,
            scale=scale
        )

        # Live pagination sessions (process-wide)
        self.sessions = SessionStore(ttl=session_ttl)

    @classmethod
    def from_env(cls) -> "Container":
        """Build a container from environment configuration"""
        from . import config

        return cls(
            base_url=config.get_base_url(),
            timeout=config.get_request_timeout(),
            concurrency=config.get_concurrency(),
            session_ttl=config.get_session_ttl()
        )

    async def aclose(self) -> None:
        await self.index.aclose()
