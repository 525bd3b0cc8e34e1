"""
MCP Tool Handlers

Shared handlers for MCP tools that use the hexagonal core.
"""
import logging
from typing import Any, Optional

from ...container import Container
from ...core import FilterSpec, InvalidFilter, Match, page_window
from ..gdbrowser import preview_url

logger = logging.getLogger(__name__)


def match_to_dict(match: Match) -> dict[str, Any]:
    return {
        "level_id": match.level_id,
        "name": match.display_name,
        "author": match.author,
        "object_count": match.object_count,
        "length_seconds": match.length_seconds,
        "preview_url": preview_url(match.level_id),
    }


class MCPHandlers:
    """Handlers for MCP tools using dependency injection"""

    def __init__(self, container: Container):
        self.container = container

    async def find_levels(
        self,
        query: Optional[str] = None,
        lengthcategory: Optional[str] = None,
        exactlengthseconds: Optional[int] = None,
        minobjects: Optional[int] = None,
        maxobjects: Optional[int] = None,
        exactobjects: Optional[int] = None,
        requiredobjectids: Optional[str] = None,
        difficulty: Optional[str] = None,
        limit: Optional[int] = None,
        page: int = 1
    ) -> dict[str, Any]:
        """Run the search pipeline and return one page of matches"""
        try:
            spec = FilterSpec.from_options(
                query=query,
                lengthcategory=lengthcategory,
                exactlengthseconds=exactlengthseconds,
                minobjects=minobjects,
                maxobjects=maxobjects,
                exactobjects=exactobjects,
                requiredobjectids=requiredobjectids,
                difficulty=difficulty,
                limit=limit
            )
        except InvalidFilter as e:
            return {
                "success": False,
                "error": f"Invalid filter: {str(e)}"
            }

        try:
            report = await self.container.find_levels.execute(spec)

            # Stateless paging: the tool is called again with another page
            window = page_window(report.matches, page - 1, self.container.sessions.page_size)

            return {
                "success": True,
                "query": spec.query,
                "matches": [match_to_dict(m) for m in window.items],
                "page": window.number + 1,
                "total_pages": window.total_pages,
                "first_index": window.first_index,
                "last_index": window.last_index,
                "match_count": window.total_matches,
                "examined": report.examined,
                "rejected": report.rejected,
                "skipped": report.skipped,
                "remote_error": report.error,
            }

        except Exception as e:
            logger.exception("find_levels failed")
            return {
                "success": False,
                "error": f"Failed to find levels: {str(e)}"
            }
