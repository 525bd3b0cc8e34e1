"""
Adapters - External implementations of ports

This package contains implementations of the core ports and delivery layers:
- gdbrowser.py: GDBrowser-backed level index
- mcp/: MCP tool schemas and handlers
- discord/: Discord embeds, paginator view and /findlevel command
"""
from .gdbrowser import GDBrowserIndex

__all__ = [
    "GDBrowserIndex",
]
