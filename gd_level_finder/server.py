#!/usr/bin/env python3
"""
MCP stdio Server

Exposes find_levels as an MCP tool over stdio, using the same container
and handlers as the CLI.

Run with: gd-level-finder-mcp
"""
import asyncio
import json
import logging
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import config
from .adapters.mcp import TOOL_SCHEMAS, MCPHandlers
from .container import Container
from .formatters import format_find_levels
from .logs import configure_logging

logger = logging.getLogger(__name__)

# Format result per tool
FORMATTERS = {
    "find_levels": format_find_levels,
}


def build_server(handlers: MCPHandlers) -> Server:
    """Create the MCP server with tool listing and dispatch"""
    mcp_server = Server("gd-level-finder")

    @mcp_server.list_tools()  # type: ignore[misc,no-untyped-call]
    async def list_tools() -> list[Tool]:
        """List available MCP tools"""
        return [Tool(**schema) for schema in TOOL_SCHEMAS.values()]

    @mcp_server.call_tool()  # type: ignore[misc,no-untyped-call]
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls"""
        logger.info(f"call_tool: {name} args={arguments}")

        try:
            result = await dispatch_tool(handlers, name, arguments)
        except Exception as e:
            logger.error(f"call_tool: {name} FAILED: {e}")
            raise

        formatter = FORMATTERS.get(name)
        if formatter:
            formatted_text = formatter(result)
        else:
            formatted_text = json.dumps(result, indent=2)

        logger.info(f"call_tool: {name} returning {len(formatted_text)} chars")
        return [TextContent(type="text", text=formatted_text)]

    return mcp_server


async def dispatch_tool(handlers: MCPHandlers, name: str, arguments: dict[str, Any]) -> Any:
    """Dispatch tool call to appropriate handler"""
    if name == "find_levels":
        return await handlers.find_levels(
            query=arguments.get("query"),
            lengthcategory=arguments.get("lengthcategory"),
            exactlengthseconds=arguments.get("exactlengthseconds"),
            minobjects=arguments.get("minobjects"),
            maxobjects=arguments.get("maxobjects"),
            exactobjects=arguments.get("exactobjects"),
            requiredobjectids=arguments.get("requiredobjectids"),
            difficulty=arguments.get("difficulty"),
            limit=arguments.get("limit"),
            page=arguments.get("page", 1)
        )

    raise ValueError(f"Unknown tool: {name}")


async def serve() -> None:
    container = Container.from_env()
    mcp_server = build_server(MCPHandlers(container))
    try:
        async with stdio_server() as (read_stream, write_stream):
            await mcp_server.run(read_stream, write_stream, mcp_server.create_initialization_options())
    finally:
        await container.aclose()


def main() -> int:
    """Main entry point for the MCP server."""
    # stdout carries the protocol; logs go to stderr
    configure_logging(config.get_log_level())
    asyncio.run(serve())
    return 0


if __name__ == "__main__":
    sys.exit(main())
