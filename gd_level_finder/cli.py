#!/usr/bin/env python3
"""
CLI for gd-level-finder - run searches without Discord

Usage:
  gd-level-finder-cli list-tools                              # Show MCP tool definitions
  gd-level-finder-cli find --query bloodbath                  # Search by name
  gd-level-finder-cli find --difficulty demon --limit 50      # Demons among 50 candidates
  gd-level-finder-cli find --min-objects 1000 --required-ids 1,2,57
  gd-level-finder-cli find --exact-length 62 --page 2         # Second page of matches

Fast iteration: Uses hexagonal core directly (no Discord layer)
"""

import argparse
import asyncio
import json
import sys

from . import config
from .adapters.mcp import TOOL_SCHEMAS, MCPHandlers
from .container import Container
from .core.domain import LengthCategory, Difficulty
from .formatters import format_find_levels
from .logs import configure_logging


async def list_tools_command() -> int:
    """Show MCP tool definitions"""
    print("=" * 80)
    print("MCP TOOL DEFINITIONS")
    print("=" * 80)
    print()

    for tool_name, tool_schema in TOOL_SCHEMAS.items():
        print(f"Tool: {tool_schema['name']}")
        print()
        print("Description:")
        print(tool_schema['description'])
        print()
        print("Input Schema:")
        print(json.dumps(tool_schema['inputSchema'], indent=2))
        print()
        print("-" * 80)
        print()

    return 0


async def find_command(args: argparse.Namespace) -> int:
    """Search levels and print one page"""
    container = Container(
        base_url=args.base_url,
        timeout=config.get_request_timeout(),
        concurrency=config.get_concurrency()
    )
    try:
        handlers = MCPHandlers(container)

        result = await handlers.find_levels(
            query=args.query,
            lengthcategory=args.length,
            exactlengthseconds=args.exact_length,
            minobjects=args.min_objects,
            maxobjects=args.max_objects,
            exactobjects=args.exact_objects,
            requiredobjectids=args.required_ids,
            difficulty=args.difficulty,
            limit=args.limit,
            page=args.page
        )

        print(format_find_levels(result))

        if not result["success"]:
            return 1

        return 0
    finally:
        await container.aclose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="gd-level-finder CLI - Run level searches without Discord"
    )
    parser.add_argument(
        "--base-url",
        default=config.get_base_url(),
        help="Level index base URL (default: $GDBROWSER_URL or https://gdbrowser.com)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log pipeline progress to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # list-tools command
    subparsers.add_parser("list-tools", help="Show MCP tool definitions")

    # find command
    find_parser = subparsers.add_parser("find", help="Search and filter levels")
    find_parser.add_argument("--query", help="Free-text search term")
    find_parser.add_argument("--length", choices=[c.value for c in LengthCategory], help="Length category")
    find_parser.add_argument("--exact-length", type=int, help="Exact length in seconds (±0.3s)")
    find_parser.add_argument("--min-objects", type=int, help="Minimum object count")
    find_parser.add_argument("--max-objects", type=int, help="Maximum object count")
    find_parser.add_argument("--exact-objects", type=int, help="Exact object count (overrides min/max)")
    find_parser.add_argument("--required-ids", help="Comma-separated object ids (e.g. 1,57,100)")
    find_parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default="auto",
        help="Difficulty filter (default: auto = off)"
    )
    find_parser.add_argument("--limit", type=int, default=30, help="Levels to check (default: 30, max 100)")
    find_parser.add_argument("--page", type=int, default=1, help="Result page, 1-based (default: 1)")

    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    configure_logging("INFO" if args.verbose else "WARNING")

    # Run command
    if args.command == "list-tools":
        return asyncio.run(list_tools_command())
    elif args.command == "find":
        try:
            return asyncio.run(find_command(args))
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            return 1
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
