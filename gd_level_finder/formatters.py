"""
Text formatters for find_levels results

Format handler results as compact terminal text.
Used by both CLI and MCP adapters for consistent presentation.
"""

from typing import Any, Optional


def format_objects(count: Optional[int]) -> str:
    return f"{count:,}" if count is not None else "N/A"


def format_length(seconds: Optional[float]) -> str:
    return f"{seconds:.1f}s" if seconds is not None else "N/A"


def format_find_levels(result: dict[str, Any]) -> str:
    """Format find_levels result as text.

    Example output:
        GD LEVELS | "bloodbath" | 7 MATCHES (30 checked, 1 skipped)

        RESULTS (showing 1-5 | page 1/2)
        ──────────────────────────────────────────────────────────────────────
          1. Bloodbath                                    ID 10565740
             by Riot | 24,521 objects | 62.0s
             https://gdbrowser.com/level/10565740

        Try: find_levels(..., page=2)
    """
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    query = result.get("query") or "*"
    match_count = result["match_count"]

    lines = []

    # Header
    stats = f"{result['examined']} checked"
    if result.get("skipped"):
        stats += f", {result['skipped']} skipped"
    lines.append(f'GD LEVELS | "{query}" | {match_count} MATCHES ({stats})')
    lines.append("")

    if result.get("remote_error"):
        lines.append(f"LEVEL INDEX UNAVAILABLE: {result['remote_error']}")
        lines.append("")
        lines.append("Try: Again in a moment")
        return "\n".join(lines)

    # No matches
    if match_count == 0:
        lines.append("NO MATCHES FOUND")
        lines.append("")
        lines.append("Try: Relax filters | Raise limit (max 100)")
        return "\n".join(lines)

    page = result["page"]
    total_pages = result["total_pages"]
    lines.append(
        f"RESULTS (showing {result['first_index']}-{result['last_index']} | page {page}/{total_pages})"
    )
    lines.append("─" * 70)

    for i, match in enumerate(result["matches"], result["first_index"]):
        lines.append(f"  {i:>2}. {match['name']:<44} ID {match['level_id']}")
        lines.append(
            f"      by {match['author']} | {format_objects(match['object_count'])} objects"
            f" | {format_length(match['length_seconds'])}"
        )
        lines.append(f"      {match['preview_url']}")

    # Affordances
    if page < total_pages:
        lines.append("")
        lines.append(f"Try: find_levels(..., page={page + 1})")

    return "\n".join(lines)
