"""
Discord Embeds

Result cards for /findlevel. Presentation only: every value shown comes
from a core Page.
"""
from typing import Optional

import discord

from ...core import Match, Page
from ...formatters import format_length, format_objects
from ..gdbrowser import preview_url

RESULTS_TITLE = "🔎 Geometry Dash Level Search Results"
RESULTS_COLOUR = discord.Colour.blurple()
FAILURE_COLOUR = discord.Colour.red()

# Discord field name limit
MAX_FIELD_NAME = 256


def describe_query(query: Optional[str]) -> str:
    return f"Query: `{query}`" if query else "Query: `*`"


def match_field(match: Match) -> tuple[str, str]:
    """(field name, field value) summary for one match"""
    name = match.display_name[:MAX_FIELD_NAME]
    value = (
        f"ID: `{match.level_id}`  •  Creator: **{match.author}**\n"
        f"Objects: **{format_objects(match.object_count)}**  •  Length: **{format_length(match.length_seconds)}**\n"
        f"Preview: {preview_url(match.level_id)}"
    )
    return name, value


def build_results_embed(page: Page, query: Optional[str], remote_error: Optional[str] = None) -> discord.Embed:
    """Card for one page of matches (or the single "no results" page)"""
    embed = discord.Embed(
        title=RESULTS_TITLE,
        description=describe_query(query),
        colour=RESULTS_COLOUR,
        timestamp=discord.utils.utcnow()
    )

    if page.is_empty:
        if remote_error:
            embed.add_field(
                name="Level index unavailable",
                value="No results could be obtained right now. Try again in a moment.",
                inline=False
            )
        else:
            embed.add_field(
                name="No matches",
                value="No levels matched your filters. Try relaxing filters or increase limit.",
                inline=False
            )
        embed.set_footer(text="Showing 0 of 0 results")
        return embed

    for match in page.items:
        name, value = match_field(match)
        embed.add_field(name=name, value=value, inline=False)

    embed.set_footer(
        text=(
            f"Showing {page.first_index}-{page.last_index} of {page.total_matches} results"
            f"  •  Page {page.number + 1}/{page.total_pages}"
        )
    )
    return embed


def build_failure_embed(message: str) -> discord.Embed:
    return discord.Embed(title="Search failed", description=message, colour=FAILURE_COLOUR)
