"""
/findlevel Application Command

Parses the command options, runs the search pipeline and replies with a
result card plus paginator. Any unexpected failure is answered once with a
generic notice so the requester is never left without a reply.
"""
import logging
from typing import Optional

import discord
from discord import app_commands

from ...container import Container
from ...core import Difficulty, FilterSpec, InvalidFilter, LengthCategory, SearchReport, page_window
from ...core.domain import MAX_CHECK
from .embeds import build_failure_embed, build_results_embed
from .views import ResultsPaginator

logger = logging.getLogger(__name__)

FAILURE_NOTICE = "An error occurred while processing your request."

LENGTH_CHOICES = [app_commands.Choice(name=c.value, value=c.value) for c in LengthCategory]
DIFFICULTY_CHOICES = [app_commands.Choice(name=d.value, value=d.value) for d in Difficulty]


class FindLevelCommand:
    """Handler behind /findlevel"""

    def __init__(self, container: Container):
        self.container = container

    async def handle(self, interaction: discord.Interaction, **options) -> None:
        try:
            try:
                spec = FilterSpec.from_options(**options)
            except InvalidFilter as e:
                await interaction.response.send_message(f"⚠️ {e}", ephemeral=True)
                return

            # Checking up to 100 levels takes a while
            await interaction.response.defer(thinking=True)

            report = await self.container.find_levels.execute(spec)
            await self.reply(interaction, report)

        except Exception:
            logger.exception(f"/findlevel failed for user {interaction.user.id}")
            await self.send_failure(interaction)

    async def reply(self, interaction: discord.Interaction, report: SearchReport) -> None:
        """Send the first page; attach a paginator when there is more than one"""
        query = report.spec.query
        sessions = self.container.sessions
        first_page = page_window(report.matches, 0, sessions.page_size)

        if first_page.total_pages <= 1:
            await interaction.edit_original_response(
                embed=build_results_embed(first_page, query, report.error)
            )
            return

        session = sessions.create(interaction.user.id, report.matches, query=query)
        view = ResultsPaginator(sessions, session)
        view.message = await interaction.edit_original_response(
            embed=build_results_embed(session.current(), query),
            view=view
        )
        view.start_expiry()

    async def send_failure(self, interaction: discord.Interaction) -> None:
        embed = build_failure_embed(FAILURE_NOTICE)
        try:
            if interaction.response.is_done():
                await interaction.edit_original_response(content=None, embed=embed, view=None)
            else:
                await interaction.response.send_message(embed=embed, ephemeral=True)
        except discord.HTTPException as e:
            logger.error(f"Could not deliver failure notice: {e}")


def register_findlevel(
    tree: app_commands.CommandTree,
    handler: FindLevelCommand,
    guild: Optional[discord.abc.Snowflake] = None
) -> app_commands.Command:
    """Add /findlevel to a command tree"""

    @tree.command(
        name="findlevel",
        description="Search Geometry Dash levels with advanced filters",
        guild=guild
    )
    @app_commands.describe(
        query="Free-text search (level name / creator / tags)",
        lengthcategory="Length category: short|normal|long|xl",
        exactlengthseconds="Exact level length in seconds (best-effort)",
        minobjects="Minimum object count",
        maxobjects="Maximum object count",
        exactobjects="Exact object count (overrides min/max)",
        requiredobjectids="Comma-separated object IDs (e.g. 1,57,100)",
        difficulty="Difficulty filter (auto disables it)",
        limit=f"How many levels to check (max {MAX_CHECK}, default 30)",
    )
    @app_commands.choices(lengthcategory=LENGTH_CHOICES, difficulty=DIFFICULTY_CHOICES)
    async def findlevel(
        interaction: discord.Interaction,
        query: Optional[str] = None,
        lengthcategory: Optional[str] = None,
        exactlengthseconds: Optional[app_commands.Range[int, 0]] = None,
        minobjects: Optional[app_commands.Range[int, 0]] = None,
        maxobjects: Optional[app_commands.Range[int, 0]] = None,
        exactobjects: Optional[app_commands.Range[int, 0]] = None,
        requiredobjectids: Optional[str] = None,
        difficulty: Optional[str] = None,
        limit: Optional[app_commands.Range[int, 1, MAX_CHECK]] = None,
    ) -> None:
        await handler.handle(
            interaction,
            query=query,
            lengthcategory=lengthcategory,
            exactlengthseconds=exactlengthseconds,
            minobjects=minobjects,
            maxobjects=maxobjects,
            exactobjects=exactobjects,
            requiredobjectids=requiredobjectids,
            difficulty=difficulty,
            limit=limit,
        )

    return findlevel
