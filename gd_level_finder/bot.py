#!/usr/bin/env python3
"""
Discord Bot - process entry point

Registers /findlevel and connects to the gateway.

Run with: gd-level-finder (or: python -m gd_level_finder.bot)

Configuration:
- BOT_TOKEN: Discord bot token (required)
- GUILD_ID: Sync commands to one guild instead of globally (optional)
- GDBROWSER_URL, REQUEST_TIMEOUT, DETAIL_CONCURRENCY, SESSION_TTL, LOG_LEVEL
"""
import logging
import sys
from typing import Optional

import discord
from discord import app_commands

from . import config
from .adapters.discord import FindLevelCommand, register_findlevel
from .container import Container
from .logs import configure_logging

logger = logging.getLogger(__name__)


class LevelFinderBot(discord.Client):
    """Discord client carrying the /findlevel command tree"""

    def __init__(self, container: Container, guild_id: Optional[int] = None):
        super().__init__(intents=discord.Intents.default())
        self.container = container
        self.guild = discord.Object(id=guild_id) if guild_id else None
        self.tree = app_commands.CommandTree(self)
        register_findlevel(self.tree, FindLevelCommand(container))

    async def setup_hook(self) -> None:
        logger.info("Registering slash commands...")
        if self.guild is not None:
            # Guild sync is immediate, global sync can take up to an hour
            self.tree.copy_global_to(guild=self.guild)
            synced = await self.tree.sync(guild=self.guild)
        else:
            synced = await self.tree.sync()
        logger.info(f"Registered {len(synced)} command(s)")

    async def on_ready(self) -> None:
        logger.info(f"Logged in as {self.user}")

    async def close(self) -> None:
        await self.container.aclose()
        await super().close()


def main() -> int:
    """Main entry point for the Discord bot."""
    configure_logging(config.get_log_level())

    try:
        token = config.get_bot_token()
        guild_id = config.get_guild_id()
        container = Container.from_env()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    bot = LevelFinderBot(container, guild_id=guild_id)
    # Logging is already configured above
    bot.run(token, log_handler=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
