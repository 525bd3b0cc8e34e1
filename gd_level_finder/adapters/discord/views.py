"""
Discord Paginator View

Prev/Next buttons over one PaginationSession. Button custom ids carry
(session_id, action) and are dispatched through the SessionStore. The view
has no idle timeout: the session's hard expiry removes the controls.
"""
import asyncio
import logging
from typing import Optional

import discord

from ...core import NavAction, PaginationSession, SessionAccessDenied, SessionError, SessionExpired, SessionStore
from .embeds import build_results_embed

logger = logging.getLogger(__name__)

CUSTOM_ID_PREFIX = "findlevel"


def encode_custom_id(session_id: str, action: NavAction) -> str:
    return f"{CUSTOM_ID_PREFIX}:{session_id}:{NavAction(action).value}"


def decode_custom_id(custom_id: str) -> tuple[str, NavAction]:
    """
    Raises:
        ValueError: not a paginator custom id
    """
    prefix, _, rest = custom_id.partition(":")
    session_id, _, action = rest.partition(":")
    if prefix != CUSTOM_ID_PREFIX or not session_id:
        raise ValueError(f"Not a paginator custom id: {custom_id!r}")
    return session_id, NavAction(action)


class ResultsPaginator(discord.ui.View):
    """Navigation controls for one /findlevel result message"""

    def __init__(self, store: SessionStore, session: PaginationSession):
        super().__init__(timeout=None)
        self.store = store
        self.session = session
        self.message: Optional[discord.Message] = None
        self._expiry_task: Optional[asyncio.Task] = None

        self.prev_button = discord.ui.Button(
            label="◀ Prev",
            style=discord.ButtonStyle.primary,
            custom_id=encode_custom_id(session.session_id, NavAction.PREV),
        )
        self.prev_button.callback = self._on_navigate
        self.add_item(self.prev_button)

        self.next_button = discord.ui.Button(
            label="Next ▶",
            style=discord.ButtonStyle.primary,
            custom_id=encode_custom_id(session.session_id, NavAction.NEXT),
        )
        self.next_button.callback = self._on_navigate
        self.add_item(self.next_button)

        self._sync_buttons()

    def _sync_buttons(self) -> None:
        page = self.session.current()
        self.prev_button.disabled = not page.has_prev
        self.next_button.disabled = not page.has_next

    def start_expiry(self) -> None:
        """Schedule removal of the controls when the session lifetime ends"""
        self._expiry_task = asyncio.create_task(self._expire_later())

    async def _expire_later(self) -> None:
        await asyncio.sleep(self.session.remaining())
        await self.expire()

    async def expire(self) -> None:
        """Close the session and strip the buttons from the message"""
        task = self._expiry_task
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()

        self.store.close(self.session.session_id)
        self.stop()

        if self.message is not None:
            try:
                await self.message.edit(view=None)
            except discord.HTTPException as e:
                logger.debug(f"Could not remove controls from message {self.message.id}: {e}")

    async def _notify(self, interaction: discord.Interaction, notice: str) -> None:
        """Ephemeral notice to the presser; delivery failures are only logged"""
        try:
            if interaction.response.is_done():
                await interaction.followup.send(notice, ephemeral=True)
            else:
                await interaction.response.send_message(notice, ephemeral=True)
        except discord.HTTPException as e:
            logger.debug(f"Could not deliver notice to user {interaction.user.id}: {e}")

    async def _on_navigate(self, interaction: discord.Interaction) -> None:
        custom_id = (interaction.data or {}).get("custom_id", "")
        try:
            session_id, action = decode_custom_id(custom_id)
        except ValueError as e:
            logger.warning(f"Paginator received foreign custom id: {e}")
            await self._notify(interaction, SessionError.notice)
            return

        try:
            page = self.store.navigate(session_id, interaction.user.id, action)
        except SessionAccessDenied as e:
            await self._notify(interaction, e.notice)
            return
        except SessionExpired as e:
            await self._notify(interaction, e.notice)
            await self.expire()
            return

        self._sync_buttons()
        try:
            await interaction.response.edit_message(
                embed=build_results_embed(page, self.session.query),
                view=self
            )
        except discord.HTTPException as e:
            logger.error(f"Could not update results message for session {session_id}: {e}")
            await self._notify(interaction, SessionError.notice)
