"""
Tests for the Discord adapter: embeds, paginator view and /findlevel handler

Interactions are replaced by small recording fakes; nothing talks to Discord.
"""
import asyncio
from types import SimpleNamespace

import discord
import pytest

from gd_level_finder.adapters.discord import FindLevelCommand, ResultsPaginator
from gd_level_finder.adapters.discord.commands import FAILURE_NOTICE
from gd_level_finder.adapters.discord.embeds import RESULTS_TITLE, build_results_embed
from gd_level_finder.adapters.discord.views import decode_custom_id, encode_custom_id
from gd_level_finder.container import Container
from gd_level_finder.core import FindLevelsService, Match, NavAction, SessionError, SessionStore, page_window
from conftest import FakeIndex


def _matches(count: int) -> list:
    return [
        Match(level_id=str(i), display_name=f"Level {i}", author="Maker", object_count=100 * i, length_seconds=30.0)
        for i in range(1, count + 1)
    ]


class FakeResponse:
    def __init__(self):
        self.sent = []
        self.edits = []
        self.deferred = False

    def is_done(self) -> bool:
        return self.deferred or bool(self.sent)

    async def send_message(self, content=None, **kwargs):
        self.sent.append({"content": content, **kwargs})

    async def defer(self, **kwargs):
        self.deferred = True

    async def edit_message(self, **kwargs):
        self.edits.append(kwargs)


class FakeMessage:
    id = 555

    def __init__(self):
        self.edits = []

    async def edit(self, **kwargs):
        self.edits.append(kwargs)


class FakeInteraction:
    def __init__(self, user_id: int = 1, custom_id: str = ""):
        self.user = SimpleNamespace(id=user_id)
        self.data = {"custom_id": custom_id}
        self.response = FakeResponse()
        self.original_edits = []
        self.message = FakeMessage()

    async def edit_original_response(self, **kwargs):
        self.original_edits.append(kwargs)
        return self.message


class TestCustomIds:
    """Test button custom id encoding."""

    def test_encode_decode(self):
        custom_id = encode_custom_id("abc123", NavAction.NEXT)
        assert custom_id == "findlevel:abc123:next"
        assert decode_custom_id(custom_id) == ("abc123", NavAction.NEXT)

    def test_foreign_id_rejected(self):
        with pytest.raises(ValueError):
            decode_custom_id("other:abc:next")
        with pytest.raises(ValueError):
            decode_custom_id("findlevel:abc:sideways")


class TestEmbeds:
    """Test result cards."""

    def test_results_page(self):
        page = page_window(_matches(12), 1)
        embed = build_results_embed(page, "bloodbath")

        assert embed.title == RESULTS_TITLE
        assert embed.description == "Query: `bloodbath`"
        assert [f.name for f in embed.fields] == ["Level 6", "Level 7", "Level 8", "Level 9", "Level 10"]
        assert "ID: `6`" in embed.fields[0].value
        assert "Objects: **600**" in embed.fields[0].value
        assert embed.footer.text == "Showing 6-10 of 12 results  •  Page 2/3"

    def test_empty_page(self):
        embed = build_results_embed(page_window([], 0), None)
        assert embed.description == "Query: `*`"
        assert embed.fields[0].name == "No matches"
        assert embed.footer.text == "Showing 0 of 0 results"

    def test_remote_error_page(self):
        embed = build_results_embed(page_window([], 0), "x", remote_error="HTTP 503")
        assert embed.fields[0].name == "Level index unavailable"


class TestResultsPaginator:
    """Test paginator navigation through the session store."""

    def test_buttons_follow_page(self):
        async def main():
            store = SessionStore()
            session = store.create(1, _matches(12))
            view = ResultsPaginator(store, session)
            assert view.prev_button.disabled
            assert not view.next_button.disabled

            interaction = FakeInteraction(1, view.next_button.custom_id)
            await view._on_navigate(interaction)
            await view._on_navigate(FakeInteraction(1, view.next_button.custom_id))
            return view, session, interaction

        view, session, interaction = asyncio.run(main())
        assert session.current_page == 2
        assert not view.prev_button.disabled
        assert view.next_button.disabled
        assert interaction.response.edits[0]["embed"].footer.text.endswith("Page 2/3")

    def test_stranger_gets_ephemeral_notice(self):
        async def main():
            store = SessionStore()
            session = store.create(1, _matches(12))
            view = ResultsPaginator(store, session)
            interaction = FakeInteraction(2, view.next_button.custom_id)
            await view._on_navigate(interaction)
            return session, interaction

        session, interaction = asyncio.run(main())
        assert session.current_page == 0
        assert interaction.response.sent == [{"content": "These buttons are not for you.", "ephemeral": True}]
        assert interaction.response.edits == []

    def test_expired_session_strips_controls(self):
        async def main():
            store = SessionStore()
            session = store.create(1, _matches(12))
            view = ResultsPaginator(store, session)
            view.message = FakeMessage()
            session.close()

            interaction = FakeInteraction(1, view.next_button.custom_id)
            await view._on_navigate(interaction)
            return store, session, view, interaction

        store, session, view, interaction = asyncio.run(main())
        assert "expired" in interaction.response.sent[0]["content"]
        assert session.session_id not in store
        assert view.message.edits == [{"view": None}]
        assert view.is_finished()

    def test_foreign_custom_id_gets_notice(self):
        async def main():
            store = SessionStore()
            session = store.create(1, _matches(12))
            view = ResultsPaginator(store, session)
            interaction = FakeInteraction(1, "other:thing")
            await view._on_navigate(interaction)
            return session, interaction

        session, interaction = asyncio.run(main())
        assert session.current_page == 0
        assert interaction.response.sent == [{"content": SessionError.notice, "ephemeral": True}]

    def test_failed_message_update_gets_notice(self):
        class FailingResponse(FakeResponse):
            async def edit_message(self, **kwargs):
                raise discord.HTTPException(SimpleNamespace(status=500, reason="Server Error"), "boom")

        async def main():
            store = SessionStore()
            session = store.create(1, _matches(12))
            view = ResultsPaginator(store, session)
            interaction = FakeInteraction(1, view.next_button.custom_id)
            interaction.response = FailingResponse()
            await view._on_navigate(interaction)
            return interaction

        interaction = asyncio.run(main())
        assert interaction.response.sent == [{"content": SessionError.notice, "ephemeral": True}]

    def test_hard_expiry_task(self):
        async def main():
            store = SessionStore(ttl=0.01)
            session = store.create(1, _matches(12))
            view = ResultsPaginator(store, session)
            view.message = FakeMessage()
            view.start_expiry()
            await asyncio.sleep(0.05)
            return store, session, view

        store, session, view = asyncio.run(main())
        assert session.session_id not in store
        assert view.message.edits == [{"view": None}]


class TestFindLevelCommand:
    """Test the /findlevel handler."""

    def _command(self, payloads, **index_kwargs) -> FindLevelCommand:
        container = Container()
        container.find_levels = FindLevelsService(FakeIndex(payloads, **index_kwargs))
        return FindLevelCommand(container)

    def _payloads(self, count: int) -> dict:
        return {str(i): {"id": str(i), "name": f"Level {i}", "objects": 500} for i in range(1, count + 1)}

    def test_single_page_has_no_controls(self):
        command = self._command(self._payloads(3))
        interaction = FakeInteraction()

        asyncio.run(command.handle(interaction, query="x"))

        assert interaction.response.deferred
        edit = interaction.original_edits[0]
        assert "view" not in edit
        assert len(edit["embed"].fields) == 3
        assert len(command.container.sessions) == 0

    def test_many_pages_attach_paginator(self):
        command = self._command(self._payloads(12))
        interaction = FakeInteraction(user_id=77)

        async def main():
            await command.handle(interaction)
            view = interaction.original_edits[0]["view"]
            view.stop()
            view._expiry_task.cancel()
            return view

        view = asyncio.run(main())
        assert isinstance(view, ResultsPaginator)
        assert view.message is interaction.message
        assert view.session.owner_id == 77
        assert len(command.container.sessions) == 1

    def test_no_matches(self):
        command = self._command(self._payloads(3))
        interaction = FakeInteraction()

        asyncio.run(command.handle(interaction, minobjects=10_000))
        assert interaction.original_edits[0]["embed"].fields[0].name == "No matches"

    def test_invalid_filter_is_ephemeral(self):
        command = self._command({})
        interaction = FakeInteraction()

        asyncio.run(command.handle(interaction, requiredobjectids="1,x"))

        assert not interaction.response.deferred
        notice = interaction.response.sent[0]
        assert notice["ephemeral"]
        assert notice["content"].startswith("⚠️")

    def test_unexpected_failure_sends_generic_notice(self):
        class ExplodingService:
            async def execute(self, spec):
                raise RuntimeError("boom")

        command = self._command({})
        command.container.find_levels = ExplodingService()
        interaction = FakeInteraction()

        asyncio.run(command.handle(interaction))

        edit = interaction.original_edits[0]
        assert edit["embed"].description == FAILURE_NOTICE
        assert edit["view"] is None

    def test_embed_type(self):
        assert isinstance(build_results_embed(page_window(_matches(1), 0), None), discord.Embed)
