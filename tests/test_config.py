"""
Tests for environment configuration, logging setup and the CLI parser
"""
import logging

import pytest

from gd_level_finder import config
from gd_level_finder.cli import build_parser
from gd_level_finder.logs import DATE_FORMAT, LOG_FORMAT, MillisecondFormatter


class TestConfig:
    """Test environment getters."""

    def test_defaults(self, monkeypatch):
        for name in ("GUILD_ID", "GDBROWSER_URL", "REQUEST_TIMEOUT", "DETAIL_CONCURRENCY", "SESSION_TTL", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        assert config.get_guild_id() is None
        assert config.get_base_url() == "https://gdbrowser.com"
        assert config.get_request_timeout() == 15.0
        assert config.get_concurrency() == 5
        assert config.get_session_ttl() == 120.0
        assert config.get_log_level() == "INFO"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("GUILD_ID", "123456789")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert config.get_guild_id() == 123456789
        assert config.get_log_level() == "DEBUG"

    def test_invalid_number(self, monkeypatch):
        monkeypatch.setenv("DETAIL_CONCURRENCY", "lots")
        with pytest.raises(ValueError, match="DETAIL_CONCURRENCY"):
            config.get_concurrency()

    def test_missing_token(self, monkeypatch):
        monkeypatch.setenv("BOT_TOKEN", "  ")
        with pytest.raises(ValueError, match="BOT_TOKEN"):
            config.get_bot_token()


class TestLogging:
    """Test the millisecond formatter."""

    def test_millisecond_suffix(self):
        formatter = MillisecondFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        record = logging.LogRecord("gd", logging.INFO, __file__, 1, "hello", None, None)
        record.created = 1700000000.25

        assert formatter.formatTime(record, DATE_FORMAT) == "2023/11/14 22:13:20:2500"


class TestCliParser:
    """Test CLI argument parsing."""

    def test_find_defaults(self):
        args = build_parser().parse_args(["find", "--query", "bloodbath"])
        assert args.command == "find"
        assert args.query == "bloodbath"
        assert args.difficulty == "auto"
        assert args.limit == 30
        assert args.page == 1

    def test_find_filters(self):
        args = build_parser().parse_args([
            "find", "--length", "xl", "--min-objects", "1000", "--required-ids", "1,2,57", "--page", "2"
        ])
        assert args.length == "xl"
        assert args.min_objects == 1000
        assert args.required_ids == "1,2,57"
        assert args.page == 2

    def test_bad_choice_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["find", "--length", "medium"])
