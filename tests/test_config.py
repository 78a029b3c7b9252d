"""Tests for configuration, browser settings and logging setup."""

import io
import logging

import pytest
from pydantic import ValidationError

from doclinks.browser_config import DEFAULT_LAUNCH_ARGS, RenderConfig
from doclinks.config import CrawlConfig
from doclinks.logging_config import setup_logging


class TestCrawlConfig:
    """Test cases for CrawlConfig."""

    def test_defaults(self):
        config = CrawlConfig()
        assert config.user_agent == "Mozilla/5.0 DevSite Link Checker"
        assert config.page_timeout == 10
        assert config.check_timeout == 5
        assert config.render_timeout_ms == 30000
        assert config.link_text_max_length == 50
        assert config.fetch_command == "curl"
        assert config.use_render is False

    def test_from_env(self, monkeypatch):
        """Test environment variables are picked up."""
        monkeypatch.setenv("DOCLINKS_PAGE_TIMEOUT", "20")
        monkeypatch.setenv("DOCLINKS_CHECK_TIMEOUT", "2.5")
        monkeypatch.setenv("DOCLINKS_RENDER_TIMEOUT_MS", "60000")
        monkeypatch.setenv("DOCLINKS_FETCH_COMMAND", "wget")
        monkeypatch.setenv("USER_AGENT", "DocBot/1.0")
        monkeypatch.setenv("DEBUG", "true")

        config = CrawlConfig.from_env()

        assert config.page_timeout == 20.0
        assert config.check_timeout == 2.5
        assert config.render_timeout_ms == 60000
        assert config.fetch_command == "wget"
        assert config.user_agent == "DocBot/1.0"
        assert config.debug is True

    def test_invalid_numbers_keep_defaults(self, monkeypatch):
        monkeypatch.setenv("DOCLINKS_PAGE_TIMEOUT", "soon")
        monkeypatch.setenv("DOCLINKS_RENDER_TIMEOUT_MS", "30s")

        config = CrawlConfig.from_env()

        assert config.page_timeout == 10
        assert config.render_timeout_ms == 30000

    @pytest.mark.parametrize("value", ["false", "1", "yes", ""])
    def test_debug_only_for_true(self, monkeypatch, value):
        """Test DEBUG is enabled only by the literal string true."""
        monkeypatch.setenv("DEBUG", value)
        assert CrawlConfig.from_env().debug is False

    def test_overrides_win(self, monkeypatch):
        """Test keyword overrides take precedence over the environment."""
        monkeypatch.setenv("DOCLINKS_PAGE_TIMEOUT", "20")
        config = CrawlConfig.from_env(page_timeout=3, use_render=True)
        assert config.page_timeout == 3
        assert config.use_render is True

    def test_unknown_override(self):
        with pytest.raises(TypeError):
            CrawlConfig.from_env(max_pages=10)


class TestRenderConfig:
    """Test cases for RenderConfig validation."""

    def test_defaults(self):
        config = RenderConfig()
        assert config.headless is True
        assert config.timeout == 30000
        assert config.wait_until == "networkidle"
        assert config.viewport == {"width": 1920, "height": 1080}
        assert config.launch_args == DEFAULT_LAUNCH_ARGS
        assert "--no-sandbox" in config.launch_args

    def test_launch_args_not_shared(self):
        """Test each config gets its own launch argument list."""
        first = RenderConfig()
        first.launch_args.append("--mute-audio")
        assert "--mute-audio" not in RenderConfig().launch_args

    @pytest.mark.parametrize("timeout", [999, 300001])
    def test_timeout_bounds(self, timeout):
        with pytest.raises(ValidationError):
            RenderConfig(timeout=timeout)

    def test_wait_until_choices(self):
        with pytest.raises(ValidationError):
            RenderConfig(wait_until="idle")


class TestLogging:
    """Test cases for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers = handlers
        root.setLevel(level)

    def test_level(self):
        setup_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level="CHATTY")
        assert logging.getLogger().level == logging.INFO

    def test_log_file(self, tmp_path):
        """Test a file handler is added and its directory created."""
        log_file = tmp_path / "logs" / "crawl.log"
        setup_logging(level="INFO", log_file=str(log_file))

        logging.getLogger("doclinks.test").info("crawl started")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "crawl started" in log_file.read_text()

    def test_console_stream(self):
        """Test records go to the given stream with level and logger name."""
        stream = io.StringIO()
        setup_logging(level="WARNING", stream=stream)

        logging.getLogger("doclinks.engine").warning("Could not start browser")
        logging.getLogger("doclinks.engine").info("hidden")

        assert stream.getvalue() == "WARNING doclinks.engine: Could not start browser\n"

    def test_quiet_loggers(self):
        setup_logging(level="DEBUG", stream=io.StringIO(), quiet_loggers=["playwright"])
        assert logging.getLogger("playwright").level == logging.WARNING
