"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest

from doclinks import cli
from doclinks.models import BrokenLink, CrawlEvent, CrawlReport, EventType


def fake_report(start_url="http://x/"):
    return CrawlReport(
        start_url=start_url,
        visited=[start_url],
        broken_links={
            start_url: [BrokenLink(start_url + "missing", "Missing", "HTTP 404", start_url)],
        },
        duration_seconds=1.0,
    )


class StubEngine:
    """Engine stand-in that finishes immediately with a canned report."""

    def __init__(self, start_url, error=None):
        self.start_url = start_url
        self.error = error
        self.subscribers = {}

    def subscribe(self, event_type, callback):
        self.subscribers.setdefault(event_type, []).append(callback)

    def run(self):
        if self.error is not None:
            raise self.error
        report = fake_report(self.start_url)
        for callback in self.subscribers.get(EventType.CRAWL_COMPLETE, []):
            callback(CrawlEvent(type=EventType.CRAWL_COMPLETE, report=report))
        return report


@pytest.fixture
def engine_cls():
    """Patch the engine so no network is touched."""
    with patch("doclinks.cli.CrawlEngine") as mock_cls, patch("doclinks.cli.setup_logging"):
        mock_cls.error = None
        mock_cls.side_effect = lambda start_url, config=None: StubEngine(start_url, mock_cls.error)
        yield mock_cls


class TestArguments:
    """Test cases for argument parsing."""

    def test_missing_url(self, capsys):
        """Test a missing URL prints usage and exits 1."""
        assert cli.main([]) == 1

        err = capsys.readouterr().err
        assert "Error: URL is required." in err
        assert "Usage:" in err

    def test_positional_url(self, engine_cls):
        assert cli.main(["http://x/"]) == 0
        assert engine_cls.call_args[0][0] == "http://x/"

    def test_url_option_wins(self, engine_cls):
        """Test --url takes precedence over the positional argument."""
        assert cli.main(["--url", "http://docs.local/", "http://x/"]) == 0
        assert engine_cls.call_args[0][0] == "http://docs.local/"

    @pytest.mark.parametrize("flag", ["--use-puppeteer", "--render-js"])
    def test_render_flag(self, engine_cls, flag):
        """Test both render flags enable the browser backend."""
        cli.main([flag, "http://x/"])
        assert engine_cls.call_args[1]["config"].use_render is True

    def test_defaults(self, engine_cls):
        cli.main(["http://x/"])
        config = engine_cls.call_args[1]["config"]
        assert config.use_render is False
        assert config.verbose is False

    def test_verbose_short_flag(self, engine_cls):
        cli.main(["-v", "http://x/"])
        assert engine_cls.call_args[1]["config"].verbose is True


class TestOutput:
    """Test cases for what the CLI prints."""

    def test_text_summary(self, engine_cls, capsys):
        """Test the summary table goes to stdout."""
        assert cli.main(["http://x/"]) == 0

        out = capsys.readouterr().out
        assert "Starting website crawler for broken links..." in out
        assert "Found 1 broken links on 1 pages:" in out

    def test_json_to_stdout(self, engine_cls, capsys):
        """Test JSON output keeps stdout machine-readable."""
        assert cli.main(["--output", "json", "http://x/"]) == 0

        captured = capsys.readouterr()
        data = json.loads(captured.out)
        assert data["summary"]["total_broken"] == 1
        assert "Starting website crawler" in captured.err

    def test_json_to_file(self, engine_cls, tmp_path, capsys):
        output_file = tmp_path / "report.json"
        assert cli.main(["-o", "json", "-f", str(output_file), "http://x/"]) == 0

        assert json.loads(output_file.read_text())["start_url"] == "http://x/"
        assert "Results written to" in capsys.readouterr().out


class TestExitCodes:
    """Test cases for fatal errors."""

    def test_crawl_error(self, engine_cls, capsys):
        """Test an unexpected error exits 1 with a message."""
        engine_cls.error = RuntimeError("boom")

        assert cli.main(["http://x/"]) == 1
        assert "Error during crawl: boom" in capsys.readouterr().err

    def test_interrupted(self, engine_cls, capsys):
        engine_cls.error = KeyboardInterrupt()

        assert cli.main(["http://x/"]) == 1
        assert "interrupted" in capsys.readouterr().err

    def test_log_level_from_flag(self, engine_cls):
        """Test --log-level is passed to logging setup."""
        with patch("doclinks.cli.setup_logging") as mock_setup:
            cli.main(["--log-level", "DEBUG", "http://x/"])
        assert mock_setup.call_args[1]["level"] == "DEBUG"

    def test_debug_env_enables_debug_logging(self, engine_cls, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        with patch("doclinks.cli.setup_logging") as mock_setup:
            cli.main(["http://x/"])
        assert mock_setup.call_args[1]["level"] == "DEBUG"

    def test_output_file_requires_json(self, engine_cls, capsys):
        """Test --output-file with text output is rejected before crawling."""
        assert cli.main(["-f", "report.txt", "http://x/"]) == 1

        assert "--output-file requires --output json" in capsys.readouterr().err
        engine_cls.assert_not_called()
