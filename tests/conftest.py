"""Shared fakes for crawl tests: an in-memory site behind a requests-like session."""

import pytest
import requests

from doclinks.models import Link
from doclinks.renderer import RenderedPage, RenderUnavailableError


def html_page(*anchors, title="Docs", body=""):
    """Build a small HTML page from (href, text) pairs."""
    links = "\n".join(f'<a href="{href}">{text}</a>' for href, text in anchors)
    return f"<html><head><title>{title}</title></head><body><p>{body}</p>{links}</body></html>"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, url, status_code=200, text=""):
        self.url = url
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error for url: {self.url}", response=self)


class FakeSession:
    """requests.Session replacement serving pages from a dict.

    Values are (status, html) tuples or exception instances to raise.
    Unknown URLs answer 404.
    """

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.headers = {}
        self.calls = []

    def get(self, url, timeout=None, allow_redirects=True, **kwargs):
        self.calls.append((url, timeout))
        entry = self.pages.get(url, (404, "<html><body>Missing</body></html>"))
        if isinstance(entry, Exception):
            raise entry
        status, text = entry
        return FakeResponse(url, status, text)

    def requested(self, url):
        return [call for call in self.calls if call[0] == url]


class FakeRenderSession:
    """Render backend replacement; pages map url -> RenderedPage."""

    def __init__(self, pages=None, fail_start=False):
        self.pages = dict(pages or {})
        self.fail_start = fail_start
        self.started = False
        self.closed = False
        self.rendered = []

    @property
    def is_running(self):
        return self.started and not self.closed

    def start(self):
        if self.fail_start:
            raise RenderUnavailableError("No browser installation found")
        self.started = True

    def close(self):
        self.closed = True

    def render(self, url):
        self.rendered.append(url)
        return self.pages.get(url, RenderedPage(url=url, error="net::ERR_NAME_NOT_RESOLVED"))


def rendered(url, *links, text="Welcome to the docs"):
    """RenderedPage helper taking (href, text) pairs of absolute URLs."""
    return RenderedPage(
        url=url,
        text=text,
        links=[Link(url=href, text=label) for href, label in links],
        status_code=200,
    )


def missing_command(*args, **kwargs):
    raise FileNotFoundError("curl")


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def no_command():
    """Command runner that behaves as if curl is not installed."""
    return missing_command
