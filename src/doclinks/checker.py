"""Broken-link classification for links discovered during a crawl."""

import logging
from typing import Optional
from urllib.parse import urlparse

import requests

from doclinks.classifier import is_not_found
from doclinks.constants import (
    LINK_CHECK_TIMEOUT,
    NOT_FOUND_REASON,
    SKIPPED_LINK_PREFIXES,
    SUCCESS_STATUS,
)
from doclinks.models import CheckResult, FetchStatus, Link
from doclinks.strategies import HttpStrategy, RenderStrategy

logger = logging.getLogger(__name__)


def hostname(url: str) -> Optional[str]:
    """Host part of a URL, or None when it cannot be parsed."""
    try:
        return urlparse(url).hostname
    except ValueError as e:
        logger.debug(f"Error checking domain for {url}: {e}")
        return None


def is_same_domain(url: str, other: str) -> bool:
    """Whether two URLs share a hostname (ports and schemes are ignored)."""
    host = hostname(url)
    return host is not None and host == hostname(other)


def is_skipped_scheme(url: str) -> bool:
    """Links that can never be retrieved (fragments, javascript:, mailto:, tel:)."""
    return not url or url.startswith(SKIPPED_LINK_PREFIXES)


class LinkChecker:
    """Decides whether a same-domain link is broken.

    Uses the render strategy first when a browser session is running, then
    a plain GET. Any non-200 status, a not-found page, or a transport error
    makes the link broken. Checks are never retried.
    """

    def __init__(
        self,
        start_url: str,
        http: HttpStrategy,
        render: Optional[RenderStrategy] = None,
        timeout: float = LINK_CHECK_TIMEOUT,
    ):
        """Initialize the checker.

        Args:
            start_url: Seed URL; only links on its host are checked
            http: Strategy used for direct GET checks
            render: Optional render strategy tried before the GET
            timeout: Per-check timeout in seconds
        """
        self.start_url = start_url
        self.http = http
        self.render = render
        self.timeout = timeout

    def should_check(self, link: Link) -> Optional[str]:
        """Return why a link is skipped, or None if it must be checked."""
        if is_skipped_scheme(link.url):
            return "unsupported scheme"
        if not is_same_domain(link.url, self.start_url):
            return "external domain"
        return None

    def check(self, link: Link) -> CheckResult:
        """Check one link.

        Args:
            link: Link discovered on a crawled page

        Returns:
            CheckResult that is skipped, broken (with reason) or healthy
        """
        skip_reason = self.should_check(link)
        if skip_reason is not None:
            return CheckResult.skip(link.url, skip_reason)

        try:
            return self._check(link)
        except Exception as e:
            logger.debug(f"Unexpected error checking {link.url}: {e}")
            return CheckResult.broken_because(link.url, f"Error: {e}")

    def _check(self, link: Link) -> CheckResult:
        if self.render is not None and self.render.available:
            logger.debug(f"Testing link with render strategy: {link.url}")
            outcome = self.render.attempt(link.url)
            if outcome.status == FetchStatus.NOT_FOUND:
                return CheckResult.broken_because(link.url, NOT_FOUND_REASON)
            if outcome.succeeded:
                return CheckResult.ok(link.url)
            logger.debug(f"Render check failed for {link.url}, falling back to HTTP check")

        return self._check_http(link)

    def _check_http(self, link: Link) -> CheckResult:
        logger.debug(f"Testing link with HTTP: {link.url}")
        try:
            response = self.http.get(link.url, timeout=self.timeout)
        except (requests.RequestException, ValueError) as e:
            return CheckResult.broken_because(link.url, f"Error: {e}")

        if response.status_code != SUCCESS_STATUS:
            return CheckResult.broken_because(link.url, f"HTTP {response.status_code}")

        if is_not_found(response.text):
            return CheckResult.broken_because(link.url, NOT_FOUND_REASON)

        return CheckResult.ok(link.url)
