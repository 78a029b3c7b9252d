"""Page retrieval strategies behind one interface.

Each strategy turns a URL into a FetchOutcome and never raises for expected
problems (timeouts, missing binaries, navigation errors); those come back as
FAILED or UNAVAILABLE outcomes so the caller can move on to the next one.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Callable, Optional

import requests

from doclinks.classifier import is_not_found, match_not_found_text
from doclinks.constants import (
    DEFAULT_FETCH_COMMAND,
    DEFAULT_USER_AGENT,
    LINK_TEXT_MAX_LENGTH,
    PAGE_FETCH_TIMEOUT,
)
from doclinks.extractor import extract_links
from doclinks.models import FetchOutcome
from doclinks.renderer import RenderSession

logger = logging.getLogger(__name__)


class FetchStrategy(ABC):
    """A way of retrieving a page and discovering its links."""

    name: str = "strategy"

    @property
    def available(self) -> bool:
        """Whether the strategy can run at all in this process."""
        return True

    @abstractmethod
    def attempt(self, url: str) -> FetchOutcome:
        """Retrieve a URL.

        Args:
            url: Absolute URL to retrieve

        Returns:
            FetchOutcome with links, a not-found signal, or the failure reason
        """
        pass


class RenderStrategy(FetchStrategy):
    """Render the page in a real browser and read links from the live DOM."""

    name = "render"

    def __init__(self, session: Optional[RenderSession]):
        self.session = session

    @property
    def available(self) -> bool:
        return self.session is not None and self.session.is_running

    def attempt(self, url: str) -> FetchOutcome:
        if not self.available:
            return FetchOutcome.unavailable(self.name)

        try:
            page = self.session.render(url)
        except Exception as e:
            logger.debug(f"Render failed for {url}: {e}")
            return FetchOutcome.failed(str(e), self.name)

        if page.error:
            return FetchOutcome.failed(page.error, self.name)

        # Error statuses fall through to the HTTP check
        if page.status_code >= 400:
            return FetchOutcome.failed(f"Rendered page returned HTTP {page.status_code}", self.name)

        pattern = match_not_found_text(page.text)
        if pattern is not None:
            logger.debug(f'Found "{pattern}" in rendered content at {url}')
            return FetchOutcome.page_not_found(self.name)

        logger.debug(f"Found {len(page.links)} links on {url}")
        return FetchOutcome.found(page.links, self.name)


class HttpStrategy(FetchStrategy):
    """Plain GET request; body checked for not-found text, then parsed for anchors."""

    name = "http"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = PAGE_FETCH_TIMEOUT,
        link_text_max_length: int = LINK_TEXT_MAX_LENGTH,
    ):
        """Initialize the HTTP strategy.

        Args:
            session: requests session to reuse (a new one is created if None)
            user_agent: User-Agent header sent with every request
            timeout: Page fetch timeout in seconds
            link_text_max_length: Bound for extracted link text
        """
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        self.timeout = timeout
        self.link_text_max_length = link_text_max_length

    def get(self, url: str, timeout: Optional[float] = None) -> requests.Response:
        """Issue a GET without judging the status code.

        Raises:
            requests.RequestException: On transport errors
        """
        return self.session.get(
            url,
            timeout=timeout if timeout is not None else self.timeout,
            allow_redirects=True,
        )

    def attempt(self, url: str) -> FetchOutcome:
        logger.debug(f"Fetching content using standard HTTP: {url}")
        try:
            response = self.get(url)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.debug(f"Standard HTTP request failed: {e}")
            return FetchOutcome.failed(str(e), self.name)

        html = response.text
        if is_not_found(html):
            logger.debug(f'Page {url} contains "Page Not Found" message despite {response.status_code} status')
            return FetchOutcome.page_not_found(self.name)

        links = extract_links(url, html, max_length=self.link_text_max_length)
        return FetchOutcome.found(links, self.name)


class CommandStrategy(FetchStrategy):
    """Shell out to an external retrieval command and parse its stdout.

    Link discovery only: the output is not checked for not-found text.
    """

    name = "command"

    def __init__(
        self,
        command: str = DEFAULT_FETCH_COMMAND,
        timeout: float = PAGE_FETCH_TIMEOUT,
        link_text_max_length: int = LINK_TEXT_MAX_LENGTH,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        """Initialize the command strategy.

        Args:
            command: Executable to run; the URL is passed as its last argument
            timeout: Seconds before the process is abandoned
            link_text_max_length: Bound for extracted link text
            runner: subprocess.run compatible callable
        """
        self.command = command
        self.timeout = timeout
        self.link_text_max_length = link_text_max_length
        self._runner = runner

    def build_command(self, url: str) -> list[str]:
        if self.command == "curl":
            return ["curl", "-s", url]
        return [self.command, url]

    def attempt(self, url: str) -> FetchOutcome:
        logger.debug(f"Trying {self.command} fallback for {url}")
        try:
            result = self._runner(
                self.build_command(url),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            logger.debug(f"Fallback command not found: {self.command}")
            return FetchOutcome.unavailable(self.name, f"{self.command} not found")
        except subprocess.TimeoutExpired:
            return FetchOutcome.failed(f"{self.command} timed out after {self.timeout}s", self.name)
        except OSError as e:
            return FetchOutcome.failed(f"Error executing command: {e}", self.name)

        if result.stderr:
            logger.debug(f"{self.command} stderr: {result.stderr.strip()}")

        content = (result.stdout or "").strip()
        if not content:
            return FetchOutcome.failed(
                f"{self.command} returned no content (exit code {result.returncode})",
                self.name,
            )

        links = extract_links(url, content, max_length=self.link_text_max_length)
        return FetchOutcome.found(links, self.name)
