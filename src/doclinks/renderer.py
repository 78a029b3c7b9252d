"""
Render backend built on Playwright for JavaScript-generated links.

A RenderSession owns one browser for the whole crawl. It is opened once,
reused for every render, and closed once:

    with RenderSession(config) as session:
        page = session.render("https://docs.example.com/")
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from doclinks.browser_config import RenderConfig
from doclinks.constants import CHROME_PATHS, DEFAULT_USER_AGENT, LINK_TEXT_MAX_LENGTH
from doclinks.models import Link

logger = logging.getLogger(__name__)

# Runs in the page; returns [{url, text}] for anchors with a resolved href
EXTRACT_ANCHORS_SCRIPT = """
(maxLength) => {
    const results = [];
    for (const anchor of document.querySelectorAll('a')) {
        if (anchor.href) {
            results.push({
                url: anchor.href,
                text: (anchor.innerText || anchor.textContent || '').trim().substring(0, maxLength)
            });
        }
    }
    return results;
}
"""

BODY_TEXT_SCRIPT = "() => document.body ? document.body.innerText : ''"


class RenderUnavailableError(RuntimeError):
    """The render backend cannot be started (no Playwright, no browser, launch failure)."""


@dataclass
class RenderedPage:
    """Result from rendering one URL."""

    url: str
    text: str = ""
    links: List[Link] = field(default_factory=list)
    status_code: int = 0
    error: Optional[str] = None


def find_chrome(paths: Iterable[str] = CHROME_PATHS) -> Optional[str]:
    """Return the first installed Chrome/Chromium binary from the usual locations."""
    for path in paths:
        try:
            if os.path.exists(path):
                return path
        except OSError:
            continue
    return None


class RenderSession:
    """
    Single shared Playwright browser used by the render strategy.

    Each render gets its own browser context so pages never share cookies
    or storage, while the browser process itself lives for the whole crawl.
    """

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        link_text_max_length: int = LINK_TEXT_MAX_LENGTH,
    ):
        """
        Initialize the render session (the browser is not launched yet).

        Args:
            config: RenderConfig with browser settings
            user_agent: User agent for rendered pages
            link_text_max_length: Bound for extracted link text
        """
        self._config = config or RenderConfig()
        self._user_agent = user_agent
        self._link_text_max_length = link_text_max_length
        self._playwright = None
        self._browser = None

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    def __enter__(self) -> "RenderSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def start(self) -> None:
        """Launch the browser.

        Raises:
            RenderUnavailableError: If Playwright or a browser is missing or fails to launch
        """
        if self._browser is not None:
            return

        try:
            from playwright.sync_api import sync_playwright
        except ImportError:
            raise RenderUnavailableError(
                "Playwright is required for JavaScript rendering. "
                "Install with: pip install 'doclinks[browser]'"
            )

        executable = self._config.executable_path or find_chrome()
        if executable:
            logger.debug(f"Found Chrome at: {executable}")
        else:
            logger.debug("No Chrome installation found, trying the Playwright-managed browser")

        launch_options = {"headless": self._config.headless}
        if self._config.launch_args:
            launch_options["args"] = list(self._config.launch_args)
        if executable:
            launch_options["executable_path"] = executable

        logger.info("Launching browser with JavaScript support...")
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(**launch_options)
        except Exception as e:
            self._stop_playwright()
            raise RenderUnavailableError(f"Failed to initialize browser: {e}") from e

        logger.info("Browser launched successfully.")

    def close(self) -> None:
        """Close the browser. Safe to call more than once."""
        if self._browser is not None:
            logger.debug("Closing browser...")
            try:
                self._browser.close()
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")
            self._browser = None

        self._stop_playwright()

    def _stop_playwright(self) -> None:
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception as e:
                logger.warning(f"Error stopping Playwright: {e}")
            self._playwright = None

    def render(self, url: str) -> RenderedPage:
        """
        Navigate to a URL, wait for the network to settle, and read the page.

        Navigation problems are reported in RenderedPage.error rather than raised.

        Raises:
            RuntimeError: If the session has not been started
        """
        if self._browser is None:
            raise RuntimeError(
                "Browser is not running. Call start() or use RenderSession as a context manager."
            )

        context = None
        try:
            context = self._browser.new_context(
                viewport=self._config.viewport,
                user_agent=self._user_agent,
            )
            page = context.new_page()
            logger.debug(f"Loading page with JavaScript: {url}")

            response = page.goto(
                url,
                wait_until=self._config.wait_until,
                timeout=self._config.timeout,
            )

            text = page.evaluate(BODY_TEXT_SCRIPT) or ""
            raw_links = page.evaluate(EXTRACT_ANCHORS_SCRIPT, self._link_text_max_length) or []
            links = [Link(url=item["url"], text=item.get("text") or "") for item in raw_links]

            if self._config.screenshot_path:
                page.screenshot(path=self._config.screenshot_path)
                logger.debug(f"Saved debug screenshot to {self._config.screenshot_path}")

            return RenderedPage(
                url=url,
                text=text,
                links=links,
                status_code=response.status if response else 0,
            )

        except Exception as e:
            logger.debug(f"Navigation error for {url}: {e}")
            return RenderedPage(url=url, error=str(e))

        finally:
            if context is not None:
                try:
                    context.close()
                except Exception as e:
                    logger.debug(f"Error closing browser context for {url}: {e}")
