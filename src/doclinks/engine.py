"""Crawl engine: breadth-first traversal of a documentation site."""

import logging
import time
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Set

import requests

from doclinks.browser_config import RenderConfig
from doclinks.checker import LinkChecker
from doclinks.config import CrawlConfig
from doclinks.constants import LINK_PROGRESS_EVERY
from doclinks.models import (
    BrokenLink,
    CrawlEvent,
    CrawlReport,
    CrawlState,
    EventType,
    FetchStatus,
)
from doclinks.page_fetcher import PageFetcher
from doclinks.renderer import RenderSession, RenderUnavailableError
from doclinks.strategies import CommandStrategy, HttpStrategy, RenderStrategy

logger = logging.getLogger(__name__)

EventCallback = Callable[[CrawlEvent], None]


class CrawlEngine:
    """Crawls a site from a seed URL and collects broken links.

    Pages are visited in strict FIFO order (breadth-first) one at a time, and
    the links on each page are checked one at a time in document order.
    Healthy same-domain links that were never visited or queued join the
    frontier; broken ones are recorded under the page they were found on.

    An engine runs once. Frontier, visited-set and broken-link collection are
    owned by the instance, so independent crawls can run side by side.
    """

    def __init__(
        self,
        start_url: str,
        config: Optional[CrawlConfig] = None,
        http_session: Optional[requests.Session] = None,
        render_session: Optional[RenderSession] = None,
        command_runner: Optional[Callable] = None,
    ):
        """Initialize the engine.

        Args:
            start_url: Seed URL; also defines the crawled domain
            config: Crawl configuration (defaults from CrawlConfig())
            http_session: requests session for page fetches and link checks
            render_session: Render backend to use when config.use_render is set
                            (a RenderSession is created on demand if None)
            command_runner: subprocess.run compatible callable for the command fallback
        """
        self.start_url = start_url
        self.config = config or CrawlConfig()
        self.state = CrawlState.IDLE

        self._render_session = render_session
        self.render = RenderStrategy(None)
        self.http = HttpStrategy(
            session=http_session,
            user_agent=self.config.user_agent,
            timeout=self.config.page_timeout,
            link_text_max_length=self.config.link_text_max_length,
        )
        command_kwargs = {"runner": command_runner} if command_runner else {}
        self.command = CommandStrategy(
            command=self.config.fetch_command,
            timeout=self.config.page_timeout,
            link_text_max_length=self.config.link_text_max_length,
            **command_kwargs,
        )
        self.fetcher = PageFetcher([self.render, self.http, self.command])
        self.checker = LinkChecker(
            start_url,
            http=self.http,
            render=self.render,
            timeout=self.config.check_timeout,
        )

        self.frontier: Deque[str] = deque()
        self._queued: Set[str] = set()
        self.visited_urls: Set[str] = set()
        self._visit_order: List[str] = []
        self.broken_links: Dict[str, List[BrokenLink]] = {}
        self.failed_pages: List[str] = []

        self._subscribers: Dict[EventType, List[EventCallback]] = {}
        self._started_at: Optional[float] = None
        self.report: Optional[CrawlReport] = None

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def subscribe(self, event_type: EventType, callback: EventCallback) -> None:
        """Register a callback invoked synchronously for each event of a type."""
        self._subscribers.setdefault(EventType(event_type), []).append(callback)

    def _emit(self, event: CrawlEvent) -> None:
        for callback in self._subscribers.get(event.type, []):
            callback(event)

    # ------------------------------------------------------------------
    # Frontier
    # ------------------------------------------------------------------

    def enqueue(self, url: str) -> bool:
        """Add a URL to the frontier tail unless it was visited or is queued.

        Returns:
            True if the URL was added
        """
        if url in self.visited_urls or url in self._queued:
            return False
        self.frontier.append(url)
        self._queued.add(url)
        return True

    def _dequeue(self) -> str:
        url = self.frontier.popleft()
        self._queued.discard(url)
        return url

    @property
    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        return time.monotonic() - self._started_at

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> CrawlReport:
        """Crawl until the frontier is empty.

        The render backend (if requested) is opened first and always closed
        before this method returns or raises.

        Returns:
            CrawlReport with visited pages, broken links and timing

        Raises:
            RuntimeError: If the engine has already been run
        """
        if self.state != CrawlState.IDLE:
            raise RuntimeError(f"Crawl already {self.state.value}; create a new engine to crawl again")

        logger.info(f"Starting crawl for broken links from: {self.start_url}")
        self.state = CrawlState.RUNNING
        self._started_at = time.monotonic()
        self.enqueue(self.start_url)

        try:
            self._start_render()

            while self.frontier:
                url = self._dequeue()

                # Already visited through a duplicate frontier entry
                if url in self.visited_urls:
                    continue

                self.visited_urls.add(url)
                self._visit_order.append(url)
                self._emit(CrawlEvent(
                    type=EventType.PAGE_STARTED,
                    url=url,
                    queue_length=len(self.frontier),
                ))
                self.process_page(url)

            self.state = CrawlState.DRAINING
        finally:
            self._close_render()

        self.report = CrawlReport(
            start_url=self.start_url,
            visited=list(self._visit_order),
            broken_links=self.broken_links,
            failed_pages=list(self.failed_pages),
            duration_seconds=self.elapsed,
        )
        self.state = CrawlState.DONE

        summary = self.report.summary
        logger.info(
            f"Crawl complete: {summary.pages_visited} pages, "
            f"{summary.total_broken} broken links on {summary.pages_with_broken} pages"
        )
        self._emit(CrawlEvent(type=EventType.CRAWL_COMPLETE, report=self.report))
        return self.report

    def process_page(self, url: str) -> List[BrokenLink]:
        """Fetch one page, check its links, and fold the results in.

        Args:
            url: Page being visited

        Returns:
            Broken links found on the page, in document order
        """
        logger.debug(f"Processing page: {url}")
        outcome = self.fetcher.fetch(url)

        if outcome.not_found:
            logger.debug(f'Skipping {url} as it appears to be a "Page Not Found" page')
            self._emit(CrawlEvent(type=EventType.PAGE_VISITED, url=url, not_found=True))
            return []

        if outcome.status == FetchStatus.FAILED:
            self.failed_pages.append(url)
            if url == self.start_url:
                logger.warning(f"Could not retrieve start URL {url}: {outcome.error}")
            else:
                logger.debug(f"Could not retrieve {url}: {outcome.error}")

        links = outcome.links
        logger.debug(f"Found {len(links)} links on page {url}")

        broken_on_page: List[BrokenLink] = []
        for index, link in enumerate(links):
            if index % LINK_PROGRESS_EVERY == 0 or index == len(links) - 1:
                percentage = round(index / len(links) * 100)
                logger.debug(f"Checking link {index + 1}/{len(links)} ({percentage}%)")

            result = self.checker.check(link)
            if result.skipped:
                continue

            if result.broken:
                record = BrokenLink(
                    url=link.url,
                    text=link.text,
                    reason=result.reason,
                    source_page=url,
                )
                broken_on_page.append(record)
                self._emit(CrawlEvent(type=EventType.LINK_BROKEN, url=url, broken_link=record))
            else:
                self.enqueue(link.url)

        if broken_on_page:
            self.broken_links[url] = broken_on_page

        self._emit(CrawlEvent(
            type=EventType.PAGE_VISITED,
            url=url,
            link_count=len(links),
            queue_length=len(self.frontier),
            broken=list(broken_on_page),
        ))
        return broken_on_page

    # ------------------------------------------------------------------
    # Render backend lifecycle
    # ------------------------------------------------------------------

    def _start_render(self) -> None:
        if not self.config.use_render:
            logger.debug("Using basic HTTP mode (no JavaScript)")
            return

        session = self._render_session
        if session is None:
            render_config = RenderConfig(
                timeout=self.config.render_timeout_ms,
                screenshot_path=self.config.debug_screenshot if self.config.debug else None,
            )
            session = RenderSession(
                render_config,
                user_agent=self.config.user_agent,
                link_text_max_length=self.config.link_text_max_length,
            )

        try:
            session.start()
        except RenderUnavailableError as e:
            logger.warning(f"Could not start browser ({e}). Using basic HTTP mode.")
            return

        self._render_session = session
        self.render.session = session

    def _close_render(self) -> None:
        if self.render.session is not None:
            self.render.session.close()
            self.render.session = None
