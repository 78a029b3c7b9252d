"""Data models for link crawling."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class CrawlState(Enum):
    """Lifecycle of a CrawlEngine."""
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


class FetchStatus(str, Enum):
    """What a single fetch strategy attempt produced."""
    LINKS = "links"
    NOT_FOUND = "not_found"
    EMPTY = "empty"
    FAILED = "failed"
    UNAVAILABLE = "unavailable"


class EventType(str, Enum):
    """Events emitted by the crawl engine."""
    PAGE_STARTED = "page-started"
    PAGE_VISITED = "page-visited"
    LINK_BROKEN = "link-broken"
    CRAWL_COMPLETE = "crawl-complete"


@dataclass(frozen=True)
class Link:
    """An anchor discovered on a page."""

    url: str
    text: str = ""


@dataclass(frozen=True)
class BrokenLink:
    """A link judged broken, together with the page it was found on."""

    url: str
    text: str
    reason: str
    source_page: str

    def to_dict(self) -> dict[str, str]:
        return {
            "url": self.url,
            "text": self.text,
            "reason": self.reason,
            "source_page": self.source_page,
        }


@dataclass
class FetchOutcome:
    """Uniform result of one fetch strategy (or of the whole fallback chain)."""

    status: FetchStatus
    links: list[Link] = field(default_factory=list)
    strategy: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_definitive(self) -> bool:
        """True when the fallback chain can stop at this outcome."""
        if self.status == FetchStatus.NOT_FOUND:
            return True
        return self.status == FetchStatus.LINKS and bool(self.links)

    @property
    def not_found(self) -> bool:
        return self.status == FetchStatus.NOT_FOUND

    @property
    def succeeded(self) -> bool:
        """True when the target was retrieved, whatever it contained."""
        return self.status in (FetchStatus.LINKS, FetchStatus.NOT_FOUND, FetchStatus.EMPTY)

    @classmethod
    def found(cls, links: list[Link], strategy: str) -> "FetchOutcome":
        status = FetchStatus.LINKS if links else FetchStatus.EMPTY
        return cls(status=status, links=list(links), strategy=strategy)

    @classmethod
    def page_not_found(cls, strategy: str) -> "FetchOutcome":
        return cls(status=FetchStatus.NOT_FOUND, strategy=strategy)

    @classmethod
    def failed(cls, error: str, strategy: str) -> "FetchOutcome":
        return cls(status=FetchStatus.FAILED, strategy=strategy, error=error)

    @classmethod
    def unavailable(cls, strategy: str, error: Optional[str] = None) -> "FetchOutcome":
        return cls(status=FetchStatus.UNAVAILABLE, strategy=strategy, error=error)


@dataclass(frozen=True)
class CheckResult:
    """Outcome of checking one link."""

    url: str
    broken: bool = False
    reason: Optional[str] = None
    skipped: bool = False

    @property
    def healthy(self) -> bool:
        return not self.broken and not self.skipped

    @classmethod
    def ok(cls, url: str) -> "CheckResult":
        return cls(url=url)

    @classmethod
    def broken_because(cls, url: str, reason: str) -> "CheckResult":
        return cls(url=url, broken=True, reason=reason)

    @classmethod
    def skip(cls, url: str, reason: str) -> "CheckResult":
        return cls(url=url, skipped=True, reason=reason)


@dataclass
class CrawlSummary:
    """Counters describing a finished crawl."""

    pages_visited: int = 0
    duration_seconds: float = 0.0
    total_broken: int = 0
    pages_with_broken: int = 0
    pages_failed: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "pages_visited": self.pages_visited,
            "duration_seconds": round(self.duration_seconds, 3),
            "total_broken": self.total_broken,
            "pages_with_broken": self.pages_with_broken,
            "pages_failed": self.pages_failed,
        }


@dataclass
class CrawlReport:
    """Everything the reporter needs once a crawl is done."""

    start_url: str
    visited: list[str] = field(default_factory=list)
    broken_links: dict[str, list[BrokenLink]] = field(default_factory=dict)
    failed_pages: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def summary(self) -> CrawlSummary:
        return CrawlSummary(
            pages_visited=len(self.visited),
            duration_seconds=self.duration_seconds,
            total_broken=sum(len(records) for records in self.broken_links.values()),
            pages_with_broken=len(self.broken_links),
            pages_failed=len(self.failed_pages),
        )

    @property
    def seed_failed(self) -> bool:
        return self.start_url in self.failed_pages

    def sorted_broken_links(self) -> list[BrokenLink]:
        """Flatten the collection, ordered by source page.

        The sort is stable, so links on one page keep document order.
        """
        flat = [record for records in self.broken_links.values() for record in records]
        return sorted(flat, key=lambda record: record.source_page)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_url": self.start_url,
            "summary": self.summary.to_dict(),
            "failed_pages": list(self.failed_pages),
            "broken_links": [record.to_dict() for record in self.sorted_broken_links()],
        }


@dataclass
class CrawlEvent:
    """Payload passed to engine subscribers."""

    type: EventType
    url: Optional[str] = None
    link_count: int = 0
    queue_length: int = 0
    not_found: bool = False
    broken: list[BrokenLink] = field(default_factory=list)
    broken_link: Optional[BrokenLink] = None
    report: Optional[CrawlReport] = None
