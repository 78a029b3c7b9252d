"""Documentation site crawler that reports broken links."""

__version__ = "0.1.0"

from doclinks.checker import LinkChecker
from doclinks.classifier import is_not_found
from doclinks.config import CrawlConfig, settings
from doclinks.engine import CrawlEngine
from doclinks.extractor import extract_links
from doclinks.models import (
    BrokenLink,
    CheckResult,
    CrawlEvent,
    CrawlReport,
    CrawlState,
    CrawlSummary,
    EventType,
    FetchOutcome,
    FetchStatus,
    Link,
)
from doclinks.page_fetcher import PageFetcher
from doclinks.renderer import RenderSession, RenderUnavailableError
from doclinks.report import ConsoleReporter

__all__ = [
    # Core
    "CrawlEngine",
    "PageFetcher",
    "LinkChecker",
    "RenderSession",
    "RenderUnavailableError",
    "ConsoleReporter",
    "extract_links",
    "is_not_found",
    # Models
    "Link",
    "BrokenLink",
    "CheckResult",
    "FetchOutcome",
    "FetchStatus",
    "CrawlEvent",
    "CrawlReport",
    "CrawlState",
    "CrawlSummary",
    "EventType",
    # Config
    "CrawlConfig",
    "settings",
]
