"""Anchor extraction from page markup."""

import logging
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from doclinks.constants import LINK_TEXT_MAX_LENGTH, NO_TEXT_PLACEHOLDER
from doclinks.models import Link

logger = logging.getLogger(__name__)


def resolve_url(page_url: str, href: str) -> Optional[str]:
    """Resolve an href against the page it was found on.

    Args:
        page_url: Absolute URL of the page
        href: Raw href attribute value

    Returns:
        Absolute URL, or None if the href cannot be resolved
    """
    try:
        return urljoin(page_url, href.strip())
    except ValueError as e:
        logger.debug(f"Error processing URL {href}: {e}")
        return None


def link_text(raw: Optional[str], max_length: int = LINK_TEXT_MAX_LENGTH) -> str:
    """Trim visible text and cut it to the bounded length."""
    return (raw or "").strip()[:max_length]


def extract_links(
    page_url: str,
    content: Optional[str],
    max_length: int = LINK_TEXT_MAX_LENGTH,
    placeholder: Optional[str] = NO_TEXT_PLACEHOLDER,
) -> list[Link]:
    """Extract every anchor target from markup, in document order.

    Args:
        page_url: URL the content was retrieved from, used as resolution base
        content: HTML markup
        max_length: Maximum length of the visible link text
        placeholder: Text used for anchors without visible text (None keeps it empty)

    Returns:
        List of Link objects with absolute URLs
    """
    if not content:
        return []

    soup = BeautifulSoup(content, "html.parser")
    links = []

    for anchor in soup.find_all("a"):
        href = anchor.get("href")
        if not href or not href.strip():
            continue

        absolute_url = resolve_url(page_url, href)
        if absolute_url is None:
            continue

        text = link_text(anchor.get_text(), max_length)
        if not text and placeholder is not None:
            text = placeholder

        links.append(Link(url=absolute_url, text=text))

    return links
