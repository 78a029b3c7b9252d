"""Soft-404 detection for pages that answer 200 but say "not found"."""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from doclinks.constants import NOT_FOUND_PATTERNS

logger = logging.getLogger(__name__)


def match_not_found_text(text: Optional[str]) -> Optional[str]:
    """Return the first not-found phrase contained in visible text, if any.

    Args:
        text: Visible page text (already extracted from markup)

    Returns:
        The matching phrase, or None when the text looks like a normal page
    """
    if not text:
        return None

    lowered = text.lower()
    for pattern in NOT_FOUND_PATTERNS:
        if pattern in lowered:
            return pattern
    return None


def body_text(content: str) -> str:
    """Extract the visible text of the document body.

    Fragments without a <body> element are treated as body content.
    """
    soup = BeautifulSoup(content, "html.parser")
    root = soup.body or soup
    return root.get_text()


def is_not_found(content: Optional[str]) -> bool:
    """Decide whether markup represents a "page not found" page.

    Args:
        content: Raw HTML of the page

    Returns:
        True if any not-found phrase appears in the body text
    """
    if not content:
        return False

    pattern = match_not_found_text(body_text(content))
    if pattern is not None:
        logger.debug(f'Found error pattern in page: "{pattern}"')
        return True
    return False
