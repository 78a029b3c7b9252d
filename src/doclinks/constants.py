# src/doclinks/constants.py
"""Centralized constants for the documentation link checker.

Values that a crawl may want to override live in config.py (CrawlConfig);
the ones here are fixed policy.
"""

# =============================================================================
# Not-Found Detection
# =============================================================================

# Phrases that mark a page as a soft 404. Checked in order against the
# lower-cased visible body text; the first hit wins. Coarse on purpose: a page
# that merely talks about "error handling" is flagged too.
NOT_FOUND_PATTERNS = (
    "page not found",
    "404",
    "not found",
    "does not exist",
    "error",
    "cannot be found",
    "this page was not found",  # Docusaurus
    "we could not find what you were looking for",  # Docusaurus
    "broken link",  # Docusaurus
)

# Reason string for links whose target renders a not-found page
NOT_FOUND_REASON = "Page Not Found message in content"


# =============================================================================
# Link Extraction
# =============================================================================

# Visible link text is trimmed and cut to this many characters
LINK_TEXT_MAX_LENGTH = 50

# Substituted for anchors without visible text
NO_TEXT_PLACEHOLDER = "[No text]"

# Links starting with any of these are never fetched
SKIPPED_LINK_PREFIXES = ("#", "javascript:", "mailto:", "tel:")


# =============================================================================
# Network
# =============================================================================

DEFAULT_USER_AGENT = "Mozilla/5.0 DevSite Link Checker"

# Only this status counts as a healthy link
SUCCESS_STATUS = 200

# Seconds
PAGE_FETCH_TIMEOUT = 10
LINK_CHECK_TIMEOUT = 5

# Milliseconds (Playwright convention)
RENDER_TIMEOUT_MS = 30000

# External content-retrieval command used as the last resort
DEFAULT_FETCH_COMMAND = "curl"


# =============================================================================
# Render Backend
# =============================================================================

# Well-known Chrome/Chromium install locations, searched in order
CHROME_PATHS = (
    # macOS
    "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
    "/Applications/Google Chrome Canary.app/Contents/MacOS/Google Chrome Canary",
    "/Applications/Chromium.app/Contents/MacOS/Chromium",
    # Linux
    "/usr/bin/google-chrome",
    "/usr/bin/chromium-browser",
    "/usr/bin/chromium",
    # Windows
    "C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe",
    "C:\\Program Files (x86)\\Google\\Chrome\\Application\\chrome.exe",
)

DEFAULT_DEBUG_SCREENSHOT = "debug-screenshot.png"


# =============================================================================
# Reporting
# =============================================================================

# Seconds between "Pages: N | Queue: M" progress lines
PROGRESS_INTERVAL_SECONDS = 5.0

# Summary table column widths
TABLE_SOURCE_WIDTH = 30
TABLE_LINK_WIDTH = 30
TABLE_REASON_WIDTH = 12

# Debug progress line every N links checked on a page
LINK_PROGRESS_EVERY = 10
