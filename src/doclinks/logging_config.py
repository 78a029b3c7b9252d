"""Logging configuration for the link checker.

Crawl output (progress, verbose blocks, the summary table) is printed by the
reporter; log records carry internal tracing and go to stderr by default so
they never mix with a report written to stdout.
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

CONSOLE_FORMAT = '%(levelname)s %(name)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Libraries whose DEBUG output drowns the crawl trace
NOISY_LOGGERS = ('urllib3', 'charset_normalizer', 'asyncio')


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure logging for the link checker.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL);
               unknown names fall back to INFO
        log_file: Optional log file path; its directory is created if needed
        stream: Console stream for log records (stderr if None)
        quiet_loggers: Third-party loggers pinned to WARNING
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers = [console_handler]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
