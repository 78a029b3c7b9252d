"""Page retrieval through an ordered fallback chain of strategies."""

import logging
from typing import Sequence

from doclinks.models import FetchOutcome, FetchStatus
from doclinks.strategies import FetchStrategy

logger = logging.getLogger(__name__)


class PageFetcher:
    """Tries each strategy in order until one gives a definitive answer.

    A definitive answer is a non-empty list of links or a not-found signal.
    Unavailable strategies are skipped; failed or empty attempts fall through.
    When nothing is definitive the page is treated as having no links.
    """

    def __init__(self, strategies: Sequence[FetchStrategy]):
        self.strategies = list(strategies)

    def fetch(self, url: str) -> FetchOutcome:
        """Retrieve a page and its outbound links.

        Args:
            url: Page URL

        Returns:
            The first definitive FetchOutcome, otherwise an EMPTY outcome when
            any strategy reached the page, or FAILED when none did
        """
        reached = False
        last_error = None

        for strategy in self.strategies:
            if not strategy.available:
                logger.debug(f"Skipping unavailable {strategy.name} strategy for {url}")
                continue

            try:
                outcome = strategy.attempt(url)
            except Exception as e:
                logger.debug(f"{strategy.name} strategy raised for {url}: {e}")
                outcome = FetchOutcome.failed(str(e), strategy.name)

            if outcome.is_definitive:
                logger.debug(f"{strategy.name} strategy answered for {url}: {outcome.status.value}")
                return outcome

            if outcome.succeeded:
                reached = True
            elif outcome.error:
                last_error = outcome.error

            logger.debug(
                f"{strategy.name} strategy gave no links for {url} "
                f"({outcome.status.value}), falling back"
            )

        if reached:
            return FetchOutcome(status=FetchStatus.EMPTY)
        return FetchOutcome(status=FetchStatus.FAILED, error=last_error or "no strategy could retrieve the page")
