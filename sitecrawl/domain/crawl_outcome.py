"""Crawl invocation outcome."""
from typing import NamedTuple, Optional

from sitecrawl.domain.crawl_stats import CrawlStats
from sitecrawl.exceptions import CrawlError


class CrawlOutcome(NamedTuple):
    """Result of a crawl invocation.

    The error is returned rather than raised so that the stats of a failed
    crawl can still be reported.
    """
    stats: CrawlStats
    """Merged statistics of every crawl pass"""

    stopped: bool
    """True if the crawl was interrupted, independent of `error`"""

    error: Optional[CrawlError] = None
    """None on success, otherwise NothingCrawledError or PartialCrawlFailureError"""

    @property
    def ok(self) -> bool:
        return self.error is None
