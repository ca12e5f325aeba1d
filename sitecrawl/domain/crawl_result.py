"""Crawl result data model."""
from dataclasses import dataclass
from datetime import timedelta
from typing import Tuple


@dataclass(frozen=True)
class CrawlResult:
    """Reported outcome of a single crawled URL that did not answer 200."""

    url: str
    status_code: int
    time: timedelta = timedelta(0)
    linking_urls: Tuple[str, ...] = ()
    """First-hop pages that linked to this URL; empty for seed URLs."""

    def as_dict(self) -> dict:
        return {
            "url": self.url,
            "status-code": self.status_code,
            "server-time": self.time.total_seconds() * 1000,
            "linking-urls": list(self.linking_urls),
        }
