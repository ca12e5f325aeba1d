"""Domain objects for SitemapCrawl - explicit re-exports to satisfy linters."""
from .link import Link as Link
from .link import LinkType as LinkType
from .crawl_result import CrawlResult as CrawlResult
from .crawl_stats import CrawlStats as CrawlStats
from .crawl_config import CrawlConfig as CrawlConfig
from .crawl_config import CrawlLinksConfig as CrawlLinksConfig
from .crawl_config import HttpConfig as HttpConfig
from .crawl_outcome import CrawlOutcome as CrawlOutcome
from .fetch_outcome import FetchOutcome as FetchOutcome

__all__ = [
    "Link",
    "LinkType",
    "CrawlResult",
    "CrawlStats",
    "CrawlConfig",
    "CrawlLinksConfig",
    "HttpConfig",
    "CrawlOutcome",
    "FetchOutcome",
]
