"""Custom exceptions for SitemapCrawl services."""


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class SitemapError(Exception):
    """Raised when a sitemap was retrieved but cannot be used."""

    def __init__(self, sitemap_url: str, reason: str):
        self.sitemap_url = sitemap_url
        self.reason = reason
        super().__init__(f"Sitemap '{sitemap_url}' {reason}")


class CrawlError(Exception):
    """Base class for crawl determinations.

    These are returned in `CrawlOutcome.error` rather than raised, so the
    accumulated stats stay inspectable.
    """


class NothingCrawledError(CrawlError):
    def __init__(self):
        super().__init__("No URL crawled")


class PartialCrawlFailureError(CrawlError):
    """Some crawled URLs answered with a status other than 200."""

    def __init__(self, failed: int, total: int):
        self.failed = failed
        self.total = total
        super().__init__(
            f"Some URLs had a different status code than 200 ({failed} of {total})"
        )
