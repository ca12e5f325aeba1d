from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class CrawlLinksConfig:
    """Which discovered links get a second fetch pass."""

    crawl_external_links: bool = False
    crawl_hyperlinks: bool = False
    crawl_images: bool = False

    @property
    def any_enabled(self) -> bool:
        return self.crawl_external_links or self.crawl_hyperlinks or self.crawl_images


@dataclass(frozen=True)
class HttpConfig:
    """Fetch-layer settings handed to the fetcher for one pass."""

    user: Optional[str] = None
    password: Optional[str] = None
    parse_links: bool = False
    host: Optional[str] = None

    @property
    def auth(self) -> Optional[tuple[str, str]]:
        if not self.user:
            return None
        return (self.user, self.password or "")


@dataclass(frozen=True)
class CrawlConfig:
    """Configuration for one crawl invocation.

    `throttle` is the maximum number of parallel HTTP requests. `host`, when
    set, overrides the hostname used in the sitemap URLs.
    """

    throttle: int = 1
    host: Optional[str] = None
    http: HttpConfig = field(default_factory=HttpConfig)
    links: CrawlLinksConfig = field(default_factory=CrawlLinksConfig)
    fetcher: Any = None

    @property
    def should_extract_links(self) -> bool:
        return self.links.any_enabled
