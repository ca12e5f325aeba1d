import logging
from typing import Dict, Iterable, List, NamedTuple

from sitecrawl.domain.crawl_config import CrawlLinksConfig
from sitecrawl.domain.fetch_outcome import FetchOutcome
from sitecrawl.domain.link import Link, LinkType

logger = logging.getLogger(__name__)


class LinkExpansion(NamedTuple):
    urls: List[str]
    """Second-hop URLs to crawl, in first-seen order"""

    linking_urls: Dict[str, List[str]]
    """For each second-hop URL, the first-hop pages that referenced it"""


class LinkExpansionPolicy:
    """Decide which links found during the first pass are crawled next."""

    def should_follow(self, link: Link, links_config: CrawlLinksConfig) -> bool:
        if link.is_external and not links_config.crawl_external_links:
            return False
        if link.type == LinkType.HYPERLINK and not links_config.crawl_hyperlinks:
            return False
        if link.type == LinkType.IMAGE and not links_config.crawl_images:
            return False
        return True

    def expand(
        self,
        results: Iterable[FetchOutcome],
        crawled_urls: Iterable[str],
        links_config: CrawlLinksConfig,
    ) -> LinkExpansion:
        linked: Dict[str, List[str]] = {}
        for result in results:
            for link in result.links or []:
                if not self.should_follow(link, links_config):
                    logger.debug("Skipping (policy) %s linked from %s", link.target_url, result.url)
                    continue
                linked.setdefault(link.target_url, []).append(result.url)

        for crawled_url in crawled_urls:
            linked.pop(crawled_url, None)

        logger.info("Found %d new linked URLs to crawl", len(linked))
        return LinkExpansion(urls=list(linked), linking_urls=linked)
