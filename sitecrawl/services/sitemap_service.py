import logging
import warnings
from typing import List
from urllib.parse import urlparse

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from sitecrawl.exceptions import HttpFetchError, SitemapError

logger = logging.getLogger(__name__)


class SitemapService:
    """Read the page URLs listed in an XML sitemap.

    A sitemap index is followed one level deep: the sitemaps it lists are
    fetched, but indexes nested inside them are not.
    """

    def __init__(self, http_service, parser: str = "html.parser"):
        self.http_service = http_service
        self.parser = parser

    def _load(self, sitemap_url: str) -> BeautifulSoup:
        response = self.http_service.fetch(sitemap_url)
        if response.status_code != 200:
            raise SitemapError(sitemap_url, f"returned status {response.status_code}")
        if not response.text or not response.text.strip():
            raise SitemapError(sitemap_url, "is empty")
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
            return BeautifulSoup(response.text, self.parser)

    def _locations(self, soup: BeautifulSoup, entry_tag: str) -> List[str]:
        locations = []
        for entry in soup.find_all(entry_tag):
            loc = entry.find("loc")
            if loc is None:
                logger.error("Skipping sitemap %s entry without <loc>", entry_tag)
                continue
            locations.append(loc.get_text(strip=True))
        return locations

    def _valid(self, url: str) -> bool:
        try:
            parsed = urlparse(url)
        except ValueError as e:
            logger.error("Skipping malformed sitemap URL %r: %s", url, e)
            return False
        if not parsed.scheme or not parsed.netloc:
            logger.error("Skipping malformed sitemap URL %r", url)
            return False
        return True

    def get_sitemap_urls(self, sitemap_url: str) -> List[str]:
        """Return every URL found in the sitemap, and in sitemaps it lists directly.

        Fetch and parse failures of `sitemap_url` itself propagate to the caller.
        """
        soup = self._load(sitemap_url)
        urls = self._locations(soup, "url")

        for child_url in self._locations(soup, "sitemap"):
            if not self._valid(child_url):
                continue
            try:
                urls.extend(self._locations(self._load(child_url), "url"))
            except (HttpFetchError, SitemapError) as e:
                logger.error("Skipping child sitemap %s: %s", child_url, e)

        valid = [url for url in urls if self._valid(url)]
        logger.info("Found %d URLs in sitemap %s", len(valid), sitemap_url)
        return valid
