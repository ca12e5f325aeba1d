import logging
from typing import Iterable, List, Optional
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup

from sitecrawl.domain.link import Link, LinkType

logger = logging.getLogger(__name__)

_FOLLOWABLE_SCHEMES = ("http", "https")


class ContentReviewService:
    """Extract typed links (hyperlinks and images) from an HTML page."""

    def __init__(self, parser: str = "html.parser"):
        self.parser = parser

    def _strip_www(self, host: str) -> str:
        return host[4:] if host.startswith("www.") else host

    def _same_host(self, base: Optional[str], other: Optional[str]) -> bool:
        # Subdomains count as the same site: www.example.com and blog.example.com.
        if not base or not other:
            return False
        base, other = self._strip_www(base), self._strip_www(other)
        return base == other or other.endswith('.' + base)

    def _resolve(self, base_url: str, ref: Optional[str]) -> Optional[str]:
        if not ref:
            return None
        ref = ref.strip()
        if not ref:
            return None
        try:
            absolute, _fragment = urldefrag(urljoin(base_url, ref))
            parsed = urlparse(absolute)
        except ValueError:
            logger.debug("Skipping malformed link %r on %s", ref, base_url)
            return None
        if parsed.scheme not in _FOLLOWABLE_SCHEMES or not parsed.hostname:
            return None
        return absolute

    def is_external(self, page_url: str, target_url: str, hosts: Iterable[str] = ()) -> bool:
        target_host = urlparse(target_url).hostname
        own_hosts = [urlparse(page_url).hostname] + [urlparse("//" + h).hostname for h in hosts if h]
        return not any(self._same_host(host, target_host) for host in own_hosts)

    def extract_links(self, base_url: str, html: str, hosts: Iterable[str] = ()) -> List[Link]:
        """Return the links of `html` resolved against `base_url`.

        `hosts` lists extra hostnames considered internal besides the page's own.
        """
        if not html:
            return []
        hosts = list(hosts)
        soup = BeautifulSoup(html, self.parser)
        links = []
        for tag_name, attr, link_type in (("a", "href", LinkType.HYPERLINK), ("img", "src", LinkType.IMAGE)):
            for tag in soup.find_all(tag_name, **{attr: True}):
                target = self._resolve(base_url, tag.get(attr))
                if target is None:
                    continue
                links.append(Link(
                    target_url=target,
                    type=link_type,
                    is_external=self.is_external(base_url, target, hosts),
                ))
        return links
