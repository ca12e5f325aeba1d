from __future__ import annotations

import logging
import queue
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import Iterable, Iterator, Optional, Protocol
from urllib.parse import urlsplit, urlunsplit

from sitecrawl.domain.crawl_config import HttpConfig
from sitecrawl.domain.fetch_outcome import FetchOutcome
from sitecrawl.domain.link import Link
from sitecrawl.exceptions import HttpFetchError

logger = logging.getLogger(__name__)

# Queued in place of an outcome when a worker skipped its URL after cancellation.
_SKIPPED = object()


class Fetcher(Protocol):
    """Fetch a set of URLs concurrently and stream back one outcome per URL.

    At most `throttle` requests are in flight at once. The returned iterator
    ends once every URL was attempted, or promptly after `stop_event` is set.
    """

    def fetch(
        self,
        urls: Iterable[str],
        http_config: HttpConfig,
        throttle: int,
        stop_event=None,
    ) -> Iterator[FetchOutcome]: ...


def override_host(url: str, host: Optional[str]) -> str:
    """Return `url` with its network location replaced by `host`."""
    if not host:
        return url
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, host, parts.path, parts.query, parts.fragment))


def restore_host(url: str, host: Optional[str], original_url: str) -> str:
    """Undo `override_host` for a URL discovered on an overridden page."""
    if not host:
        return url
    parts = urlsplit(url)
    if parts.netloc.lower() != host.lower():
        return url
    original = urlsplit(original_url)
    return urlunsplit((parts.scheme, original.netloc, parts.path, parts.query, parts.fragment))


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ConcurrentHttpFetcher:
    """Thread-pool fetcher backed by `HttpService`.

    Outcomes keep the URL as it was requested by the caller even when the
    request itself was sent to an overriding host.
    """

    def __init__(self, http_service, link_extractor=None, poll_interval: float = 0.1):
        self.http_service = http_service
        self.link_extractor = link_extractor
        self.poll_interval = poll_interval

    def _is_stopped(self, stop_event) -> bool:
        return stop_event is not None and getattr(stop_event, "is_set", lambda: False)()

    def _wants_links(self, http_config: HttpConfig, content_type: Optional[str]) -> bool:
        if not http_config.parse_links or self.link_extractor is None:
            return False
        return content_type is None or "html" in content_type.lower()

    def fetch_one(self, url: str, http_config: HttpConfig) -> FetchOutcome:
        target = override_host(url, http_config.host)
        try:
            response = self.http_service.fetch(target, auth=http_config.auth)
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            return FetchOutcome(url=url, status_code=0, server_time=timedelta(0), end_time=_now())
        end_time = _now()

        links = []
        if self._wants_links(http_config, response.content_type):
            hosts = [http_config.host] if http_config.host else []
            try:
                links = self.link_extractor.extract_links(url, response.text, hosts=hosts)
                if http_config.host:
                    links = [
                        Link(restore_host(link.target_url, http_config.host, url), link.type, link.is_external)
                        for link in links
                    ]
            except Exception:
                logger.exception("Error extracting links from %s", url)

        return FetchOutcome(
            url=url,
            status_code=response.status_code,
            server_time=response.elapsed,
            end_time=end_time,
            links=links,
        )

    def _work(self, url: str, http_config: HttpConfig, stop_event, results: queue.Queue) -> None:
        if self._is_stopped(stop_event):
            results.put(_SKIPPED)
            return
        try:
            outcome = self.fetch_one(url, http_config)
        except Exception as e:
            logger.error("Fetch error for %s: %s", url, e, exc_info=True)
            outcome = FetchOutcome(url=url, status_code=0, server_time=timedelta(0), end_time=_now())
        results.put(outcome)

    def fetch(
        self,
        urls: Iterable[str],
        http_config: HttpConfig,
        throttle: int,
        stop_event=None,
    ) -> Iterator[FetchOutcome]:
        urls = list(urls)
        if not urls:
            return
        throttle = max(1, int(throttle))
        results: queue.Queue = queue.Queue()
        executor = ThreadPoolExecutor(max_workers=throttle, thread_name_prefix="fetch")
        try:
            for url in urls:
                executor.submit(self._work, url, http_config, stop_event, results)

            remaining = len(urls)
            while remaining:
                if self._is_stopped(stop_event):
                    logger.info("Fetch stopped with %d URLs outstanding", remaining)
                    return
                try:
                    item = results.get(timeout=self.poll_interval)
                except queue.Empty:
                    continue
                remaining -= 1
                if item is not _SKIPPED:
                    yield item
        finally:
            # Queued URLs are dropped; requests already in flight finish in the background.
            executor.shutdown(wait=False, cancel_futures=True)
