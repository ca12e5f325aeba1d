import logging
from datetime import timedelta
from typing import Iterable, List, NamedTuple

from sitecrawl.domain.crawl_config import HttpConfig
from sitecrawl.domain.crawl_stats import CrawlStats
from sitecrawl.domain.fetch_outcome import FetchOutcome
from sitecrawl.services.fetcher import Fetcher
from sitecrawl.services.stats_aggregator import StatsAccumulator

logger = logging.getLogger(__name__)


class PhaseResult(NamedTuple):
    results: List[FetchOutcome]
    stats: CrawlStats
    success_time_sum: timedelta


class CrawlPhaseRunner:
    """Drive one throttled fetch pass and aggregate what comes back.

    Throttling, transport and cancellation handling belong to the fetcher;
    the runner only consumes the stream until the fetcher closes it.
    """

    def __init__(self, fetcher: Fetcher):
        self.fetcher = fetcher

    def _is_stopped(self, stop_event) -> bool:
        return stop_event is not None and getattr(stop_event, "is_set", lambda: False)()

    def run(self, urls: Iterable[str], http_config: HttpConfig, throttle: int, stop_event=None) -> PhaseResult:
        urls = list(urls)
        throttle = max(1, int(throttle))
        accumulator = StatsAccumulator()
        results: List[FetchOutcome] = []

        logger.info("Crawling %d URLs (throttle=%d)", len(urls), throttle)
        for outcome in self.fetcher.fetch(urls, http_config, throttle, stop_event):
            accumulator.fold(outcome)
            results.append(outcome)
            if outcome.status_code == 200:
                logger.debug("%s -> %s in %s", outcome.url, outcome.status_code, outcome.server_time)
            else:
                logger.warning("%s -> %s", outcome.url, outcome.status_code)

        if self._is_stopped(stop_event):
            logger.info("Crawl pass stopped after %d of %d URLs", len(results), len(urls))

        return PhaseResult(
            results=results,
            stats=accumulator.finalize(),
            success_time_sum=accumulator.success_time_sum,
        )
