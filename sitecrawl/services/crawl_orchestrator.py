import dataclasses
import logging
import threading
from datetime import timedelta
from typing import Dict, Iterable, List, Optional

from sitecrawl.domain.crawl_config import CrawlConfig, CrawlLinksConfig
from sitecrawl.domain.crawl_outcome import CrawlOutcome
from sitecrawl.domain.crawl_result import CrawlResult
from sitecrawl.domain.crawl_stats import CrawlStats, merge_crawl_stats
from sitecrawl.exceptions import NothingCrawledError, PartialCrawlFailureError
from sitecrawl.services.link_expansion import LinkExpansionPolicy
from sitecrawl.services.phase_runner import CrawlPhaseRunner, PhaseResult

logger = logging.getLogger(__name__)


class CrawlOrchestrator:
    """Crawl the seed URLs, then optionally one hop of the links they contain.

    Both passes run through `CrawlConfig.fetcher`. Failures are reported
    through `CrawlOutcome.error`; nothing in here raises for a failed or
    empty crawl.
    """

    def __init__(self, link_expansion_policy: Optional[LinkExpansionPolicy] = None):
        self.link_expansion_policy = link_expansion_policy or LinkExpansionPolicy()

    def _runner(self, config: CrawlConfig) -> CrawlPhaseRunner:
        if config.fetcher is None:
            raise ValueError("config.fetcher is required for crawl")
        return CrawlPhaseRunner(config.fetcher)

    def _normalize(self, config: CrawlConfig) -> CrawlConfig:
        if config is None:
            raise ValueError("config is required for crawl")
        if config.throttle is None or config.throttle <= 0:
            logger.warning("Invalid throttle value, defaulting to 1.")
            config = dataclasses.replace(config, throttle=1)
        http = dataclasses.replace(
            config.http,
            parse_links=config.should_extract_links,
            host=config.host,
        )
        return dataclasses.replace(config, http=http)

    def crawl(self, urls: Iterable[str], config: CrawlConfig, stop_event=None) -> CrawlOutcome:
        if stop_event is None:
            stop_event = threading.Event()
        urls = list(urls)
        config = self._normalize(config)
        runner = self._runner(config)

        first = runner.run(urls, config.http, config.throttle, stop_event)
        stats = first.stats
        success_time_sum = first.success_time_sum

        if config.http.parse_links:
            if stop_event.is_set():
                logger.info("Crawl stopped; skipping linked URLs")
            else:
                links_stats, links_success_time_sum = self._crawl_links(runner, first, urls, config, stop_event)
                stats = merge_crawl_stats(stats, links_stats)
                success_time_sum += links_success_time_sum

        total_200 = stats.count(200)
        if total_200 > 0:
            stats = dataclasses.replace(stats, average_200_time=success_time_sum / total_200)

        error = None
        if stats.total == 0:
            error = NothingCrawledError()
        elif stats.total != total_200:
            error = PartialCrawlFailureError(failed=stats.total - total_200, total=stats.total)

        stopped = stop_event.is_set()
        logger.info(
            "Crawl finished: %d URLs, %d with status 200, stopped=%s",
            stats.total,
            total_200,
            stopped,
        )
        return CrawlOutcome(stats=stats, stopped=stopped, error=error)

    def _crawl_links(
        self,
        runner: CrawlPhaseRunner,
        first: PhaseResult,
        crawled_urls: List[str],
        config: CrawlConfig,
        stop_event,
    ) -> tuple[CrawlStats, timedelta]:
        expansion = self.link_expansion_policy.expand(first.results, crawled_urls, config.links)

        # Second hop only: no link parsing, no following.
        links_config = dataclasses.replace(
            config,
            http=dataclasses.replace(config.http, parse_links=False),
            links=CrawlLinksConfig(),
        )
        second = runner.run(expansion.urls, links_config.http, links_config.throttle, stop_event)

        annotated = [
            self._with_linking_urls(result, expansion.linking_urls)
            for result in second.stats.non_200_urls
        ]
        stats = dataclasses.replace(second.stats, non_200_urls=annotated)
        return stats, second.success_time_sum

    def _with_linking_urls(self, result: CrawlResult, linking_urls: Dict[str, List[str]]) -> CrawlResult:
        referrers = tuple(dict.fromkeys(linking_urls.get(result.url, [])))
        return dataclasses.replace(result, linking_urls=referrers)
