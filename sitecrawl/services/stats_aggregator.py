import logging
from datetime import timedelta
from typing import Dict, List

from sitecrawl.domain.crawl_result import CrawlResult
from sitecrawl.domain.crawl_stats import CrawlStats
from sitecrawl.domain.fetch_outcome import FetchOutcome

logger = logging.getLogger(__name__)


class StatsAccumulator:
    """Running statistics of a single crawl pass.

    Outcomes are folded one at a time as they stream in; the public
    `CrawlStats` snapshot (with its average) only exists after `finalize()`.
    """

    def __init__(self):
        self.total = 0
        self.status_codes: Dict[int, int] = {}
        self.non_200_urls: List[CrawlResult] = []
        self.success_time_sum = timedelta(0)
        self.max_200_time = timedelta(0)

    def fold(self, outcome: FetchOutcome) -> None:
        """Account for one fetch outcome. Must be called once per outcome."""
        self.total += 1
        status_code = outcome.status_code
        server_time = outcome.server_time or timedelta(0)
        self.status_codes[status_code] = self.status_codes.get(status_code, 0) + 1

        if status_code == 200:
            self.success_time_sum += server_time
            if server_time > self.max_200_time:
                self.max_200_time = server_time
        else:
            self.non_200_urls.append(CrawlResult(
                url=outcome.url,
                status_code=status_code,
                time=server_time,
            ))

    def finalize(self) -> CrawlStats:
        """Return the snapshot for this pass, computing the 200 average once."""
        average = timedelta(0)
        total_200 = self.status_codes.get(200, 0)
        if total_200 > 0:
            average = self.success_time_sum / total_200
        return CrawlStats(
            total=self.total,
            status_codes=dict(self.status_codes),
            average_200_time=average,
            max_200_time=self.max_200_time,
            non_200_urls=list(self.non_200_urls),
        )
