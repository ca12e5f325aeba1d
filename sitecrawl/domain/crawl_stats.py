from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List

from sitecrawl.domain.crawl_result import CrawlResult


@dataclass(frozen=True)
class CrawlStats:
    """Aggregate view of one or more crawl passes.

    Instances are snapshots: they are produced by `StatsAccumulator.finalize()`
    or `merge_crawl_stats()` and are not modified afterwards.
    """

    total: int = 0
    status_codes: Dict[int, int] = field(default_factory=dict)
    average_200_time: timedelta = timedelta(0)
    max_200_time: timedelta = timedelta(0)
    non_200_urls: List[CrawlResult] = field(default_factory=list)

    def count(self, status_code: int) -> int:
        return self.status_codes.get(status_code, 0)

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "status-codes": {str(code): n for code, n in sorted(self.status_codes.items())},
            "average-200-time": self.average_200_time.total_seconds() * 1000,
            "max-200-time": self.max_200_time.total_seconds() * 1000,
            "non-200-urls": [r.as_dict() for r in self.non_200_urls],
        }


def _check_average(stats: CrawlStats, name: str) -> None:
    if stats.average_200_time != timedelta(0) and stats.count(200) == 0:
        raise ValueError(
            f"{name} has a non-zero average 200 time ({stats.average_200_time}) but no 200 responses"
        )


def merge_crawl_stats(stats_a: CrawlStats, stats_b: CrawlStats) -> CrawlStats:
    """Merge two sets of crawl statistics into a new one.

    Neither operand is modified. The 200 average is the weighted average of
    both operands; it stays zero when neither side saw a 200 response.
    """
    _check_average(stats_a, "stats_a")
    _check_average(stats_b, "stats_b")

    status_codes: Dict[int, int] = {}
    for codes in (stats_a.status_codes, stats_b.status_codes):
        for code, count in (codes or {}).items():
            status_codes[code] = status_codes.get(code, 0) + count

    average = timedelta(0)
    total_200 = status_codes.get(200, 0)
    if total_200 > 0 and (stats_a.average_200_time or stats_b.average_200_time):
        weighted = stats_a.average_200_time * stats_a.count(200) + stats_b.average_200_time * stats_b.count(200)
        average = weighted / total_200

    return CrawlStats(
        total=stats_a.total + stats_b.total,
        status_codes=status_codes,
        average_200_time=average,
        max_200_time=max(stats_a.max_200_time, stats_b.max_200_time),
        non_200_urls=list(stats_a.non_200_urls) + list(stats_b.non_200_urls),
    )
