from datetime import datetime, timedelta
from typing import List, NamedTuple, Optional

from .link import Link


class FetchOutcome(NamedTuple):
    """One attempted fetch as streamed back by a fetcher.

    `status_code` is 0 when no HTTP response was obtained.
    """
    url: str
    status_code: int
    server_time: timedelta = timedelta(0)
    end_time: Optional[datetime] = None
    links: List[Link] = []
