import time
from datetime import timedelta
from typing import Callable, Optional

import requests

from sitecrawl.domain.http_response import HttpResponse
from sitecrawl.exceptions import HttpFetchError


class HttpService:
    """
    HTTP client wrapper for fetching web pages and sitemaps.

    Requires http_client callable for dependency injection (DIP compliance).
    This enables easy testing without patching and allows swapping HTTP libraries.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str, auth: Optional[tuple] = None) -> HttpResponse:
        """Fetch URL and return status code, body text, Content-Type and total request time."""
        headers = {"User-Agent": self.user_agent}
        kwargs = {"headers": headers, "timeout": self.timeout}
        if auth is not None:
            kwargs["auth"] = auth
        started = time.perf_counter()
        try:
            resp = self.http_client(url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e
        elapsed = timedelta(seconds=time.perf_counter() - started)

        # Extract Content-Type if response has headers; let real exceptions bubble up.
        ct = None
        if hasattr(resp, 'headers'):
            ct = resp.headers.get('Content-Type')

        return HttpResponse(resp.status_code, resp.text, ct, elapsed)
