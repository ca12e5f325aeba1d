"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from sitecrawl.services.content_review_service import ContentReviewService
from sitecrawl.services.crawl_config_parser import CrawlConfigParser
from sitecrawl.services.crawl_orchestrator import CrawlOrchestrator
from sitecrawl.services.fetcher import ConcurrentHttpFetcher
from sitecrawl.services.http_service import HttpService
from sitecrawl.services.link_expansion import LinkExpansionPolicy
from sitecrawl.services.sitemap_service import SitemapService
from sitecrawl import config as env


# Environment variables used by the container (read via `sitecrawl.config` helpers).
#
# USER_AGENT (str, default: "SitemapCrawl/0.1")
#   User-Agent header for sitemap retrieval and page fetches.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Timeout for outbound HTTP requests.
#
# CRAWL_THROTTLE (int, default: 5)
#   Maximum parallel requests when neither the CLI nor the crawl file sets one.
#
# FETCH_POLL_INTERVAL (float seconds, default: 0.1)
#   How often the fetcher checks for an interrupt while waiting on requests.
ENV = {
    "USER_AGENT": env.USER_AGENT,
    "HTTP_TIMEOUT": env.get_int_env("HTTP_TIMEOUT", 10),
    "CRAWL_THROTTLE": env.get_int_env("CRAWL_THROTTLE", 5),
    "FETCH_POLL_INTERVAL": env.get_float_env("FETCH_POLL_INTERVAL", 0.1),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for SitemapCrawl."""

    config = providers.Configuration(default=ENV)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int),
    )

    content_review_service = providers.Singleton(
        ContentReviewService
    )

    fetcher = providers.Singleton(
        ConcurrentHttpFetcher,
        http_service=http_service,
        link_extractor=content_review_service,
        poll_interval=config.FETCH_POLL_INTERVAL.as_(float),
    )

    sitemap_service = providers.Singleton(
        SitemapService,
        http_service=http_service,
    )

    crawl_config_parser = providers.Singleton(
        CrawlConfigParser
    )

    link_expansion_policy = providers.Singleton(
        LinkExpansionPolicy
    )

    crawl_orchestrator = providers.Factory(
        CrawlOrchestrator,
        link_expansion_policy=link_expansion_policy,
    )
