import argparse
import json
import logging
import sys

from sitecrawl import config
from sitecrawl.container import Container
from sitecrawl.domain.crawl_outcome import CrawlOutcome
from sitecrawl.exceptions import HttpFetchError, SitemapError
from sitecrawl.services.interrupts import InterruptSignalSource

logger = logging.getLogger("sitecrawl")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crawl every URL of a sitemap and report status codes and response times.",
    )
    parser.add_argument("sitemap_url", help="URL of the XML sitemap (or sitemap index)")
    parser.add_argument("--config", dest="config_path", help="YAML crawl settings file")
    parser.add_argument("--throttle", type=int, help="maximum number of parallel requests")
    parser.add_argument("--host", help="override the hostname used in the sitemap URLs")
    parser.add_argument("--user", help="basic auth user")
    parser.add_argument("--password", help="basic auth password")
    parser.add_argument("--crawl-external-links", action="store_true", default=None,
                        help="also crawl links pointing outside the crawled host")
    parser.add_argument("--crawl-hyperlinks", action="store_true", default=None,
                        help="crawl <a href> links found on the crawled pages")
    parser.add_argument("--crawl-images", action="store_true", default=None,
                        help="crawl <img src> links found on the crawled pages")
    parser.add_argument("--json", action="store_true", help="print the report as JSON")
    parser.add_argument("--log-level", default=None, help="logging level (default: $LOG_LEVEL or INFO)")
    return parser


def print_report(outcome: CrawlOutcome, as_json: bool = False, out=None) -> None:
    out = out or sys.stdout
    stats = outcome.stats
    if as_json:
        payload = stats.as_dict()
        payload["stopped"] = outcome.stopped
        payload["error"] = str(outcome.error) if outcome.error else None
        out.write(json.dumps(payload, indent=2) + "\n")
        return

    out.write(f"Crawled URLs: {stats.total}\n")
    for code, count in sorted(stats.status_codes.items()):
        out.write(f"  {code}: {count}\n")
    out.write(f"Average 200 time: {stats.average_200_time.total_seconds() * 1000:.0f}ms\n")
    out.write(f"Max 200 time: {stats.max_200_time.total_seconds() * 1000:.0f}ms\n")
    if stats.non_200_urls:
        out.write("Non-200 URLs:\n")
        for result in stats.non_200_urls:
            out.write(f"  {result.status_code} {result.url}\n")
            for linking_url in result.linking_urls:
                out.write(f"      linked from {linking_url}\n")
    if outcome.stopped:
        out.write("Crawl interrupted before completion\n")
    if outcome.error:
        out.write(f"Error: {outcome.error}\n")


def main(argv=None, container: Container = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=(args.log_level or config.log_level()).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    container = container or Container()
    parser = container.crawl_config_parser()
    try:
        data = parser.load(args.config_path) if args.config_path else {}
        crawl_config = parser.parse(
            data,
            fetcher=container.fetcher(),
            default_throttle=container.config.CRAWL_THROTTLE(),
            throttle=args.throttle,
            host=args.host,
            user=args.user,
            password=args.password,
            crawl_external_links=args.crawl_external_links,
            crawl_hyperlinks=args.crawl_hyperlinks,
            crawl_images=args.crawl_images,
        )
    except (OSError, ValueError) as e:
        logger.error("Could not load crawl config: %s", e)
        return EXIT_FAILED

    try:
        urls = container.sitemap_service().get_sitemap_urls(args.sitemap_url)
    except (HttpFetchError, SitemapError) as e:
        logger.error("Could not read sitemap: %s", e)
        return EXIT_FAILED

    with InterruptSignalSource() as stop_event:
        outcome = container.crawl_orchestrator().crawl(urls, crawl_config, stop_event=stop_event)

    print_report(outcome, as_json=args.json)
    if outcome.stopped:
        return EXIT_INTERRUPTED
    return EXIT_OK if outcome.ok else EXIT_FAILED


if __name__ == '__main__':
    sys.exit(main())
