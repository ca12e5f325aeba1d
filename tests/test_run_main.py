"""
Tests for run.py main() with an injected container.
"""
import json
from datetime import timedelta
from unittest.mock import MagicMock

from dependency_injector import providers

from run import EXIT_FAILED, EXIT_OK, main
from sitecrawl.container import Container
from sitecrawl.domain.fetch_outcome import FetchOutcome
from sitecrawl.exceptions import SitemapError


class _TableFetcher:
    def __init__(self, statuses):
        self.statuses = statuses
        self.throttles = []

    def fetch(self, urls, http_config, throttle, stop_event=None):
        self.throttles.append(throttle)
        for url in urls:
            yield FetchOutcome(url, self.statuses.get(url, 200), timedelta(milliseconds=10))


def _container(urls, statuses=None):
    container = Container()
    sitemap_service = MagicMock()
    sitemap_service.get_sitemap_urls.return_value = urls
    fetcher = _TableFetcher(statuses or {})
    container.sitemap_service.override(providers.Object(sitemap_service))
    container.fetcher.override(providers.Object(fetcher))
    return container, sitemap_service, fetcher


def test_container_creates_services():
    container = Container()
    assert container.http_service() is not None
    assert container.sitemap_service() is not None
    assert container.fetcher() is container.fetcher()
    assert container.crawl_orchestrator() is not None


def test_main_success_exits_zero(capsys):
    container, sitemap_service, fetcher = _container(["http://x.test/", "http://x.test/a"])
    code = main(["http://x.test/sitemap.xml", "--throttle", "4"], container=container)
    assert code == EXIT_OK
    sitemap_service.get_sitemap_urls.assert_called_once_with("http://x.test/sitemap.xml")
    assert fetcher.throttles == [4]
    assert "Crawled URLs: 2" in capsys.readouterr().out


def test_main_partial_failure_exits_one_and_reports_json(capsys):
    container, _, _ = _container(["http://x.test/", "http://x.test/gone"], {"http://x.test/gone": 404})
    code = main(["http://x.test/sitemap.xml", "--json"], container=container)
    assert code == EXIT_FAILED
    report = json.loads(capsys.readouterr().out)
    assert report["total"] == 2
    assert report["status-codes"] == {"200": 1, "404": 1}
    assert report["non-200-urls"][0]["url"] == "http://x.test/gone"
    assert report["stopped"] is False
    assert "different status code" in report["error"]


def test_main_sitemap_error_exits_one():
    container, sitemap_service, _ = _container([])
    sitemap_service.get_sitemap_urls.side_effect = SitemapError("http://x.test/sitemap.xml", "returned status 404")
    assert main(["http://x.test/sitemap.xml"], container=container) == EXIT_FAILED


def test_main_empty_sitemap_exits_one():
    container, _, _ = _container([])
    assert main(["http://x.test/sitemap.xml"], container=container) == EXIT_FAILED


def test_main_reads_crawl_config_file(tmp_path):
    path = tmp_path / "crawl.yml"
    path.write_text("throttle: 7\n")
    container, _, fetcher = _container(["http://x.test/"])
    assert main(["http://x.test/sitemap.xml", "--config", str(path)], container=container) == EXIT_OK
    assert fetcher.throttles == [7]


def test_main_missing_config_file_exits_one(tmp_path):
    container, _, _ = _container(["http://x.test/"])
    code = main(["http://x.test/sitemap.xml", "--config", str(tmp_path / "missing.yml")], container=container)
    assert code == EXIT_FAILED


def test_main_malformed_config_file_exits_one(tmp_path):
    path = tmp_path / "crawl.yml"
    path.write_text("throttle: [1\n")
    container, sitemap_service, _ = _container(["http://x.test/"])
    code = main(["http://x.test/sitemap.xml", "--config", str(path)], container=container)
    assert code == EXIT_FAILED
    sitemap_service.get_sitemap_urls.assert_not_called()


def test_main_invalid_link_flag_in_config_exits_one(tmp_path):
    path = tmp_path / "crawl.yml"
    path.write_text('links:\n  external: "false"\n')
    container, _, fetcher = _container(["http://x.test/"])
    code = main(["http://x.test/sitemap.xml", "--config", str(path)], container=container)
    assert code == EXIT_FAILED
    assert fetcher.throttles == []
