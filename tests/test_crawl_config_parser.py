import pytest

from sitecrawl.services.crawl_config_parser import CrawlConfigParser


def test_parse_reads_nested_sections():
    data = {
        "throttle": 8,
        "host": "staging.example.com",
        "auth": {"user": "bob", "password": "pw"},
        "links": {"external": True, "hyperlinks": True, "images": False},
    }
    cfg = CrawlConfigParser().parse(data)
    assert cfg.throttle == 8
    assert cfg.host == "staging.example.com"
    assert cfg.http.auth == ("bob", "pw")
    assert cfg.links.crawl_external_links
    assert cfg.links.crawl_hyperlinks
    assert not cfg.links.crawl_images
    assert cfg.should_extract_links


def test_overrides_win_and_none_means_not_given():
    data = {"throttle": 8, "links": {"images": True}}
    cfg = CrawlConfigParser().parse(data, throttle=2, crawl_images=None, crawl_hyperlinks=True)
    assert cfg.throttle == 2
    assert cfg.links.crawl_images
    assert cfg.links.crawl_hyperlinks


def test_defaults_when_empty():
    fetcher = object()
    cfg = CrawlConfigParser().parse({}, fetcher=fetcher, default_throttle=5)
    assert cfg.throttle == 5
    assert cfg.host is None
    assert cfg.fetcher is fetcher
    assert not cfg.should_extract_links


def test_load_yaml_file(tmp_path):
    path = tmp_path / "crawl.yml"
    path.write_text("throttle: 3\nlinks:\n  hyperlinks: true\n")
    parser = CrawlConfigParser()
    cfg = parser.parse(parser.load(str(path)))
    assert cfg.throttle == 3
    assert cfg.links.crawl_hyperlinks


def test_load_empty_file_returns_empty_mapping(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert CrawlConfigParser().load(str(path)) == {}


def test_load_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        CrawlConfigParser().load(str(path))


def test_load_rejects_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("throttle: [1\n")
    with pytest.raises(ValueError):
        CrawlConfigParser().load(str(path))


@pytest.mark.parametrize("value", ["false", "true", 0, 1])
def test_link_flags_must_be_booleans(value):
    with pytest.raises(ValueError):
        CrawlConfigParser().parse({"links": {"external": value}})


def test_quoted_false_in_file_is_rejected(tmp_path):
    path = tmp_path / "crawl.yml"
    path.write_text('links:\n  external: "false"\n')
    parser = CrawlConfigParser()
    with pytest.raises(ValueError):
        parser.parse(parser.load(str(path)))


@pytest.mark.parametrize("data", [{"auth": "bob"}, {"links": ["hyperlinks"]}])
def test_sections_must_be_mappings(data):
    with pytest.raises(ValueError):
        CrawlConfigParser().parse(data)


def test_throttle_must_be_an_integer():
    with pytest.raises(ValueError):
        CrawlConfigParser().parse({"throttle": "fast"})
