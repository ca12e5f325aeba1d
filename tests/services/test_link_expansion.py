from sitecrawl.domain.crawl_config import CrawlLinksConfig
from sitecrawl.domain.fetch_outcome import FetchOutcome
from sitecrawl.domain.link import Link, LinkType
from sitecrawl.services.link_expansion import LinkExpansionPolicy

A = "http://site.test/a"
B = "http://site.test/b"
C = "http://other.test/c.png"


def _first_phase():
    return [
        FetchOutcome(url=A, status_code=200, links=[
            Link(B, LinkType.HYPERLINK, is_external=False),
            Link(C, LinkType.IMAGE, is_external=True),
        ]),
        FetchOutcome(url=B, status_code=200),
    ]


def test_already_crawled_and_external_links_are_excluded():
    policy = LinkExpansionPolicy()
    expansion = policy.expand(
        _first_phase(),
        [A, B],
        CrawlLinksConfig(crawl_external_links=False, crawl_hyperlinks=True, crawl_images=True),
    )
    assert expansion.urls == []
    assert expansion.linking_urls == {}


def test_external_image_followed_when_external_enabled():
    policy = LinkExpansionPolicy()
    expansion = policy.expand(
        _first_phase(),
        [A, B],
        CrawlLinksConfig(crawl_external_links=True, crawl_hyperlinks=True, crawl_images=True),
    )
    assert expansion.urls == [C]
    assert expansion.linking_urls[C] == [A]


def test_type_filters_apply_independently():
    results = [FetchOutcome(url=A, status_code=200, links=[
        Link("http://site.test/page", LinkType.HYPERLINK),
        Link("http://site.test/img.png", LinkType.IMAGE),
    ])]
    policy = LinkExpansionPolicy()

    only_images = policy.expand(results, [A], CrawlLinksConfig(crawl_images=True))
    assert only_images.urls == ["http://site.test/img.png"]

    only_pages = policy.expand(results, [A], CrawlLinksConfig(crawl_hyperlinks=True))
    assert only_pages.urls == ["http://site.test/page"]


def test_external_flag_alone_does_not_enable_link_types():
    results = [FetchOutcome(url=A, status_code=200, links=[
        Link("http://other.test/", LinkType.HYPERLINK, is_external=True),
    ])]
    expansion = LinkExpansionPolicy().expand(results, [A], CrawlLinksConfig(crawl_external_links=True))
    assert expansion.urls == []


def test_linking_urls_keep_every_referrer_in_order():
    target = "http://site.test/shared"
    results = [
        FetchOutcome(url=A, status_code=200, links=[Link(target, LinkType.HYPERLINK), Link(target, LinkType.HYPERLINK)]),
        FetchOutcome(url=B, status_code=200, links=[Link(target, LinkType.HYPERLINK)]),
    ]
    expansion = LinkExpansionPolicy().expand(results, [A, B], CrawlLinksConfig(crawl_hyperlinks=True))
    assert expansion.urls == [target]
    assert expansion.linking_urls[target] == [A, A, B]


def test_results_without_links_expand_to_nothing():
    results = [FetchOutcome(url=A, status_code=404)]
    expansion = LinkExpansionPolicy().expand(results, [A], CrawlLinksConfig(crawl_hyperlinks=True))
    assert expansion.urls == []
