from conftest import LOREM, article_html
from site_binder.crawler.models import BlockKind
from site_binder.parser.extractor import NO_TITLE, extract_article
from site_binder.parser.pipeline import scrape_page, scrape_payload

URL = "http://example.com/post"


def test_extract_article_finds_title_and_content():
    article = extract_article(article_html("Sample Article"), URL)
    assert article is not None
    assert article.title == "Sample Article"
    assert "quick brown fox" in article.content.get_text()


def test_extract_article_without_title():
    html = f"<html><body><article><p>{LOREM}</p><p>{LOREM}</p></article></body></html>"
    article = extract_article(html, URL)
    assert article is not None
    assert article.title == NO_TITLE


def test_extract_article_reports_failure_as_none():
    assert extract_article("", URL) is None
    assert extract_article("   \n ", URL) is None


def test_scrape_page_combines_blocks_and_links():
    html = article_html("Guide", links=["/next", "http://elsewhere.org/"])
    page = scrape_page(html, URL)
    assert page is not None
    assert page.title == "Guide"
    assert page.links == ("http://example.com/next",)
    assert any(b.kind is BlockKind.PARAGRAPH and "quick brown fox" in b.text for b in page.blocks)
    assert page.content == "\n\n".join(b.text for b in page.blocks)


def test_scrape_payload_shape():
    payload = scrape_payload(article_html("Guide", links=["/next"]), URL)
    assert set(payload) == {"title", "content", "links"}
    assert payload["title"] == "Guide"
    assert payload["links"] == ["http://example.com/next"]
    assert "quick brown fox" in payload["content"]


def test_scrape_payload_without_article():
    payload = scrape_payload("", URL)
    assert payload == {"title": NO_TITLE, "content": "", "links": []}
