import json
import re

import pytest
from reportlab.lib.pagesizes import A4

from site_binder.config import CrawlerConfig
from site_binder.crawler.models import Block, BlockKind, PageResult
from site_binder.engine import export_pdf
from site_binder.report.json_report import load_pages, render_json
from site_binder.report.paginator import Margins, paginate
from site_binder.report.pdf_report import render_pdf, safe_filename

RESULTS = [
    PageResult(
        "http://example.com/",
        "Home",
        (Block(BlockKind.HEADING1, "WELCOME"), Block(BlockKind.PARAGRAPH, "Hello there, reader.")),
    ),
    PageResult("http://example.com/about", "About", (Block(BlockKind.LIST_ITEM, "• Fact"),)),
]


def _page_count(pdf_bytes: bytes) -> int:
    return len(re.findall(rb"/Type /Page[^s]", pdf_bytes))


def test_render_pdf_writes_one_page_per_result(tmp_path):
    pages = paginate(RESULTS, *A4, Margins())
    out = render_pdf(pages, tmp_path / "nested" / "doc.pdf", title="Home")
    data = out.read_bytes()
    assert data.startswith(b"%PDF")
    assert _page_count(data) == 2


def test_render_pdf_rejects_empty(tmp_path):
    with pytest.raises(ValueError):
        render_pdf([], tmp_path / "empty.pdf")


@pytest.mark.parametrize(
    "name,expected",
    [
        ("scraped-doc", "scraped-doc.pdf"),
        ("My Docs!", "my-docs-.pdf"),
        ("Über/guide", "-ber-guide.pdf"),
    ],
)
def test_safe_filename(name, expected):
    assert safe_filename(name) == expected


def test_export_pdf_uses_config_name_and_layout(tmp_path):
    cfg = CrawlerConfig(output_name="Site Export", layout={"page_size": "letter"})
    out = export_pdf(RESULTS, cfg, tmp_path)
    assert out == tmp_path / "site-export.pdf"
    assert b"612 792" in out.read_bytes()


def test_render_json(tmp_path):
    out = render_json(RESULTS, tmp_path / "pages.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [d["url"] for d in data] == ["http://example.com/", "http://example.com/about"]
    assert data[0]["content"] == "WELCOME\n\nHello there, reader."
    assert data[0]["blocks"][0] == {"kind": "heading1", "text": "WELCOME"}
    assert data[1]["blocks"][0]["kind"] == "list-item"


def test_load_pages_from_dump_and_payload(tmp_path):
    dump = render_json(RESULTS, tmp_path / "pages.json")
    pages = load_pages(dump)
    assert [(p.url, p.title) for p in pages] == [(r.url, r.title) for r in RESULTS]
    assert [b.kind for b in pages[0].blocks] == [BlockKind.HEADING1, BlockKind.PARAGRAPH]
    assert pages[1].blocks[0].kind is BlockKind.LIST_ITEM

    payload = tmp_path / "payload.json"
    payload.write_text(json.dumps({"content": "SHORT\n\nBody text.", "links": []}), encoding="utf-8")
    (page,) = load_pages(payload, heading_max_length=3)
    assert (page.url, page.title) == ("", "No Title")
    assert [b.kind for b in page.blocks] == [BlockKind.PARAGRAPH, BlockKind.PARAGRAPH]

    bad = tmp_path / "bad.json"
    bad.write_text('["not an object"]', encoding="utf-8")
    with pytest.raises(ValueError):
        load_pages(bad)
