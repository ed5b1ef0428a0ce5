"""site_binder.report: раскладка страниц и вывод документа (PDF и JSON)."""

from __future__ import annotations

from site_binder.report.json_report import load_pages, render_json
from site_binder.report.paginator import LayoutStyle, Margins, RenderedPage, paginate
from site_binder.report.pdf_report import render_pdf, safe_filename

__all__ = [
    "render_json",
    "load_pages",
    "render_pdf",
    "safe_filename",
    "paginate",
    "Margins",
    "LayoutStyle",
    "RenderedPage",
]
