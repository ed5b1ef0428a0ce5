"""site_binder.report.pdf_report: вывод разложенных страниц в PDF через reportlab."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Sequence, Union

from reportlab.pdfgen import canvas

from site_binder.report.paginator import Divider, RenderedPage, TextLine

__all__ = ["render_pdf", "safe_filename"]

_UNSAFE_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def safe_filename(name: str) -> str:
    """Приводит имя к виду ``scraped-doc.pdf``: всё кроме [a-z0-9] заменяется на ``-``."""
    return f"{_UNSAFE_RE.sub('-', name).lower()}.pdf"


def _rgb(color) -> tuple[float, float, float]:
    r, g, b = color
    return r / 255, g / 255, b / 255


def _draw_page(pdf: canvas.Canvas, page: RenderedPage) -> None:
    for item in page.items:
        if isinstance(item, TextLine):
            pdf.setFont(item.font, item.size)
            pdf.setFillColorRGB(*_rgb(item.color))
            y = page.height - item.y
            if item.align == "center":
                pdf.drawCentredString(item.x, y, item.text)
            else:
                pdf.drawString(item.x, y, item.text)
        elif isinstance(item, Divider):
            pdf.setStrokeColorRGB(*_rgb(item.color))
            y = page.height - item.y
            pdf.line(item.x1, y, item.x2, y)


def render_pdf(
    pages: Sequence[RenderedPage],
    output_path: Union[str, Path],
    title: Optional[str] = None,
) -> Path:
    """Рисует страницы и сохраняет PDF по указанному пути.

    Args:
        pages: результат :func:`site_binder.report.paginator.paginate`.
        output_path: путь к итоговому PDF-файлу.
        title: заголовок в метаданных документа.

    Returns:
        Path до сохранённого файла.
    """
    if not pages:
        raise ValueError("nothing to render: no pages")
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    first = pages[0]
    pdf = canvas.Canvas(str(output), pagesize=(first.width, first.height))
    if title:
        pdf.setTitle(title)
    for page in pages:
        pdf.setPageSize((page.width, page.height))
        _draw_page(pdf, page)
        pdf.showPage()
    pdf.save()
    return output
