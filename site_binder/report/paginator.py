"""site_binder.report.paginator: раскладка страниц документа.

Pure layout: turns the ordered list of :class:`PageResult` into fixed-size
pages made of drawing items. Coordinates are PDF points measured from the
top-left corner, y grows downwards; the renderer flips them.

Each page result starts on a fresh page with a centred title, the source
URL and a divider. Blocks are word-wrapped with the font they are drawn in.
A block that does not fit the remaining space moves to the next page whole;
a block taller than a full page is split at line boundaries.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit

from site_binder.crawler.models import Block, BlockKind, PageResult

__all__ = [
    "Margins",
    "LayoutStyle",
    "TextLine",
    "Divider",
    "RenderedPage",
    "paginate",
    "wrap_text",
    "block_font",
]

Color = Tuple[int, int, int]
BLACK: Color = (0, 0, 0)
_EPS = 1e-6


@dataclass(frozen=True, slots=True)
class Margins:
    top: float = 20 * mm
    right: float = 20 * mm
    bottom: float = 20 * mm
    left: float = 20 * mm


@dataclass(frozen=True, slots=True)
class LayoutStyle:
    """Fonts, sizes and vertical rhythm of a rendered page result."""

    title_font: str = "Helvetica-Bold"
    title_size: float = 16
    title_leading: float = 8 * mm
    title_gap: float = 2 * mm

    subtitle_font: str = "Helvetica-Oblique"
    subtitle_size: float = 9
    subtitle_color: Color = (100, 100, 100)
    subtitle_gap: float = 10 * mm

    divider_color: Color = (220, 220, 220)
    divider_gap: float = 15 * mm

    body_font: str = "Helvetica"
    heading_font: str = "Helvetica-Bold"
    quote_font: str = "Helvetica-Oblique"
    code_font: str = "Courier"
    body_size: float = 11
    body_leading: float = 5 * mm
    block_gap: float = 5 * mm
    heading_space: float = 4 * mm


@dataclass(frozen=True, slots=True)
class TextLine:
    text: str
    x: float
    y: float
    font: str
    size: float
    color: Color = BLACK
    align: str = "left"


@dataclass(frozen=True, slots=True)
class Divider:
    x1: float
    x2: float
    y: float
    color: Color


DrawItem = Union[TextLine, Divider]


@dataclass(slots=True)
class RenderedPage:
    width: float
    height: float
    items: List[DrawItem] = field(default_factory=list)

    @property
    def lines(self) -> List[TextLine]:
        return [i for i in self.items if isinstance(i, TextLine)]


def wrap_text(text: str, font: str, size: float, width: float) -> List[str]:
    """Word-wrap *text* to *width* points using the metrics of *font*."""
    return simpleSplit(text, font, size, width) or [""]


def block_font(block: Block, style: LayoutStyle) -> str:
    if block.kind.is_heading:
        return style.heading_font
    if block.kind is BlockKind.BLOCKQUOTE:
        return style.quote_font
    if block.kind is BlockKind.PREFORMATTED:
        return style.code_font
    return style.body_font


class _Layout:
    """Cursor state while laying out one document."""

    def __init__(self, width: float, height: float, margins: Margins, style: LayoutStyle) -> None:
        self.width = width
        self.height = height
        self.margins = margins
        self.style = style
        self.content_width = width - margins.left - margins.right
        self.bottom = height - margins.bottom
        self.pages: List[RenderedPage] = []
        self.cursor = margins.top

    @property
    def page(self) -> RenderedPage:
        return self.pages[-1]

    @property
    def at_top(self) -> bool:
        return self.cursor <= self.margins.top + _EPS

    def new_page(self) -> None:
        self.pages.append(RenderedPage(self.width, self.height))
        self.cursor = self.margins.top

    def header(self, result: PageResult) -> None:
        s = self.style
        center = self.width / 2
        title_lines = wrap_text(result.title, s.title_font, s.title_size, self.content_width)
        for i, line in enumerate(title_lines):
            self.page.items.append(
                TextLine(line, center, self.cursor + i * s.title_leading, s.title_font, s.title_size, align="center")
            )
        self.cursor += len(title_lines) * s.title_leading + s.title_gap

        self.page.items.append(
            TextLine(result.url, center, self.cursor, s.subtitle_font, s.subtitle_size, s.subtitle_color, "center")
        )
        self.cursor += s.subtitle_gap

        self.page.items.append(
            Divider(self.margins.left, self.width - self.margins.right, self.cursor, s.divider_color)
        )
        self.cursor += s.divider_gap

    def block(self, block: Block) -> None:
        s = self.style
        font = block_font(block, s)
        if block.kind.is_major and not self.at_top:
            self.cursor += s.heading_space
        lines = wrap_text(block.text, font, s.body_size, self.content_width)
        height = len(lines) * s.body_leading
        if self.cursor + height > self.bottom + _EPS and not self.at_top:
            self.new_page()

        while lines:
            capacity = max(1, int((self.bottom - self.cursor + _EPS) // s.body_leading))
            chunk, lines = lines[:capacity], lines[capacity:]
            for i, line in enumerate(chunk):
                self.page.items.append(
                    TextLine(line, self.margins.left, self.cursor + i * s.body_leading, font, s.body_size)
                )
            self.cursor += len(chunk) * s.body_leading
            if lines:
                self.new_page()
        self.cursor += s.block_gap


def paginate(
    results: Sequence[PageResult],
    page_width: float,
    page_height: float,
    margins: Margins = Margins(),
    style: Optional[LayoutStyle] = None,
) -> List[RenderedPage]:
    """Lay out *results* onto fixed-size pages, one fresh page per result."""
    layout = _Layout(page_width, page_height, margins, style or LayoutStyle())
    if layout.content_width <= 0 or layout.bottom <= margins.top:
        raise ValueError("margins leave no room for content")
    for result in results:
        layout.new_page()
        layout.header(result)
        for block in result.blocks:
            layout.block(block)
    return layout.pages
