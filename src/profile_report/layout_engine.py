"""Page geometry, the layout cursor and text wrapping."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from .document import Document, Page

logger = logging.getLogger(__name__)


# Page dimensions in millimetres
A4_SIZE = (A4[0] / mm, A4[1] / mm)  # 210 x 297 mm
LETTER_SIZE = (LETTER[0] / mm, LETTER[1] / mm)  # 215.9 x 279.4 mm
DEFAULT_MARGIN = 15.0


@dataclass(frozen=True)
class PageLayout:
    """Page size and the fixed header/body/footer bands, in millimetres."""
    page_width: float = A4_SIZE[0]
    page_height: float = A4_SIZE[1]
    margin_left: float = DEFAULT_MARGIN
    margin_right: float = DEFAULT_MARGIN
    header_height: float = 25.0  # Colored band at the top
    body_top: float = 35.0
    footer_height: float = 25.0
    paper: str = "A4"

    @classmethod
    def a4(cls) -> "PageLayout":
        """Create an A4 portrait layout."""
        return cls(page_width=A4_SIZE[0], page_height=A4_SIZE[1], paper="A4")

    @classmethod
    def letter(cls) -> "PageLayout":
        """Create a US Letter portrait layout."""
        return cls(page_width=LETTER_SIZE[0], page_height=LETTER_SIZE[1], paper="Letter")

    @property
    def body_bottom(self) -> float:
        return self.page_height - self.footer_height

    @property
    def body_height(self) -> float:
        return self.body_bottom - self.body_top

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def right_edge(self) -> float:
        return self.page_width - self.margin_right


class PageStamper:
    """Hook the cursor calls around page breaks. Does nothing by default."""

    def start_page(self, page: Page) -> None:
        pass

    def finish_page(self, page: Page) -> None:
        pass


class LayoutCursor:
    """Current page and vertical write position of one render call.

    ``y`` is measured top-down in millimetres. Callers decide whether to
    break the page *before* writing a block; the cursor itself never
    breaks implicitly.
    """

    def __init__(
        self,
        layout: PageLayout,
        document: Optional[Document] = None,
        stamper: Optional[PageStamper] = None,
    ):
        self.layout = layout
        self.document = document if document is not None else Document()
        self.stamper = stamper or PageStamper()
        self.y = layout.body_top
        self._open_page()

    @property
    def page(self) -> int:
        """1-based number of the page being written."""
        return self.current_page.number

    @property
    def current_page(self) -> Page:
        return self.document.pages[-1]

    @property
    def body_top(self) -> float:
        return self.layout.body_top

    @property
    def body_bottom(self) -> float:
        return self.layout.body_bottom

    @property
    def remaining(self) -> float:
        return self.layout.body_bottom - self.y

    @property
    def at_body_top(self) -> bool:
        return abs(self.y - self.layout.body_top) < 1e-6

    def reserve(self, height: float) -> bool:
        """Whether a block of ``height`` fits at the current position."""
        return self.y + height <= self.layout.body_bottom + 1e-6

    def advance(self, height: float) -> "LayoutCursor":
        self.y += height
        return self

    def skip(self, height: float) -> "LayoutCursor":
        """Advance by ``height`` without passing the body bottom."""
        self.y = max(self.y, min(self.y + height, self.layout.body_bottom))
        return self

    def break_page(self) -> "LayoutCursor":
        """Finish the current page and continue at the top of a new one."""
        self.stamper.finish_page(self.current_page)
        self._open_page()
        self.y = self.layout.body_top
        logger.debug("Page break to page %d", self.page)
        return self

    def _open_page(self) -> None:
        page = Page(
            number=len(self.document.pages) + 1,
            width=self.layout.page_width,
            height=self.layout.page_height,
        )
        self.document.pages.append(page)
        self.stamper.start_page(page)


def text_width(text: str, font_name: str, font_size: float) -> float:
    """Width of ``text`` in millimetres."""
    return stringWidth(text, font_name, font_size) / mm


def split_text_to_size(text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    """Wrap text on word boundaries so each line fits ``max_width`` mm.

    Words wider than the line are split character by character.
    """
    if text is None:
        return [""]
    if max_width <= 0:
        return [text]

    lines = []
    current = ""
    for word in text.split():
        candidate = word if not current else f"{current} {word}"
        if text_width(candidate, font_name, font_size) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
            current = ""
        if text_width(word, font_name, font_size) <= max_width:
            current = word
            continue
        chunk = ""
        for ch in word:
            if not chunk or text_width(chunk + ch, font_name, font_size) <= max_width:
                chunk += ch
            else:
                lines.append(chunk)
                chunk = ch
        current = chunk
    if current:
        lines.append(current)
    return lines if lines else [text]
