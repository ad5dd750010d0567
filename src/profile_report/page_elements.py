"""Repeating page header/footer, the verification block and image loading."""

import io
import logging
from datetime import datetime
from typing import List, Optional

from reportlab.lib.utils import ImageReader

from .config import (
    BrandConfig, RenderOptions,
    CONFIDENTIAL_NOTICE, REPORT_CAPTION,
)
from .document import FillRect, Image, Line, Page, PageStamp, Text, TextAlign
from .formatting import FieldFormatter
from .layout_engine import LayoutCursor, PageLayout, PageStamper, split_text_to_size
from .styles import DEFAULT_STYLE, ReportStyle

logger = logging.getLogger(__name__)


# Header geometry (mm, top-down)
LOGO_BOX = (10.0, 5.0, 15.0, 15.0)  # x, y, width, height
HEADER_TEXT_X = 15.0
HEADER_TEXT_X_WITH_LOGO = 30.0
HEADER_LINE1_Y = 12.0
HEADER_LINE2_Y = 18.0

# Footer offsets measured up from the page bottom
FOOTER_RULE_OFFSET = 20.0
FOOTER_TEXT_OFFSET = 12.0
FOOTER_COPYRIGHT_OFFSET = 6.0

VERIFICATION_TITLE = "DOCUMENT VERIFICATION"
VERIFICATION_NOTICE = [
    "This document has been electronically generated and contains accurate "
    "information as of the generation date.",
    "For verification purposes, please contact the issuing authority using "
    "the contact information provided above.",
]
SIGNATURE_CAPTION = "Authorized Signature"
DATE_CAPTION = "Date"


def load_image(data: Optional[bytes], purpose: str, warnings: Optional[List[str]] = None) -> Optional[bytes]:
    """Return ``data`` if it decodes as an image, otherwise None.

    A decode failure is logged and, when given, appended to ``warnings``.
    """
    if not data:
        return None
    try:
        reader = ImageReader(io.BytesIO(data))
        width, height = reader.getSize()
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
    except Exception as exc:
        message = f"Could not load {purpose} image: {exc}"
        logger.warning(message)
        if warnings is not None:
            warnings.append(message)
        return None
    return data


class HeaderFooterComposer:
    """Draws the header band and footer onto pages.

    One composer serves one render call; the decoded logo is cached so a
    broken logo is reported once rather than on every page.
    """

    def __init__(
        self,
        layout: PageLayout,
        style: ReportStyle = DEFAULT_STYLE,
        formatter: Optional[FieldFormatter] = None,
        warnings: Optional[List[str]] = None,
    ):
        self.layout = layout
        self.style = style
        self.formatter = formatter or FieldFormatter()
        self.warnings = warnings if warnings is not None else []
        self._logo_source: Optional[bytes] = None
        self._logo: Optional[bytes] = None

    def _resolve_logo(self, brand: BrandConfig) -> Optional[bytes]:
        if brand.logo_image_bytes is not self._logo_source:
            self._logo_source = brand.logo_image_bytes
            self._logo = load_image(brand.logo_image_bytes, "logo", self.warnings)
        return self._logo

    def stamp_header(
        self,
        page: Page,
        page_number: int,
        total_pages: int,
        subject_name: str,
        options: RenderOptions,
        brand: BrandConfig,
    ) -> bool:
        """Draw the header band. Returns True if the logo was drawn."""
        style = self.style
        width = self.layout.page_width
        right = self.layout.right_edge

        page.add(FillRect(0, 0, width, self.layout.header_height,
                          style.header_band_color, role="header_band"))

        logo = self._resolve_logo(brand) if options.include_logo else None
        if logo is not None:
            x, y, w, h = LOGO_BOX
            page.add(Image(x, y, w, h, logo, role="logo"))
        text_x = HEADER_TEXT_X_WITH_LOGO if logo is not None else HEADER_TEXT_X

        page.add(Text(text_x, HEADER_LINE1_Y, brand.header_name, style.bold_font,
                      style.company_font_size, style.header_text_color, role="company_name"))
        page.add(Text(text_x, HEADER_LINE2_Y, REPORT_CAPTION, style.font_family,
                      style.caption_font_size, style.header_text_color, role="report_caption"))
        page.add(Text(right, HEADER_LINE2_Y, f"Page {page_number} of {total_pages}",
                      style.font_family, style.page_counter_font_size, style.header_text_color,
                      align=TextAlign.RIGHT, role="page_counter"))
        page.add(Text(right, HEADER_LINE1_Y, subject_name, style.bold_font,
                      style.subject_font_size, style.header_text_color,
                      align=TextAlign.RIGHT, role="subject_name"))

        page.stamps.append(PageStamp("header", page_number, total_pages, subject_name))
        return logo is not None

    def stamp_footer(self, page: Page, brand: BrandConfig, generated_at: datetime) -> None:
        style = self.style
        left = self.layout.margin_left
        right = self.layout.right_edge
        center = self.layout.page_width / 2
        bottom = self.layout.page_height

        rule_y = bottom - FOOTER_RULE_OFFSET
        page.add(Line(left, rule_y, right, rule_y, style.footer_rule_color,
                      width=style.footer_rule_width, role="footer_rule"))

        text_y = bottom - FOOTER_TEXT_OFFSET
        timestamp = self.formatter.format_timestamp(generated_at)
        page.add(Text(left, text_y, f"Generated: {timestamp}", style.font_family,
                      style.footer_font_size, style.footer_text_color, role="generated_at"))
        page.add(Text(center, text_y, CONFIDENTIAL_NOTICE, style.font_family,
                      style.footer_font_size, style.footer_text_color,
                      align=TextAlign.CENTER, role="confidential_notice"))
        page.add(Text(right, text_y, brand.footer_name, style.font_family,
                      style.footer_font_size, style.footer_text_color,
                      align=TextAlign.RIGHT, role="footer_company"))
        page.add(Text(center, bottom - FOOTER_COPYRIGHT_OFFSET, brand.copyright_line,
                      style.font_family, style.copyright_font_size, style.footer_text_color,
                      align=TextAlign.CENTER, role="copyright"))

        page.stamps.append(PageStamp("footer", page.number))


class ReportPageStamper(PageStamper):
    """Stamps header and footer as the cursor opens and closes pages."""

    def __init__(
        self,
        composer: HeaderFooterComposer,
        brand: BrandConfig,
        options: RenderOptions,
        subject_name: str,
        total_pages: int,
        generated_at: datetime,
    ):
        self.composer = composer
        self.brand = brand
        self.options = options
        self.subject_name = subject_name
        self.total_pages = total_pages
        self.generated_at = generated_at

    def start_page(self, page: Page) -> None:
        self.composer.stamp_header(page, page.number, self.total_pages,
                                   self.subject_name, self.options, self.brand)

    def finish_page(self, page: Page) -> None:
        self.composer.stamp_footer(page, self.brand, self.generated_at)


def draw_verification_block(cursor: LayoutCursor, style: ReportStyle = DEFAULT_STYLE) -> LayoutCursor:
    """Rule, verification notice and two signature lines at the cursor.

    The caller decides whether there is room; nothing here breaks the page.
    """
    layout = cursor.layout
    page = cursor.current_page
    left = layout.margin_left
    right = layout.right_edge

    cursor.advance(15)
    page.add(Line(left, cursor.y, right, cursor.y, style.footer_rule_color,
                  width=style.footer_rule_width, role="verification_rule"))
    cursor.advance(10)

    page.add(Text(left, cursor.y, VERIFICATION_TITLE, style.bold_font,
                  style.verification_font_size, style.title_color, role="verification_title"))
    cursor.advance(8)

    for i, paragraph in enumerate(VERIFICATION_NOTICE):
        lines = split_text_to_size(paragraph, style.font_family, style.notice_font_size,
                                   layout.content_width)
        for j, line in enumerate(lines):
            if i or j:
                cursor.advance(style.line_height)
            page.add(Text(left, cursor.y, line, style.font_family, style.notice_font_size,
                          style.title_color, role="verification_notice"))

    cursor.advance(20)
    page.add(Line(left, cursor.y, 80, cursor.y, style.signature_line_color,
                  width=style.footer_rule_width, role="signature_line"))
    page.add(Line(layout.page_width - 80, cursor.y, right, cursor.y, style.signature_line_color,
                  width=style.footer_rule_width, role="signature_line"))
    cursor.advance(5)

    page.add(Text(left, cursor.y, SIGNATURE_CAPTION, style.font_family,
                  style.caption_small_font_size, style.title_color, role="signature_caption"))
    page.add(Text(layout.page_width - 80, cursor.y, DATE_CAPTION, style.font_family,
                  style.caption_small_font_size, style.title_color, role="signature_caption"))
    return cursor
