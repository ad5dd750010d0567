"""Paginated report layout: rows, sections and whole-document composition."""

import logging
import re
from datetime import datetime
from typing import List, Optional, Sequence

from .config import (
    BrandConfig, RenderOptions,
    DOCUMENT_TITLE, ESTIMATED_TOTAL_PAGES,
)
from .document import Document, FillRect, Image, RowPlacement, SectionPlacement, Text, TextAlign
from .formatting import FieldFormatter
from .layout_engine import LayoutCursor, PageLayout, split_text_to_size
from .page_elements import (
    HeaderFooterComposer, ReportPageStamper,
    draw_verification_block, load_image,
)
from .record import Record
from .sections import Field, build_sections
from .styles import DEFAULT_STYLE, ReportStyle

logger = logging.getLogger(__name__)


def suggested_file_name(display_name: str, suffix: str) -> str:
    """Display name with whitespace runs collapsed to underscores, plus suffix."""
    return re.sub(r"\s+", "_", display_name.strip()) + suffix


class RowRenderer:
    """Draws one label/value row, wrapping long values."""

    def __init__(
        self,
        layout: PageLayout,
        style: ReportStyle = DEFAULT_STYLE,
        warnings: Optional[List[str]] = None,
    ):
        self.layout = layout
        self.style = style
        self.warnings = warnings if warnings is not None else []

    @property
    def value_width(self) -> float:
        return self.layout.page_width - self.style.value_x - self.style.value_right_inset

    def wrap_value(self, value: str) -> List[str]:
        """Display lines for ``value``: one per line break, long lines wrapped."""
        lines = []
        for line in value.splitlines() or [value]:
            if len(line) > self.style.wrap_threshold:
                lines.extend(split_text_to_size(line, self.style.font_family,
                                                self.style.row_font_size, self.value_width))
            else:
                lines.append(line)
        return lines

    def measure(self, value: str) -> float:
        """Height the row for ``value`` will take."""
        return self._height(len(self.wrap_value(value)))

    def _height(self, line_count: int) -> float:
        return max(self.style.row_height, line_count * self.style.line_height)

    def render(
        self,
        cursor: LayoutCursor,
        label: str,
        value: str,
        row_index: int,
        section: Optional[SectionPlacement] = None,
        keep_with_previous: bool = False,
    ) -> LayoutCursor:
        style = self.style
        lines = self.wrap_value(value)
        height = self._height(len(lines))

        if not keep_with_previous and not cursor.reserve(height) and not cursor.at_body_top:
            cursor.break_page()

        oversized = not cursor.reserve(height)
        if oversized:
            message = (f"Row '{label}' ({height:.1f} mm) is taller than the page body; "
                       f"drawn past the body bottom on page {cursor.page}")
            logger.warning(message)
            self.warnings.append(message)

        page = cursor.current_page
        top = cursor.y
        if row_index % 2 == 0:
            page.add(FillRect(self.layout.margin_left, top, self.layout.content_width, height,
                              style.row_tint_color, role="row_tint"))

        baseline = top + 5
        page.add(Text(style.label_x, baseline, f"{label}:", style.bold_font,
                      style.row_font_size, style.label_color, role="row_label"))
        for i, line in enumerate(lines):
            page.add(Text(style.value_x, baseline + i * style.line_height, line, style.font_family,
                          style.row_font_size, style.value_color, role="row_value"))

        if section is not None:
            section.rows.append(RowPlacement(
                section_key=section.key,
                label=label,
                text=value,
                page_number=cursor.page,
                row_index=row_index,
                y_top=top,
                y_bottom=top + height,
                line_count=len(lines),
                oversized=oversized,
            ))
        return cursor.advance(height)


class SectionRenderer:
    """Draws a section banner followed by its rows."""

    def __init__(self, row_renderer: RowRenderer, style: ReportStyle = DEFAULT_STYLE):
        self.rows = row_renderer
        self.style = style

    def render(
        self,
        cursor: LayoutCursor,
        title: str,
        fields: Sequence[Field],
        key: str = "",
        placements: Optional[List[SectionPlacement]] = None,
    ) -> LayoutCursor:
        style = self.style
        layout = cursor.layout

        # Keep the banner together with at least its first row. A first row
        # taller than the body goes on a fresh page directly below the banner.
        first = self.rows.measure(fields[0].text) if fields else 0
        first_oversized = first > layout.body_height
        needed = style.banner_height + first
        if (first_oversized or not cursor.reserve(needed)) and not cursor.at_body_top:
            cursor.break_page()

        placement = SectionPlacement(key=key or title, title=title, start_page=cursor.page,
                                     end_page=cursor.page, banner_y=cursor.y)
        page = cursor.current_page
        top = cursor.y
        page.add(FillRect(layout.margin_left, top, layout.content_width, style.banner_box_height,
                          style.banner_fill_color, role="banner"))
        page.add(FillRect(layout.margin_left, top, style.accent_width, style.banner_box_height,
                          style.banner_accent_color, role="banner_accent"))
        page.add(Text(style.label_x, top + 8, title, style.bold_font, style.banner_font_size,
                      style.banner_title_color, role="section_title"))
        cursor.advance(style.banner_height)

        for index, f in enumerate(fields):
            self.rows.render(cursor, f.label, f.text, index, placement,
                             keep_with_previous=(index == 0 and first_oversized))

        placement.end_page = cursor.page
        if placements is not None:
            placements.append(placement)
        return cursor.skip(style.section_gap)


class PageCompositor:
    """Lays out a whole record onto pages.

    The header shows an estimated total page count unless
    ``RenderOptions.exact_page_count`` is set, in which case the record is
    laid out twice: once to count pages and once to stamp the real total.
    """

    def __init__(self, layout: Optional[PageLayout] = None, style: ReportStyle = DEFAULT_STYLE):
        self.layout = layout or PageLayout.a4()
        self.style = style

    def render(
        self,
        record: Record,
        brand: Optional[BrandConfig] = None,
        options: Optional[RenderOptions] = None,
        generated_at: Optional[datetime] = None,
    ) -> Document:
        brand = brand or BrandConfig()
        options = options or RenderOptions()
        generated_at = generated_at or datetime.now()

        if options.exact_page_count:
            measured = self._compose(record, brand, options, generated_at, ESTIMATED_TOTAL_PAGES)
            logger.debug("Measured %d pages for record %s", measured.page_count, record.id)
            return self._compose(record, brand, options, generated_at, measured.page_count)
        return self._compose(record, brand, options, generated_at, ESTIMATED_TOTAL_PAGES)

    def _compose(
        self,
        record: Record,
        brand: BrandConfig,
        options: RenderOptions,
        generated_at: datetime,
        total_pages: int,
    ) -> Document:
        layout = self.layout
        style = self.style
        formatter = FieldFormatter(options.locale)
        subject = record.display_name

        document = Document(
            file_name=suggested_file_name(subject, "_Comprehensive_Report.pdf"),
            title=f"{DOCUMENT_TITLE} - {subject}",
            author=brand.header_name,
            estimated_total_pages=total_pages,
            body_bounds=(layout.body_top, layout.body_bottom),
        )
        composer = HeaderFooterComposer(layout, style, formatter, document.warnings)
        stamper = ReportPageStamper(composer, brand, options, subject, total_pages, generated_at)
        cursor = LayoutCursor(layout, document, stamper)

        self._draw_title_block(cursor, record, options, formatter, generated_at)

        sections = SectionRenderer(RowRenderer(layout, style, document.warnings), style)
        for section in build_sections(record, formatter):
            sections.render(cursor, section.title, section.fields, section.key, document.sections)

        if cursor.remaining > style.verification_min_space:
            draw_verification_block(cursor, style)

        stamper.finish_page(cursor.current_page)
        logger.info("Rendered %s: %d page(s), %d warning(s)",
                    document.file_name, document.page_count, len(document.warnings))
        return document

    def _draw_title_block(
        self,
        cursor: LayoutCursor,
        record: Record,
        options: RenderOptions,
        formatter: FieldFormatter,
        generated_at: datetime,
    ) -> None:
        style = self.style
        layout = self.layout
        page = cursor.current_page
        center = layout.page_width / 2

        page.add(Text(center, cursor.y, DOCUMENT_TITLE, style.bold_font, style.title_font_size,
                      style.title_color, align=TextAlign.CENTER, role="document_title"))
        cursor.advance(10)
        page.add(Text(center, cursor.y, f"Report Generated: {formatter.format_date(generated_at)}",
                      style.font_family, style.subtitle_font_size, style.subtitle_color,
                      align=TextAlign.CENTER, role="document_subtitle"))
        cursor.advance(15)

        if options.include_photo and record.profile_photo:
            photo = load_image(record.profile_photo, "profile photo", cursor.document.warnings)
            if photo is not None:
                size = style.photo_size
                page.add(Image(layout.right_edge - size, cursor.y, size, size, photo, role="photo"))
                cursor.advance(size + style.section_gap)


def render_report(
    record: Record,
    brand: Optional[BrandConfig] = None,
    options: Optional[RenderOptions] = None,
    generated_at: Optional[datetime] = None,
    layout: Optional[PageLayout] = None,
) -> Document:
    """Lay out one record as a paginated Document."""
    return PageCompositor(layout).render(record, brand, options, generated_at)
