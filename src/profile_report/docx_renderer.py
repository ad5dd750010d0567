"""Flowing encoding: a styled Word document via python-docx."""

import io
import logging
from datetime import datetime
from typing import Optional

from docx import Document as WordDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from .config import BrandConfig, RenderOptions, CONFIDENTIAL_NOTICE, SHEET_TITLE
from .formatting import FieldFormatter
from .pdf_renderer import suggested_file_name
from .record import Record
from .sections import build_sections

logger = logging.getLogger(__name__)


MUTED = RGBColor(0x80, 0x80, 0x80)
SUBTLE = RGBColor(0x66, 0x66, 0x66)
FOOTER_NOTICE = "This document contains confidential information"


def docx_file_name(record: Record) -> str:
    return suggested_file_name(record.display_name, "_Report.docx")


def _muted_run(paragraph, text: str):
    run = paragraph.add_run(text)
    run.font.size = Pt(8)
    run.font.color.rgb = MUTED
    return run


def _add_page_number_field(paragraph) -> None:
    """Append an auto-updating PAGE field to the paragraph."""
    run = paragraph.add_run()
    fld_begin = OxmlElement("w:fldChar")
    fld_begin.set(qn("w:fldCharType"), "begin")
    run._r.append(fld_begin)

    run = paragraph.add_run()
    instr = OxmlElement("w:instrText")
    instr.set(qn("xml:space"), "preserve")
    instr.text = "PAGE"
    run._r.append(instr)

    run = paragraph.add_run()
    fld_sep = OxmlElement("w:fldChar")
    fld_sep.set(qn("w:fldCharType"), "separate")
    run._r.append(fld_sep)

    _muted_run(paragraph, "1")

    run = paragraph.add_run()
    fld_end = OxmlElement("w:fldChar")
    fld_end.set(qn("w:fldCharType"), "end")
    run._r.append(fld_end)


def render_docx(
    record: Record,
    brand: Optional[BrandConfig] = None,
    options: Optional[RenderOptions] = None,
    generated_at: Optional[datetime] = None,
) -> bytes:
    """One record as a Word document with a heading and table per section."""
    brand = brand or BrandConfig()
    options = options or RenderOptions()
    generated_at = generated_at or datetime.now()
    formatter = FieldFormatter(options.locale)

    doc = WordDocument()
    doc.core_properties.title = f"{SHEET_TITLE} - {record.display_name}"
    doc.core_properties.author = brand.header_name
    section = doc.sections[0]

    header = section.header
    header_para = header.paragraphs[0] if header.paragraphs else header.add_paragraph()
    header_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
    _muted_run(header_para, CONFIDENTIAL_NOTICE)

    footer = section.footer
    footer_para = footer.paragraphs[0] if footer.paragraphs else footer.add_paragraph()
    footer_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
    _muted_run(footer_para, f"Generated: {formatter.format_timestamp(generated_at)} | Page ")
    _add_page_number_field(footer_para)
    _muted_run(footer_para, f" | {FOOTER_NOTICE}")

    title = doc.add_paragraph()
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = title.add_run(SHEET_TITLE)
    run.bold = True
    run.font.size = Pt(16)
    title.paragraph_format.space_after = Pt(20)

    dated = doc.add_paragraph()
    dated.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = dated.add_run(f"Generated on: {formatter.format_short_date(generated_at.date())}")
    run.font.size = Pt(10)
    run.font.color.rgb = SUBTLE
    dated.paragraph_format.space_after = Pt(30)

    for report_section in build_sections(record, formatter):
        doc.add_heading(report_section.title, level=2)
        table = doc.add_table(rows=0, cols=2)
        table.style = "Table Grid"
        for f in report_section.fields:
            cells = table.add_row().cells
            cells[0].text = f"{f.label}:"
            cells[1].text = f.text

    buffer = io.BytesIO()
    doc.save(buffer)
    logger.debug("Built Word document for record %s", record.id)
    return buffer.getvalue()
