"""Tests for the workbook and Word document encodings."""

import io

from docx import Document as WordDocument
from openpyxl import load_workbook

from profile_report.docx_renderer import docx_file_name, render_docx
from profile_report.sections import SECTION_TITLES, SUMMARY_COLUMNS
from profile_report.sheet_renderer import (
    individual_file_name, render_individual_sheet,
    render_summary_sheet, summary_file_name,
)

CANONICAL_TITLES = [title for _, title in SECTION_TITLES]


def _rows(data: bytes):
    wb = load_workbook(io.BytesIO(data))
    ws = wb.active
    return ws.title, [tuple(c for c in row) for row in ws.iter_rows(values_only=True)]


class TestIndividualSheet:

    def test_layout(self, full_record, generated_at):
        title, rows = _rows(render_individual_sheet(full_record, generated_at=generated_at))
        assert title == "Individual Report"
        assert rows[0][0] == "HOUSEMAID COMPREHENSIVE REPORT"
        assert rows[1][:2] == ("Generated on:", "1/5/2024")
        section_rows = [row[0] for row in rows if row[0] in CANONICAL_TITLES]
        assert section_rows == CANONICAL_TITLES

    def test_fallbacks(self, sparse_record, generated_at):
        _, rows = _rows(render_individual_sheet(sparse_record, generated_at=generated_at))
        pairs = [row[:2] for row in rows if len(row) > 1 and row[1] is not None]
        assert ("Agency Name", "Not assigned") in pairs
        assert ("Complaint Description", "No complaints reported") in pairs
        assert all(value for _, value in pairs)

    def test_file_name(self, full_record):
        assert individual_file_name(full_record) == "Maria_Santos_Cruz_Report.xlsx"


class TestSummarySheet:

    def test_one_row_per_record(self, full_record, sparse_record):
        title, rows = _rows(render_summary_sheet([full_record, sparse_record]))
        assert title == "Summary Report"
        assert list(rows[0]) == [header for header, _, _ in SUMMARY_COLUMNS]
        assert len(rows) == 3
        assert rows[1][1] == "Maria  Santos Cruz"
        assert rows[2][12] == "Not assigned"

    def test_empty(self):
        _, rows = _rows(render_summary_sheet([]))
        assert len(rows) == 1

    def test_file_name(self):
        assert summary_file_name() == "Housemaid_summary_Report.xlsx"


class TestWordDocument:

    def test_structure(self, full_record, brand, generated_at):
        doc = WordDocument(io.BytesIO(render_docx(full_record, brand, generated_at=generated_at)))
        paragraphs = [p.text for p in doc.paragraphs]
        assert paragraphs[0] == "HOUSEMAID COMPREHENSIVE REPORT"
        assert paragraphs[1] == "Generated on: 1/5/2024"
        headings = [p.text for p in doc.paragraphs if p.style.name == "Heading 2"]
        assert headings == CANONICAL_TITLES
        assert len(doc.tables) == len(CANONICAL_TITLES)
        assert doc.tables[0].rows[0].cells[0].text == "Full Name:"
        assert doc.core_properties.author == "Acme Staffing"

    def test_header_and_footer(self, full_record, generated_at):
        doc = WordDocument(io.BytesIO(render_docx(full_record, generated_at=generated_at)))
        section = doc.sections[0]
        assert section.header.paragraphs[0].text == (
            "CONFIDENTIAL DOCUMENT - FOR AUTHORIZED PERSONNEL ONLY")
        footer = section.footer.paragraphs[0]
        assert footer.text.startswith("Generated: January 5, 2024 at 03:07 PM | Page ")
        assert footer.text.endswith("| This document contains confidential information")
        assert "PAGE" in footer._p.xml

    def test_fallbacks(self, sparse_record, generated_at):
        doc = WordDocument(io.BytesIO(render_docx(sparse_record, generated_at=generated_at)))
        saudi = doc.tables[CANONICAL_TITLES.index("SAUDI RECRUITMENT AGENCY")]
        values = [row.cells[1].text for row in saudi.rows]
        assert values[0] == "Not assigned"
        assert set(values[1:]) == {"Not provided"}

    def test_file_name(self, sparse_record):
        assert docx_file_name(sparse_record) == "Ana_Lopez_Report.docx"
