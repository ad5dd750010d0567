"""Tabular encoding: individual and summary workbooks via openpyxl."""

import io
import logging
from datetime import datetime
from typing import Iterable, Optional

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from .config import RenderOptions, SHEET_TITLE
from .formatting import FieldFormatter
from .pdf_renderer import suggested_file_name
from .record import Record
from .sections import SUMMARY_COLUMNS, build_sections, summary_row

logger = logging.getLogger(__name__)


INDIVIDUAL_SHEET = "Individual Report"
SUMMARY_SHEET = "Summary Report"
LABEL_COLUMN_WIDTH = 28
VALUE_COLUMN_WIDTH = 60
SUMMARY_COLUMN_WIDTH = 20


def individual_file_name(record: Record) -> str:
    return suggested_file_name(record.display_name, "_Report.xlsx")


def summary_file_name(report_type: str = "summary") -> str:
    return f"Housemaid_{report_type}_Report.xlsx"


def _to_bytes(workbook: Workbook) -> bytes:
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def render_individual_sheet(
    record: Record,
    options: Optional[RenderOptions] = None,
    generated_at: Optional[datetime] = None,
) -> bytes:
    """One record as a two-column label/value sheet, grouped by section."""
    options = options or RenderOptions()
    generated_at = generated_at or datetime.now()
    formatter = FieldFormatter(options.locale)

    wb = Workbook()
    ws = wb.active
    ws.title = INDIVIDUAL_SHEET
    bold = Font(bold=True)

    ws.append([SHEET_TITLE])
    ws.cell(row=1, column=1).font = Font(bold=True, size=14)
    ws.append(["Generated on:", formatter.format_short_date(generated_at.date())])
    ws.append([])

    for section in build_sections(record, formatter):
        ws.append([section.title])
        ws.cell(row=ws.max_row, column=1).font = bold
        for f in section.fields:
            ws.append([f.label, f.text])
        ws.append([])

    ws.column_dimensions["A"].width = LABEL_COLUMN_WIDTH
    ws.column_dimensions["B"].width = VALUE_COLUMN_WIDTH
    logger.debug("Built individual sheet for record %s (%d rows)", record.id, ws.max_row)
    return _to_bytes(wb)


def render_summary_sheet(records: Iterable[Record], options: Optional[RenderOptions] = None) -> bytes:
    """All records as one row each under the summary column headers."""
    options = options or RenderOptions()
    formatter = FieldFormatter(options.locale)
    headers = [header for header, _, _ in SUMMARY_COLUMNS]

    wb = Workbook()
    ws = wb.active
    ws.title = SUMMARY_SHEET
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    count = 0
    for record in records:
        row = summary_row(record, formatter)
        ws.append([row[header] for header in headers])
        count += 1

    for index in range(1, len(headers) + 1):
        ws.column_dimensions[get_column_letter(index)].width = SUMMARY_COLUMN_WIDTH
    ws.freeze_panes = "A2"
    logger.debug("Built summary sheet with %d record(s)", count)
    return _to_bytes(wb)
