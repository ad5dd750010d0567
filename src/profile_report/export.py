"""Report generation facade: format dispatch, request checks, batch export."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .canvas_backend import write_pdf
from .config import BrandConfig, RenderOptions
from .docx_renderer import docx_file_name, render_docx
from .errors import ReportSelectionError
from .pdf_renderer import PageCompositor
from .record import Record
from .sheet_renderer import (
    individual_file_name, render_individual_sheet,
    render_summary_sheet, summary_file_name,
)

logger = logging.getLogger(__name__)


class ExportFormat(Enum):
    PDF = "pdf"
    EXCEL = "excel"
    WORD = "word"


class ReportType(Enum):
    INDIVIDUAL = "individual"  # One selected record
    SUMMARY = "summary"        # Every record, one row each (workbook only)


MEDIA_TYPES = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.EXCEL: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.WORD: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


@dataclass
class ExportResult:
    """Finished export bytes with the suggested file name."""
    file_name: str
    content: bytes = field(repr=False)
    media_type: str
    page_count: Optional[int] = None  # Paginated encoding only
    warnings: List[str] = field(default_factory=list)


def _find_record(records: Sequence[Record], record_id: Optional[str]) -> Record:
    if not record_id:
        raise ReportSelectionError("An individual report needs a selected record")
    for record in records:
        if record.id == record_id:
            return record
    raise ReportSelectionError(f"No record with id {record_id!r}")


def render_individual(
    record: Record,
    fmt: Union[ExportFormat, str] = ExportFormat.PDF,
    brand: Optional[BrandConfig] = None,
    options: Optional[RenderOptions] = None,
    generated_at: Optional[datetime] = None,
) -> ExportResult:
    """Render one record in the requested encoding."""
    fmt = ExportFormat(fmt)
    brand = brand or BrandConfig()
    options = options or RenderOptions()
    generated_at = generated_at or datetime.now()

    if fmt == ExportFormat.PDF:
        document = PageCompositor().render(record, brand, options, generated_at)
        return ExportResult(
            file_name=document.file_name,
            content=write_pdf(document),
            media_type=MEDIA_TYPES[fmt],
            page_count=document.page_count,
            warnings=list(document.warnings),
        )
    if fmt == ExportFormat.EXCEL:
        return ExportResult(
            file_name=individual_file_name(record),
            content=render_individual_sheet(record, options, generated_at),
            media_type=MEDIA_TYPES[fmt],
        )
    return ExportResult(
        file_name=docx_file_name(record),
        content=render_docx(record, brand, options, generated_at),
        media_type=MEDIA_TYPES[fmt],
    )


def generate_report(
    records: Sequence[Record],
    fmt: Union[ExportFormat, str] = ExportFormat.PDF,
    report_type: Union[ReportType, str] = ReportType.INDIVIDUAL,
    record_id: Optional[str] = None,
    brand: Optional[BrandConfig] = None,
    options: Optional[RenderOptions] = None,
    generated_at: Optional[datetime] = None,
) -> ExportResult:
    """Validate a report request, then render it.

    Raises:
        ReportSelectionError: individual report with no or an unknown
            record id, or a summary report in an encoding other than the
            workbook.
    """
    fmt = ExportFormat(fmt)
    report_type = ReportType(report_type)

    if report_type == ReportType.SUMMARY:
        if fmt != ExportFormat.EXCEL:
            raise ReportSelectionError(
                f"{report_type.value} reports are only available as {ExportFormat.EXCEL.value}"
            )
        logger.info("Generating summary workbook for %d record(s)", len(records))
        return ExportResult(
            file_name=summary_file_name(report_type.value),
            content=render_summary_sheet(records, options),
            media_type=MEDIA_TYPES[fmt],
        )

    record = _find_record(records, record_id)
    logger.info("Generating %s report for record %s", fmt.value, record.id)
    return render_individual(record, fmt, brand, options, generated_at)


def export_many(
    records: Sequence[Record],
    fmt: Union[ExportFormat, str] = ExportFormat.PDF,
    brand: Optional[BrandConfig] = None,
    options: Optional[RenderOptions] = None,
    generated_at: Optional[datetime] = None,
    max_workers: int = 2,
) -> List[ExportResult]:
    """Render individual reports for many records in parallel.

    Results are returned in the order of ``records``.
    """
    fmt = ExportFormat(fmt)
    generated_at = generated_at or datetime.now()
    if not records:
        return []

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="report") as executor:
        futures = [
            executor.submit(render_individual, record, fmt, brand, options, generated_at)
            for record in records
        ]
        results = [future.result() for future in futures]

    logger.info("Exported %d %s report(s)", len(results), fmt.value)
    return results


def save_result(result: ExportResult, out_dir: Union[str, Path]) -> Path:
    """Write an export to ``out_dir`` under its suggested file name."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / result.file_name
    path.write_bytes(result.content)
    logger.info("Saved %s", path)
    return path
