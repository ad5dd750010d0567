"""Replay a laid-out Document onto a ReportLab canvas."""

import io
import logging
from pathlib import Path
from typing import Optional, Union

from reportlab.lib.colors import HexColor
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .document import Document, FillRect, Image, Line, Page, Text, TextAlign

logger = logging.getLogger(__name__)


def _draw_page(c: canvas.Canvas, page: Page) -> None:
    """Draw one page. Document y runs top-down in mm, canvas y bottom-up in points."""
    height = page.height

    for op in page.ops:
        if isinstance(op, FillRect):
            c.setFillColor(HexColor(op.color))
            c.rect(op.x * mm, (height - op.y - op.height) * mm, op.width * mm, op.height * mm,
                   stroke=0, fill=1)
        elif isinstance(op, Line):
            c.setStrokeColor(HexColor(op.color))
            c.setLineWidth(op.width * mm)
            c.line(op.x1 * mm, (height - op.y1) * mm, op.x2 * mm, (height - op.y2) * mm)
        elif isinstance(op, Text):
            c.setFillColor(HexColor(op.color))
            c.setFont(op.font, op.size)
            x, y = op.x * mm, (height - op.y) * mm
            if op.align == TextAlign.RIGHT:
                c.drawRightString(x, y, op.text)
            elif op.align == TextAlign.CENTER:
                c.drawCentredString(x, y, op.text)
            else:
                c.drawString(x, y, op.text)
        elif isinstance(op, Image):
            try:
                c.drawImage(ImageReader(io.BytesIO(op.data)), op.x * mm,
                            (height - op.y - op.height) * mm, op.width * mm, op.height * mm,
                            preserveAspectRatio=True, mask="auto")
            except Exception as exc:
                logger.warning("Could not draw %s image on page %d: %s", op.role, page.number, exc)


def write_pdf(document: Document, path: Optional[Union[str, Path]] = None) -> bytes:
    """Render a Document to PDF bytes, optionally also writing them to ``path``."""
    buffer = io.BytesIO()
    first = document.pages[0] if document.pages else None
    pagesize = (first.width * mm, first.height * mm) if first else (210 * mm, 297 * mm)

    c = canvas.Canvas(buffer, pagesize=pagesize, invariant=1)
    if document.title:
        c.setTitle(document.title)
    if document.author:
        c.setAuthor(document.author)

    for page in document.pages:
        c.setPageSize((page.width * mm, page.height * mm))
        _draw_page(c, page)
        c.showPage()
    c.save()

    data = buffer.getvalue()
    if path is not None:
        Path(path).write_bytes(data)
        logger.info("Wrote %s (%d bytes)", path, len(data))
    return data
