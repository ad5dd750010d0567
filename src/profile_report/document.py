"""Draw operations, pages and the finished document value.

All coordinates are millimetres measured from the top-left corner of the
page. Text ``y`` is the baseline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class TextAlign(Enum):
    LEFT = "left"
    RIGHT = "right"      # x is the right edge
    CENTER = "center"    # x is the centre line


@dataclass(frozen=True)
class FillRect:
    """A filled rectangle with no stroke."""
    x: float
    y: float  # Top edge
    width: float
    height: float
    color: str
    role: str = ""


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float = 0.2
    role: str = ""


@dataclass(frozen=True)
class Text:
    x: float
    y: float  # Baseline
    text: str
    font: str
    size: float
    color: str
    align: TextAlign = TextAlign.LEFT
    role: str = ""


@dataclass(frozen=True)
class Image:
    """A raster image already checked as decodable."""
    x: float
    y: float  # Top edge
    width: float
    height: float
    data: bytes = field(repr=False)
    role: str = ""


DrawOp = Union[FillRect, Line, Text, Image]


@dataclass(frozen=True)
class PageStamp:
    """Record of a header or footer drawn on a page."""
    kind: str  # "header" or "footer"
    page_number: int
    total_pages: Optional[int] = None
    subject_name: Optional[str] = None


@dataclass
class Page:
    """One fixed-size page of draw operations."""
    number: int
    width: float
    height: float
    ops: List[DrawOp] = field(default_factory=list)
    stamps: List[PageStamp] = field(default_factory=list)

    def add(self, op: DrawOp) -> None:
        self.ops.append(op)

    def texts(self, role: Optional[str] = None) -> List[Text]:
        """Text operations on this page, optionally filtered by role."""
        return [op for op in self.ops
                if isinstance(op, Text) and (role is None or op.role == role)]

    def images(self, role: Optional[str] = None) -> List[Image]:
        return [op for op in self.ops
                if isinstance(op, Image) and (role is None or op.role == role)]

    def stamps_of(self, kind: str) -> List[PageStamp]:
        return [s for s in self.stamps if s.kind == kind]


@dataclass
class RowPlacement:
    """Where a label/value row was drawn."""
    section_key: str
    label: str
    text: str
    page_number: int
    row_index: int
    y_top: float
    y_bottom: float
    line_count: int
    oversized: bool = False


@dataclass
class SectionPlacement:
    """Where a section started and ended, with its rows."""
    key: str
    title: str
    start_page: int
    end_page: int
    banner_y: float
    rows: List[RowPlacement] = field(default_factory=list)


@dataclass
class Document:
    """Finished paginated report: pages plus layout metadata."""
    pages: List[Page] = field(default_factory=list)
    file_name: str = ""
    title: str = ""
    author: str = ""
    estimated_total_pages: int = 0
    sections: List[SectionPlacement] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    body_bounds: Tuple[float, float] = (0.0, 0.0)  # (body_top, body_bottom)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def section_titles(self) -> List[str]:
        return [s.title for s in self.sections]

    @property
    def rows(self) -> List[RowPlacement]:
        return [row for section in self.sections for row in section.rows]
