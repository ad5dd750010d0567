"""Normalize raw record values into display strings."""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from .config import DEFAULT_LOCALE

logger = logging.getLogger(__name__)


NOT_SPECIFIED = "Not specified"
NOT_PROVIDED = "Not provided"
NOT_ASSIGNED = "Not assigned"
NOT_APPLICABLE = "Not applicable"

INSIDE_COUNTRY = "Inside Country"
OUTSIDE_COUNTRY = "Outside Country"

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Long date layouts per supported locale token
LONG_DATE_PATTERNS = {
    "en-US": "{month} {day}, {year}",
    "en-GB": "{day} {month} {year}",
}


class FieldKind(Enum):
    """How a raw value is turned into text."""
    TEXT = "text"      # Optional free text with a field-specific fallback
    DATE = "date"      # Long-form locale date, "Not specified" when absent
    STATUS = "status"  # Enumerated status, first character capitalized
    FLAG = "flag"      # Boolean rendered through a pair of labels


def parse_date(value: Any) -> Optional[date]:
    """Parse a date, datetime or ISO-8601 string. Returns None if unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    # Accept a trailing "Z" the way JavaScript ISO strings carry it
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


class FieldFormatter:
    """Turns raw values into display strings. Never raises."""

    def __init__(self, locale: str = DEFAULT_LOCALE):
        if locale not in LONG_DATE_PATTERNS:
            logger.warning("Unsupported locale %r, falling back to %s", locale, DEFAULT_LOCALE)
            locale = DEFAULT_LOCALE
        self.locale = locale

    def format(
        self,
        value: Any,
        kind: FieldKind = FieldKind.TEXT,
        fallback: str = NOT_PROVIDED,
        true_label: str = INSIDE_COUNTRY,
        false_label: str = OUTSIDE_COUNTRY,
    ) -> str:
        if kind == FieldKind.DATE:
            return self.format_date(value)
        if kind == FieldKind.FLAG:
            if value is None:
                return fallback
            return true_label if value else false_label

        if value is None:
            return fallback
        text = str(value).strip()
        if not text:
            return fallback
        if kind == FieldKind.STATUS:
            return text[0].upper() + text[1:]
        return text

    def format_date(self, value: Any) -> str:
        """Long-form date, e.g. "January 5, 2024"."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return NOT_SPECIFIED
        parsed = parse_date(value)
        if parsed is None:
            return str(value).strip()
        return LONG_DATE_PATTERNS[self.locale].format(
            month=MONTH_NAMES[parsed.month - 1],
            day=parsed.day,
            year=parsed.year,
        )

    def format_short_date(self, value: date) -> str:
        """Numeric date as used in sheet captions, e.g. "1/5/2024"."""
        if self.locale == "en-GB":
            return f"{value.day:02d}/{value.month:02d}/{value.year}"
        return f"{value.month}/{value.day}/{value.year}"

    def format_timestamp(self, value: datetime) -> str:
        """Date with a 12-hour clock, e.g. "January 5, 2024 at 03:07 PM"."""
        hour = value.hour % 12 or 12
        meridiem = "AM" if value.hour < 12 else "PM"
        return f"{self.format_date(value)} at {hour:02d}:{value.minute:02d} {meridiem}"
