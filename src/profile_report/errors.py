"""Exception types raised by the report engine."""


class ReportError(Exception):
    """Base class for report engine errors."""


class RecordFormatError(ReportError):
    """Raised when a record file or mapping cannot be turned into a Record."""


class ReportSelectionError(ReportError):
    """Raised when a report request violates the caller contract.

    Examples: an individual report with no record selected, or a summary
    report requested in an encoding that only supports single records.
    """


class ConfigError(ReportError):
    """Raised when a configuration file holds unknown keys or values."""
