"""Brand, render option and export configuration, with YAML loading."""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional
import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)


# Product defaults used when the brand configuration leaves a value out
DEFAULT_PRODUCT_NAME = "Housemaid Management System"
DEFAULT_FOOTER_NAME = "Housemaid Management"
DEFAULT_COPYRIGHT = "© 2024 Housemaid Management. All rights reserved."
DEFAULT_LOCALE = "en-US"

REPORT_CAPTION = "COMPREHENSIVE EMPLOYEE REPORT"
DOCUMENT_TITLE = "EMPLOYEE COMPREHENSIVE REPORT"
SHEET_TITLE = "HOUSEMAID COMPREHENSIVE REPORT"
CONFIDENTIAL_NOTICE = "CONFIDENTIAL DOCUMENT - FOR AUTHORIZED PERSONNEL ONLY"

# Header pages show this total unless an exact count is requested
ESTIMATED_TOTAL_PAGES = 2

EXPORT_FORMATS = ("pdf", "excel", "word")
REPORT_TYPES = ("individual", "summary")


@dataclass(frozen=True)
class BrandConfig:
    """Caller-supplied identity for headers and footers. Never mutated."""
    company_name: Optional[str] = None
    logo_image_bytes: Optional[bytes] = field(default=None, repr=False)
    copyright_text: Optional[str] = None

    @property
    def header_name(self) -> str:
        return self.company_name or DEFAULT_PRODUCT_NAME

    @property
    def footer_name(self) -> str:
        return self.company_name or DEFAULT_FOOTER_NAME

    @property
    def copyright_line(self) -> str:
        return self.copyright_text or DEFAULT_COPYRIGHT

    @classmethod
    def from_yaml(cls, path: Path) -> "BrandConfig":
        """Load brand settings from a YAML file.

        ``logo_path`` is resolved relative to the YAML file. A logo that
        cannot be read is logged and left out.
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        logo_bytes = None
        logo_path = data.get("logo_path")
        if logo_path:
            logo_file = Path(logo_path)
            if not logo_file.is_absolute():
                logo_file = path.parent / logo_file
            try:
                logo_bytes = logo_file.read_bytes()
            except OSError as exc:
                logger.warning("Could not read brand logo %s: %s", logo_file, exc)

        return cls(
            company_name=data.get("company_name") or None,
            logo_image_bytes=logo_bytes,
            copyright_text=data.get("copyright_text") or None,
        )


@dataclass(frozen=True)
class RenderOptions:
    """Per-call rendering switches."""
    include_logo: bool = True
    include_photo: bool = True
    locale: str = DEFAULT_LOCALE
    # Run a measuring pass so headers show the real "Page X of Y" total
    exact_page_count: bool = False


@dataclass
class ExportConfig:
    """Configuration for command-line and batch exports."""

    out_dir: Path = field(default_factory=lambda: Path("out"))
    format: str = "pdf"  # "pdf", "excel" or "word"
    report_type: str = "individual"  # "individual" or "summary"
    locale: str = DEFAULT_LOCALE
    include_logo: bool = True
    include_photo: bool = True
    exact_page_count: bool = False
    brand_path: Optional[Path] = None
    max_workers: int = 2
    log_level: str = "INFO"

    def render_options(self) -> RenderOptions:
        return RenderOptions(
            include_logo=self.include_logo,
            include_photo=self.include_photo,
            locale=self.locale,
            exact_page_count=self.exact_page_count,
        )

    def load_brand(self) -> BrandConfig:
        """Load the configured brand file, or return an empty brand."""
        if self.brand_path is None:
            return BrandConfig()
        return BrandConfig.from_yaml(self.brand_path)

    @classmethod
    def from_yaml(cls, path: Path) -> "ExportConfig":
        """Load configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        unknown = sorted(set(data) - {f.name for f in fields(cls)})
        if unknown:
            raise ConfigError(f"{path}: unknown config keys: {', '.join(unknown)}")
        if data.get("format", "pdf") not in EXPORT_FORMATS:
            raise ConfigError(f"{path}: format must be one of {', '.join(EXPORT_FORMATS)}, "
                              f"got {data['format']!r}")
        if data.get("report_type", "individual") not in REPORT_TYPES:
            raise ConfigError(f"{path}: report_type must be one of {', '.join(REPORT_TYPES)}, "
                              f"got {data['report_type']!r}")

        # Convert paths
        if "out_dir" in data:
            data["out_dir"] = Path(data["out_dir"])
        if data.get("brand_path"):
            brand_path = Path(data["brand_path"])
            if not brand_path.is_absolute():
                brand_path = Path(path).parent / brand_path
            data["brand_path"] = brand_path

        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        data = {
            "out_dir": str(self.out_dir),
            "format": self.format,
            "report_type": self.report_type,
            "locale": self.locale,
            "include_logo": self.include_logo,
            "include_photo": self.include_photo,
            "exact_page_count": self.exact_page_count,
            "brand_path": str(self.brand_path) if self.brand_path else None,
            "max_workers": self.max_workers,
            "log_level": self.log_level,
        }
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_config(path: Optional[Path] = None) -> ExportConfig:
    """Load config from path or return default config."""
    if path is None:
        return ExportConfig()
    return ExportConfig.from_yaml(path)
