"""Visual style profile for the paginated report."""

from dataclasses import dataclass


def rgb_hex(r: int, g: int, b: int) -> str:
    """Hex color string as carried on draw operations."""
    return f"#{r:02X}{g:02X}{b:02X}"


@dataclass(frozen=True)
class ReportStyle:
    """Colors, fonts and row metrics for the paginated report.

    Colors are ``#RRGGBB`` strings; lengths are millimetres.
    """
    font_family: str = "Helvetica"

    # Header band and footer
    header_band_color: str = rgb_hex(37, 99, 235)
    header_text_color: str = rgb_hex(255, 255, 255)
    footer_rule_color: str = rgb_hex(200, 200, 200)
    footer_text_color: str = rgb_hex(100, 100, 100)
    footer_rule_width: float = 0.5
    company_font_size: int = 14
    caption_font_size: int = 10
    subject_font_size: int = 12
    page_counter_font_size: int = 10
    footer_font_size: int = 8
    copyright_font_size: int = 7

    # First-page title block
    title_color: str = rgb_hex(17, 24, 39)
    title_font_size: int = 20
    subtitle_color: str = rgb_hex(107, 114, 128)
    subtitle_font_size: int = 12
    photo_size: float = 30.0

    # Section banner
    banner_fill_color: str = rgb_hex(248, 250, 252)
    banner_accent_color: str = rgb_hex(59, 130, 246)
    banner_title_color: str = rgb_hex(30, 64, 175)
    banner_font_size: int = 12
    banner_box_height: float = 12.0
    banner_height: float = 15.0   # Vertical space consumed by a banner
    accent_width: float = 2.0
    section_gap: float = 5.0

    # Label/value rows
    row_tint_color: str = rgb_hex(249, 250, 251)
    label_color: str = rgb_hex(75, 85, 99)
    value_color: str = rgb_hex(17, 24, 39)
    row_font_size: int = 10
    row_height: float = 8.0
    line_height: float = 6.0
    label_x: float = 20.0
    value_x: float = 90.0
    value_right_inset: float = 30.0  # Value column ends this far from the right page edge
    wrap_threshold: int = 50         # Values longer than this many characters wrap

    # Verification block
    verification_min_space: float = 80.0
    verification_font_size: int = 10
    notice_font_size: int = 9
    caption_small_font_size: int = 8
    signature_line_color: str = rgb_hex(100, 100, 100)

    @property
    def bold_font(self) -> str:
        return get_bold_font(self.font_family)


DEFAULT_STYLE = ReportStyle()


def get_bold_font(font_family: str) -> str:
    """Get the bold variant of a font family."""
    if font_family == "Times-Roman":
        return "Times-Bold"
    elif font_family == "Courier":
        return "Courier-Bold"
    else:
        return f"{font_family}-Bold"
