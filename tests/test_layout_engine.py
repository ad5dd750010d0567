"""Tests for page geometry, the layout cursor and text wrapping."""

import pytest

from profile_report.layout_engine import (
    LayoutCursor, PageLayout, PageStamper, split_text_to_size, text_width,
)


class RecordingStamper(PageStamper):
    def __init__(self):
        self.events = []

    def start_page(self, page):
        self.events.append(("start", page.number))

    def finish_page(self, page):
        self.events.append(("finish", page.number))


class TestPageLayout:

    def test_a4_geometry(self):
        layout = PageLayout.a4()
        assert layout.page_width == pytest.approx(210, abs=0.01)
        assert layout.page_height == pytest.approx(297, abs=0.01)
        assert layout.body_top == 35
        assert layout.body_bottom == pytest.approx(272, abs=0.01)
        assert layout.content_width == pytest.approx(180, abs=0.01)

    def test_letter_is_shorter(self):
        assert PageLayout.letter().body_bottom < PageLayout.a4().body_bottom


class TestLayoutCursor:

    @pytest.fixture
    def cursor(self) -> LayoutCursor:
        return LayoutCursor(PageLayout.a4(), stamper=RecordingStamper())

    def test_starts_on_page_one_at_body_top(self, cursor):
        assert cursor.page == 1
        assert cursor.at_body_top
        assert cursor.stamper.events == [("start", 1)]

    def test_reserve_is_pure(self, cursor):
        y = cursor.y
        assert cursor.reserve(cursor.remaining)
        assert not cursor.reserve(cursor.remaining + 0.5)
        assert cursor.y == y

    def test_advance_and_remaining(self, cursor):
        cursor.advance(100)
        assert cursor.y == pytest.approx(135)
        assert cursor.remaining == pytest.approx(cursor.body_bottom - 135)
        assert not cursor.at_body_top

    def test_skip_is_clamped_to_body_bottom(self, cursor):
        cursor.advance(cursor.remaining - 2)
        cursor.skip(5)
        assert cursor.y == pytest.approx(cursor.body_bottom)

    def test_break_page_finishes_then_starts(self, cursor):
        cursor.advance(50)
        cursor.break_page()
        assert cursor.page == 2
        assert cursor.at_body_top
        assert cursor.stamper.events == [("start", 1), ("finish", 1), ("start", 2)]
        assert len(cursor.document.pages) == 2

    def test_returns_self_for_chaining(self, cursor):
        assert cursor.advance(1).skip(1).break_page() is cursor


class TestSplitTextToSize:

    def test_short_text_is_one_line(self):
        assert split_text_to_size("Riyadh", "Helvetica", 10, 90) == ["Riyadh"]

    def test_every_line_fits(self):
        text = "word " * 60
        lines = split_text_to_size(text, "Helvetica", 10, 90)
        assert len(lines) > 1
        for line in lines:
            assert text_width(line, "Helvetica", 10) <= 90
        assert " ".join(lines) == text.strip()

    def test_long_token_is_split(self):
        token = "X" * 200
        lines = split_text_to_size(token, "Helvetica", 10, 40)
        assert len(lines) > 1
        assert "".join(lines) == token

    def test_empty_text(self):
        assert split_text_to_size("", "Helvetica", 10, 90) == [""]
