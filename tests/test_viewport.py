"""Tests for cursor motion and scroll recomputation."""

import random

import pytest

from bonpad.core.document import TextDocument
from bonpad.core.viewport import Motion, ViewportModel


class TestHorizontalMotion:

    def test_left_stops_at_zero(self, short_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20)
        view.move(Motion.LEFT, short_document)
        assert view.cx == 0

    def test_right_stops_at_line_end(self, short_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20)
        for _ in range(10):
            view.move(Motion.RIGHT, short_document)
        assert view.cx == len(b"hello")

    def test_right_does_not_wrap(self, short_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20, cx=5)
        view.move(Motion.RIGHT, short_document)
        assert (view.cy, view.cx) == (0, 5)

    def test_right_past_last_line(self, short_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20, cy=3)
        view.move(Motion.RIGHT, short_document)
        assert view.cx == 0

    def test_home_and_end(self, short_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20, cy=2, cx=4)
        view.move(Motion.END, short_document)
        assert view.cx == len(short_document.line(2))
        view.move(Motion.HOME, short_document)
        assert view.cx == 0

    def test_random_left_right_stays_in_line(self) -> None:
        line = b"x" * 37
        document = TextDocument(lines=(line,))
        view = ViewportModel(screen_rows=5, screen_cols=10)
        rng = random.Random(1234)
        for _ in range(500):
            view.move(rng.choice([Motion.LEFT, Motion.RIGHT]), document)
            assert 0 <= view.cx <= len(line)


class TestVerticalMotion:

    def test_up_stops_at_zero(self, short_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20)
        view.move(Motion.UP, short_document)
        assert view.cy == 0

    def test_down_stops_past_last_line(self, short_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20)
        for _ in range(10):
            view.move(Motion.DOWN, short_document)
        assert view.cy == short_document.line_count

    def test_down_snaps_to_shorter_line(self, short_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20, cx=5)
        view.move(Motion.DOWN, short_document)
        assert (view.cy, view.cx) == (1, 0)

    def test_empty_document(self, empty_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20)
        for motion in Motion:
            view.move(motion, empty_document)
        assert (view.cy, view.cx) == (0, 0)

    def test_page_down_then_scroll(self, long_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=20, screen_cols=80)
        view.move(Motion.PAGE_DOWN, long_document)
        assert view.cy == 20
        view.scroll()
        assert view.row_offset == 1

    def test_page_up(self, long_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=20, screen_cols=80, cy=30)
        view.move(Motion.PAGE_UP, long_document)
        assert view.cy == 10
        view.move(Motion.PAGE_UP, long_document)
        assert view.cy == 0

    def test_page_down_clamps(self, long_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=20, screen_cols=80, cy=45)
        view.move(Motion.PAGE_DOWN, long_document)
        assert view.cy == long_document.line_count

    def test_random_motion_keeps_invariants(self, short_document: TextDocument) -> None:
        view = ViewportModel(screen_rows=2, screen_cols=8)
        rng = random.Random(99)
        motions = list(Motion)
        for _ in range(1000):
            view.move(rng.choice(motions), short_document)
            assert 0 <= view.cy <= short_document.line_count
            assert 0 <= view.cx <= short_document.line_length(view.cy)


class TestScroll:

    def test_scroll_down_reveals_cursor(self) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20, cy=25)
        view.scroll()
        assert view.row_offset == 16

    def test_scroll_up_reveals_cursor(self) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20, cy=3, row_offset=8)
        view.scroll()
        assert view.row_offset == 3

    def test_scroll_right(self) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=80, cx=100)
        view.scroll()
        assert view.col_offset == 21

    def test_scroll_left_never_negative(self) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=80, cx=20, col_offset=21)
        view.scroll()
        assert view.col_offset == 20

    @pytest.mark.parametrize("cx, cy, row_offset, col_offset", [
        (0, 0, 0, 0),
        (100, 60, 0, 0),
        (3, 2, 40, 50),
        (79, 19, 0, 0),
    ])
    def test_scroll_is_idempotent(self, cx: int, cy: int, row_offset: int, col_offset: int) -> None:
        view = ViewportModel(20, 80, cx=cx, cy=cy, row_offset=row_offset, col_offset=col_offset)
        view.scroll()
        first = (view.row_offset, view.col_offset)
        view.scroll()
        assert (view.row_offset, view.col_offset) == first

    def test_cursor_always_on_screen_after_scroll(self) -> None:
        rng = random.Random(7)
        for _ in range(200):
            view = ViewportModel(
                screen_rows=rng.randint(1, 40),
                screen_cols=rng.randint(1, 120),
                cx=rng.randint(0, 300),
                cy=rng.randint(0, 300),
                row_offset=rng.randint(0, 300),
                col_offset=rng.randint(0, 300),
            )
            view.scroll()
            row, col = view.screen_cursor()
            assert 1 <= row <= view.screen_rows
            assert 1 <= col <= view.screen_cols

    def test_screen_cursor(self) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20, cx=4, cy=12, row_offset=5, col_offset=2)
        assert view.screen_cursor() == (8, 3)

    def test_resize(self) -> None:
        view = ViewportModel(screen_rows=10, screen_cols=20, cy=15)
        view.resize(40, 100)
        view.scroll()
        assert (view.screen_rows, view.screen_cols) == (40, 100)
        assert view.row_offset == 0
