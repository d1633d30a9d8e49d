"""Cursor and scroll state mapping document coordinates to the screen."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from bonpad.core.document import TextDocument


class Motion(Enum):
    """Cursor motion intents."""
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()


@dataclass
class ViewportModel:
    """
    Cursor position and scroll offsets for one document view.

    ``cx``/``cy`` are zero-based document coordinates. ``cy`` may equal the
    line count (the row just past the last line). The offsets are derived:
    ``scroll()`` recomputes them from the cursor and the screen size, and
    nothing else should assign them.

    Motions never fail; anything out of range is clamped.
    """
    screen_rows: int
    screen_cols: int
    cx: int = 0
    cy: int = 0
    row_offset: int = 0
    col_offset: int = 0

    def move(self, motion: Motion, document: TextDocument) -> None:
        """Apply a cursor motion against the given document."""
        if motion is Motion.PAGE_UP or motion is Motion.PAGE_DOWN:
            step = Motion.UP if motion is Motion.PAGE_UP else Motion.DOWN
            for _ in range(self.screen_rows):
                self._step(step, document)
        elif motion is Motion.HOME:
            self.cx = 0
        elif motion is Motion.END:
            self.cx = document.line_length(self.cy)
        else:
            self._step(motion, document)

    def _step(self, motion: Motion, document: TextDocument) -> None:
        if motion is Motion.LEFT:
            if self.cx > 0:
                self.cx -= 1
        elif motion is Motion.RIGHT:
            if self.cy < document.line_count and self.cx < document.line_length(self.cy):
                self.cx += 1
        elif motion is Motion.UP:
            if self.cy > 0:
                self.cy -= 1
            self._snap(document)
        elif motion is Motion.DOWN:
            if self.cy < document.line_count:
                self.cy += 1
            self._snap(document)

    def _snap(self, document: TextDocument) -> None:
        # Keep cx inside the (possibly shorter) line the cursor landed on
        length = document.line_length(self.cy)
        if self.cx > length:
            self.cx = length

    def scroll(self) -> None:
        """
        Recompute the scroll offsets so the cursor is on screen.

        Pure function of the cursor, the current offsets and the screen
        size; calling it twice in a row changes nothing the second time.
        """
        if self.cy < self.row_offset:
            self.row_offset = self.cy
        if self.cy >= self.row_offset + self.screen_rows:
            self.row_offset = self.cy - self.screen_rows + 1
        if self.cx < self.col_offset:
            self.col_offset = self.cx
        if self.cx >= self.col_offset + self.screen_cols:
            self.col_offset = self.cx - self.screen_cols + 1

    def resize(self, rows: int, cols: int) -> None:
        """Record a new terminal size."""
        self.screen_rows = rows
        self.screen_cols = cols

    def screen_cursor(self) -> tuple[int, int]:
        """Cursor position in 1-based terminal (row, col) coordinates."""
        return self.cy - self.row_offset + 1, self.cx - self.col_offset + 1
