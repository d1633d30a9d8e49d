"""Compose full-screen frames and write them to the terminal in one call."""

from __future__ import annotations

from typing import Callable

from bonpad import __version__
from bonpad.cli.core import ansi_text
from bonpad.core.document import TextDocument
from bonpad.core.viewport import ViewportModel
from bonpad.errors import TerminalIOError

DEFAULT_WELCOME = f"Bonpad editor -- version {__version__}"


class RenderBuffer:
    """Growable byte buffer holding one frame until it is flushed."""

    def __init__(self) -> None:
        self._data = bytearray()

    def append(self, data: bytes) -> None:
        self._data += data

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def reset(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


class FrameRenderer:
    """
    Redraws the whole screen from the top on every frame.

    The frame is built in a RenderBuffer and handed to ``write`` exactly
    once, so the terminal never shows a half-drawn screen. A short or
    failed write is fatal and is not retried.
    """

    def __init__(self, write: Callable[[bytes], int], welcome: str = DEFAULT_WELCOME) -> None:
        self._write = write
        self.welcome = welcome.encode('utf-8', errors='replace')

    def render(self, document: TextDocument, viewport: ViewportModel) -> None:
        """Scroll the viewport to the cursor, then draw and flush one frame."""
        viewport.scroll()
        buffer = RenderBuffer()
        self._compose_into(buffer, document, viewport)
        try:
            self._flush(buffer)
        finally:
            buffer.reset()

    def compose(self, document: TextDocument, viewport: ViewportModel) -> bytes:
        """Build the bytes for one frame without writing them."""
        buffer = RenderBuffer()
        self._compose_into(buffer, document, viewport)
        return buffer.getvalue()

    def _compose_into(
        self,
        buffer: RenderBuffer,
        document: TextDocument,
        viewport: ViewportModel,
    ) -> None:
        buffer.append(ansi_text.HIDE_CURSOR)
        buffer.append(ansi_text.CURSOR_HOME)
        self._draw_rows(buffer, document, viewport)
        buffer.append(ansi_text.move_to(*viewport.screen_cursor()))
        buffer.append(ansi_text.SHOW_CURSOR)

    def _draw_rows(
        self,
        buffer: RenderBuffer,
        document: TextDocument,
        viewport: ViewportModel,
    ) -> None:
        rows = viewport.screen_rows
        cols = viewport.screen_cols

        for y in range(rows):
            file_row = y + viewport.row_offset
            if file_row >= document.line_count:
                if document.is_empty and y == rows // 3:
                    buffer.append(self._welcome_row(cols))
                else:
                    buffer.append(b'~')
            else:
                buffer.append(ansi_text.clip(document.line(file_row), viewport.col_offset, cols))

            buffer.append(ansi_text.CLEAR_LINE)
            # No line break after the last row, or the terminal would scroll
            if y < rows - 1:
                buffer.append(ansi_text.CRLF)

    def _welcome_row(self, cols: int) -> bytes:
        """Welcome banner centred in the row, led by the usual tilde."""
        text = ansi_text.truncate(self.welcome, cols)
        padding = (cols - len(text)) // 2
        row = b''
        if padding:
            row += b'~'
            padding -= 1
        return row + b' ' * padding + text

    def _flush(self, buffer: RenderBuffer) -> None:
        frame = buffer.getvalue()
        try:
            written = self._write(frame)
        except OSError as e:
            raise TerminalIOError("write", e.strerror or str(e)) from e
        if written != len(frame):
            raise TerminalIOError("write", f"short write ({written} of {len(frame)} bytes)")
