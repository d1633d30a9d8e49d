"""VT100 control sequences and byte-span helpers used when drawing."""

from __future__ import annotations

import re

HIDE_CURSOR = b'\x1b[?25l'
SHOW_CURSOR = b'\x1b[?25h'
CURSOR_HOME = b'\x1b[H'
CLEAR_LINE = b'\x1b[K'  # Erase from cursor to end of line
CLEAR_SCREEN = b'\x1b[2J'
CRLF = b'\r\n'

# Push the cursor to the bottom-right corner (terminals clamp at the edge)
CURSOR_TO_CORNER = b'\x1b[999C\x1b[999B'
REQUEST_CURSOR_POSITION = b'\x1b[6n'

# Reply to REQUEST_CURSOR_POSITION: ESC [ rows ; cols R
_CURSOR_REPORT = re.compile(rb'\x1b\[(\d+);(\d+)R?')


def move_to(row: int, col: int) -> bytes:
    """Absolute cursor position sequence (1-indexed)."""
    return b'\x1b[%d;%dH' % (row, col)


def parse_cursor_report(data: bytes) -> tuple[int, int] | None:
    """Parse a cursor position report into (row, col), or None if malformed."""
    match = _CURSOR_REPORT.match(data)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def clip(line: bytes, offset: int, width: int) -> bytes:
    """
    Visible slice of a line for a horizontal offset and screen width.

    Returns empty bytes when the offset is past the end of the line.
    """
    if width <= 0 or offset >= len(line):
        return b''
    return line[max(offset, 0):max(offset, 0) + width]


def truncate(text: bytes, max_width: int) -> bytes:
    """Cut a byte string to at most max_width bytes."""
    if max_width <= 0:
        return b''
    return text[:max_width]
