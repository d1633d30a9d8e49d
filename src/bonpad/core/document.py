"""Read-only line sequence shown by the editor."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class TextDocument:
    """
    An ordered sequence of lines loaded from a file.

    Lines are raw byte spans with their terminators already stripped.
    The engine only reads them; no operation here mutates the sequence.
    """
    lines: tuple[bytes, ...] = ()
    source_path: Optional[Path] = None

    @classmethod
    def empty(cls) -> TextDocument:
        """Document with no lines (the welcome-screen case)."""
        return cls()

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def line(self, row: int) -> bytes:
        """Bytes of a line, or empty bytes past the end."""
        if 0 <= row < len(self.lines):
            return self.lines[row]
        return b""

    def line_length(self, row: int) -> int:
        """Length of a line; 0 for the virtual row just past the last line."""
        return len(self.line(row))
