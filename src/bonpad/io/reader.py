"""Load text files into a line sequence."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO

from bonpad.core.document import TextDocument
from bonpad.errors import SourceLoadError

logger = logging.getLogger(__name__)


def _read_lines(stream: BinaryIO) -> tuple[bytes, ...]:
    # Strip every trailing \n / \r, matching how terminals show CRLF files
    return tuple(raw.rstrip(b'\r\n') for raw in stream)


def load_lines(path: str | Path) -> tuple[bytes, ...]:
    """
    Read a file sequentially into a tuple of lines.

    Trailing newline and carriage-return bytes are stripped from each
    line. Content is kept as raw bytes; no decoding is attempted.
    """
    path = Path(path)

    try:
        with open(path, 'rb') as f:
            lines = _read_lines(f)
    except OSError as e:
        raise SourceLoadError("open", f"{path}: {e.strerror or e}") from e

    logger.info("Loaded %d lines from %s", len(lines), path)
    return lines


def load(path: str | Path) -> TextDocument:
    """Load a file from disk as a TextDocument."""
    path = Path(path)
    return TextDocument(lines=load_lines(path), source_path=path)


def load_bytes(data: bytes) -> TextDocument:
    """Build a TextDocument from raw bytes already in memory."""
    return TextDocument(lines=_read_lines(io.BytesIO(data)))
