"""File I/O for text documents."""

from bonpad.io.reader import load, load_bytes, load_lines

__all__ = ["load", "load_bytes", "load_lines"]
