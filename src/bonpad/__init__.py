"""
bonpad: a small terminal text viewer

Puts the terminal into raw mode, decodes keyboard escape sequences,
scrolls a viewport over the lines of a file and redraws the screen
with one write per frame.

Quick Start:
    >>> import bonpad
    >>> doc = bonpad.load("notes.txt")
    >>> view = bonpad.ViewportModel(screen_rows=24, screen_cols=80)
    >>> frame = bonpad.FrameRenderer(write=len).compose(doc, view)

From a shell:
    $ bonpad edit notes.txt
"""

__version__ = "0.1.0"

# Errors
from bonpad.errors import (
    BonpadError,
    SourceLoadError,
    TerminalConfigureError,
    TerminalIOError,
    TerminalQueryError,
    WindowSizeError,
)

# Core types
from bonpad.core.document import TextDocument
from bonpad.core.viewport import Motion, ViewportModel

# I/O
from bonpad.io.reader import load, load_lines

# Rendering
from bonpad.render.frame import FrameRenderer

# Terminal
from bonpad.cli.core.input import InputEvent, Key, KeyDecoder
from bonpad.cli.core.terminal import RawModeController, TerminalSize

__all__ = [
    # Version
    "__version__",
    # Errors
    "BonpadError",
    "SourceLoadError",
    "TerminalConfigureError",
    "TerminalIOError",
    "TerminalQueryError",
    "WindowSizeError",
    # Core types
    "TextDocument",
    "Motion",
    "ViewportModel",
    # I/O
    "load",
    "load_lines",
    # Rendering
    "FrameRenderer",
    # Terminal
    "InputEvent",
    "Key",
    "KeyDecoder",
    "RawModeController",
    "TerminalSize",
]
