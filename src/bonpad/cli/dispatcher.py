"""Top-level input loop: render, read one event, act on it."""

from __future__ import annotations

import logging
import os
from enum import Enum, auto
from typing import Callable, Optional

from bonpad.cli.core import ansi_text
from bonpad.cli.core.input import EventKind, InputEvent, Key, KeyDecoder
from bonpad.cli.core.terminal import (
    RawModeController,
    TerminalSize,
    probe_window_size,
    query_window_size,
)
from bonpad.config import EditorConfig
from bonpad.core.document import TextDocument
from bonpad.core.viewport import Motion, ViewportModel
from bonpad.errors import TerminalIOError
from bonpad.render.frame import FrameRenderer

logger = logging.getLogger(__name__)

QUIT_LETTER = 'q'

# Special keys that move the cursor. DELETE has no motion and is ignored.
KEY_MOTIONS: dict[Key, Motion] = {
    Key.ARROW_UP: Motion.UP,
    Key.ARROW_DOWN: Motion.DOWN,
    Key.ARROW_LEFT: Motion.LEFT,
    Key.ARROW_RIGHT: Motion.RIGHT,
    Key.HOME: Motion.HOME,
    Key.END: Motion.END,
    Key.PAGE_UP: Motion.PAGE_UP,
    Key.PAGE_DOWN: Motion.PAGE_DOWN,
}


class DispatchState(Enum):
    RUNNING = auto()
    TERMINATING = auto()


class InputDispatcher:
    """
    Drives one editing session.

    Each cycle renders a frame, then polls the decoder once. A poll that
    times out simply leads to the next frame, which is also when a changed
    window size gets picked up. Ctrl-Q clears the screen and ends the loop;
    errors from any component propagate to the caller.
    """

    def __init__(
        self,
        document: TextDocument,
        viewport: ViewportModel,
        decoder: KeyDecoder,
        renderer: FrameRenderer,
        write: Callable[[bytes], int],
        size_probe: Optional[Callable[[], Optional[TerminalSize]]] = None,
    ) -> None:
        self.document = document
        self.viewport = viewport
        self.decoder = decoder
        self.renderer = renderer
        self._write = write
        self._size_probe = size_probe
        self.state = DispatchState.RUNNING

    @property
    def running(self) -> bool:
        return self.state is DispatchState.RUNNING

    def run(self) -> int:
        """Loop until quit; returns the process exit status."""
        while self.running:
            self.step()
        return 0

    def step(self) -> None:
        """One render-then-read cycle."""
        self._check_resize()
        self.renderer.render(self.document, self.viewport)
        event = self.decoder.poll()
        if event is not None:
            self.handle(event)

    def handle(self, event: InputEvent) -> None:
        """Route a decoded event."""
        if event.is_ctrl(QUIT_LETTER):
            self._quit()
            return

        if event.kind is EventKind.SPECIAL and event.key in KEY_MOTIONS:
            self.viewport.move(KEY_MOTIONS[event.key], self.document)
        # Plain characters, other control bytes and bare Escape are ignored

    def _quit(self) -> None:
        logger.info("Quit requested")
        sequence = ansi_text.CLEAR_SCREEN + ansi_text.CURSOR_HOME
        try:
            written = self._write(sequence)
        except OSError as e:
            raise TerminalIOError("write", e.strerror or str(e)) from e
        if written != len(sequence):
            raise TerminalIOError("write", "short write while clearing screen")
        self.state = DispatchState.TERMINATING

    def _check_resize(self) -> None:
        if self._size_probe is None:
            return
        size = self._size_probe()
        if size is None:
            return
        if (size.rows, size.cols) != (self.viewport.screen_rows, self.viewport.screen_cols):
            logger.info("Window resized to %dx%d", size.rows, size.cols)
            self.viewport.resize(size.rows, size.cols)


def run_editor(document: TextDocument, config: EditorConfig, in_fd: int, out_fd: int) -> int:
    """
    Run an interactive session on the given terminal descriptors.

    Raw mode is released by the context manager on every path out of
    this function, including exceptions and SIGTERM/SIGHUP.
    """
    def write(data: bytes) -> int:
        return os.write(out_fd, data)

    with RawModeController(in_fd, config.read_timeout):
        size = query_window_size(in_fd, out_fd)
        dispatcher = InputDispatcher(
            document,
            ViewportModel(size.rows, size.cols),
            KeyDecoder.from_fd(in_fd),
            FrameRenderer(write, config.welcome),
            write,
            size_probe=lambda: probe_window_size(out_fd),
        )
        return dispatcher.run()
