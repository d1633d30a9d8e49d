"""Low-level terminal operations: raw mode and window size."""

from __future__ import annotations

import logging
import os
import signal
import termios
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Callable, Optional

from bonpad.cli.core import ansi_text
from bonpad.errors import (
    TerminalConfigureError,
    TerminalQueryError,
    WindowSizeError,
)

logger = logging.getLogger(__name__)

# Signals that would otherwise kill the process with the terminal still raw.
# ISIG is off in raw mode, so these only arrive from outside (kill, hangup).
_FATAL_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


@dataclass(frozen=True)
class TerminalState:
    """Snapshot of the terminal attributes taken before entering raw mode."""
    attributes: tuple[Any, ...]

    @classmethod
    def capture(cls, fd: int) -> TerminalState:
        try:
            attrs = termios.tcgetattr(fd)
        except termios.error as e:
            raise TerminalQueryError("tcgetattr", _describe(e)) from e
        # The control-character table is a list; freeze a copy of it too
        return cls(tuple(attrs[:6]) + (tuple(attrs[6]),))

    def as_list(self) -> list[Any]:
        """Attribute list in the shape termios.tcsetattr expects."""
        return list(self.attributes[:6]) + [list(self.attributes[6])]

    def raw(self, read_timeout: int) -> list[Any]:
        """Derive the raw-mode attribute list from this snapshot."""
        iflag, oflag, cflag, lflag, ispeed, ospeed, cc = self.as_list()

        iflag &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK
                   | termios.ISTRIP | termios.IXON)
        oflag &= ~termios.OPOST
        cflag |= termios.CS8
        lflag &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)

        # read() returns after read_timeout tenths of a second, even with no byte
        cc[termios.VMIN] = 0
        cc[termios.VTIME] = read_timeout

        return [iflag, oflag, cflag, lflag, ispeed, ospeed, cc]


class RawModeController:
    """
    Puts the controlling terminal into raw mode and restores it.

    Use as a context manager so restoration runs on every exit path:

        with RawModeController(sys.stdin.fileno()):
            ...

    ``exit()`` is idempotent and does nothing if ``enter()`` never
    succeeded.
    """

    def __init__(self, fd: int, read_timeout: int = 1) -> None:
        if not 0 <= read_timeout <= 255:
            raise ValueError(f"read_timeout must be 0-255 deciseconds, got {read_timeout}")
        self.fd = fd
        self.read_timeout = read_timeout
        self._saved: Optional[TerminalState] = None
        self._active = False
        self._old_handlers: dict[int, Any] = {}

    @property
    def active(self) -> bool:
        """Whether raw mode is currently applied."""
        return self._active

    @property
    def saved_state(self) -> Optional[TerminalState]:
        return self._saved

    def enter(self) -> None:
        """Capture the current attributes and switch to raw mode."""
        if self._saved is not None:
            raise TerminalConfigureError("tcsetattr", "raw mode already entered")

        state = TerminalState.capture(self.fd)
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, state.raw(self.read_timeout))
        except termios.error as e:
            raise TerminalConfigureError("tcsetattr", _describe(e)) from e

        self._saved = state
        self._active = True
        self._install_signal_handlers()
        logger.debug("Raw mode entered on fd %d", self.fd)

    def exit(self) -> None:
        """Reapply the captured attributes."""
        if not self._active or self._saved is None:
            return
        self._active = False
        self._restore_signal_handlers()
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved.as_list())
        except termios.error as e:
            raise TerminalConfigureError("tcsetattr", _describe(e)) from e
        logger.debug("Terminal attributes restored on fd %d", self.fd)

    def __enter__(self) -> RawModeController:
        self.enter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc is None:
            self.exit()
            return
        # The error already unwinding names the operation that failed first
        try:
            self.exit()
        except TerminalConfigureError as e:
            logger.error("Could not restore terminal while handling %r: %s", exc, e)

    def _install_signal_handlers(self) -> None:
        for signum in _FATAL_SIGNALS:
            try:
                self._old_handlers[signum] = signal.signal(signum, _exit_on_signal)
            except ValueError:
                # Not the main thread; nothing to install
                break

    def _restore_signal_handlers(self) -> None:
        for signum, handler in self._old_handlers.items():
            signal.signal(signum, handler)
        self._old_handlers.clear()


def _exit_on_signal(signum: int, frame: Any) -> None:
    # Raising unwinds through RawModeController.__exit__
    raise SystemExit(1)


def _describe(e: termios.error) -> str:
    if len(e.args) >= 2:
        return str(e.args[1])
    return str(e)


def query_window_size(
    in_fd: int,
    out_fd: int,
    read: Optional[Callable[[], bytes]] = None,
    write: Optional[Callable[[bytes], int]] = None,
) -> TerminalSize:
    """
    Get the terminal dimensions.

    Asks the system directly first. If that fails or reports a zero size,
    moves the cursor to the far bottom-right corner and asks the terminal
    where it ended up. Requires raw mode for the fallback path.
    """
    try:
        size = os.get_terminal_size(out_fd)
        if size.columns > 0 and size.lines > 0:
            logger.info("Window size %dx%d (direct query)", size.lines, size.columns)
            return TerminalSize(size.lines, size.columns)
    except OSError:
        pass

    if read is None:
        read = lambda: os.read(in_fd, 1)  # noqa: E731
    if write is None:
        write = lambda data: os.write(out_fd, data)  # noqa: E731

    size = _size_from_cursor_report(read, write)
    logger.info("Window size %dx%d (cursor report)", size.rows, size.cols)
    return size


def probe_window_size(out_fd: int) -> Optional[TerminalSize]:
    """Direct size query only; None when unavailable. Used for resize checks."""
    try:
        size = os.get_terminal_size(out_fd)
    except OSError:
        return None
    if size.columns <= 0 or size.lines <= 0:
        return None
    return TerminalSize(size.lines, size.columns)


def _size_from_cursor_report(
    read: Callable[[], bytes],
    write: Callable[[bytes], int],
) -> TerminalSize:
    request = ansi_text.CURSOR_TO_CORNER + ansi_text.REQUEST_CURSOR_POSITION
    try:
        if write(request) != len(request):
            raise WindowSizeError("getWindowSize", "short write of position request")
    except OSError as e:
        raise WindowSizeError("getWindowSize", e.strerror or str(e)) from e

    reply = bytearray()
    while len(reply) < 31:
        try:
            byte = read()
        except OSError as e:
            raise WindowSizeError("getWindowSize", e.strerror or str(e)) from e
        if not byte:
            break
        if byte == b'R':
            break
        reply += byte

    position = parse_cursor_report(bytes(reply))
    if position is None:
        raise WindowSizeError("getWindowSize", f"bad cursor position report {bytes(reply)!r}")
    return position


def parse_cursor_report(data: bytes) -> Optional[TerminalSize]:
    """Parse ``ESC [ rows ; cols R`` into a TerminalSize."""
    position = ansi_text.parse_cursor_report(data)
    if position is None:
        return None
    return TerminalSize(*position)
