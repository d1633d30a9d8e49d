"""Keyboard input decoding: raw terminal bytes to typed events."""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from bonpad.errors import TerminalIOError

logger = logging.getLogger(__name__)

ESC = 0x1b


class Key(Enum):
    """Named special keys reported through escape sequences."""
    ARROW_UP = auto()
    ARROW_DOWN = auto()
    ARROW_LEFT = auto()
    ARROW_RIGHT = auto()
    DELETE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()


class EventKind(Enum):
    """Which variant of InputEvent this is."""
    CHAR = auto()
    CONTROL = auto()
    ESCAPE = auto()
    SPECIAL = auto()


@dataclass(frozen=True)
class InputEvent:
    """A single decoded keyboard event."""
    kind: EventKind
    byte: Optional[int] = None  # Set for CHAR and CONTROL
    key: Optional[Key] = None  # Set for SPECIAL
    raw: bytes = b""  # Bytes consumed to produce this event

    @classmethod
    def char(cls, byte: int) -> InputEvent:
        return cls(EventKind.CHAR, byte=byte, raw=bytes([byte]))

    @classmethod
    def control(cls, byte: int) -> InputEvent:
        return cls(EventKind.CONTROL, byte=byte, raw=bytes([byte]))

    @classmethod
    def escape(cls, raw: bytes = b"\x1b") -> InputEvent:
        return cls(EventKind.ESCAPE, raw=raw)

    @classmethod
    def special(cls, key: Key, raw: bytes = b"") -> InputEvent:
        return cls(EventKind.SPECIAL, key=key, raw=raw)

    def is_ctrl(self, letter: str) -> bool:
        """Check whether this is the Ctrl+<letter> control character."""
        return self.kind is EventKind.CONTROL and self.byte == ctrl_key(letter)

    def describe(self) -> str:
        """Human-readable form, e.g. ``Char('a')`` or ``SpecialKey(HOME)``."""
        if self.kind is EventKind.SPECIAL and self.key is not None:
            return f"SpecialKey({self.key.name})"
        if self.kind is EventKind.ESCAPE:
            return f"Escape({self.raw!r})"
        if self.kind is EventKind.CONTROL and self.byte is not None:
            return f"ControlChar(^{chr(self.byte + 0x40)})"
        return f"Char({bytes([self.byte or 0])!r})"


def ctrl_key(letter: str) -> int:
    """Byte produced by Ctrl+<letter> (keeps the low five bits)."""
    return ord(letter) & 0x1f


# CSI sequences ending in a letter: ESC [ <letter>
CSI_LETTER_KEYS: dict[int, Key] = {
    ord('A'): Key.ARROW_UP,
    ord('B'): Key.ARROW_DOWN,
    ord('C'): Key.ARROW_RIGHT,
    ord('D'): Key.ARROW_LEFT,
    ord('H'): Key.HOME,
    ord('F'): Key.END,
}

# CSI sequences of the form ESC [ <digit> ~
# 1/7 and 4/8 are both in use for Home/End depending on the emulator.
CSI_TILDE_KEYS: dict[int, Key] = {
    ord('1'): Key.HOME,
    ord('3'): Key.DELETE,
    ord('4'): Key.END,
    ord('5'): Key.PAGE_UP,
    ord('6'): Key.PAGE_DOWN,
    ord('7'): Key.HOME,
    ord('8'): Key.END,
}

# SS3 sequences: ESC O <letter>
SS3_KEYS: dict[int, Key] = {
    ord('H'): Key.HOME,
    ord('F'): Key.END,
}


class KeyDecoder:
    """
    Turns the raw terminal byte stream into InputEvents.

    The ``read`` callable returns one byte, or ``b""`` when nothing arrived
    within the raw-mode read timeout. A timeout in the middle of an escape
    sequence yields a bare ESCAPE event: a real Escape key press and a
    sequence whose tail has not arrived yet look the same at this point.
    """

    def __init__(self, read: Callable[[], bytes]) -> None:
        self._read = read

    @classmethod
    def from_fd(cls, fd: int) -> KeyDecoder:
        """Decoder reading one byte at a time from a raw-mode descriptor."""
        return cls(lambda: os.read(fd, 1))

    def decode(self) -> InputEvent:
        """Block (in timeout-sized steps) until an event is available."""
        while True:
            event = self.poll()
            if event is not None:
                return event

    def poll(self) -> Optional[InputEvent]:
        """
        Attempt to read one event.

        Returns None if no byte arrived within the timeout, so the caller
        can go on to render the next frame.
        """
        first = self._read_byte()
        if first is None:
            return None
        if first == ESC:
            return self._decode_escape()
        if first < 0x20:
            return InputEvent.control(first)
        return InputEvent.char(first)

    def _decode_escape(self) -> InputEvent:
        """Decode the bytes following ESC."""
        second = self._read_byte()
        if second is None:
            return InputEvent.escape()
        third = self._read_byte()
        if third is None:
            return InputEvent.escape(bytes([ESC, second]))

        raw = bytes([ESC, second, third])

        if second == ord('['):
            if ord('0') <= third <= ord('9'):
                fourth = self._read_byte()
                if fourth is None:
                    return InputEvent.escape(raw)
                raw += bytes([fourth])
                if fourth == ord('~') and third in CSI_TILDE_KEYS:
                    return InputEvent.special(CSI_TILDE_KEYS[third], raw)
            elif third in CSI_LETTER_KEYS:
                return InputEvent.special(CSI_LETTER_KEYS[third], raw)
        elif second == ord('O'):
            if third in SS3_KEYS:
                return InputEvent.special(SS3_KEYS[third], raw)

        logger.debug("Unrecognized escape sequence %r", raw)
        return InputEvent.escape(raw)

    def _read_byte(self) -> Optional[int]:
        """Read one byte; None on timeout, TerminalIOError on real failure."""
        try:
            data = self._read()
        except InterruptedError:
            return None
        except BlockingIOError:
            return None
        except OSError as e:
            if e.errno in (errno.EAGAIN, errno.EWOULDBLOCK, errno.EINTR):
                return None
            raise TerminalIOError("read", e.strerror or str(e)) from e

        if not data:
            return None
        return data[0]
