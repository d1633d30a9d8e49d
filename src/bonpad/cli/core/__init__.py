"""Core terminal infrastructure - raw mode, input decoding, control sequences."""

from bonpad.cli.core.terminal import (
    RawModeController,
    TerminalSize,
    TerminalState,
    probe_window_size,
    query_window_size,
)
from bonpad.cli.core.input import EventKind, InputEvent, Key, KeyDecoder, ctrl_key

__all__ = [
    "RawModeController",
    "TerminalSize",
    "TerminalState",
    "probe_window_size",
    "query_window_size",
    "EventKind",
    "InputEvent",
    "Key",
    "KeyDecoder",
    "ctrl_key",
]
