"""Pytest configuration: fake terminal endpoints and sample documents."""

from __future__ import annotations

import logging
from collections import deque
from typing import Optional

import pytest

from bonpad.core.document import TextDocument
from bonpad.log import configure_logging


class ScriptedInput:
    """
    Byte source standing in for a raw-mode terminal read.

    Each chunk is fed one byte per call. A ``None`` chunk is a read that
    timed out (returns ``b""``). Once the script runs out, every read
    times out.
    """

    def __init__(self, *chunks: Optional[bytes]) -> None:
        self._queue: deque[bytes] = deque()
        for chunk in chunks:
            if chunk is None:
                self._queue.append(b"")
            else:
                self._queue.extend(bytes([b]) for b in chunk)
        self.calls = 0

    def __call__(self) -> bytes:
        self.calls += 1
        if self._queue:
            return self._queue.popleft()
        return b""

    @property
    def exhausted(self) -> bool:
        return not self._queue


class WriteSink:
    """Records each write call; ``short`` makes every write come up short."""

    def __init__(self, short: bool = False) -> None:
        self.writes: list[bytes] = []
        self.short = short

    def __call__(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        if self.short and data:
            return len(data) - 1
        return len(data)

    @property
    def data(self) -> bytes:
        return b"".join(self.writes)


@pytest.fixture
def sink() -> WriteSink:
    return WriteSink()


@pytest.fixture
def empty_document() -> TextDocument:
    return TextDocument.empty()


@pytest.fixture
def short_document() -> TextDocument:
    """Three lines of different lengths, including an empty one."""
    return TextDocument(lines=(b"hello", b"", b"a much longer line of text"))


@pytest.fixture
def long_document() -> TextDocument:
    """Fifty numbered lines."""
    return TextDocument(lines=tuple(b"line %d" % i for i in range(50)))


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep the package logger on a NullHandler between tests."""
    yield
    configure_logging(None, logging.WARNING)
