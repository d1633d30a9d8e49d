"""Error kinds raised by the terminal engine.

None of these are recovered locally. They propagate to the CLI boundary,
which restores the terminal (when raw mode was entered), prints a
diagnostic naming the failing operation and exits with status 1.
"""

from __future__ import annotations


class BonpadError(Exception):
    """Base class for fatal editor errors."""

    exit_code = 1

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(operation, detail)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.operation}: {self.detail}"
        return self.operation


class TerminalQueryError(BonpadError):
    """Reading the terminal attributes failed."""


class TerminalConfigureError(BonpadError):
    """Applying or restoring terminal attributes failed."""


class TerminalIOError(BonpadError):
    """A read from or write to the terminal failed during the run loop."""


class WindowSizeError(BonpadError):
    """Neither the direct size query nor the cursor-report fallback worked."""


class SourceLoadError(BonpadError):
    """The line source could not be opened or read."""
