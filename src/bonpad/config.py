"""Editor configuration, read from the environment and CLI options."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from bonpad.render.frame import DEFAULT_WELCOME

ENV_READ_TIMEOUT = "BONPAD_READ_TIMEOUT"
ENV_LOG_FILE = "BONPAD_LOG_FILE"
ENV_LOG_LEVEL = "BONPAD_LOG_LEVEL"
ENV_WELCOME = "BONPAD_WELCOME"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class EditorConfig:
    """
    Runtime settings.

    Attributes:
        read_timeout: Raw-mode read timeout in tenths of a second (VTIME).
            Keep it short: it is also how long an escape sequence may take
            to arrive before it is reported as a bare Escape.
        welcome: Banner shown when the document is empty.
        log_file: Where to write the log; None disables logging output.
        log_level: Name of the logging level.
    """
    read_timeout: int = 1
    welcome: str = DEFAULT_WELCOME
    log_file: Optional[Path] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not 1 <= self.read_timeout <= 255:
            raise ValueError(f"read_timeout must be between 1 and 255, got {self.read_timeout}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level.upper())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> EditorConfig:
        """Build a config from BONPAD_* environment variables."""
        env = os.environ if environ is None else environ
        config = cls()

        if raw := env.get(ENV_READ_TIMEOUT):
            try:
                timeout = int(raw)
            except ValueError:
                raise ValueError(f"{ENV_READ_TIMEOUT} must be an integer, got {raw!r}") from None
            config = replace(config, read_timeout=timeout)

        if raw := env.get(ENV_LOG_FILE):
            config = replace(config, log_file=Path(raw).expanduser())

        if raw := env.get(ENV_LOG_LEVEL):
            config = replace(config, log_level=raw.upper())

        if raw := env.get(ENV_WELCOME):
            config = replace(config, welcome=raw)

        return config

    def merged(self, **overrides: object) -> EditorConfig:
        """Copy with any non-None overrides applied (command-line values win)."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)
