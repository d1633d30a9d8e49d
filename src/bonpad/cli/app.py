"""Typer CLI application."""

import io
import logging
import os
import sys
from pathlib import Path
from typing import Annotated, Optional, TextIO

import typer
from rich.console import Console
from rich.markup import escape

from bonpad.errors import BonpadError, TerminalIOError, TerminalQueryError

logger = logging.getLogger(__name__)


def _fd(stream: TextIO, name: str) -> int:
    """File descriptor behind a standard stream, or TerminalQueryError."""
    try:
        return stream.fileno()
    except (AttributeError, ValueError, io.UnsupportedOperation):
        raise TerminalQueryError("tcgetattr", f"standard {name} is not a terminal") from None


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    from bonpad import __version__
    from bonpad.config import EditorConfig
    from bonpad.log import configure_logging

    app = typer.Typer(
        name="bonpad",
        help="A small terminal text viewer.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()
    err_console = Console(stderr=True)

    def fail(e: BonpadError) -> typer.Exit:
        # Raw mode has already been released by the time we get here
        logger.error("Fatal error: %s", e, exc_info=e)
        err_console.print(f"[red]bonpad: {escape(str(e))}[/]")
        return typer.Exit(e.exit_code)

    def settings(**overrides: object) -> EditorConfig:
        try:
            config = EditorConfig.from_env().merged(**overrides)
        except ValueError as e:
            err_console.print(f"[red]bonpad: {escape(str(e))}[/]")
            raise typer.Exit(2)
        try:
            configure_logging(config.log_file, config.level)
        except OSError as e:
            err_console.print(f"[red]bonpad: log file {escape(str(config.log_file))}: {escape(e.strerror or str(e))}[/]")
            raise typer.Exit(2)
        return config

    def show_version(value: bool) -> None:
        if value:
            console.print(f"bonpad {__version__}")
            raise typer.Exit()

    @app.callback()
    def main(
        version: Annotated[Optional[bool], typer.Option(
            "--version", "-V", help="Show version and exit",
            callback=show_version, is_eager=True,
        )] = None,
    ) -> None:
        """Terminal text viewer with raw-mode keyboard navigation."""

    @app.command()
    def edit(
        path: Annotated[Optional[Path], typer.Argument(help="File to open")] = None,
        read_timeout: Annotated[Optional[int], typer.Option(
            "--read-timeout", "-t", help="Key read timeout in tenths of a second (1-255)",
        )] = None,
        log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Write a debug log here")] = None,
        log_level: Annotated[Optional[str], typer.Option("--log-level", help="Logging level")] = None,
    ) -> None:
        """Open a file (or an empty screen) in the viewer. Ctrl-Q quits."""
        from bonpad.cli.dispatcher import run_editor
        from bonpad.core.document import TextDocument
        from bonpad.io.reader import load

        config = settings(read_timeout=read_timeout, log_file=log_file, log_level=log_level)

        try:
            document = load(path) if path is not None else TextDocument.empty()
            status = run_editor(document, config, _fd(sys.stdin, "input"), _fd(sys.stdout, "output"))
        except BonpadError as e:
            raise fail(e)

        raise typer.Exit(status)

    @app.command()
    def keys(
        read_timeout: Annotated[Optional[int], typer.Option(
            "--read-timeout", "-t", help="Key read timeout in tenths of a second (1-255)",
        )] = None,
    ) -> None:
        """Print decoded key events until Ctrl-Q (for checking a terminal's sequences)."""
        from bonpad.cli.core.input import KeyDecoder
        from bonpad.cli.core.terminal import RawModeController

        config = settings(read_timeout=read_timeout)

        try:
            in_fd = _fd(sys.stdin, "input")
            out_fd = _fd(sys.stdout, "output")
            with RawModeController(in_fd, config.read_timeout):
                os.write(out_fd, b"Press keys; Ctrl-Q to stop.\r\n")
                decoder = KeyDecoder.from_fd(in_fd)
                while True:
                    event = decoder.decode()
                    if event.is_ctrl('q'):
                        break
                    line = f"{event.describe()}  raw={event.raw!r}\r\n"
                    os.write(out_fd, line.encode())
        except BonpadError as e:
            raise fail(e)
        except OSError as e:
            raise fail(TerminalIOError("write", e.strerror or str(e)))

    @app.command()
    def size() -> None:
        """Show the detected terminal size."""
        from bonpad.cli.core.terminal import RawModeController, query_window_size

        config = settings()

        try:
            in_fd = _fd(sys.stdin, "input")
            out_fd = _fd(sys.stdout, "output")
            # The cursor-report fallback needs raw input
            with RawModeController(in_fd, config.read_timeout):
                found = query_window_size(in_fd, out_fd)
        except BonpadError as e:
            raise fail(e)

        console.print(f"[bold]Rows:[/] {found.rows}")
        console.print(f"[bold]Cols:[/] {found.cols}")

    return app
