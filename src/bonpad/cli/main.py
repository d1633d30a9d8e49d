"""Main CLI entry point."""

from bonpad.cli.app import create_app


def main() -> None:
    """Console-script entry point."""
    app = create_app()
    app()


if __name__ == "__main__":
    main()
