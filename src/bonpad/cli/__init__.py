"""Command-line interface and the interactive input loop."""
