"""Core editor state - documents and viewport."""

from bonpad.core.document import TextDocument
from bonpad.core.viewport import Motion, ViewportModel

__all__ = ["TextDocument", "Motion", "ViewportModel"]
