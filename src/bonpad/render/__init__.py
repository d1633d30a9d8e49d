"""Screen rendering."""

from bonpad.render.frame import DEFAULT_WELCOME, FrameRenderer, RenderBuffer

__all__ = ["DEFAULT_WELCOME", "FrameRenderer", "RenderBuffer"]
