"""Viewport scrolling and editor render frames."""

from .viewport import (
    EditorFrame,
    ViewportController,
    ViewportOffsets,
    recompute,
    status_line,
)

__all__ = [
    "EditorFrame",
    "ViewportController",
    "ViewportOffsets",
    "recompute",
    "status_line",
]
