"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Sequence

from .state import Cursor


class BufferValidationError(RuntimeError):
    """Raised when callers hand the buffer out-of-bounds or malformed input."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_cursor(lines: Sequence[str], cursor: Cursor) -> Cursor:
    row, col = cursor
    if row < 0 or row >= len(lines):
        raise BufferValidationError("Row out of range", cursor=cursor)
    if col < 0 or col > len(lines[row]):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor


__all__ = ["BufferValidationError", "ensure_cursor"]
