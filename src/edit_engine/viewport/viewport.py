"""Scroll offsets that keep the cursor inside the visible window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from edit_engine.buffer import TextBuffer

STATUS_HINT = "Ctrl+S save | Ctrl+W save+quit | Ctrl+Q quit"


@dataclass(frozen=True, slots=True)
class ViewportOffsets:
    """First visible row and column."""

    row: int = 0
    col: int = 0


@dataclass(frozen=True, slots=True)
class EditorFrame:
    """Everything a renderer needs to draw one editor screen."""

    lines: Tuple[str, ...]
    first_row: int
    first_col: int
    width: int
    cursor: Tuple[int, int]  # on-screen (row, column)
    status: str
    extension: str = ""
    state: str = "editing"


def _scroll_axis(position: int, offset: int, extent: int) -> int:
    if position < offset:
        return position
    if position >= offset + extent:
        return position - extent + 1
    return offset


def recompute(
    cursor_row: int,
    cursor_col: int,
    width: int,
    height: int,
    prev: ViewportOffsets = ViewportOffsets(),
) -> ViewportOffsets:
    """Return offsets that put ``(cursor_row, cursor_col)`` on screen.

    Offsets only move when the cursor has left the window, and then by the
    smallest amount that brings it back.
    """

    width = max(width, 1)
    height = max(height, 1)
    return ViewportOffsets(
        row=_scroll_axis(cursor_row, prev.row, height),
        col=_scroll_axis(cursor_col, prev.col, width),
    )


class ViewportController:
    """Holds the offsets between redraws and slices the buffer for display."""

    def __init__(self, offsets: Optional[ViewportOffsets] = None) -> None:
        self.offsets = offsets or ViewportOffsets()

    def follow(self, buffer: TextBuffer, width: int, height: int) -> ViewportOffsets:
        self.offsets = recompute(
            buffer.cursor_row, buffer.cursor_col, width, height, self.offsets
        )
        return self.offsets

    def frame(
        self,
        buffer: TextBuffer,
        width: int,
        height: int,
        *,
        status: Optional[str] = None,
        message: Optional[str] = None,
        extension: str = "",
        state: str = "editing",
    ) -> EditorFrame:
        offsets = self.follow(buffer, width, height)
        width = max(width, 1)
        height = max(height, 1)
        visible = buffer.lines[offsets.row : offsets.row + height]
        lines = tuple(line[offsets.col : offsets.col + width] for line in visible)
        return EditorFrame(
            lines=lines,
            first_row=offsets.row,
            first_col=offsets.col,
            width=width,
            cursor=(
                buffer.cursor_row - offsets.row,
                buffer.cursor_col - offsets.col,
            ),
            status=status if status is not None else status_line(buffer, message),
            extension=extension,
            state=state,
        )


def status_line(buffer: TextBuffer, message: Optional[str] = None) -> str:
    """Key hints and cursor position, with ``message`` appended when set."""

    marker = " [+]" if buffer.dirty else ""
    line = (
        f"{STATUS_HINT} | Line {buffer.cursor_row + 1}/{buffer.line_count}"
        f" Col {buffer.cursor_col + 1}{marker}"
    )
    return f"{line} | {message}" if message else line


__all__ = [
    "ViewportOffsets",
    "ViewportController",
    "EditorFrame",
    "recompute",
    "status_line",
]
