"""Line-based text buffer with a code-point addressed cursor."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, List, Optional

from edit_engine.runtime import telemetry

from .io import PathLike, PersistError, read_lines, split_lines, write_lines
from .state import Cursor, Direction
from .validation import BufferValidationError, ensure_cursor


class TextBuffer:
    """Document lines plus the cursor every edit applies at.

    ``lines`` is never empty and columns count code points, so slicing a
    line at ``cursor_col`` can never split a multi-byte character.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None, *, name: str = "untitled") -> None:
        self.name = name
        self.lines: List[str] = list(lines) if lines is not None else [""]
        if not self.lines:
            self.lines = [""]
        self.cursor_row = 0
        self.cursor_col = 0
        self.dirty = False
        self.version = 0

    @classmethod
    def from_text(cls, text: str, *, name: str = "untitled") -> "TextBuffer":
        return cls(split_lines(text), name=name)

    @classmethod
    def from_file(cls, source: PathLike) -> "TextBuffer":
        buffer = cls(name=str(source))
        buffer.load(source)
        return buffer

    @property
    def cursor(self) -> Cursor:
        return (self.cursor_row, self.cursor_col)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor_row]

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor_row, self.cursor_col = ensure_cursor(self.lines, (row, col))

    # Editing

    def insert_char(self, char: str) -> None:
        if len(char) != 1:
            raise BufferValidationError(
                f"insert_char expects one character, got {char!r}", cursor=self.cursor
            )
        if char in "\r\n":
            raise BufferValidationError(
                "use insert_newline to break lines", cursor=self.cursor
            )
        with Mutation(self, "insert_char"):
            line = self.current_line
            col = self.cursor_col
            self.lines[self.cursor_row] = line[:col] + char + line[col:]
            self.cursor_col += 1

    def delete_backward(self) -> None:
        if self.cursor_col > 0:
            with Mutation(self, "delete_char"):
                line = self.current_line
                col = self.cursor_col
                self.lines[self.cursor_row] = line[: col - 1] + line[col:]
                self.cursor_col -= 1
        elif self.cursor_row > 0:
            with Mutation(self, "join_lines"):
                removed = self.lines.pop(self.cursor_row)
                self.cursor_row -= 1
                self.cursor_col = len(self.lines[self.cursor_row])
                self.lines[self.cursor_row] += removed

    def insert_newline(self) -> None:
        with Mutation(self, "split_line"):
            line = self.current_line
            col = self.cursor_col
            self.lines[self.cursor_row] = line[:col]
            self.lines.insert(self.cursor_row + 1, line[col:])
            self.cursor_row += 1
            self.cursor_col = 0

    def move_cursor(self, direction: Direction) -> None:
        if direction is Direction.UP:
            if self.cursor_row > 0:
                self.cursor_row -= 1
                self._clamp_col()
        elif direction is Direction.DOWN:
            if self.cursor_row + 1 < len(self.lines):
                self.cursor_row += 1
                self._clamp_col()
        elif direction is Direction.LEFT:
            if self.cursor_col > 0:
                self.cursor_col -= 1
            elif self.cursor_row > 0:
                self.cursor_row -= 1
                self.cursor_col = len(self.current_line)
        elif direction is Direction.RIGHT:
            if self.cursor_col < len(self.current_line):
                self.cursor_col += 1
            elif self.cursor_row + 1 < len(self.lines):
                self.cursor_row += 1
                self.cursor_col = 0

    def _clamp_col(self) -> None:
        self.cursor_col = min(self.cursor_col, len(self.current_line))

    # Persistence

    def persist(self, target: PathLike) -> None:
        """Write every line plus a terminator to ``target``.

        Raises :class:`PersistError` on failure; lines and ``dirty`` are left
        as they were so the caller can retry.
        """

        with telemetry.span(
            "buffer::persist",
            component="buffer",
            metadata={"buffer": self.name, "target": target},
        ) as handle:
            try:
                write_lines(target, self.lines)
            except PersistError as exc:
                handle.warn(exc.reason)
                raise
            self.dirty = False
            handle.add_metadata("lines", len(self.lines))

    def load(self, source: PathLike) -> bool:
        """Replace the content with ``source``'s lines.

        Returns ``False`` when the file could not be read and the buffer
        was reset to a single empty line instead.
        """

        with telemetry.span(
            "buffer::load",
            component="buffer",
            metadata={"buffer": self.name, "source": source},
        ) as handle:
            try:
                lines = read_lines(source)
                loaded = True
            except OSError as exc:
                handle.warn(exc.strerror or str(exc))
                lines = [""]
                loaded = False
            self.lines = lines
            self.cursor_row = 0
            self.cursor_col = 0
            self.dirty = False
            self.version += 1
            return loaded


class Mutation(AbstractContextManager["Mutation"]):
    """Wraps one buffer edit in a telemetry span and marks the buffer dirty."""

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Mutation":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name, "cursor": self.buffer.cursor},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.buffer.dirty = True
            self.buffer.version += 1
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["TextBuffer", "Mutation"]
