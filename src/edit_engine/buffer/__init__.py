"""Text buffer, cursor primitives, and file persistence."""

from .buffer import Mutation, TextBuffer
from .io import PersistError, read_lines, split_lines, write_lines
from .state import Cursor, Direction
from .validation import BufferValidationError, ensure_cursor

__all__ = [
    "TextBuffer",
    "Mutation",
    "Cursor",
    "Direction",
    "PersistError",
    "BufferValidationError",
    "ensure_cursor",
    "read_lines",
    "split_lines",
    "write_lines",
]
