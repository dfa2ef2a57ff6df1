"""Cursor and movement primitives for text buffers."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column), column in code points


class Direction(str, Enum):
    """Cursor movement directions."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


__all__ = ["Cursor", "Direction"]
