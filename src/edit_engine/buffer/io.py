"""Reading and writing buffer lines on disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Union

PathLike = Union[str, "os.PathLike[str]"]


class PersistError(RuntimeError):
    """Raised when buffer content could not be written to ``path``."""

    def __init__(self, path: PathLike, reason: str) -> None:
        super().__init__(f"could not write {os.fspath(path)}: {reason}")
        self.path = Path(path)
        self.reason = reason


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only; a final terminator does not open another line.

    A ``\\r`` before the terminator stays part of the line, so CRLF files
    are written back byte for byte and every line list survives a save.
    """

    if not text:
        return [""]
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines or [""]


def read_lines(source: PathLike) -> List[str]:
    """Return the file's lines, replacing undecodable bytes.

    ``OSError`` propagates; callers decide on the fallback.
    """

    raw = Path(source).read_bytes()
    return split_lines(raw.decode("utf-8", errors="replace"))


def write_lines(target: PathLike, lines: Iterable[str]) -> None:
    try:
        with open(target, "w", encoding="utf-8", newline="\n") as handle:
            for line in lines:
                handle.write(line)
                handle.write("\n")
    except (OSError, UnicodeEncodeError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise PersistError(target, reason) from exc


__all__ = ["PersistError", "split_lines", "read_lines", "write_lines"]
