"""Directory listing, selection, and traversal for the file browser."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from edit_engine.runtime import telemetry
from edit_engine.viewport import ViewportOffsets, recompute

PARENT_NAME = ".."


@dataclass(frozen=True, slots=True)
class DirEntry:
    """One child of the listed directory."""

    name: str
    path: Path
    is_dir: bool

    @property
    def is_parent(self) -> bool:
        return self.name == PARENT_NAME


@dataclass(frozen=True, slots=True)
class BrowserFrame:
    """Visible slice of the listing for a renderer."""

    directory: Path
    entries: Tuple[DirEntry, ...]
    selected: Optional[int]  # index into ``entries``, None when empty
    status: str


def canonicalize(path: Union[str, "os.PathLike[str]"]) -> Path:
    candidate = Path(path).expanduser()
    try:
        return candidate.resolve(strict=True)
    except (OSError, RuntimeError):
        # Broken symlinks and loops keep the spelling the caller gave us.
        return candidate.absolute()


def _scan(directory: Path, show_hidden: bool) -> List[DirEntry]:
    entries: List[DirEntry] = []
    with os.scandir(directory) as iterator:
        for item in iterator:
            if not show_hidden and item.name.startswith("."):
                continue
            try:
                is_dir = item.is_dir()
            except OSError:
                is_dir = False
            entries.append(DirEntry(item.name, directory / item.name, is_dir))
    entries.sort(key=lambda entry: (not entry.is_dir, entry.name))
    return entries


class DirectoryModel:
    """Listing of ``current_dir`` with a clamped selection.

    Every directory change rebuilds ``entries``, ``selected`` and
    ``scroll_offset`` from the filesystem.
    """

    def __init__(
        self,
        start: Union[str, "os.PathLike[str]", None] = None,
        *,
        show_hidden: bool = True,
    ) -> None:
        self.show_hidden = show_hidden
        self.current_dir = Path()
        self.entries: List[DirEntry] = []
        self.selected = 0
        self.scroll_offset = 0
        self.last_error: Optional[str] = None
        self.list_dir(start if start is not None else Path.cwd())

    def list_dir(self, path: Union[str, "os.PathLike[str]"]) -> None:
        directory = canonicalize(path)
        with telemetry.span(
            "browser::list",
            component="browser",
            metadata={"directory": directory},
        ) as handle:
            entries: List[DirEntry] = []
            if directory.parent != directory:
                entries.append(DirEntry(PARENT_NAME, directory.parent, True))
            self.last_error = None
            try:
                entries.extend(_scan(directory, self.show_hidden))
            except OSError as exc:
                self.last_error = exc.strerror or str(exc)
                handle.warn(self.last_error)
            handle.add_metadata("entries", len(entries))

        self.current_dir = directory
        self.entries = entries
        self.selected = 0
        self.scroll_offset = 0

    @property
    def has_parent(self) -> bool:
        return self.current_dir.parent != self.current_dir

    @property
    def selected_entry(self) -> Optional[DirEntry]:
        if not self.entries:
            return None
        return self.entries[self.selected]

    def move_selection(self, delta: int) -> None:
        if not self.entries:
            return
        self.selected = max(0, min(self.selected + delta, len(self.entries) - 1))

    def activate(self) -> Optional[Path]:
        """Enter the selected directory, or return the selected file's path."""

        entry = self.selected_entry
        if entry is None:
            return None
        if entry.is_dir:
            self.list_dir(entry.path)
            return None
        return entry.path

    def go_to_parent(self) -> None:
        if self.has_parent:
            self.list_dir(self.current_dir.parent)

    def visible_entries(self, height: int) -> List[DirEntry]:
        offsets = recompute(
            self.selected, 0, 1, height, ViewportOffsets(row=self.scroll_offset)
        )
        self.scroll_offset = offsets.row
        return self.entries[self.scroll_offset : self.scroll_offset + max(height, 1)]

    def frame(self, height: int) -> BrowserFrame:
        visible = tuple(self.visible_entries(height))
        selected = self.selected - self.scroll_offset if visible else None
        if self.last_error:
            status = f"cannot read {self.current_dir}: {self.last_error}"
        else:
            status = (
                "Enter open | Ctrl+D parent | Ctrl+Q quit"
                f" | {len(self.entries)} entries"
            )
        return BrowserFrame(
            directory=self.current_dir,
            entries=visible,
            selected=selected,
            status=status,
        )


__all__ = ["DirEntry", "DirectoryModel", "BrowserFrame", "canonicalize", "PARENT_NAME"]
