"""Edit loop: route input to the buffer and guard unsaved changes on quit."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from edit_engine.buffer import Direction, PersistError, TextBuffer
from edit_engine.runtime import telemetry
from edit_engine.viewport import EditorFrame, ViewportController

from .base_session import EventKind, InputEvent, Session, SessionBus, SessionResult

CONFIRM_PROMPT = "Save changes? (y/n)"

_ARROWS = {
    EventKind.ARROW_UP: Direction.UP,
    EventKind.ARROW_DOWN: Direction.DOWN,
    EventKind.ARROW_LEFT: Direction.LEFT,
    EventKind.ARROW_RIGHT: Direction.RIGHT,
}


class EditorState(str, Enum):
    EDITING = "editing"
    CONFIRMING_SAVE = "confirming_save"
    CLOSED = "closed"


class EditorSession(Session):
    name = "editor"
    terminal_states = frozenset({EditorState.CLOSED.value})

    def __init__(
        self,
        path: Union[str, "os.PathLike[str]"],
        *,
        buffer: Optional[TextBuffer] = None,
        viewport: Optional[ViewportController] = None,
        bus: Optional[SessionBus] = None,
    ) -> None:
        super().__init__(bus=bus)
        self.path = Path(path)
        if buffer is None:
            buffer = TextBuffer(name=str(self.path))
            self.loaded = buffer.load(self.path)
        else:
            self.loaded = True
        self.buffer = buffer
        self.viewport = viewport or ViewportController()
        self.state = EditorState.EDITING
        self.message: Optional[str] = None if self.loaded else f"new file: {self.path}"

    @property
    def state_name(self) -> str:
        return self.state.value

    @property
    def keymap_mode(self) -> str:
        if self.state is EditorState.CONFIRMING_SAVE:
            return "confirm"
        return "edit"

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".")

    def _dispatch(self, event: InputEvent) -> SessionResult:
        if self.state is EditorState.CONFIRMING_SAVE:
            return self._confirm(event)
        return self._edit(event)

    def _edit(self, event: InputEvent) -> SessionResult:
        kind = event.kind
        buffer = self.buffer
        if kind is EventKind.CHAR:
            assert event.char is not None
            buffer.insert_char(event.char)
            return self._edited("insert")
        if kind is EventKind.ENTER:
            buffer.insert_newline()
            return self._edited("newline")
        if kind is EventKind.BACKSPACE:
            buffer.delete_backward()
            return self._edited("delete")
        if kind in _ARROWS:
            buffer.move_cursor(_ARROWS[kind])
            return SessionResult(consumed=True, status="move")
        if kind is EventKind.SAVE:
            return self._save()
        if kind is EventKind.SAVE_AND_QUIT:
            result = self._save()
            if result.status == "saved":
                self._close()
            return result
        if kind is EventKind.QUIT:
            return self._request_quit()
        return SessionResult(consumed=False, status="miss")

    def _edited(self, status: str) -> SessionResult:
        self.message = None
        return SessionResult(consumed=True, status=status)

    def _request_quit(self) -> SessionResult:
        if not self.buffer.dirty:
            self._close()
            return SessionResult(consumed=True, status="closed")
        self.state = EditorState.CONFIRMING_SAVE
        self.message = CONFIRM_PROMPT
        return SessionResult(consumed=True, status="confirm", message=CONFIRM_PROMPT)

    def _confirm(self, event: InputEvent) -> SessionResult:
        if event.kind is EventKind.CONFIRM_YES:
            result = self._save()
            if result.status == "saved":
                self._close()
            else:
                self.state = EditorState.EDITING
            return result
        if event.kind is EventKind.CONFIRM_NO:
            telemetry.record_event(
                "editor.discard", level="warning", data={"path": self.path}
            )
            self._close()
            return SessionResult(consumed=True, status="discarded")
        return SessionResult(consumed=False, status="awaiting_confirm")

    def _save(self) -> SessionResult:
        try:
            self.buffer.persist(self.path)
        except PersistError as exc:
            self.message = f"save failed: {exc.reason}"
            self.bus.emit("editor.save_failed", {"path": self.path, "reason": exc.reason})
            return SessionResult(consumed=True, status="save_failed", message=self.message)
        self.message = f"saved {self.path.name}"
        self.bus.emit("editor.save", {"path": self.path, "lines": self.buffer.line_count})
        return SessionResult(consumed=True, status="saved", message=self.message)

    def _close(self) -> None:
        self.state = EditorState.CLOSED
        self.bus.emit("editor.closed", {"path": self.path, "dirty": self.buffer.dirty})

    def frame(self, width: int, height: int) -> EditorFrame:
        # The save prompt owns the whole status line; other messages trail
        # the cursor position.
        confirming = self.state is EditorState.CONFIRMING_SAVE
        return self.viewport.frame(
            self.buffer,
            width,
            height,
            status=CONFIRM_PROMPT if confirming else None,
            message=None if confirming else self.message,
            extension=self.extension,
            state=self.state_name,
        )


__all__ = ["EditorSession", "EditorState", "CONFIRM_PROMPT"]
