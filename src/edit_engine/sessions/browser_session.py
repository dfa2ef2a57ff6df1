"""Browse loop: walk directories until a file is chosen or the user quits."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from edit_engine.browser import BrowserFrame, DirectoryModel

from .base_session import EventKind, InputEvent, Session, SessionBus, SessionResult


class BrowserState(str, Enum):
    BROWSING = "browsing"
    SELECTED = "selected"
    QUIT = "quit"


class BrowserSession(Session):
    name = "browser"
    terminal_states = frozenset({BrowserState.SELECTED.value, BrowserState.QUIT.value})

    def __init__(
        self,
        start: Union[str, "os.PathLike[str]", None] = None,
        *,
        model: Optional[DirectoryModel] = None,
        show_hidden: bool = True,
        bus: Optional[SessionBus] = None,
    ) -> None:
        super().__init__(bus=bus)
        self.model = model or DirectoryModel(start, show_hidden=show_hidden)
        self.state = BrowserState.BROWSING
        self.selected_path: Optional[Path] = None

    @property
    def state_name(self) -> str:
        return self.state.value

    @property
    def keymap_mode(self) -> str:
        return "browse"

    def _dispatch(self, event: InputEvent) -> SessionResult:
        kind = event.kind
        if kind is EventKind.ARROW_UP:
            self.model.move_selection(-1)
            return SessionResult(consumed=True, status="select")
        if kind is EventKind.ARROW_DOWN:
            self.model.move_selection(1)
            return SessionResult(consumed=True, status="select")
        if kind is EventKind.ACTIVATE:
            return self._activate()
        if kind is EventKind.PARENT_DIR:
            self.model.go_to_parent()
            self.bus.emit("browser.navigate", self.model.current_dir)
            return SessionResult(
                consumed=True, status="navigate", message=str(self.model.current_dir)
            )
        if kind is EventKind.QUIT:
            self.state = BrowserState.QUIT
            self.bus.emit("browser.quit", None)
            return SessionResult(consumed=True, status="quit")
        return SessionResult(consumed=False, status="miss")

    def _activate(self) -> SessionResult:
        chosen = self.model.activate()
        if chosen is None:
            self.bus.emit("browser.navigate", self.model.current_dir)
            return SessionResult(
                consumed=True, status="navigate", message=str(self.model.current_dir)
            )
        self.selected_path = chosen
        self.state = BrowserState.SELECTED
        self.bus.emit("browser.selected", chosen)
        return SessionResult(consumed=True, status="selected", message=str(chosen))

    def frame(self, width: int, height: int) -> BrowserFrame:
        del width
        return self.model.frame(height)


__all__ = ["BrowserSession", "BrowserState"]
