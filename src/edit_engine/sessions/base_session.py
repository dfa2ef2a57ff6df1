"""Input events, results, and the shared session plumbing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from edit_engine.runtime import telemetry


class EventKind(str, Enum):
    """Closed set of logical inputs the sessions understand."""

    CHAR = "char"
    ENTER = "enter"
    BACKSPACE = "backspace"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    ARROW_LEFT = "arrow_left"
    ARROW_RIGHT = "arrow_right"
    SAVE = "save"
    SAVE_AND_QUIT = "save_and_quit"
    QUIT = "quit"
    CONFIRM_YES = "confirm_yes"
    CONFIRM_NO = "confirm_no"
    PARENT_DIR = "parent_dir"
    ACTIVATE = "activate"


@dataclass(frozen=True, slots=True)
class InputEvent:
    """One decoded key press. ``char`` is set only for ``EventKind.CHAR``."""

    kind: EventKind
    char: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is EventKind.CHAR:
            if self.char is None or len(self.char) != 1:
                raise ValueError("CHAR events carry exactly one character")
        elif self.char is not None:
            raise ValueError(f"{self.kind.value} events carry no character")

    @classmethod
    def of(cls, char: str) -> "InputEvent":
        return cls(EventKind.CHAR, char)


@dataclass(slots=True)
class SessionResult:
    """Result returned from ``Session.handle``."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    transition: Optional[str] = None


class SessionBus:
    """Minimal event bus letting hosts observe session signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Session:
    """Base class for the browser and editor state machines."""

    name: str = "session"
    terminal_states: frozenset[str] = frozenset()

    def __init__(self, *, bus: Optional[SessionBus] = None) -> None:
        self.bus = bus or SessionBus()

    @property
    def state_name(self) -> str:  # pragma: no cover - abstract override
        raise NotImplementedError

    @property
    def keymap_mode(self) -> str:  # pragma: no cover - abstract override
        raise NotImplementedError

    @property
    def finished(self) -> bool:
        return self.state_name in self.terminal_states

    def handle(self, event: InputEvent) -> SessionResult:
        if self.finished:
            return SessionResult(consumed=False, status="finished")
        before = self.state_name
        with telemetry.span(
            name=f"session::{self.name}",
            component=True,
            metadata={"event": event.kind.value, "state": before},
        ):
            result = self._dispatch(event)
        after = self.state_name
        if after != before:
            result.transition = after
            payload = {"session": self.name, "from": before, "to": after}
            telemetry.record_event("session.transition", data=payload)
            self.bus.emit("session.transition", payload)
        return result

    def _dispatch(
        self, event: InputEvent
    ) -> SessionResult:  # pragma: no cover - abstract override
        raise NotImplementedError


__all__ = [
    "EventKind",
    "InputEvent",
    "SessionResult",
    "SessionBus",
    "Session",
]
