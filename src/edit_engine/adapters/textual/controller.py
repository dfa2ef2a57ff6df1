"""Minimal Textual adapter that wires a session into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from edit_engine.browser import BrowserFrame
from edit_engine.keymaps import KeyDecoder, default_decoder
from edit_engine.sessions import BrowserSession, EditorSession, SessionResult
from edit_engine.viewport import EditorFrame

Frame = Union[EditorFrame, BrowserFrame]
HostSession = Union[EditorSession, BrowserSession]


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    render: Callable[[Frame], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    finished: Callable[[HostSession], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualSessionAdapter:
    """Decodes key tokens, feeds the session, and pushes fresh frames."""

    def __init__(
        self,
        session: HostSession,
        hooks: TextualUIHooks,
        *,
        decoder: Optional[KeyDecoder] = None,
        width: int = 80,
        height: int = 24,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.decoder = decoder or default_decoder()
        self.width = width
        self.height = height
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> Optional[SessionResult]:
        """Decode a Textual key token and dispatch it to the session."""

        mode = self.session.keymap_mode
        event = self.decoder.decode(mode, key, text)
        self._log_state("key ->", key=key, text=text, keymap=mode)
        if event is None:
            return None
        result = self.session.handle(event)
        self._log_state(
            "result <-",
            event=event.kind.value,
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            transition=result.transition,
        )
        if result.message:
            self.hooks.update_status(result.message)
        self.refresh()
        if self.session.finished:
            self.hooks.finished(self.session)
        return result

    def resize(self, width: int, height: int) -> None:
        self.width = max(width, 1)
        self.height = max(height, 1)
        self.refresh()

    def refresh(self) -> Frame:
        frame = self.session.frame(self.width, self.height)
        self.hooks.render(frame)
        return frame

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in (
            "session.transition",
            "editor.save",
            "editor.save_failed",
            "editor.closed",
            "browser.navigate",
            "browser.selected",
            "browser.quit",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        data: Dict[str, object] = {
            "session": session.name,
            "state": session.state_name,
        }
        if isinstance(session, EditorSession):
            data["cursor"] = session.buffer.cursor
            data["dirty"] = session.buffer.dirty
            data["buffer_version"] = session.buffer.version
        else:
            data["directory"] = str(session.model.current_dir)
            data["selected"] = session.model.selected
        return data


__all__ = ["TextualSessionAdapter", "TextualUIHooks", "Frame", "HostSession"]
