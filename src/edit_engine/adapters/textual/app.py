"""Textual apps hosting the browser and editor sessions.

Each app owns the terminal (raw mode, alternate screen) for exactly one
session; ``App.run`` restores it on exit, including when an exception
escapes.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple, TypeVar

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from edit_engine.browser import BrowserFrame
from edit_engine.highlight import Highlighter
from edit_engine.keymaps import TEXT_CONTROLS, KeyDecoder
from edit_engine.runtime import EditorSettings, telemetry
from edit_engine.sessions import BrowserSession, EditorSession
from edit_engine.viewport import EditorFrame

from .controller import Frame, HostSession, TextualSessionAdapter, TextualUIHooks

ResultT = TypeVar("ResultT")

BACKGROUND = "#282a36"
FOREGROUND = "#f8f8f2"

# Carriage returns stay in line text; draw them as one visible cell.
_VISIBLE_CONTROLS = str.maketrans({"\r": "\u240d"})


class SessionApp(App[ResultT]):
    """Shared layout, key routing, and resize handling."""

    CSS = f"""
    Screen {{
        layout: vertical;
        background: {BACKGROUND};
        color: {FOREGROUND};
    }}

    #header {{
        height: 1;
        color: cyan;
    }}

    #body {{
        height: 1fr;
    }}

    #status-line {{
        height: 1;
        text-style: reverse;
        color: yellow;
    }}
    """

    ENABLE_COMMAND_PALETTE = False
    header_rows = 0

    def __init__(
        self,
        session: HostSession,
        *,
        settings: Optional[EditorSettings] = None,
        decoder: Optional[KeyDecoder] = None,
    ) -> None:
        super().__init__()
        self.session = session
        self.settings = settings or EditorSettings()
        self.adapter: TextualSessionAdapter | None = None
        self._decoder = decoder
        self._log = telemetry.get_logger("edit_engine.adapters.textual")

    def compose(self) -> ComposeResult:
        if self.header_rows:
            yield Static("", id="header")
        yield Static("", id="body")
        yield Static("", id="status-line")

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            render=self._render_frame,
            finished=self._on_finished,
            log=self._log.debug,
        )
        width, height = self._body_size()
        self.adapter = TextualSessionAdapter(
            self.session, hooks, decoder=self._decoder, width=width, height=height
        )

    def on_resize(self, event: events.Resize) -> None:
        del event
        if self.adapter:
            self.adapter.resize(*self._body_size())

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        key, text = self._normalize_key(event)
        result = self.adapter.handle_textual_key(key, text=text)
        if result is not None and result.consumed:
            event.stop()
            event.prevent_default()

    async def action_quit(self) -> None:
        # Ctrl+Q is a built-in priority binding; route it through the keymap
        # so unsaved changes still get the confirmation prompt.
        if self.adapter:
            self.adapter.handle_textual_key("ctrl+q")

    def _body_size(self) -> Tuple[int, int]:
        width, height = self.size
        return width, height - self.settings.status_height - self.header_rows

    @staticmethod
    def _normalize_key(event: events.Key) -> Tuple[str, Optional[str]]:
        character = event.character
        if character in TEXT_CONTROLS:
            return event.key, character
        if (
            character
            and len(character) == 1
            and character.isprintable()
            and not event.key.startswith("ctrl+")
        ):
            return character, character
        return event.key, None

    def _render_frame(self, frame: Frame) -> None:  # pragma: no cover - override
        raise NotImplementedError

    def _on_finished(self, session: HostSession) -> None:  # pragma: no cover - override
        raise NotImplementedError

    def _set_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(Text(status, no_wrap=True))


class EditorApp(SessionApp[None]):
    """Full-screen editor for one file."""

    def __init__(
        self,
        session: EditorSession,
        *,
        settings: Optional[EditorSettings] = None,
        decoder: Optional[KeyDecoder] = None,
    ) -> None:
        super().__init__(session, settings=settings, decoder=decoder)
        self.editor = session
        self.highlighter = Highlighter(
            session.extension,
            theme=self.settings.theme,
            enabled=self.settings.highlight,
        )

    def _render_frame(self, frame: Frame) -> None:
        assert isinstance(frame, EditorFrame)
        buffer = self.editor.buffer
        spans = self.highlighter.document(buffer.lines, buffer.version)
        width = frame.width
        rendered: List[Text] = []
        for index in range(len(frame.lines)):
            full = Text.assemble(
                *(
                    (text.translate(_VISIBLE_CONTROLS), style)
                    for text, style in spans[frame.first_row + index]
                )
            )
            visible = full[frame.first_col : frame.first_col + width]
            if index == frame.cursor[0]:
                column = frame.cursor[1]
                if column >= len(visible):
                    visible.append(" " * (column - len(visible) + 1))
                visible.stylize("reverse", column, column + 1)
            rendered.append(visible)
        body = Text("\n", no_wrap=True).join(rendered)
        self.query_one("#body", Static).update(body)
        self._set_status(frame.status)

    def _on_finished(self, session: HostSession) -> None:
        del session
        self.exit()


class BrowserApp(SessionApp[Optional[Path]]):
    """Directory browser that exits with the chosen file, or ``None``."""

    header_rows = 1

    def __init__(
        self,
        session: BrowserSession,
        *,
        settings: Optional[EditorSettings] = None,
        decoder: Optional[KeyDecoder] = None,
    ) -> None:
        super().__init__(session, settings=settings, decoder=decoder)
        self.browser = session

    def _render_frame(self, frame: Frame) -> None:
        assert isinstance(frame, BrowserFrame)
        rows: List[Text] = []
        for index, entry in enumerate(frame.entries):
            selected = index == frame.selected
            icon = "📁" if entry.is_dir else "📄"
            style = "bold blue" if entry.is_dir else FOREGROUND
            if selected:
                style += " reverse"
            arrow = ">" if selected else " "
            rows.append(Text(f"{arrow}{icon} {entry.name}", style=style, no_wrap=True))
        body = Text("\n", no_wrap=True).join(rows)
        self.query_one("#header", Static).update(Text(str(frame.directory), no_wrap=True))
        self.query_one("#body", Static).update(body)
        self._set_status(frame.status)

    def _on_finished(self, session: HostSession) -> None:
        assert isinstance(session, BrowserSession)
        self.exit(session.selected_path)


__all__ = ["SessionApp", "EditorApp", "BrowserApp"]
