"""Built-in keymaps for the edit, confirm, and browse modes."""

from __future__ import annotations

from typing import Iterable

from edit_engine.sessions import EventKind

from .models import Binding, KeyStroke
from .registry import KeymapRegistry


def _bind(mode: str, token: str, event: EventKind, description: str) -> Binding:
    return Binding(
        id=f"{mode}.{token}",
        mode=mode,
        stroke=KeyStroke.parse(token),
        event=event,
        description=description,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("edit", "enter", EventKind.ENTER, "Split line"),
    _bind("edit", "backspace", EventKind.BACKSPACE, "Delete backward"),
    _bind("edit", "up", EventKind.ARROW_UP, "Cursor up"),
    _bind("edit", "down", EventKind.ARROW_DOWN, "Cursor down"),
    _bind("edit", "left", EventKind.ARROW_LEFT, "Cursor left"),
    _bind("edit", "right", EventKind.ARROW_RIGHT, "Cursor right"),
    _bind("edit", "ctrl+s", EventKind.SAVE, "Save"),
    _bind("edit", "ctrl+w", EventKind.SAVE_AND_QUIT, "Save and quit"),
    _bind("edit", "ctrl+q", EventKind.QUIT, "Quit"),
    _bind("confirm", "y", EventKind.CONFIRM_YES, "Save before quitting"),
    _bind("confirm", "Y", EventKind.CONFIRM_YES, "Save before quitting"),
    _bind("confirm", "n", EventKind.CONFIRM_NO, "Discard changes"),
    _bind("confirm", "N", EventKind.CONFIRM_NO, "Discard changes"),
    _bind("browse", "up", EventKind.ARROW_UP, "Select previous"),
    _bind("browse", "down", EventKind.ARROW_DOWN, "Select next"),
    _bind("browse", "enter", EventKind.ACTIVATE, "Open entry"),
    _bind("browse", "ctrl+d", EventKind.PARENT_DIR, "Parent directory"),
    _bind("browse", "backspace", EventKind.PARENT_DIR, "Parent directory"),
    _bind("browse", "ctrl+q", EventKind.QUIT, "Quit"),
)


def load_default_keymaps(
    registry: KeymapRegistry, *, bindings: Iterable[Binding] = DEFAULT_BINDINGS
) -> KeymapRegistry:
    for binding in bindings:
        registry.register_binding(binding)
    return registry


__all__ = ["DEFAULT_BINDINGS", "load_default_keymaps"]
