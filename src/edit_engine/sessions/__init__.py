"""Browser and editor state machines driven by logical input events."""

from .base_session import EventKind, InputEvent, Session, SessionBus, SessionResult
from .browser_session import BrowserSession, BrowserState
from .editor_session import CONFIRM_PROMPT, EditorSession, EditorState

__all__ = [
    "EventKind",
    "InputEvent",
    "Session",
    "SessionBus",
    "SessionResult",
    "BrowserSession",
    "BrowserState",
    "EditorSession",
    "EditorState",
    "CONFIRM_PROMPT",
]
