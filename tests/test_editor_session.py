from __future__ import annotations

from pathlib import Path

import pytest

from edit_engine.buffer import TextBuffer
from edit_engine.sessions import (
    CONFIRM_PROMPT,
    EditorSession,
    EditorState,
    EventKind,
    InputEvent,
)


def make_session(tmp_path: Path, content: str = "hello\nworld\n") -> EditorSession:
    target = tmp_path / "doc.txt"
    target.write_text(content, encoding="utf-8")
    return EditorSession(target)


def press(session: EditorSession, kind: EventKind):
    return session.handle(InputEvent(kind))


def type_text(session: EditorSession, text: str) -> None:
    for char in text:
        session.handle(InputEvent.of(char))


def test_loads_file_on_start(tmp_path: Path) -> None:
    session = make_session(tmp_path)

    assert session.buffer.lines == ["hello", "world"]
    assert session.state is EditorState.EDITING
    assert session.keymap_mode == "edit"
    assert session.loaded is True


def test_missing_file_starts_blank(tmp_path: Path) -> None:
    session = EditorSession(tmp_path / "new.py")

    assert session.buffer.lines == [""]
    assert session.loaded is False
    assert session.extension == "py"
    assert "new file" in session.frame(40, 5).status


def test_editing_events_route_to_buffer(tmp_path: Path) -> None:
    session = make_session(tmp_path)

    press(session, EventKind.ARROW_DOWN)
    type_text(session, ">> ")
    press(session, EventKind.ENTER)
    press(session, EventKind.BACKSPACE)
    press(session, EventKind.ARROW_RIGHT)

    assert session.buffer.lines == ["hello", ">> world"]
    assert session.buffer.cursor == (1, 4)
    assert session.buffer.dirty is True


def test_quit_when_clean_closes_directly(tmp_path: Path) -> None:
    session = make_session(tmp_path)

    result = press(session, EventKind.QUIT)

    assert result.transition == EditorState.CLOSED.value
    assert session.finished is True


def test_quit_when_dirty_asks_for_confirmation(tmp_path: Path) -> None:
    session = make_session(tmp_path)
    type_text(session, "x")

    result = press(session, EventKind.QUIT)

    assert session.state is EditorState.CONFIRMING_SAVE
    assert session.keymap_mode == "confirm"
    assert result.message == CONFIRM_PROMPT
    assert session.frame(40, 5).status == CONFIRM_PROMPT


def test_confirm_no_discards_without_writing(tmp_path: Path) -> None:
    session = make_session(tmp_path)
    type_text(session, "changed")
    press(session, EventKind.QUIT)

    result = press(session, EventKind.CONFIRM_NO)

    assert result.status == "discarded"
    assert session.state is EditorState.CLOSED
    assert session.path.read_text(encoding="utf-8") == "hello\nworld\n"


def test_confirm_yes_persists_then_closes(tmp_path: Path) -> None:
    session = make_session(tmp_path)
    type_text(session, "¡")
    press(session, EventKind.QUIT)

    result = press(session, EventKind.CONFIRM_YES)

    assert result.status == "saved"
    assert session.state is EditorState.CLOSED
    assert session.path.read_text(encoding="utf-8") == "¡hello\nworld\n"


def test_confirming_ignores_editing_input(tmp_path: Path) -> None:
    session = make_session(tmp_path)
    type_text(session, "x")
    press(session, EventKind.QUIT)

    result = session.handle(InputEvent.of("q"))

    assert result.consumed is False
    assert session.state is EditorState.CONFIRMING_SAVE
    assert session.buffer.lines[0] == "xhello"


def test_save_keeps_editing(tmp_path: Path) -> None:
    session = make_session(tmp_path)
    saves: list[object] = []
    session.bus.subscribe("editor.save", saves.append)
    type_text(session, "#")

    result = press(session, EventKind.SAVE)

    assert result.status == "saved"
    assert result.transition is None
    assert session.state is EditorState.EDITING
    assert session.buffer.dirty is False
    assert session.path.read_text(encoding="utf-8") == "#hello\nworld\n"
    assert saves and saves[0]["lines"] == 2


def test_save_and_quit_persists_even_when_clean(tmp_path: Path) -> None:
    session = make_session(tmp_path, content="one\ntwo")

    result = press(session, EventKind.SAVE_AND_QUIT)

    assert result.status == "saved"
    assert session.state is EditorState.CLOSED
    assert session.path.read_bytes() == b"one\ntwo\n"


def test_save_failure_keeps_session_open(tmp_path: Path) -> None:
    target = tmp_path / "missing" / "doc.txt"
    session = EditorSession(target, buffer=TextBuffer(["draft"]))
    failures: list[object] = []
    session.bus.subscribe("editor.save_failed", failures.append)
    type_text(session, "!")

    result = press(session, EventKind.SAVE_AND_QUIT)

    assert result.status == "save_failed"
    assert session.state is EditorState.EDITING
    assert session.buffer.dirty is True
    assert failures
    assert "save failed" in session.frame(40, 5).status


def test_confirm_yes_failure_returns_to_editing(tmp_path: Path) -> None:
    target = tmp_path / "missing" / "doc.txt"
    session = EditorSession(target, buffer=TextBuffer(["draft"]))
    type_text(session, "!")
    press(session, EventKind.QUIT)

    result = press(session, EventKind.CONFIRM_YES)

    assert result.status == "save_failed"
    assert result.transition == EditorState.EDITING.value
    assert session.buffer.dirty is True


def test_events_after_close_are_ignored(tmp_path: Path) -> None:
    session = make_session(tmp_path)
    press(session, EventKind.QUIT)

    result = session.handle(InputEvent.of("z"))

    assert result.consumed is False
    assert session.buffer.lines[0] == "hello"


def test_frame_keeps_cursor_visible(tmp_path: Path) -> None:
    session = make_session(tmp_path, content="\n".join(str(i) for i in range(50)))
    for _ in range(30):
        press(session, EventKind.ARROW_DOWN)

    frame = session.frame(10, 8)

    assert frame.first_row == 23
    assert frame.cursor == (7, 0)
    assert frame.lines[-1] == "30"
    assert frame.extension == "txt"


@pytest.mark.parametrize("char", ["", "ab"])
def test_char_event_requires_one_character(char: str) -> None:
    with pytest.raises(ValueError):
        InputEvent.of(char)


def test_non_char_event_rejects_payload() -> None:
    with pytest.raises(ValueError):
        InputEvent(EventKind.ENTER, "x")


def test_messages_keep_cursor_position_in_status(tmp_path: Path) -> None:
    session = make_session(tmp_path)
    press(session, EventKind.SAVE)

    press(session, EventKind.ARROW_DOWN)
    status = session.frame(40, 5).status

    assert "Line 2/2 Col 1" in status
    assert status.endswith("| saved doc.txt")


def test_new_file_message_keeps_cursor_position(tmp_path: Path) -> None:
    session = EditorSession(tmp_path / "fresh.txt")

    status = session.frame(40, 5).status

    assert "Line 1/1 Col 1" in status
    assert "new file" in status
