from __future__ import annotations

from pathlib import Path

from edit_engine.sessions import BrowserSession, BrowserState, EventKind, InputEvent


def make_session(root: Path) -> BrowserSession:
    (root / "docs").mkdir()
    (root / "docs" / "guide.md").write_text("# guide\n")
    (root / "notes.txt").write_text("notes\n")
    return BrowserSession(root)


def press(session: BrowserSession, kind: EventKind):
    return session.handle(InputEvent(kind))


def test_initial_state_is_browsing(tmp_path: Path) -> None:
    session = make_session(tmp_path)

    assert session.state is BrowserState.BROWSING
    assert session.keymap_mode == "browse"
    assert session.model.current_dir == tmp_path.resolve()


def test_arrows_move_selection(tmp_path: Path) -> None:
    session = make_session(tmp_path)

    press(session, EventKind.ARROW_DOWN)
    press(session, EventKind.ARROW_DOWN)
    assert session.model.selected == 2

    press(session, EventKind.ARROW_UP)
    assert session.model.selected == 1


def test_activate_directory_stays_browsing(tmp_path: Path) -> None:
    session = make_session(tmp_path)
    navigated: list[object] = []
    session.bus.subscribe("browser.navigate", navigated.append)

    press(session, EventKind.ARROW_DOWN)
    result = press(session, EventKind.ACTIVATE)

    assert result.status == "navigate"
    assert result.transition is None
    assert session.state is BrowserState.BROWSING
    assert session.model.current_dir == (tmp_path / "docs").resolve()
    assert navigated == [(tmp_path / "docs").resolve()]


def test_activate_file_selects_and_finishes(tmp_path: Path) -> None:
    session = make_session(tmp_path)
    press(session, EventKind.ARROW_DOWN)
    press(session, EventKind.ACTIVATE)
    press(session, EventKind.ARROW_DOWN)

    result = press(session, EventKind.ACTIVATE)

    assert result.status == "selected"
    assert result.transition == BrowserState.SELECTED.value
    assert session.selected_path == (tmp_path / "docs" / "guide.md").resolve()
    assert session.finished is True


def test_quit_is_terminal(tmp_path: Path) -> None:
    session = make_session(tmp_path)

    result = press(session, EventKind.QUIT)

    assert result.transition == "quit"
    assert session.selected_path is None
    late = press(session, EventKind.ARROW_DOWN)
    assert late.consumed is False
    assert late.status == "finished"


def test_parent_dir_event(tmp_path: Path) -> None:
    session = make_session(tmp_path)
    session.model.list_dir(tmp_path / "docs")

    press(session, EventKind.PARENT_DIR)

    assert session.model.current_dir == tmp_path.resolve()


def test_editor_only_events_are_not_consumed(tmp_path: Path) -> None:
    session = make_session(tmp_path)

    result = session.handle(InputEvent.of("x"))

    assert result.consumed is False
    assert session.state is BrowserState.BROWSING


def test_transition_events_reach_the_bus(tmp_path: Path) -> None:
    session = make_session(tmp_path)
    transitions: list[object] = []
    session.bus.subscribe("session.transition", transitions.append)

    press(session, EventKind.QUIT)

    assert transitions == [{"session": "browser", "from": "browsing", "to": "quit"}]
