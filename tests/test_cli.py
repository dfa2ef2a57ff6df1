from __future__ import annotations

from pathlib import Path
from typing import Any, List

import pytest

from edit_engine import cli
from edit_engine.runtime import EditorSettings


class FakeApp:
    """Stands in for a Textual app; ``run`` returns a canned value."""

    result: Any = None
    launched: List["FakeApp"] = []

    def __init__(self, session, *, settings: EditorSettings) -> None:
        self.session = session
        self.settings = settings

    def run(self) -> Any:
        type(self).launched.append(self)
        return type(self).result


@pytest.fixture()
def fake_apps(monkeypatch):
    class FakeBrowser(FakeApp):
        launched = []

    class FakeEditor(FakeApp):
        launched = []

    monkeypatch.setattr(cli, "BrowserApp", FakeBrowser)
    monkeypatch.setattr(cli, "EditorApp", FakeEditor)
    return FakeBrowser, FakeEditor


def test_missing_path_argument_exits_with_usage() -> None:
    with pytest.raises(SystemExit) as info:
        cli.main([])

    assert info.value.code == 2


def test_file_argument_opens_editor_directly(tmp_path: Path, fake_apps) -> None:
    browser, editor = fake_apps
    target = tmp_path / "todo.txt"
    target.write_text("buy milk\n")

    cli.main([str(target), "--no-highlight"])

    assert browser.launched == []
    (launched,) = editor.launched
    assert launched.session.path == target
    assert launched.session.buffer.lines == ["buy milk"]
    assert launched.settings.highlight is False


def test_directory_argument_browses_then_edits(tmp_path: Path, fake_apps) -> None:
    browser, editor = fake_apps
    chosen = tmp_path / "pick.py"
    chosen.write_text("x = 1\n")
    browser.result = chosen

    result = cli.run(tmp_path, EditorSettings(show_hidden=False))

    assert result == chosen
    assert browser.launched[0].session.model.show_hidden is False
    assert editor.launched[0].session.path == chosen


def test_browser_quit_skips_editor(tmp_path: Path, fake_apps) -> None:
    browser, editor = fake_apps
    browser.result = None

    assert cli.run(tmp_path, EditorSettings()) is None
    assert editor.launched == []


def test_missing_file_opens_blank_buffer(tmp_path: Path, fake_apps) -> None:
    _, editor = fake_apps

    cli.main([str(tmp_path / "fresh.md"), "--theme", "monokai"])

    (launched,) = editor.launched
    assert launched.session.loaded is False
    assert launched.session.buffer.lines == [""]
    assert launched.settings.theme == "monokai"


def test_parse_args_defaults_leave_settings_untouched() -> None:
    args = cli._parse_args(["somewhere"])

    assert args.path == Path("somewhere")
    assert args.highlight is None
    assert args.show_hidden is None
    assert args.theme is None
    assert args.log_file is None


def test_parse_args_flags() -> None:
    args = cli._parse_args(
        ["dir", "--hide-hidden", "--no-highlight", "--log-file", "engine.log"]
    )

    assert args.show_hidden is False
    assert args.highlight is False
    assert args.log_file == "engine.log"
