"""Command-line entry point: browse a directory, then edit the chosen file."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from edit_engine.adapters.textual.app import BrowserApp, EditorApp
from edit_engine.runtime import EditorSettings, telemetry
from edit_engine.sessions import BrowserSession, EditorSession


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="edit-engine",
        description="Edit a file, or browse a directory and edit the file you pick.",
    )
    parser.add_argument("path", type=Path, help="File to edit or directory to browse")
    parser.add_argument(
        "--no-highlight",
        dest="highlight",
        action="store_false",
        default=None,
        help="Disable syntax highlighting",
    )
    parser.add_argument("--theme", default=None, help="Pygments style name")
    parser.add_argument(
        "--hide-hidden",
        dest="show_hidden",
        action="store_false",
        default=None,
        help="Do not list dot-files in the browser",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write engine logs to this file (default: EDIT_ENGINE_LOG_FILE)",
    )
    return parser.parse_args(argv)


def run(path: Path, settings: EditorSettings) -> Optional[Path]:
    """Run the browser (for directories) and then the editor.

    Returns the edited file, or ``None`` when the browser was quit.
    """

    target: Optional[Path] = path
    if path.is_dir():
        browser = BrowserSession(path, show_hidden=settings.show_hidden)
        target = BrowserApp(browser, settings=settings).run()
        if target is None:
            telemetry.record_event("cli.browser_quit", data={"start": path})
            return None

    session = EditorSession(target)
    telemetry.record_event("cli.edit", data={"path": target, "new": not session.loaded})
    EditorApp(session, settings=settings).run()
    return target


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_file:
        telemetry.configure(log_file=args.log_file)
    settings = EditorSettings.from_env().merged(
        highlight=args.highlight,
        theme=args.theme,
        show_hidden=args.show_hidden,
    )
    run(args.path, settings)


if __name__ == "__main__":  # pragma: no cover - manual entry
    main()
