from __future__ import annotations

from edit_engine.runtime import EditorSettings


def test_defaults() -> None:
    settings = EditorSettings()

    assert settings.highlight is True
    assert settings.theme == "dracula"
    assert settings.show_hidden is True
    assert settings.status_height == 1


def test_from_env_reads_prefixed_variables(monkeypatch) -> None:
    monkeypatch.setenv("EDIT_ENGINE_HIGHLIGHT", "off")
    monkeypatch.setenv("EDIT_ENGINE_THEME", "monokai")
    monkeypatch.setenv("EDIT_ENGINE_SHOW_HIDDEN", "0")

    settings = EditorSettings.from_env()

    assert settings.highlight is False
    assert settings.theme == "monokai"
    assert settings.show_hidden is False


def test_from_env_without_variables_uses_defaults(monkeypatch) -> None:
    for name in ("HIGHLIGHT", "THEME", "SHOW_HIDDEN"):
        monkeypatch.delenv(f"EDIT_ENGINE_{name}", raising=False)

    assert EditorSettings.from_env() == EditorSettings()


def test_merged_applies_only_explicit_overrides() -> None:
    base = EditorSettings(theme="monokai")

    merged = base.merged(highlight=False, theme=None)

    assert merged.highlight is False
    assert merged.theme == "monokai"
    assert base.highlight is True
