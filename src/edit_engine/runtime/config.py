"""Editor settings resolved from the environment and the command line."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "EDIT_ENGINE_"
DEFAULT_THEME = "dracula"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EditorSettings:
    """Knobs shared by the browser and editor apps."""

    highlight: bool = True
    theme: str = DEFAULT_THEME
    show_hidden: bool = True
    # Rows reserved below the text area for the status line.
    status_height: int = 1

    @classmethod
    def from_env(cls) -> "EditorSettings":
        return cls(
            highlight=_env_flag("HIGHLIGHT", True),
            theme=os.getenv(f"{ENV_PREFIX}THEME") or DEFAULT_THEME,
            show_hidden=_env_flag("SHOW_HIDDEN", True),
        )

    def merged(
        self,
        *,
        highlight: Optional[bool] = None,
        theme: Optional[str] = None,
        show_hidden: Optional[bool] = None,
    ) -> "EditorSettings":
        """Return a copy with every non-``None`` override applied."""

        changes = {
            key: value
            for key, value in (
                ("highlight", highlight),
                ("theme", theme),
                ("show_hidden", show_hidden),
            )
            if value is not None
        }
        return replace(self, **changes)


__all__ = ["EditorSettings", "DEFAULT_THEME"]
