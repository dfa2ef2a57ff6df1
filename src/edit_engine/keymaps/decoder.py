"""Turn terminal key tokens into logical input events."""

from __future__ import annotations

from typing import Optional

from edit_engine.sessions import InputEvent

from .registry import KeymapRegistry

TEXT_MODES = frozenset({"edit"})
# Non-printable characters that still insert as text.
TEXT_CONTROLS = frozenset({"\t"})


def _is_text(text: Optional[str]) -> bool:
    if not text or len(text) != 1:
        return False
    return text.isprintable() or text in TEXT_CONTROLS


class KeyDecoder:
    """Looks a token up in the registry, falling back to literal text."""

    def __init__(
        self, registry: KeymapRegistry, *, text_modes: frozenset[str] = TEXT_MODES
    ) -> None:
        self.registry = registry
        self.text_modes = text_modes

    def decode(
        self, mode: str, token: str, text: Optional[str] = None
    ) -> Optional[InputEvent]:
        binding = self.registry.resolve(mode, token)
        if binding is not None:
            return InputEvent(binding.event)
        if mode in self.text_modes and _is_text(text):
            return InputEvent.of(text)
        return None


__all__ = ["KeyDecoder", "TEXT_MODES", "TEXT_CONTROLS"]
