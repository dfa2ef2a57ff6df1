"""Dataclasses describing key strokes and their bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from edit_engine.sessions import EventKind

_MODIFIER_ORDER = ("ctrl", "alt", "shift")


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = {m.strip().lower() for m in modifiers if m.strip()}
    known = tuple(m for m in _MODIFIER_ORDER if m in values)
    return known + tuple(sorted(values.difference(_MODIFIER_ORDER)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press, e.g. ``ctrl+s`` or ``up``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers + (self.key,))
        return self.key

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Build a stroke from a ``ctrl+s`` style token.

        A lone ``+`` is the plus key, not a separator.
        """

        if token == "+" or "+" not in token:
            return cls(token)
        *modifiers, key = token.split("+")
        return cls(key or "+", tuple(modifiers))


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key stroke with a logical event inside one keymap mode."""

    id: str
    mode: str
    stroke: KeyStroke
    event: EventKind
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if self.event is EventKind.CHAR:
            raise ValueError("CHAR events come from text input, not bindings")

    @property
    def token(self) -> str:
        return self.stroke.token


__all__ = ["KeyStroke", "Binding"]
