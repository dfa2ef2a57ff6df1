"""Keymap registry, default bindings, and the key decoder."""

from .models import Binding, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .defaults import DEFAULT_BINDINGS, load_default_keymaps
from .decoder import KeyDecoder, TEXT_CONTROLS, TEXT_MODES


def default_decoder() -> KeyDecoder:
    """Decoder over a registry seeded with the built-in bindings."""

    return KeyDecoder(load_default_keymaps(KeymapRegistry()))


__all__ = [
    "Binding",
    "KeyStroke",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "DEFAULT_BINDINGS",
    "load_default_keymaps",
    "KeyDecoder",
    "TEXT_MODES",
    "TEXT_CONTROLS",
    "default_decoder",
]
