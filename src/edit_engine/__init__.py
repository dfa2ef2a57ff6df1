"""UI-agnostic text editing engine with a directory browser."""

__all__ = [
    "adapters",
    "browser",
    "buffer",
    "highlight",
    "keymaps",
    "runtime",
    "sessions",
    "viewport",
]

__version__ = "0.1.0"
