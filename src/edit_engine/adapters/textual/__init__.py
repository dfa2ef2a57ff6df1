"""Textual host for the browser and editor sessions."""

from .controller import TextualSessionAdapter, TextualUIHooks

__all__ = ["TextualSessionAdapter", "TextualUIHooks"]
