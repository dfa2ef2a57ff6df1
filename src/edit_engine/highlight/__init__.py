"""Optional syntax highlighting for the editor view."""

from .highlighter import (
    Highlighter,
    Span,
    highlight_line,
    highlight_lines,
    lexer_for_extension,
    style_for_theme,
)

__all__ = [
    "Highlighter",
    "Span",
    "highlight_line",
    "highlight_lines",
    "lexer_for_extension",
    "style_for_theme",
]
