"""Syntax highlighting on top of Pygments.

Highlighting is a pure transform from document lines to styled spans; it
never looks at or changes buffer state.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional, Sequence, Tuple, Type

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.style import Style
from pygments.styles import get_style_by_name
from pygments.token import _TokenType
from pygments.util import ClassNotFound

FALLBACK_THEME = "monokai"

Span = Tuple[str, str]  # (text, rich style string)


@lru_cache(maxsize=64)
def lexer_for_extension(extension: str) -> Lexer:
    ext = extension.lstrip(".")
    if not ext:
        return TextLexer(stripnl=False, ensurenl=False)
    try:
        return get_lexer_for_filename(f"buffer.{ext}", stripnl=False, ensurenl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False, ensurenl=False)


@lru_cache(maxsize=8)
def style_for_theme(theme: str) -> Type[Style]:
    try:
        return get_style_by_name(theme)
    except ClassNotFound:
        return get_style_by_name(FALLBACK_THEME)


@lru_cache(maxsize=512)
def _rich_style(style: Type[Style], token_type: _TokenType) -> str:
    info = style.style_for_token(token_type)
    parts: List[str] = []
    if info.get("bold"):
        parts.append("bold")
    if info.get("italic"):
        parts.append("italic")
    if info.get("underline"):
        parts.append("underline")
    if info.get("color"):
        parts.append(f"#{info['color']}")
    return " ".join(parts)


def _lexable(line: str) -> str:
    # Pygments folds a lone "\r" into a newline; keep one column per character.
    return line.replace("\r", " ")


def _append(spans: List[Span], text: str, style: str) -> None:
    if spans and spans[-1][1] == style:
        spans[-1] = (spans[-1][0] + text, style)
    else:
        spans.append((text, style))


def highlight_lines(
    lines: Sequence[str], file_extension: str, theme: str = "dracula"
) -> List[List[Span]]:
    """Lex the whole document once and split the tokens back into lines.

    Lexer state carries across lines, so the inside of a multi-line string
    or comment is styled as such. Each line's span texts concatenate back
    to that line; adjacent tokens sharing a style are merged.
    """

    lexer = lexer_for_extension(file_extension)
    style = style_for_theme(theme)
    source = "\n".join(_lexable(line) for line in lines)
    # (length, style) runs per line, mapped back onto the real text below.
    runs: List[List[Tuple[int, str]]] = [[]]
    remaining = len(source)
    for token_type, value in lexer.get_tokens(source):
        if remaining <= 0:
            break
        # Lexers may append a newline token; never emit past the input.
        value = value[:remaining]
        remaining -= len(value)
        rich = _rich_style(style, token_type)
        for index, piece in enumerate(value.split("\n")):
            if index:
                runs.append([])
            if piece:
                runs[-1].append((len(piece), rich))

    result: List[List[Span]] = []
    for line, line_runs in zip(lines, runs):
        spans: List[Span] = []
        offset = 0
        for length, rich in line_runs:
            _append(spans, line[offset : offset + length], rich)
            offset += length
        if offset != len(line):
            break
        result.append(spans)
    if len(result) != len(lines) or len(runs) != len(lines):
        # Lexer preprocessing (BOM stripping, tab expansion) shifted offsets.
        return [[(line, "")] if line else [] for line in lines]
    return result


def highlight_line(
    line_text: str, file_extension: str, theme: str = "dracula"
) -> List[Span]:
    """Split one line, lexed on its own, into ``(text, style)`` spans."""

    if not line_text:
        return []
    return highlight_lines([line_text], file_extension, theme)[0]


class Highlighter:
    """Binds an extension and theme; caches document spans per buffer version."""

    def __init__(self, extension: str, *, theme: str = "dracula", enabled: bool = True) -> None:
        self.extension = extension
        self.theme = theme
        self.enabled = enabled
        self._cache: Optional[Tuple[int, List[List[Span]]]] = None

    def spans(self, line_text: str) -> List[Span]:
        if not self.enabled:
            return [(line_text, "")] if line_text else []
        return highlight_line(line_text, self.extension, self.theme)

    def document(self, lines: Sequence[str], version: int) -> List[List[Span]]:
        """Spans for every line, recomputed only when ``version`` changes."""

        if self._cache is not None and self._cache[0] == version:
            return self._cache[1]
        if self.enabled:
            spans = highlight_lines(lines, self.extension, self.theme)
        else:
            spans = [[(line, "")] if line else [] for line in lines]
        self._cache = (version, spans)
        return spans


__all__ = [
    "Highlighter",
    "Span",
    "highlight_line",
    "highlight_lines",
    "lexer_for_extension",
    "style_for_theme",
]
