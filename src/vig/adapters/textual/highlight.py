"""Per-line syntax colouring with pygments, emitted as rich ``Text``."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Optional

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound
from rich.style import Style
from rich.text import Text

DEFAULT_THEME = "monokai"


@lru_cache(maxsize=128)
def lexer_for_path(path: str) -> Lexer:
    try:
        return get_lexer_for_filename(path, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False, ensurenl=False)


class SyntaxHighlighter:
    """Colours single lines; token styles are cached per token type."""

    def __init__(self, theme: str = DEFAULT_THEME) -> None:
        self._style = get_style_by_name(theme)
        self._cache: Dict[Any, Style] = {}

    def _rich_style(self, token_type: Any) -> Style:
        cached = self._cache.get(token_type)
        if cached is not None:
            return cached
        token_style = self._style.style_for_token(token_type)
        style = Style(
            color=f"#{token_style['color']}" if token_style["color"] else None,
            bold=token_style["bold"] or None,
            italic=token_style["italic"] or None,
        )
        self._cache[token_type] = style
        return style

    def highlight(self, line: str, path: Optional[str]) -> Text:
        text = Text(no_wrap=True, overflow="crop")
        if not line:
            return text
        if path is None:
            text.append(line)
            return text
        for token_type, value in lexer_for_path(path).get_tokens(line):
            if value:
                text.append(value.rstrip("\n"), style=self._rich_style(token_type))
        return text


__all__ = ["DEFAULT_THEME", "SyntaxHighlighter", "lexer_for_path"]
