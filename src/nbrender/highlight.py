"""Syntax highlighting of code cell source via Pygments."""

from __future__ import annotations

from functools import lru_cache

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

# CodeMirror mode names that Pygments knows under another alias
CODEMIRROR_ALIASES = {
    "ipython": "python",
    "ipython3": "python",
    "text/x-python": "python",
    "text/x-sh": "bash",
    "shell": "bash",
    "gfm": "markdown",
    "text/x-julia": "julia",
    "text/x-rsrc": "r",
    "text/x-scala": "scala",
    "text/x-c++src": "cpp",
}

THEME_STYLES = {
    "light": "default",
    "dark": "monokai",
}

CSS_CLASS = "highlight"


@lru_cache(maxsize=32)
def get_lexer(language: str) -> Lexer:
    """Return a lexer for a language tag, falling back to plain text."""
    name = CODEMIRROR_ALIASES.get(language.lower(), language.lower())
    try:
        return get_lexer_by_name(name)
    except ClassNotFound:
        return TextLexer()


def _formatter(theme: str) -> HtmlFormatter:
    return HtmlFormatter(style=THEME_STYLES.get(theme, "default"), cssclass=CSS_CLASS)


def highlight_source(source: str, language: str, theme: str = "light") -> str:
    return highlight(source, get_lexer(language), _formatter(theme))


def style_defs(theme: str = "light") -> str:
    return _formatter(theme).get_style_defs("." + CSS_CLASS)
