from __future__ import annotations

import html
from typing import Callable, List, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.dollarmath import dollarmath_plugin

MathRenderer = Callable[[str, bool], str]


def default_math_renderer(tex: str, display: bool) -> str:
    """Emit TeX in the delimiters KaTeX/MathJax auto-render look for."""
    body = html.escape(tex.strip("\n") if display else tex)
    if display:
        return f'<div class="math math-block">\\[\n{body}\n\\]</div>\n'
    return f'<span class="math math-inline">\\({body}\\)</span>'


class MarkdownPipeline:
    """Converts markdown cell source to HTML.

    $...$ and $$...$$ are parsed as math nodes ahead of emphasis rules so TeX
    survives untouched, then handed to math_renderer instead of the default
    markup path.
    """

    def __init__(self, math_renderer: Optional[MathRenderer] = None) -> None:
        self.math_renderer = math_renderer or default_math_renderer
        self._md = (
            MarkdownIt("commonmark", {"html": True})
            .enable("table")
            .enable("strikethrough")
            .use(dollarmath_plugin)
        )

        def render_math_inline(tokens, idx, options, env):
            return self.math_renderer(tokens[idx].content, False)

        def render_math_block(tokens, idx, options, env):
            return self.math_renderer(tokens[idx].content, True)

        self._md.renderer.rules["math_inline"] = render_math_inline
        self._md.renderer.rules["math_block"] = render_math_block
        # $$...$$ followed by (label) on the same line
        self._md.renderer.rules["math_block_label"] = render_math_block

    def tokens(self, source: str) -> List[Token]:
        return self._md.parse(source)

    def render(self, source: str) -> str:
        return self._md.render(source)
