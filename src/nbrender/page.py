"""HTML drawing layer for render descriptors."""

from __future__ import annotations

import html
import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from .config import RenderConfig
from .dispatch import (
    CodeDescriptor,
    MarkdownDescriptor,
    RawDescriptor,
    RenderDescriptor,
    UnknownDescriptor,
)
from .highlight import highlight_source, style_defs
from .markdown import MarkdownPipeline
from .theme import global_style
from .transforms import (
    latex_transform,
    markdown_transform,
    render_latex,
    render_markdown,
    render_output,
)

logger = logging.getLogger(__name__)

BASE_CSS = """\
body { margin: 0; background: var(--theme-app-bg); color: var(--theme-app-fg); }
.notebook-render { font-family: sans-serif; }
.cell { background: var(--theme-cell-bg); margin-bottom: 10px; }
.input { display: flex; background: var(--theme-cell-input-bg); }
.prompt {
  flex: 0 0 var(--prompt-width, 50px);
  padding: 9px 0;
  text-align: center;
  font-family: monospace;
  font-size: 12px;
  background: var(--theme-cell-prompt-bg);
  color: var(--theme-cell-prompt-fg);
}
.source { flex: 1 1 auto; overflow-x: auto; }
.source .highlight { margin: 0; padding: 0 10px; background: transparent; }
.outputs { padding: 10px 10px 10px calc(var(--prompt-width, 50px) + 10px); background: var(--theme-cell-output-bg); }
.outputs.collapsed { max-height: 600px; overflow-y: auto; }
.outputs pre { white-space: pre-wrap; margin: 0; }
.output-stderr pre { background: #fdd; }
.content-margin { padding: 10px 10px 10px calc(var(--prompt-width, 50px) + 10px); }
pre.raw-cell {
  margin: 0;
  padding: 10px;
  background: repeating-linear-gradient(
    -45deg,
    transparent,
    transparent 10px,
    var(--theme-raw-stripe-a) 10px,
    var(--theme-raw-stripe-b) 20px
  );
}
"""


def _prompt(execution_count: Optional[int]) -> str:
    counter = "" if execution_count is None else str(execution_count)
    return f'<div class="prompt">[{html.escape(counter)}]:</div>'


def _output_classes(output) -> str:
    classes = ["output", "output-" + (output.output_type or "unknown")]
    name = output.metadata.get("name")
    if output.output_type == "stream" and isinstance(name, str):
        classes.append("output-" + name)
    return " ".join(classes)


def render_code(d: CodeDescriptor, config: RenderConfig) -> str:
    parts = ['<div class="cell code-cell">']
    if not d.source_hidden:
        parts.append('<div class="input">')
        parts.append(_prompt(d.execution_count))
        parts.append('<div class="source">')
        parts.append(highlight_source(d.source, d.language, config.theme))
        parts.append("</div></div>")
    if not d.output_hidden:
        state = "expanded" if d.output_expanded else "collapsed"
        parts.append(f'<div class="outputs {state}">')
        for index, output in enumerate(d.outputs):
            fragment = render_output(output, config.display_order, config.transforms)
            if fragment is None:
                logger.debug(
                    "No transform for output %d of cell %s (mimetypes: %s)",
                    index,
                    d.cell_id,
                    ", ".join(output.data) or "none",
                )
                continue
            parts.append(f'<div class="{_output_classes(output)}">{fragment}</div>')
        parts.append("</div>")
    parts.append("</div>")
    return "".join(parts)


def render_descriptor(
    d: RenderDescriptor, config: RenderConfig, markdown: MarkdownPipeline
) -> str:
    if isinstance(d, CodeDescriptor):
        return render_code(d, config)
    if isinstance(d, MarkdownDescriptor):
        return (
            '<div class="cell markdown-cell"><div class="content-margin">'
            + markdown.render(d.source)
            + "</div></div>"
        )
    if isinstance(d, RawDescriptor):
        return f'<div class="cell raw-cell"><pre class="raw-cell">{html.escape(d.source)}</pre></div>'
    if isinstance(d, UnknownDescriptor):
        return (
            '<div class="cell unknown-cell"><div class="outputs">'
            f"<pre>{html.escape(d.message)}</pre></div></div>"
        )
    raise TypeError(f"Unsupported descriptor {type(d).__name__}")


def bind_markdown(config: RenderConfig, markdown: MarkdownPipeline) -> RenderConfig:
    """Route the default text/markdown and text/latex transforms through markdown.

    Transforms supplied by the caller are left as they are.
    """
    transforms = dict(config.transforms)
    if transforms.get("text/markdown") is render_markdown:
        transforms["text/markdown"] = markdown_transform(markdown)
    if transforms.get("text/latex") is render_latex:
        transforms["text/latex"] = latex_transform(markdown.math_renderer)
    return replace(config, transforms=transforms)


def render_cells(
    descriptors: Iterable[RenderDescriptor],
    config: RenderConfig,
    markdown: Optional[MarkdownPipeline] = None,
) -> List[str]:
    markdown = markdown or MarkdownPipeline()
    config = bind_markdown(config, markdown)
    return [render_descriptor(d, config, markdown) for d in descriptors]


def render_page(
    descriptors: Iterable[RenderDescriptor],
    config: RenderConfig,
    title: str = "Notebook",
    markdown: Optional[MarkdownPipeline] = None,
) -> str:
    cells = "\n".join(render_cells(descriptors, config, markdown))
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n"
        '<meta charset="utf-8"/>\n'
        f"<title>{html.escape(title)}</title>\n"
        "<style>\n"
        + global_style(config.theme)
        + BASE_CSS
        + style_defs(config.theme)
        + "\n</style>\n"
        "</head>\n<body>\n"
        '<div class="notebook-render">\n<div class="cells">\n'
        + cells
        + "\n</div>\n</div>\n</body>\n</html>\n"
    )
