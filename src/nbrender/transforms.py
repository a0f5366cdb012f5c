from __future__ import annotations

import html
import json
from functools import lru_cache
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from .markdown import MarkdownPipeline, MathRenderer, default_math_renderer
from .model import Output

# A transform turns one MIME payload (plus the output's metadata for that
# MIME type) into an HTML fragment.
Transform = Callable[[Any, Mapping[str, Any]], str]


def _as_text(data: Any) -> str:
    if isinstance(data, (list, tuple)):
        return "".join(str(d) for d in data)
    return str(data)


def _to_json(data: Any) -> Any:
    if isinstance(data, Mapping):
        return {k: _to_json(v) for k, v in data.items()}
    if isinstance(data, tuple):
        return [_to_json(v) for v in data]
    return data


def render_text(data: Any, metadata: Mapping[str, Any]) -> str:
    return f'<pre class="output-text">{html.escape(_as_text(data))}</pre>'


def render_json(data: Any, metadata: Mapping[str, Any]) -> str:
    text = json.dumps(_to_json(data), indent=2, sort_keys=True)
    return f'<pre class="output-json">{html.escape(text)}</pre>'


def render_html(data: Any, metadata: Mapping[str, Any]) -> str:
    return f'<div class="output-html">{_as_text(data)}</div>'


@lru_cache(maxsize=1)
def _markdown() -> MarkdownPipeline:
    return MarkdownPipeline()


def markdown_transform(pipeline: MarkdownPipeline) -> Transform:
    def render_markdown(data: Any, metadata: Mapping[str, Any]) -> str:
        return f'<div class="output-markdown">{pipeline.render(_as_text(data))}</div>'

    return render_markdown


def render_markdown(data: Any, metadata: Mapping[str, Any]) -> str:
    return markdown_transform(_markdown())(data, metadata)


def latex_transform(math_renderer: MathRenderer) -> Transform:
    def render_latex(data: Any, metadata: Mapping[str, Any]) -> str:
        return math_renderer(_strip_dollars(_as_text(data)), True)

    return render_latex


def _strip_dollars(tex: str) -> str:
    tex = tex.strip()
    # IPython.display.Latex payloads usually arrive wrapped in $$...$$
    if tex.startswith("$$") and tex.endswith("$$") and len(tex) >= 4:
        return tex[2:-2]
    if tex.startswith("$") and tex.endswith("$") and len(tex) >= 2:
        return tex[1:-1]
    return tex


render_latex = latex_transform(default_math_renderer)


def render_svg(data: Any, metadata: Mapping[str, Any]) -> str:
    return f'<div class="output-svg">{_as_text(data)}</div>'


def _image_transform(mimetype: str) -> Transform:
    def render_image(data: Any, metadata: Mapping[str, Any]) -> str:
        attrs = ""
        for dim in ("width", "height"):
            if dim in metadata:
                attrs += f' {dim}="{html.escape(str(metadata[dim]))}"'
        payload = _as_text(data).replace("\n", "")
        return f'<img class="output-image" src="data:{mimetype};base64,{payload}"{attrs}/>'

    render_image.__name__ = "render_" + mimetype.split("/")[-1]
    return render_image


DEFAULT_DISPLAY_ORDER = (
    "application/json",
    "text/html",
    "text/markdown",
    "text/latex",
    "image/svg+xml",
    "image/gif",
    "image/png",
    "image/jpeg",
    "text/plain",
)

DEFAULT_TRANSFORMS: Dict[str, Transform] = {
    "application/json": render_json,
    "text/html": render_html,
    "text/markdown": render_markdown,
    "text/latex": render_latex,
    "image/svg+xml": render_svg,
    "image/gif": _image_transform("image/gif"),
    "image/png": _image_transform("image/png"),
    "image/jpeg": _image_transform("image/jpeg"),
    "text/plain": render_text,
}


def richest_mimetype(
    output: Output, display_order: Sequence[str], transforms: Mapping[str, Transform]
) -> Optional[str]:
    """First MIME type in display_order that has a transform and is in the bundle."""
    for mimetype in display_order:
        if mimetype in transforms and mimetype in output.data:
            return mimetype
    return None


def select_transform(
    output: Output, display_order: Sequence[str], transforms: Mapping[str, Transform]
) -> Optional[Transform]:
    mimetype = richest_mimetype(output, display_order, transforms)
    if mimetype is None:
        return None
    return transforms[mimetype]


def render_output(
    output: Output, display_order: Sequence[str], transforms: Mapping[str, Transform]
) -> Optional[str]:
    """Render one output with its richest transform; None when none applies."""
    mimetype = richest_mimetype(output, display_order, transforms)
    if mimetype is None:
        return None
    meta = output.metadata.get(mimetype)
    if not isinstance(meta, Mapping):
        meta = {}
    return transforms[mimetype](output.data[mimetype], meta)
