from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .language import resolve_language
from .model import Cell, Notebook, Output
from .visibility import resolve_visibility


@dataclass(frozen=True)
class RenderDescriptor:
    """Per-cell render instructions, recomputed on every render pass."""

    cell_id: str
    cell_type: str
    source: str

    kind = "descriptor"


@dataclass(frozen=True)
class CodeDescriptor(RenderDescriptor):
    execution_count: Optional[int] = None
    outputs: Tuple[Output, ...] = ()
    language: str = "text"
    source_hidden: bool = False
    output_hidden: bool = True
    output_expanded: bool = True

    kind = "code"


@dataclass(frozen=True)
class MarkdownDescriptor(RenderDescriptor):
    kind = "markdown"


@dataclass(frozen=True)
class RawDescriptor(RenderDescriptor):
    kind = "raw"


@dataclass(frozen=True)
class UnknownDescriptor(RenderDescriptor):
    kind = "unknown"

    @property
    def message(self) -> str:
        return f'Cell Type "{self.cell_type}" is not implemented'


def _classify_code(
    cell: Cell, cell_id: str, metadata: Mapping[str, Any], language: str
) -> RenderDescriptor:
    vis = resolve_visibility(metadata, cell)
    return CodeDescriptor(
        cell_id=cell_id,
        cell_type=cell.cell_type,
        source=cell.source,
        execution_count=cell.execution_count,
        outputs=cell.outputs,
        language=language,
        source_hidden=vis.source_hidden,
        output_hidden=vis.output_hidden,
        output_expanded=vis.output_expanded,
    )


def _classify_markdown(
    cell: Cell, cell_id: str, metadata: Mapping[str, Any], language: str
) -> RenderDescriptor:
    return MarkdownDescriptor(cell_id=cell_id, cell_type=cell.cell_type, source=cell.source)


def _classify_raw(
    cell: Cell, cell_id: str, metadata: Mapping[str, Any], language: str
) -> RenderDescriptor:
    return RawDescriptor(cell_id=cell_id, cell_type=cell.cell_type, source=cell.source)


_CLASSIFIERS: Dict[str, Callable[[Cell, str, Mapping[str, Any], str], RenderDescriptor]] = {
    "code": _classify_code,
    "markdown": _classify_markdown,
    "raw": _classify_raw,
}


def classify(
    cell: Cell,
    cell_id: str,
    metadata: Mapping[str, Any],
    language: Optional[str] = None,
) -> RenderDescriptor:
    """Map a cell to its render descriptor.

    Cell types other than code, markdown and raw (e.g. ones added by
    notebook extensions) produce an UnknownDescriptor, never an error.
    """
    if language is None:
        language = resolve_language(metadata)
    handler = _CLASSIFIERS.get(cell.cell_type)
    if handler is None:
        return UnknownDescriptor(cell_id=cell_id, cell_type=cell.cell_type, source=cell.source)
    return handler(cell, cell_id, metadata, language)


def dispatch(nb: Notebook) -> List[RenderDescriptor]:
    """Return one descriptor per entry of nb.cell_order, in order."""
    language = resolve_language(nb.metadata)
    return [classify(cell, cell_id, nb.metadata, language) for cell_id, cell in nb.cells()]
