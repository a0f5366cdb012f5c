from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .model import Cell


@dataclass(frozen=True)
class Visibility:
    source_hidden: bool = False
    output_hidden: bool = False
    # outputs are expanded unless a cell says otherwise
    output_expanded: bool = True


def resolve_visibility(metadata: Mapping[str, Any], cell: Cell) -> Visibility:
    """Resolve the hide/expand flags of one cell.

    metadata is the document metadata; hide_input there (set by the
    hide_input nbextension) hides the source of every cell. A cell without
    outputs is always output-hidden.
    """
    cell_meta = cell.metadata
    source_hidden = bool(
        metadata.get("hide_input")
        or cell_meta.get("inputHidden")
        or cell_meta.get("hide_input")
    )
    output_hidden = len(cell.outputs) == 0 or bool(cell_meta.get("outputHidden"))
    if "outputExpanded" in cell_meta:
        output_expanded = bool(cell_meta["outputExpanded"])
    else:
        output_expanded = True
    return Visibility(
        source_hidden=source_hidden,
        output_hidden=output_hidden,
        output_expanded=output_expanded,
    )
