from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def freeze(value: Any) -> Any:
    """Return a read-only deep copy of plain JSON-like data.

    dicts become MappingProxyType, lists and tuples become tuples.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({str(k): freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


def _text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "".join(str(v) for v in value)
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class Output:
    """A MIME bundle produced by a code cell.

    output_type: nbformat output type (execute_result, display_data, stream, error).
    data: MIME type -> payload.
    """

    output_type: str
    data: Mapping[str, Any] = field(default_factory=_empty)
    metadata: Mapping[str, Any] = field(default_factory=_empty)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", freeze(self.data))
        object.__setattr__(self, "metadata", freeze(self.metadata))


@dataclass(frozen=True)
class Cell:
    cell_type: str
    source: str = ""
    metadata: Mapping[str, Any] = field(default_factory=_empty)
    # code cells only
    execution_count: Optional[int] = None
    outputs: Tuple[Output, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", freeze(self.metadata))
        object.__setattr__(self, "outputs", tuple(self.outputs))


@dataclass(frozen=True)
class Notebook:
    """An immutable notebook document.

    cell_order: display order of cell ids; duplicates render twice.
    cell_map: cell id -> Cell.
    metadata: document-wide metadata (language_info, hide_input, ...).
    """

    cell_order: Tuple[str, ...] = ()
    cell_map: Mapping[str, Cell] = field(default_factory=_empty)
    metadata: Mapping[str, Any] = field(default_factory=_empty)

    def __post_init__(self) -> None:
        # Cell values freeze themselves; only the mapping needs copying
        object.__setattr__(self, "cell_order", tuple(str(c) for c in self.cell_order))
        object.__setattr__(self, "cell_map", MappingProxyType(dict(self.cell_map)))
        object.__setattr__(self, "metadata", freeze(self.metadata))

    def cells(self) -> Iterator[Tuple[str, Cell]]:
        for cell_id in self.cell_order:
            yield cell_id, self.cell_map[cell_id]


def empty_notebook() -> Notebook:
    return Notebook()


def create_code_cell(source: str = "", metadata: Optional[Mapping] = None) -> Cell:
    return Cell(cell_type="code", source=source, metadata=metadata or {})


def create_markdown_cell(source: str = "", metadata: Optional[Mapping] = None) -> Cell:
    return Cell(cell_type="markdown", source=source, metadata=metadata or {})


def append_cell(nb: Notebook, cell: Cell, cell_id: Optional[str] = None) -> Notebook:
    """Return a new Notebook with cell appended; nb is left untouched."""
    cid = cell_id or str(uuid.uuid4())
    cell_map: Dict[str, Cell] = dict(nb.cell_map)
    cell_map[cid] = cell
    return Notebook(
        cell_order=nb.cell_order + (cid,),
        cell_map=MappingProxyType(cell_map),
        metadata=nb.metadata,
    )


def placeholder_notebook() -> Notebook:
    return append_cell(empty_notebook(), create_code_cell("# where's the content?"))


def _output_from_nbformat(d: Mapping) -> Output:
    otype = str(d.get("output_type") or "")
    meta = dict(d.get("metadata") or {})
    if otype == "stream":
        meta.setdefault("name", d.get("name") or "stdout")
        data: Dict[str, Any] = {"text/plain": _text(d.get("text"))}
    elif otype == "error":
        tb = d.get("traceback") or []
        if tb:
            text = _ANSI_RE.sub("", "\n".join(str(line) for line in tb))
        else:
            text = f"{d.get('ename', '')}: {d.get('evalue', '')}"
        data = {"text/plain": text}
    else:
        data = {}
        for mimetype, payload in (d.get("data") or {}).items():
            # multi-line text payloads are stored as lists of lines
            if isinstance(payload, list) and all(isinstance(p, str) for p in payload):
                payload = "".join(payload)
            data[mimetype] = payload
    return Output(output_type=otype, data=freeze(data), metadata=freeze(meta))


def _cell_from_nbformat(d: Mapping) -> Cell:
    cell_type = str(d.get("cell_type") or "")
    outputs: Tuple[Output, ...] = ()
    if cell_type == "code":
        outputs = tuple(
            _output_from_nbformat(o) for o in d.get("outputs") or [] if isinstance(o, Mapping)
        )
    return Cell(
        cell_type=cell_type,
        source=_text(d.get("source")),
        metadata=freeze(d.get("metadata") or {}),
        execution_count=d.get("execution_count"),
        outputs=outputs,
    )


def from_nbformat(d: Mapping) -> Notebook:
    """Build a Notebook from an nbformat v4 dict (or NotebookNode).

    Cell ids come from the cell's 'id' field when present, else cell-<index>
    (suffixed with -1, -2, ... if that collides with another cell's id).
    A repeated explicit id keeps the last cell in cell_map and is listed
    twice in cell_order.
    """
    raw_cells = [jc for jc in d.get("cells") or [] if isinstance(jc, Mapping)]
    used = {str(jc["id"]) for jc in raw_cells if jc.get("id")}
    order = []
    cell_map: Dict[str, Cell] = {}
    for index, jc in enumerate(raw_cells):
        if jc.get("id"):
            cid = str(jc["id"])
        else:
            cid = base = f"cell-{index}"
            suffix = 0
            while cid in used:
                suffix += 1
                cid = f"{base}-{suffix}"
            used.add(cid)
        order.append(cid)
        cell_map[cid] = _cell_from_nbformat(jc)
    return Notebook(
        cell_order=tuple(order),
        cell_map=MappingProxyType(cell_map),
        metadata=freeze(d.get("metadata") or {}),
    )
