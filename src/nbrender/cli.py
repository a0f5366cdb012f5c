from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import RenderConfig, load_config
from .dispatch import CodeDescriptor, RenderDescriptor, UnknownDescriptor
from .jupyter import read_notebook_file
from .render import NotebookRender
from .theme import THEMES


def _load_config(config_path: str | None, theme: str | None) -> RenderConfig:
    config = load_config(config_path) if config_path else RenderConfig()
    if theme:
        config = RenderConfig(
            theme=theme, display_order=config.display_order, transforms=config.transforms
        )
    return config


def _describe(d: RenderDescriptor) -> str:
    flags = []
    if isinstance(d, CodeDescriptor):
        flags.append(f"lang={d.language}")
        flags.append(f"count={'' if d.execution_count is None else d.execution_count}")
        flags.append(f"outputs={len(d.outputs)}")
        if d.source_hidden:
            flags.append("source-hidden")
        if d.output_hidden:
            flags.append("output-hidden")
        if not d.output_expanded:
            flags.append("collapsed")
    elif isinstance(d, UnknownDescriptor):
        flags.append(d.message)
    return f"{d.kind}\t{d.cell_id}\t{' '.join(flags)}".rstrip()


def _cmd_render(path: Path, out: str | None, config: RenderConfig) -> int:
    nb = read_notebook_file(str(path))
    text = NotebookRender(nb, config).render(title=path.stem)
    if out:
        Path(out).write_text(text, encoding="utf-8")
        print(f"Rendered: {out}")
    else:
        print(text, end="")
    return 0


def _cmd_cells(path: Path, config: RenderConfig) -> int:
    nb = read_notebook_file(str(path))
    for d in NotebookRender(nb, config).descriptors():
        print(_describe(d))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="nbrender", description="Notebook renderer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_render = sub.add_parser("render", help="Render an .ipynb file to HTML")
    p_render.add_argument("file")
    p_render.add_argument("-o", "--output", help="Output .html file (default: stdout)")
    p_render.add_argument("--theme", choices=sorted(THEMES))
    p_render.add_argument("--config", help="YAML file with theme/display_order")

    p_cells = sub.add_parser("cells", help="Print the render descriptor of each cell")
    p_cells.add_argument("file")
    p_cells.add_argument("--config", help="YAML file with theme/display_order")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load_config(getattr(args, "config", None), getattr(args, "theme", None))
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    path = Path(args.file)
    try:
        if args.cmd == "render":
            return _cmd_render(path, args.output, config)
        if args.cmd == "cells":
            return _cmd_cells(path, config)
    except Exception as e:  # nbformat raises assorted read/validation errors
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
