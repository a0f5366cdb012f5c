from __future__ import annotations

import nbformat

from .model import Notebook, from_nbformat


def read_notebook_text(text: str) -> Notebook:
    """Parse .ipynb JSON text (any nbformat version) into a Notebook."""
    nbnode = nbformat.reads(text, as_version=4)
    return from_nbformat(nbnode)


def read_notebook_file(path: str) -> Notebook:
    with open(path, "r", encoding="utf-8") as f:
        return read_notebook_text(f.read())
