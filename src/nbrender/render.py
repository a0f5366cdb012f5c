from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from .config import RenderConfig
from .dispatch import RenderDescriptor, dispatch
from .markdown import MarkdownPipeline
from .model import Notebook, from_nbformat, placeholder_notebook
from .page import render_cells, render_page
from .theme import global_style

logger = logging.getLogger(__name__)

NotebookLike = Union[Notebook, Mapping[str, Any]]


def _as_document(nb: NotebookLike) -> Notebook:
    if isinstance(nb, Notebook):
        return nb
    return from_nbformat(nb)


class NotebookRender:
    """Renders a notebook document with a fixed configuration.

    The document handed in is compared by identity: passing a different
    object, even an equal one, rebuilds the internal document and bumps
    ``generation``. Descriptors are recomputed on every call.
    """

    def __init__(
        self,
        notebook: Optional[NotebookLike] = None,
        config: Optional[RenderConfig] = None,
        markdown: Optional[MarkdownPipeline] = None,
    ) -> None:
        self.config = config or RenderConfig()
        self.markdown = markdown or MarkdownPipeline()
        self.generation = 0
        self._source: Optional[NotebookLike] = None
        self._document: Notebook = Notebook()
        self.set_notebook(notebook if notebook is not None else placeholder_notebook())

    @property
    def notebook(self) -> Notebook:
        return self._document

    def set_notebook(self, notebook: NotebookLike) -> bool:
        """Swap in a document; returns True when it was rebuilt."""
        if notebook is self._source:
            return False
        self._source = notebook
        self._document = _as_document(notebook)
        self.generation += 1
        logger.debug("Rebuilt notebook document (generation %d)", self.generation)
        return True

    def descriptors(self) -> List[RenderDescriptor]:
        return dispatch(self._document)

    def theme_style(self) -> str:
        return global_style(self.config.theme)

    def render_cells(self) -> List[str]:
        return render_cells(self.descriptors(), self.config, self.markdown)

    def render(self, title: str = "Notebook") -> str:
        return render_page(self.descriptors(), self.config, title=title, markdown=self.markdown)
