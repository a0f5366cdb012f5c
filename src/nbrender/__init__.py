"""nbrender: render Jupyter-style notebook documents to HTML.

Resolves per-cell visibility and the document language, classifies each
cell and hands its content to the matching renderer.
"""

__all__ = [
    "Notebook",
    "Cell",
    "Output",
    "RenderConfig",
    "NotebookRender",
    "dispatch",
    "from_nbformat",
]

__version__ = "0.1.0"

from .model import Notebook, Cell, Output, from_nbformat  # noqa: E402
from .config import RenderConfig  # noqa: E402
from .dispatch import dispatch  # noqa: E402
from .render import NotebookRender  # noqa: E402
