import sys
import unittest
from pathlib import Path
from types import MappingProxyType

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from nbrender.dispatch import (
    CodeDescriptor,
    MarkdownDescriptor,
    RawDescriptor,
    UnknownDescriptor,
    classify,
    dispatch,
)
from nbrender.model import Cell, Notebook, Output, freeze, from_nbformat


def _nb(cells, order=None, metadata=None):
    cell_map = MappingProxyType(dict(cells))
    return Notebook(
        cell_order=tuple(order if order is not None else [cid for cid, _ in cells]),
        cell_map=cell_map,
        metadata=freeze(metadata or {}),
    )


class TestDispatch(unittest.TestCase):
    def test_one_descriptor_per_order_entry_including_duplicates(self):
        nb = _nb(
            [("a", Cell("code", "1")), ("b", Cell("markdown", "# b"))],
            order=["a", "b", "a"],
        )
        descriptors = dispatch(nb)
        self.assertEqual([d.cell_id for d in descriptors], ["a", "b", "a"])
        self.assertEqual(descriptors[0], descriptors[2])

    def test_variants(self):
        nb = _nb(
            [
                ("c", Cell("code", "x = 1", execution_count=4, outputs=(Output("stream", freeze({"text/plain": "hi"})),))),
                ("m", Cell("markdown", "*hi*")),
                ("r", Cell("raw", "raw text")),
                ("u", Cell("widget-thing", "??")),
            ],
            metadata={"language_info": {"name": "python"}},
        )
        c, m, r, u = dispatch(nb)
        self.assertIsInstance(c, CodeDescriptor)
        self.assertEqual(c.execution_count, 4)
        self.assertEqual(c.language, "python")
        self.assertEqual(len(c.outputs), 1)
        self.assertFalse(c.output_hidden)
        self.assertIsInstance(m, MarkdownDescriptor)
        self.assertEqual(m.source, "*hi*")
        self.assertIsInstance(r, RawDescriptor)
        self.assertIsInstance(u, UnknownDescriptor)
        self.assertEqual(u.cell_type, "widget-thing")
        self.assertEqual(u.message, 'Cell Type "widget-thing" is not implemented')

    def test_unknown_empty_type(self):
        d = classify(Cell(""), "x", {})
        self.assertIsInstance(d, UnknownDescriptor)
        self.assertEqual(d.message, 'Cell Type "" is not implemented')

    def test_document_hide_input_hides_every_code_cell(self):
        nb = _nb(
            [("a", Cell("code", "1")), ("b", Cell("code", "2")), ("m", Cell("markdown", "x"))],
            metadata={"hide_input": True},
        )
        code = [d for d in dispatch(nb) if isinstance(d, CodeDescriptor)]
        self.assertEqual(len(code), 2)
        self.assertTrue(all(d.source_hidden for d in code))

    def test_code_cell_without_outputs(self):
        d = classify(Cell("code", "pass"), "a", {})
        self.assertTrue(d.output_hidden)
        self.assertTrue(d.output_expanded)
        self.assertIsNone(d.execution_count)
        self.assertEqual(d.language, "text")

    def test_missing_cell_fails_fast(self):
        nb = _nb([("a", Cell("code", "1"))], order=["a", "ghost"])
        with self.assertRaises(KeyError):
            dispatch(nb)

    def test_idempotent(self):
        nb = from_nbformat(
            {
                "metadata": {"language_info": {"name": "python"}},
                "cells": [
                    {"cell_type": "code", "source": "1", "metadata": {}, "outputs": [], "execution_count": None},
                    {"cell_type": "markdown", "source": "# x", "metadata": {}},
                ],
            }
        )
        self.assertEqual(dispatch(nb), dispatch(nb))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
