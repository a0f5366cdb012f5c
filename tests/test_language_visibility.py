import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from nbrender.language import resolve_language
from nbrender.model import Cell, Output, freeze
from nbrender.visibility import resolve_visibility


def _code(metadata=None, outputs=()):
    return Cell(cell_type="code", source="x", metadata=freeze(metadata or {}), outputs=tuple(outputs))


class TestLanguage(unittest.TestCase):
    def test_codemirror_mode_name(self):
        meta = {"language_info": {"codemirror_mode": {"name": "python"}}}
        self.assertEqual(resolve_language(meta), "python")

    def test_codemirror_mode_plain_tag(self):
        meta = {"language_info": {"codemirror_mode": "julia", "name": "julia-1.9"}}
        self.assertEqual(resolve_language(meta), "julia")

    def test_language_info_name(self):
        self.assertEqual(resolve_language({"language_info": {"name": "ruby"}}), "ruby")

    def test_empty_metadata(self):
        self.assertEqual(resolve_language({}), "text")

    def test_empty_values_fall_through(self):
        meta = {"language_info": {"codemirror_mode": {"name": ""}, "name": "r"}}
        self.assertEqual(resolve_language(meta), "r")
        meta = {"language_info": {"codemirror_mode": {"version": 3}, "name": ""}}
        self.assertEqual(resolve_language(meta), "text")

    def test_ill_shaped_language_info(self):
        self.assertEqual(resolve_language({"language_info": "python"}), "text")
        self.assertEqual(resolve_language({"language_info": {"codemirror_mode": 3}}), "text")


class TestVisibility(unittest.TestCase):
    def test_defaults(self):
        vis = resolve_visibility({}, _code(outputs=[Output("stream")]))
        self.assertFalse(vis.source_hidden)
        self.assertFalse(vis.output_hidden)
        self.assertTrue(vis.output_expanded)

    def test_document_hide_input(self):
        vis = resolve_visibility({"hide_input": True}, _code())
        self.assertTrue(vis.source_hidden)

    def test_cell_hide_flags(self):
        self.assertTrue(resolve_visibility({}, _code({"inputHidden": True})).source_hidden)
        self.assertTrue(resolve_visibility({}, _code({"hide_input": True})).source_hidden)
        self.assertFalse(resolve_visibility({"hide_input": False}, _code({"inputHidden": False})).source_hidden)

    def test_no_outputs_is_output_hidden(self):
        vis = resolve_visibility({}, _code({"outputHidden": False}))
        self.assertTrue(vis.output_hidden)

    def test_output_hidden_metadata(self):
        vis = resolve_visibility({}, _code({"outputHidden": True}, [Output("stream")]))
        self.assertTrue(vis.output_hidden)

    def test_output_expanded_respects_metadata(self):
        outputs = [Output("display_data")]
        self.assertFalse(resolve_visibility({}, _code({"outputExpanded": False}, outputs)).output_expanded)
        self.assertTrue(resolve_visibility({}, _code({"outputExpanded": True}, outputs)).output_expanded)
        # hidden and expanded are independent
        vis = resolve_visibility({}, _code())
        self.assertTrue(vis.output_hidden)
        self.assertTrue(vis.output_expanded)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
