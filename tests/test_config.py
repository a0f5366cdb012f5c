import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from nbrender.config import RenderConfig, config_from_mapping, load_config
from nbrender.transforms import DEFAULT_DISPLAY_ORDER, DEFAULT_TRANSFORMS


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = RenderConfig()
        self.assertEqual(cfg.theme, "light")
        self.assertEqual(cfg.display_order, DEFAULT_DISPLAY_ORDER)
        self.assertEqual(set(cfg.transforms), set(DEFAULT_TRANSFORMS))

    def test_unknown_keys_are_ignored(self):
        cfg = config_from_mapping({"theme": "dark", "widgets": {"x": 1}})
        self.assertEqual(cfg.theme, "dark")
        self.assertEqual(cfg.display_order, DEFAULT_DISPLAY_ORDER)

    def test_bad_display_order(self):
        with self.assertRaises(ValueError):
            config_from_mapping({"display_order": "text/plain"})

    def test_load_yaml(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "cfg.yaml"
            p.write_text("theme: dark\ndisplay_order: [image/png, text/plain]\n", encoding="utf-8")
            cfg = load_config(str(p))
            self.assertEqual(cfg.theme, "dark")
            self.assertEqual(cfg.display_order, ("image/png", "text/plain"))

            p.write_text("", encoding="utf-8")
            self.assertEqual(load_config(str(p)).theme, "light")

            p.write_text("- a\n- b\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(str(p))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
