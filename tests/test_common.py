# tests/test_common.py
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from functions.utils import common
from functions.utils.common import (
    get_param_section,
    load_all_parameters,
    load_yaml_dict,
    reset_parameters_cache,
)


class TestLoadYamlDict(unittest.TestCase):
    def test_missing_file_returns_empty(self):
        self.assertEqual(load_yaml_dict(Path("/nonexistent/params.yaml")), {})

    def test_non_mapping_returns_empty(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "list.yaml"
            path.write_text("- a\n- b\n", encoding="utf-8")
            self.assertEqual(load_yaml_dict(path), {})

    def test_invalid_yaml_returns_empty(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.yaml"
            path.write_text("a: [1, 2\n", encoding="utf-8")
            self.assertEqual(load_yaml_dict(str(path)), {})

    def test_mapping_is_loaded(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "ok.yaml"
            path.write_text("generation:\n  temperature: 0.3\n", encoding="utf-8")
            self.assertEqual(load_yaml_dict(path), {"generation": {"temperature": 0.3}})


class TestParameters(unittest.TestCase):
    def setUp(self):
        reset_parameters_cache()

    def tearDown(self):
        reset_parameters_cache()

    def test_project_parameters_sections(self):
        generation = get_param_section("generation")
        self.assertEqual(generation["design_temperature"], 1.4)
        self.assertFalse(generation["use_stub"])
        self.assertIn("endpoint", get_param_section("service"))
        self.assertEqual(get_param_section("rendering")["preview_scale"], 1.0)

    def test_parameters_are_cached(self):
        self.assertIs(load_all_parameters(), load_all_parameters())

    def test_missing_or_malformed_section(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "parameters.yaml"
            path.write_text("generation: 12\n", encoding="utf-8")
            with patch.object(common, "PARAMETERS_PATH", path):
                reset_parameters_cache()
                self.assertEqual(get_param_section("generation"), {})
                self.assertEqual(get_param_section("absent"), {})


if __name__ == "__main__":
    unittest.main()
