# tests/test_main.py
"""
Tests for the command-line renderer (main._cli).

Covers:
- Rendering a camelCase CV JSON file to an output file
- --template and --design overrides
- Exit code 1 for missing files, invalid JSON, invalid CV data and invalid designs
"""

from __future__ import annotations

import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from main import _cli, render_file
from utils_test_support import design, sample_cv


class PrettyTestCase(unittest.TestCase):
    """Base test case adding consistent headers and dividers."""

    def setUp(self):
        test_name = self._testMethodName
        print("\n" + "=" * 90, file=sys.stderr)
        print(f"🧪 STARTING TEST: {test_name}", file=sys.stderr)
        print("=" * 90, file=sys.stderr)
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()
        print("-" * 90 + "\n", file=sys.stderr)

    def write(self, name: str, content: str) -> Path:
        path = self.tmp / name
        path.write_text(content, encoding="utf-8")
        return path


class TestCli(PrettyTestCase):
    def test_render_to_file(self):
        cv_path = self.write("cv.json", sample_cv().model_dump_json(by_alias=True))
        out = self.tmp / "cv.html"
        self.assertEqual(_cli([str(cv_path), "-o", str(out)]), 0)
        html = out.read_text(encoding="utf-8")
        self.assertIn("Camille Martin", html)
        self.assertIn("template-modern", html)

    def test_template_override(self):
        cv_path = self.write("cv.json", sample_cv().model_dump_json(by_alias=True))
        html = render_file(cv_path, template="classic")
        self.assertIn("template-classic", html)

    def test_design_override(self):
        cv_path = self.write("cv.json", sample_cv().model_dump_json(by_alias=True))
        wire = design(layout="minimal-grid").model_dump(by_alias=True)
        design_path = self.write("design.json", json.dumps({"result": wire}))
        html = render_file(cv_path, design_path=design_path, scale=0.8)
        self.assertIn("template-unique", html)
        self.assertIn("layout-minimal-grid", html)
        self.assertIn("scale(0.8)", html)

    def test_missing_file(self):
        self.assertEqual(_cli([str(self.tmp / "absent.json")]), 1)

    def test_invalid_json(self):
        self.assertEqual(_cli([str(self.write("cv.json", "{pas du json"))]), 1)

    def test_invalid_cv(self):
        self.assertEqual(_cli([str(self.write("cv.json", '{"templateId": "baroque"}'))]), 1)

    def test_invalid_design(self):
        cv_path = self.write("cv.json", sample_cv().model_dump_json(by_alias=True))
        design_path = self.write("design.json", '{"layout": "diagonal"}')
        self.assertEqual(_cli([str(cv_path), "--design", str(design_path)]), 1)


if __name__ == "__main__":
    unittest.main()
