# tests/test_design_request_builder.py
"""
Unit tests for functions.design_request_builder

Covers:
- Dialog pre-fill from the job title and the canned suggestions
- Request building and local validation of the intent
- Seeded prompt (fresh seed per call, deterministic with a seeded RNG)
- Response schema: closed enums, every field required, camelCase keys
- parse_design_payload: {result} wrapper vs bare config, fenced / prose text,
  schema mismatches and non-objects
"""

from __future__ import annotations

import json
import random
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from functions.design_request_builder import (
    DESIGN_SUGGESTIONS,
    build_design_request,
    build_seeded_design_prompt,
    default_design_prompt,
    design_response_schema,
    new_design_seed,
    parse_design_payload,
)
from functions.utils.errors import DesignParseError, InputValidationError
from schemas.design_schema import LAYOUTS, TITLE_STYLES
from utils_test_support import design


class LoggingTestCase(unittest.TestCase):
    """Base TestCase that prints a readable header per test."""

    def setUp(self) -> None:
        test_name = self._testMethodName
        print("\n" + "=" * 90, file=sys.stderr)
        print(f"🧪 STARTING TEST: {self.__class__.__name__}.{test_name}", file=sys.stderr)
        print("=" * 90, file=sys.stderr)

    def tearDown(self) -> None:
        print("-" * 90 + "\n", file=sys.stderr)


def _wire(**axes) -> dict:
    return design(**axes).model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Client side
# ---------------------------------------------------------------------------

class TestRequestBuilding(LoggingTestCase):
    def test_default_prompt(self):
        self.assertEqual(default_design_prompt(""), "")
        self.assertEqual(default_design_prompt("  "), "")
        self.assertEqual(
            default_design_prompt("Architecte"),
            "Un design professionnel pour un Architecte...",
        )

    def test_suggestions(self):
        self.assertEqual(len(DESIGN_SUGGESTIONS), 5)
        self.assertIn("Tech, mode sombre, police monospace", DESIGN_SUGGESTIONS)

    def test_build_design_request(self):
        request = build_design_request("  Minimaliste, noir et blanc  ")
        self.assertEqual(request.action, "GENERATE_DESIGN")
        self.assertEqual(request.payload, {"description": "Minimaliste, noir et blanc"})

    def test_blank_intent_is_rejected(self):
        for value in ("", "   ", None):
            with self.subTest(value=value):
                with self.assertRaises(InputValidationError):
                    build_design_request(value)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Service side
# ---------------------------------------------------------------------------

class TestPromptAndSchema(LoggingTestCase):
    def test_seed_changes_between_calls(self):
        rng = random.Random(7)
        self.assertNotEqual(new_design_seed(rng), new_design_seed(rng))

    def test_seeded_prompt_is_reproducible_with_rng(self):
        a = build_seeded_design_prompt("Créatif, pastel", random.Random(1))
        b = build_seeded_design_prompt("Créatif, pastel", random.Random(1))
        self.assertEqual(a, b)
        self.assertIn("Créatif, pastel", a)

    def test_schema_requires_every_field(self):
        schema = design_response_schema()
        self.assertEqual(schema["type"], "OBJECT")
        self.assertEqual(
            set(schema["required"]),
            {"layout", "header", "sections", "colors", "fonts", "decorative"},
        )
        self.assertEqual(schema["properties"]["layout"]["enum"], list(LAYOUTS))
        sections = schema["properties"]["sections"]
        self.assertEqual(sections["properties"]["titleStyle"]["enum"], list(TITLE_STYLES))
        self.assertEqual(set(sections["required"]), {"style", "titleStyle", "spacing"})
        decorative = schema["properties"]["decorative"]["properties"]
        self.assertEqual(decorative["useIcons"], {"type": "BOOLEAN"})
        self.assertIn("nameSize", schema["properties"]["header"]["properties"])


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParseDesignPayload(LoggingTestCase):
    def test_wrapped_and_bare_give_same_config(self):
        wire = _wire(layout="asymmetric", header={"style": "banner"})
        wrapped = parse_design_payload({"result": wire})
        bare = parse_design_payload(wire)
        self.assertEqual(wrapped, bare)
        self.assertEqual(bare.layout, "asymmetric")
        self.assertEqual(bare.header.style, "banner")

    def test_snake_case_keys_are_accepted(self):
        config = parse_design_payload(design(layout="minimal-grid").model_dump())
        self.assertEqual(config.layout, "minimal-grid")

    def test_fenced_text_with_prose(self):
        text = "Voici :\n```json\n" + json.dumps(_wire(layout="sidebar-right")) + "\n```\nVoilà"
        self.assertEqual(parse_design_payload(text).layout, "sidebar-right")
        self.assertEqual(parse_design_payload({"result": text}).layout, "sidebar-right")

    def test_prose_braces_before_unfenced_design(self):
        text = (
            "Voici le design {style moderne} demandé :\n"
            + json.dumps(_wire(layout="asymmetric"))
            + "\nBonne chance !"
        )
        self.assertEqual(parse_design_payload(text).layout, "asymmetric")

    def test_json_bytes(self):
        raw = json.dumps({"result": _wire(layout="single-column")}).encode("utf-8")
        self.assertEqual(parse_design_payload(raw).layout, "single-column")

    def test_unknown_enum_value_is_rejected(self):
        wire = _wire()
        wire["layout"] = "diagonal"
        with self.assertRaises(DesignParseError):
            parse_design_payload({"result": wire})

    def test_missing_axis_is_rejected(self):
        wire = _wire()
        del wire["fonts"]
        with self.assertRaises(DesignParseError):
            parse_design_payload(wire)

    def test_non_objects_are_rejected(self):
        for raw in ("pas de design", "[1, 2]", 42, None, ["layout"]):
            with self.subTest(raw=raw):
                with self.assertRaises(DesignParseError):
                    parse_design_payload(raw)

    def test_extra_keys_are_ignored(self):
        wire = _wire()
        wire["comment"] = "joli"
        self.assertEqual(parse_design_payload(wire).layout, "single-column")


if __name__ == "__main__":
    unittest.main()
