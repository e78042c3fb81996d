# tests/test_style_resolver.py
"""
Unit tests for functions.style_resolver

Covers:
- Determinism: resolving the same design twice gives identical output
- Color sanitation: unparseable fields fall back per field, translucent
  values are composited, contrast is enforced for body text, banner text
  and highlighted titles
- Every value of every design axis resolves to a complete directive
- Header / title / section / decoration specifics (banner fill, bracketed
  titles, timeline marker, frame border, Google Fonts URL)
"""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from functions.style_resolver import (
    NAME_SIZE_TIERS,
    SPACING_TIERS,
    effective_design,
    resolve_design,
    resolve_palette,
    resolve_styles,
)
from functions.utils.color_utils import contrast_ratio, parse_color
from schemas.design_schema import (
    BORDER_STYLES,
    DECORATIVE_SHAPES,
    DEFAULT_DESIGN_CONFIG,
    HEADER_ALIGNMENTS,
    HEADER_STYLES,
    LAYOUTS,
    NAME_SIZES,
    SECTION_SPACINGS,
    SECTION_STYLES,
    TITLE_STYLES,
    ColorsConfig,
)
from utils_test_support import design, sample_cv


class LoggingTestCase(unittest.TestCase):
    """Base TestCase that prints a readable header per test."""

    def setUp(self) -> None:
        test_name = self._testMethodName
        print("\n" + "=" * 90, file=sys.stderr)
        print(f"🧪 STARTING TEST: {self.__class__.__name__}.{test_name}", file=sys.stderr)
        print("=" * 90, file=sys.stderr)

    def tearDown(self) -> None:
        print("-" * 90 + "\n", file=sys.stderr)


def _colors(**overrides: str) -> ColorsConfig:
    data = DEFAULT_DESIGN_CONFIG.colors.model_dump()
    data.update(overrides)
    return ColorsConfig.model_validate(data)


def _ratio(a: str, b: str) -> float:
    return contrast_ratio(parse_color(a), parse_color(b))


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

class TestPalette(LoggingTestCase):
    def test_unparseable_field_uses_default_for_that_field_only(self):
        p = resolve_palette(_colors(primary="bleu nuit", accent="#f59e0b"))
        self.assertEqual(p.primary, "#000000")
        self.assertEqual(p.accent, "#f59e0b")

    def test_translucent_background_is_composited_on_white(self):
        p = resolve_palette(_colors(background="rgba(0, 0, 0, 0.5)", text="#ffffff"))
        self.assertEqual(p.background, "#808080")

    def test_unreadable_body_text_is_replaced(self):
        p = resolve_palette(_colors(background="#ffffff", text="#fafafa"))
        self.assertGreaterEqual(_ratio(p.text, p.background), 4.5)

    def test_readable_body_text_is_kept(self):
        p = resolve_palette(_colors(text="#1e293b"))
        self.assertEqual(p.text, "#1e293b")

    def test_on_primary_and_on_accent_are_legible(self):
        for fill in ("#ffff00", "#777777", "#0f172a", "#22d3ee", "rgba(255, 0, 0, 0.4)"):
            with self.subTest(fill=fill):
                p = resolve_palette(_colors(primary=fill, accent=fill))
                self.assertGreaterEqual(_ratio(p.on_primary, p.primary), 4.5)
                self.assertGreaterEqual(_ratio(p.on_accent, p.accent), 4.5)

    def test_pale_primary_heading_falls_back(self):
        p = resolve_palette(_colors(primary="#fdfdfd"))
        self.assertGreaterEqual(_ratio(p.heading, p.background), 3.0)


# ---------------------------------------------------------------------------
# Whole design
# ---------------------------------------------------------------------------

class TestResolveDesign(LoggingTestCase):
    def test_resolution_is_deterministic(self):
        cfg = design(layout="asymmetric", decorative={"shape": "waves", "border_style": "double"})
        self.assertEqual(resolve_design(cfg).model_dump_json(), resolve_design(cfg).model_dump_json())

    def test_none_uses_default_design(self):
        self.assertEqual(resolve_design(None), resolve_design(DEFAULT_DESIGN_CONFIG))

    def test_effective_design(self):
        self.assertIs(effective_design(sample_cv()), DEFAULT_DESIGN_CONFIG)
        cfg = design(layout="minimal-grid")
        self.assertIs(effective_design(sample_cv(design_config=cfg)), cfg)
        self.assertEqual(resolve_styles(sample_cv(design_config=cfg)).layout, "minimal-grid")

    def test_every_axis_value_resolves(self):
        axes = {
            "layout": [dict(layout=v) for v in LAYOUTS],
            "alignment": [dict(header={"alignment": v}) for v in HEADER_ALIGNMENTS],
            "header": [dict(header={"style": v}) for v in HEADER_STYLES],
            "name_size": [dict(header={"name_size": v}) for v in NAME_SIZES],
            "section": [dict(sections={"style": v}) for v in SECTION_STYLES],
            "title": [dict(sections={"title_style": v}) for v in TITLE_STYLES],
            "spacing": [dict(sections={"spacing": v}) for v in SECTION_SPACINGS],
            "shape": [dict(decorative={"shape": v}) for v in DECORATIVE_SHAPES],
            "border": [dict(decorative={"border_style": v}) for v in BORDER_STYLES],
        }
        for axis, variants in axes.items():
            for overrides in variants:
                with self.subTest(axis=axis, overrides=overrides):
                    styles = resolve_design(design(**overrides))
                    self.assertTrue(styles.header.name)
                    self.assertTrue(styles.title.css)
                    self.assertTrue(styles.item.container)
                    self.assertIn("font-family", styles.page)

    def test_name_size_and_spacing_tables(self):
        huge = resolve_design(design(header={"name_size": "huge"}))
        self.assertEqual(huge.header.name["font-size"], NAME_SIZE_TIERS["huge"]["font-size"])
        compact = resolve_design(design(sections={"spacing": "compact"}))
        self.assertEqual(compact.spacing, SPACING_TIERS["compact"])
        self.assertEqual(compact.title.css["margin"], "0 0 0.75rem")


class TestElementStyles(LoggingTestCase):
    def test_banner_header_uses_primary_fill(self):
        s = resolve_design(design(header={"style": "banner"}, colors={"primary": "#1e3a8a"}))
        self.assertEqual(s.header.container["background-color"], "#1e3a8a")
        self.assertEqual(s.header.name["color"], s.palette.on_primary)
        self.assertGreaterEqual(_ratio(s.header.name["color"], "#1e3a8a"), 4.5)

    def test_centered_header(self):
        s = resolve_design(design(header={"alignment": "center"}))
        self.assertEqual(s.header.container["align-items"], "center")
        self.assertEqual(s.header.contact["justify-content"], "center")

    def test_highlighted_title_reads_on_accent(self):
        s = resolve_design(design(sections={"title_style": "highlighted"}, colors={"accent": "#facc15"}))
        self.assertEqual(s.title.css["background-color"], "#facc15")
        self.assertGreaterEqual(_ratio(s.title.css["color"], "#facc15"), 4.5)

    def test_bracketed_title(self):
        s = resolve_design(design(sections={"title_style": "bracketed"}))
        self.assertEqual(s.title.brackets, ("[", "]"))
        self.assertIn("color", s.title.text_css)

    def test_timeline_items_have_marker(self):
        s = resolve_design(design(sections={"style": "timeline"}))
        self.assertTrue(s.item.marker)
        self.assertTrue(s.item.meta_inline)
        self.assertFalse(resolve_design(design(sections={"style": "clean"})).item.marker)

    def test_cards_use_date_badge(self):
        s = resolve_design(design(sections={"style": "cards"}))
        self.assertTrue(s.item.date_badge)

    def test_decoration_layers_and_frame(self):
        none = resolve_design(design(decorative={"shape": "none", "border_style": "none"}))
        self.assertEqual(none.decoration.layers, ())
        self.assertEqual(none.decoration.frame, {})

        s = resolve_design(design(decorative={"shape": "geometric", "border_style": "dashed"}))
        self.assertEqual(len(s.decoration.layers), 2)
        for layer in s.decoration.layers:
            self.assertEqual(layer["pointer-events"], "none")
            self.assertEqual(layer["position"], "absolute")
        self.assertTrue(s.decoration.frame["border"].startswith("2px dashed"))

    def test_waves_svg_is_url_encoded(self):
        s = resolve_design(design(decorative={"shape": "waves"}))
        image = s.decoration.layers[0]["background-image"]
        self.assertIn("data:image/svg+xml", image)
        self.assertNotIn("#", image)

    def test_sidebar_left_fill_is_secondary(self):
        s = resolve_design(design(layout="sidebar-left", colors={"secondary": "#0f172a"}))
        self.assertEqual(s.sidebar.fill, "#0f172a")
        self.assertGreaterEqual(_ratio(s.sidebar.text, "#0f172a"), 4.5)

    def test_font_stylesheet_url(self):
        s = resolve_design(design(fonts={"heading": "Playfair Display", "body": "Lato"}))
        self.assertIn("family=Playfair+Display", s.fonts.stylesheet_url)
        self.assertIn("family=Lato", s.fonts.stylesheet_url)
        self.assertTrue(s.fonts.heading_stack.startswith("'Playfair Display'"))
        self.assertEqual(s.page["font-family"], s.fonts.body_stack)


if __name__ == "__main__":
    unittest.main()
