# functions/utils/color_utils.py
"""
Color parsing and legibility helpers for the style resolver.

Generated designs carry free-form CSS color strings. This module turns them
into RGB(A) values so the resolver can:
- reject strings that are not colors (they are replaced by defaults)
- compute WCAG relative luminance / contrast ratios
- pick the most legible text color for a given fill
- derive translucent tints (`rgba(...)`) without string concatenation

Supported syntax: #rgb, #rgba, #rrggbb, #rrggbbaa, rgb()/rgba(), hsl()/hsla()
(comma or space separated, optional "/ alpha"), and common CSS color names.
"""

from __future__ import annotations

import colorsys
import re
from dataclasses import dataclass
from typing import Iterable

# Common CSS named colors. Anything else is treated as unparseable.
_NAMED_COLORS: dict[str, str] = {
    "black": "#000000",
    "white": "#ffffff",
    "gray": "#808080",
    "grey": "#808080",
    "silver": "#c0c0c0",
    "lightgray": "#d3d3d3",
    "lightgrey": "#d3d3d3",
    "darkgray": "#a9a9a9",
    "darkgrey": "#a9a9a9",
    "dimgray": "#696969",
    "dimgrey": "#696969",
    "gainsboro": "#dcdcdc",
    "whitesmoke": "#f5f5f5",
    "snow": "#fffafa",
    "ivory": "#fffff0",
    "beige": "#f5f5dc",
    "linen": "#faf0e6",
    "red": "#ff0000",
    "darkred": "#8b0000",
    "crimson": "#dc143c",
    "firebrick": "#b22222",
    "tomato": "#ff6347",
    "coral": "#ff7f50",
    "salmon": "#fa8072",
    "pink": "#ffc0cb",
    "hotpink": "#ff69b4",
    "orange": "#ffa500",
    "darkorange": "#ff8c00",
    "gold": "#ffd700",
    "yellow": "#ffff00",
    "khaki": "#f0e68c",
    "green": "#008000",
    "darkgreen": "#006400",
    "forestgreen": "#228b22",
    "seagreen": "#2e8b57",
    "olive": "#808000",
    "lime": "#00ff00",
    "mintcream": "#f5fffa",
    "teal": "#008080",
    "cyan": "#00ffff",
    "aqua": "#00ffff",
    "turquoise": "#40e0d0",
    "blue": "#0000ff",
    "navy": "#000080",
    "darkblue": "#00008b",
    "royalblue": "#4169e1",
    "steelblue": "#4682b4",
    "skyblue": "#87ceeb",
    "lightblue": "#add8e6",
    "aliceblue": "#f0f8ff",
    "indigo": "#4b0082",
    "purple": "#800080",
    "violet": "#ee82ee",
    "magenta": "#ff00ff",
    "fuchsia": "#ff00ff",
    "lavender": "#e6e6fa",
    "plum": "#dda0dd",
    "maroon": "#800000",
    "brown": "#a52a2a",
    "chocolate": "#d2691e",
    "tan": "#d2b48c",
    "slategray": "#708090",
    "slategrey": "#708090",
    "darkslategray": "#2f4f4f",
    "darkslategrey": "#2f4f4f",
    "midnightblue": "#191970",
}

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_RE = re.compile(r"^(rgba?|hsla?)\(\s*([^()]*)\)$", re.IGNORECASE)


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: float = 1.0

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def rgba(self, alpha: float) -> str:
        alpha = max(0.0, min(1.0, alpha))
        return f"rgba({self.r}, {self.g}, {self.b}, {alpha:g})"

    def over(self, base: "Color") -> "Color":
        """Composite this (possibly translucent) color over an opaque base."""
        if self.a >= 1.0:
            return self
        a = self.a
        return Color(
            round(self.r * a + base.r * (1 - a)),
            round(self.g * a + base.g * (1 - a)),
            round(self.b * a + base.b * (1 - a)),
        )


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


def _parse_channel(token: str, scale: int) -> float | None:
    token = token.strip()
    try:
        if token.endswith("%"):
            return float(token[:-1]) / 100.0 * scale
        return float(token)
    except ValueError:
        return None


def _parse_alpha(token: str | None) -> float | None:
    if token is None:
        return 1.0
    value = _parse_channel(token, 1)
    if value is None:
        return None
    return max(0.0, min(1.0, value))


def _split_args(raw: str) -> tuple[list[str], str | None] | None:
    alpha: str | None = None
    if "/" in raw:
        raw, alpha = raw.split("/", 1)
        alpha = alpha.strip()
    if "," in raw:
        parts = [p.strip() for p in raw.split(",")]
    else:
        parts = raw.split()
    if len(parts) == 4 and alpha is None:
        alpha = parts.pop()
    if len(parts) != 3 or any(not p for p in parts):
        return None
    return parts, alpha


def _clamp_byte(value: float) -> int:
    return int(round(max(0.0, min(255.0, value))))


def parse_color(value: str | None) -> Color | None:
    """Parse a CSS color string. Returns None when it is not a color we understand."""
    if not isinstance(value, str):
        return None
    text = value.strip().lower()
    if not text:
        return None

    text = _NAMED_COLORS.get(text, text)

    m = _HEX_RE.match(text)
    if m:
        digits = m.group(1)
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        a = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
        return Color(r, g, b, round(a, 3))

    m = _FUNC_RE.match(text)
    if not m:
        return None

    func = m.group(1).lower()
    split = _split_args(m.group(2))
    if split is None:
        return None
    parts, alpha_token = split
    alpha = _parse_alpha(alpha_token)
    if alpha is None:
        return None

    if func.startswith("rgb"):
        channels = [_parse_channel(p, 255) for p in parts]
        if any(c is None for c in channels):
            return None
        r, g, b = (_clamp_byte(c) for c in channels)  # type: ignore[arg-type]
        return Color(r, g, b, alpha)

    hue_token = parts[0].removesuffix("deg")
    try:
        hue = float(hue_token) % 360.0
    except ValueError:
        return None
    sat = _parse_channel(parts[1], 1)
    light = _parse_channel(parts[2], 1)
    if sat is None or light is None:
        return None
    rf, gf, bf = colorsys.hls_to_rgb(hue / 360.0, max(0.0, min(1.0, light)), max(0.0, min(1.0, sat)))
    return Color(_clamp_byte(rf * 255), _clamp_byte(gf * 255), _clamp_byte(bf * 255), alpha)


def relative_luminance(color: Color) -> float:
    """WCAG 2.x relative luminance of an opaque color."""

    def channel(c: int) -> float:
        s = c / 255.0
        return s / 12.92 if s <= 0.03928 else ((s + 0.055) / 1.055) ** 2.4

    return 0.2126 * channel(color.r) + 0.7152 * channel(color.g) + 0.0722 * channel(color.b)


def contrast_ratio(a: Color, b: Color) -> float:
    la, lb = relative_luminance(a), relative_luminance(b)
    hi, lo = max(la, lb), min(la, lb)
    return (hi + 0.05) / (lo + 0.05)


def is_light(color: Color) -> bool:
    """True when dark text reads better on this color than white text."""
    return contrast_ratio(color, BLACK) >= contrast_ratio(color, WHITE)


def most_legible(
    fill: Color,
    candidates: Iterable[Color],
    *,
    minimum: float = 4.5,
) -> Color:
    """
    Pick the candidate with maximal contrast against `fill`.

    When no candidate reaches `minimum`, black or white (whichever contrasts
    more) is returned instead. Ties keep the earliest candidate.
    """
    best: Color | None = None
    best_ratio = -1.0
    for cand in candidates:
        ratio = contrast_ratio(fill, cand.over(fill))
        if ratio > best_ratio:
            best, best_ratio = cand, ratio

    if best is None or best_ratio < minimum:
        return BLACK if is_light(fill) else WHITE
    return best


def mix(a: Color, b: Color, weight: float) -> Color:
    """Linear blend: weight 0 → a, weight 1 → b."""
    w = max(0.0, min(1.0, weight))
    return Color(
        round(a.r + (b.r - a.r) * w),
        round(a.g + (b.g - a.g) * w),
        round(a.b + (b.b - a.b) * w),
    )
