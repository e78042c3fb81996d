# functions/style_resolver.py

"""
Style Resolver for the "unique" template.

Pure mapping DesignConfig -> ResolvedStyles. Each style axis has one total
dispatch table (name size, spacing, title style, section style, header style,
decorative shape, border style), so every enum combination produces a
complete set of CSS declarations.

Colors:
- each palette field is parsed independently; an unparseable value is
  replaced by the default palette's value for that field
- translucent inputs are composited over the (opaque) background
- contrast is enforced for body text on background, banner text on primary,
  sidebar / panel text on their fill and highlighted titles on accent, using
  WCAG relative luminance (black/white fallback when nothing else reads)
"""

from __future__ import annotations

from typing import Callable, Dict
from urllib.parse import quote

import structlog

from schemas.cv_schema import CVData
from schemas.design_schema import DEFAULT_DESIGN_CONFIG, ColorsConfig, DesignConfig
from schemas.internal_schema import (
    CSS,
    DecorationDirective,
    ExperienceItemDirective,
    FontDirective,
    HeaderDirective,
    Palette,
    RegionFill,
    ResolvedStyles,
    SkillDirective,
    SpacingDirective,
    TitleDirective,
)
from functions.utils.color_utils import (
    WHITE,
    Color,
    contrast_ratio,
    mix,
    most_legible,
    parse_color,
)

logger = structlog.get_logger().bind(module="style_resolver")

# WCAG AA thresholds
BODY_CONTRAST = 4.5
LARGE_TEXT_CONTRAST = 3.0

# Horizontal padding of main regions; banner headers bleed into it.
MAIN_PADDING = "12mm"


# ---------------------------------------------------------------------------
# Per-axis tables
# ---------------------------------------------------------------------------

NAME_SIZE_TIERS: Dict[str, CSS] = {
    "normal": {"font-size": "1.875rem", "letter-spacing": "0"},
    "large": {"font-size": "2.25rem", "letter-spacing": "-0.025em"},
    "huge": {"font-size": "3.75rem", "letter-spacing": "-0.05em"},
}

SPACING_TIERS: Dict[str, SpacingDirective] = {
    "compact": SpacingDirective(tier="compact", section_gap="1.5rem", item_gap="1rem", title_gap="0.75rem"),
    "normal": SpacingDirective(tier="normal", section_gap="2rem", item_gap="1.5rem", title_gap="1rem"),
    "spacious": SpacingDirective(tier="spacious", section_gap="3rem", item_gap="2.5rem", title_gap="1.25rem"),
}

FONT_STACKS: Dict[str, str] = {
    "Inter": "'Inter', system-ui, -apple-system, 'Segoe UI', sans-serif",
    "Merriweather": "'Merriweather', Georgia, 'Times New Roman', serif",
    "Playfair Display": "'Playfair Display', Georgia, serif",
    "Roboto Mono": "'Roboto Mono', ui-monospace, 'SFMono-Regular', monospace",
    "Lato": "'Lato', 'Helvetica Neue', Arial, sans-serif",
}

FRAME_BORDERS: Dict[str, str] = {
    "none": "",
    "solid": "2px solid",
    "double": "4px double",
    "dashed": "2px dashed",
}

ALIGN_ITEMS: Dict[str, str] = {
    "left": "flex-start",
    "center": "center",
    "right": "flex-end",
}

_GOOGLE_FONTS = "https://fonts.googleapis.com/css2"
_DEFAULT_COLORS = DEFAULT_DESIGN_CONFIG.colors


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------

def _sanitize_colors(colors: ColorsConfig) -> Dict[str, Color]:
    """Parse each palette field, substituting the default field on failure."""
    parsed: Dict[str, Color] = {}
    for field in ("background", "primary", "secondary", "text", "accent"):
        raw = getattr(colors, field)
        color = parse_color(raw)
        if color is None:
            logger.info("design_color_replaced", field=field, value=str(raw)[:40])
            color = parse_color(getattr(_DEFAULT_COLORS, field))
        parsed[field] = color  # type: ignore[assignment]

    # Background is composited on paper; the rest on the background.
    parsed["background"] = parsed["background"].over(WHITE)
    for field in ("primary", "secondary", "text", "accent"):
        parsed[field] = parsed[field].over(parsed["background"])
    return parsed


def _ink(color: Color, fill: Color, fallback: Color, minimum: float) -> Color:
    """`color` when it reads on `fill`, else the most legible of fallback/black/white."""
    if contrast_ratio(color, fill) >= minimum:
        return color
    return most_legible(fill, [fallback], minimum=minimum)


def resolve_palette(colors: ColorsConfig) -> Palette:
    c = _sanitize_colors(colors)
    bg = c["background"]
    text = _ink(c["text"], bg, c["text"], BODY_CONTRAST)

    return Palette(
        primary=c["primary"].hex,
        secondary=c["secondary"].hex,
        background=bg.hex,
        text=text.hex,
        accent=c["accent"].hex,
        heading=_ink(c["primary"], bg, text, LARGE_TEXT_CONTRAST).hex,
        muted=_ink(c["secondary"], bg, text, LARGE_TEXT_CONTRAST).hex,
        on_primary=most_legible(c["primary"], [bg, text]).hex,
        on_accent=most_legible(c["accent"], [bg, text]).hex,
    )


def _rgba(hex_value: str, alpha: float) -> str:
    color = parse_color(hex_value)
    return color.rgba(alpha) if color else hex_value


# ---------------------------------------------------------------------------
# Fonts / spacing
# ---------------------------------------------------------------------------

def resolve_fonts(heading: str, body: str) -> FontDirective:
    families = [heading] if heading == body else [heading, body]
    query = "&".join(
        "family=" + quote(name).replace("%20", "+") + ":wght@400;500;600;700;900"
        for name in families
    )
    return FontDirective(
        heading_family=heading,
        body_family=body,
        heading_stack=FONT_STACKS[heading],
        body_stack=FONT_STACKS[body],
        stylesheet_url=f"{_GOOGLE_FONTS}?{query}&display=swap",
    )


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------

def _header_clean(p: Palette) -> CSS:
    return {}


def _header_banner(p: Palette) -> CSS:
    return {
        "background-color": p.primary,
        "color": p.on_primary,
        "margin": f"-{MAIN_PADDING} -{MAIN_PADDING} 0",
        "padding": f"2rem {MAIN_PADDING}",
    }


def _header_floating_box(p: Palette) -> CSS:
    return {
        "background-color": "#ffffff",
        "color": most_legible(WHITE, [parse_color(p.text) or WHITE]).hex,
        "padding": "2rem",
        "border-radius": "12px",
        "box-shadow": "0 10px 25px rgba(0, 0, 0, 0.12)",
    }


def _header_underlined(p: Palette) -> CSS:
    return {
        "border-bottom": f"2px solid {p.accent}",
        "padding-bottom": "1.5rem",
    }


HEADER_STYLES: Dict[str, Callable[[Palette], CSS]] = {
    "clean": _header_clean,
    "banner": _header_banner,
    "floating-box": _header_floating_box,
    "underlined": _header_underlined,
}


def resolve_header(config: DesignConfig, p: Palette, fonts: FontDirective) -> HeaderDirective:
    header = config.header
    style_css = HEADER_STYLES[header.style](p)

    container: CSS = {
        "display": "flex",
        "flex-direction": "column",
        "align-items": ALIGN_ITEMS[header.alignment],
        "text-align": header.alignment,
        "position": "relative",
        "z-index": "1",
    }
    container.update(style_css)

    # Text colors inside the header depend on its fill
    if header.style == "banner":
        name_color = title_color = meta_color = p.on_primary
    elif header.style == "floating-box":
        box = WHITE
        name_color = style_css["color"]
        title_color = _ink(parse_color(p.heading) or WHITE, box, parse_color(name_color) or WHITE, LARGE_TEXT_CONTRAST).hex
        meta_color = _ink(parse_color(p.muted) or WHITE, box, parse_color(name_color) or WHITE, LARGE_TEXT_CONTRAST).hex
    else:
        name_color, title_color, meta_color = p.text, p.heading, p.muted

    name: CSS = {
        "font-family": fonts.heading_stack,
        "font-weight": "700",
        "line-height": "1",
        "margin": "0 0 0.5rem",
        "color": name_color,
    }
    name.update(NAME_SIZE_TIERS[header.name_size])

    oversized: CSS = dict(name)
    oversized.update({"font-weight": "900", "color": p.heading})

    return HeaderDirective(
        alignment=header.alignment,
        style=header.style,
        name_size=header.name_size,
        container=container,
        name=name,
        oversized_name=oversized,
        title={
            "font-size": "1.25rem",
            "font-weight": "500",
            "margin": "0",
            "min-height": "1.5rem",
            "color": title_color,
        },
        contact={
            "display": "flex",
            "flex-wrap": "wrap",
            "gap": "0.5rem 1rem",
            "justify-content": ALIGN_ITEMS[header.alignment],
            "margin-top": "1rem",
            "font-size": "0.85rem",
            "color": meta_color,
        },
        summary={
            "margin": "1.5rem 0 0",
            "max-width": "32rem",
            "font-size": "0.875rem",
            "line-height": "1.6",
            "color": name_color,
        },
    )


# ---------------------------------------------------------------------------
# Section titles
# ---------------------------------------------------------------------------

def _title_base(p: Palette, fonts: FontDirective, spacing: SpacingDirective) -> CSS:
    return {
        "font-family": fonts.heading_stack,
        "color": p.heading,
        "margin": f"0 0 {spacing.title_gap}",
    }


def _title_simple(p: Palette, fonts: FontDirective, spacing: SpacingDirective) -> TitleDirective:
    css = _title_base(p, fonts, spacing)
    css.update({"font-size": "1.25rem", "font-weight": "600"})
    return TitleDirective(style="simple", css=css)


def _title_uppercase_bold(p: Palette, fonts: FontDirective, spacing: SpacingDirective) -> TitleDirective:
    css = _title_base(p, fonts, spacing)
    css.update({
        "font-size": "0.875rem",
        "font-weight": "700",
        "text-transform": "uppercase",
        "letter-spacing": "0.1em",
    })
    return TitleDirective(style="uppercase-bold", css=css)


def _title_underlined(p: Palette, fonts: FontDirective, spacing: SpacingDirective) -> TitleDirective:
    css = _title_base(p, fonts, spacing)
    css.update({
        "font-size": "1.125rem",
        "font-weight": "700",
        "border-bottom": f"2px solid {p.accent}",
        "padding-bottom": "0.25rem",
    })
    return TitleDirective(style="underlined", css=css)


def _title_highlighted(p: Palette, fonts: FontDirective, spacing: SpacingDirective) -> TitleDirective:
    css = _title_base(p, fonts, spacing)
    css.update({
        "display": "inline-block",
        "font-size": "1.125rem",
        "font-weight": "700",
        "padding": "0.25rem 0.5rem",
        "background-color": p.accent,
        "color": p.on_accent,
    })
    return TitleDirective(style="highlighted", css=css)


def _title_bracketed(p: Palette, fonts: FontDirective, spacing: SpacingDirective) -> TitleDirective:
    css = _title_base(p, fonts, spacing)
    css.update({"font-size": "1.25rem", "font-weight": "700", "text-align": "center"})
    css.pop("color")
    return TitleDirective(
        style="bracketed",
        css=css,
        text_css={"color": p.heading},
        bracket_css={"color": p.muted},
        brackets=("[", "]"),
    )


TITLE_STYLES: Dict[str, Callable[[Palette, FontDirective, SpacingDirective], TitleDirective]] = {
    "simple": _title_simple,
    "uppercase-bold": _title_uppercase_bold,
    "underlined": _title_underlined,
    "highlighted": _title_highlighted,
    "bracketed": _title_bracketed,
}


# ---------------------------------------------------------------------------
# Experience items
# ---------------------------------------------------------------------------

def _item_parts(p: Palette, fonts: FontDirective) -> Dict[str, CSS]:
    return {
        "role": {
            "font-family": fonts.heading_stack,
            "font-size": "1.125rem",
            "font-weight": "700",
            "margin": "0",
            "color": p.text,
        },
        "company": {"font-size": "0.875rem", "font-weight": "600", "color": p.heading},
        "dates": {"font-size": "0.8rem", "font-weight": "500", "color": p.muted, "white-space": "nowrap"},
        "description": {
            "font-size": "0.875rem",
            "line-height": "1.6",
            "white-space": "pre-wrap",
            "margin": "0.5rem 0 0",
        },
    }


def _item_clean(p: Palette, fonts: FontDirective) -> ExperienceItemDirective:
    return ExperienceItemDirective(style="clean", container={"position": "relative"}, **_item_parts(p, fonts))


def _item_left_border(p: Palette, fonts: FontDirective) -> ExperienceItemDirective:
    return ExperienceItemDirective(
        style="left-border",
        container={"position": "relative", "border-left": f"4px solid {p.primary}", "padding-left": "1rem"},
        **_item_parts(p, fonts),
    )


def _item_cards(p: Palette, fonts: FontDirective) -> ExperienceItemDirective:
    bg = parse_color(p.background) or WHITE
    text = parse_color(p.text) or WHITE
    parts = _item_parts(p, fonts)
    parts["dates"] = {
        "font-size": "0.75rem",
        "font-weight": "700",
        "padding": "0.125rem 0.5rem",
        "border-radius": "4px",
        "background-color": _rgba(p.primary, 0.12),
        "color": p.heading,
        "white-space": "nowrap",
    }
    parts["company"] = {"font-size": "0.875rem", "font-weight": "500", "color": p.muted}
    return ExperienceItemDirective(
        style="cards",
        container={
            "position": "relative",
            "padding": "1.25rem",
            "border-radius": "8px",
            "border": f"1px solid {_rgba(p.accent, 0.25)}",
            "background-color": mix(bg, text, 0.04).hex,
            "box-shadow": "0 1px 2px rgba(0, 0, 0, 0.06)",
        },
        date_badge=True,
        **parts,
    )


def _item_timeline(p: Palette, fonts: FontDirective) -> ExperienceItemDirective:
    parts = _item_parts(p, fonts)
    parts["company"] = {"font-size": "0.875rem", "color": p.muted, "margin": "0.25rem 0 0"}
    parts["dates"] = {"color": p.muted}
    return ExperienceItemDirective(
        style="timeline",
        container={"position": "relative", "border-left": f"2px solid {p.accent}", "padding-left": "1.5rem"},
        marker={
            "position": "absolute",
            "left": "-5px",
            "top": "0.4rem",
            "width": "8px",
            "height": "8px",
            "border-radius": "50%",
            "background-color": p.primary,
        },
        meta_inline=True,
        **parts,
    )


SECTION_STYLES: Dict[str, Callable[[Palette, FontDirective], ExperienceItemDirective]] = {
    "clean": _item_clean,
    "left-border": _item_left_border,
    "cards": _item_cards,
    "timeline": _item_timeline,
}


# ---------------------------------------------------------------------------
# Decorations
# ---------------------------------------------------------------------------

def _layer(**props: str) -> CSS:
    css: CSS = {"position": "absolute", "pointer-events": "none", "z-index": "0"}
    css.update({k.replace("_", "-"): v for k, v in props.items()})
    return css


def _decor_none(p: Palette) -> tuple[CSS, ...]:
    return ()


def _decor_dots(p: Palette) -> tuple[CSS, ...]:
    return (
        _layer(
            top="0", right="0", width="200px", height="200px", opacity="0.1",
            background_image=f"radial-gradient({p.primary} 1px, transparent 1px)",
            background_size="10px 10px",
        ),
    )


def _decor_geometric(p: Palette) -> tuple[CSS, ...]:
    return (
        _layer(
            top="-50px", left="-50px", width="200px", height="200px",
            border_radius="50%", background_color=p.accent, opacity="0.1",
        ),
        _layer(
            bottom="100px", right="-50px", width="150px", height="150px",
            transform="rotate(45deg)", background_color=p.primary, opacity="0.05",
        ),
    )


def _decor_tech_lines(p: Palette) -> tuple[CSS, ...]:
    return (
        _layer(top="0", bottom="0", left="20px", width="1px", background_color=p.accent, opacity="0.3"),
        _layer(top="10%", left="18px", width="5px", height="5px", background_color=p.primary, opacity="0.6"),
        _layer(bottom="20%", left="18px", width="5px", height="5px", background_color=p.primary, opacity="0.6"),
    )


def _wave_svg(fill: str) -> str:
    svg = (
        "<svg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 1200 120' preserveAspectRatio='none'>"
        f"<path fill='{fill}' d='M0,64 C150,112 350,16 600,56 C850,96 1050,24 1200,60 L1200,120 L0,120 Z'/>"
        "</svg>"
    )
    return "data:image/svg+xml;charset=utf-8," + quote(svg, safe="")


def _decor_waves(p: Palette) -> tuple[CSS, ...]:
    return (
        _layer(
            left="0", right="0", bottom="0", height="90px", opacity="0.12",
            background_image=f"url(\"{_wave_svg(p.primary)}\")",
            background_size="100% 100%",
            background_repeat="no-repeat",
        ),
    )


DECORATIVE_SHAPES: Dict[str, Callable[[Palette], tuple[CSS, ...]]] = {
    "none": _decor_none,
    "dots": _decor_dots,
    "geometric": _decor_geometric,
    "waves": _decor_waves,
    "tech-lines": _decor_tech_lines,
}


def resolve_decoration(config: DesignConfig, p: Palette) -> DecorationDirective:
    decorative = config.decorative
    border = FRAME_BORDERS[decorative.border_style]
    frame: CSS = {}
    if border:
        frame = _layer(inset="6mm", border=f"{border} {p.accent}")
    return DecorationDirective(
        shape=decorative.shape,
        layers=DECORATIVE_SHAPES[decorative.shape](p),
        frame=frame,
    )


# ---------------------------------------------------------------------------
# Regions / skills
# ---------------------------------------------------------------------------

def _region_fill(fill: Color, p: Palette) -> RegionFill:
    text = most_legible(fill, [parse_color(p.background) or WHITE, parse_color(p.text) or WHITE])
    return RegionFill(
        fill=fill.hex,
        text=text.hex,
        css={"background-color": fill.hex, "color": text.hex},
        label={
            "font-size": "0.75rem",
            "font-weight": "700",
            "text-transform": "uppercase",
            "letter-spacing": "0.08em",
            "margin": "0 0 0.75rem",
            "color": text.rgba(0.75),
        },
    )


def resolve_sidebar(layout: str, p: Palette) -> RegionFill:
    """Sidebar fill: secondary for sidebar-left, a faint tint of the page otherwise."""
    bg = parse_color(p.background) or WHITE
    if layout == "sidebar-left":
        fill = parse_color(p.secondary) or bg
    else:
        fill = mix(bg, parse_color(p.text) or bg, 0.03)
    region = _region_fill(fill, p)
    if layout == "sidebar-right":
        css = dict(region.css)
        css["border-left"] = f"1px solid {p.accent}"
        region = region.model_copy(update={"css": css})
    return region


def resolve_panel(p: Palette) -> RegionFill:
    """Tinted panel behind the narrow column of the asymmetric layout."""
    bg = parse_color(p.background) or WHITE
    accent = parse_color(p.accent) or bg
    fill = Color(accent.r, accent.g, accent.b, 0.1).over(bg)
    return _region_fill(fill, p)


def resolve_skills(p: Palette) -> SkillDirective:
    return SkillDirective(
        chip={
            "display": "inline-block",
            "padding": "0.125rem 0.5rem",
            "margin": "0 0.375rem 0.375rem 0",
            "font-size": "0.75rem",
            "border-radius": "4px",
            "border": f"1px solid {_rgba(p.accent, 0.6)}",
            "background-color": "rgba(127, 127, 127, 0.08)",
            "color": "inherit",
        },
        bar_row={
            "display": "flex",
            "justify-content": "space-between",
            "align-items": "center",
            "font-size": "0.875rem",
            "padding-bottom": "0.25rem",
            "border-bottom": f"1px solid {p.accent}",
        },
        bar_track={
            "width": "3rem",
            "height": "4px",
            "border-radius": "9999px",
            "overflow": "hidden",
            "background-color": _rgba(p.text, 0.15),
        },
        bar_fill={"height": "100%", "background-color": p.primary},
    )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def effective_design(cv: CVData) -> DesignConfig:
    """Design the "unique" template renders with: stored config or the default."""
    return cv.design_config or DEFAULT_DESIGN_CONFIG


def resolve_design(config: DesignConfig | None) -> ResolvedStyles:
    """Resolve every derived visual value for one DesignConfig (None -> default)."""
    config = config or DEFAULT_DESIGN_CONFIG

    palette = resolve_palette(config.colors)
    fonts = resolve_fonts(config.fonts.heading, config.fonts.body)
    spacing = SPACING_TIERS[config.sections.spacing]

    styles = ResolvedStyles(
        layout=config.layout,
        palette=palette,
        fonts=fonts,
        spacing=spacing,
        header=resolve_header(config, palette, fonts),
        title=TITLE_STYLES[config.sections.title_style](palette, fonts, spacing),
        item=SECTION_STYLES[config.sections.style](palette, fonts),
        skills=resolve_skills(palette),
        sidebar=resolve_sidebar(config.layout, palette),
        panel=resolve_panel(palette),
        decoration=resolve_decoration(config, palette),
        education_rule={"border-left": f"2px solid {palette.accent}", "padding-left": "0.75rem"},
        page={
            "background-color": palette.background,
            "color": palette.text,
            "font-family": fonts.body_stack,
        },
        use_icons=config.decorative.use_icons,
    )
    logger.debug(
        "design_resolved",
        layout=config.layout,
        header_style=config.header.style,
        title_style=config.sections.title_style,
        section_style=config.sections.style,
        shape=config.decorative.shape,
    )
    return styles


def resolve_styles(cv: CVData) -> ResolvedStyles:
    return resolve_design(effective_design(cv))


__all__ = [
    "NAME_SIZE_TIERS",
    "SPACING_TIERS",
    "FONT_STACKS",
    "effective_design",
    "resolve_design",
    "resolve_styles",
    "resolve_palette",
]
