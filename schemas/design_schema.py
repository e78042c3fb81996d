# schemas/design_schema.py
"""Closed style descriptor consumed by the "unique" template.

A `DesignConfig` is produced by the generative service and describes the
whole visual treatment of a CV along six axes:

- layout      : where the sidebar / main regions sit on the page
- header      : alignment, container treatment, name scale
- sections    : experience item treatment, title treatment, vertical rhythm
- colors      : free-form CSS colors (primary, secondary, background, text, accent)
- fonts       : heading / body families, from a fixed list
- decorative  : background motif, page frame, contact icons

Every field is required once a config exists. Configs are never patched:
a new generation replaces the previous one wholesale.
"""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

LayoutName = Literal[
    "sidebar-left", "sidebar-right", "single-column", "minimal-grid", "asymmetric"
]
HeaderAlignment = Literal["left", "center", "right"]
HeaderStyle = Literal["clean", "banner", "floating-box", "underlined"]
NameSize = Literal["normal", "large", "huge"]
SectionStyle = Literal["clean", "cards", "left-border", "timeline"]
TitleStyle = Literal["simple", "uppercase-bold", "underlined", "highlighted", "bracketed"]
SectionSpacing = Literal["compact", "normal", "spacious"]
FontName = Literal["Inter", "Merriweather", "Playfair Display", "Roboto Mono", "Lato"]
DecorativeShape = Literal["none", "dots", "geometric", "waves", "tech-lines"]
BorderStyle = Literal["none", "solid", "double", "dashed"]

# Enumerations as plain tuples (for schema building and exhaustive tests)
LAYOUTS: tuple[str, ...] = get_args(LayoutName)
HEADER_ALIGNMENTS: tuple[str, ...] = get_args(HeaderAlignment)
HEADER_STYLES: tuple[str, ...] = get_args(HeaderStyle)
NAME_SIZES: tuple[str, ...] = get_args(NameSize)
SECTION_STYLES: tuple[str, ...] = get_args(SectionStyle)
TITLE_STYLES: tuple[str, ...] = get_args(TitleStyle)
SECTION_SPACINGS: tuple[str, ...] = get_args(SectionSpacing)
FONT_NAMES: tuple[str, ...] = get_args(FontName)
DECORATIVE_SHAPES: tuple[str, ...] = get_args(DecorativeShape)
BORDER_STYLES: tuple[str, ...] = get_args(BorderStyle)


class _DesignModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class HeaderConfig(_DesignModel):
    alignment: HeaderAlignment
    style: HeaderStyle
    name_size: NameSize


class SectionsConfig(_DesignModel):
    style: SectionStyle
    title_style: TitleStyle
    spacing: SectionSpacing


class ColorsConfig(_DesignModel):
    """Free-form color strings; validity is checked by the style resolver."""

    primary: str
    secondary: str
    background: str
    text: str
    accent: str


class FontsConfig(_DesignModel):
    heading: FontName
    body: FontName


class DecorativeConfig(_DesignModel):
    shape: DecorativeShape
    border_style: BorderStyle
    use_icons: bool


class DesignConfig(_DesignModel):
    """Complete, AI-generated visual design for the "unique" template."""

    layout: LayoutName
    header: HeaderConfig
    sections: SectionsConfig
    colors: ColorsConfig
    fonts: FontsConfig
    decorative: DecorativeConfig


# Used whenever the "unique" template is selected before any generation succeeded.
DEFAULT_DESIGN_CONFIG = DesignConfig(
    layout="single-column",
    header=HeaderConfig(alignment="left", style="clean", name_size="large"),
    sections=SectionsConfig(style="clean", title_style="uppercase-bold", spacing="normal"),
    colors=ColorsConfig(
        primary="#000000",
        secondary="#444444",
        background="#ffffff",
        text="#222222",
        accent="#dddddd",
    ),
    fonts=FontsConfig(heading="Inter", body="Inter"),
    decorative=DecorativeConfig(shape="none", border_style="none", use_icons=True),
)
