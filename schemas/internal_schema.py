"""Internal rendering schemas.

These models are not part of the wire contract. They carry the output of the
two pure rendering stages:

1. **Style Resolver** (`functions.style_resolver`) turns a DesignConfig into
   `ResolvedStyles`: every color, font stack, spacing value and per-element
   CSS declaration the templates need. Nothing downstream reads the raw
   DesignConfig again.

2. **Layout Compositor** (`functions.layout_compositor`) arranges content into
   a `ComposedPage`: a grid of `Region`s, each holding ordered `Block`s.
   Empty sections never become blocks, so templates never have to decide
   whether to print a heading.

CSS is kept as ordered `dict[str, str]` (property -> value) and serialized by
the `css` Jinja filter. Insertion order is fixed by the resolver, which keeps
two resolutions of the same input byte-identical.
"""

from __future__ import annotations

from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from schemas.cv_schema import Education, Experience

CSS = Dict[str, str]


class _Directive(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Style Resolver output
# ---------------------------------------------------------------------------


class Palette(_Directive):
    """Sanitized, contrast-checked colors (all opaque hex strings).

    Attributes:
        primary / secondary / background / text / accent:
            Design colors after parsing. Unparseable inputs are replaced by
            the default palette value for the same field.
        heading:
            Primary when it reads on the background, else a legible fallback.
        muted:
            Secondary when it reads on the background, else body text.
        on_primary:
            Text color over a primary fill (banner header).
        on_accent:
            Text color over an accent fill (highlighted titles).
    """

    primary: str
    secondary: str
    background: str
    text: str
    accent: str
    heading: str
    muted: str
    on_primary: str
    on_accent: str


class FontDirective(_Directive):
    heading_family: str
    body_family: str
    heading_stack: str
    body_stack: str
    stylesheet_url: str


class SpacingDirective(_Directive):
    tier: str
    section_gap: str
    item_gap: str
    title_gap: str


class HeaderDirective(_Directive):
    alignment: str
    style: str
    name_size: str
    container: CSS
    name: CSS
    oversized_name: CSS
    title: CSS
    contact: CSS
    summary: CSS


class TitleDirective(_Directive):
    """Section title treatment; `brackets` is set only for the bracketed style."""

    style: str
    css: CSS
    text_css: CSS = Field(default_factory=dict)
    bracket_css: CSS = Field(default_factory=dict)
    brackets: Optional[Tuple[str, str]] = None


class ExperienceItemDirective(_Directive):
    style: str
    container: CSS
    role: CSS
    company: CSS
    dates: CSS
    description: CSS
    marker: CSS = Field(default_factory=dict)
    date_badge: bool = False
    meta_inline: bool = False


class RegionFill(_Directive):
    """Background treatment of a non-main region and the text that reads on it."""

    fill: str
    text: str
    css: CSS
    label: CSS


class SkillDirective(_Directive):
    chip: CSS
    bar_row: CSS
    bar_track: CSS
    bar_fill: CSS


class DecorationDirective(_Directive):
    shape: str
    layers: Tuple[CSS, ...] = ()
    frame: CSS = Field(default_factory=dict)


class ResolvedStyles(_Directive):
    """Everything the "unique" template needs, derived from one DesignConfig."""

    layout: str
    palette: Palette
    fonts: FontDirective
    spacing: SpacingDirective
    header: HeaderDirective
    title: TitleDirective
    item: ExperienceItemDirective
    skills: SkillDirective
    sidebar: RegionFill
    panel: RegionFill
    decoration: DecorationDirective
    education_rule: CSS
    page: CSS
    use_icons: bool


# ---------------------------------------------------------------------------
# Layout Compositor output
# ---------------------------------------------------------------------------

BlockKind = Literal["header", "contact", "summary", "experience", "education", "skills", "pair"]
RegionName = Literal["header", "sidebar", "main", "panel"]
ContactKind = Literal["email", "phone", "location", "website"]


class ContactEntry(_Directive):
    kind: ContactKind
    value: str


class SkillEntry(_Directive):
    id: str
    name: str
    level: int
    width_percent: int


class Block(_Directive):
    """One renderable unit placed in a region.

    `variant` selects the markup inside a kind:
      - header: "standard" | "oversized"
      - contact: "stack"
      - summary: "inline" | "block" | "sidebar" | "accent-rule"
      - skills: "chips" | "bars"
      - education: "stack" | "ruled"
      - experience: "items"
      - pair: "columns" (children rendered side by side)
    `title_variant` is "section" (design title treatment), "label" (small
    region label) or "none".
    """

    kind: BlockKind
    variant: str = "standard"
    title: str = ""
    title_variant: Literal["section", "label", "none"] = "section"
    name: str = ""
    job_title: str = ""
    text: str = ""
    contact: Tuple[ContactEntry, ...] = ()
    experience: Tuple[Experience, ...] = ()
    education: Tuple[Education, ...] = ()
    skills: Tuple[SkillEntry, ...] = ()
    children: Tuple["Block", ...] = ()


class Region(_Directive):
    name: RegionName
    css: CSS
    blocks: Tuple[Block, ...] = ()


class ComposedPage(_Directive):
    layout: str
    page: CSS
    regions: Tuple[Region, ...]
    decoration: DecorationDirective

    def blocks(self) -> Tuple[Block, ...]:
        """All blocks in document order, pair children flattened."""
        out: list[Block] = []
        for region in self.regions:
            for block in region.blocks:
                out.append(block)
                out.extend(block.children)
        return tuple(out)


Block.model_rebuild()
