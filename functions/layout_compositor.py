# functions/layout_compositor.py

"""
Layout Compositor for the "unique" template.

Places content blocks into the regions of one of five page layouts:

| layout        | regions                          | sidebar / narrow column            | main / wide column                |
|---------------|----------------------------------|------------------------------------|-----------------------------------|
| sidebar-left  | sidebar 30% + main 70%           | contact, summary, skills, education| header, experience                |
| sidebar-right | main 70% + sidebar 30%           | contact, skills, education         | header, summary, experience       |
| single-column | one constrained column           | -                                  | header, summary?, experience, education + skills side by side |
| minimal-grid  | full-width header, then 4/8      | summary, skills (bars), education  | experience                        |
| asymmetric    | 2/3 + tinted 1/3 panel           | contact, skills, education         | oversized header, summary, experience |

Rules applied everywhere:
- contact goes inline in the header only when the layout has no sidebar
- empty collections and an empty summary produce no block at all
- the header block always exists (name and title may be blank)
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List

import structlog

from schemas.cv_schema import CVData, PersonalInfo, Skill
from schemas.internal_schema import (
    CSS,
    Block,
    ComposedPage,
    ContactEntry,
    Region,
    ResolvedStyles,
    SkillEntry,
)
from functions.style_resolver import MAIN_PADDING, resolve_styles
from functions.utils.labels import section_label

logger = structlog.get_logger().bind(module="layout_compositor")

PAGE_WIDTH = "210mm"
PAGE_HEIGHT = "297mm"
SIDEBAR_PADDING = "8mm"

_CONTACT_FIELDS = ("email", "phone", "location", "website")


# ---------------------------------------------------------------------------
# Content helpers (shared with the static templates)
# ---------------------------------------------------------------------------

def skill_bar_width(level: int) -> int:
    """Bar width in percent: level x 20, clamped to [0, 100]."""
    return max(0, min(100, int(level) * 20))


def skill_entries(skills: Iterable[Skill]) -> tuple[SkillEntry, ...]:
    return tuple(
        SkillEntry(id=s.id, name=s.name, level=s.level, width_percent=skill_bar_width(s.level))
        for s in skills
    )


def contact_entries(personal: PersonalInfo) -> tuple[ContactEntry, ...]:
    """Non-empty contact fields in display order."""
    return tuple(
        ContactEntry(kind=field, value=getattr(personal, field))
        for field in _CONTACT_FIELDS
        if getattr(personal, field).strip()
    )


def has_summary(personal: PersonalInfo) -> bool:
    return bool(personal.summary.strip())


# ---------------------------------------------------------------------------
# Block builders
# ---------------------------------------------------------------------------

def _header(cv: CVData, *, inline_contact: bool, inline_summary: bool = False, variant: str = "standard") -> Block:
    p = cv.personal
    return Block(
        kind="header",
        variant=variant,
        title_variant="none",
        name=p.full_name,
        job_title=p.job_title,
        contact=contact_entries(p) if inline_contact else (),
        text=p.summary if inline_summary and has_summary(p) else "",
    )


def _contact(cv: CVData) -> List[Block]:
    entries = contact_entries(cv.personal)
    if not entries:
        return []
    return [Block(kind="contact", variant="stack", title=section_label("contact"), title_variant="label", contact=entries)]


def _summary(cv: CVData, *, variant: str, title_variant: str = "section") -> List[Block]:
    if not has_summary(cv.personal):
        return []
    title = "" if title_variant == "none" else section_label("summary")
    return [Block(kind="summary", variant=variant, title=title, title_variant=title_variant, text=cv.personal.summary)]


def _experience(cv: CVData, *, label: str = "experience") -> List[Block]:
    if not cv.experience:
        return []
    return [Block(kind="experience", variant="items", title=section_label(label), experience=cv.experience)]


def _education(cv: CVData, *, variant: str, title_variant: str = "section") -> List[Block]:
    if not cv.education:
        return []
    return [Block(kind="education", variant=variant, title=section_label("education"), title_variant=title_variant, education=cv.education)]


def _skills(cv: CVData, *, variant: str, title_variant: str = "section") -> List[Block]:
    if not cv.skills:
        return []
    return [Block(kind="skills", variant=variant, title=section_label("skills"), title_variant=title_variant, skills=skill_entries(cv.skills))]


# ---------------------------------------------------------------------------
# Region CSS
# ---------------------------------------------------------------------------

def _column(padding: str, gap: str, extra: CSS | None = None) -> CSS:
    css: CSS = {
        "position": "relative",
        "z-index": "1",
        "display": "flex",
        "flex-direction": "column",
        "gap": gap,
        "padding": padding,
        "box-sizing": "border-box",
        "min-width": "0",
    }
    if extra:
        css.update(extra)
    return css


def _page_css(styles: ResolvedStyles, columns: str) -> CSS:
    css: CSS = {
        "position": "relative",
        "overflow": "hidden",
        "box-sizing": "border-box",
        "width": PAGE_WIDTH,
        "min-height": PAGE_HEIGHT,
        "display": "grid",
        "grid-template-columns": columns,
        "align-items": "stretch",
    }
    css.update(styles.page)
    return css


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------

def _sidebar_left(cv: CVData, s: ResolvedStyles) -> tuple[CSS, tuple[Region, ...]]:
    gap = s.spacing.section_gap
    sidebar = Region(
        name="sidebar",
        css=_column(SIDEBAR_PADDING, gap, s.sidebar.css),
        blocks=tuple(
            _contact(cv)
            + _summary(cv, variant="sidebar", title_variant="label")
            + _skills(cv, variant="chips", title_variant="label")
            + _education(cv, variant="stack", title_variant="label")
        ),
    )
    main = Region(
        name="main",
        css=_column(MAIN_PADDING, gap),
        blocks=tuple([_header(cv, inline_contact=False)] + _experience(cv)),
    )
    return _page_css(s, "30% 70%"), (sidebar, main)


def _sidebar_right(cv: CVData, s: ResolvedStyles) -> tuple[CSS, tuple[Region, ...]]:
    gap = s.spacing.section_gap
    main = Region(
        name="main",
        css=_column(MAIN_PADDING, gap),
        blocks=tuple([_header(cv, inline_contact=False)] + _summary(cv, variant="block") + _experience(cv)),
    )
    sidebar = Region(
        name="sidebar",
        css=_column(SIDEBAR_PADDING, gap, s.sidebar.css),
        blocks=tuple(
            _contact(cv)
            + _skills(cv, variant="chips", title_variant="label")
            + _education(cv, variant="stack", title_variant="label")
        ),
    )
    return _page_css(s, "70% 30%"), (main, sidebar)


def _single_column(cv: CVData, s: ResolvedStyles) -> tuple[CSS, tuple[Region, ...]]:
    centered = s.header.alignment == "center"
    blocks: List[Block] = [_header(cv, inline_contact=True, inline_summary=centered)]
    if not centered:
        blocks += _summary(cv, variant="block")
    blocks += _experience(cv)

    side_by_side = _education(cv, variant="ruled") + _skills(cv, variant="chips")
    if side_by_side:
        blocks.append(Block(kind="pair", variant="columns", title_variant="none", children=tuple(side_by_side)))

    main = Region(
        name="main",
        css=_column(MAIN_PADDING, s.spacing.section_gap, {"width": "100%", "max-width": "186mm", "margin": "0 auto"}),
        blocks=tuple(blocks),
    )
    return _page_css(s, "1fr"), (main,)


def _minimal_grid(cv: CVData, s: ResolvedStyles) -> tuple[CSS, tuple[Region, ...]]:
    gap = s.spacing.section_gap
    header = Region(
        name="header",
        css=_column(f"{MAIN_PADDING} {MAIN_PADDING} 0", gap, {"grid-column": "1 / -1"}),
        blocks=(_header(cv, inline_contact=True),),
    )
    narrow = Region(
        name="sidebar",
        css=_column(f"0 0 {MAIN_PADDING} {MAIN_PADDING}", gap),
        blocks=tuple(
            _summary(cv, variant="block")
            + _skills(cv, variant="bars")
            + _education(cv, variant="stack")
        ),
    )
    wide = Region(
        name="main",
        css=_column(f"0 {MAIN_PADDING} {MAIN_PADDING} 0", gap),
        blocks=tuple(_experience(cv)),
    )
    page = _page_css(s, "4fr 8fr")
    page.update({"column-gap": "10mm", "align-content": "start"})
    return page, (header, narrow, wide)


def _asymmetric(cv: CVData, s: ResolvedStyles) -> tuple[CSS, tuple[Region, ...]]:
    gap = s.spacing.section_gap
    wide = Region(
        name="main",
        css=_column(MAIN_PADDING, gap),
        blocks=tuple(
            [_header(cv, inline_contact=False, variant="oversized")]
            + _summary(cv, variant="accent-rule", title_variant="none")
            + _experience(cv, label="experience_long")
        ),
    )
    panel = Region(
        name="panel",
        css=_column(f"20mm {SIDEBAR_PADDING} {SIDEBAR_PADDING}", gap, s.panel.css),
        blocks=tuple(
            _contact(cv)
            + _skills(cv, variant="chips", title_variant="label")
            + _education(cv, variant="stack", title_variant="label")
        ),
    )
    return _page_css(s, "2fr 1fr"), (wide, panel)


LAYOUTS: Dict[str, Callable[[CVData, ResolvedStyles], tuple[CSS, tuple[Region, ...]]]] = {
    "sidebar-left": _sidebar_left,
    "sidebar-right": _sidebar_right,
    "single-column": _single_column,
    "minimal-grid": _minimal_grid,
    "asymmetric": _asymmetric,
}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def compose_page(cv: CVData, styles: ResolvedStyles | None = None) -> ComposedPage:
    """Arrange the CV content for the resolved layout."""
    styles = styles or resolve_styles(cv)
    page, regions = LAYOUTS[styles.layout](cv, styles)

    composed = ComposedPage(
        layout=styles.layout,
        page=page,
        regions=regions,
        decoration=styles.decoration,
    )
    logger.debug(
        "page_composed",
        layout=styles.layout,
        regions=[r.name for r in regions],
        blocks=[b.kind for b in composed.blocks()],
    )
    return composed


__all__ = [
    "PAGE_WIDTH",
    "PAGE_HEIGHT",
    "skill_bar_width",
    "skill_entries",
    "contact_entries",
    "has_summary",
    "compose_page",
]
