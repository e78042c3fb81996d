# cv_templates/cv_templates.py
"""Template registry and HTML rendering for the CV preview.

Four templates are available (see cv_templates.yaml):

- modern / classic / elegant: fixed layouts; modern and elegant take their
  accent from `CVData.theme_color`, none of them reads `design_config`.
- unique: rendered from the Style Resolver + Layout Compositor output for
  `CVData.design_config` (or the default design when none was generated yet).

All templates share `templates/page.jinja2`: an A4 sheet (210mm x 297mm)
with an on-screen preview scale that is removed for print.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import structlog
import yaml
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from schemas.cv_schema import DEFAULT_THEME_COLOR, CVData, Experience, TemplateId
from functions.layout_compositor import (
    PAGE_HEIGHT,
    PAGE_WIDTH,
    compose_page,
    contact_entries,
    has_summary,
    skill_entries,
)
from functions.style_resolver import FONT_STACKS, resolve_fonts, resolve_styles
from functions.utils.color_utils import WHITE, contrast_ratio, most_legible, parse_color
from functions.utils.common import get_param_section
from functions.utils.labels import (
    JOB_TITLE_PLACEHOLDER,
    NAME_PLACEHOLDER,
    SECTION_LABELS,
    display_or_placeholder,
)

logger = structlog.get_logger().bind(module="cv_templates")


# ---------------------------------------------------------------------------
# Template config model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateConfig:
    """One entry of cv_templates.yaml."""

    template_id: str
    name: str
    file: str
    page_margin: str
    fonts: tuple[str, ...]
    uses_theme_color: bool


# ---------------------------------------------------------------------------
# YAML loading (cv_templates/cv_templates.yaml)
# ---------------------------------------------------------------------------


def _load_templates_from_yaml() -> dict[str, TemplateConfig]:
    yaml_path = Path(__file__).with_name("cv_templates.yaml")
    if not yaml_path.exists():
        raise FileNotFoundError(f"Template YAML not found: {yaml_path}")

    with yaml_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    templates: dict[str, TemplateConfig] = {}
    for template_id, cfg in raw.items():
        if not isinstance(cfg, dict):
            raise ValueError(
                f"Template '{template_id}' must be a mapping, got {type(cfg)}"
            )
        fonts = tuple(str(f) for f in cfg.get("fonts") or ())
        unknown = [f for f in fonts if f not in FONT_STACKS]
        if unknown:
            raise ValueError(f"Template '{template_id}' uses unknown fonts: {unknown}")

        templates[template_id] = TemplateConfig(
            template_id=template_id,
            name=cfg["name"],
            file=cfg["file"],
            page_margin=str(cfg.get("page_margin", "0")),
            fonts=fonts,
            uses_theme_color=bool(cfg.get("uses_theme_color", False)),
        )

    missing = {t.value for t in TemplateId} - set(templates)
    if missing:
        raise ValueError(f"cv_templates.yaml is missing templates: {sorted(missing)}")
    return templates


TEMPLATES: dict[str, TemplateConfig] = _load_templates_from_yaml()

MODERN: TemplateConfig = TEMPLATES[TemplateId.MODERN.value]
CLASSIC: TemplateConfig = TEMPLATES[TemplateId.CLASSIC.value]
ELEGANT: TemplateConfig = TEMPLATES[TemplateId.ELEGANT.value]
UNIQUE: TemplateConfig = TEMPLATES[TemplateId.UNIQUE.value]


def get_template(template_id: str | TemplateId) -> TemplateConfig:
    """Template by id, falling back to MODERN."""
    key = template_id.value if isinstance(template_id, TemplateId) else str(template_id)
    return TEMPLATES.get(key, MODERN)


# ---------------------------------------------------------------------------
# Jinja2 environment
# ---------------------------------------------------------------------------

_TEMPLATES_DIR = Path(__file__).with_name("templates")

_TEMPLATE_ENV = Environment(
    loader=FileSystemLoader(str(_TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml", "jinja2"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def css_filter(declarations: Mapping[str, str] | None) -> str:
    """{"color": "#000", "margin": "0"} -> 'color: #000; margin: 0'."""
    if not declarations:
        return ""
    return "; ".join(f"{prop}: {value}" for prop, value in declarations.items())


def date_range(exp: Experience, separator: str = " - ") -> str:
    parts = [p for p in (exp.start_date.strip(), exp.end_date.strip()) if p]
    return separator.join(parts)


def initial(name: str) -> str:
    """First letter of a name for the avatar ("" when blank)."""
    name = (name or "").strip()
    return name[0].upper() if name else ""


_TEMPLATE_ENV.filters["css"] = css_filter
_TEMPLATE_ENV.filters["date_range"] = date_range
_TEMPLATE_ENV.filters["initial"] = initial


# ---------------------------------------------------------------------------
# Theme color (static templates)
# ---------------------------------------------------------------------------

_SLATE_900 = parse_color("#0f172a")


def theme_palette(theme_color: str) -> dict[str, str]:
    """Colors derived from the user theme color for modern / elegant."""
    color = parse_color(theme_color)
    if color is None:
        logger.info("theme_color_replaced", value=str(theme_color)[:40])
        color = parse_color(DEFAULT_THEME_COLOR)
    color = color.over(WHITE)  # type: ignore[union-attr]

    on_theme = most_legible(color, [WHITE, _SLATE_900])  # type: ignore[list-item]
    # Theme used as text on white must stay readable
    ink = color if contrast_ratio(color, WHITE) >= 3.0 else _SLATE_900
    return {
        "theme": color.hex,
        "on_theme": on_theme.hex,
        "on_theme_soft": on_theme.rgba(0.85),
        "on_theme_faint": on_theme.rgba(0.6),
        "on_theme_rule": on_theme.rgba(0.2),
        "ink": ink.hex,  # type: ignore[union-attr]
        "soft": color.rgba(0.12),
    }


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _preview_scale(preview_scale: float | None) -> float:
    if preview_scale is None:
        preview_scale = get_param_section("rendering").get("preview_scale", 1.0)
    try:
        scale = float(preview_scale)
    except (TypeError, ValueError):
        scale = 1.0
    return scale if scale > 0 else 1.0


def _stylesheet_url(template: TemplateConfig) -> str:
    if not template.fonts:
        return ""
    heading = template.fonts[0]
    body = template.fonts[1] if len(template.fonts) > 1 else heading
    return resolve_fonts(heading, body).stylesheet_url


def build_context(cv: CVData, *, preview_scale: float | None = None) -> dict[str, Any]:
    """Everything a template needs; unique adds `styles` and `page`."""
    template = get_template(cv.template_id)
    personal = cv.personal

    context: dict[str, Any] = {
        "template": template,
        "cv": cv,
        "personal": personal,
        "labels": SECTION_LABELS,
        "display_name": display_or_placeholder(personal.full_name, NAME_PLACEHOLDER),
        "display_job_title": display_or_placeholder(personal.job_title, JOB_TITLE_PLACEHOLDER),
        "document_title": personal.full_name.strip() or "CV",
        "contact": contact_entries(personal),
        "skills": skill_entries(cv.skills),
        "has_summary": has_summary(personal),
        "page_width": PAGE_WIDTH,
        "page_height": PAGE_HEIGHT,
        "preview_scale": _preview_scale(preview_scale),
        "stylesheet_url": _stylesheet_url(template),
    }

    if template.template_id == TemplateId.UNIQUE.value:
        styles = resolve_styles(cv)
        context["styles"] = styles
        context["page"] = compose_page(cv, styles)
        context["stylesheet_url"] = styles.fonts.stylesheet_url
    elif template.uses_theme_color:
        context["colors"] = theme_palette(cv.theme_color)

    return context


def render_cv_html(cv: CVData, *, preview_scale: float | None = None) -> str:
    """Render the selected template for one CV snapshot as a full HTML page."""
    template = get_template(cv.template_id)
    context = build_context(cv, preview_scale=preview_scale)
    html = _TEMPLATE_ENV.get_template(template.file).render(**context)
    logger.debug(
        "cv_rendered",
        template_id=template.template_id,
        layout=context["page"].layout if "page" in context else None,
        length=len(html),
    )
    return html


def save_cv_html(cv: CVData, output_path: str | Path, *, preview_scale: float | None = None) -> Path:
    """Render and write the HTML page; returns the written path."""
    path = Path(output_path)
    path.write_text(render_cv_html(cv, preview_scale=preview_scale), encoding="utf-8")
    logger.info("cv_html_saved", path=str(path), template_id=cv.template_id.value)
    return path


def icon_markup(kind: str) -> Markup:
    """Inline SVG for a contact kind (exposed for the templates' macros)."""
    return Markup(_ICONS.get(kind, ""))


_SVG_OPEN = (
    '<svg class="cv-icon" xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" '
    'stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round" aria-hidden="true">'
)

_ICONS: dict[str, str] = {
    "email": _SVG_OPEN + '<rect x="2" y="4" width="20" height="16" rx="2"/><path d="m22 7-10 6L2 7"/></svg>',
    "phone": _SVG_OPEN + (
        '<path d="M22 16.92v3a2 2 0 0 1-2.18 2 19.79 19.79 0 0 1-8.63-3.07 19.5 19.5 0 0 1-6-6 '
        '19.79 19.79 0 0 1-3.07-8.67A2 2 0 0 1 4.11 2h3a2 2 0 0 1 2 1.72c.13.96.36 1.9.7 2.81'
        'a2 2 0 0 1-.45 2.11L8.09 9.91a16 16 0 0 0 6 6l1.27-1.27a2 2 0 0 1 2.11-.45c.91.34 '
        '1.85.57 2.81.7A2 2 0 0 1 22 16.92z"/></svg>'
    ),
    "location": _SVG_OPEN + '<path d="M20 10c0 6-8 12-8 12s-8-6-8-12a8 8 0 0 1 16 0Z"/><circle cx="12" cy="10" r="3"/></svg>',
    "website": _SVG_OPEN + (
        '<circle cx="12" cy="12" r="10"/><path d="M2 12h20"/>'
        '<path d="M12 2a15.3 15.3 0 0 1 4 10 15.3 15.3 0 0 1-4 10 15.3 15.3 0 0 1-4-10 15.3 15.3 0 0 1 4-10z"/></svg>'
    ),
}

_TEMPLATE_ENV.globals["icon"] = icon_markup
