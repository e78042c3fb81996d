"""CV template registry and HTML rendering."""

from cv_templates.cv_templates import (
    CLASSIC,
    ELEGANT,
    MODERN,
    TEMPLATES,
    UNIQUE,
    build_context,
    get_template,
    render_cv_html,
    save_cv_html,
    theme_palette,
)

__all__ = [
    "CLASSIC",
    "ELEGANT",
    "MODERN",
    "TEMPLATES",
    "UNIQUE",
    "build_context",
    "get_template",
    "render_cv_html",
    "save_cv_html",
    "theme_palette",
]
