# main.py
"""
Command-line access point for rendering a CV.

Reads a CVData JSON file (camelCase or snake_case keys), renders the selected
template and writes the HTML page to stdout or to --output. The page is sized
for A4 printing; open it in a browser and print to export.

Optional flags override the snapshot before rendering:
    --template {modern,classic,elegant,unique}
    --design path/to/design.json   (applies the design, selects "unique")
    --scale 0.8                    (on-screen preview scale, ignored in print)
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

import structlog
from pydantic import ValidationError

from schemas.cv_schema import CVData, TemplateId
from cv_templates.cv_templates import render_cv_html
from functions.content_model import apply_design, change_template
from functions.design_request_builder import parse_design_payload
from functions.utils.errors import DesignParseError

logger = structlog.get_logger().bind(module="main")


def load_cv(path: Path) -> CVData:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return CVData.model_validate(raw)


def render_file(
    cv_path: Path,
    *,
    template: Optional[str] = None,
    design_path: Optional[Path] = None,
    scale: Optional[float] = None,
) -> str:
    """Load, adjust and render one CV file; returns the HTML page."""
    cv = load_cv(cv_path)
    if template:
        cv = change_template(cv, template)
    if design_path is not None:
        design: Any = json.loads(design_path.read_text(encoding="utf-8"))
        cv = apply_design(cv, parse_design_payload(design))

    logger.info("cli_render_start", path=str(cv_path), template_id=cv.template_id.value)
    return render_cv_html(cv, preview_scale=scale)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cv-forge", description="Render a CV JSON file to HTML.")
    parser.add_argument("cv", type=Path, help="path to a CVData JSON file")
    parser.add_argument("-o", "--output", type=Path, help="write HTML here instead of stdout")
    parser.add_argument("--template", choices=[t.value for t in TemplateId])
    parser.add_argument("--design", type=Path, help="DesignConfig JSON to apply")
    parser.add_argument("--scale", type=float, help="on-screen preview scale")
    return parser


def _cli(argv: Optional[Sequence[str]] = None) -> int:
    args = _parser().parse_args(argv)

    for path in (args.cv, args.design):
        if path is not None and not path.is_file():
            print(f"[ERROR] Input file not found: {path}", file=sys.stderr)
            return 1

    try:
        html = render_file(args.cv, template=args.template, design_path=args.design, scale=args.scale)
    except json.JSONDecodeError as e:
        print(f"[ERROR] Invalid JSON: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"[ERROR] Failed to parse CVData: {e}", file=sys.stderr)
        return 1
    except DesignParseError as e:
        print(f"[ERROR] Invalid design: {e}", file=sys.stderr)
        return 1

    if args.output:
        args.output.write_text(html, encoding="utf-8")
        print(f"[info] wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(html)
    return 0


if __name__ == "__main__":
    raise SystemExit(_cli())
