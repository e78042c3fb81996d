# functions/design_request_builder.py

"""
Generation Request Builder for AI designs.

Client side:
- pre-fills the design intent from the current job title
- validates the intent and builds the GENERATE_DESIGN request

Service side:
- builds the seeded art-direction prompt
- exposes the DesignConfig response schema (every field required, enums closed)

Both sides:
- `parse_design_payload` accepts `{result: DesignConfig}`, a bare DesignConfig,
  or text that embeds the JSON in a fenced / prose wrapper. Anything else
  raises DesignParseError.
"""

from __future__ import annotations

import json
import random
from typing import Any, Dict

import structlog
from pydantic import ValidationError

from schemas.design_schema import (
    BORDER_STYLES,
    DECORATIVE_SHAPES,
    DesignConfig,
    FONT_NAMES,
    HEADER_ALIGNMENTS,
    HEADER_STYLES,
    LAYOUTS,
    NAME_SIZES,
    SECTION_SPACINGS,
    SECTION_STYLES,
    TITLE_STYLES,
)
from schemas.generation_schema import AIActionType, GenerationRequest
from functions.utils.errors import DesignParseError, InputValidationError
from functions.utils.json_recovery import parse_json_object
from functions.utils.prompts_builder import build_design_prompt

logger = structlog.get_logger().bind(module="design_request_builder")

# Canned intents offered by the design dialog
DESIGN_SUGGESTIONS: tuple[str, ...] = (
    "Minimaliste, noir et blanc, police clean",
    "Professionnel, bleu marine, avec sidebar",
    "Créatif, couleurs pastel, layout grille",
    "Élégant, vert forêt, police avec serif",
    "Tech, mode sombre, police monospace",
)


# ---------------------------------------------------------------------------
# Client side
# ---------------------------------------------------------------------------

def default_design_prompt(job_title: str) -> str:
    """Intent used to pre-fill an empty dialog; "" when there is no job title."""
    job_title = (job_title or "").strip()
    if not job_title:
        return ""
    return f"Un design professionnel pour un {job_title}..."


def build_design_request(description: str) -> GenerationRequest:
    """Validate the free-text intent and wrap it as a GENERATE_DESIGN request."""
    text = (description or "").strip()
    if not text:
        raise InputValidationError("Décrivez le style souhaité avant de générer un design.")
    return GenerationRequest(
        action=AIActionType.GENERATE_DESIGN.value,
        payload={"description": text},
    )


# ---------------------------------------------------------------------------
# Service side
# ---------------------------------------------------------------------------

def new_design_seed(rng: random.Random | None = None) -> str:
    """Fresh random seed for a design prompt."""
    value = (rng or random).random()
    return f"{value:.8f}"


def build_seeded_design_prompt(description: str, rng: random.Random | None = None) -> str:
    return build_design_prompt(description, new_design_seed(rng))


def _enum(values: tuple[str, ...]) -> Dict[str, Any]:
    return {"type": "STRING", "enum": list(values)}


def _object(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "OBJECT",
        "properties": properties,
        "required": list(properties),
    }


def design_response_schema() -> Dict[str, Any]:
    """
    Response schema for structured generation (Gemini OpenAPI subset).

    Keys use the camelCase wire names of DesignConfig.
    """
    color = {"type": "STRING"}
    return _object(
        {
            "layout": _enum(LAYOUTS),
            "header": _object(
                {
                    "alignment": _enum(HEADER_ALIGNMENTS),
                    "style": _enum(HEADER_STYLES),
                    "nameSize": _enum(NAME_SIZES),
                }
            ),
            "sections": _object(
                {
                    "style": _enum(SECTION_STYLES),
                    "titleStyle": _enum(TITLE_STYLES),
                    "spacing": _enum(SECTION_SPACINGS),
                }
            ),
            "colors": _object(
                {
                    "primary": color,
                    "secondary": color,
                    "background": color,
                    "text": color,
                    "accent": color,
                }
            ),
            "fonts": _object(
                {
                    "heading": _enum(FONT_NAMES),
                    "body": _enum(FONT_NAMES),
                }
            ),
            "decorative": _object(
                {
                    "shape": _enum(DECORATIVE_SHAPES),
                    "borderStyle": _enum(BORDER_STYLES),
                    "useIcons": {"type": "BOOLEAN"},
                }
            ),
        }
    )


# ---------------------------------------------------------------------------
# Payload parsing (both sides)
# ---------------------------------------------------------------------------

def _unwrap(raw: Any) -> Any:
    # {result: ...} wrapper, possibly nested once by a proxy
    for _ in range(2):
        if isinstance(raw, dict) and set(raw) == {"result"}:
            raw = raw["result"]
    return raw


def parse_design_payload(raw: Any) -> DesignConfig:
    """
    Turn a generation answer into a validated DesignConfig.

    Accepted shapes:
      - {"result": {...DesignConfig...}}
      - {...DesignConfig...}
      - "...prose... ```json {...} ``` ...prose..." (or the same inside "result")
      - the raw JSON text of any of the above
    """
    data = _unwrap(raw)

    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8", errors="replace")

    if isinstance(data, str):
        try:
            data = _unwrap(parse_json_object(data))
        except ValueError as exc:
            logger.warning("design_payload_unparseable", preview=data[:200])
            raise DesignParseError("La réponse du service ne contient pas de design JSON.") from exc

    if not isinstance(data, dict):
        logger.warning("design_payload_wrong_type", payload_type=type(data).__name__)
        raise DesignParseError("La réponse du service n'est pas un objet de design.")

    try:
        config = DesignConfig.model_validate(data)
    except ValidationError as exc:
        logger.warning(
            "design_payload_schema_mismatch",
            errors=exc.errors(include_url=False),
            preview=json.dumps(data, ensure_ascii=False)[:300],
        )
        raise DesignParseError("Le design reçu ne respecte pas le schéma attendu.") from exc

    logger.info(
        "design_payload_parsed",
        layout=config.layout,
        header_style=config.header.style,
        section_style=config.sections.style,
        shape=config.decorative.shape,
    )
    return config


__all__ = [
    "DESIGN_SUGGESTIONS",
    "default_design_prompt",
    "build_design_request",
    "new_design_seed",
    "build_seeded_design_prompt",
    "design_response_schema",
    "parse_design_payload",
]
