# functions/generation_service.py

"""
Server side of the generation endpoint.

Dispatches `{action, payload}` requests to the LLM:

- GENERATE_SUMMARY   {jobTitle, keywords}  -> str (third person, ~50 words)
- IMPROVE_EXPERIENCE {role, description}   -> str (rewritten description)
- GENERATE_DESIGN    {description}         -> DesignConfig (camelCase dict on the wire)

Errors are raised as typed exceptions; the HTTP layer (api.py) maps them:
InputValidationError -> 400, UpstreamRateLimitError -> 429,
LLMCallError / DesignParseError -> 502.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

import structlog
from pydantic import BaseModel, ValidationError

from schemas.design_schema import DEFAULT_DESIGN_CONFIG, DesignConfig
from schemas.generation_schema import (
    AIActionType,
    DesignPayload,
    ExperiencePayload,
    GenerationRequest,
    SummaryPayload,
)
from functions.design_request_builder import (
    build_seeded_design_prompt,
    design_response_schema,
    parse_design_payload,
)
from functions.utils.common import get_param_section
from functions.utils.errors import InputValidationError
from functions.utils.llm_client import call_llm, is_stub_text
from functions.utils.prompts_builder import build_experience_prompt, build_summary_prompt

logger = structlog.get_logger().bind(module="generation_service")


def _validate(model: type[BaseModel], payload: Dict[str, Any]) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise InputValidationError(f"Invalid payload, check fields: {', '.join(fields)}") from exc


def _require_text(value: str, field: str) -> str:
    text = value.strip()
    if not text:
        raise InputValidationError(f"Field '{field}' must not be blank")
    return text


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

def generate_summary(payload: SummaryPayload) -> str:
    job_title = _require_text(payload.job_title, "jobTitle")
    keywords = payload.keywords.strip() or str(
        get_param_section("generation").get("default_summary_keywords", "")
    )
    logger.info("summary_generation_start", job_title=job_title)
    text = call_llm(build_summary_prompt(job_title, keywords))
    return text.strip()


def improve_experience(payload: ExperiencePayload) -> str:
    role = _require_text(payload.role, "role")
    description = _require_text(payload.description, "description")
    logger.info("experience_rewrite_start", role=role, length=len(description))
    text = call_llm(build_experience_prompt(role, description))
    return text.strip()


def generate_design(payload: DesignPayload) -> DesignConfig:
    description = _require_text(payload.description, "description")
    gen_cfg = get_param_section("generation")
    temperature = float(gen_cfg.get("design_temperature", 1.4))

    logger.info("design_generation_start", description_preview=description[:120], temperature=temperature)
    raw = call_llm(
        build_seeded_design_prompt(description),
        response_schema=design_response_schema(),
        temperature=temperature,
    )

    if is_stub_text(raw):
        logger.info("design_generation_stub_default")
        return DEFAULT_DESIGN_CONFIG

    config = parse_design_payload(str(raw))
    logger.info("design_generation_success", layout=config.layout)
    return config


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def _summary_action(payload: Dict[str, Any]) -> Any:
    return generate_summary(_validate(SummaryPayload, payload))


def _experience_action(payload: Dict[str, Any]) -> Any:
    return improve_experience(_validate(ExperiencePayload, payload))


def _design_action(payload: Dict[str, Any]) -> Any:
    return generate_design(_validate(DesignPayload, payload)).model_dump(by_alias=True)


ACTIONS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    AIActionType.GENERATE_SUMMARY.value: _summary_action,
    AIActionType.IMPROVE_EXPERIENCE.value: _experience_action,
    AIActionType.GENERATE_DESIGN.value: _design_action,
}


class UnknownActionError(InputValidationError):
    """Action name not in AIActionType."""


def handle_generation(request: GenerationRequest) -> Any:
    """Run one generation request and return the value for `{result: ...}`."""
    handler = ACTIONS.get(request.action)
    if handler is None:
        logger.warning("generation_unknown_action", action=request.action)
        raise UnknownActionError(f"Unknown action: {request.action}")
    return handler(request.payload or {})


__all__ = [
    "ACTIONS",
    "UnknownActionError",
    "generate_summary",
    "improve_experience",
    "generate_design",
    "handle_generation",
]
