# api.py
from __future__ import annotations

from typing import Any, Dict

import structlog
from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from schemas.cv_schema import CVData
from schemas.generation_schema import ErrorResponse, GenerationRequest, GenerationResult
from cv_templates.cv_templates import render_cv_html
from functions.generation_service import handle_generation
from functions.utils.errors import (
    DesignParseError,
    InputValidationError,
    LLMCallError,
    UpstreamRateLimitError,
)
from functions.utils.llm_client import has_api_key, stub_forced

logger = structlog.get_logger().bind(module="api")

app = FastAPI(
    title="CV Forge Generation Service",
    version="1.0.0",
    description="Generation proxy (summary, experience rewrite, AI design) and live CV preview.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # 404 / 405 and friends use the same {error, details} body
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("request_validation_error", errors=exc.errors())
    return _error(400, "Invalid request body", str(exc.errors())[:500])


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.post("/api/generate", response_model=GenerationResult)
def generate(request: GenerationRequest) -> Any:
    """
    Single generation endpoint: `{action, payload}` -> `{result}`.

    - 400: unknown action or invalid payload
    - 429: upstream quota / rate limit exhausted
    - 500: server API key missing, or unexpected failure
    - 502: model call failed or returned an unusable design
    """
    if not stub_forced() and not has_api_key():
        logger.error("api_generate_missing_api_key")
        return _error(500, "Server configuration error: API key missing")

    try:
        result = handle_generation(request)
    except InputValidationError as e:
        logger.warning("api_generate_bad_request", action=request.action, error=str(e))
        return _error(400, str(e))
    except UpstreamRateLimitError as e:
        logger.warning("api_generate_rate_limited", action=request.action)
        return _error(429, "Quota exceeded, retry later", str(e)[:500])
    except (LLMCallError, DesignParseError) as e:
        logger.error("api_generate_upstream_error", action=request.action, error=str(e))
        return _error(502, "Generation failed", str(e)[:500])
    except Exception as e:
        logger.exception("api_generate_internal_error", action=request.action)
        return _error(500, "Internal server error", str(e)[:500])

    logger.info("api_generate_success", action=request.action)
    return GenerationResult(result=result)


@app.post("/api/preview", response_class=HTMLResponse)
def preview(payload: Dict[str, Any] = Body(...), scale: float | None = None) -> Any:
    """Render a posted CVData snapshot with its selected template."""
    try:
        cv = CVData.model_validate(payload)
    except ValidationError as e:
        logger.warning("api_preview_invalid_cv", errors=e.errors(include_url=False))
        return _error(400, "Invalid CV data", str(e.errors(include_url=False))[:500])

    html = render_cv_html(cv, preview_scale=scale)
    logger.info("api_preview_rendered", template_id=cv.template_id.value)
    return HTMLResponse(content=html)
