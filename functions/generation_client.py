# functions/generation_client.py

"""
Client for the generation endpoint (POST {action, payload}).

- validates inputs locally before any network call (InputValidationError)
- accepts `{result: ...}` and, for designs, the bare DesignConfig as well
- non-2xx: `{error, details?}` is surfaced as ServiceError, 429 as RateLimitError
- transport failures and non-JSON bodies become ServiceError
"""

from __future__ import annotations

from typing import Any, Optional

import requests
import structlog

from schemas.design_schema import DesignConfig
from schemas.generation_schema import AIActionType, GenerationRequest
from functions.design_request_builder import build_design_request, parse_design_payload
from functions.utils.common import get_param_section
from functions.utils.errors import InputValidationError, RateLimitError, ServiceError

logger = structlog.get_logger().bind(module="generation_client")

DEFAULT_ENDPOINT = "http://localhost:8000/api/generate"


class GenerationClient:
    """Thin requests-based wrapper around the generation endpoint."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        service_cfg = get_param_section("service")
        self.endpoint = endpoint or str(service_cfg.get("endpoint", DEFAULT_ENDPOINT))
        self.timeout = float(timeout if timeout is not None else service_cfg.get("timeout_seconds", 60))
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _post(self, request: GenerationRequest) -> Any:
        body = request.model_dump()
        logger.info("generation_request_start", action=request.action, endpoint=self.endpoint)

        try:
            resp = self.session.post(self.endpoint, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("generation_request_transport_error", action=request.action, error=str(exc))
            raise ServiceError(f"Service unreachable: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            data = None

        if not (200 <= resp.status_code < 300):
            error = "Service error"
            details = None
            if isinstance(data, dict):
                error = str(data.get("error") or error)
                details = data.get("details")
            logger.warning(
                "generation_request_failed",
                action=request.action,
                status_code=resp.status_code,
                error=error,
                details=details,
            )
            exc_cls = RateLimitError if resp.status_code == 429 else ServiceError
            raise exc_cls(
                error,
                status_code=resp.status_code,
                details=str(details) if details is not None else None,
            )

        if data is None:
            logger.warning("generation_response_not_json", action=request.action, preview=resp.text[:200])
            raise ServiceError("Malformed response from service", status_code=resp.status_code)

        logger.info("generation_request_success", action=request.action, status_code=resp.status_code)
        return data

    @staticmethod
    def _text_result(data: Any) -> str:
        result = data.get("result") if isinstance(data, dict) else data
        if not isinstance(result, str):
            raise ServiceError("Malformed response from service: expected text result")
        return result.strip()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def generate_summary(self, job_title: str, keywords: str = "") -> str:
        if not (job_title or "").strip():
            raise InputValidationError("A job title is required to generate a summary")
        request = GenerationRequest(
            action=AIActionType.GENERATE_SUMMARY.value,
            payload={"jobTitle": job_title.strip(), "keywords": keywords},
        )
        return self._text_result(self._post(request))

    def improve_experience(self, role: str, description: str) -> str:
        if not (role or "").strip() or not (description or "").strip():
            raise InputValidationError("Role and description are required to improve an experience")
        request = GenerationRequest(
            action=AIActionType.IMPROVE_EXPERIENCE.value,
            payload={"role": role.strip(), "description": description},
        )
        return self._text_result(self._post(request))

    def generate_design(self, description: str) -> DesignConfig:
        request = build_design_request(description)
        return parse_design_payload(self._post(request))


__all__ = ["DEFAULT_ENDPOINT", "GenerationClient"]
