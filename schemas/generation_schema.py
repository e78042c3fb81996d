"""Wire contract of the generation endpoint.

One request shape, `{action, payload}`, is shared by the three generation
features. Successful calls answer `{result: ...}`; failures answer
`{error, details?}` with a non-2xx status (429 for upstream quota
exhaustion).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AIActionType(str, Enum):
    GENERATE_SUMMARY = "GENERATE_SUMMARY"
    IMPROVE_EXPERIENCE = "IMPROVE_EXPERIENCE"
    GENERATE_DESIGN = "GENERATE_DESIGN"


class _PayloadModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummaryPayload(_PayloadModel):
    job_title: str = Field(..., min_length=1, max_length=200)
    keywords: str = Field("", max_length=500)


class ExperiencePayload(_PayloadModel):
    role: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)


class DesignPayload(_PayloadModel):
    description: str = Field(..., min_length=1, max_length=2000)


class GenerationRequest(BaseModel):
    """Body of POST /api/generate."""

    action: str
    payload: dict[str, Any] = Field(default_factory=dict)


class GenerationResult(BaseModel):
    result: Any


class ErrorResponse(BaseModel):
    """Body of every non-2xx answer from the generation endpoint."""

    error: str
    details: str | None = None
