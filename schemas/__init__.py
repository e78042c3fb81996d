"""Schema definitions for the CV builder."""

from schemas.cv_schema import (
    CVData,
    Education,
    Experience,
    PersonalInfo,
    Skill,
    TemplateId,
)
from schemas.design_schema import DEFAULT_DESIGN_CONFIG, DesignConfig
from schemas.generation_schema import (
    AIActionType,
    ErrorResponse,
    GenerationRequest,
    GenerationResult,
)

__all__ = [
    # Content model
    "CVData",
    "PersonalInfo",
    "Experience",
    "Education",
    "Skill",
    "TemplateId",
    # Design
    "DesignConfig",
    "DEFAULT_DESIGN_CONFIG",
    # Generation wire contract
    "AIActionType",
    "GenerationRequest",
    "GenerationResult",
    "ErrorResponse",
]
