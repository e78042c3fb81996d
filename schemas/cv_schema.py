"""Content model for the CV builder.

These models are the canonical, in-memory representation of a résumé.
They carry no presentation logic. All of them are frozen: edits go through
`functions.content_model`, which always returns a new snapshot, so two
snapshots can be compared by identity to detect a change.

Field names serialize in camelCase (`fullName`, `startDate`, `themeColor`,
`templateId`, `designConfig`) and accept both camelCase and snake_case.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from schemas.design_schema import DesignConfig

DEFAULT_THEME_COLOR = "#2563eb"


class TemplateId(str, Enum):
    """Templates available in the preview."""

    MODERN = "modern"
    CLASSIC = "classic"
    ELEGANT = "elegant"
    UNIQUE = "unique"


class _ContentModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PersonalInfo(_ContentModel):
    """Header / contact block. Empty string means "not provided"."""

    full_name: str = ""
    job_title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: str = ""
    summary: str = ""


class Experience(_ContentModel):
    """Single work experience entry.

    Dates are free text ("2019", "Présent", "Jan 2020"). `current` is kept
    for the editor only and is never consulted by the renderers.
    """

    id: str
    company: str = ""
    role: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""


class Education(_ContentModel):
    id: str
    school: str = ""
    degree: str = ""
    year: str = ""


class Skill(_ContentModel):
    """Skill with a nominal 1–5 level.

    Out-of-range levels are accepted as-is; renderers clamp when they turn a
    level into a bar width.
    """

    id: str
    name: str = ""
    level: int = 4


class CVData(_ContentModel):
    """Aggregate root: one immutable snapshot of the whole résumé."""

    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: tuple[Experience, ...] = ()
    education: tuple[Education, ...] = ()
    skills: tuple[Skill, ...] = ()
    theme_color: str = DEFAULT_THEME_COLOR
    template_id: TemplateId = TemplateId.MODERN
    design_config: DesignConfig | None = None
