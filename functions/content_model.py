# functions/content_model.py

"""
Content Model operations.

Every function takes a CVData snapshot and returns a NEW snapshot; nested
collections are rebuilt, never mutated. Missing ids are content-equal no-ops
(a new snapshot is still returned).

Ordering:
- experience / education: new entries are prepended
- skills: new entries are appended with level 4
"""

from __future__ import annotations

import uuid
from typing import Any, Iterable, TypeVar

import structlog
from pydantic import BaseModel

from schemas.cv_schema import (
    DEFAULT_THEME_COLOR,
    CVData,
    Education,
    Experience,
    PersonalInfo,
    Skill,
    TemplateId,
)
from schemas.design_schema import DesignConfig

logger = structlog.get_logger().bind(module="content_model")

DEFAULT_SKILL_LEVEL = 4

# Preset theme colors offered for the static templates
THEME_PALETTE: tuple[str, ...] = ("#2563eb", "#059669", "#dc2626", "#1e293b")

T = TypeVar("T", bound=BaseModel)


def new_id() -> str:
    return uuid.uuid4().hex


def empty_cv() -> CVData:
    """Initial session snapshot."""
    return CVData(
        personal=PersonalInfo(),
        theme_color=DEFAULT_THEME_COLOR,
        template_id=TemplateId.MODERN,
    )


# ---------------------------------------------------------------------------
# Generic helpers
# ---------------------------------------------------------------------------

def _field_name(model: type[BaseModel], field: str) -> str:
    """Accept either the snake_case name or its camelCase alias."""
    if field in model.model_fields:
        return field
    for name, info in model.model_fields.items():
        if info.alias == field:
            return name
    raise ValueError(f"Unknown field '{field}' for {model.__name__}")


def _set(item: T, field: str, value: Any) -> T:
    name = _field_name(type(item), field)
    if name == "id":
        raise ValueError("The id of an entry cannot be changed")
    # model_validate keeps field validation (e.g. int levels) on updates
    data = item.model_dump()
    data[name] = value
    return type(item).model_validate(data)


def _update_in(items: Iterable[T], item_id: str, field: str, value: Any) -> tuple[T, ...]:
    return tuple(_set(it, field, value) if it.id == item_id else it for it in items)  # type: ignore[attr-defined]


def _remove_from(items: Iterable[T], item_id: str) -> tuple[T, ...]:
    return tuple(it for it in items if it.id != item_id)  # type: ignore[attr-defined]


def _with(cv: CVData, **changes: Any) -> CVData:
    return cv.model_copy(update=changes)


# ---------------------------------------------------------------------------
# Personal info
# ---------------------------------------------------------------------------

def update_personal(cv: CVData, field: str, value: str) -> CVData:
    return _with(cv, personal=_set(cv.personal, field, value))


# ---------------------------------------------------------------------------
# Experience
# ---------------------------------------------------------------------------

def add_experience(cv: CVData) -> CVData:
    entry = Experience(id=new_id())
    logger.debug("experience_added", experience_id=entry.id)
    return _with(cv, experience=(entry,) + cv.experience)


def update_experience(cv: CVData, experience_id: str, field: str, value: Any) -> CVData:
    return _with(cv, experience=_update_in(cv.experience, experience_id, field, value))


def remove_experience(cv: CVData, experience_id: str) -> CVData:
    return _with(cv, experience=_remove_from(cv.experience, experience_id))


# ---------------------------------------------------------------------------
# Education
# ---------------------------------------------------------------------------

def add_education(cv: CVData) -> CVData:
    entry = Education(id=new_id())
    logger.debug("education_added", education_id=entry.id)
    return _with(cv, education=(entry,) + cv.education)


def update_education(cv: CVData, education_id: str, field: str, value: Any) -> CVData:
    return _with(cv, education=_update_in(cv.education, education_id, field, value))


def remove_education(cv: CVData, education_id: str) -> CVData:
    return _with(cv, education=_remove_from(cv.education, education_id))


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------

def add_skill(cv: CVData) -> CVData:
    entry = Skill(id=new_id(), level=DEFAULT_SKILL_LEVEL)
    logger.debug("skill_added", skill_id=entry.id)
    return _with(cv, skills=cv.skills + (entry,))


def update_skill(cv: CVData, skill_id: str, field: str, value: Any) -> CVData:
    return _with(cv, skills=_update_in(cv.skills, skill_id, field, value))


def remove_skill(cv: CVData, skill_id: str) -> CVData:
    return _with(cv, skills=_remove_from(cv.skills, skill_id))


# ---------------------------------------------------------------------------
# Theme / template / design
# ---------------------------------------------------------------------------

def change_theme(cv: CVData, color: str) -> CVData:
    return _with(cv, theme_color=color)


def change_template(cv: CVData, template_id: TemplateId | str) -> CVData:
    return _with(cv, template_id=TemplateId(template_id))


def apply_design(cv: CVData, config: DesignConfig) -> CVData:
    """Select the "unique" template and replace the design wholesale."""
    logger.info("design_applied", layout=config.layout, previous=cv.design_config is not None)
    return _with(cv, template_id=TemplateId.UNIQUE, design_config=config)


__all__ = [
    "DEFAULT_SKILL_LEVEL",
    "THEME_PALETTE",
    "new_id",
    "empty_cv",
    "update_personal",
    "add_experience",
    "update_experience",
    "remove_experience",
    "add_education",
    "update_education",
    "remove_education",
    "add_skill",
    "update_skill",
    "remove_skill",
    "change_theme",
    "change_template",
    "apply_design",
]
