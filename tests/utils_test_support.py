# tests/utils_test_support.py
"""
Shared helpers for tests.

This module is test-only and is NOT part of the public service API. It
provides:

- A fully populated CVData snapshot (French content, two experiences)
- A DesignConfig builder that overrides any axis of the default design
- A fake generation client used by the editor session tests
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

THIS_FILE = Path(__file__).resolve()
ROOT = THIS_FILE.parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from schemas.cv_schema import CVData, Education, Experience, PersonalInfo, Skill, TemplateId  # noqa: E402
from schemas.design_schema import DEFAULT_DESIGN_CONFIG, DesignConfig  # noqa: E402


# ---------------------------------------------------------------------------
# Content fixtures
# ---------------------------------------------------------------------------

def sample_cv(**overrides: Any) -> CVData:
    """A complete CV; keyword overrides replace top-level fields."""
    cv = CVData(
        personal=PersonalInfo(
            full_name="Camille Martin",
            job_title="Ingénieur Logiciel",
            email="camille@example.com",
            phone="+33 6 12 34 56 78",
            location="Lyon",
            website="camille.dev",
            summary="Ingénieur passionné par les systèmes distribués.",
        ),
        experience=(
            Experience(
                id="exp-1",
                company="Acme",
                role="Développeur Senior",
                start_date="2020",
                end_date="Présent",
                current=True,
                description="Conception d'API et mentorat.",
            ),
            Experience(
                id="exp-2",
                company="Globex",
                role="Développeur",
                start_date="2017",
                end_date="2020",
                description="Maintenance applicative.",
            ),
        ),
        education=(Education(id="edu-1", school="INSA Lyon", degree="Diplôme d'ingénieur", year="2017"),),
        skills=(
            Skill(id="sk-1", name="Python", level=5),
            Skill(id="sk-2", name="SQL", level=3),
        ),
        theme_color="#2563eb",
        template_id=TemplateId.MODERN,
    )
    return cv.model_copy(update=overrides) if overrides else cv


def design(**axes: Dict[str, Any] | str) -> DesignConfig:
    """
    DEFAULT_DESIGN_CONFIG with some axes replaced, e.g.
    design(layout="asymmetric", header={"style": "banner"}).
    """
    data = DEFAULT_DESIGN_CONFIG.model_dump()
    for key, value in axes.items():
        if isinstance(value, dict):
            data[key] = {**data[key], **value}
        else:
            data[key] = value
    return DesignConfig.model_validate(data)


# ---------------------------------------------------------------------------
# Fake generation client
# ---------------------------------------------------------------------------

class FakeGenerationClient:
    """
    Stand-in for GenerationClient.

    Each action either returns the configured value or raises it when it is
    an exception. `on_call` runs before answering so a test can observe the
    session while a request is in flight.
    """

    def __init__(
        self,
        *,
        summary: Any = "",
        experience: Any = "",
        designs: Optional[List[Any]] = None,
        on_call: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.summary = summary
        self.experience = experience
        self.designs = list(designs or [])
        self.on_call = on_call
        self.calls: List[tuple] = []

    def _answer(self, action: str, value: Any) -> Any:
        if self.on_call is not None:
            self.on_call(action)
        if isinstance(value, BaseException):
            raise value
        return value

    def generate_summary(self, job_title: str, keywords: str = "") -> str:
        self.calls.append(("summary", job_title, keywords))
        return self._answer("summary", self.summary)

    def improve_experience(self, role: str, description: str) -> str:
        self.calls.append(("experience", role, description))
        return self._answer("experience", self.experience)

    def generate_design(self, description: str) -> DesignConfig:
        self.calls.append(("design", description))
        value = self.designs.pop(0) if self.designs else DEFAULT_DESIGN_CONFIG
        return self._answer("design", value)
