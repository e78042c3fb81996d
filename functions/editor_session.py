# functions/editor_session.py

"""
Editor session: the single owner of the current CV snapshot.

Responsibilities:
- wrap every content operation so each edit replaces the snapshot
- run the three generation features with their busy guards:
    * one summary generation at a time
    * one rewrite per experience id (different ids may overlap)
    * one design generation at a time
- drive the design dialog (prompt, suggestions, dismissal) and the design
  state machine: idle -> requesting -> succeeded | failed
- collect user-facing notices instead of raising

Generation failures never touch the content: summary / description stay as
they were, and a failed design leaves template and design untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

import structlog

from schemas.cv_schema import CVData, TemplateId
from functions import content_model as cm
from functions.design_request_builder import DESIGN_SUGGESTIONS, default_design_prompt
from functions.generation_client import GenerationClient
from functions.utils.common import get_param_section
from functions.utils.errors import (
    GenerationError,
    InputValidationError,
    RateLimitError,
)
from functions.utils.labels import NOTICES

logger = structlog.get_logger().bind(module="editor_session")


class DesignStatus(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Notice:
    level: str  # "info" | "warning" | "error"
    message: str


@dataclass
class DesignDialog:
    is_open: bool = False
    prompt: str = ""
    status: DesignStatus = DesignStatus.IDLE
    suggestions: tuple[str, ...] = DESIGN_SUGGESTIONS

    @property
    def requesting(self) -> bool:
        return self.status is DesignStatus.REQUESTING


@dataclass
class EditorSession:
    """In-memory editing session (no persistence)."""

    client: GenerationClient = field(default_factory=GenerationClient)
    cv: CVData = field(default_factory=cm.empty_cv)
    notices: List[Notice] = field(default_factory=list)
    summary_busy: bool = False
    rewriting: set[str] = field(default_factory=set)
    dialog: DesignDialog = field(default_factory=DesignDialog)

    # ------------------------------------------------------------------
    # Snapshot management
    # ------------------------------------------------------------------

    def _apply(self, op: Callable[..., CVData], *args: Any) -> CVData:
        self.cv = op(self.cv, *args)
        return self.cv

    def notify(self, message: str, level: str = "error") -> None:
        self.notices.append(Notice(level=level, message=message))
        logger.info("editor_notice", level=level, notice=message)

    def clear_notices(self) -> List[Notice]:
        drained, self.notices = self.notices, []
        return drained

    # ------------------------------------------------------------------
    # Content edits
    # ------------------------------------------------------------------

    def update_personal(self, field_name: str, value: str) -> CVData:
        return self._apply(cm.update_personal, field_name, value)

    def add_experience(self) -> CVData:
        return self._apply(cm.add_experience)

    def update_experience(self, experience_id: str, field_name: str, value: Any) -> CVData:
        return self._apply(cm.update_experience, experience_id, field_name, value)

    def remove_experience(self, experience_id: str) -> CVData:
        return self._apply(cm.remove_experience, experience_id)

    def add_education(self) -> CVData:
        return self._apply(cm.add_education)

    def update_education(self, education_id: str, field_name: str, value: Any) -> CVData:
        return self._apply(cm.update_education, education_id, field_name, value)

    def remove_education(self, education_id: str) -> CVData:
        return self._apply(cm.remove_education, education_id)

    def add_skill(self) -> CVData:
        return self._apply(cm.add_skill)

    def update_skill(self, skill_id: str, field_name: str, value: Any) -> CVData:
        return self._apply(cm.update_skill, skill_id, field_name, value)

    def remove_skill(self, skill_id: str) -> CVData:
        return self._apply(cm.remove_skill, skill_id)

    def change_theme(self, color: str) -> CVData:
        return self._apply(cm.change_theme, color)

    def change_template(self, template_id: TemplateId | str) -> CVData:
        return self._apply(cm.change_template, template_id)

    @property
    def theme_choices(self) -> tuple[str, ...]:
        """Preset colors, offered only while a static template is selected."""
        if self.cv.template_id is TemplateId.UNIQUE:
            return ()
        return cm.THEME_PALETTE

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def generate_summary(self, keywords: Optional[str] = None) -> bool:
        """Fill personal.summary from the job title. Returns True on success."""
        if self.summary_busy:
            logger.info("summary_generation_skipped_busy")
            return False

        job_title = self.cv.personal.job_title.strip()
        if not job_title:
            self.notify(NOTICES["summary_needs_job_title"], level="warning")
            return False

        if keywords is None:
            keywords = str(get_param_section("generation").get("default_summary_keywords", ""))

        self.summary_busy = True
        try:
            text = self.client.generate_summary(job_title, keywords)
        except RateLimitError:
            self.notify(NOTICES["rate_limited"], level="warning")
            return False
        except GenerationError as exc:
            logger.warning("summary_generation_failed", error=str(exc))
            self.notify(NOTICES["summary_failed"])
            return False
        finally:
            self.summary_busy = False

        self.update_personal("summary", text)
        logger.info("summary_generation_applied", length=len(text))
        return True

    # ------------------------------------------------------------------
    # Experience rewrite
    # ------------------------------------------------------------------

    def is_rewriting(self, experience_id: str) -> bool:
        return experience_id in self.rewriting

    def improve_experience(self, experience_id: str) -> bool:
        """Rewrite one experience description. Returns True on success."""
        if experience_id in self.rewriting:
            logger.info("experience_rewrite_skipped_busy", experience_id=experience_id)
            return False

        entry = next((e for e in self.cv.experience if e.id == experience_id), None)
        if entry is None:
            logger.info("experience_rewrite_unknown_id", experience_id=experience_id)
            return False
        if not entry.role.strip() or not entry.description.strip():
            self.notify(NOTICES["experience_needs_text"], level="warning")
            return False

        self.rewriting.add(experience_id)
        try:
            text = self.client.improve_experience(entry.role, entry.description)
        except RateLimitError:
            self.notify(NOTICES["rate_limited"], level="warning")
            return False
        except GenerationError as exc:
            logger.warning("experience_rewrite_failed", experience_id=experience_id, error=str(exc))
            self.notify(NOTICES["experience_failed"])
            return False
        finally:
            self.rewriting.discard(experience_id)

        # Entry may have been removed meanwhile; update is then a no-op
        self.update_experience(experience_id, "description", text)
        return True

    # ------------------------------------------------------------------
    # Design dialog
    # ------------------------------------------------------------------

    def open_design_dialog(self) -> DesignDialog:
        if not self.dialog.prompt:
            self.dialog.prompt = default_design_prompt(self.cv.personal.job_title)
        self.dialog.is_open = True
        return self.dialog

    def set_design_prompt(self, text: str) -> None:
        self.dialog.prompt = text

    def apply_suggestion(self, suggestion: str | int) -> str:
        """Replace the prompt with a canned suggestion (by text or index)."""
        text = self.dialog.suggestions[suggestion] if isinstance(suggestion, int) else suggestion
        self.dialog.prompt = text
        return text

    def dismiss_design_dialog(self) -> bool:
        """Close the dialog; refused while a design request is in flight."""
        if self.dialog.requesting:
            logger.info("design_dialog_dismiss_refused")
            return False
        self.dialog.is_open = False
        return True

    def generate_design(self) -> bool:
        """Request a design for the current prompt and apply it on success."""
        if self.dialog.requesting:
            logger.info("design_generation_skipped_busy")
            return False

        prompt = self.dialog.prompt.strip()
        if not prompt:
            self.notify(NOTICES["design_needs_prompt"], level="warning")
            return False

        self.dialog.status = DesignStatus.REQUESTING
        try:
            config = self.client.generate_design(prompt)
        except RateLimitError:
            self.dialog.status = DesignStatus.FAILED
            self.notify(NOTICES["rate_limited"], level="warning")
            return False
        except InputValidationError:
            self.dialog.status = DesignStatus.FAILED
            self.notify(NOTICES["design_needs_prompt"], level="warning")
            return False
        except GenerationError as exc:
            self.dialog.status = DesignStatus.FAILED
            logger.warning("design_generation_failed", error=str(exc), error_type=type(exc).__name__)
            self.notify(NOTICES["design_failed"])
            return False
        except Exception:
            # never leave the dialog locked
            self.dialog.status = DesignStatus.FAILED
            raise

        self._apply(cm.apply_design, config)
        self.dialog.status = DesignStatus.SUCCEEDED
        self.dialog.is_open = False
        return True


__all__ = ["DesignStatus", "Notice", "DesignDialog", "EditorSession"]
