"""Pydantic request schemas, validated at the blueprint boundary.

Blueprints call ``validate_body(Schema)`` from ``learnpath.utils.helpers``;
a failure surfaces as a 422 VALIDATION_ERROR envelope.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class _Body(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


# =============================================================================
# ONBOARDING
# =============================================================================


class Step1Schema(_Body):
    """Where the learner is today."""

    current_role: str = Field(..., min_length=1, max_length=100)


class Step2Schema(_Body):
    """Where the learner wants to get to."""

    target_role: str = Field(..., min_length=1, max_length=100)


class Step3Schema(_Body):
    weekly_hours: int = Field(..., ge=1, le=40)


class Step4Schema(_Body):
    """Skill slugs the learner already has."""

    existing_skills: list[str] = Field(default_factory=list, max_length=100)


# Step number -> (schema, OnboardingState attribute it fills)
ONBOARDING_STEP_SCHEMAS = {
    1: (Step1Schema, "current_role"),
    2: (Step2Schema, "target_role"),
    3: (Step3Schema, "weekly_hours"),
    4: (Step4Schema, "existing_skills"),
}


# =============================================================================
# ROADMAP
# =============================================================================


class GenerateRoadmapSchema(_Body):
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    description: Optional[str] = Field(default=None, max_length=2000)


class ModuleSkipSchema(_Body):
    is_skipped: StrictBool


# =============================================================================
# PROGRESS
# =============================================================================

ProgressStatus = Literal["not_started", "in_progress", "completed", "skipped"]


class UpdateProgressSchema(_Body):
    status: Optional[ProgressStatus] = None
    time_spent_minutes: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=1000)


class LogTimeSchema(_Body):
    module_id: int
    minutes: int = Field(..., ge=1, le=480)
    notes: Optional[str] = Field(default=None, max_length=500)


# =============================================================================
# ENGAGEMENT
# =============================================================================


class WeeklyCheckinSchema(_Body):
    hours_spent: float = Field(..., ge=0, le=168)
    challenges_faced: Optional[str] = Field(default=None, max_length=1000)
    wins_achieved: Optional[str] = Field(default=None, max_length=1000)
    focus_next_week: Optional[str] = Field(default=None, max_length=500)
    motivation_level: int = Field(..., ge=1, le=10)


class FeedbackSchema(_Body):
    type: Literal["bug", "feature_request", "general", "resource_quality", "content_suggestion"]
    category: Literal["roadmap", "resources", "ui_ux", "performance", "other"]
    content: str = Field(..., min_length=1, max_length=5000)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    metadata: Optional[dict[str, Any]] = None
