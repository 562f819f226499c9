from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from plancore.validators import PlanProfile


class CompileRequest(BaseModel):
    plan_text: str = Field(min_length=1, max_length=200_000)
    profile: PlanProfile = Field(default_factory=PlanProfile)
    starting_week: Optional[int] = Field(default=None, ge=1)


class PaceRequest(BaseModel):
    distance: str = Field(min_length=1, max_length=40)
    goal_time: str = Field(min_length=1, max_length=12)
    units: str = "imperial"

    @field_validator("units")
    @classmethod
    def valid_units(cls, v):
        allowed = {"imperial", "metric"}
        value = str(v).strip().lower()
        if value not in allowed:
            raise ValueError(f"units must be one of {allowed}")
        return value


class BlendRequest(PaceRequest):
    current_time: str = Field(min_length=1, max_length=12)
    week_number: int = Field(ge=1)
    total_weeks: int = Field(ge=1, le=52)

    @model_validator(mode="after")
    def _week_in_plan(self):
        if self.week_number > self.total_weeks:
            raise ValueError("week_number cannot exceed total_weeks")
        return self


class GoalTimesOut(BaseModel):
    distance: str
    goal_times: list[str]
    min_time: str
    max_time: str


class TemplateOut(BaseModel):
    index: int
    name: str
    kind: str
    category: str
    description: str
    structure: str
    phases: list[dict[str, str]]
    repetitions: Optional[str] = None
    rep_distance: Optional[str] = None
    pace: Optional[str] = None
    recovery: Optional[str] = None
    duration: Optional[str] = None
    focus: Optional[str] = None
    benefits: Optional[str] = None
    hill_requirement: Optional[dict[str, Any]] = None


class CatalogCategoryOut(BaseModel):
    kind: str
    category: str
    templates: list[TemplateOut]


class HealthOut(BaseModel):
    status: str
