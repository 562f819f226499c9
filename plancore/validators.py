"""Pydantic validation models for plan compilation inputs."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from plancore.models import DistanceCategory, RaceGoal, canonical_day, units_label
from plancore.services.pace_engine import normalize_distance, parse_time


class PlanProfile(BaseModel):
    """Runner profile a generated plan is compiled against."""

    race_distance: Optional[str] = None
    race_time: Optional[str] = None
    recent_race_distance: Optional[str] = None
    recent_race_time: Optional[str] = None
    units: str = "imperial"
    quality_days: list[str] = Field(default_factory=list)
    rest_days: list[str] = Field(default_factory=list)
    long_run_day: Optional[str] = None
    current_long_run: Optional[float] = Field(default=None, ge=0, le=100)
    current_weekly_distance: Optional[float] = Field(default=None, ge=0, le=300)
    terrain: Optional[str] = Field(default=None, max_length=40)

    @field_validator("race_distance", "recent_race_distance")
    @classmethod
    def valid_distance(cls, v):
        if v is None or not str(v).strip():
            return None
        return normalize_distance(v).value

    @field_validator("race_time")
    @classmethod
    def valid_race_time(cls, v):
        if v is None or not str(v).strip():
            return None
        parse_time(v)
        return str(v).strip()

    @field_validator("recent_race_time")
    @classmethod
    def valid_recent_time(cls, v):
        # Accepts "52:00" as well as "10K - 52:00"; the time is the part after the last dash.
        if v is None or not str(v).strip():
            return None
        text = str(v).strip()
        if "-" in text:
            text = text.rsplit("-", 1)[1].strip()
        parse_time(text)
        return text

    @field_validator("units")
    @classmethod
    def valid_units(cls, v):
        allowed = {"imperial", "metric"}
        value = str(v).strip().lower()
        if value not in allowed:
            raise ValueError(f"units must be one of {allowed}")
        return value

    @field_validator("quality_days", "rest_days")
    @classmethod
    def valid_days(cls, v):
        days: list[str] = []
        for raw in v:
            day = canonical_day(raw)
            if day is None:
                raise ValueError(f"unknown day name: {raw!r}")
            if day not in days:
                days.append(day)
        return days

    @field_validator("long_run_day")
    @classmethod
    def valid_long_run_day(cls, v):
        if v is None or not str(v).strip():
            return None
        day = canonical_day(v)
        if day is None:
            raise ValueError(f"unknown day name: {v!r}")
        return day

    @model_validator(mode="before")
    @classmethod
    def _split_recent_race(cls, data):
        if isinstance(data, dict):
            recent = data.get("recent_race_time")
            if recent and not data.get("recent_race_distance") and "-" in str(recent):
                prefix = str(recent).rsplit("-", 1)[0].strip()
                if prefix:
                    data = {**data, "recent_race_distance": prefix}
        return data

    @model_validator(mode="after")
    def _goal_complete(self):
        if (self.race_distance is None) != (self.race_time is None):
            raise ValueError("race_distance and race_time must be provided together")
        overlap = set(self.quality_days) & set(self.rest_days)
        if overlap:
            raise ValueError(f"days cannot be both quality and rest days: {sorted(overlap)}")
        if self.long_run_day and self.long_run_day in set(self.quality_days) | set(self.rest_days):
            raise ValueError(f"long_run_day {self.long_run_day} cannot also be a quality or rest day")
        return self

    @property
    def unit_label(self) -> str:
        return units_label(self.units)

    @property
    def effective_long_run_day(self) -> Optional[str]:
        """The configured long-run day, else Sunday unless Sunday is already spoken for."""
        if self.long_run_day:
            return self.long_run_day
        if "Sunday" in self.quality_days or "Sunday" in self.rest_days:
            return None
        return "Sunday"

    @property
    def race_goal(self) -> Optional[RaceGoal]:
        if self.race_distance is None or self.race_time is None:
            return None
        return RaceGoal(distance=DistanceCategory(self.race_distance), goal_time=self.race_time, terrain=self.terrain)

    @property
    def recent_race(self) -> Optional[RaceGoal]:
        if self.recent_race_time is None:
            return None
        distance = self.recent_race_distance or self.race_distance
        if distance is None:
            return None
        return RaceGoal(distance=DistanceCategory(distance), goal_time=self.recent_race_time)
