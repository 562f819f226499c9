"""Domain model for plan compilation.

Parsed records come out of the text parser and are annotated, never
destroyed, by the enricher and the repair pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from plancore.diagnostics import DiagnosticEvent
    from plancore.services.pace_engine import PaceSet, ProgressiveGoal


class DistanceCategory(str, Enum):
    FIVE_K = "5K"
    TEN_K = "10K"
    HALF = "Half"
    MARATHON = "Marathon"


class WorkoutKind(str, Enum):
    TEMPO = "tempo"
    INTERVAL = "interval"
    LONG_RUN = "longrun"
    HILL = "hill"


KIND_ALIASES: dict[str, WorkoutKind] = {
    "tempo": WorkoutKind.TEMPO,
    "interval": WorkoutKind.INTERVAL,
    "intervals": WorkoutKind.INTERVAL,
    "longrun": WorkoutKind.LONG_RUN,
    "long_run": WorkoutKind.LONG_RUN,
    "long-run": WorkoutKind.LONG_RUN,
    "hill": WorkoutKind.HILL,
    "hills": WorkoutKind.HILL,
}


def parse_kind(value: Any) -> Optional[WorkoutKind]:
    if isinstance(value, WorkoutKind):
        return value
    return KIND_ALIASES.get(str(value or "").strip().lower())


class WorkoutType(str, Enum):
    REST = "rest"
    REST_OR_XT = "rest_or_xt"
    BIKE = "bike"
    RACE = "race"
    TEMPO = "tempo"
    INTERVALS = "intervals"
    HILLS = "hills"
    LONG_RUN = "long_run"
    EASY = "easy"
    UNRESOLVED = "unresolved"


HARD_TYPES: frozenset[WorkoutType] = frozenset({WorkoutType.TEMPO, WorkoutType.INTERVALS, WorkoutType.HILLS})

KIND_TO_TYPE: dict[WorkoutKind, WorkoutType] = {
    WorkoutKind.TEMPO: WorkoutType.TEMPO,
    WorkoutKind.INTERVAL: WorkoutType.INTERVALS,
    WorkoutKind.LONG_RUN: WorkoutType.LONG_RUN,
    WorkoutKind.HILL: WorkoutType.HILLS,
}

FOCUS_BY_TYPE: dict[WorkoutType, str] = {
    WorkoutType.TEMPO: "Lactate Threshold",
    WorkoutType.INTERVALS: "Speed & VO2 Max",
    WorkoutType.HILLS: "Strength & Power",
    WorkoutType.LONG_RUN: "Endurance",
    WorkoutType.EASY: "Aerobic Base",
    WorkoutType.BIKE: "Cross-Training",
    WorkoutType.REST: "Recovery",
    WorkoutType.REST_OR_XT: "Recovery / XT",
    WorkoutType.RACE: "Race Day",
    WorkoutType.UNRESOLVED: "General",
}

DAY_NAMES: tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_DAY_ALIASES: dict[str, str] = {
    "mon": "Monday",
    "tue": "Tuesday",
    "tues": "Tuesday",
    "wed": "Wednesday",
    "weds": "Wednesday",
    "thu": "Thursday",
    "thur": "Thursday",
    "thurs": "Thursday",
    "fri": "Friday",
    "sat": "Saturday",
    "sun": "Sunday",
}
_DAY_ALIASES.update({name.lower(): name for name in DAY_NAMES})


def canonical_day(value: Optional[str]) -> Optional[str]:
    """Map 'tue', 'Tues', 'TUESDAY' ... to 'Tuesday'; None when unknown."""
    if not value:
        return None
    return _DAY_ALIASES.get(value.strip().rstrip(".").lower())


def units_label(units: str) -> str:
    """Short distance label for a profile unit system."""
    return "km" if str(units).lower() in {"metric", "km", "kilometers"} else "mi"


@dataclass(frozen=True)
class RaceGoal:
    distance: DistanceCategory
    goal_time: str
    terrain: Optional[str] = None


@dataclass(frozen=True)
class WorkoutReference:
    """Symbolic pointer into the template catalog: kind_category_index."""

    kind: WorkoutKind
    category: str
    index: int

    @property
    def token(self) -> str:
        return f"{self.kind.value}_{self.category}_{self.index}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "category": self.category, "index": self.index}


@dataclass
class ParsedWorkout:
    day: str
    description: str
    reference: Optional[WorkoutReference] = None
    inferred_type: Optional[WorkoutType] = None
    distance: Optional[float] = None
    line_number: Optional[int] = None


@dataclass
class ParsedWeek:
    week_number: int
    total_distance: float = 0.0
    workouts: list[ParsedWorkout] = field(default_factory=list)


@dataclass
class ParsedPlan:
    weeks: list[ParsedWeek]
    full_text: str
    pace_hints: dict[str, str] = field(default_factory=dict)
    diagnostics: list[DiagnosticEvent] = field(default_factory=list)
    paces: Optional[PaceSet] = None
    progressive: Optional[ProgressiveGoal] = None

    @property
    def total_weeks(self) -> int:
        return max((w.week_number for w in self.weeks), default=0)


@dataclass
class EnrichedWorkout:
    day: str
    description: str
    type: WorkoutType
    focus: str
    distance: Optional[float] = None
    reference: Optional[WorkoutReference] = None
    name: Optional[str] = None
    target_pace: Optional[str] = None
    prescription: Optional[dict[str, Any]] = None
    enriched: bool = False
    fallback: bool = False
    repaired: bool = False

    @classmethod
    def from_parsed(cls, parsed: ParsedWorkout, workout_type: WorkoutType, **fields: Any) -> "EnrichedWorkout":
        return cls(
            day=parsed.day,
            description=parsed.description,
            type=workout_type,
            focus=fields.pop("focus", FOCUS_BY_TYPE[workout_type]),
            distance=fields.pop("distance", parsed.distance),
            reference=parsed.reference,
            **fields,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "focus": self.focus,
            "distance": self.distance,
            "reference": self.reference.to_dict() if self.reference else None,
            "target_pace": self.target_pace,
            "prescription": self.prescription,
            "enriched": self.enriched,
            "fallback": self.fallback,
            "repaired": self.repaired,
        }


@dataclass
class EnrichedWeek:
    week_number: int
    total_distance: float
    workouts: list[EnrichedWorkout] = field(default_factory=list)
    paces: Optional[PaceSet] = None

    def workout_index(self, day: str) -> Optional[int]:
        for idx, workout in enumerate(self.workouts):
            if workout.day == day:
                return idx
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "week_number": self.week_number,
            "total_distance": self.total_distance,
            "workouts": [w.to_dict() for w in self.workouts],
            "paces": self.paces.to_dict() if self.paces else None,
        }


@dataclass(frozen=True)
class PlanWarning:
    code: str
    message: str
    week_number: Optional[int] = None
    day: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "week_number": self.week_number, "day": self.day}


@dataclass
class CompiledPlan:
    weeks: list[EnrichedWeek]
    paces: Optional[PaceSet]
    raw_text: str
    progressive: bool = False
    pace_hints: dict[str, str] = field(default_factory=dict)
    warnings: list[PlanWarning] = field(default_factory=list)
    diagnostics: list[DiagnosticEvent] = field(default_factory=list)

    @property
    def track_intervals(self) -> Optional[dict[str, dict[str, str]]]:
        return self.paces.track_intervals.to_display() if self.paces else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "weeks": [w.to_dict() for w in self.weeks],
            "paces": self.paces.to_dict() if self.paces else None,
            "track_intervals": self.track_intervals,
            "raw_text": self.raw_text,
            "progressive": self.progressive,
            "pace_hints": dict(self.pace_hints),
            "warnings": [w.to_dict() for w in self.warnings],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
