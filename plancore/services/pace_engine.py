"""Personalized training paces from race goals.

Paces come from a discrete goal-time reference table (see pace_data).
Goal times between two anchors are interpolated field by field, since easy
bands, threshold and interval paces do not scale together across fitness
levels. A ProgressiveGoal blends a current-fitness PaceSet toward the goal
PaceSet over the weeks of a plan using a three-segment curve.

All paces are held as float seconds per unit distance and only formatted
to "M:SS" at the edges.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union

from plancore.config import Settings, get_settings
from plancore.errors import InputRangeError, InvalidTimeFormatError, OutOfRangeError, UnsupportedDistanceError
from plancore.logging_config import get_logger
from plancore.models import DistanceCategory
from plancore.services.pace_data import (
    INTERVAL_SPLITS,
    PACE_TABLES,
    THRESHOLD_SPLITS,
    VDOT_RACE_TIMES,
    PaceRow,
)

logger = get_logger(__name__)

KM_PER_MILE = 1.609344
PACE_ZONES: tuple[str, ...] = ("easy_min", "easy_max", "marathon", "threshold", "interval")

_DISTANCE_ALIASES: dict[str, DistanceCategory] = {
    "5k": DistanceCategory.FIVE_K,
    "5km": DistanceCategory.FIVE_K,
    "5 k": DistanceCategory.FIVE_K,
    "10k": DistanceCategory.TEN_K,
    "10km": DistanceCategory.TEN_K,
    "10 k": DistanceCategory.TEN_K,
    "half": DistanceCategory.HALF,
    "half marathon": DistanceCategory.HALF,
    "half-marathon": DistanceCategory.HALF,
    "halfmarathon": DistanceCategory.HALF,
    "hm": DistanceCategory.HALF,
    "21k": DistanceCategory.HALF,
    "21.1k": DistanceCategory.HALF,
    "marathon": DistanceCategory.MARATHON,
    "full marathon": DistanceCategory.MARATHON,
    "full": DistanceCategory.MARATHON,
    "42k": DistanceCategory.MARATHON,
    "42.2k": DistanceCategory.MARATHON,
}


# --- Time helpers ---

def parse_time(value: str) -> int:
    """Parse 'MM:SS' or 'H:MM:SS' into whole seconds."""
    text = str(value or "").strip()
    parts = text.split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise InvalidTimeFormatError(text)
    nums = [int(p) for p in parts]
    if any(n >= 60 for n in nums[1:]):
        raise InvalidTimeFormatError(text)
    if len(nums) == 2:
        return nums[0] * 60 + nums[1]
    return nums[0] * 3600 + nums[1] * 60 + nums[2]


def format_pace(seconds: float) -> str:
    """Format seconds as 'M:SS' (rounded to the nearest second)."""
    total = int(round(seconds))
    if total <= 0:
        return "n/a"
    return f"{total // 60}:{total % 60:02d}"


def format_duration(seconds: float) -> str:
    """Format seconds as 'H:MM:SS' when an hour or longer, else 'M:SS'."""
    total = int(round(seconds))
    if total >= 3600:
        return f"{total // 3600}:{(total % 3600) // 60:02d}:{total % 60:02d}"
    return f"{total // 60}:{total % 60:02d}"


def normalize_distance(value: Union[str, DistanceCategory]) -> DistanceCategory:
    if isinstance(value, DistanceCategory):
        return value
    key = str(value or "").strip().lower()
    for category in DistanceCategory:
        if key == category.value.lower():
            return category
    if key in _DISTANCE_ALIASES:
        return _DISTANCE_ALIASES[key]
    raise UnsupportedDistanceError(str(value), [c.value for c in DistanceCategory])


# --- Pace sets ---

@dataclass(frozen=True)
class TrackIntervals:
    """Target split times in seconds, keyed by track distance."""

    threshold: dict[str, float]
    interval: dict[str, float]

    def split(self, distance: str) -> Optional[float]:
        return self.threshold.get(distance, self.interval.get(distance))

    def to_display(self) -> dict[str, dict[str, str]]:
        return {
            "threshold": {k: format_pace(v) for k, v in self.threshold.items()},
            "interval": {k: format_pace(v) for k, v in self.interval.items()},
        }


@dataclass(frozen=True)
class PaceSet:
    easy_min: float
    easy_max: float
    marathon: float
    threshold: float
    interval: float
    track_intervals: TrackIntervals
    unit: str = "mi"
    interpolated: bool = False
    interpolated_between: Optional[tuple[str, str]] = None
    goal_time: Optional[str] = None
    distance: Optional[DistanceCategory] = None
    progress: Optional[float] = None

    def zone(self, name: str) -> float:
        if name not in PACE_ZONES:
            raise KeyError(f"Unknown pace zone: {name}")
        return getattr(self, name)

    def display(self, zone: str) -> str:
        return format_pace(self.zone(zone))

    @property
    def easy_range_display(self) -> str:
        return f"{self.display('easy_min')}-{self.display('easy_max')}"

    @property
    def easy_midpoint(self) -> float:
        return (self.easy_min + self.easy_max) / 2.0

    def in_unit(self, unit: str) -> "PaceSet":
        """Re-express zone paces per 'mi' or per 'km'; track splits are absolute."""
        if unit == self.unit:
            return self
        if unit not in ("mi", "km"):
            raise ValueError(f"unit must be one of ('mi', 'km'), got {unit!r}")
        factor = 1.0 / KM_PER_MILE if unit == "km" else KM_PER_MILE
        return replace(self, unit=unit, **{z: getattr(self, z) * factor for z in PACE_ZONES})

    def to_dict(self) -> dict[str, Any]:
        return {
            "unit": self.unit,
            "easy": {"min": self.display("easy_min"), "max": self.display("easy_max")},
            "marathon": self.display("marathon"),
            "threshold": self.display("threshold"),
            "interval": self.display("interval"),
            "track_intervals": self.track_intervals.to_display(),
            "interpolated": self.interpolated,
            "interpolated_between": list(self.interpolated_between) if self.interpolated_between else None,
            "goal_time": self.goal_time,
            "distance": self.distance.value if self.distance else None,
            "progress": self.progress,
        }


def _row_to_pace_set(row: PaceRow, distance: DistanceCategory) -> PaceSet:
    goal, (easy_min, easy_max), marathon, threshold, interval, t_splits, i_splits = row
    return PaceSet(
        easy_min=float(parse_time(easy_min)),
        easy_max=float(parse_time(easy_max)),
        marathon=float(parse_time(marathon)),
        threshold=float(parse_time(threshold)),
        interval=float(parse_time(interval)),
        track_intervals=TrackIntervals(
            threshold={d: float(parse_time(t)) for d, t in zip(THRESHOLD_SPLITS, t_splits)},
            interval={d: float(parse_time(t)) for d, t in zip(INTERVAL_SPLITS, i_splits)},
        ),
        goal_time=goal,
        distance=distance,
    )


def _sorted_rows(distance: DistanceCategory) -> list[tuple[int, PaceRow]]:
    return sorted(((parse_time(row[0]), row) for row in PACE_TABLES[distance]), key=lambda item: item[0])


def _mix(a: float, b: float, ratio: float) -> float:
    return a + (b - a) * ratio


def _mix_sets(a: PaceSet, b: PaceSet, ratio: float, **overrides: Any) -> PaceSet:
    track = TrackIntervals(
        threshold={d: _mix(v, b.track_intervals.threshold.get(d, v), ratio) for d, v in a.track_intervals.threshold.items()},
        interval={d: _mix(v, b.track_intervals.interval.get(d, v), ratio) for d, v in a.track_intervals.interval.items()},
    )
    zones = {z: _mix(getattr(a, z), getattr(b, z), ratio) for z in PACE_ZONES}
    return PaceSet(track_intervals=track, unit=a.unit, **zones, **overrides)


def available_goal_times(distance: Union[str, DistanceCategory]) -> list[str]:
    """Reference goal times for a distance, fastest first."""
    category = normalize_distance(distance)
    return [row[0] for _, row in _sorted_rows(category)]


def goal_time_range(distance: Union[str, DistanceCategory]) -> tuple[str, str]:
    times = available_goal_times(distance)
    return times[0], times[-1]


def derive_single_goal_paces(distance: Union[str, DistanceCategory], goal_time: str) -> PaceSet:
    """Training paces for one race goal.

    Exact reference entries are returned unmodified; anything between two
    entries is interpolated per pace value, track splits included.
    Raises UnsupportedDistanceError, InvalidTimeFormatError or OutOfRangeError.
    """
    category = normalize_distance(distance)
    goal_s = parse_time(goal_time)
    rows = _sorted_rows(category)
    fastest_s, fastest = rows[0]
    slowest_s, slowest = rows[-1]
    if goal_s < fastest_s or goal_s > slowest_s:
        raise OutOfRangeError(category.value, str(goal_time).strip(), fastest[0], slowest[0])

    for row_s, row in rows:
        if row_s == goal_s:
            return _row_to_pace_set(row, category)

    lower_s, lower = max((item for item in rows if item[0] <= goal_s), key=lambda item: item[0])
    upper_s, upper = min((item for item in rows if item[0] >= goal_s), key=lambda item: item[0])
    if lower is upper:
        return _row_to_pace_set(lower, category)

    ratio = (goal_s - lower_s) / (upper_s - lower_s)
    logger.debug(
        "interpolating paces",
        extra={"ctx_distance": category.value, "ctx_goal_time": goal_time, "ctx_ratio": round(ratio, 4)},
    )
    return _mix_sets(
        _row_to_pace_set(lower, category),
        _row_to_pace_set(upper, category),
        ratio,
        interpolated=True,
        interpolated_between=(lower[0], upper[0]),
        goal_time=str(goal_time).strip(),
        distance=category,
    )


# --- Progressive blending ---

@dataclass(frozen=True)
class BlendCurve:
    """Three-segment mapping from plan position (0..1) to pace progress (0..1)."""

    early_breakpoint: float = 0.3
    late_breakpoint: float = 0.7
    early_slope: float = 0.5
    middle_slope: float = 1.5
    late_slope: float = 0.833

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "BlendCurve":
        s = settings or get_settings()
        return cls(
            early_breakpoint=s.blend_early_breakpoint,
            late_breakpoint=s.blend_late_breakpoint,
            early_slope=s.blend_early_slope,
            middle_slope=s.blend_middle_slope,
            late_slope=s.blend_late_slope,
        )

    def ratio(self, raw: float) -> float:
        raw = max(0.0, min(1.0, raw))
        if raw >= 1.0:
            return 1.0
        if raw < self.early_breakpoint:
            return raw * self.early_slope
        early_end = self.early_breakpoint * self.early_slope
        if raw < self.late_breakpoint:
            return early_end + (raw - self.early_breakpoint) * self.middle_slope
        late_start = early_end + (self.late_breakpoint - self.early_breakpoint) * self.middle_slope
        return min(1.0, late_start + (raw - self.late_breakpoint) * self.late_slope)


def blend(
    current: PaceSet,
    goal: PaceSet,
    week_number: int,
    total_weeks: int,
    curve: Optional[BlendCurve] = None,
) -> PaceSet:
    """Week-specific paces moving from current fitness (week 1) to goal (final week)."""
    if total_weeks <= 1:
        return goal
    week = max(1, min(int(week_number), int(total_weeks)))
    raw = (week - 1) / (total_weeks - 1)
    ratio = (curve or BlendCurve.from_settings()).ratio(raw)
    return _mix_sets(
        current.in_unit(goal.unit),
        goal,
        ratio,
        goal_time=goal.goal_time,
        distance=goal.distance,
        progress=round(ratio, 4),
    )


@dataclass(frozen=True)
class ProgressiveGoal:
    current: PaceSet
    goal: PaceSet
    total_weeks: int
    curve: BlendCurve = field(default_factory=BlendCurve)

    def for_week(self, week_number: int) -> PaceSet:
        return blend(self.current, self.goal, week_number, self.total_weeks, self.curve)


# --- Fitness estimation (used only when no recent race exists) ---

def estimate_vdot_from_fitness(long_run: Optional[float], weekly: Optional[float]) -> int:
    """Conservative bucketed VDOT estimate from current training volume.

    An approximation, not a measurement. Clamped to 25-55.
    """
    weekly = weekly or 0
    if not long_run or long_run <= 0:
        if weekly >= 40:
            vdot = 40
        elif weekly >= 30:
            vdot = 35
        elif weekly >= 20:
            vdot = 32
        else:
            vdot = 30
    else:
        if long_run >= 18:
            vdot = 42
        elif long_run >= 15:
            vdot = 40
        elif long_run >= 13:
            vdot = 38
        elif long_run >= 10:
            vdot = 36
        elif long_run >= 8:
            vdot = 34
        elif long_run >= 6:
            vdot = 32
        else:
            vdot = 30
        if weekly >= 50:
            vdot += 2
        elif weekly < 20:
            vdot -= 2
    return max(25, min(55, vdot))


def estimate_race_time_from_vdot(vdot: float, distance: Union[str, DistanceCategory]) -> str:
    category = normalize_distance(distance)
    closest = min(VDOT_RACE_TIMES, key=lambda level: (abs(level - vdot), level))
    return VDOT_RACE_TIMES[closest][category]


def estimate_race_time_from_fitness(
    long_run: Optional[float],
    weekly: Optional[float],
    distance: Union[str, DistanceCategory],
) -> str:
    vdot = estimate_vdot_from_fitness(long_run, weekly)
    estimate = estimate_race_time_from_vdot(vdot, distance)
    logger.info(
        "estimated current fitness",
        extra={"ctx_vdot": vdot, "ctx_distance": normalize_distance(distance).value, "ctx_estimate": estimate},
    )
    return estimate


def resolve_plan_paces(
    profile: Any,
    total_weeks: int,
    curve: Optional[BlendCurve] = None,
) -> tuple[Optional[PaceSet], Optional[ProgressiveGoal]]:
    """Goal paces for a profile plus, when current fitness is known, a progressive blend.

    Current fitness comes from a recent race, otherwise from the volume
    estimator. Returns (None, None) when the profile carries no race data.
    """
    unit = getattr(profile, "unit_label", "mi")
    goal_race = getattr(profile, "race_goal", None)
    recent_race = getattr(profile, "recent_race", None)

    goal = derive_single_goal_paces(goal_race.distance, goal_race.goal_time).in_unit(unit) if goal_race else None

    current: Optional[PaceSet] = None
    try:
        if recent_race is not None:
            current = derive_single_goal_paces(recent_race.distance, recent_race.goal_time).in_unit(unit)
        elif goal_race is not None and (getattr(profile, "current_long_run", None) or getattr(profile, "current_weekly_distance", None)):
            estimate = estimate_race_time_from_fitness(profile.current_long_run, profile.current_weekly_distance, goal_race.distance)
            current = derive_single_goal_paces(goal_race.distance, estimate).in_unit(unit)
    except InputRangeError as exc:
        # Goal paces stand alone; re-raise only when there is no goal.
        if goal is None:
            raise
        logger.warning(
            "current fitness paces unavailable, using goal paces only",
            extra={"ctx_error": type(exc).__name__, "ctx_detail": str(exc)},
        )
        current = None

    if goal is None:
        return current, None
    if current is not None and total_weeks > 1:
        return goal, ProgressiveGoal(current=current, goal=goal, total_weeks=total_weeks, curve=curve or BlendCurve.from_settings())
    return goal, None
