"""Best-effort correction of generator non-compliance, plus post-repair checks.

Repair touches the runner's quality-session days and long-run day only.
Anything it cannot fix is reported as a PlanWarning; the plan is always
returned.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

from plancore.config import Settings, get_settings
from plancore.diagnostics import DiagnosticLog
from plancore.logging_config import get_logger
from plancore.models import (
    FOCUS_BY_TYPE,
    HARD_TYPES,
    EnrichedWeek,
    EnrichedWorkout,
    PlanWarning,
    WorkoutType,
    canonical_day,
)
from plancore.services.pace_engine import KM_PER_MILE, PaceSet
from plancore.services.workout_prescription import pace_text, replace_generic_paces

logger = get_logger(__name__)

_LONG_RUN_TEXT_RE = re.compile(r"\blong[\s-]*run\b", re.IGNORECASE)


def _quality_days(profile: Any) -> list[str]:
    days = []
    for raw in getattr(profile, "quality_days", None) or []:
        day = canonical_day(raw)
        if day and day not in days:
            days.append(day)
    return days


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _weeks_of(plan: Any) -> list[EnrichedWeek]:
    return plan.weeks if hasattr(plan, "weeks") else plan


def generate_default_hard_workout(
    day: str,
    week_number: int,
    distance: Optional[float] = None,
    paces: Optional[PaceSet] = None,
    unit: str = "mi",
    settings: Optional[Settings] = None,
) -> EnrichedWorkout:
    """Minimal self-contained quality session: tempo in odd weeks, intervals in even weeks."""
    settings = settings or get_settings()
    d = distance or settings.default_hard_workout_distance
    if week_number % 2 == 1:
        workout_type = WorkoutType.TEMPO
        tempo_distance = max(2, math.floor(d * 0.4))
        name = f"Tempo Run {_fmt(d)} {unit}"
        description = f"{name} (2 {unit} warmup, {tempo_distance} {unit} @ tempo pace, 1 {unit} cooldown)"
        zone = "threshold"
    else:
        workout_type = WorkoutType.INTERVALS
        name = f"Interval Run {_fmt(d)} {unit}"
        description = f"{name} (2 {unit} warmup, 4x800m @ interval pace, 2 {unit} cooldown)"
        zone = "interval"

    return EnrichedWorkout(
        day=day,
        description=replace_generic_paces(description, paces),
        type=workout_type,
        focus=FOCUS_BY_TYPE[workout_type],
        distance=d,
        name=name,
        target_pace=pace_text(paces, zone) if paces else None,
        repaired=True,
    )


def fix_hard_day_violations(
    plan: Any,
    profile: Any,
    unit: str = "mi",
    settings: Optional[Settings] = None,
    diagnostics: Optional[DiagnosticLog] = None,
) -> Any:
    """Make every quality day hold a tempo, interval or hill session.

    Violating days are overwritten in place with a generated workout.
    Accepts a CompiledPlan or a list of EnrichedWeek and returns it mutated.
    Quality days missing from a week (a partial first week) are left alone.
    """
    weeks = _weeks_of(plan)
    if diagnostics is None:
        diagnostics = DiagnosticLog("repair", logger)
    quality_days = _quality_days(profile)
    if not quality_days:
        return plan

    for week in weeks:
        for day in quality_days:
            idx = week.workout_index(day)
            if idx is None:
                continue
            current = week.workouts[idx]
            if current.type in HARD_TYPES:
                continue
            replacement = generate_default_hard_workout(
                day, week.week_number, current.distance, week.paces, unit, settings
            )
            week.workouts[idx] = replacement
            diagnostics.record(
                "quality_day_repaired",
                f"Week {week.week_number} {day}: replaced {current.type.value} with {replacement.type.value}",
                week_number=week.week_number,
                day=day,
                replaced_type=current.type.value,
                replaced_description=current.description,
            )
    return plan


def _has_long_run(week: EnrichedWeek, long_run_day: str) -> bool:
    return any(
        w.type == WorkoutType.LONG_RUN
        or (w.day == long_run_day and _LONG_RUN_TEXT_RE.search(f"{w.description} {w.name or ''}"))
        for w in week.workouts
    )


def _long_run_distance(previous: Optional[EnrichedWeek], unit: str, settings: Settings) -> float:
    scale = KM_PER_MILE if unit == "km" else 1.0
    cap = round(settings.max_long_run_distance * scale)
    if previous is not None:
        prior = [w.distance for w in previous.workouts if w.type == WorkoutType.LONG_RUN and w.distance]
        if prior:
            return min(prior[0] + 1, cap)
    return round(settings.default_long_run_distance * scale)


def fix_missing_long_runs(
    plan: Any,
    profile: Any,
    unit: str = "mi",
    settings: Optional[Settings] = None,
    diagnostics: Optional[DiagnosticLog] = None,
) -> Any:
    """Give every week except the last a long run on the runner's long-run day.

    The final week is race week and is left alone. The added run is one unit
    longer than the previous week's long run, capped, or the default distance
    when there is none. A workout already on the long-run day is replaced in
    place unless it is a race.
    """
    weeks = _weeks_of(plan)
    settings = settings or get_settings()
    if diagnostics is None:
        diagnostics = DiagnosticLog("repair", logger)
    long_run_day = getattr(profile, "effective_long_run_day", None)
    if not long_run_day:
        return plan

    for position, week in enumerate(weeks[:-1]):
        if _has_long_run(week, long_run_day):
            continue
        idx = week.workout_index(long_run_day)
        if idx is not None and week.workouts[idx].type == WorkoutType.RACE:
            continue

        distance = _long_run_distance(weeks[position - 1] if position else None, unit, settings)
        name = f"Long Run {_fmt(distance)} {unit}"
        long_run = EnrichedWorkout(
            day=long_run_day,
            description=name,
            type=WorkoutType.LONG_RUN,
            focus=FOCUS_BY_TYPE[WorkoutType.LONG_RUN],
            distance=distance,
            name=name,
            target_pace=pace_text(week.paces, "easy") if week.paces else None,
            repaired=True,
        )
        replaced = None
        if idx is None:
            week.workouts.append(long_run)
        else:
            replaced = week.workouts[idx]
            week.workouts[idx] = long_run
        diagnostics.record(
            "long_run_added",
            f"Week {week.week_number} {long_run_day}: added {name}",
            week_number=week.week_number,
            day=long_run_day,
            replaced_type=replaced.type.value if replaced else None,
        )
    return plan


# --- Post-repair validation ---

def validate_workouts_parsed(weeks: list[EnrichedWeek]) -> list[PlanWarning]:
    if not weeks:
        return [PlanWarning(code="NO_WEEKS", message="No weeks could be parsed from the plan text")]
    return [
        PlanWarning(code="EMPTY_WEEK", message=f"Week {w.week_number} has no workouts", week_number=w.week_number)
        for w in weeks
        if not w.workouts
    ]


def validate_hard_days(weeks: list[EnrichedWeek], profile: Any) -> list[PlanWarning]:
    warnings: list[PlanWarning] = []
    for week in weeks:
        for day in _quality_days(profile):
            idx = week.workout_index(day)
            if idx is not None and week.workouts[idx].type not in HARD_TYPES:
                warnings.append(PlanWarning(
                    code="QUALITY_DAY_NOT_HARD",
                    message=f"Week {week.week_number} {day} is a quality day without a hard session",
                    week_number=week.week_number,
                    day=day,
                ))
    return warnings


def validate_rest_days(weeks: list[EnrichedWeek], profile: Any) -> list[PlanWarning]:
    rest_days = [d for d in (canonical_day(r) for r in getattr(profile, "rest_days", None) or []) if d]
    warnings: list[PlanWarning] = []
    for week in weeks:
        for workout in week.workouts:
            if workout.day in rest_days and workout.type not in (WorkoutType.REST, WorkoutType.REST_OR_XT):
                warnings.append(PlanWarning(
                    code="REST_DAY_SCHEDULED",
                    message=f"Week {week.week_number} {workout.day} is a rest day but has a {workout.type.value} workout",
                    week_number=week.week_number,
                    day=workout.day,
                ))
    return warnings


def validate_weekly_distance(weeks: list[EnrichedWeek], unit: str = "mi", tolerance: float = 2.0) -> list[PlanWarning]:
    """Flag weeks whose header total disagrees with the sum of their workouts.

    Weeks without a header total, and race weeks (the race is not itemized),
    are not checked.
    """
    warnings: list[PlanWarning] = []
    for week in weeks:
        if not week.total_distance or any(w.type == WorkoutType.RACE for w in week.workouts):
            continue
        actual = round(sum(
            w.distance for w in week.workouts
            if w.distance and w.type not in (WorkoutType.REST, WorkoutType.REST_OR_XT)
        ), 1)
        if actual and abs(actual - week.total_distance) > tolerance:
            warnings.append(PlanWarning(
                code="MILEAGE_MISMATCH",
                message=(
                    f"Week {week.week_number} header says {_fmt(week.total_distance)} {unit} "
                    f"but its workouts add up to {_fmt(actual)} {unit}"
                ),
                week_number=week.week_number,
            ))
    return warnings


def validate_plan(weeks: list[EnrichedWeek], profile: Any, settings: Optional[Settings] = None) -> list[PlanWarning]:
    settings = settings or get_settings()
    warnings = validate_workouts_parsed(weeks)
    if profile is not None:
        warnings += validate_hard_days(weeks, profile)
        warnings += validate_rest_days(weeks, profile)
    unit = getattr(profile, "unit_label", "mi") if profile is not None else "mi"
    warnings += validate_weekly_distance(weeks, unit, settings.mileage_tolerance)
    for warning in warnings:
        logger.warning(
            warning.message,
            extra={"ctx_code": warning.code, "ctx_week_number": warning.week_number, "ctx_day": warning.day},
        )
    return warnings
