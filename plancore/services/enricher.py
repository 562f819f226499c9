"""Resolve workout references and hydrate parsed weeks into enriched weeks.

Each referenced workout is resolved in isolation: any failure is logged,
recorded as a diagnostic and the workout falls back to keyword
classification. One bad reference never aborts the week or the plan.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from plancore.config import Settings, get_settings
from plancore.diagnostics import DiagnosticLog
from plancore.logging_config import get_logger
from plancore.models import (
    FOCUS_BY_TYPE,
    HARD_TYPES,
    KIND_TO_TYPE,
    EnrichedWeek,
    EnrichedWorkout,
    ParsedPlan,
    ParsedWorkout,
    WorkoutType,
    units_label,
)
from plancore.services.pace_engine import KM_PER_MILE, PaceSet, ProgressiveGoal
from plancore.services.plan_parser import classify_fallback_type
from plancore.services.structure_converter import convert_ranges
from plancore.services.workout_catalog import WorkoutCatalog, WorkoutTemplate, default_catalog
from plancore.services.workout_prescription import pace_text, prescribe

logger = get_logger(__name__)

_RUNEQ_RE = re.compile(r"\bRunEQ\b", re.IGNORECASE)


def runeq_distance(ride_distance: float, factor: float = 2.0) -> float:
    """Run-equivalent distance of a ride, rounded to the nearest half unit."""
    return round((ride_distance / factor) * 2) / 2


_SEGMENT_DISTANCE_RE = re.compile(r"(?:(\d+)\s*x\s*)?(\d+(?:\.\d+)?)\s*(miles?|mi|km)\b", re.IGNORECASE)


def template_volume(
    template: WorkoutTemplate,
    unit: str = "mi",
    week_number: Optional[int] = None,
    total_weeks: Optional[int] = None,
) -> Optional[float]:
    """Summed explicit distance of a template's segments, repeats counted.

    Segments given in minutes contribute nothing, so the result is a floor
    on the workout's volume. None when no segment carries a distance.
    """
    structure = convert_ranges(template.structure, week_number, total_weeks) or ""
    total = 0.0
    for match in _SEGMENT_DISTANCE_RE.finditer(structure):
        reps = int(match.group(1) or 1)
        value = float(match.group(2))
        is_km = match.group(3).lower() == "km"
        if is_km and unit == "mi":
            value /= KM_PER_MILE
        elif not is_km and unit == "km":
            value *= KM_PER_MILE
        total += reps * value
    if not total:
        return None
    return round(total * 2) / 2


def _default_distance(workout_type: WorkoutType, settings: Settings) -> float:
    if workout_type in HARD_TYPES or workout_type == WorkoutType.LONG_RUN:
        return settings.default_quality_distance
    return settings.default_easy_distance


def resolve_fallback(workout: ParsedWorkout, paces: Optional[PaceSet], settings: Settings, failed: bool = False) -> EnrichedWorkout:
    """Keyword-derived workout for days with no (or an unresolvable) reference."""
    inferred = workout.inferred_type or classify_fallback_type(workout.description)
    if failed and workout.reference is not None:
        workout_type = KIND_TO_TYPE[workout.reference.kind]
    elif inferred == WorkoutType.UNRESOLVED:
        workout_type = WorkoutType.EASY
    else:
        workout_type = inferred

    distance = workout.distance
    if workout_type == WorkoutType.BIKE and distance and not _RUNEQ_RE.search(workout.description):
        distance = runeq_distance(distance, settings.runeq_factor)
    if distance is None and workout_type not in (WorkoutType.REST, WorkoutType.REST_OR_XT, WorkoutType.RACE):
        distance = _default_distance(workout_type, settings) if failed else None

    target = None
    if paces is not None and workout_type in (WorkoutType.EASY, WorkoutType.LONG_RUN):
        target = pace_text(paces, "easy")
    return EnrichedWorkout.from_parsed(
        workout,
        workout_type,
        distance=distance,
        target_pace=target,
        fallback=failed,
    )


def resolve_reference(
    workout: ParsedWorkout,
    paces: Optional[PaceSet],
    catalog: WorkoutCatalog,
    week_number: int,
    total_weeks: int,
    unit: str,
    settings: Settings,
) -> EnrichedWorkout:
    reference = workout.reference
    template = catalog.get_template(reference)
    workout_type = KIND_TO_TYPE[reference.kind]

    distance = workout.distance
    if distance is None:
        volume = template_volume(template, unit, week_number, total_weeks) or 0.0
        distance = max(volume, _default_distance(workout_type, settings))

    prescription = prescribe(template, paces, distance, week_number, total_weeks, unit)
    return EnrichedWorkout.from_parsed(
        workout,
        workout_type,
        focus=template.focus or FOCUS_BY_TYPE[workout_type],
        distance=distance,
        name=prescription.get("name") or template.name,
        target_pace=prescription.get("target_pace"),
        prescription=prescription,
        enriched=True,
    )


def enrich_plan(
    parsed: ParsedPlan,
    goal_paces: Optional[PaceSet] = None,
    progressive: Optional[ProgressiveGoal] = None,
    catalog: Optional[WorkoutCatalog] = None,
    profile: Optional[Any] = None,
    settings: Optional[Settings] = None,
    diagnostics: Optional[DiagnosticLog] = None,
) -> list[EnrichedWeek]:
    """Hydrate every parsed week.

    Paces come from the progressive blend for each week when one is given,
    otherwise the static goal paces apply to the whole plan. Both default
    to the paces the parser resolved.
    """
    settings = settings or get_settings()
    catalog = catalog or default_catalog()
    if diagnostics is None:
        diagnostics = DiagnosticLog("enrich", logger)
    if goal_paces is None and progressive is None:
        goal_paces, progressive = parsed.paces, parsed.progressive
    unit = units_label(getattr(profile, "units", "imperial")) if profile is not None else (
        goal_paces.unit if goal_paces else "mi"
    )
    total_weeks = progressive.total_weeks if progressive else parsed.total_weeks

    weeks: list[EnrichedWeek] = []
    for week in parsed.weeks:
        week_paces = progressive.for_week(week.week_number) if progressive else goal_paces
        enriched_week = EnrichedWeek(week_number=week.week_number, total_distance=week.total_distance, paces=week_paces)

        for workout in week.workouts:
            if workout.reference is None:
                enriched_week.workouts.append(resolve_fallback(workout, week_paces, settings))
                continue
            try:
                enriched = resolve_reference(workout, week_paces, catalog, week.week_number, total_weeks, unit, settings)
            except Exception as exc:
                logger.warning(
                    "workout reference could not be resolved",
                    exc_info=True,
                    extra={
                        "ctx_reference": workout.reference.token,
                        "ctx_week_number": week.week_number,
                        "ctx_day": workout.day,
                    },
                )
                diagnostics.record(
                    "reference_unresolved",
                    f"{workout.reference.token}: {exc}",
                    line_number=workout.line_number,
                    week_number=week.week_number,
                    level=logging.DEBUG,
                    day=workout.day,
                    error=type(exc).__name__,
                )
                enriched = resolve_fallback(workout, week_paces, settings, failed=True)
            enriched_week.workouts.append(enriched)
        weeks.append(enriched_week)

    logger.info(
        "plan enriched",
        extra={
            "ctx_weeks": len(weeks),
            "ctx_enriched": sum(1 for w in weeks for wo in w.workouts if wo.enriched),
            "ctx_fallbacks": sum(1 for w in weeks for wo in w.workouts if wo.fallback),
        },
    )
    return weeks
