"""Kind-specific prescriptions built from catalog templates.

Each prescriber deep-copies the template's canonical dict, resolves range
text for the week, and substitutes the runner's paces for generic phrases.
Intervals also size the rep count to the workout distance and rebuild
the phases around the set.
"""

from __future__ import annotations

import math
import re
from copy import deepcopy
from typing import Any, Callable, Optional

from plancore.models import WorkoutKind
from plancore.services.pace_engine import KM_PER_MILE, PaceSet, format_duration, format_pace
from plancore.services.plan_parser import fix_common_typos
from plancore.services.structure_converter import convert_ranges, progression_value, rep_range
from plancore.services.workout_catalog import WorkoutTemplate

# Total warmup + cooldown distance around an interval set, per unit
WARMUP_COOLDOWN_DISTANCE = {"mi": 2.0, "km": 3.0}
_METERS_PER_UNIT = {"mi": KM_PER_MILE * 1000, "km": 1000.0}

# Generic pace phrases -> pace zone. Order matters: "half marathon pace"
# must be replaced before "marathon pace".
_PACE_PHRASES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"(?:@\s*)?\bhalf[- ]marathon(?: race)? pace\b", re.IGNORECASE), "threshold"),
    (re.compile(r"(?:@\s*)?\b10K(?: race)? (?:pace|effort)\b", re.IGNORECASE), "threshold"),
    (re.compile(r"(?:@\s*)?\b(?:tempo|threshold) (?:pace|effort)\b", re.IGNORECASE), "threshold"),
    (re.compile(r"@\s*tempo\b", re.IGNORECASE), "threshold"),
    (re.compile(r"(?<=min )tempo\b", re.IGNORECASE), "threshold"),
    (re.compile(r"(?:@\s*)?\bmarathon(?: race)? pace\b", re.IGNORECASE), "marathon"),
    (re.compile(r"(?:@\s*)?\bMP\b"), "marathon"),
    (re.compile(r"(?:@\s*)?\bVO2 ?max (?:effort|pace)\b", re.IGNORECASE), "interval"),
    (re.compile(r"(?:@\s*)?\binterval pace\b", re.IGNORECASE), "interval"),
    (re.compile(r"(?:@\s*)?\b(?:(?:3K|Mile) to )?5K(?: race)? (?:pace|effort)\b", re.IGNORECASE), "interval"),
    (re.compile(r"(?:@\s*)?\beasy (?:pace|effort)\b", re.IGNORECASE), "easy"),
)


def _fmt_distance(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def pace_text(paces: PaceSet, zone: str) -> str:
    if zone == "easy":
        return f"{paces.easy_range_display}/{paces.unit}"
    return f"{paces.display(zone)}/{paces.unit}"


def replace_generic_paces(text: Optional[str], paces: Optional[PaceSet]) -> Optional[str]:
    """Swap placeholder phrases such as 'threshold effort' for '@ 8:29/mi'."""
    if not text or paces is None:
        return text
    for pattern, zone in _PACE_PHRASES:
        text = pattern.sub(f"@ {pace_text(paces, zone)}", text)
    return text


def _prepare(
    template: WorkoutTemplate,
    paces: Optional[PaceSet],
    week_number: Optional[int],
    total_weeks: Optional[int],
) -> dict[str, Any]:
    data = deepcopy(template.to_dict())

    def finish(text: Optional[str]) -> Optional[str]:
        if not text:
            return text
        return replace_generic_paces(convert_ranges(fix_common_typos(text), week_number, total_weeks), paces)

    for key in ("description", "structure", "repetitions", "duration"):
        data[key] = finish(data[key])
    data["phases"] = [{"phase": p["phase"], "text": finish(p["text"])} for p in data["phases"]]
    data["target_pace"] = None
    return data


def _split_meters(rep_text: str) -> Optional[int]:
    match = re.search(r"x\s*(\d{3,4})\s*m\b", rep_text)
    return int(match.group(1)) if match else None


def _rep_length(template: WorkoutTemplate, unit: str) -> Optional[float]:
    """Length of one repetition in the plan's distance unit, when distance-based."""
    text = f"{template.repetitions or ''} {template.rep_distance or ''}"
    meters = re.search(r"\b(\d{3,4})\s*m\b", text)
    if meters:
        return int(meters.group(1)) / _METERS_PER_UNIT[unit]
    miles = re.search(r"\b(\d+(?:\.\d+)?)\s*miles?\b", text)
    if miles:
        return float(miles.group(1)) * (KM_PER_MILE if unit == "km" else 1.0)
    return None


def interval_rep_count(
    template: WorkoutTemplate,
    distance: Optional[float],
    unit: str = "mi",
    week_number: Optional[int] = None,
    total_weeks: Optional[int] = None,
) -> Optional[int]:
    """Repetitions that fit the target distance, clamped to the template's range.

    Each rep is counted twice to account for the recovery jog. Without a
    usable distance the count follows the week's position in the plan.
    """
    bounds = rep_range(template.repetitions)
    if bounds is None:
        return None
    low, high = bounds
    rep_length = _rep_length(template, unit)
    if distance and rep_length:
        available = distance - WARMUP_COOLDOWN_DISTANCE.get(unit, 2.0)
        reps = math.floor(available / (rep_length * 2)) if available > 0 else low
        return max(low, min(high, reps))
    return progression_value(low, high, week_number, total_weeks)


# --- Kind-specific prescriptions ---

def prescribe_tempo(
    template: WorkoutTemplate,
    paces: Optional[PaceSet],
    distance: Optional[float],
    week_number: Optional[int] = None,
    total_weeks: Optional[int] = None,
    unit: str = "mi",
) -> dict[str, Any]:
    data = _prepare(template, paces, week_number, total_weeks)
    if paces:
        data["target_pace"] = pace_text(paces, "threshold")
    return data


def prescribe_interval(
    template: WorkoutTemplate,
    paces: Optional[PaceSet],
    distance: Optional[float],
    week_number: Optional[int] = None,
    total_weeks: Optional[int] = None,
    unit: str = "mi",
) -> dict[str, Any]:
    reps = interval_rep_count(template, distance, unit, week_number, total_weeks)
    repetitions = template.repetitions or ""
    if reps is not None:
        repetitions = re.sub(r"\d+(?:-\d+)?\s*x\s*", f"{reps} x ", repetitions, count=1)
    data = _prepare(template, paces, week_number, total_weeks)
    data["repetitions"] = repetitions
    data["rep_count"] = reps

    name = template.name
    if paces:
        split_m = _split_meters(repetitions)
        split = paces.track_intervals.split(f"{split_m}m") if split_m else None
        if split_m and split is None:
            split = paces.interval * split_m / _METERS_PER_UNIT[paces.unit]
        if split_m and split:
            per_unit = split / split_m * _METERS_PER_UNIT[paces.unit]
            name = f"{name} ({format_pace(split)}/{split_m}m = {format_pace(per_unit)}/{paces.unit})"
            repetitions = re.sub(
                rf"(\d+)\s*x\s*{split_m}m\b", rf"\1 x {split_m}m ({format_pace(split)} each)", repetitions
            )
        else:
            name = f"{name} ({pace_text(paces, 'interval')})"
            repetitions = re.sub(
                r"(\d+)\s*x\s*(\d+(?:\.\d+)?)\s*miles?\b",
                lambda m: f"{m.group(1)} x {m.group(2)} mile{'s' if m.group(2) != '1' else ''} @ {pace_text(paces, 'interval')}",
                repetitions,
            )
        data["repetitions"] = repetitions
        data["target_pace"] = pace_text(paces, "interval")

    half = _fmt_distance(WARMUP_COOLDOWN_DISTANCE.get(unit, 2.0) / 2)
    easy = f" ({pace_text(paces, 'easy')})" if paces else ""
    warmup = f"{half} {unit} easy{easy} + dynamic warmup + 4 strides"
    cooldown = f"{half} {unit} easy{easy}"
    recovery = template.recovery or "easy jog between reps"
    data["name"] = name
    data["phases"] = [
        {"phase": "warmup", "text": warmup},
        {"phase": "main", "text": repetitions},
        {"phase": "recovery", "text": recovery},
        {"phase": "cooldown", "text": cooldown},
    ]
    data["structure"] = f"{warmup} + {repetitions} with {recovery} + {cooldown}"
    return data


def prescribe_long_run(
    template: WorkoutTemplate,
    paces: Optional[PaceSet],
    distance: Optional[float],
    week_number: Optional[int] = None,
    total_weeks: Optional[int] = None,
    unit: str = "mi",
) -> dict[str, Any]:
    data = _prepare(template, paces, week_number, total_weeks)
    unit_word = "Mile" if unit == "mi" else "K"
    name = template.name
    if distance:
        name = f"{_fmt_distance(distance)}-{unit_word} {name}"
    if paces:
        name = f"{name} ({pace_text(paces, 'easy')})"
        data["target_pace"] = pace_text(paces, "easy")
        if distance:
            data["estimated_duration"] = format_duration(distance * paces.easy_midpoint)
    data["name"] = name
    return data


def prescribe_hill(
    template: WorkoutTemplate,
    paces: Optional[PaceSet],
    distance: Optional[float],
    week_number: Optional[int] = None,
    total_weeks: Optional[int] = None,
    unit: str = "mi",
) -> dict[str, Any]:
    data = _prepare(template, paces, week_number, total_weeks)
    if paces:
        data["target_pace"] = pace_text(paces, "threshold")
    return data


PRESCRIBERS: dict[WorkoutKind, Callable[..., dict[str, Any]]] = {
    WorkoutKind.TEMPO: prescribe_tempo,
    WorkoutKind.INTERVAL: prescribe_interval,
    WorkoutKind.LONG_RUN: prescribe_long_run,
    WorkoutKind.HILL: prescribe_hill,
}


def prescribe(
    template: WorkoutTemplate,
    paces: Optional[PaceSet],
    distance: Optional[float],
    week_number: Optional[int] = None,
    total_weeks: Optional[int] = None,
    unit: str = "mi",
) -> dict[str, Any]:
    """Concrete prescription for a template, with this week's paces substituted."""
    return PRESCRIBERS[template.kind](template, paces, distance, week_number, total_weeks, unit)
