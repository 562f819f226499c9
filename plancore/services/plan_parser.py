"""Line-oriented parser for generated plan text.

Each line is classified by a pure function into one of four tagged
variants: WeekHeader, WorkoutLine, PaceHint or Unrecognized. The only
state carried between lines is the currently open week. Anything the
parser skips is recorded as a DiagnosticEvent on the result rather than
raised, since generator formatting is inherently unreliable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from plancore.diagnostics import DiagnosticLog
from plancore.logging_config import get_logger
from plancore.models import (
    ParsedPlan,
    ParsedWeek,
    ParsedWorkout,
    WorkoutReference,
    WorkoutType,
    canonical_day,
    parse_kind,
)
from plancore.services.pace_engine import resolve_plan_paces

logger = get_logger(__name__)


# --- Line variants ---

@dataclass(frozen=True)
class WeekHeader:
    week_number: int
    distance: float


@dataclass(frozen=True)
class WorkoutLine:
    day: str
    text: str


@dataclass(frozen=True)
class PaceHint:
    zones: dict[str, str]


@dataclass(frozen=True)
class Unrecognized:
    text: str


Line = Union[WeekHeader, WorkoutLine, PaceHint, Unrecognized]


# --- Patterns ---

_WEEK_HEADER_RE = re.compile(r"^[\s#*_]*Week\s+(\d+)\b", re.IGNORECASE)
_DISTANCE_UNIT = r"(?:miles?|mi|kilometers?|kilometres?|km)"
# Week totals: every "<n> <unit>" on the header line; the last one wins so
# calendar tokens such as "Nov 28" earlier in the line are not mistaken for it.
_WEEK_DISTANCE_RE = re.compile(rf"(\d+(?:\.\d+)?)\s*{_DISTANCE_UNIT}\b", re.IGNORECASE)
_DAY_LINE_RE = re.compile(
    r"^\s*[-*•+\s]*\**\s*"
    r"(Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday|Mon|Tues|Tue|Wed|Thurs|Thur|Thu|Fri|Sat|Sun)"
    r"\.?\**\s*[:\-–]\s*(.+)$",
    re.IGNORECASE,
)
_REFERENCE_RE = re.compile(
    r"\[\s*(?:WORKOUT_ID\s*:\s*)?(tempo|intervals|interval|longrun|long_run|long-run|hills|hill)_(.+?)_(\d+)\s*\]",
    re.IGNORECASE,
)
_WORKOUT_DISTANCE_RE = re.compile(
    rf"(\d+(?:\.\d+)?)\s*(?:RunEQ\s+)?{_DISTANCE_UNIT}\b",
    re.IGNORECASE,
)

_PACE_VALUE = r"[^\d\n]{0,40}?(\d{1,2}:\d{2}(?:\s*[-–]\s*\d{1,2}:\d{2})?)"
_PACE_HINT_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("easy", re.compile(r"\bEasy\b" + _PACE_VALUE, re.IGNORECASE)),
    ("threshold", re.compile(r"\b(?:Tempo|Threshold)\b" + _PACE_VALUE, re.IGNORECASE)),
    ("half_marathon", re.compile(r"\b(?:Half[- ]Marathon Pace|HMP|Goal Pace)\b" + _PACE_VALUE, re.IGNORECASE)),
    ("marathon", re.compile(r"(?:(?<!Half )(?<!Half-)\bMarathon Pace\b|\bMP\b)" + _PACE_VALUE, re.IGNORECASE)),
    ("10k", re.compile(r"\b10K Pace\b" + _PACE_VALUE, re.IGNORECASE)),
    ("5k", re.compile(r"\b5K Pace\b" + _PACE_VALUE, re.IGNORECASE)),
    ("interval", re.compile(r"(?<!Cruise )\b(?:VO2(?:\s*max)?|Intervals?)\b" + _PACE_VALUE, re.IGNORECASE)),
)

# Ordered keyword table: first match wins, UNRESOLVED when nothing matches.
FALLBACK_KEYWORDS: tuple[tuple[WorkoutType, re.Pattern], ...] = (
    (WorkoutType.REST, re.compile(r"^\s*(?:complete |full )?(?:rest(?: day)?|day off|off)\s*[.!]?\s*$", re.IGNORECASE)),
    (WorkoutType.REST_OR_XT, re.compile(
        r"^\s*(?:rest|off)\b|\brest\s*(?:/|or|and|&)\s*\w+|^\s*(?:xt|cross[- ]?train\w*)\b|\b(?:yoga|mobility)\b",
        re.IGNORECASE)),
    (WorkoutType.BIKE, re.compile(r"\b(?:ride|riding|bike|biking|cycl\w*|runeq|spin)\b", re.IGNORECASE)),
    (WorkoutType.RACE, re.compile(r"\brace\s*day\b|\b(?:goal|target)\s+race\b|^\s*race\b(?!\s*pace)", re.IGNORECASE)),
    (WorkoutType.LONG_RUN, re.compile(r"\blong[\s-]*runs?\b|^\s*long\b", re.IGNORECASE)),
    (WorkoutType.HILLS, re.compile(r"\bhills?\b", re.IGNORECASE)),
    (WorkoutType.TEMPO, re.compile(r"\b(?:tempo|threshold|cruise)\b", re.IGNORECASE)),
    (WorkoutType.INTERVALS, re.compile(
        r"\b(?:intervals?|vo2(?:\s*max)?|repeats|reps|fartlek|track|speed work)\b|\b\d+\s*x\s*\d{3,4}\s*m\b",
        re.IGNORECASE)),
    (WorkoutType.EASY, re.compile(
        r"\b(?:easy|recovery|jog|shake-?out|strides|aerobic|base|run|miles?|km)\b", re.IGNORECASE)),
)

_TYPO_FIXES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"\b(?:miless|milees|milles|milse)\b", re.IGNORECASE), "miles"),
    (re.compile(r"\bmile s\b", re.IGNORECASE), "miles"),
    (re.compile(r"\b(?:minuites|minuetes|minuts)\b", re.IGNORECASE), "minutes"),
    (re.compile(r"\brecovry\b", re.IGNORECASE), "recovery"),
)


# --- Pure helpers ---

def fix_common_typos(text: str) -> str:
    for pattern, replacement in _TYPO_FIXES:
        text = pattern.sub(replacement, text)
    return text


def classify_fallback_type(text: str) -> WorkoutType:
    for workout_type, pattern in FALLBACK_KEYWORDS:
        if pattern.search(text or ""):
            return workout_type
    return WorkoutType.UNRESOLVED


def extract_reference(text: str) -> tuple[Optional[WorkoutReference], str]:
    """Pull the first [WORKOUT_ID: kind_category_index] token out of text.

    Returns the reference (or None) and the text with every token removed.
    """
    match = _REFERENCE_RE.search(text)
    reference = None
    if match:
        reference = WorkoutReference(
            kind=parse_kind(match.group(1)),
            category=match.group(2).strip(),
            index=int(match.group(3)),
        )
    cleaned = re.sub(r"\s+", " ", _REFERENCE_RE.sub(" ", text)).strip()
    return reference, cleaned


def extract_distance(text: str) -> Optional[float]:
    match = _WORKOUT_DISTANCE_RE.search(text or "")
    if not match:
        return None
    value = float(match.group(1))
    return int(value) if value.is_integer() else value


def _extract_pace_hints(line: str) -> dict[str, str]:
    zones: dict[str, str] = {}
    for zone, pattern in _PACE_HINT_PATTERNS:
        match = pattern.search(line)
        if match:
            zones[zone] = re.sub(r"\s*[-–]\s*", "-", match.group(1))
    return zones


def classify_line(line: str) -> Line:
    header = _WEEK_HEADER_RE.match(line)
    if header:
        distances = _WEEK_DISTANCE_RE.findall(line[header.end():])
        distance = float(distances[-1]) if distances else 0.0
        return WeekHeader(week_number=int(header.group(1)), distance=int(distance) if distance.is_integer() else distance)

    day_line = _DAY_LINE_RE.match(line)
    if day_line:
        day = canonical_day(day_line.group(1))
        text = day_line.group(2).strip().lstrip("*").strip()
        if day and text:
            return WorkoutLine(day=day, text=text)

    zones = _extract_pace_hints(line)
    if zones:
        return PaceHint(zones=zones)
    return Unrecognized(text=line)


def _build_workout(item: WorkoutLine, line_number: int) -> ParsedWorkout:
    text = fix_common_typos(item.text.rstrip("*").strip())
    reference, cleaned = extract_reference(text)
    return ParsedWorkout(
        day=item.day,
        description=cleaned,
        reference=reference,
        inferred_type=None if reference else classify_fallback_type(cleaned),
        distance=extract_distance(cleaned),
        line_number=line_number,
    )


# --- Parser ---

def parse_plan_text(
    raw_text: str,
    profile: Optional[Any] = None,
    starting_week: Optional[int] = None,
) -> ParsedPlan:
    """Parse generated plan text into weeks of workouts.

    A new week header flushes the open week. Repeated week numbers keep the
    first occurrence, and with starting_week set (regeneration mode) earlier
    weeks are skipped so the result can be spliced into an existing plan.
    Day lines with no open week are dropped. When a profile is given the
    plan's paces are resolved as well; input-range errors propagate.
    """
    diagnostics = DiagnosticLog("parse", logger)
    weeks: list[ParsedWeek] = []
    seen: set[int] = set()
    current: Optional[ParsedWeek] = None
    pace_hints: dict[str, str] = {}

    for line_number, line in enumerate((raw_text or "").splitlines(), start=1):
        item = classify_line(line)

        if isinstance(item, WeekHeader):
            if current is not None:
                weeks.append(current)
                current = None
            number = item.week_number
            if number < 1:
                diagnostics.record("invalid_week_number", f"Week {number} is not a positive week number",
                                   line_number=line_number, week_number=number)
            elif starting_week is not None and number < starting_week:
                diagnostics.record("week_before_start", f"Skipping week {number} before starting week {starting_week}",
                                   line_number=line_number, week_number=number)
            elif number in seen:
                diagnostics.record("duplicate_week", f"Skipping repeated header for week {number}",
                                   line_number=line_number, week_number=number)
            else:
                seen.add(number)
                current = ParsedWeek(week_number=number, total_distance=item.distance)

        elif isinstance(item, WorkoutLine):
            if current is None:
                diagnostics.record("orphan_workout_line", f"Dropping {item.day} line with no open week",
                                   line_number=line_number, day=item.day)
                continue
            current.workouts.append(_build_workout(item, line_number))

        elif isinstance(item, PaceHint):
            for zone, value in item.zones.items():
                pace_hints.setdefault(zone, value)

        elif item.text.strip():
            diagnostics.record("unrecognized_line", "Ignoring unrecognized line", line_number=line_number)

    if current is not None:
        weeks.append(current)

    plan = ParsedPlan(weeks=weeks, full_text=raw_text or "", pace_hints=pace_hints, diagnostics=diagnostics.events)
    if not weeks:
        diagnostics.record("no_weeks", "No week headers found in plan text")

    if profile is not None:
        plan.paces, plan.progressive = resolve_plan_paces(profile, plan.total_weeks)

    logger.info(
        "plan text parsed",
        extra={
            "ctx_weeks": len(weeks),
            "ctx_workouts": sum(len(w.workouts) for w in weeks),
            "ctx_skipped": len(diagnostics),
        },
    )
    return plan
