"""Tests for the plan text parser."""

from __future__ import annotations

import pytest

from plancore.models import WorkoutKind, WorkoutType
from plancore.services.plan_parser import (
    PaceHint,
    Unrecognized,
    WeekHeader,
    WorkoutLine,
    classify_fallback_type,
    classify_line,
    extract_distance,
    extract_reference,
    fix_common_typos,
    parse_plan_text,
)
from plancore.validators import PlanProfile

EXAMPLE = (
    "### Week 2 (Jan 5 - Jan 11) - 24 miles\n"
    "- Tue: [WORKOUT_ID: tempo_THRESHOLD_0] Tempo Run 6 miles\n"
    "- Sun: Easy 4 miles"
)

FULL_WEEK = """\
Monday: Rest
Tuesday: [WORKOUT_ID: interval_VO2_MAX_0] 800m repeats 6 miles
Wednesday: Easy 4 miles
Thursday: [WORKOUT_ID: tempo_TRADITIONAL_TEMPO_0] Tempo 5 miles
Friday: Rest or cross-train
Saturday: Easy 3 miles
Sunday: [WORKOUT_ID: longrun_TRADITIONAL_EASY_0] Long run 10 miles
"""


# --- Line classification ---

def test_classify_week_header_uses_last_distance():
    item = classify_line("## Week 3: Nov 28 - Dec 4 (32 miles)")
    assert item == WeekHeader(week_number=3, distance=32)


def test_classify_week_header_without_distance():
    assert classify_line("**Week 7**") == WeekHeader(week_number=7, distance=0)


def test_classify_week_header_km():
    assert classify_line("Week 4 - 42.5 km").distance == 42.5


@pytest.mark.parametrize("line", ["week 3 - 20 miles", "### WEEK 3 - 20 miles", "**wEEk 3** 20 miles"])
def test_classify_week_header_any_case(line):
    assert classify_line(line) == WeekHeader(week_number=3, distance=20)


def test_parse_lowercase_week_headers():
    plan = parse_plan_text("week 1 - 10 miles\n- Tue: Easy 4 miles\nweek 2\n- Tue: Easy 5 miles\n")
    assert [w.week_number for w in plan.weeks] == [1, 2]


@pytest.mark.parametrize("line,day", [
    ("- Tue: Easy 4 miles", "Tuesday"),
    ("* **Thurs:** Tempo 5 miles", "Thursday"),
    ("Monday - Rest", "Monday"),
    ("  Sat: Long run 12 miles", "Saturday"),
    ("• Wednesday: Easy 3 miles", "Wednesday"),
])
def test_classify_day_lines(line, day):
    item = classify_line(line)
    assert isinstance(item, WorkoutLine)
    assert item.day == day


def test_classify_pace_hint():
    item = classify_line("Easy pace: 10:32-11:32/mile, Tempo pace: 9:09/mile")
    assert isinstance(item, PaceHint)
    assert item.zones["easy"] == "10:32-11:32"
    assert item.zones["threshold"] == "9:09"


def test_classify_unrecognized():
    assert isinstance(classify_line("Here is your personalized plan!"), Unrecognized)


# --- References and distances ---

def test_extract_reference_with_prefix():
    ref, text = extract_reference("[WORKOUT_ID: tempo_THRESHOLD_0] Tempo Run 6 miles")
    assert ref.kind is WorkoutKind.TEMPO
    assert ref.category == "THRESHOLD"
    assert ref.index == 0
    assert text == "Tempo Run 6 miles"


def test_extract_reference_bare_token_and_multiword_category():
    ref, text = extract_reference("Speed day  [interval_VO2_MAX_1]  1000m repeats")
    assert ref.kind is WorkoutKind.INTERVAL
    assert ref.category == "VO2_MAX"
    assert ref.index == 1
    assert text == "Speed day 1000m repeats"


def test_extract_reference_absent():
    ref, text = extract_reference("Easy   4 miles")
    assert ref is None
    assert text == "Easy 4 miles"


def test_extract_distance():
    assert extract_distance("Tempo Run 6 miles") == 6
    assert extract_distance("Easy 6.5 mi") == 6.5
    assert extract_distance("Bike 10 RunEQ miles") == 10
    assert extract_distance("Hill repeats 6 x 90 sec") is None


def test_fix_common_typos():
    assert fix_common_typos("Easy 4 milees with 2 minuites recovry") == "Easy 4 miles with 2 minutes recovery"


# --- Fallback classification ---

@pytest.mark.parametrize("text,expected", [
    ("Rest", WorkoutType.REST),
    ("Rest Day", WorkoutType.REST),
    ("Rest or cross-train", WorkoutType.REST_OR_XT),
    ("Rest/XT 30 min", WorkoutType.REST_OR_XT),
    ("Yoga and mobility", WorkoutType.REST_OR_XT),
    ("Bike 20 miles", WorkoutType.BIKE),
    ("Ride 12 RunEQ miles", WorkoutType.BIKE),
    ("Race Day!", WorkoutType.RACE),
    ("Long run 10 miles", WorkoutType.LONG_RUN),
    ("Hill repeats 6 x 90 sec", WorkoutType.HILLS),
    ("Tempo 3 x 10 min with 2 min rest", WorkoutType.TEMPO),
    ("6 x 800m at 5K pace", WorkoutType.INTERVALS),
    ("VO2 max session", WorkoutType.INTERVALS),
    ("Easy 4 miles", WorkoutType.EASY),
    ("Recovery jog", WorkoutType.EASY),
    ("Strength session", WorkoutType.UNRESOLVED),
    ("", WorkoutType.UNRESOLVED),
])
def test_classify_fallback_type(text, expected):
    assert classify_fallback_type(text) is expected


# --- Whole-plan parsing ---

def test_parse_example_plan():
    plan = parse_plan_text(EXAMPLE)
    assert len(plan.weeks) == 1
    week = plan.weeks[0]
    assert week.week_number == 2
    assert week.total_distance == 24

    tue, sun = week.workouts
    assert tue.day == "Tuesday"
    assert tue.reference.kind is WorkoutKind.TEMPO
    assert tue.reference.category == "THRESHOLD"
    assert tue.reference.index == 0
    assert tue.distance == 6
    assert tue.description == "Tempo Run 6 miles"

    assert sun.day == "Sunday"
    assert sun.reference is None
    assert sun.inferred_type is WorkoutType.EASY
    assert sun.distance == 4
    assert plan.total_weeks == 2


def test_partial_first_week_then_full_weeks():
    text = (
        "Week 1 - 10 miles\n"
        "Sat: Easy 3 miles\n"
        "Sun: Long run 7 miles\n"
        "Week 2 - 30 miles\n" + FULL_WEEK +
        "Week 3 - 32 miles\n" + FULL_WEEK
    )
    plan = parse_plan_text(text)
    assert [w.week_number for w in plan.weeks] == [1, 2, 3]
    assert [len(w.workouts) for w in plan.weeks] == [2, 7, 7]
    assert [w.total_distance for w in plan.weeks] == [10, 30, 32]


def test_duplicate_week_keeps_first_occurrence():
    text = (
        "Week 1 - 20 miles\n"
        "Mon: Easy 3 miles\n"
        "Week 1 - 30 miles\n"
        "Mon: Tempo 5 miles\n"
        "Week 2 - 25 miles\n"
        "Tue: Easy 4 miles\n"
    )
    plan = parse_plan_text(text)
    assert [w.week_number for w in plan.weeks] == [1, 2]
    first = plan.weeks[0]
    assert first.total_distance == 20
    assert [w.description for w in first.workouts] == ["Easy 3 miles"]
    codes = [d.code for d in plan.diagnostics]
    assert "duplicate_week" in codes
    assert "orphan_workout_line" in codes


def test_starting_week_skips_earlier_weeks():
    text = "".join(f"Week {n} - {20 + n} miles\nTue: Easy 4 miles\n" for n in range(1, 5))
    plan = parse_plan_text(text, starting_week=3)
    assert [w.week_number for w in plan.weeks] == [3, 4]
    skipped = [d for d in plan.diagnostics if d.code == "week_before_start"]
    assert [d.week_number for d in skipped] == [1, 2]


def test_orphan_day_line_is_recorded():
    plan = parse_plan_text("Mon: Easy 3 miles\nWeek 1\nTue: Easy 4 miles")
    assert len(plan.weeks) == 1
    assert len(plan.weeks[0].workouts) == 1
    orphan = next(d for d in plan.diagnostics if d.code == "orphan_workout_line")
    assert orphan.line_number == 1
    assert orphan.stage == "parse"
    assert orphan.detail["day"] == "Monday"


def test_unrecognized_lines_are_recorded_not_fatal():
    plan = parse_plan_text("Here is your plan\n\nWeek 1 - 12 miles\nTue: Easy 4 miles")
    assert len(plan.weeks) == 1
    unrecognized = [d for d in plan.diagnostics if d.code == "unrecognized_line"]
    assert len(unrecognized) == 1
    assert unrecognized[0].line_number == 1


def test_no_weeks_found():
    plan = parse_plan_text("Sorry, I cannot help with that.")
    assert plan.weeks == []
    assert plan.total_weeks == 0
    assert "no_weeks" in [d.code for d in plan.diagnostics]


def test_empty_text():
    plan = parse_plan_text("")
    assert plan.weeks == []
    assert plan.full_text == ""


def test_pace_hints_collected_first_value_wins():
    text = (
        "Training paces: Easy 10:30-11:30, Tempo 9:05\n"
        "Week 1 - 15 miles\n"
        "Tue: Tempo 4 miles\n"
        "Tempo: 8:55\n"
    )
    plan = parse_plan_text(text)
    assert plan.pace_hints["easy"] == "10:30-11:30"
    assert plan.pace_hints["threshold"] == "9:05"


def test_typos_fixed_before_distance_extraction():
    plan = parse_plan_text("Week 1\nWed: Easy 5 milees")
    workout = plan.weeks[0].workouts[0]
    assert workout.description == "Easy 5 miles"
    assert workout.distance == 5


def test_full_text_is_preserved():
    assert parse_plan_text(EXAMPLE).full_text == EXAMPLE


def test_profile_resolves_paces():
    profile = PlanProfile(race_distance="10K", race_time="55:00", recent_race_time="60:00")
    plan = parse_plan_text(EXAMPLE, profile=profile)
    assert plan.paces.display("threshold") == "9:09"
    assert plan.progressive is not None
    assert plan.progressive.total_weeks == 2
