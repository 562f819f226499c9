"""Tests for kind-specific workout prescriptions."""

from __future__ import annotations

import pytest

from plancore.services.pace_engine import derive_single_goal_paces
from plancore.services.workout_catalog import WorkoutCatalog
from plancore.services.workout_prescription import (
    interval_rep_count,
    pace_text,
    prescribe,
    replace_generic_paces,
)


@pytest.fixture
def paces():
    return derive_single_goal_paces("10K", "55:00")


def _template(kind, category, index=0):
    return WorkoutCatalog().get_templates_by_category(kind, category)[index]


def test_pace_text(paces):
    assert pace_text(paces, "threshold") == "9:09/mi"
    assert pace_text(paces, "easy") == "10:32-11:32/mi"
    assert pace_text(paces.in_unit("km"), "threshold") == "5:41/km"


@pytest.mark.parametrize("text,expected", [
    ("20 min @ threshold pace", "20 min @ 9:09/mi"),
    ("3 x 10 min tempo effort", "3 x 10 min @ 9:09/mi"),
    ("2 miles @ half marathon pace", "2 miles @ 9:09/mi"),
    ("10 min @ marathon pace", "10 min @ 10:15/mi"),
    ("6 x 400m @ 5K pace", "6 x 400m @ 8:08/mi"),
    ("4 x 3 min VO2 max effort", "4 x 3 min @ 8:08/mi"),
    ("3 miles easy pace", "3 miles @ 10:32-11:32/mi"),
])
def test_replace_generic_paces(paces, text, expected):
    assert replace_generic_paces(text, paces) == expected


def test_replace_generic_paces_without_paces():
    assert replace_generic_paces("20 min @ threshold pace", None) == "20 min @ threshold pace"


def test_tempo_prescription(paces):
    data = prescribe(_template("tempo", "THRESHOLD"), paces, 6)
    assert data["name"] == "Steady Threshold Run"
    assert data["target_pace"] == "9:09/mi"
    assert data["structure"] == "2 miles easy warmup + 25 min @ 9:09/mi + 1 mile easy cooldown"
    assert data["phases"][1] == {"phase": "main", "text": "25 min @ 9:09/mi"}
    assert data["duration"] == "25 minutes"


def test_tempo_prescription_follows_week_position(paces):
    early = prescribe(_template("tempo", "TEMPO_INTERVALS", 1), paces, 6, 1, 12)
    late = prescribe(_template("tempo", "TEMPO_INTERVALS", 1), paces, 6, 12, 12)
    assert "4 x 4 min" in early["structure"]
    assert "6 x 8 min" in late["structure"]


def test_tempo_prescription_without_paces():
    data = prescribe(_template("tempo", "THRESHOLD"), None, 6)
    assert data["target_pace"] is None
    assert "@ threshold pace" in data["structure"]


def test_prescription_does_not_mutate_template(paces):
    template = _template("tempo", "THRESHOLD")
    prescribe(template, paces, 6)
    assert template.structure == "2 miles easy warmup + 20-30 min @ threshold pace + 1 mile easy cooldown"


def test_interval_rep_count_fits_distance():
    template = _template("interval", "VO2_MAX")
    assert interval_rep_count(template, 6) == 4
    assert interval_rep_count(template, 8) == 6
    # clamped to the template range
    assert interval_rep_count(template, 20) == 8
    assert interval_rep_count(template, 2) == 4


def test_interval_rep_count_metric():
    template = _template("interval", "VO2_MAX")
    # 10 km - 3 km warmup/cooldown = 7 km over 1.6 km per rep+recovery
    assert interval_rep_count(template, 10, unit="km") == 4


def test_interval_rep_count_without_distance_uses_progression():
    template = _template("interval", "VO2_MAX")
    assert interval_rep_count(template, None) == 6
    assert interval_rep_count(template, None, week_number=1, total_weeks=12) == 4


def test_interval_prescription_with_track_splits(paces):
    data = prescribe(_template("interval", "VO2_MAX"), paces, 8)
    assert data["rep_count"] == 6
    assert data["name"] == "800m Track Intervals (4:33/800m = 9:09/mi)"
    assert data["repetitions"] == "6 x 800m (4:33 each)"
    assert data["target_pace"] == "8:08/mi"
    phases = {p["phase"]: p["text"] for p in data["phases"]}
    assert phases["warmup"] == "1 mi easy (10:32-11:32/mi) + dynamic warmup + 4 strides"
    assert phases["main"] == "6 x 800m (4:33 each)"
    assert phases["recovery"] == "400m jog (2-3 minutes)"
    assert phases["cooldown"] == "1 mi easy (10:32-11:32/mi)"
    assert data["structure"].startswith("1 mi easy (10:32-11:32/mi) + dynamic warmup + 4 strides + 6 x 800m")


def test_interval_prescription_short_split(paces):
    data = prescribe(_template("interval", "SHORT_SPEED", 1), paces, 4)
    assert data["repetitions"].startswith("5 x 400m (2:01 each)")
    assert "(2:01/400m = " in data["name"]


def test_interval_prescription_mile_repeats(paces):
    data = prescribe(_template("interval", "LONG_INTERVALS", 1), paces, 8)
    assert data["repetitions"] == "3 x 1 mile @ 8:08/mi"
    assert data["name"] == "Mile Repeats (8:08/mi)"


def test_interval_prescription_without_paces():
    data = prescribe(_template("interval", "VO2_MAX"), None, 8)
    assert data["name"] == "800m Track Intervals"
    assert data["repetitions"] == "6 x 800m"
    assert data["target_pace"] is None


def test_long_run_prescription(paces):
    data = prescribe(_template("longrun", "TRADITIONAL_EASY"), paces, 10)
    assert data["name"] == "10-Mile Classic Easy Long Run (10:32-11:32/mi)"
    assert data["target_pace"] == "10:32-11:32/mi"
    assert data["estimated_duration"] == "1:50:20"


def test_long_run_prescription_metric():
    km = derive_single_goal_paces("10K", "55:00").in_unit("km")
    data = prescribe(_template("longrun", "TRADITIONAL_EASY"), km, 16, unit="km")
    assert data["name"].startswith("16-K Classic Easy Long Run (")
    assert data["name"].endswith("/km)")


def test_hill_prescription(paces):
    data = prescribe(_template("hill", "medium_vo2"), paces, 6)
    assert data["target_pace"] == "9:09/mi"
    phases = {p["phase"]: p["text"] for p in data["phases"]}
    assert phases["main"] == "5 x 2.5 min uphill @ 9:09/mi"
    assert data["hill_requirement"]["grade"] == "moderate"
