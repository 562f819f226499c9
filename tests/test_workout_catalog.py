"""Tests for the workout template catalog."""

from __future__ import annotations

import pytest

from plancore.errors import TemplateNotFoundError
from plancore.models import WorkoutKind, WorkoutReference
from plancore.services.workout_catalog import WorkoutCatalog, default_catalog, normalize_template


def test_templates_by_category_in_library_order():
    templates = WorkoutCatalog().get_templates_by_category("tempo", "THRESHOLD")
    assert [t.name for t in templates] == ["Steady Threshold Run", "Threshold Blocks"]
    assert all(t.kind is WorkoutKind.TEMPO for t in templates)


def test_category_match_falls_back_to_case_insensitive():
    catalog = WorkoutCatalog()
    assert catalog.get_templates_by_category("tempo", "threshold") == catalog.get_templates_by_category("tempo", "THRESHOLD")
    assert catalog.get_templates_by_category("tempo", "threshold")[0].category == "THRESHOLD"


def test_unknown_category_returns_empty():
    assert WorkoutCatalog().get_templates_by_category("tempo", "NOT_A_CATEGORY") == ()


def test_unknown_kind_raises():
    with pytest.raises(TemplateNotFoundError):
        WorkoutCatalog().get_templates_by_category("swim", "THRESHOLD")


def test_kind_aliases_accepted():
    catalog = WorkoutCatalog()
    assert catalog.get_templates_by_category("intervals", "VO2_MAX")
    assert catalog.get_templates_by_category(WorkoutKind.LONG_RUN, "TRADITIONAL_EASY")


def test_lookups_are_memoized():
    catalog = WorkoutCatalog()
    first = catalog.get_templates_by_category("interval", "VO2_MAX")
    assert catalog.get_templates_by_category("interval", "VO2_MAX") is first


def test_default_catalog_is_shared():
    assert default_catalog() is default_catalog()


def test_flat_interval_template_normalized():
    template = WorkoutCatalog().get_templates_by_category("interval", "VO2_MAX")[0]
    assert template.name == "800m Track Intervals"
    assert template.repetitions == "4-8 x 800m"
    assert template.rep_distance == "800m"
    assert template.structure == "Warmup + 4-8 x 800m + Cooldown"
    assert template.phase("main") == "4-8 x 800m"
    assert template.phase("warmup") == "Warmup"


def test_nested_hill_template_normalized():
    template = WorkoutCatalog().get_templates_by_category("hill", "medium_vo2")[0]
    assert template.name == "Classic Hill Repeats"
    assert [p for p, _ in template.phases] == ["warmup", "main", "recovery", "cooldown"]
    assert template.phase("main") == "4-6 x 2.5 min uphill @ threshold effort"
    assert template.structure.startswith("20 min easy + 3x30sec pickups + 4-6 x 2.5 min uphill")
    assert "(recovery: Jog/walk down + 90sec easy)" in template.structure
    assert template.recovery == "Jog/walk down + 90sec easy"
    assert template.hill_requirement["grade"] == "moderate"
    assert template.focus.startswith("VO2 max")


def test_tempo_structure_split_into_phases():
    template = WorkoutCatalog().get_templates_by_category("tempo", "THRESHOLD")[0]
    assert template.phase("warmup") == "2 miles easy warmup"
    assert template.phase("main") == "20-30 min @ threshold pace"
    assert template.phase("cooldown") == "1 mile easy cooldown"


def test_get_template_by_reference():
    template = WorkoutCatalog().get_template(WorkoutReference(WorkoutKind.TEMPO, "THRESHOLD", 1))
    assert template.name == "Threshold Blocks"


def test_get_template_index_out_of_range():
    with pytest.raises(TemplateNotFoundError, match="index 9"):
        WorkoutCatalog().get_template(WorkoutReference(WorkoutKind.TEMPO, "THRESHOLD", 9))


def test_custom_library():
    library = {"tempo": {"EASY_TEMPO": [{"name": "Short Tempo", "structure": "Warmup + 15 min tempo + Cooldown"}]}}
    catalog = WorkoutCatalog(library)
    assert catalog.kinds() == ["tempo"]
    assert catalog.categories("tempo") == ["EASY_TEMPO"]
    with pytest.raises(TemplateNotFoundError):
        catalog.get_templates_by_category("hill", "short_power")


def test_normalize_template_to_dict():
    raw = {"name": "Mini", "repetitions": "3 x 1 mile", "recovery": "2 min jog"}
    data = normalize_template(raw, WorkoutKind.INTERVAL, "LONG_INTERVALS").to_dict()
    assert data["kind"] == "interval"
    assert data["structure"] == "Warmup + 3 x 1 mile + Cooldown"
    assert data["phases"][1] == {"phase": "main", "text": "3 x 1 mile"}
    assert data["hill_requirement"] is None
