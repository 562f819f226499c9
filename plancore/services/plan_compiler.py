"""End-to-end compilation of generated plan text.

raw text -> parse (+ paces) -> enrich -> repair (long runs, quality days) -> validate -> CompiledPlan
"""

from __future__ import annotations

from typing import Optional

from plancore.config import Settings, get_settings
from plancore.diagnostics import DiagnosticLog
from plancore.logging_config import get_logger
from plancore.models import CompiledPlan, PlanWarning
from plancore.services.enricher import enrich_plan
from plancore.services.pace_engine import BlendCurve, resolve_plan_paces
from plancore.services.plan_parser import parse_plan_text
from plancore.services.plan_repair import fix_hard_day_violations, fix_missing_long_runs, validate_plan
from plancore.services.workout_catalog import WorkoutCatalog
from plancore.validators import PlanProfile

logger = get_logger(__name__)


def compile_plan(
    raw_text: str,
    profile: PlanProfile,
    starting_week: Optional[int] = None,
    catalog: Optional[WorkoutCatalog] = None,
    settings: Optional[Settings] = None,
) -> CompiledPlan:
    """Compile generator output into an enriched, repaired plan.

    Input-range errors from the profile's race times propagate; everything
    else degrades into diagnostics and warnings on the returned plan.
    """
    settings = settings or get_settings()
    parsed = parse_plan_text(raw_text, starting_week=starting_week)
    parsed.paces, parsed.progressive = resolve_plan_paces(
        profile, parsed.total_weeks, BlendCurve.from_settings(settings)
    )

    enrich_log = DiagnosticLog("enrich", logger)
    weeks = enrich_plan(parsed, catalog=catalog, profile=profile, settings=settings, diagnostics=enrich_log)

    repair_log = DiagnosticLog("repair", logger)
    fix_missing_long_runs(weeks, profile, unit=profile.unit_label, settings=settings, diagnostics=repair_log)
    fix_hard_day_violations(weeks, profile, unit=profile.unit_label, settings=settings, diagnostics=repair_log)

    warnings = validate_plan(weeks, profile, settings=settings)
    if parsed.paces is None:
        warnings.append(PlanWarning(
            code="PACES_UNAVAILABLE",
            message="No race goal in profile; using pace hints from the plan text" if parsed.pace_hints
            else "No race goal in profile; workouts carry no numeric paces",
        ))

    plan = CompiledPlan(
        weeks=weeks,
        paces=parsed.paces,
        raw_text=parsed.full_text,
        progressive=parsed.progressive is not None,
        pace_hints=parsed.pace_hints,
        warnings=warnings,
        diagnostics=list(parsed.diagnostics) + enrich_log.events + repair_log.events,
    )
    logger.info(
        "plan compiled",
        extra={
            "ctx_weeks": len(weeks),
            "ctx_progressive": plan.progressive,
            "ctx_warnings": len(warnings),
            "ctx_diagnostics": len(plan.diagnostics),
        },
    )
    return plan
