import logging

from fastapi import APIRouter, Request, Response

from api.ratelimit import limiter
from api.schemas import BlendRequest, CatalogCategoryOut, CompileRequest, GoalTimesOut, PaceRequest, TemplateOut
from plancore.config import get_settings
from plancore.models import units_label
from plancore.services.pace_engine import (
    BlendCurve,
    available_goal_times,
    blend,
    derive_single_goal_paces,
    normalize_distance,
)
from plancore.services.plan_compiler import compile_plan
from plancore.services.workout_catalog import default_catalog

logger = logging.getLogger(__name__)
settings = get_settings()
router = APIRouter(prefix="/api/v1")


@router.post("/plans/compile", tags=["plans"])
@limiter.limit(settings.compile_rate_limit)
def compile_plan_text(request: Request, response: Response, body: CompileRequest):
    del request, response
    plan = compile_plan(body.plan_text, body.profile, starting_week=body.starting_week, settings=settings)
    logger.info(
        "plan_compile_served",
        extra={"weeks": len(plan.weeks), "warnings": len(plan.warnings), "progressive": plan.progressive},
    )
    return plan.to_dict()


@router.post("/paces", tags=["paces"])
def goal_paces(body: PaceRequest):
    paces = derive_single_goal_paces(body.distance, body.goal_time)
    return paces.in_unit(units_label(body.units)).to_dict()


@router.post("/paces/blend", tags=["paces"])
def blended_paces(body: BlendRequest):
    unit = units_label(body.units)
    current = derive_single_goal_paces(body.distance, body.current_time).in_unit(unit)
    goal = derive_single_goal_paces(body.distance, body.goal_time).in_unit(unit)
    week = blend(current, goal, body.week_number, body.total_weeks, BlendCurve.from_settings(settings))
    return week.to_dict()


@router.get("/paces/{distance}/goal-times", response_model=GoalTimesOut, tags=["paces"])
def goal_times(distance: str):
    category = normalize_distance(distance)
    times = available_goal_times(category)
    return GoalTimesOut(distance=category.value, goal_times=times, min_time=times[0], max_time=times[-1])


@router.get("/catalog/{kind}/{category}", response_model=CatalogCategoryOut, tags=["catalog"])
def catalog_category(kind: str, category: str):
    templates = default_catalog().get_templates_by_category(kind, category)
    return CatalogCategoryOut(
        kind=templates[0].kind.value if templates else kind,
        category=templates[0].category if templates else category,
        templates=[TemplateOut(index=i, **t.to_dict()) for i, t in enumerate(templates)],
    )
