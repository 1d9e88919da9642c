"""Migration planning endpoints."""

import logging

from fastapi import APIRouter, Request

from ..models import PlanRequest
from ...errors import NotFoundError, ValidationError
from ...migration.planner import MigrationPlanner, PlanStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> PlanStore:
    return request.app.state.plan_store


@router.post("/plan")
async def create_plan(data: PlanRequest, request: Request):
    """
    Build a migration plan.

    Without ``forensicResult`` in the body the last recorded forensic
    result is used; with neither the request fails with 400.
    """
    store = get_store(request)
    forensic = data.forensic_result
    if forensic is None:
        forensic = store.forensic_result
    if not forensic:
        raise ValidationError("No forensic data available")

    plan = MigrationPlanner().plan(forensic, data.options.to_planner_options())
    store.record_forensic(forensic)
    store.save(plan)
    logger.info(f"Plan stored ({store.state}): {plan['scope']['totalObjects']} objects")
    return plan


@router.get("/plan/latest")
async def latest_plan(request: Request):
    """The most recently generated plan."""
    plan = get_store(request).latest()
    if plan is None:
        raise NotFoundError("No migration plan has been generated yet")
    return plan
