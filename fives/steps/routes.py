"""
Step page HTTP routes — one generic router for all five 5S stages.

GET    /api/areas/{area_name}/{stage}             list items (+ groups)
POST   /api/areas/{area_name}/{stage}             create an item
PATCH  /api/areas/{area_name}/{stage}/{item_id}   update the stage's mutable fields
DELETE /api/areas/{area_name}/{stage}/{item_id}   delete an item

stage is one of s1..s5. Items are scoped to (session, area) where area is
looked up by slug; an unknown slug lists as empty and rejects writes, and an
item is only reachable through the slug of the area it was created under.
Every endpoint sits behind the onboarding gate.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from fives.database import get_db
from fives.progress.dependencies import get_session_id, require_active_progress
from fives.progress.schemas import LifeArea
from fives.progress.state import Step
from fives.steps.registry import get_stage
from fives.steps.schemas import StageListResponse
from fives.store import (
    create_step_item,
    delete_step_item,
    get_life_area_by_name,
    list_step_items,
    update_step_item,
)

router = APIRouter(
    prefix="/api/areas/{area_name}",
    tags=["steps"],
    dependencies=[Depends(require_active_progress)],
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _require_area(db: AsyncSession, area_name: str) -> LifeArea:
    area = await get_life_area_by_name(db, area_name)
    if area is None:
        raise HTTPException(status_code=404, detail=f"Life area '{area_name}' not found")
    return area


def _validate(schema, payload: dict[str, Any]):
    """
    Validate a stage-specific payload.
    Re-raised as ValueError so the global handler answers 422 VALIDATION_ERROR.
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        issues = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ValueError(issues) from exc


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/{stage}", response_model=StageListResponse)
async def list_items(
    area_name: str,
    stage: Step,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> StageListResponse:
    spec = get_stage(stage)
    area = await get_life_area_by_name(db, area_name)
    if area is None:
        logger.info("Unknown area slug=%s stage=%s session_id=%s", area_name, stage.value, session_id)
        return StageListResponse(stage=stage, area=None, items=[], groups=spec.group([]))

    items = await list_step_items(db, spec, session_id, area.id)
    logger.info(
        "Listed %s session_id=%s area_id=%s count=%d",
        spec.collection, session_id, area.id, len(items),
    )
    return StageListResponse(stage=stage, area=area, items=items, groups=spec.group(items))


@router.post("/{stage}", status_code=201)
async def create_item(
    area_name: str,
    stage: Step,
    payload: dict[str, Any] = Body(...),
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    spec = get_stage(stage)
    body = _validate(spec.create_schema, payload)
    area = await _require_area(db, area_name)
    item = await create_step_item(db, spec, session_id, area.id, body)
    return JSONResponse(status_code=201, content=item)


@router.patch("/{stage}/{item_id}")
async def update_item(
    area_name: str,
    stage: Step,
    item_id: str,
    payload: dict[str, Any] = Body(...),
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    spec = get_stage(stage)
    # Explicit nulls are not meaningful for any stage field
    changes = _validate(spec.update_schema, payload).model_dump(exclude_none=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No updates provided")

    area = await _require_area(db, area_name)
    item = await update_step_item(db, spec, session_id, area.id, item_id, changes)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item '{item_id}' not found")
    return JSONResponse(status_code=200, content=item)


@router.delete("/{stage}/{item_id}", status_code=204)
async def delete_item(
    area_name: str,
    stage: Step,
    item_id: str,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> Response:
    spec = get_stage(stage)
    area = await _require_area(db, area_name)
    deleted = await delete_step_item(db, spec, session_id, area.id, item_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Item '{item_id}' not found")
    return Response(status_code=204)
