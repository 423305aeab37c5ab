"""Goal API — read and set the caller's target angle."""

from fastapi import APIRouter, Depends

from angletrack.api.dependencies import get_record_service
from angletrack.auth.dependencies import get_current_user
from angletrack.auth.identity import Identity
from angletrack.schemas.measurement import GoalRead, GoalUpdate
from angletrack.services.record_service import RecordService

router = APIRouter()


@router.get("/goal", response_model=GoalRead)
async def get_goal(
    identity: Identity = Depends(get_current_user),
    records: RecordService = Depends(get_record_service),
):
    """Stored goal, or the default (170) if never set."""
    return GoalRead(goal=await records.get_goal(identity))


@router.api_route("/goal", methods=["PUT", "POST"], response_model=GoalRead)
async def set_goal(
    body: GoalUpdate,
    identity: Identity = Depends(get_current_user),
    records: RecordService = Depends(get_record_service),
):
    return GoalRead(goal=await records.set_goal(identity, body.goal))
