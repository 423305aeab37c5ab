"""Angles API — per-user measurement log.

Learn: GET returns only the caller's records. POST accepts any JSON
object; owner_email and timestamp are overwritten by the server.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from angletrack.api.dependencies import get_record_service
from angletrack.auth.dependencies import get_current_user
from angletrack.auth.identity import Identity
from angletrack.schemas.measurement import SubmitResponse
from angletrack.services.record_service import RecordService

router = APIRouter()


@router.get("/angles")
async def list_angles(
    identity: Identity = Depends(get_current_user),
    records: RecordService = Depends(get_record_service),
) -> list[dict[str, Any]]:
    return await records.list_angles(identity)


@router.post("/angles", response_model=SubmitResponse, status_code=201)
async def submit_angle(
    payload: Any = Body(...),
    identity: Identity = Depends(get_current_user),
    records: RecordService = Depends(get_record_service),
):
    """Record one angle measurement for the caller."""
    record = await records.submit_angle(identity, payload)
    return SubmitResponse(record=record)
