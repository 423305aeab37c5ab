"""Upload API — progress photo upload.

Learn: The router is mounted with the auth dependency, and FastAPI
resolves router-level dependencies before the handler runs, so an
unauthenticated request is rejected before anything reaches the
upload directory.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from angletrack.api.dependencies import get_record_service
from angletrack.auth.dependencies import get_current_user
from angletrack.auth.identity import Identity
from angletrack.errors import ValidationError
from angletrack.schemas.measurement import UploadRead
from angletrack.services.record_service import RecordService

router = APIRouter()


@router.post("/upload", response_model=UploadRead)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    identity: Identity = Depends(get_current_user),
    records: RecordService = Depends(get_record_service),
):
    """Accept one image (multipart field `image`) and return its URL."""
    if image is None:
        raise ValidationError("No file uploaded.")
    try:
        url = await records.upload_reference(identity, image.filename, image.file)
    finally:
        await image.close()
    return UploadRead(imageUrl=url)
