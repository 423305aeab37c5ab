"""Pydantic schemas for angle measurements and goals.

Learn: Measurement payloads are freeform (whatever the app measured),
so they travel as plain dicts. `owner_email` and `timestamp` are
always written by the server.
"""

from typing import Any, Union

from pydantic import BaseModel, StrictFloat, StrictInt

from angletrack.schemas.user import Number

# Keys a client may not set on a measurement; stripped before stamping.
RESERVED_FIELDS = ("owner_email", "ownerEmail", "timestamp")


class SubmitResponse(BaseModel):
    message: str = "Data saved successfully."
    record: dict[str, Any]


class GoalRead(BaseModel):
    goal: Number


class GoalUpdate(BaseModel):
    goal: Union[StrictInt, StrictFloat]


class UploadRead(BaseModel):
    imageUrl: str
