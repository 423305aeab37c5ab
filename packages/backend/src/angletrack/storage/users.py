"""Credential store — users.json.

Learn: Email is the unique key. The uniqueness check in create() runs
inside the same locked transaction as the write, so two concurrent
signups for one email cannot both succeed.
"""

from pathlib import Path
from typing import Optional

import pydantic
import structlog

from angletrack.errors import Conflict, NotFound, StorageError, ValidationError
from angletrack.schemas.user import Number, UserRecord
from angletrack.storage.json_file import JsonFileStore

logger = structlog.get_logger()


def is_number(value) -> bool:
    """True for real ints/floats, excluding bool, NaN and infinity."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value == value and value not in (float("inf"), float("-inf"))


def _parse(raw: dict) -> UserRecord:
    try:
        return UserRecord.model_validate(raw)
    except pydantic.ValidationError as e:
        raise StorageError("users store contains a malformed record") from e


class UserStore:
    """UserRecord persistence keyed by email."""

    def __init__(self, path: Path):
        self.file = JsonFileStore(path, name="users")

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        for raw in await self.file.load():
            if raw.get("email") == email:
                return _parse(raw)
        return None

    async def create(self, record: UserRecord) -> UserRecord:
        """Insert a new user. Raises Conflict if the email is taken."""
        async with self.file.transaction() as records:
            if any(r.get("email") == record.email for r in records):
                raise Conflict("Email already registered")
            records.append(record.model_dump())
        logger.info("angletrack.user_created", email=record.email)
        return record

    async def update_goal(self, email: str, goal: Number) -> UserRecord:
        """Set a user's goal. Raises NotFound / ValidationError."""
        if not is_number(goal):
            raise ValidationError("Goal must be a number")
        async with self.file.transaction() as records:
            for raw in records:
                if raw.get("email") == email:
                    raw["goal"] = goal
                    updated = _parse(raw)
                    break
            else:
                raise NotFound("User not found")
        logger.info("angletrack.goal_updated", email=email, goal=goal)
        return updated
