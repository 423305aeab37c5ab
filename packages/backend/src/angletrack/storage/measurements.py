"""Measurement store — angleData.json.

Learn: Records are immutable once written. The owner and timestamp
are stamped here, after any client-supplied values for those keys
have been dropped, so no caller can file a record under someone
else's email.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from angletrack.schemas.measurement import RESERVED_FIELDS
from angletrack.storage.json_file import JsonFileStore

logger = structlog.get_logger()


class MeasurementStore:
    """Append-only list of angle measurements tagged by owner."""

    def __init__(self, path: Path):
        self.file = JsonFileStore(path, name="angles")

    async def list_by_owner(self, email: str) -> list[dict]:
        """All records owned by `email`, oldest first."""
        return [r for r in await self.file.load() if r.get("owner_email") == email]

    async def append(self, fields: dict[str, Any], owner_email: str) -> dict:
        """Stamp and persist one measurement. Returns the stored record."""
        record = {k: v for k, v in fields.items() if k not in RESERVED_FIELDS}
        record["owner_email"] = owner_email
        record["timestamp"] = datetime.now(timezone.utc).isoformat()

        async with self.file.transaction() as records:
            records.append(record)
            count = len(records)

        logger.info("angletrack.angle_recorded", owner=owner_email, total=count)
        return record
