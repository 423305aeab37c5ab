"""Whole-file JSON record container.

Learn: Read-modify-write on one file is only safe if writers take
turns. `transaction()` holds an asyncio.Lock for the whole cycle, so
two concurrent appends both land instead of the later write dropping
the earlier one. The lock is per store instance and per process;
there is no cross-process coordination.

Writes go to a sibling temp file and are moved into place with
os.replace, so readers see either the old document or the new one.
"""

import asyncio
import json
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import anyio.to_thread
import structlog

from angletrack.errors import StorageError

logger = structlog.get_logger()


class JsonFileStore:
    """An ordered list of dict records persisted as one JSON array."""

    def __init__(self, path: Path, name: str):
        self.path = Path(path)
        self.name = name
        self._lock = asyncio.Lock()

    # ─── Sync I/O (runs in a worker thread) ─────────────

    def _read(self) -> list[dict]:
        """Load the container. Absent file is an empty store; corrupt is an error."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error("angletrack.storage.read_failed", store=self.name, error=str(e))
            raise StorageError(f"Error reading {self.name} store") from e

        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("angletrack.storage.corrupt", store=self.name, error=str(e))
            raise StorageError(f"{self.name} store is not valid JSON") from e

        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            logger.error("angletrack.storage.corrupt", store=self.name, error="not a list of objects")
            raise StorageError(f"{self.name} store must be a JSON array of objects")
        return data

    def _write(self, records: list[dict]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(records, f, indent=2, ensure_ascii=False)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error("angletrack.storage.write_failed", store=self.name, error=str(e))
            raise StorageError(f"Error writing {self.name} store") from e

    # ─── Async API ──────────────────────────────────────

    async def load(self) -> list[dict]:
        """Snapshot read. Does not wait for in-flight writers."""
        return await anyio.to_thread.run_sync(self._read)

    async def save(self, records: list[dict]) -> None:
        await anyio.to_thread.run_sync(self._write, records)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[list[dict]]:
        """Locked read-modify-write.

        Yields the loaded records; mutate the list in place and it is
        written back when the block exits without an exception.

            async with store.transaction() as records:
                records.append({...})
        """
        async with self._lock:
            records = await self.load()
            yield records
            await self.save(records)
