"""Upload service — progress photos on local disk.

Learn: Files land in Settings.upload_dir as `<epoch-ms>-<rand8>-<name>` and
are served back by the StaticFiles mount at /uploads. Only the base
name of the client filename is kept, so "../../etc/passwd" style
names cannot escape the upload directory.
"""

import os
import time
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

import structlog

from angletrack.config import Settings
from angletrack.errors import StorageError, ValidationError

logger = structlog.get_logger()

PUBLIC_PREFIX = "/uploads"
CHUNK_SIZE = 64 * 1024


class UploadService:
    """Validates and stores uploaded images."""

    def __init__(self, settings: Settings):
        self.upload_dir = Path(settings.upload_dir)
        self.allowed_extensions = {e.lower() for e in settings.allowed_image_extensions}
        self.max_bytes = settings.max_upload_bytes

    def check_filename(self, filename: Optional[str]) -> str:
        """Return the safe base name, or raise ValidationError."""
        name = os.path.basename((filename or "").replace("\\", "/")).strip()
        if not name:
            raise ValidationError("No file uploaded.")
        ext = os.path.splitext(name)[1].lower()
        if ext not in self.allowed_extensions:
            allowed = ", ".join(sorted(self.allowed_extensions))
            raise ValidationError(f"File type not allowed. Allowed: {allowed}")
        return name

    def stored_name(self, name: str) -> str:
        """`<epoch-ms>-<rand8>-<name>`; the random part keeps same-millisecond uploads apart."""
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{name}"

    def save(self, filename: Optional[str], fileobj: BinaryIO) -> str:
        """Persist an upload and return its public path.

        Copies in chunks and stops as soon as the size cap is passed, so
        an oversized upload never lands on disk in full.
        """
        name = self.check_filename(filename)
        stored = self.stored_name(name)
        target = self.upload_dir / stored

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            out = open(target, "xb")
        except OSError as e:
            logger.error("angletrack.upload_failed", filename=name, error=str(e))
            raise StorageError("Error saving upload") from e

        size = 0
        try:
            with out:
                while True:
                    chunk = fileobj.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_bytes:
                        break
                    out.write(chunk)
        except OSError as e:
            target.unlink(missing_ok=True)
            logger.error("angletrack.upload_failed", filename=name, error=str(e))
            raise StorageError("Error saving upload") from e

        if size > self.max_bytes:
            target.unlink(missing_ok=True)
            logger.info("angletrack.upload_too_large", filename=name, max_bytes=self.max_bytes)
            raise ValidationError(f"File too large (max {self.max_bytes} bytes)")

        logger.info("angletrack.upload_saved", stored=stored, size=size)
        return f"{PUBLIC_PREFIX}/{stored}"
