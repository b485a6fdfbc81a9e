# app/uploads.py
import logging
import time
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from .errors import StorageError

logger = logging.getLogger(__name__)


class PhotoStorage:
    """Keeps uploaded product photos in a flat directory."""

    def __init__(self, upload_dir: Path):
        self.upload_dir = Path(upload_dir)

    def initialise(self):
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def make_filename(original_filename: Optional[str]) -> str:
        # millisecond timestamp keeps names sortable, the random tail breaks ties
        ext = Path(original_filename or "").suffix.lower()
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{ext}"

    def path_for(self, filename: str) -> Path:
        return self.upload_dir / Path(filename).name

    async def store(self, data: bytes, original_filename: Optional[str] = None) -> str:
        filename = self.make_filename(original_filename)
        try:
            async with aiofiles.open(self.path_for(filename), "wb") as f:
                await f.write(data)
        except OSError as e:
            raise StorageError(f"cannot save photo {filename}: {e}") from e
        logger.info("stored photo %s (%d bytes)", filename, len(data))
        return filename

    async def delete(self, filename: str):
        try:
            await aiofiles.os.remove(self.path_for(filename))
        except FileNotFoundError:
            logger.warning("photo %s was already gone", filename)
        except OSError as e:
            raise StorageError(f"cannot delete photo {filename}: {e}") from e
        else:
            logger.info("deleted photo %s", filename)
