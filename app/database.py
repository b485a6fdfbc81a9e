import asyncio
import json
import logging
from pathlib import Path
from typing import List

import aiofiles
import aiofiles.os
from pydantic import ValidationError

from .errors import StorageError
from .models import Product

# The whole collection lives in one JSON document. Every mutation rewrites it
# in full, so writers must hold `lock` across their read-modify-write.

logger = logging.getLogger(__name__)


class ProductStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self.lock = asyncio.Lock()

    def initialise(self):
        """Create an empty document if there is none yet."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.write_text("[]", encoding="utf-8")
            logger.info("created empty product document at %s", self.path)

    async def read_all(self) -> List[Product]:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            raise StorageError(f"cannot read {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise StorageError(f"{self.path} is not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"{self.path} does not hold a JSON array")

        try:
            return [Product(**p) for p in data]
        except (TypeError, ValidationError) as e:
            raise StorageError(f"{self.path} holds a malformed product: {e}") from e

    async def write_all(self, products: List[Product]):
        payload = json.dumps([p.model_dump() for p in products], indent=2)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            async with aiofiles.open(tmp, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp, self.path)
        except OSError as e:
            try:
                await aiofiles.os.remove(tmp)
            except FileNotFoundError:
                pass
            except OSError:
                logger.warning("could not remove %s after a failed write", tmp)
            raise StorageError(f"cannot write {self.path}: {e}") from e
