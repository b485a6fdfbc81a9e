import logging
import time
from typing import List, Optional

from .database import ProductStore
from .errors import Conflict, NotFound, StorageError
from .models import Product
from .uploads import PhotoStorage

# This file contains the core logic behind the /api endpoint.

logger = logging.getLogger(__name__)


def _mint_id(products: List[Product]) -> str:
    taken = {p.id for p in products}
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


class InventoryService:
    def __init__(self, store: ProductStore, photos: PhotoStorage):
        self.store = store
        self.photos = photos

    # Read
    async def list_products(self, name: Optional[str] = None) -> List[Product]:
        products = await self.store.read_all()
        if not name:
            return products
        return [p for p in products if name in p.name]

    # Create
    async def create_product(
        self,
        name: str,
        category: str,
        amount: int,
        photo: Optional[bytes] = None,
        photo_filename: Optional[str] = None,
    ) -> Product:
        async with self.store.lock:
            products = await self.store.read_all()
            if any(p.name == name for p in products):
                logger.warning("rejected duplicate product name %r", name)
                raise Conflict()

            stored = None
            if photo is not None:
                stored = await self.photos.store(photo, photo_filename)

            product = Product(
                id=_mint_id(products),
                name=name,
                category=category,
                amount=amount,
                photo=stored,
            )
            products.append(product)
            try:
                await self.store.write_all(products)
            except StorageError:
                if stored:
                    try:
                        await self.photos.delete(stored)
                    except StorageError:
                        logger.exception("could not remove photo %s after a failed create", stored)
                raise

        logger.info("created product %s (%s)", product.id, product.name)
        return product

    # Update
    async def update_amount(self, product_id: str, delta: int) -> Product:
        async with self.store.lock:
            products = await self.store.read_all()
            product = next((p for p in products if p.id == product_id), None)
            if product is None:
                logger.warning("update of unknown product %s", product_id)
                raise NotFound()

            product.amount += delta
            await self.store.write_all(products)

        logger.info("product %s amount %+d -> %d", product_id, delta, product.amount)
        return product

    # Delete
    async def delete_product(self, product_id: str):
        async with self.store.lock:
            products = await self.store.read_all()
            product = next((p for p in products if p.id == product_id), None)
            if product is None:
                logger.warning("delete of unknown product %s", product_id)
                raise NotFound()

            await self.store.write_all([p for p in products if p.id != product_id])

            if product.photo:
                try:
                    await self.photos.delete(product.photo)
                except StorageError:
                    # the record is already gone, only the file is left behind
                    logger.exception("could not remove photo of product %s", product_id)

        logger.info("deleted product %s", product_id)
