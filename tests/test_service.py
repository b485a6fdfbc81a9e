import asyncio

import pytest

from app.database import ProductStore
from app.errors import Conflict, NotFound, StorageError
from app.service import InventoryService


class FakePhotos:
    """In-memory stand-in for PhotoStorage."""

    def __init__(self):
        self.files = {}

    async def store(self, data, original_filename=None):
        name = f"photo-{len(self.files)}.png"
        self.files[name] = data
        return name

    async def delete(self, filename):
        self.files.pop(filename, None)


@pytest.fixture
def service(tmp_path):
    store = ProductStore(tmp_path / "products.json")
    store.initialise()
    return InventoryService(store, FakePhotos())


def run(coro):
    return asyncio.run(coro)


def test_conflict_keeps_no_photo(service):
    run(service.create_product("Widget", "tools", 1))
    with pytest.raises(Conflict):
        run(service.create_product("Widget", "tools", 1, b"img", "w.png"))
    assert service.photos.files == {}


def test_delete_removes_only_its_own_photo(service):
    a = run(service.create_product("A", "x", 1, b"a", "a.png"))
    b = run(service.create_product("B", "x", 1, b"b", "b.png"))

    run(service.delete_product(b.id))

    assert list(service.photos.files) == [a.photo]
    assert [p.id for p in run(service.list_products())] == [a.id]


def test_unknown_ids(service):
    with pytest.raises(NotFound):
        run(service.update_amount("missing", 1))
    with pytest.raises(NotFound):
        run(service.delete_product("missing"))


def test_new_products_are_appended(service):
    for name in ("c", "a", "b"):
        run(service.create_product(name, "x", 0))
    assert [p.name for p in run(service.list_products())] == ["c", "a", "b"]


class BrokenStore(ProductStore):
    async def write_all(self, products):
        raise StorageError("disk full")


class StuckPhotos(FakePhotos):
    async def delete(self, filename):
        raise StorageError("permission denied")


def test_failed_create_leaves_no_photo(tmp_path):
    store = BrokenStore(tmp_path / "products.json")
    store.initialise()
    service = InventoryService(store, FakePhotos())

    with pytest.raises(StorageError, match="disk full"):
        run(service.create_product("Widget", "tools", 1, b"img", "w.png"))
    assert service.photos.files == {}


def test_failed_cleanup_keeps_the_write_error(tmp_path):
    store = BrokenStore(tmp_path / "products.json")
    store.initialise()
    service = InventoryService(store, StuckPhotos())

    with pytest.raises(StorageError, match="disk full"):
        run(service.create_product("Widget", "tools", 1, b"img", "w.png"))
