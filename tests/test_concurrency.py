# tests/test_concurrency.py
import asyncio
import httpx

from app.main import create_app


async def _bump_task(app, product_id):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.patch("/api", params={"id": product_id, "amount": 1})
        return r


async def _scenario(app, n):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.post("/api", data={"name": "shared", "category": "x", "amount": "0"})
        pid = r.json()["id"]

        results = await asyncio.gather(*(_bump_task(app, pid) for _ in range(n)))
        final = (await ac.get("/api", params={"name": "shared"})).json()[0]
    return results, final


def _app(settings):
    app = create_app(settings)
    # ASGITransport does not run the lifespan
    app.state.service.store.initialise()
    app.state.service.photos.initialise()
    return app


def test_two_concurrent_increments(settings):
    results, final = asyncio.run(_scenario(_app(settings), 2))
    assert [r.status_code for r in results] == [200, 200]
    assert sorted(r.json()["amount"] for r in results) == [1, 2]
    assert final["amount"] == 2


def test_many_concurrent_increments(settings):
    results, final = asyncio.run(_scenario(_app(settings), 25))
    assert all(r.status_code == 200 for r in results)
    assert final["amount"] == 25
