import asyncio
from sdk.pyinventory import InventoryClient

async def restock(client, product_id, n):
    try:
        resp = await client.adjust_amount_async(product_id, 1)
        print(f"✅ restock #{n}: amount now {resp['amount']}")
    except Exception as e:
        print(f"❌ restock #{n} failed: {e}")

async def main():
    c = InventoryClient()

    product = c.create_product("Concurrent Widget", "demo", 0)
    print(f"\n📦 Created product: {product}")

    # Every request reads and rewrites the whole document; without the
    # server-side lock some of these increments would be lost.
    print("\n⚡ Firing 20 concurrent +1 updates...")
    await asyncio.gather(*(restock(c, product["id"], n) for n in range(20)))

    final = [p for p in c.list_products() if p["id"] == product["id"]][0]
    print(f"\n📦 Final amount: {final['amount']} (expected 20)")

    c.delete_product(product["id"])

if __name__ == "__main__":
    asyncio.run(main())
