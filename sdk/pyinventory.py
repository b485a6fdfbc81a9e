# sdk/pyinventory.py
import mimetypes
import os
from pathlib import Path
from typing import Optional

import httpx
import requests
from rich import print

DEFAULT_BASE_URL = os.getenv("INVENTORY_API_URL", "http://127.0.0.1:8085")
DEFAULT_PHOTO_PREFIX = os.getenv("INVENTORY_PHOTO_URL_PREFIX", "/uploads")


class InventoryClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, photo_prefix: str = DEFAULT_PHOTO_PREFIX, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.photo_prefix = "/" + photo_prefix.strip("/")
        self.session = requests.Session()
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api"

    def photo_url(self, product: dict) -> Optional[str]:
        if not product.get("photo"):
            return None
        return f"{self.base_url}{self.photo_prefix}/{product['photo']}"

    # Read
    def list_products(self, name: Optional[str] = None):
        params = {"name": name} if name else {}
        r = self.session.get(self.endpoint, params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def search_products(self, name: str):
        return self.list_products(name=name)

    # Create
    def create_product(self, name: str, category: str, amount: int, photo_path: Optional[str] = None):
        data = {"name": name, "category": category, "amount": str(int(amount))}
        if photo_path:
            path = Path(photo_path)
            content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
            with path.open("rb") as fh:
                r = self.session.post(
                    self.endpoint,
                    data=data,
                    files={"photo": (path.name, fh, content_type)},
                    timeout=self.timeout,
                )
        else:
            # force multipart even without a file
            r = self.session.post(
                self.endpoint,
                files={k: (None, v) for k, v in data.items()},
                timeout=self.timeout,
            )
        r.raise_for_status()
        return r.json()

    # Update
    def adjust_amount(self, product_id: str, delta: int):
        r = self.session.patch(self.endpoint, params={"id": product_id, "amount": int(delta)}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async update, for firing several changes at once
    async def adjust_amount_async(self, product_id: str, delta: int):
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.patch(self.endpoint, params={"id": product_id, "amount": int(delta)})
            r.raise_for_status()
            return r.json()

    # Delete
    def delete_product(self, product_id: str):
        r = self.session.delete(self.endpoint, params={"id": product_id}, timeout=self.timeout)
        r.raise_for_status()
        return None


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="PyInventory CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List all products")
    lp.add_argument("--name", help="Only products whose name contains this text")

    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--name", required=True, help="Product name")
    cp.add_argument("--category", required=True, help="Product category")
    cp.add_argument("--amount", type=int, default=0, help="Units in stock")
    cp.add_argument("--photo", help="Path to a photo to upload")

    ap = subparsers.add_parser("adjust", help="Add to (or subtract from) a product's stock")
    ap.add_argument("--product-id", required=True, help="ID of the product")
    ap.add_argument("--delta", type=int, required=True, help="Signed change in units")

    dp = subparsers.add_parser("delete-product", help="Delete a product and its photo")
    dp.add_argument("--product-id", required=True, help="ID of the product")

    args = parser.parse_args()
    c = InventoryClient()

    if args.command == "list-products":
        print(c.list_products(args.name))

    elif args.command == "create-product":
        print(c.create_product(args.name, args.category, args.amount, args.photo))

    elif args.command == "adjust":
        print(c.adjust_amount(args.product_id, args.delta))

    elif args.command == "delete-product":
        c.delete_product(args.product_id)
        print(f"[green]Deleted {args.product_id}[/green]")
