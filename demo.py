#!/usr/bin/env python
from sdk.pyinventory import InventoryClient

def main():
    c = InventoryClient()

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    widget = c.create_product("Widget", "hardware", 5)
    gadget = c.create_product("Gadget", "hardware", 2)
    print(widget)
    print(gadget)

    # -----------------------------
    # List and search
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    print("\nSearching for 'Wid'...")
    print(c.search_products("Wid"))

    # -----------------------------
    # Adjust stock
    # -----------------------------
    print("\nSelling 2 widgets...")
    print(c.adjust_amount(widget["id"], -2))

    print("\nRestocking 10 gadgets...")
    print(c.adjust_amount(gadget["id"], 10))

    # -----------------------------
    # Delete
    # -----------------------------
    print("\nDeleting both products...")
    c.delete_product(widget["id"])
    c.delete_product(gadget["id"])
    print(c.list_products())

if __name__ == "__main__":
    main()
