# cli.py
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

import requests
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pyinventory import InventoryClient

console = Console()
c = InventoryClient()


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Inventory",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=24)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Category", width=15)
    table.add_column("Amount", justify="right", width=8)
    table.add_column("Photo", width=30)

    for p in products:
        amount = p.get("amount", 0)
        amount_style = "red" if amount <= 0 else "green"
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("category", "N/A"),
            f"[{amount_style}]{amount}[/{amount_style}]",
            c.photo_url(p) or "-",
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def _error_text(e: Exception) -> str:
    # surface the API's {"detail": ...} body rather than the bare status line
    if isinstance(e, requests.HTTPError) and e.response is not None:
        try:
            detail = e.response.json().get("detail")
        except ValueError:
            detail = e.response.text
        return f"HTTP {e.response.status_code}: {detail}"
    return str(e)


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Failures are shown to the user and yield None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except (requests.RequestException, OSError) as e:
        status_message = f"Error: {_error_text(e)}"
        console.print(show_status(status_message, False))
        return None


def refresh_cache():
    global product_cache
    product_cache = try_api(c.list_products) or []


def get_product_completer():
    if not product_cache:
        refresh_cache()
    ids = [p.get("id", "") for p in product_cache]
    names = [p.get("name", "") for p in product_cache]
    return WordCompleter([v for v in ids + names if v], ignore_case=True)


def resolve_product_id(value: str) -> str:
    # accept either an id or an exact name from the cache
    for p in product_cache:
        if value in (p.get("id"), p.get("name")):
            return p["id"]
    return value


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "📦 PyInventory",
        "[bold blue]Inventory manager[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        options = [
            ("1", "📦 List products", "4", "➕ Increase stock"),
            ("2", "🔍 Search by name", "5", "➖ Decrease stock"),
            ("3", "🆕 Create product", "6", "🗑️ Delete product"),
            ("", "", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 7)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                product_cache[:] = products
                show_products(products)

        elif choice == "2":
            term = prompt_with_autocomplete("Name contains")
            res = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res)

        elif choice == "3":
            name = prompt_with_autocomplete("Product name")
            category = prompt_with_autocomplete("🏷️ Category")
            amount = IntPrompt.ask("📦 Amount", default=0)
            photo = prompt_with_autocomplete("🖼️ Photo path (blank for none)").strip() or None
            resp = try_api(
                c.create_product, name, category, amount, photo,
                success_msg=f"Product '{name}' created"
            )
            if resp:
                show_products([resp])
                refresh_cache()

        elif choice in ("4", "5"):
            pid = resolve_product_id(
                prompt_with_autocomplete("Product ID or name", completer=get_product_completer())
            )
            qty = IntPrompt.ask("How many units", default=1)
            delta = qty if choice == "4" else -qty
            resp = try_api(c.adjust_amount, pid, delta, success_msg=f"Stock of {pid} changed by {delta:+d}")
            if resp:
                show_products([resp])
                refresh_cache()

        elif choice == "6":
            pid = resolve_product_id(
                prompt_with_autocomplete("Product ID or name", completer=get_product_completer())
            )
            if Confirm.ask(f"[red]Delete product {pid} and its photo?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                refresh_cache()

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
