# cli.py
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.storeclient import StoreClient

console = Console()
c = StoreClient(base_url=os.getenv("STORE_API_URL", "http://127.0.0.1:8085"))

product_cache: List[Dict[str, Any]] = []
cart_ids = set()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def _price(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:.2f}"
    return str(value)


def products_table(products: List[Dict[str, Any]]) -> Table:
    table = Table(
        title="📦 Products",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", justify="right", width=6)
    table.add_column("Code", style="bold", width=12)
    table.add_column("Title", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Category", width=14)
    table.add_column("Active", justify="center", width=6)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            str(p.get("code", "N/A")),
            str(p.get("title", "N/A")),
            _price(p.get("price", 0)),
            str(p.get("stock", 0)),
            str(p.get("category", "N/A")),
            "✔" if p.get("status", True) else "✘",
        )
    return table


def cart_table(cart_id: Any, items: List[Dict[str, Any]]) -> Table:
    table = Table(title=f"🛒 Cart {cart_id}", box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)

    titles = {p.get("id"): p.get("title") for p in product_cache}
    for it in items:
        pid = it.get("product")
        name = titles.get(pid)
        label = f"{pid} · {name}" if name else f"{pid} [dim](unknown)[/dim]"
        table.add_row(label, str(it.get("quantity", 0)))
    return table


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. Errors are printed and
    reported as None so the menu loop keeps going.
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except Exception as e:
        console.print(show_status(f"Error: {e}", False))
        return None
    if success_msg:
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def product_completer():
    return WordCompleter([str(p.get("id")) for p in product_cache], ignore_case=True)


def cart_completer():
    return WordCompleter(sorted(str(i) for i in cart_ids))


def create_header():
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    return Panel(f"[bold blue]Product & Cart store[/bold blue]  [dim]{c.base_url} · {now}[/dim]", style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global product_cache

    console.clear()
    console.print(create_header())
    product_cache = try_api(c.list_products) or []

    options = [
        ("1", "📦 List products", "5", "🛒 Create cart"),
        ("2", "➕ Create product", "6", "🔍 View cart"),
        ("3", "✏️ Update product", "7", "➕ Add product to cart"),
        ("4", "🗑️ Delete product", "q", "👋 Quit"),
    ]

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=28)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=28)
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                product_cache = products
                if products:
                    console.print(products_table(products))
                else:
                    console.print("[italic yellow]No products found[/italic yellow]")

        elif choice == "2":
            product = try_api(
                c.create_product,
                title=Prompt.ask("Title"),
                description=Prompt.ask("Description"),
                code=Prompt.ask("Code"),
                price=Prompt.ask("Price", default="10"),
                stock=Prompt.ask("Stock", default="1"),
                category=Prompt.ask("Category", default="general"),
                success_msg="Product created",
            )
            if product:
                product_cache.append(product)
                console.print(products_table([product]))

        elif choice == "3":
            pid = prompt_with_autocomplete("Product id", completer=product_completer())
            field = Prompt.ask("Field", choices=["title", "description", "code", "price", "stock", "category", "status"])
            value = Prompt.ask("New value")
            product = try_api(c.update_product, pid, **{field: value}, success_msg=f"Product {pid} updated")
            if product:
                console.print(products_table([product]))

        elif choice == "4":
            pid = prompt_with_autocomplete("Product id", completer=product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")

        elif choice == "5":
            cart = try_api(c.create_cart, success_msg="Cart created")
            if cart:
                cart_ids.add(cart["id"])
                console.print(cart_table(cart["id"], cart["products"]))

        elif choice == "6":
            cid = prompt_with_autocomplete("Cart id", completer=cart_completer())
            items = try_api(c.get_cart_products, cid)
            if items is not None:
                console.print(cart_table(cid, items))

        elif choice == "7":
            cid = prompt_with_autocomplete("Cart id", completer=cart_completer())
            pid = prompt_with_autocomplete("Product id", completer=product_completer())
            cart = try_api(c.add_to_cart, cid, pid, success_msg=f"Product {pid} added to cart {cid}")
            if cart:
                console.print(cart_table(cart["id"], cart["products"]))

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
