# cli.py
import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm
from rich.logging import RichHandler
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from storefront.client import CatalogClient, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from storefront.connectivity import ConnectivityReport, run_connectivity_check
from storefront.errors import CatalogError
from storefront.formatting import format_price, product_details, product_subtitle, product_title
from storefront.models import Product, Seller, Story

console = Console()
logger = logging.getLogger("cli")

status_message = "Ready"
product_cache: List[Product] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Product], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Product", style="bold", width=40)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Details", width=36)

    for p in products:
        price = format_price(p.discounted_price)
        if p.has_discount:
            price = f"[green]{price}[/green]"
        table.add_row(p.id, product_title(p), price, product_subtitle(p))
    console.print(table)

    skipped = getattr(products, "skipped", 0)
    if skipped:
        console.print(f"[yellow]{skipped} malformed record(s) skipped[/yellow]")


def show_product(product: Product):
    console.print(Panel(product_details(product), title=product.name, border_style="cyan"))


def show_stories(stories: List[Story]):
    if not stories:
        console.print("[italic yellow]No stories found[/italic yellow]")
        return

    table = Table(title="📰 Stories", box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Title", style="bold", width=30)
    table.add_column("Link", width=40)
    table.add_column("Seller", style="dim", width=12)
    table.add_column("Created", width=22)
    for s in stories:
        table.add_row(s.title, s.link or "-", s.seller_id or "-", s.created_at or "-")
    console.print(table)


def show_sellers(sellers: List[Seller]):
    if not sellers:
        console.print("[italic yellow]No sellers found[/italic yellow]")
        return

    table = Table(title="🏪 Sellers", box=box.ROUNDED, header_style="bold yellow", show_lines=True)
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Contacts", width=50)
    for s in sellers:
        contacts = "\n".join(f"{name}: {url}" for name, url in s.contact_links()) or "-"
        table.add_row(s.id, s.name, contacts)
    console.print(table)


def show_report(report: ConnectivityReport):
    table = Table(title="🔌 Connectivity check", box=box.ROUNDED, header_style="bold cyan")
    table.add_column("Step", style="bold", width=10)
    table.add_column("Status", width=8)
    table.add_column("Details", width=60)
    for step in report.steps:
        status = "[green]OK[/green]" if step.ok else "[red]FAIL[/red]"
        table.add_row(step.name, status, step.detail)
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None):
    """
    Calls fn(*args), waits for the returned future behind a spinner.
    Returns the result, or None when the call failed.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Loading...", total=None)
            result = fn(*args).result()

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except CatalogError as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


def get_product_completer():
    ids = [p.id for p in product_cache]
    names = [p.name for p in product_cache]
    return WordCompleter([n for n in (ids + names) if n], ignore_case=True)


def find_cached_product(key: str) -> Optional[Product]:
    key = key.strip().lower()
    for p in product_cache:
        if p.id.lower() == key or p.name.lower() == key:
            return p
    return None


def create_header(base_url: str):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Storefront",
        f"[bold blue]{base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


# ---------------------------
# Main menu
# ---------------------------
def menu(c: CatalogClient):
    global status_message, product_cache

    console.clear()
    console.print(create_header(c.base_url))

    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "🏪 Sellers"),
            ("2", "🔍 Search products", "6", "❤️ API health"),
            ("3", "ℹ️ Product details", "7", "🔌 Connectivity check"),
            ("4", "📰 Stories", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            res = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res, title=f"🔍 Results for '{term}'")

        elif choice == "3":
            key = prompt_with_autocomplete("Enter product ID or name", completer=get_product_completer())
            product = find_cached_product(key)
            if product:
                show_product(product)
            else:
                console.print(f"[yellow]No product '{key}' in the loaded list[/yellow]")

        elif choice == "4":
            stories = try_api(c.list_stories, success_msg="Stories loaded successfully")
            if stories is not None:
                show_stories(stories)

        elif choice == "5":
            sellers = try_api(c.list_sellers, success_msg="Sellers loaded successfully")
            if sellers is not None:
                show_sellers(sellers)

        elif choice == "6":
            try_api(c.check_health, success_msg="API is reachable")

        elif choice == "7":
            with console.status("Running connectivity check..."):
                report = run_connectivity_check(c)
            show_report(report)
            status_message = "Connectivity OK" if report.ok else f"Error: step '{report.failed_step.name}' failed"

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                return

        console.print()
        console.rule(style="dim")


# ---------------------------
# One-shot commands
# ---------------------------
def run_command(c: CatalogClient, args) -> int:
    if args.command == "products":
        res = try_api(c.list_products)
        if res is not None:
            show_products(res)
    elif args.command == "search":
        res = try_api(c.search_products, args.query)
        if res is not None:
            show_products(res, title=f"🔍 Results for '{args.query}'")
    elif args.command == "stories":
        res = try_api(c.list_stories)
        if res is not None:
            show_stories(res)
    elif args.command == "sellers":
        res = try_api(c.list_sellers)
        if res is not None:
            show_sellers(res)
    elif args.command == "health":
        res = try_api(c.check_health)
        if res is not None:
            console.print(show_status(res, True))
    elif args.command == "check":
        report = run_connectivity_check(c, args.query)
        show_report(report)
        return 0 if report.ok else 1
    return 0 if res is not None else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Storefront catalog CLI")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Catalog API base URL")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Connect/read timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logs")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("products", help="List all products")
    sp = subparsers.add_parser("search", help="Search products")
    sp.add_argument("query", help="Search term")
    subparsers.add_parser("stories", help="List stories")
    subparsers.add_parser("sellers", help="List sellers")
    subparsers.add_parser("health", help="Check API health")
    ck = subparsers.add_parser("check", help="Run the connectivity check")
    ck.add_argument("--query", default="iPhone", help="Search term used by the last step")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    with CatalogClient(base_url=args.base_url, timeout=args.timeout) as c:
        if args.command:
            return run_command(c, args)
        menu(c)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
