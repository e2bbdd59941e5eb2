#!/usr/bin/env python3
"""Catalog CLI for day-to-day product maintenance."""

import argparse
from decimal import Decimal

import questionary
from rich.console import Console
from rich.table import Table

from catalog.config import config
from catalog.product import (
    Product,
    ProductPayload,
    ProductRepository,
    WriteOutcome,
    build_repository,
)

console = Console()

SAMPLE_PRODUCTS = [
    ProductPayload(
        title="Sandalia",
        description="Sandália Preta Couro Salto Fino",
        price=Decimal("249.50"),
        quantity=100,
    ),
    ProductPayload(
        title="Scarpin",
        description="Scarpin Nude Verniz Bico Fino",
        price=Decimal("299.90"),
        quantity=40,
    ),
    ProductPayload(
        title="Bota",
        description="Bota Cano Curto Camurça Caramelo",
        price=Decimal("389.00"),
        quantity=25,
    ),
]


def select_product(repository: ProductRepository) -> Product | None:
    """Prompt the user to select a product from the catalog."""
    products = repository.list()
    if not products:
        console.print("[red]No products found.[/]")
        return None
    return questionary.select(
        "Select a product:",
        choices=[
            questionary.Choice(title=f"{p.title} ({p.id})", value=p) for p in products
        ],
    ).ask()


def list_products(repository: ProductRepository) -> None:
    """Print every product as a table."""
    products = repository.list()
    if not products:
        console.print("[red]No products found.[/]")
        return

    table = Table(title="Products")
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Price", justify="right")
    table.add_column("Quantity", justify="right")
    for p in products:
        table.add_row(str(p.id), p.title, f"{p.price:.2f}", str(p.quantity))
    console.print(table)


def show_product(repository: ProductRepository) -> None:
    """Print the fields of a selected product."""
    product = select_product(repository)
    if not product:
        return

    for key, value in product.to_dict().items():
        console.print(f"[bold]{key}:[/] {value}")


def delete_product(repository: ProductRepository) -> None:
    """Delete a selected product after confirmation."""
    product = select_product(repository)
    if not product:
        return

    console.print(f"[yellow]Will delete [bold]{product.title}[/] ({product.id}).[/]")
    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    outcome = repository.delete(product.id)
    if outcome is WriteOutcome.APPLIED:
        console.print(f"[green]Deleted {product.title}.[/]")
    else:
        console.print(f"[red]{product.title} was already gone.[/]")


def seed_products(repository: ProductRepository) -> int:
    """Insert the sample catalog, skipping titles that already exist."""
    existing = {p.title for p in repository.list() or []}
    created = 0
    for payload in SAMPLE_PRODUCTS:
        if payload.title in existing:
            console.print(f"Skipping {payload.title} - already exists")
            continue
        product = repository.add(payload)
        console.print(f"Created: {product.title} (id={product.id})")
        created += 1
    return created


COMMANDS = {
    "list": list_products,
    "show": show_product,
    "delete": delete_product,
    "seed": seed_products,
}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Catalog CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List all products")
    subparsers.add_parser("show", help="Show a product")
    subparsers.add_parser("delete", help="Delete a product")
    subparsers.add_parser("seed", help="Insert the sample products")

    args = parser.parse_args(argv)

    repository = build_repository(config)
    COMMANDS[args.command](repository)


if __name__ == "__main__":
    main()
