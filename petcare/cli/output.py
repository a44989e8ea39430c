"""Output formatting utilities for CLI."""

import json
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()
error_console = Console(stderr=True)


def format_fee(fee: Any) -> str:
    if fee in (None, ""):
        return "-"
    return f"${fee:,.0f}" if isinstance(fee, (int, float)) else str(fee)


def print_json(data: Any) -> None:
    """Print data as formatted JSON."""
    console.print_json(json.dumps(data, default=str, indent=2))


def print_error(message: str, details: dict | None = None) -> None:
    """Print an error message."""
    error_console.print(f"[red]Error:[/red] {message}")
    if details:
        for key, value in details.items():
            error_console.print(f"  [dim]{key}:[/dim] {value}")


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {message}")


def print_pets_table(pets: list[dict], title: str = "Available Pets") -> None:
    """Print adoptable pets in a table."""
    if not pets:
        print_info("No pets match the given filters")
        return

    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Species")
    table.add_column("Breed")
    table.add_column("Age")
    table.add_column("Size")
    table.add_column("Fee", justify="right")
    table.add_column("Featured", justify="center")

    for pet in pets:
        table.add_row(
            str(pet.get("_id", "-")),
            pet.get("name", "-"),
            pet.get("species", "-"),
            pet.get("breed", "-"),
            pet.get("age", "-"),
            pet.get("size") or "-",
            format_fee(pet.get("adoptionFee")),
            "★" if pet.get("featured") else "",
        )

    console.print(table)
