"""CLI entry point for the Pet Adoption Service."""

from typing import Annotated

import typer
from rich.console import Console

from petcare.cli.commands import db, pets

__version__ = "1.0.0"

app = typer.Typer(
    name="petcare",
    help="Pet Adoption Service CLI - manage adoptable pet data",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(db.app, name="db", help="Database maintenance")
app.add_typer(pets.app, name="pets", help="Pet listing")

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"petcare version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """
    Pet Adoption Service CLI.

    [bold]Quick Start:[/bold]

        # Create indexes
        petcare db init

        # Load the sample adoptable pets
        petcare db seed --yes

        # Reopen every pet for adoption
        petcare db enable-adoption

        # Browse adoptable dogs
        petcare pets available --species Dog

    Connection settings come from the MONGODB and MONGODB_DATABASE
    environment variables (or a .env file).
    """


if __name__ == "__main__":
    app()
