"""
Pet listing commands.
"""

from typing import Annotated, Optional

import typer

from petcare.cli.commands.db import run_with_database
from petcare.cli.output import print_error, print_json, print_pets_table
from petcare.core.database import DatabaseManager
from petcare.core.exceptions import DatabaseOperationError
from petcare.schemas.adoption import AvailablePetFilters
from petcare.services.pet_listing_service import AGE_BUCKET_PATTERNS, PetListingService

app = typer.Typer(help="Pet listing commands")


@app.command("available")
def available(
    species: Annotated[Optional[str], typer.Option("--species", help="Exact species, e.g. Dog")] = None,
    age: Annotated[
        Optional[str],
        typer.Option("--age", help=f"Age bucket: {', '.join(AGE_BUCKET_PATTERNS)}"),
    ] = None,
    size: Annotated[Optional[str], typer.Option("--size", help="Exact size, e.g. Large")] = None,
    search: Annotated[Optional[str], typer.Option("--search", "-s", help="Search text")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON instead of a table")] = False,
):
    """List pets that can currently receive adoption applications."""
    filters = AvailablePetFilters(species=species, age=age, size=size, search=search)

    async def _list(manager: DatabaseManager):
        return await PetListingService(manager.database).list_available_pets(filters)

    try:
        pets = run_with_database(_list)
    except DatabaseOperationError as e:
        print_error(e.message)
        raise typer.Exit(1)

    if as_json:
        print_json(pets)
    else:
        print_pets_table(pets)
