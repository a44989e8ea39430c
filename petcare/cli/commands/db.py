"""
Database maintenance commands.
"""

import asyncio
from typing import Annotated

import typer

from petcare.cli.output import print_error, print_info, print_success
from petcare.core.database import DatabaseManager
from petcare.core.exceptions import DatabaseOperationError
from petcare.services.pet_admin_service import PetAdminService

app = typer.Typer(help="Database maintenance commands")


def run_with_database(operation):
    """
    Run ``operation(manager)`` on a fresh database manager and close it.

    The Motor client is created inside the event loop that uses it.
    """

    async def _run():
        manager = DatabaseManager()
        try:
            return await operation(manager)
        finally:
            await manager.close()

    return asyncio.run(_run())


@app.command("init")
def init():
    """Check connectivity and create the collection indexes."""

    async def _init(manager: DatabaseManager):
        await manager.initialize()

    try:
        run_with_database(_init)
    except Exception as e:
        print_error(f"Database initialization failed: {e}")
        raise typer.Exit(1)

    print_success("Database connection verified and indexes created")


@app.command("seed")
def seed(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the confirmation prompt"),
    ] = False,
):
    """Replace all pets and applications with sample adoptable pets."""
    if not yes:
        typer.confirm("This deletes every pet and adoption application. Continue?", abort=True)

    async def _seed(manager: DatabaseManager):
        return await PetAdminService(manager.database).seed_sample_pets()

    try:
        pet_ids = run_with_database(_seed)
    except DatabaseOperationError as e:
        print_error(e.message)
        raise typer.Exit(1)

    print_success(f"Added {len(pet_ids)} sample pets")
    for pet_id in pet_ids:
        print_info(pet_id)


@app.command("enable-adoption")
def enable_adoption():
    """Make every pet available for adoption."""

    async def _enable(manager: DatabaseManager):
        return await PetAdminService(manager.database).enable_adoption_for_all()

    try:
        modified = run_with_database(_enable)
    except DatabaseOperationError as e:
        print_error(e.message)
        raise typer.Exit(1)

    print_success(f"All pets are now available for adoption ({modified} updated)")
