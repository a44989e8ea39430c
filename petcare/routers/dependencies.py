"""
Service providers for route handlers.

Services are built per request from the injected database so tests can
swap the store through ``app.dependency_overrides[get_database]``.
"""
from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from petcare.core.database import get_database
from petcare.services.adoption_service import AdoptionService
from petcare.services.pet_listing_service import PetListingService


def get_adoption_service(database: AsyncIOMotorDatabase = Depends(get_database)) -> AdoptionService:
    return AdoptionService(database)


def get_pet_listing_service(
    database: AsyncIOMotorDatabase = Depends(get_database),
) -> PetListingService:
    return PetListingService(database)
