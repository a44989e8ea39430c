"""
Listing of pets that can currently receive adoption applications.
"""
import re

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from petcare.core.config import settings
from petcare.core.exceptions import DatabaseOperationError
from petcare.log.logging import logger
from petcare.models.common import serialize_document
from petcare.models.pet import AdoptionStatus
from petcare.schemas.adoption import AvailablePetFilters

# Age is free text ("6 months", "2 years"), so buckets are regex alternations
# over the stored string rather than numeric ranges.
AGE_BUCKET_PATTERNS = {
    "puppy": "months|1 year",
    "young": "2|3|4 years",
    "adult": "5|6|7|8|9|10|11|12|13|14|15 years",
}

AVAILABLE_PET_PROJECTION = {
    field: 1
    for field in (
        "name",
        "species",
        "breed",
        "age",
        "size",
        "gender",
        "location",
        "description",
        "image",
        "adoptionFee",
        "vaccinated",
        "neutered",
        "goodWith",
        "specialNeeds",
        "energyLevel",
        "trainingLevel",
        "featured",
        "availableForAdoption",
    )
}

AVAILABLE_PET_SORT = [("featured", DESCENDING), ("createdAt", DESCENDING)]


def build_available_pets_query(filters: AvailablePetFilters) -> dict:
    """
    Translate listing filters into a MongoDB query.

    Only pets flagged adoptable *and* in the ``available`` state qualify.
    Unknown age buckets are ignored.
    """
    query: dict = {
        "availableForAdoption": True,
        "adoptionStatus": AdoptionStatus.AVAILABLE.value,
    }

    if filters.species:
        query["species"] = filters.species

    age_pattern = AGE_BUCKET_PATTERNS.get(filters.age) if filters.age else None
    if age_pattern:
        query["age"] = {"$regex": age_pattern, "$options": "i"}

    if filters.size:
        query["size"] = filters.size

    if filters.search:
        pattern = re.escape(filters.search)
        query["$or"] = [
            {field: {"$regex": pattern, "$options": "i"}}
            for field in ("name", "breed", "description")
        ]

    return query


class PetListingService:
    """
    Read-only access to the adoptable pet listing.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        self.pets = database[settings.pets_collection]

    async def list_available_pets(self, filters: AvailablePetFilters) -> list[dict]:
        """
        List adoptable pets, featured first and newest first within that.

        Args:
            filters: Optional species, age bucket, size and search text.

        Returns:
            Pet documents restricted to the listing projection.

        Raises:
            DatabaseOperationError: If the query fails.
        """
        query = build_available_pets_query(filters)

        try:
            cursor = self.pets.find(query, AVAILABLE_PET_PROJECTION).sort(AVAILABLE_PET_SORT)
            pets = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.exception(
                "Failed to fetch available pets: {error}",
                error=str(e),
                event_type="fetch_error",
            )
            raise DatabaseOperationError(str(e), error="Failed to fetch available pets")

        logger.debug(
            "Fetched {count} available pets",
            count=len(pets),
            event_type="available_pets_listed",
        )
        return [serialize_document(pet) for pet in pets]
