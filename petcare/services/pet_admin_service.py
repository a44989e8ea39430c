"""
Operator tasks on pet data: loading sample adoptable pets and reopening
every pet for adoption. Exposed through the ``petcare db`` CLI commands.
"""
from datetime import datetime, timedelta

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from petcare.core.config import settings
from petcare.core.exceptions import DatabaseOperationError
from petcare.log.logging import logger
from petcare.models.pet import AdoptionStatus, Gender, Pet, PetSize, Species

SAMPLE_PETS = [
    Pet(
        name="Max",
        species=Species.DOG,
        breed="Golden Retriever",
        age="2 years",
        gender=Gender.MALE,
        size=PetSize.LARGE,
        location="New York, NY",
        description=(
            "Friendly and energetic golden retriever looking for an active family. "
            "Great with kids and other pets. Loves playing fetch and going for long walks."
        ),
        image="https://images.unsplash.com/photo-1552053831-71594a27632d?w=400&h=300&fit=crop",
        available_for_adoption=True,
        adoption_fee=250,
        vaccinated=True,
        neutered=True,
        good_with=["Kids", "Dogs", "Cats"],
        energy_level="High",
        training_level="Basic",
        featured=True,
    ),
    Pet(
        name="Luna",
        species=Species.CAT,
        breed="Domestic Shorthair",
        age="1 year",
        gender=Gender.FEMALE,
        size=PetSize.SMALL,
        location="Brooklyn, NY",
        description=(
            "Sweet and affectionate cat who loves cuddles and quiet evenings. "
            "Perfect for apartment living. Enjoys watching birds from the window."
        ),
        image="https://images.unsplash.com/photo-1514888286974-6c03e2ca1dba?w=400&h=300&fit=crop",
        available_for_adoption=True,
        adoption_fee=150,
        vaccinated=True,
        neutered=True,
        good_with=["Kids", "Cats"],
        energy_level="Medium",
        training_level="Litter Trained",
    ),
    Pet(
        name="Buddy",
        species=Species.DOG,
        breed="Beagle Mix",
        age="4 years",
        gender=Gender.MALE,
        size=PetSize.MEDIUM,
        location="Queens, NY",
        description=(
            "Gentle and calm beagle with lots of love to give. Great companion for "
            "seniors or quiet households. Enjoys leisurely walks and naps."
        ),
        image="https://images.unsplash.com/photo-1517849845537-4d257902454a?w=400&h=300&fit=crop",
        available_for_adoption=True,
        adoption_fee=200,
        vaccinated=True,
        neutered=True,
        good_with=["Kids", "Dogs"],
        special_needs="Mild arthritis - requires joint supplements",
        energy_level="Low",
        training_level="Advanced",
        featured=True,
    ),
    Pet(
        name="Bella",
        species=Species.CAT,
        breed="Siamese",
        age="6 months",
        gender=Gender.FEMALE,
        size=PetSize.SMALL,
        location="Manhattan, NY",
        description=(
            "Playful and curious siamese kitten. Very intelligent and loves interactive "
            "toys. Would do best in a home with another young cat."
        ),
        image="https://images.unsplash.com/photo-1533738363-b7f9aef128ce?w=400&h=300&fit=crop",
        available_for_adoption=True,
        adoption_fee=175,
        vaccinated=True,
        neutered=False,
        good_with=["Kids", "Cats", "Dogs"],
        energy_level="High",
        training_level="Litter Trained",
    ),
]


class PetAdminService:
    """
    Bulk maintenance operations on the pets and adoptions collections.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        self.pets = database[settings.pets_collection]
        self.adoptions = database[settings.adoptions_collection]

    async def seed_sample_pets(self) -> list[str]:
        """
        Replace all pets and applications with the sample adoptable pets.

        Returns:
            IDs of the inserted pets.

        Raises:
            DatabaseOperationError: If a database operation fails.
        """
        now = datetime.utcnow()
        documents = []
        for offset, pet in enumerate(SAMPLE_PETS):
            # Keep listing order deterministic: earlier samples are newer
            created_at = now - timedelta(seconds=offset)
            documents.append(
                pet.model_copy(update={"created_at": created_at, "updated_at": created_at}).to_document()
            )

        try:
            deleted_pets = await self.pets.delete_many({})
            deleted_applications = await self.adoptions.delete_many({})
            result = await self.pets.insert_many(documents)
        except PyMongoError as e:
            raise DatabaseOperationError(str(e), error="Failed to seed data")

        logger.info(
            "Seeded {count} sample pets",
            count=len(result.inserted_ids),
            deleted_pets=deleted_pets.deleted_count,
            deleted_applications=deleted_applications.deleted_count,
            event_type="sample_data_seeded",
        )
        return [str(pet_id) for pet_id in result.inserted_ids]

    async def enable_adoption_for_all(self) -> int:
        """
        Mark every pet adoptable and available.

        Returns:
            Number of modified pet documents.
        """
        try:
            result = await self.pets.update_many(
                {},
                {
                    "$set": {
                        "availableForAdoption": True,
                        "adoptionStatus": AdoptionStatus.AVAILABLE.value,
                        "updatedAt": datetime.utcnow(),
                    }
                },
            )
        except PyMongoError as e:
            raise DatabaseOperationError(str(e), error="Failed to enable adoption")

        logger.info(
            "Enabled adoption for {count} pets",
            count=result.modified_count,
            event_type="adoption_enabled",
        )
        return result.modified_count
