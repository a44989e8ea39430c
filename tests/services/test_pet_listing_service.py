"""Tests for the available pet listing."""

from unittest.mock import patch

import pytest
from pymongo.errors import PyMongoError

from petcare.core.exceptions import DatabaseOperationError
from petcare.schemas.adoption import AvailablePetFilters
from petcare.services.pet_listing_service import (
    AVAILABLE_PET_PROJECTION,
    PetListingService,
    build_available_pets_query,
)


@pytest.fixture
def service(fake_db):
    return PetListingService(fake_db)


class TestBuildAvailablePetsQuery:
    def test_no_filters(self):
        query = build_available_pets_query(AvailablePetFilters())

        assert query == {"availableForAdoption": True, "adoptionStatus": "available"}

    def test_exact_species_and_size(self):
        query = build_available_pets_query(AvailablePetFilters(species="Cat", size="Small"))

        assert query["species"] == "Cat"
        assert query["size"] == "Small"

    @pytest.mark.parametrize(
        "bucket, pattern",
        [
            ("puppy", "months|1 year"),
            ("young", "2|3|4 years"),
            ("adult", "5|6|7|8|9|10|11|12|13|14|15 years"),
        ],
    )
    def test_age_buckets(self, bucket, pattern):
        query = build_available_pets_query(AvailablePetFilters(age=bucket))

        assert query["age"] == {"$regex": pattern, "$options": "i"}

    def test_unknown_age_bucket_adds_no_filter(self):
        query = build_available_pets_query(AvailablePetFilters(age="ancient"))

        assert "age" not in query

    def test_search_covers_name_breed_and_description(self):
        query = build_available_pets_query(AvailablePetFilters(search="golden"))

        assert query["$or"] == [
            {"name": {"$regex": "golden", "$options": "i"}},
            {"breed": {"$regex": "golden", "$options": "i"}},
            {"description": {"$regex": "golden", "$options": "i"}},
        ]

    def test_search_text_is_escaped(self):
        query = build_available_pets_query(AvailablePetFilters(search="a.b (c)"))

        assert query["$or"][0]["name"]["$regex"] == r"a\.b\ \(c\)"


@pytest.mark.asyncio
async def test_lists_only_adoptable_pets(make_pet, service):
    listed = make_pet(name="Max")
    make_pet(name="Luna", availableForAdoption=False)
    make_pet(name="Buddy", adoptionStatus="pending", availableForAdoption=False)
    make_pet(name="Bella", adoptionStatus="adopted", availableForAdoption=False)
    make_pet(name="Rex", adoptionStatus="pending", availableForAdoption=True)

    pets = await service.list_available_pets(AvailablePetFilters())

    assert [pet["_id"] for pet in pets] == [str(listed)]


@pytest.mark.asyncio
async def test_featured_first_then_newest(make_pet, service):
    make_pet(name="Old", minutes=0)
    make_pet(name="New", minutes=30)
    make_pet(name="Star", minutes=10, featured=True)

    pets = await service.list_available_pets(AvailablePetFilters())

    assert [pet["name"] for pet in pets] == ["Star", "New", "Old"]


@pytest.mark.asyncio
async def test_listing_projection(make_pet, service):
    make_pet()

    pets = await service.list_available_pets(AvailablePetFilters())

    assert set(pets[0]) == {"_id", *AVAILABLE_PET_PROJECTION}
    assert "createdAt" not in pets[0]
    assert "adoptionStatus" not in pets[0]


@pytest.mark.asyncio
async def test_filters_by_age_bucket(make_pet, service):
    make_pet(name="Pup", age="3 months")
    make_pet(name="Yearling", age="1 year")
    make_pet(name="Teen", age="3 years")
    make_pet(name="Senior", age="9 years")

    puppies = await service.list_available_pets(AvailablePetFilters(age="puppy"))
    adults = await service.list_available_pets(AvailablePetFilters(age="adult"))

    assert {pet["name"] for pet in puppies} == {"Pup", "Yearling"}
    assert {pet["name"] for pet in adults} == {"Senior"}


@pytest.mark.asyncio
async def test_search_is_case_insensitive(make_pet, service):
    make_pet(name="Max", breed="Golden Retriever")
    make_pet(name="Luna", species="Cat", breed="Siamese", description="Calm and GOLDEN-eyed")
    make_pet(name="Buddy", breed="Labrador", description="Loves fetch")

    pets = await service.list_available_pets(AvailablePetFilters(search="golden"))

    assert {pet["name"] for pet in pets} == {"Max", "Luna"}


@pytest.mark.asyncio
async def test_search_metacharacters_match_literally(make_pet, service):
    make_pet(name="Max", description="Friendly dog")

    pets = await service.list_available_pets(AvailablePetFilters(search=".*"))

    assert pets == []


@pytest.mark.asyncio
async def test_empty_listing(service):
    assert await service.list_available_pets(AvailablePetFilters()) == []


@pytest.mark.asyncio
async def test_query_failure_is_database_error(fake_db, service):
    with patch.object(fake_db.pets, "find", side_effect=PyMongoError("server selection timeout")):
        with pytest.raises(DatabaseOperationError) as exc_info:
            await service.list_available_pets(AvailablePetFilters())

    assert exc_info.value.status_code == 500
    assert exc_info.value.error == "Failed to fetch available pets"
