import copy
import re
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from petcare.core.config import settings
from petcare.core.database import get_database
from petcare.main import app


# -----------------------------------------------------------------------------
# In-memory MongoDB stand-in
# -----------------------------------------------------------------------------
# Implements the subset of the Motor collection API the services use:
# equality, dotted keys, $in, $regex/$options and $or queries; inclusion
# projections; $set updates; multi-key sorts.

_MISSING = object()


def _get_path(document: dict, dotted_key: str):
    value = document
    for part in dotted_key.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _matches(document: dict, query: dict) -> bool:
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(document, sub_query) for sub_query in condition):
                return False
            continue

        value = _get_path(document, key)

        if isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition):
            for operator, argument in condition.items():
                if operator == "$in":
                    if value is _MISSING or value not in argument:
                        return False
                elif operator == "$regex":
                    flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                    if not isinstance(value, str) or not re.search(argument, value, flags):
                        return False
                elif operator == "$options":
                    continue
                else:
                    raise NotImplementedError(f"Unsupported operator {operator}")
        elif value is _MISSING or value != condition:
            return False
    return True


def _project(document: dict, projection: dict | None) -> dict:
    if not projection:
        return copy.deepcopy(document)
    projected = {"_id": document["_id"]}
    for key, include in projection.items():
        if include and key in document:
            projected[key] = document[key]
    return copy.deepcopy(projected)


def _sort_key(value):
    if value is _MISSING or value is None:
        return (0, 0)
    return (1, value)


class FakeCursor:
    def __init__(self, documents: list[dict]):
        self._documents = documents

    def sort(self, key_or_list, direction=None):
        keys = [(key_or_list, direction)] if isinstance(key_or_list, str) else list(key_or_list)
        for key, key_direction in reversed(keys):
            self._documents.sort(
                key=lambda doc: _sort_key(_get_path(doc, key)), reverse=key_direction < 0
            )
        return self

    async def to_list(self, length=None):
        return self._documents[:length] if length else list(self._documents)


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.documents: list[dict] = []

    # Synchronous helpers for arranging and asserting in tests

    def add(self, document: dict) -> ObjectId:
        document = copy.deepcopy(document)
        document.setdefault("_id", ObjectId())
        self.documents.append(document)
        return document["_id"]

    def get(self, document_id) -> dict | None:
        for document in self.documents:
            if document["_id"] == document_id:
                return copy.deepcopy(document)
        return None

    # Motor-compatible API

    async def find_one(self, query=None, projection=None):
        for document in self.documents:
            if _matches(document, query or {}):
                return _project(document, projection)
        return None

    def find(self, query=None, projection=None):
        return FakeCursor(
            [_project(doc, projection) for doc in self.documents if _matches(doc, query or {})]
        )

    async def insert_one(self, document: dict):
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def insert_many(self, documents: list[dict]):
        inserted_ids = []
        for document in documents:
            result = await self.insert_one(document)
            inserted_ids.append(result.inserted_id)
        return SimpleNamespace(inserted_ids=inserted_ids)

    def _apply_update(self, document: dict, update: dict) -> bool:
        unsupported = set(update) - {"$set"}
        if unsupported:
            raise NotImplementedError(f"Unsupported update operators {unsupported}")
        before = copy.deepcopy(document)
        document.update(copy.deepcopy(update.get("$set", {})))
        return document != before

    async def update_one(self, query: dict, update: dict):
        for document in self.documents:
            if _matches(document, query):
                modified = self._apply_update(document, update)
                return SimpleNamespace(matched_count=1, modified_count=int(modified))
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def update_many(self, query: dict, update: dict):
        matched = modified = 0
        for document in self.documents:
            if _matches(document, query):
                matched += 1
                modified += int(self._apply_update(document, update))
        return SimpleNamespace(matched_count=matched, modified_count=modified)

    async def find_one_and_update(self, query: dict, update: dict, return_document=False):
        for document in self.documents:
            if _matches(document, query):
                before = copy.deepcopy(document)
                self._apply_update(document, update)
                return copy.deepcopy(document) if return_document else before
        return None

    async def delete_many(self, query: dict):
        kept = [doc for doc in self.documents if not _matches(doc, query)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return SimpleNamespace(deleted_count=deleted)

    async def create_indexes(self, indexes):
        return [index.document["name"] for index in indexes]


class FakeDatabase:
    def __init__(self):
        self._collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self._collections.setdefault(name, FakeCollection(name))

    @property
    def pets(self) -> FakeCollection:
        return self[settings.pets_collection]

    @property
    def adoptions(self) -> FakeCollection:
        return self[settings.adoptions_collection]


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def fake_db():
    """Provide an empty in-memory database."""
    return FakeDatabase()


@pytest.fixture
def test_client(fake_db):
    """Create a test client for FastAPI backed by the in-memory database."""

    async def override_get_database():
        return fake_db

    app.dependency_overrides[get_database] = override_get_database
    client = TestClient(app)

    yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_pet(fake_db):
    """Insert a pet document and return its ObjectId."""
    base_time = datetime(2024, 1, 1, 12, 0, 0)

    def _make_pet(minutes: int = 0, **overrides) -> ObjectId:
        document = {
            "name": "Max",
            "species": "Dog",
            "breed": "Golden Retriever",
            "age": "2 years",
            "gender": "Male",
            "size": "Large",
            "location": "New York, NY",
            "description": "Friendly and energetic golden retriever.",
            "image": "https://example.com/max.jpg",
            "adoptionFee": 250,
            "vaccinated": True,
            "neutered": True,
            "goodWith": ["Kids", "Dogs"],
            "specialNeeds": "None",
            "energyLevel": "High",
            "trainingLevel": "Basic",
            "featured": False,
            "availableForAdoption": True,
            "adoptionStatus": "available",
            "createdAt": base_time + timedelta(minutes=minutes),
            "updatedAt": base_time + timedelta(minutes=minutes),
        }
        document.update(overrides)
        return fake_db.pets.add(document)

    return _make_pet


@pytest.fixture
def application_payload():
    """Build a complete adoption application body for a pet."""

    def _payload(pet_id, **overrides) -> dict:
        payload = {
            "petId": str(pet_id),
            "applicant": {
                "firstName": "Jane",
                "lastName": "Doe",
                "email": "jane@example.com",
                "phone": "555-0100",
                "address": "1 Main St",
                "city": "Springfield",
                "state": "IL",
                "zipCode": "62701",
            },
            "housing": {
                "type": "House",
                "ownership": "Own",
                "landlordPhone": "",
                "yardAccess": "Yes",
                "yardFenced": "Yes",
            },
            "family": {
                "householdMembers": "2 adults",
                "childrenAges": "",
                "experienceWithPets": "Grew up with dogs",
                "currentPets": "None",
            },
            "carePlans": {
                "hoursAlone": "4",
                "sleepingArrangements": "Indoors",
                "exercisePlans": "Two walks a day",
                "financialPreparedness": "Budgeted",
                "veterinaryClinic": "Springfield Vet",
            },
            "references": [
                {"name": "John Smith", "phone": "555-0101", "relationship": "Friend"},
            ],
            "agreement": True,
        }
        payload.update(overrides)
        return payload

    return _payload
