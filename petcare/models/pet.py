"""
Pet models.

Only the adoption-related part of a pet is mutated by this service; the rest
of the record is owned by the pet management screens.
"""
from datetime import datetime
from enum import Enum

from pydantic import Field

from petcare.models.common import CamelModel


class AdoptionStatus(str, Enum):
    """
    Adoption lifecycle of a pet.

    Lifecycle: available -> pending -> adopted, or pending -> available when
    the application holding the pet is rejected.
    """
    AVAILABLE = "available"
    PENDING = "pending"
    ADOPTED = "adopted"


class Species(str, Enum):
    DOG = "Dog"
    CAT = "Cat"
    BIRD = "Bird"
    RABBIT = "Rabbit"
    OTHER = "Other"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class PetSize(str, Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class Pet(CamelModel):
    """
    Model representing a pet document in MongoDB.
    """
    id: str | None = Field(None, alias="_id", description="MongoDB document ID")
    name: str
    species: Species
    breed: str
    age: str = Field(..., description="Free-text age, e.g. '2 years' or '6 months'")
    gender: Gender
    size: PetSize
    weight: str | None = None
    color: str | None = None
    image: str | None = None

    # Adoption listing details
    location: str = "Shelter"
    description: str = ""
    good_with: list[str] = Field(default_factory=list)
    special_needs: str = "None"
    energy_level: str = "Medium"
    training_level: str = "None"
    featured: bool = False
    vaccinated: bool = False
    neutered: bool = False
    adoption_fee: float = 0

    # Adoption state
    available_for_adoption: bool = False
    adoption_status: AdoptionStatus = AdoptionStatus.AVAILABLE

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def to_document(self) -> dict:
        """Return the MongoDB document for insertion (without ``_id``)."""
        return self.model_dump(by_alias=True, exclude={"id"})
