"""
Adoption application models.

This module defines the application document, its nested applicant blocks,
the review status lifecycle and the human-readable application ID format.
"""
import secrets
from datetime import datetime
from enum import Enum

from pydantic import Field

from petcare.models.common import CamelModel, RequiredStr
from petcare.models.pet import AdoptionStatus

BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
APPLICATION_ID_SUFFIX_LENGTH = 5


class ApplicationStatus(str, Enum):
    """
    Review status of an adoption application.

    Lifecycle: pending -> under_review -> approved/rejected, approved -> completed
    """
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"

    @property
    def holds_pet(self) -> bool:
        """Whether an application in this status keeps its pet reserved."""
        return self in (ApplicationStatus.PENDING, ApplicationStatus.UNDER_REVIEW)

    @property
    def pet_transition(self) -> AdoptionStatus | None:
        """The adoption status this review outcome moves the pet to, if any."""
        if self in (ApplicationStatus.APPROVED, ApplicationStatus.COMPLETED):
            return AdoptionStatus.ADOPTED
        if self is ApplicationStatus.REJECTED:
            return AdoptionStatus.AVAILABLE
        return None


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_application_id(now: datetime | None = None) -> str:
    """
    Build an application ID like ``APP-LXK3Z9A1-4F7QK``.

    The first part is the creation time in epoch milliseconds, the second a
    random suffix; both are base36 and uppercased.
    """
    now = now or datetime.utcnow()
    epoch_ms = int((now - datetime(1970, 1, 1)).total_seconds() * 1000)
    suffix = "".join(
        secrets.choice(BASE36_ALPHABET) for _ in range(APPLICATION_ID_SUFFIX_LENGTH)
    )
    return f"APP-{to_base36(epoch_ms)}-{suffix}".upper()


# -----------------------------------------------------------------------------
# Applicant-supplied blocks
# -----------------------------------------------------------------------------

class Applicant(CamelModel):
    first_name: RequiredStr
    last_name: RequiredStr
    email: RequiredStr
    phone: RequiredStr
    address: RequiredStr
    city: RequiredStr
    state: RequiredStr
    zip_code: RequiredStr


class Housing(CamelModel):
    housing_type: RequiredStr = Field(..., alias="type")
    ownership: RequiredStr
    landlord_phone: str | None = None
    yard_access: RequiredStr
    yard_fenced: str | None = None


class Family(CamelModel):
    household_members: RequiredStr
    children_ages: str | None = None
    experience_with_pets: RequiredStr
    current_pets: RequiredStr


class CarePlans(CamelModel):
    hours_alone: RequiredStr
    sleeping_arrangements: RequiredStr
    exercise_plans: RequiredStr
    financial_preparedness: RequiredStr
    veterinary_clinic: RequiredStr


class Reference(CamelModel):
    name: RequiredStr
    phone: RequiredStr
    relationship: RequiredStr


class Agreement(CamelModel):
    accepted: bool
    accepted_at: datetime | None = None


# -----------------------------------------------------------------------------
# Application document
# -----------------------------------------------------------------------------

class AdoptionApplication(CamelModel):
    """
    Model representing an adoption application document in MongoDB.

    ``pet_id`` and the ``pet_*`` snapshot fields are fixed at submission;
    only the status and review fields change afterwards.
    """
    id: str | None = Field(None, alias="_id", description="MongoDB document ID")
    application_id: str = Field(..., description="Human-readable ID, e.g. APP-LXK3Z9A1-4F7QK")
    status: ApplicationStatus = ApplicationStatus.PENDING

    pet_id: str = Field(..., description="Referenced pet")
    pet_name: str
    pet_species: str
    pet_breed: str

    applicant: Applicant
    housing: Housing
    family: Family
    care_plans: CarePlans
    references: list[Reference] = Field(default_factory=list)
    agreement: Agreement

    submitted_at: datetime = Field(default_factory=datetime.utcnow)

    review_notes: str | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
