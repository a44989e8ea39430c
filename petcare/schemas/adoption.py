"""
Request and response schemas for the adoption endpoints.
"""
from typing import Any

from pydantic import Field, ValidationError as PydanticValidationError, field_validator

from petcare.core.exceptions import ErrorCode, ErrorDetail, InvalidApplicationError
from petcare.models.adoption import (
    AdoptionApplication,
    Applicant,
    ApplicationStatus,
    CarePlans,
    Family,
    Housing,
    Reference,
)
from petcare.models.common import CamelModel, RequiredStr

__all__ = [
    "AdoptionApplicationRequest",
    "ApplicationStatusUpdate",
    "PetSummary",
    "PetDetailSummary",
    "ApplicationResponse",
    "ApplicationDetailResponse",
    "ApplicationSubmitResponse",
    "ApplicationStatusUpdateResponse",
    "AvailablePetFilters",
    "AvailablePet",
]


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------

class AdoptionApplicationRequest(CamelModel):
    """
    Request model for submitting an adoption application.
    """
    pet_id: RequiredStr = Field(..., description="ID of the pet being applied for")
    applicant: Applicant
    housing: Housing
    family: Family
    care_plans: CarePlans
    references: list[Reference] = Field(default_factory=list)
    agreement: bool = Field(..., description="Applicant accepted the adoption agreement")

    @field_validator("references", mode="before")
    @classmethod
    def none_means_no_references(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("agreement")
    @classmethod
    def agreement_must_be_accepted(cls, value: bool) -> bool:
        if not value:
            raise ValueError("The adoption agreement must be accepted")
        return value

    @classmethod
    def from_payload(cls, payload: Any) -> "AdoptionApplicationRequest":
        """
        Validate a raw JSON body.

        Raises:
            InvalidApplicationError: With one detail per failing field.
        """
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as e:
            details = [
                ErrorDetail(
                    code=ErrorCode.VALIDATION_ERROR,
                    message=error["msg"],
                    field=".".join(str(part) for part in error["loc"]),
                )
                for error in e.errors()
            ]
            raise InvalidApplicationError(details=details)


class ApplicationStatusUpdate(CamelModel):
    """
    Request model for the review transition.
    """
    status: ApplicationStatus
    review_notes: str | None = None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------

class PetSummary(CamelModel):
    """Pet projection embedded in application responses."""
    id: str = Field(..., alias="_id")
    name: str | None = None
    species: str | None = None
    breed: str | None = None
    age: str | None = None
    image: str | None = None


class PetDetailSummary(PetSummary):
    adoption_fee: float | None = None


class ApplicationResponse(AdoptionApplication):
    """
    Stored application with ``petId`` resolved to a pet projection.

    ``petId`` stays a plain ID when the pet has since been deleted.
    """
    id: str = Field(..., alias="_id")
    pet_id: PetSummary | str | None = None


class ApplicationDetailResponse(ApplicationResponse):
    pet_id: PetDetailSummary | str | None = None


class ApplicationSubmitResponse(CamelModel):
    message: str = "Adoption application submitted successfully"
    application: ApplicationResponse


class ApplicationStatusUpdateResponse(CamelModel):
    message: str = "Application status updated successfully"
    application: ApplicationResponse


class AvailablePetFilters(CamelModel):
    """
    Filters for the adoptable pet listing.
    """
    species: str | None = Field(default=None, description="Exact species, e.g. 'Dog'")
    age: str | None = Field(default=None, description="Age bucket: puppy, young or adult")
    size: str | None = Field(default=None, description="Exact size, e.g. 'Large'")
    search: str | None = Field(
        default=None, description="Case-insensitive text matched against name, breed and description"
    )


class AvailablePet(CamelModel):
    """Pet as shown in the adoption listing."""
    id: str = Field(..., alias="_id")
    name: str
    species: str
    breed: str
    age: str
    size: str | None = None
    gender: str | None = None
    location: str | None = None
    description: str | None = None
    image: str | None = None
    adoption_fee: float | None = None
    vaccinated: bool | None = None
    neutered: bool | None = None
    good_with: list[str] = Field(default_factory=list)
    special_needs: str | None = None
    energy_level: str | None = None
    training_level: str | None = None
    featured: bool = False
    available_for_adoption: bool
