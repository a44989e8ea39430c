"""
Adoption router.

This module provides endpoints for:
- Listing pets available for adoption
- Submitting adoption applications
- Reviewing applications (status transitions)
- Retrieving applications (all, by applicant email, single)
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from petcare.core.auth import get_optional_reviewer
from petcare.routers.dependencies import get_adoption_service, get_pet_listing_service
from petcare.schemas.adoption import (
    AdoptionApplicationRequest,
    ApplicationDetailResponse,
    ApplicationResponse,
    ApplicationStatusUpdate,
    ApplicationStatusUpdateResponse,
    ApplicationSubmitResponse,
    AvailablePet,
    AvailablePetFilters,
)
from petcare.services.adoption_service import AdoptionService
from petcare.services.pet_listing_service import PetListingService

router = APIRouter(prefix="/adoption", tags=["adoption"])


# -----------------------------------------------------------------------------
# Application Retrieval
# -----------------------------------------------------------------------------

@router.get(
    "/applications",
    summary="List adoption applications",
    description="All adoption applications, newest first (administrative view).",
    response_model=list[ApplicationResponse],
)
async def list_applications(service: AdoptionService = Depends(get_adoption_service)):
    return await service.list_applications()


@router.get(
    "/applications/my-applications",
    summary="List an applicant's applications",
    description="Applications submitted with the given applicant email, newest first.",
    response_model=list[ApplicationResponse],
)
async def list_my_applications(
    email: str | None = Query(default=None, description="Applicant email"),
    service: AdoptionService = Depends(get_adoption_service),
):
    return await service.list_applications_by_email(email)


@router.get(
    "/applications/{application_id}",
    summary="Get an adoption application",
    description="Fetch one application by its ID or its human-readable application ID.",
    response_model=ApplicationDetailResponse,
)
async def get_application(
    application_id: str,
    service: AdoptionService = Depends(get_adoption_service),
):
    return await service.get_application(application_id)


# -----------------------------------------------------------------------------
# Application Submission
# -----------------------------------------------------------------------------

@router.post(
    "/applications",
    summary="Submit an adoption application",
    description=(
        "Creates an application for an adoptable pet and reserves the pet "
        "while the application is reviewed."
    ),
    status_code=status.HTTP_201_CREATED,
    response_model=ApplicationSubmitResponse,
)
async def submit_application(
    payload: Any = Body(default=None),
    service: AdoptionService = Depends(get_adoption_service),
):
    """
    Submit an adoption application.

    The body is validated here rather than by FastAPI so that any missing
    block is reported as "Missing required fields" with HTTP 400. An
    empty body counts as every block missing.
    """
    request = AdoptionApplicationRequest.from_payload(payload)
    application = await service.submit_application(request)
    return ApplicationSubmitResponse(application=application)


# -----------------------------------------------------------------------------
# Application Review
# -----------------------------------------------------------------------------

@router.put(
    "/applications/{application_id}/status",
    summary="Review an adoption application",
    description=(
        "Moves the application to a new status. approved/completed mark the "
        "pet adopted; rejected returns a reserved pet to the listing."
    ),
    response_model=ApplicationStatusUpdateResponse,
)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    reviewer_id: str | None = Depends(get_optional_reviewer),
    service: AdoptionService = Depends(get_adoption_service),
):
    application = await service.review_application(
        application_id,
        status=update.status,
        review_notes=update.review_notes,
        reviewed_by=reviewer_id,
    )
    return ApplicationStatusUpdateResponse(application=application)


# -----------------------------------------------------------------------------
# Available Pets
# -----------------------------------------------------------------------------

@router.get(
    "/available-pets",
    summary="List pets available for adoption",
    description="Featured pets first, then newest first. No pagination.",
    response_model=list[AvailablePet],
)
async def list_available_pets(
    species: str | None = Query(default=None, description="Filter by species (e.g., Dog)"),
    age: str | None = Query(default=None, description="Age bucket: puppy, young or adult"),
    size: str | None = Query(default=None, description="Filter by size (e.g., Large)"),
    search: str | None = Query(default=None, description="Search name, breed and description"),
    service: PetListingService = Depends(get_pet_listing_service),
):
    filters = AvailablePetFilters(species=species, age=age, size=size, search=search)
    return await service.list_available_pets(filters)
