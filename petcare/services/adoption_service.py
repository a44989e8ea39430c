"""
Adoption application workflow: submission, review and retrieval.

Pet and application updates are independent single-document writes; there
is no transaction spanning them.
"""
from datetime import datetime

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from petcare.core.config import settings
from petcare.core.exceptions import (
    ApplicationNotFoundError,
    DatabaseOperationError,
    PetNotAvailableError,
    PetNotFoundError,
    ValidationError,
)
from petcare.log.logging import logger
from petcare.models.adoption import (
    AdoptionApplication,
    Agreement,
    ApplicationStatus,
    generate_application_id,
)
from petcare.models.common import parse_object_id, serialize_document
from petcare.models.pet import AdoptionStatus
from petcare.schemas.adoption import AdoptionApplicationRequest

PET_SUMMARY_PROJECTION = {"name": 1, "species": 1, "breed": 1, "age": 1, "image": 1}
PET_DETAIL_PROJECTION = {**PET_SUMMARY_PROJECTION, "adoptionFee": 1}

NEWEST_FIRST = [("createdAt", DESCENDING)]


class AdoptionService:
    """
    Service for adoption applications and the pet state changes they drive.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        self.pets = database[settings.pets_collection]
        self.adoptions = database[settings.adoptions_collection]

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    async def submit_application(self, request: AdoptionApplicationRequest) -> dict:
        """
        Create an application and reserve the pet it refers to.

        The pet is claimed with a conditional update so that only one
        application can hold it at a time; the claim is released again if
        the application cannot be stored.

        Args:
            request: Validated application payload.

        Returns:
            The stored application with ``petId`` resolved.

        Raises:
            PetNotFoundError: If the referenced pet does not exist.
            PetNotAvailableError: If the pet cannot receive applications.
            DatabaseOperationError: If a database operation fails.
        """
        pet_oid = parse_object_id(request.pet_id)
        if pet_oid is None:
            raise PetNotFoundError(request.pet_id)

        try:
            pet = await self.pets.find_one({"_id": pet_oid})
        except PyMongoError as e:
            raise DatabaseOperationError(str(e), error="Failed to submit adoption application")

        if not pet:
            raise PetNotFoundError(request.pet_id)
        if not pet.get("availableForAdoption"):
            raise PetNotAvailableError(request.pet_id)

        now = datetime.utcnow()

        try:
            claimed = await self.pets.find_one_and_update(
                {
                    "_id": pet_oid,
                    "availableForAdoption": True,
                    "adoptionStatus": AdoptionStatus.AVAILABLE.value,
                },
                {
                    "$set": {
                        "adoptionStatus": AdoptionStatus.PENDING.value,
                        "availableForAdoption": False,
                        "updatedAt": now,
                    }
                },
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise DatabaseOperationError(str(e), error="Failed to submit adoption application")

        if claimed is None:
            # Another application got there first, or the pet is mid-review
            raise PetNotAvailableError(request.pet_id)

        application = AdoptionApplication(
            application_id=generate_application_id(now),
            pet_id=str(pet_oid),
            pet_name=pet.get("name", ""),
            pet_species=pet.get("species", ""),
            pet_breed=pet.get("breed", ""),
            applicant=request.applicant,
            housing=request.housing,
            family=request.family,
            care_plans=request.care_plans,
            references=request.references,
            agreement=Agreement(accepted=True, accepted_at=now),
            submitted_at=now,
            created_at=now,
            updated_at=now,
        )
        document = application.model_dump(by_alias=True, exclude={"id"})
        document["petId"] = pet_oid

        try:
            result = await self.adoptions.insert_one(document)
        except PyMongoError as e:
            await self._release_pet(pet_oid)
            raise DatabaseOperationError(str(e), error="Failed to submit adoption application")

        logger.info(
            "Adoption application {application_id} submitted for pet {pet_id}",
            application_id=application.application_id,
            pet_id=str(pet_oid),
            applicant_email=request.applicant.email,
            event_type="application_submitted",
        )

        return await self._fetch_populated({"_id": result.inserted_id}, PET_SUMMARY_PROJECTION)

    async def _release_pet(self, pet_oid: ObjectId) -> None:
        """Undo a pet claim after a failed application insert."""
        try:
            await self.pets.update_one(
                {"_id": pet_oid, "adoptionStatus": AdoptionStatus.PENDING.value},
                {
                    "$set": {
                        "adoptionStatus": AdoptionStatus.AVAILABLE.value,
                        "availableForAdoption": True,
                        "updatedAt": datetime.utcnow(),
                    }
                },
            )
        except PyMongoError as e:
            logger.error(
                "Failed to release pet {pet_id} after aborted submission: {error}",
                pet_id=str(pet_oid),
                error=str(e),
                event_type="pet_release_failed",
            )

    # -------------------------------------------------------------------------
    # Review
    # -------------------------------------------------------------------------

    async def review_application(
        self,
        application_id: str,
        status: ApplicationStatus,
        review_notes: str | None = None,
        reviewed_by: str | None = None,
    ) -> dict:
        """
        Move an application to a new review status and update its pet.

        approved/completed mark the pet adopted; rejected puts a pending pet
        back on the listing; other statuses leave the pet alone. The pet is
        only touched while the application still holds it (pending or
        under review), so re-reviewing a decided application never undoes
        another application's reservation.

        Args:
            application_id: MongoDB ID or human-readable application ID.
            status: New review status.
            review_notes: Optional reviewer notes.
            reviewed_by: ID of the authenticated reviewer, if known.

        Returns:
            The updated application with ``petId`` resolved.

        Raises:
            ApplicationNotFoundError: If the application does not exist.
            DatabaseOperationError: If a database operation fails.
        """
        status = ApplicationStatus(status)
        now = datetime.utcnow()

        update = {
            "status": status.value,
            "reviewNotes": review_notes,
            "reviewedAt": now,
            "updatedAt": now,
        }
        if reviewed_by:
            update["reviewedBy"] = reviewed_by

        try:
            previous = await self.adoptions.find_one_and_update(
                self._application_query(application_id),
                {"$set": update},
                return_document=ReturnDocument.BEFORE,
            )
        except PyMongoError as e:
            raise DatabaseOperationError(str(e), error="Failed to update application status")

        if previous is None:
            raise ApplicationNotFoundError(application_id)

        # A decided application no longer holds its pet, which may since
        # have been reserved by another application.
        if ApplicationStatus(previous["status"]).holds_pet:
            await self._apply_pet_transition(previous["petId"], status, now)
        else:
            logger.info(
                "Application {application_id} was already {previous_status}; pet left unchanged",
                application_id=previous.get("applicationId"),
                previous_status=previous["status"],
                event_type="pet_transition_skipped",
            )

        application = {**previous, **update}

        logger.info(
            "Application {application_id} moved to {status}",
            application_id=application.get("applicationId"),
            status=status.value,
            reviewed_by=reviewed_by,
            event_type="application_reviewed",
        )

        return await self._populate(application, PET_SUMMARY_PROJECTION)

    async def _apply_pet_transition(
        self, pet_id: ObjectId, status: ApplicationStatus, now: datetime
    ) -> None:
        target = status.pet_transition
        if target is None:
            return

        if target is AdoptionStatus.ADOPTED:
            query = {"_id": pet_id}
            changes = {"adoptionStatus": target.value, "availableForAdoption": False}
        else:
            # Only a pet still reserved goes back on the listing
            query = {"_id": pet_id, "adoptionStatus": AdoptionStatus.PENDING.value}
            changes = {"adoptionStatus": target.value, "availableForAdoption": True}

        try:
            await self.pets.update_one(query, {"$set": {**changes, "updatedAt": now}})
        except PyMongoError as e:
            raise DatabaseOperationError(str(e), error="Failed to update application status")

    # -------------------------------------------------------------------------
    # Retrieval
    # -------------------------------------------------------------------------

    async def list_applications(self) -> list[dict]:
        """All applications, newest first."""
        return await self._find_populated({}, "Failed to fetch adoption applications")

    async def list_applications_by_email(self, email: str | None) -> list[dict]:
        """
        Applications submitted with the given applicant email, newest first.

        Raises:
            ValidationError: If no email is given.
        """
        if not email or not email.strip():
            raise ValidationError("Email is required", "The email query parameter is required")

        return await self._find_populated(
            {"applicant.email": email.strip()}, "Failed to fetch your applications"
        )

    async def get_application(self, application_id: str) -> dict:
        """
        A single application with ``petId`` resolved, including the adoption fee.

        Raises:
            ApplicationNotFoundError: If the application does not exist.
        """
        return await self._fetch_populated(
            self._application_query(application_id),
            PET_DETAIL_PROJECTION,
            not_found_id=application_id,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _application_query(application_id: str) -> dict:
        object_id = parse_object_id(application_id)
        if object_id is not None:
            return {"_id": object_id}
        return {"applicationId": application_id}

    async def _fetch_populated(
        self, query: dict, projection: dict, not_found_id: str | None = None
    ) -> dict:
        try:
            application = await self.adoptions.find_one(query)
        except PyMongoError as e:
            raise DatabaseOperationError(str(e), error="Failed to fetch application")

        if application is None:
            raise ApplicationNotFoundError(not_found_id or str(query))

        return await self._populate(application, projection)

    async def _find_populated(self, query: dict, error: str) -> list[dict]:
        try:
            cursor = self.adoptions.find(query).sort(NEWEST_FIRST)
            applications = await cursor.to_list(length=None)

            pet_ids = list({app["petId"] for app in applications if app.get("petId")})
            pets = {}
            if pet_ids:
                pet_cursor = self.pets.find({"_id": {"$in": pet_ids}}, PET_SUMMARY_PROJECTION)
                pets = {pet["_id"]: pet for pet in await pet_cursor.to_list(length=None)}
        except PyMongoError as e:
            logger.exception("{error}: {detail}", error=error, detail=str(e), event_type="fetch_error")
            raise DatabaseOperationError(str(e), error=error)

        return [
            serialize_document({**app, "petId": pets.get(app.get("petId"), app.get("petId"))})
            for app in applications
        ]

    async def _populate(self, application: dict, projection: dict) -> dict:
        """Replace ``petId`` with the pet projection, mirroring a populate."""
        pet_id = application.get("petId")
        pet = None
        if pet_id is not None:
            try:
                pet = await self.pets.find_one({"_id": pet_id}, projection)
            except PyMongoError as e:
                raise DatabaseOperationError(str(e), error="Failed to fetch application")

        return serialize_document({**application, "petId": pet or pet_id})
