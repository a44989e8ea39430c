"""
Shared building blocks for the MongoDB document models.

Documents are stored with camelCase keys (``availableForAdoption``,
``applicant.firstName``); models expose snake_case attributes and map them
through aliases.
"""
from typing import Annotated, Any

from bson import ObjectId
from pydantic import BaseModel, StringConstraints
from pydantic.alias_generators import to_camel

# A string that must contain something other than whitespace
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    """Base model reading and writing camelCase keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True


def parse_object_id(value: Any) -> ObjectId | None:
    """
    Convert a string (or ObjectId) into an ObjectId.

    Returns:
        The ObjectId, or None when the value is not a valid identifier.
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def serialize_document(value: Any) -> Any:
    """Recursively replace ObjectIds with their string form."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    return value
