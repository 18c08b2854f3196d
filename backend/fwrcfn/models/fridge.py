"""
FWRCFN Backend — Fridge Document Model
========================================

What:  Shape of a document in the `fridges` collection: a physical community
       fridge location.

Stored document:
    {
        "_id": ObjectId,
        "name": "Community Center Fridge",
        "address": {"street": "...", "city": "...", "state": "NY"},
        "description": "24/7 accessible community fridge",   ← optional
        "isActive": true,
        "createdAt": ISODate(...)
    }

Only documents with `isActive: true` are listed by the API.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from fwrcfn.models.user import utcnow

FRIDGES_COLLECTION = "fridges"


class Address(BaseModel):
    street: str
    city: str
    state: str


class FridgeDocument(BaseModel):
    id: Optional[str] = Field(default=None, alias="_id")
    name: str
    address: Address
    description: Optional[str] = None
    is_active: bool = Field(default=True, alias="isActive")
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v: Any) -> Any:
        if isinstance(v, ObjectId):
            return str(v)
        return v

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "FridgeDocument":
        return cls.model_validate(document)
