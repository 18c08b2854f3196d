"""
FWRCFN Backend — User Document Model
======================================

What:  Shape of a document in the `users` collection.
How:   Pydantic model with camelCase aliases matching the stored field names
       (`isActive`, `createdAt`, `_id`). `to_document()` produces the dict
       handed to pymongo; `from_document()` parses what pymongo returns.

Stored document:
    {
        "_id": ObjectId,
        "name": "Ada",
        "email": "ada@example.com",
        "password": "$2b$10$...",      ← bcrypt hash, never plaintext
        "role": "user",                ← admin | user | volunteer | donor
        "phone": "555-0100",           ← omitted when not provided
        "isActive": true,
        "createdAt": ISODate(...)
    }

Email uniqueness is enforced by a unique index (see database.ensure_indexes).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

USERS_COLLECTION = "users"


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"
    VOLUNTEER = "volunteer"
    DONOR = "donor"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserDocument(BaseModel):
    """A registered account. Created on registration, never updated."""

    id: Optional[str] = Field(default=None, alias="_id")
    name: str
    email: str
    password: str
    role: UserRole = UserRole.USER
    phone: Optional[str] = None
    is_active: bool = Field(default=True, alias="isActive")
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v: Any) -> Any:
        if isinstance(v, ObjectId):
            return str(v)
        return v

    def to_document(self) -> Dict[str, Any]:
        """Dict for insertion; `_id` is left to the store."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "UserDocument":
        return cls.model_validate(document)
