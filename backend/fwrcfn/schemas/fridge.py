"""
FWRCFN Backend — Fridge Response Schemas
==========================================

What:  API contract for GET /api/fridges and POST /api/sample-data.
How:   Responses keep the stored camelCase field names (`_id`, `isActive`,
       `createdAt`) so existing clients read the same JSON.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fwrcfn.models.fridge import Address, FridgeDocument


class FridgeResponse(BaseModel):
    id: str = Field(alias="_id", description="Fridge identifier")
    name: str
    address: Address
    description: Optional[str] = None
    is_active: bool = Field(alias="isActive")
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_fridge(cls, fridge: FridgeDocument) -> "FridgeResponse":
        return cls(
            id=fridge.id,
            name=fridge.name,
            address=fridge.address,
            description=fridge.description,
            is_active=fridge.is_active,
            created_at=fridge.created_at,
        )


class MessageResponse(BaseModel):
    message: str
