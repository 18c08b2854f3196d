"""
FWRCFN Backend — Fridge Service
=================================

What:  Listing of active fridges and seeding of sample locations.
Who:   Called by the fridge route handlers.

Seeding does not deduplicate: every call inserts the two sample fridges
again. Stored documents that do not fit the fridge shape are left out of the
listing with a warning instead of failing the whole response.
"""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConnectionFailure

from fwrcfn.exceptions import DatabaseError, DatabaseUnavailableError
from fwrcfn.models.fridge import FRIDGES_COLLECTION, FridgeDocument
from fwrcfn.schemas.fridge import FridgeResponse, MessageResponse

logger = logging.getLogger(__name__)

SAMPLE_FRIDGES: List[Dict[str, Any]] = [
    {
        "name": "Community Center Fridge",
        "address": {
            "street": "123 Main Street",
            "city": "New York",
            "state": "NY",
        },
        "description": "24/7 accessible community fridge",
    },
    {
        "name": "Downtown Food Share",
        "address": {
            "street": "456 Oak Avenue",
            "city": "New York",
            "state": "NY",
        },
        "description": "Located near central park",
    },
]


class FridgeService:

    async def list_active(self, db: AsyncDatabase) -> List[FridgeResponse]:
        """All fridges with isActive == true, in store order."""
        try:
            cursor = db[FRIDGES_COLLECTION].find({"isActive": True})
            documents = await cursor.to_list(length=None)
        except ConnectionFailure as e:
            logger.error("MongoDB unreachable while listing fridges: %s", str(e))
            raise DatabaseUnavailableError(context={"error_type": type(e).__name__})
        except Exception as e:
            logger.error("Error listing fridges: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        fridges = []
        for document in documents:
            try:
                fridges.append(FridgeResponse.from_fridge(FridgeDocument.from_document(document)))
            except ValidationError as e:
                logger.warning(
                    "Skipping malformed fridge %s: %d invalid field(s)",
                    document.get("_id"), e.error_count(),
                )
        return fridges

    async def create_sample_data(self, db: AsyncDatabase) -> MessageResponse:
        """Bulk-insert the sample fridges."""
        documents = [FridgeDocument(**fridge).to_document() for fridge in SAMPLE_FRIDGES]
        try:
            result = await db[FRIDGES_COLLECTION].insert_many(documents)
        except ConnectionFailure as e:
            logger.error("MongoDB unreachable while seeding fridges: %s", str(e))
            raise DatabaseUnavailableError(context={"error_type": type(e).__name__})
        except Exception as e:
            logger.error("Error inserting sample fridges: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Inserted %d sample fridges", len(result.inserted_ids))
        return MessageResponse(message="Sample data created successfully")


fridge_service = FridgeService()
