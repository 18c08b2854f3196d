"""
FWRCFN Backend — Fridge Route Handlers
========================================

What:  GET /api/fridges (active fridges) and POST /api/sample-data (seed).
"""

from typing import List

from fastapi import APIRouter, Depends
from pymongo.asynchronous.database import AsyncDatabase

from fwrcfn.database import get_database
from fwrcfn.schemas.common import ErrorResponse
from fwrcfn.schemas.fridge import FridgeResponse, MessageResponse
from fwrcfn.services.fridge_service import fridge_service

router = APIRouter(prefix="/api", tags=["Fridges"])


@router.get(
    "/fridges",
    response_model=List[FridgeResponse],
    response_model_exclude_none=True,
    responses={
        500: {"description": "Database not connected or server error", "model": ErrorResponse},
    },
    summary="List active fridges",
    description="Returns every fridge whose isActive flag is true. No pagination.",
)
async def list_fridges(
    db: AsyncDatabase = Depends(get_database),
) -> List[FridgeResponse]:
    return await fridge_service.list_active(db=db)


@router.post(
    "/sample-data",
    response_model=MessageResponse,
    responses={
        500: {"description": "Database not connected or server error", "model": ErrorResponse},
    },
    summary="Insert sample fridges",
    description="Inserts two sample fridges. Calling it again inserts them again.",
)
async def create_sample_data(
    db: AsyncDatabase = Depends(get_database),
) -> MessageResponse:
    return await fridge_service.create_sample_data(db=db)
