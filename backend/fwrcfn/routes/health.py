"""
FWRCFN Backend — Status Routes
================================

What:  GET / (banner) and GET /api/status (probe).
How:   Both report the MongoDB connection state without touching the
       database, so they answer 200 even while MongoDB is down.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from fwrcfn.database import mongo
from fwrcfn.schemas.common import BannerResponse, StatusResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/",
    response_model=BannerResponse,
    summary="Service banner",
)
async def root() -> BannerResponse:
    return BannerResponse(
        message="FWRCFN Backend is running!",
        database=mongo.state_label,
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/api/status",
    response_model=StatusResponse,
    summary="Service status probe",
    description="Reports whether the server is up and whether MongoDB is connected.",
)
async def status() -> StatusResponse:
    return StatusResponse(
        status="Server is running",
        database=mongo.state_label,
        timestamp=datetime.now(timezone.utc),
    )
