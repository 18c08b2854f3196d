"""
FWRCFN Backend — Shared Schemas
=================================

What:  Error envelope and the two status probe responses.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "database_unavailable",
            "message": "Database not connected",
            "request_id": "1f3a9c0e"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class BannerResponse(BaseModel):
    """Returned by GET /."""

    message: str
    database: str = Field(description="Connected or Disconnected")
    timestamp: datetime


class StatusResponse(BaseModel):
    """Returned by GET /api/status."""

    status: str
    database: str = Field(description="Connected or Disconnected")
    timestamp: datetime
