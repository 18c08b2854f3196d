"""
FWRCFN Backend — Auth Route Handlers
======================================

What:  POST /api/register and POST /api/login.
How:   Validate the JSON body, check the connection (get_database), delegate
       to UserService. Errors propagate to the global exception handlers.
"""

from fastapi import APIRouter, Depends, status
from pymongo.asynchronous.database import AsyncDatabase

from fwrcfn.database import get_database
from fwrcfn.schemas.common import ErrorResponse
from fwrcfn.schemas.user import AuthResponse, LoginRequest, RegisterRequest
from fwrcfn.services.user_service import user_service

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Email already registered or invalid body", "model": ErrorResponse},
        500: {"description": "Database not connected or server error", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    db: AsyncDatabase = Depends(get_database),
) -> AuthResponse:
    """
    Create an account and return a session token.

    The role defaults to `user` when omitted. The password is stored only as
    a bcrypt hash.
    """
    return await user_service.register(db=db, payload=payload)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"description": "Invalid credentials", "model": ErrorResponse},
        500: {"description": "Database not connected or server error", "model": ErrorResponse},
    },
    summary="Log in with email and password",
)
async def login(
    payload: LoginRequest,
    db: AsyncDatabase = Depends(get_database),
) -> AuthResponse:
    return await user_service.login(db=db, payload=payload)
