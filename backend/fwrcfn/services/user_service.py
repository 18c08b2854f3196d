"""
FWRCFN Backend — User Service (Registration & Login)
======================================================

What:  Account creation and credential checks on the `users` collection.
How:   Looks users up by email, hashes/verifies passwords through the
       credential service, and issues a session token on success.
Who:   Called by the auth route handlers.

Registration flow (POST /api/register):
    ┌───────────┐    ┌───────────┐    ┌───────────┐    ┌───────────┐
    │ find_one  │───▶│  bcrypt   │───▶│insert_one │───▶│ issue JWT │
    │ by email  │    │   hash    │    │  (users)  │    │           │
    └───────────┘    └───────────┘    └───────────┘    └───────────┘
         │ exists                           │ duplicate key
         ▼                                  ▼
    UserAlreadyExistsError (400)      UserAlreadyExistsError (400)

Login never tells the caller whether the email or the password was wrong.
"""

import logging

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from fwrcfn.exceptions import (
    DatabaseError,
    DatabaseUnavailableError,
    FwrcfnError,
    InvalidCredentialsError,
    UserAlreadyExistsError,
)
from fwrcfn.models.user import USERS_COLLECTION, UserDocument, UserRole
from fwrcfn.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from fwrcfn.services.security_service import security_service

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for user accounts.

    Error Handling Strategy:
        Domain failures raise their own exceptions (400). Losing the server
        mid-request raises DatabaseUnavailableError. Anything else, other
        driver errors included, is logged and re-raised as DatabaseError
        so the client only sees a generic 500.
    """

    async def register(self, db: AsyncDatabase, payload: RegisterRequest) -> AuthResponse:
        """
        Create a user and return a session token for it.

        Raises:
            UserAlreadyExistsError: the email is already registered
            DatabaseUnavailableError: MongoDB became unreachable
            DatabaseError: lookup or insert failed
        """
        users = db[USERS_COLLECTION]
        try:
            existing = await users.find_one({"email": payload.email})
            if existing is not None:
                raise UserAlreadyExistsError(context={"email": payload.email})

            user = UserDocument(
                name=payload.name,
                email=payload.email,
                password=await security_service.hash_password(payload.password),
                role=payload.role or UserRole.USER,
                phone=payload.phone,
            )

            try:
                result = await users.insert_one(user.to_document())
            except DuplicateKeyError:
                # Lost a race against a concurrent registration of the same email
                raise UserAlreadyExistsError(context={"email": payload.email, "race": True})

            user.id = str(result.inserted_id)
            logger.info("Registered user %s (role=%s)", user.id, user.role)

            return AuthResponse(
                token=security_service.issue_token(user.id, user.role),
                user=UserPublic.from_user(user),
            )

        except FwrcfnError:
            raise
        except ConnectionFailure as e:
            logger.error("MongoDB unreachable during registration: %s", str(e))
            raise DatabaseUnavailableError(context={"error_type": type(e).__name__})
        except Exception as e:
            logger.error("Error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

    async def login(self, db: AsyncDatabase, payload: LoginRequest) -> AuthResponse:
        """
        Check credentials and return a fresh session token.

        Raises:
            InvalidCredentialsError: unknown email or wrong password
            DatabaseUnavailableError: MongoDB became unreachable
            DatabaseError: lookup failed
        """
        users = db[USERS_COLLECTION]
        try:
            document = await users.find_one({"email": payload.email})
            if document is None:
                raise InvalidCredentialsError(reason="unknown_email")

            user = UserDocument.from_document(document)
            if not await security_service.verify_password(payload.password, user.password):
                raise InvalidCredentialsError(reason="password_mismatch", context={"user_id": user.id})

            logger.info("User %s logged in", user.id)
            return AuthResponse(
                token=security_service.issue_token(user.id, user.role),
                user=UserPublic.from_user(user),
            )

        except FwrcfnError:
            raise
        except ConnectionFailure as e:
            logger.error("MongoDB unreachable during login: %s", str(e))
            raise DatabaseUnavailableError(context={"error_type": type(e).__name__})
        except Exception as e:
            logger.error("Error during login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})


user_service = UserService()
