"""
FWRCFN Backend — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) turn them into JSON
       error responses with the matching HTTP status code.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    FwrcfnError (base)
    ├── UserAlreadyExistsError     → 400 Bad Request
    ├── InvalidCredentialsError    → 400 Bad Request
    ├── InvalidTokenError          → 401 Unauthorized
    ├── DatabaseUnavailableError   → 500 "Database not connected"
    └── DatabaseError              → 500 "Server error"
"""

from typing import Any, Dict, Optional


class FwrcfnError(Exception):
    """
    Base exception for all FWRCFN application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class UserAlreadyExistsError(FwrcfnError):
    """
    Raised when registering an email that already has an account.

    HTTP: 400 Bad Request
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="User already exists", context=context)


class InvalidCredentialsError(FwrcfnError):
    """
    Raised when a login attempt fails.

    The same exception (and therefore the same response body) is used for an
    unknown email and for a wrong password. The reason is kept in `context`
    for server-side logs only.

    HTTP: 400 Bad Request
    """

    def __init__(self, reason: str = "", context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(message="Invalid credentials", context=ctx)


class InvalidTokenError(FwrcfnError):
    """
    Raised when a session token fails signature or expiry verification.

    HTTP: 401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Token is not valid",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseUnavailableError(FwrcfnError):
    """
    Raised before any data operation when the MongoDB connection is down.

    HTTP: 500 Internal Server Error, message "Database not connected".
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Database not connected", context=context)


class DatabaseError(FwrcfnError):
    """
    Raised when a database operation fails unexpectedly.

    The client only ever sees the generic message; driver details stay in
    `context` and in the server log.

    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
