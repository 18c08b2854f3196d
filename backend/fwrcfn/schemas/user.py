"""
FWRCFN Backend — Auth Request/Response Schemas
================================================

What:  API contract for POST /api/register and POST /api/login.
How:   FastAPI validates request bodies against these models and serializes
       responses through them. The password hash never appears in a response
       model.

Email format is deliberately not validated: any string is accepted.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from fwrcfn.models.user import UserDocument, UserRole


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, description="Display name")
    email: str = Field(min_length=1, description="Login email, unique per account")
    password: str = Field(min_length=1, description="Plaintext password (hashed before storage)")
    role: Optional[UserRole] = Field(
        default=None,
        description="admin, user, volunteer or donor. Defaults to user.",
    )
    phone: Optional[str] = Field(default=None, description="Optional phone number")

    @field_validator("role", mode="before")
    @classmethod
    def blank_role_is_default(cls, v: Any) -> Any:
        """An empty role string falls back to the default role."""
        if v == "":
            return None
        return v


class LoginRequest(BaseModel):
    email: str = Field(description="Account email")
    password: str = Field(description="Plaintext password")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserPublic(BaseModel):
    """Subset of a user that is safe to return to clients."""

    id: str
    name: str
    email: str
    role: UserRole

    @classmethod
    def from_user(cls, user: UserDocument) -> "UserPublic":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role)


class AuthResponse(BaseModel):
    """
    Returned by both register (201) and login (200).

    Example:
        {
            "token": "eyJhbGciOiJIUzI1NiIs...",
            "user": {"id": "665f...", "name": "Ada", "email": "ada@example.com", "role": "user"}
        }
    """

    token: str = Field(description="Signed session token (valid for 7 days by default)")
    user: UserPublic
