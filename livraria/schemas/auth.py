"""Schemas for identities, user accounts, and auth request/response payloads."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from livraria.core.security import (
    DISPLAY_NAME_MAX_LEN,
    DISPLAY_NAME_MIN_LEN,
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)

# Shape check only.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class Role(StrEnum):
    """Closed set of roles. Serialized as its lowercase string value; compared case-sensitively."""

    USER = "user"
    ADMIN = "admin"


class IdentityClaims(BaseModel):
    """Identity projected into a token; issued_at/expires_at are filled in on validation."""

    model_config = {"frozen": True}

    user_id: int
    name: str = Field(..., min_length=1)
    email: str = ""
    role: Role
    issued_at: datetime | None = None
    expires_at: datetime | None = None


class UserAccount(BaseModel):
    """
    A persisted user record as handed over by the storage layer.

    Read-only input: nothing in this package mutates or saves it. Built from
    ORM rows with UserAccount.model_validate(row).
    """

    model_config = {"from_attributes": True, "frozen": True}

    id: int
    display_name: str
    email: str
    password_hash: bytes
    password_salt: bytes
    is_active: bool = True
    role: Role = Role.USER
    created_at: datetime | None = None

    def identity(self) -> IdentityClaims:
        return IdentityClaims(
            user_id=self.id,
            name=self.display_name,
            email=self.email,
            role=self.role,
        )


class NewAccount(BaseModel):
    """Fields of a freshly registered account; the caller persists it and assigns the id."""

    model_config = {"frozen": True}

    display_name: str
    email: str
    password_hash: bytes
    password_salt: bytes
    is_active: bool = True
    role: Role = Role.USER
    created_at: datetime


class RegistrationRequest(BaseModel):
    """Self-service registration payload."""

    display_name: str = Field(
        ...,
        min_length=DISPLAY_NAME_MIN_LEN,
        max_length=DISPLAY_NAME_MAX_LEN,
        description="Display name, unique case-insensitively",
    )
    email: str = Field(
        ...,
        max_length=EMAIL_MAX_LEN,
        pattern=EMAIL_PATTERN,
        description="Email address",
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )


class LoginRequest(BaseModel):
    """Credentials for login."""

    display_name: str = Field(..., min_length=1, max_length=DISPLAY_NAME_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class AuthResponse(BaseModel):
    """Account summary plus bearer token, returned after login or registration."""

    id: int
    display_name: str
    email: str
    role: Role
    created_at: datetime | None = None
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
