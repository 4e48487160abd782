"""Pydantic request/response schemas."""

from livraria.schemas.auth import (
    AuthResponse,
    IdentityClaims,
    LoginRequest,
    NewAccount,
    RegistrationRequest,
    Role,
    UserAccount,
)
from livraria.schemas.health import HealthResponse

__all__ = [
    "AuthResponse",
    "HealthResponse",
    "IdentityClaims",
    "LoginRequest",
    "NewAccount",
    "RegistrationRequest",
    "Role",
    "UserAccount",
]
