"""Bearer-token auth dependencies (get_current_identity, require_admin) and identity routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from livraria.core.config import Settings, get_settings
from livraria.core.errors import PermissionDenied, TokenError
from livraria.core.tokens import validate_token
from livraria.schemas.auth import IdentityClaims, Role
from livraria.services.accounts import require_role

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)

# One body for every failure kind; the specific reason only goes to the log.
UNAUTHENTICATED_DETAIL = "Not authenticated"


def _unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHENTICATED_DETAIL,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> IdentityClaims:
    """Dependency: require a valid Bearer JWT and return its identity. Raises 401 otherwise."""
    if credentials is None:
        raise _unauthenticated()
    try:
        return validate_token(credentials.credentials, settings.token_config())
    except TokenError as e:
        logger.info("Rejected bearer token: kind=%s", e.kind)
        raise _unauthenticated() from None


def require_admin(
    identity: Annotated[IdentityClaims, Depends(get_current_identity)],
) -> IdentityClaims:
    """Dependency: require role 'admin'. Raises 403 for other roles."""
    try:
        return require_role(identity, Role.ADMIN)
    except PermissionDenied:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        ) from None


@router.get("/me", response_model=IdentityClaims)
def read_current_identity(
    identity: Annotated[IdentityClaims, Depends(get_current_identity)],
) -> IdentityClaims:
    """
    Return the identity embedded in the presented token.

    Served from the token alone: a deactivated account keeps resolving here
    until its token expires.
    """
    return identity


@router.get("/admin", response_model=IdentityClaims)
def read_admin_identity(
    identity: Annotated[IdentityClaims, Depends(require_admin)],
) -> IdentityClaims:
    """Admin-only endpoint; returns the caller's identity when the token carries role 'admin'."""
    return identity
