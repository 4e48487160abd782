"""
Register and log in users over records supplied by the caller.

Nothing here touches storage: the caller looks the account up, hands it in,
and persists whatever comes back.
"""

import logging
from datetime import UTC, datetime

from livraria.core.config import TokenConfig
from livraria.core.errors import AuthenticationFailed, PermissionDenied
from livraria.core.security import create_credential, verify_credential
from livraria.core.tokens import issue_token
from livraria.schemas.auth import (
    AuthResponse,
    IdentityClaims,
    LoginRequest,
    NewAccount,
    RegistrationRequest,
    Role,
    UserAccount,
)

logger = logging.getLogger(__name__)

# Verified against when the display name is unknown so the miss costs as much as a wrong password.
_DUMMY_CREDENTIAL = create_credential("livraria-timing-equalization")


def names_match(a: str, b: str) -> bool:
    """Case-insensitive display-name comparison used to enforce uniqueness."""
    return a.strip().casefold() == b.strip().casefold()


def register_account(request: RegistrationRequest, *, role: Role = Role.USER) -> NewAccount:
    """
    Build a new active account with a fresh credential.

    Display-name and email uniqueness are the caller's to check (see names_match)
    before persisting; no token is minted until the account has an id.
    """
    credential = create_credential(request.password)
    account = NewAccount(
        display_name=request.display_name.strip(),
        email=request.email.strip(),
        password_hash=credential.hash,
        password_salt=credential.salt,
        is_active=True,
        role=role,
        created_at=datetime.now(UTC),
    )
    logger.info("Prepared registration for %s (role=%s)", account.display_name, role.value)
    return account


def issue_for_account(account: UserAccount, config: TokenConfig) -> AuthResponse:
    """Mint a token for a persisted account and wrap it with the account summary."""
    token = issue_token(account.identity(), config)
    return AuthResponse(
        id=account.id,
        display_name=account.display_name,
        email=account.email,
        role=account.role,
        created_at=account.created_at,
        access_token=token,
    )


def authenticate(
    account: UserAccount | None,
    password: str,
    config: TokenConfig,
) -> AuthResponse:
    """
    Log in: verify the password against the looked-up account and mint a token.

    Unknown account, inactive account, and wrong password all raise the same
    AuthenticationFailed so callers cannot tell which check failed.
    """
    if account is None:
        verify_credential(password, _DUMMY_CREDENTIAL.hash, _DUMMY_CREDENTIAL.salt)
        logger.info("Login failed: unknown account")
        raise AuthenticationFailed()
    password_ok = verify_credential(password, account.password_hash, account.password_salt)
    if not account.is_active:
        logger.info("Login failed: account %s is inactive", account.id)
        raise AuthenticationFailed()
    if not password_ok:
        logger.info("Login failed: wrong password for account %s", account.id)
        raise AuthenticationFailed()
    logger.info("Login: %s (%s)", account.display_name, account.id)
    return issue_for_account(account, config)


def login(
    request: LoginRequest,
    account: UserAccount | None,
    config: TokenConfig,
) -> AuthResponse:
    """
    Log in from a login payload. `account` is the caller's lookup by request.display_name.

    A looked-up account whose display name does not match the request
    case-insensitively is treated as unknown.
    """
    if account is not None and not names_match(account.display_name, request.display_name):
        account = None
    return authenticate(account, request.password, config)


def require_role(claims: IdentityClaims, role: Role) -> IdentityClaims:
    """Return claims unchanged if they carry `role`; raise PermissionDenied otherwise."""
    if claims.role is not role:
        raise PermissionDenied(
            f"Role {role.value!r} required, token has {claims.role.value!r}.",
            required_role=role.value,
        )
    return claims
