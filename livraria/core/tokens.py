"""
Token authority: issue and validate signed, time-bounded JWT bearer tokens.

Validation is a function of the token, the clock, and the configured
secret/issuer/audience only. No database lookup happens and there is no
revocation list, so a token issued before an account was deactivated or
deleted stays valid until its exp claim passes.
"""

import logging
from datetime import UTC, datetime
from typing import Any

import jwt

from livraria.core.config import TokenConfig
from livraria.core.errors import ClaimsInvalid, SignatureInvalid, TokenExpired
from livraria.schemas.auth import IdentityClaims, Role

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "iat", "exp", "iss", "aud"]

# No clock skew tolerance on exp/iat.
CLOCK_LEEWAY_SECONDS = 0


def issue_token(
    identity: IdentityClaims,
    config: TokenConfig,
    *,
    now: datetime | None = None,
) -> str:
    """
    Sign a token carrying sub, name, email, role, iat, exp, iss and aud.

    exp is iat + config.ttl. `now` exists for tests and replays; leave it unset.
    """
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + config.ttl
    payload: dict[str, Any] = {
        "sub": str(identity.user_id),
        "name": identity.name,
        "email": identity.email,
        "role": identity.role.value,
        "iat": issued_at,
        "exp": expires_at,
        "iss": config.issuer,
        "aud": config.audience,
    }
    token = jwt.encode(
        payload,
        config.secret.get_secret_value(),
        algorithm=config.algorithm,
    )
    logger.debug(
        "Issued token sub=%s role=%s exp=%s",
        identity.user_id,
        identity.role.value,
        expires_at.isoformat(),
    )
    return token


def validate_token(token: str, config: TokenConfig) -> IdentityClaims:
    """
    Verify signature, issuer, audience and expiry; return the embedded identity.

    Raises SignatureInvalid, ClaimsInvalid or TokenExpired (all TokenError).
    """
    try:
        payload = jwt.decode(
            token,
            config.secret.get_secret_value(),
            algorithms=[config.algorithm],
            issuer=config.issuer,
            audience=config.audience,
            leeway=CLOCK_LEEWAY_SECONDS,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpired("Token has expired.") from e
    except (jwt.InvalidAlgorithmError, jwt.DecodeError) as e:
        # InvalidSignatureError is a DecodeError subclass.
        raise SignatureInvalid(f"Token signature could not be verified: {e}") from e
    except (jwt.InvalidIssuerError, jwt.InvalidAudienceError) as e:
        raise ClaimsInvalid(f"Token issuer or audience does not match: {e}") from e
    except jwt.PyJWTError as e:
        raise ClaimsInvalid(f"Token claims are invalid: {e}") from e
    return _identity_from_payload(payload)


def _identity_from_payload(payload: dict[str, Any]) -> IdentityClaims:
    sub = payload["sub"]
    # isdigit() alone also accepts superscripts and other non-ASCII digits.
    if not isinstance(sub, str) or not (sub.isascii() and sub.isdecimal()):
        raise ClaimsInvalid("Token subject is not a user id.")
    try:
        role = Role(payload.get("role"))
    except ValueError:
        raise ClaimsInvalid("Token role is not recognised.") from None
    name = payload.get("name")
    if not isinstance(name, str) or not name:
        raise ClaimsInvalid("Token name claim is missing.")
    email = payload.get("email") or ""
    if not isinstance(email, str):
        raise ClaimsInvalid("Token email claim is not a string.")
    return IdentityClaims(
        user_id=int(sub),
        name=name,
        email=email,
        role=role,
        issued_at=_timestamp(payload, "iat"),
        expires_at=_timestamp(payload, "exp"),
    )


def _timestamp(payload: dict[str, Any], claim: str) -> datetime:
    # PyJWT accepts any number, including ones outside the platform datetime range.
    try:
        return datetime.fromtimestamp(payload[claim], UTC)
    except (ValueError, OverflowError, OSError):
        raise ClaimsInvalid(f"Token {claim} claim is out of range.") from None


def decode_unverified(token: str) -> dict[str, Any]:
    """Read the payload without checking signature or claims. Never use for authorization."""
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        raise SignatureInvalid(f"Token is malformed: {e}") from e


def unverified_header(token: str) -> dict[str, Any]:
    """Read the JOSE header (alg, typ) without verification."""
    try:
        return jwt.get_unverified_header(token)
    except jwt.PyJWTError as e:
        raise SignatureInvalid(f"Token is malformed: {e}") from e
