"""Password credentials: salted HMAC-SHA512 hashing and constant-time verification."""

import hashlib
import hmac
import secrets
from typing import NamedTuple

from livraria.core.errors import HashingInputInvalid

DIGEST_NAME = "sha512"
DIGEST_BYTES = hashlib.sha512().digest_size  # 64

# Salt doubles as the HMAC key; 128 bytes is the SHA-512 block size.
SALT_BYTES = 128

# Min/max lengths for request validation (enforced by callers, not by the hasher).
DISPLAY_NAME_MIN_LEN = 3
DISPLAY_NAME_MAX_LEN = 50
EMAIL_MAX_LEN = 100
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


class Credential(NamedTuple):
    """Stored form of a password. Unpacks as (hash, salt)."""

    hash: bytes
    salt: bytes


def _keyed_digest(password: str, salt: bytes) -> bytes:
    return hmac.new(salt, password.encode("utf-8"), DIGEST_NAME).digest()


def create_credential(password: str) -> Credential:
    """
    Hash a plain-text password under a fresh random salt.

    Every call draws a new salt, so hashing the same password twice yields
    two unrelated credentials. Raises HashingInputInvalid for empty input.
    """
    if not isinstance(password, str) or not password:
        raise HashingInputInvalid("Password must be a non-empty string.")
    salt = secrets.token_bytes(SALT_BYTES)
    return Credential(hash=_keyed_digest(password, salt), salt=salt)


def verify_credential(password: str, password_hash: bytes, salt: bytes) -> bool:
    """Verify a plain password against a stored (hash, salt) pair in constant time."""
    if not isinstance(password, str) or not password or not password_hash or not salt:
        return False
    computed = _keyed_digest(password, bytes(salt))
    # compare_digest returns False on length mismatch without leaking where bytes differ.
    return hmac.compare_digest(computed, bytes(password_hash))
