"""Error taxonomy for credential hashing, token validation, and configuration."""


class LivrariaError(Exception):
    """Base class for all auth-core errors. `message` is safe for logs, not for clients."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationMissing(LivrariaError):
    """Raised at startup when the signing secret, issuer, or audience is absent or invalid."""


class HashingInputInvalid(LivrariaError):
    """Raised when asked to hash an empty or non-string password."""


class TokenError(LivrariaError):
    """Base for token validation failures. Callers must treat every subclass as unauthenticated."""

    kind = "invalid"


class SignatureInvalid(TokenError):
    """Token is malformed, tampered with, or signed with another key or algorithm."""

    kind = "signature"


class ClaimsInvalid(TokenError):
    """Issuer/audience mismatch or a required claim is missing or malformed."""

    kind = "claims"


class TokenExpired(TokenError):
    """Current time is at or past the token's exp claim."""

    kind = "expired"


class AuthenticationFailed(LivrariaError):
    """Login failed. Deliberately does not say whether the account, state, or password was wrong."""

    def __init__(self, message: str = "Invalid username or password.") -> None:
        super().__init__(message)


class PermissionDenied(LivrariaError):
    """Authenticated identity lacks the role required for an operation."""

    def __init__(self, message: str, required_role: str | None = None) -> None:
        self.required_role = required_role
        super().__init__(message)
