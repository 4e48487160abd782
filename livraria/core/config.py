"""Application configuration loaded from environment variables.

The signing secret has no default: `get_settings()` raises ConfigurationMissing
when it is absent or too short for the configured algorithm, so the process
fails at startup instead of signing tokens with a well-known key.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from livraria.core.errors import ConfigurationMissing

# Fallback issuer/audience of the Livraria API; override both in any real deployment.
DEFAULT_JWT_ISSUER = "LivrariaApi"
DEFAULT_JWT_AUDIENCE = "LivrariaApi"
DEFAULT_JWT_ALGORITHM = "HS512"
DEFAULT_JWT_EXPIRE_MINUTES = 24 * 60
DEFAULT_TOKEN_TTL = timedelta(minutes=DEFAULT_JWT_EXPIRE_MINUTES)

# HMAC key should be at least as long as the digest (RFC 7518 section 3.2).
MIN_SECRET_BYTES: dict[str, int] = {
    "HS256": 32,
    "HS384": 48,
    "HS512": 64,
}
SUPPORTED_JWT_ALGORITHMS: frozenset[str] = frozenset(MIN_SECRET_BYTES)

VALID_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class TokenConfig(BaseModel):
    """Everything the token authority needs: secret, issuer, audience, ttl, algorithm."""

    model_config = ConfigDict(frozen=True)

    secret: SecretStr
    issuer: str = Field(..., min_length=1)
    audience: str = Field(..., min_length=1)
    ttl: timedelta = DEFAULT_TOKEN_TTL
    algorithm: str = DEFAULT_JWT_ALGORITHM

    @field_validator("secret")
    @classmethod
    def validate_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("secret must be non-empty")
        return v

    @field_validator("ttl")
    @classmethod
    def validate_ttl(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("ttl must be positive")
        return v

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in SUPPORTED_JWT_ALGORITHMS:
            raise ValueError(
                f"algorithm must be one of {sorted(SUPPORTED_JWT_ALGORITHMS)}"
            )
        return v


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # JWT authentication. JWT_SECRET is required; there is no fallback key.
    JWT_SECRET: SecretStr
    JWT_ISSUER: str = DEFAULT_JWT_ISSUER
    JWT_AUDIENCE: str = DEFAULT_JWT_AUDIENCE
    JWT_ALGORITHM: str = DEFAULT_JWT_ALGORITHM
    JWT_EXPIRE_MINUTES: int = DEFAULT_JWT_EXPIRE_MINUTES

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ISSUER", "JWT_AUDIENCE")
    @classmethod
    def validate_issuer_audience(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ISSUER and JWT_AUDIENCE must be non-empty")
        return v.strip()

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        algorithm = v.strip().upper()
        if algorithm not in SUPPORTED_JWT_ALGORITHMS:
            raise ValueError(
                f"JWT_ALGORITHM must be one of {', '.join(sorted(SUPPORTED_JWT_ALGORITHMS))}"
            )
        return algorithm

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @model_validator(mode="after")
    def validate_secret_length(self) -> "Settings":
        required = MIN_SECRET_BYTES[self.JWT_ALGORITHM]
        if len(self.JWT_SECRET.get_secret_value().encode("utf-8")) < required:
            raise ValueError(
                f"JWT_SECRET must be at least {required} bytes for {self.JWT_ALGORITHM}"
            )
        return self

    def token_config(self) -> TokenConfig:
        """Build the token authority configuration from these settings."""
        return TokenConfig(
            secret=self.JWT_SECRET,
            issuer=self.JWT_ISSUER,
            audience=self.JWT_AUDIENCE,
            ttl=timedelta(minutes=self.JWT_EXPIRE_MINUTES),
            algorithm=self.JWT_ALGORITHM,
        )


def _summarize(exc: ValidationError) -> str:
    # Input values are left out so a rejected secret never ends up in a traceback.
    problems = []
    for error in exc.errors(include_url=False, include_input=False):
        loc = ".".join(str(part) for part in error["loc"]) or "settings"
        problems.append(f"{loc}: {error['msg']}")
    return "Invalid auth configuration: " + "; ".join(problems)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Raises ConfigurationMissing if env is invalid."""
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationMissing(_summarize(e)) from None
