"""Logging setup with a filter that keeps tokens, secrets and passwords out of log output."""

import logging
import re

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

REDACTED = "***REDACTED***"

SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # Authorization: Bearer <token>
    (re.compile(r"(bearer\s+)([A-Za-z0-9_\-\.=]{10,})", re.IGNORECASE), r"\1" + REDACTED),
    # Bare compact JWS (header.payload.signature, header always starts with eyJ)
    (re.compile(r"eyJ[A-Za-z0-9_\-]*\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]*"), REDACTED),
    (
        re.compile(r"((?:password|passwd|pwd|secret|jwt_secret)\s*[:=]\s*['\"]?)([^'\"\s,]+)", re.IGNORECASE),
        r"\1" + REDACTED,
    ),
]


def sanitize_message(message: str) -> str:
    """Mask bearer tokens, compact JWTs and password/secret assignments."""
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


class RedactingFilter(logging.Filter):
    """Rewrites each record's rendered message through sanitize_message."""

    def filter(self, record: logging.LogRecord) -> bool:
        rendered = record.getMessage()
        sanitized = sanitize_message(rendered)
        if sanitized != rendered:
            record.msg = sanitized
            record.args = None
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once per process and attach the redacting filter to its handlers."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root.handlers:
        if not any(isinstance(f, RedactingFilter) for f in handler.filters):
            handler.addFilter(RedactingFilter())
