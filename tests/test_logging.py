"""Unit tests for livraria.core.logging: tokens, secrets and passwords never reach log output."""

import logging
import unittest
from datetime import timedelta

from livraria.core.config import TokenConfig
from livraria.core.logging import REDACTED, RedactingFilter, sanitize_message
from livraria.core.tokens import issue_token
from livraria.schemas.auth import IdentityClaims, Role

CONFIG = TokenConfig(
    secret="logging-test-secret-" + "l" * 64,
    issuer="LivrariaApi",
    audience="LivrariaApi",
    ttl=timedelta(minutes=5),
)


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


class TestSanitizeMessage(unittest.TestCase):
    """sanitize_message masks sensitive values and leaves the rest alone."""

    def test_bearer_header(self) -> None:
        token = issue_token(IdentityClaims(user_id=1, name="a", role=Role.USER), CONFIG)
        out = sanitize_message(f"Authorization: Bearer {token}")
        self.assertNotIn(token, out)
        self.assertIn(REDACTED, out)

    def test_bare_jwt(self) -> None:
        token = issue_token(IdentityClaims(user_id=1, name="a", role=Role.USER), CONFIG)
        out = sanitize_message(f"got token {token} from client")
        self.assertNotIn(token, out)
        self.assertTrue(out.startswith("got token "))
        self.assertTrue(out.endswith(" from client"))

    def test_password_and_secret_assignments(self) -> None:
        out = sanitize_message("password=hunter22 JWT_SECRET='abc123' secret: xyz")
        for value in ("hunter22", "abc123", "xyz"):
            self.assertNotIn(value, out)

    def test_plain_message_unchanged(self) -> None:
        message = "Login: alice (7)"
        self.assertEqual(sanitize_message(message), message)


class TestRedactingFilter(unittest.TestCase):
    """RedactingFilter rewrites rendered record messages in place."""

    def test_rewrites_args(self) -> None:
        record = _record("header %s", "Bearer abcdefghijklmnop")
        self.assertTrue(RedactingFilter().filter(record))
        self.assertEqual(record.getMessage(), f"header Bearer {REDACTED}")

    def test_keeps_clean_record_untouched(self) -> None:
        record = _record("Login: %s (%s)", "alice", 7)
        RedactingFilter().filter(record)
        self.assertEqual(record.args, ("alice", 7))
        self.assertEqual(record.getMessage(), "Login: alice (7)")


if __name__ == "__main__":
    unittest.main()
