"""Tests for the command-line scripts: create_credential and check_token."""

import base64
import contextlib
import io
import json
import os
import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from livraria.core.config import Settings, get_settings
from livraria.core.security import verify_credential
from livraria.core.tokens import issue_token
from livraria.schemas.auth import IdentityClaims, Role
from livraria.scripts import check_token, create_credential

SECRET = "scripts-test-secret-" + "c" * 64


def _run(main, argv: list[str]) -> tuple[int, str, str]:
    """Run a script's main() and capture (exit code, stdout, stderr)."""
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCreateCredential(unittest.TestCase):
    """create_credential prints storable fields or exits 1 on invalid input."""

    def test_prints_verifiable_credential(self) -> None:
        code, out, _ = _run(
            create_credential.main,
            ["admin", "admin@example.com", "s3cret-pass", "admin"],
        )
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["display_name"], "admin")
        self.assertEqual(data["role"], "admin")
        self.assertTrue(data["is_active"])
        self.assertNotIn("s3cret-pass", out)
        self.assertTrue(
            verify_credential(
                "s3cret-pass",
                base64.b64decode(data["password_hash"]),
                base64.b64decode(data["password_salt"]),
            )
        )

    def test_default_role_is_user(self) -> None:
        code, out, _ = _run(create_credential.main, ["reader", "reader@example.com", "abcdef"])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["role"], "user")

    def test_short_password_rejected(self) -> None:
        code, out, err = _run(create_credential.main, ["reader", "reader@example.com", "abc"])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("password", err)


class TestCheckToken(unittest.TestCase):
    """check_token validates against configured settings or inspects without verifying."""

    def setUp(self) -> None:
        get_settings.cache_clear()
        self.settings = Settings(_env_file=None, JWT_SECRET=SECRET)
        self.identity = IdentityClaims(user_id=9, name="bento", role=Role.USER)

    def tearDown(self) -> None:
        get_settings.cache_clear()

    def test_valid_token(self) -> None:
        token = issue_token(self.identity, self.settings.token_config())
        with patch.object(check_token, "get_settings", return_value=self.settings), patch.object(
            check_token, "configure_logging"
        ):
            code, out, _ = _run(check_token.main, [token])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["user_id"], 9)

    def test_expired_token(self) -> None:
        token = issue_token(
            self.identity,
            self.settings.token_config(),
            now=datetime.now(UTC) - timedelta(days=3),
        )
        with patch.object(check_token, "get_settings", return_value=self.settings), patch.object(
            check_token, "configure_logging"
        ):
            code, _, err = _run(check_token.main, [token])
        self.assertEqual(code, 1)
        self.assertIn("expired", err)

    def test_missing_configuration_exits_2(self) -> None:
        token = issue_token(self.identity, self.settings.token_config())
        with patch.dict(os.environ, {}, clear=True), patch(
            "livraria.core.config.Settings", lambda: Settings(_env_file=None)
        ):
            code, _, err = _run(check_token.main, [token])
        self.assertEqual(code, 2)
        self.assertIn("JWT_SECRET", err)

    def test_no_verify_needs_no_secret(self) -> None:
        token = issue_token(self.identity, self.settings.token_config())
        code, out, _ = _run(check_token.main, ["--no-verify", token])
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["header"]["alg"], "HS512")
        self.assertEqual(data["payload"]["sub"], "9")

    def test_no_verify_rejects_garbage(self) -> None:
        code, _, err = _run(check_token.main, ["--no-verify", "garbage"])
        self.assertEqual(code, 1)
        self.assertIn("malformed", err)


if __name__ == "__main__":
    unittest.main()
