"""Unit tests for settings validation, the error taxonomy and token extraction."""

import unittest

from fastapi.security import HTTPAuthorizationCredentials
from pydantic import SecretStr, ValidationError

from accounts.api.deps import extract_token
from accounts.core.config import INSECURE_DEFAULT_JWT_SECRET, Settings
from accounts.core.errors import (
    CryptoFailure,
    DuplicateEmail,
    ErrorKind,
    Forbidden,
    InvalidCredentials,
    NotFound,
    ValidationFailed,
)


def _settings(**kwargs: object) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestDefaultSecret(unittest.TestCase):
    """The built-in signing secret is refused in prod and warned about in dev."""

    def test_prod_rejects_default_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod", JWT_SECRET=INSECURE_DEFAULT_JWT_SECRET)

    def test_prod_accepts_custom_secret(self) -> None:
        s = _settings(APP_ENV="prod", JWT_SECRET="a-long-random-production-secret")
        self.assertTrue(s.cookie_secure)

    def test_dev_warns_on_default_secret(self) -> None:
        with self.assertLogs("accounts.core.config", level="WARNING"):
            s = _settings(APP_ENV="dev", JWT_SECRET=INSECURE_DEFAULT_JWT_SECRET)
        self.assertFalse(s.cookie_secure)


class TestSettingsValidation(unittest.TestCase):
    def test_defaults(self) -> None:
        s = _settings(JWT_SECRET="x")
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 1440)
        self.assertEqual(s.BCRYPT_ROUNDS, 4)
        self.assertEqual(s.AUTH_COOKIE_NAME, "token")
        self.assertEqual(s.JWT_ALGORITHM, "HS256")

    def test_settings_are_frozen(self) -> None:
        s = _settings(JWT_SECRET="x")
        with self.assertRaises(ValidationError):
            s.JWT_SECRET = SecretStr("changed")

    def test_api_prefix_normalized(self) -> None:
        self.assertEqual(_settings(JWT_SECRET="x", API_PREFIX="/api/").API_PREFIX, "/api")
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="x", API_PREFIX="api")

    def test_bounds(self) -> None:
        for field, value in (
            ("BCRYPT_ROUNDS", 3),
            ("BCRYPT_ROUNDS", 17),
            ("JWT_EXPIRE_MINUTES", 0),
            ("JWT_ALGORITHM", "RS256"),
            ("LOG_LEVEL", "chatty"),
            ("DATABASE_URL", "mysql://localhost/db"),
        ):
            with self.assertRaises(ValidationError, msg=field):
                _settings(JWT_SECRET="x", **{field: value})

    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")


class TestErrorTaxonomy(unittest.TestCase):
    def test_status_codes(self) -> None:
        self.assertEqual(ValidationFailed().status_code, 400)
        self.assertEqual(InvalidCredentials().status_code, 401)
        self.assertEqual(Forbidden("no").status_code, 403)
        self.assertEqual(NotFound("gone").status_code, 404)
        self.assertEqual(DuplicateEmail().status_code, 409)
        self.assertEqual(CryptoFailure("boom").status_code, 500)

    def test_internal_payload_hides_message(self) -> None:
        payload = CryptoFailure("bcrypt exploded at 0xdeadbeef").to_payload()
        self.assertEqual(payload, {"error": "Internal server error"})

    def test_validation_payload_carries_details(self) -> None:
        details = [{"field": "email", "message": "bad"}]
        payload = ValidationFailed(details=details).to_payload()
        self.assertEqual(payload["error"], "Validation failed")
        self.assertEqual(payload["details"], details)

    def test_kind_labels(self) -> None:
        self.assertEqual(Forbidden("x").kind, ErrorKind.FORBIDDEN)
        self.assertEqual(Forbidden("x").to_payload(), {"error": "Forbidden", "message": "x"})


class TestExtractToken(unittest.TestCase):
    """Cookie first, then the bearer header."""

    def _bearer(self, token: str) -> HTTPAuthorizationCredentials:
        return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

    def test_cookie_wins(self) -> None:
        self.assertEqual(extract_token("from-cookie", self._bearer("from-header")), "from-cookie")

    def test_header_used_without_cookie(self) -> None:
        self.assertEqual(extract_token(None, self._bearer("from-header")), "from-header")
        self.assertEqual(extract_token("", self._bearer("from-header")), "from-header")

    def test_nothing(self) -> None:
        self.assertIsNone(extract_token(None, None))
        self.assertIsNone(extract_token(None, self._bearer("")))


if __name__ == "__main__":
    unittest.main()
