"""Unit tests for AuthService and UserService with a mocked repository."""

import unittest
from datetime import UTC, datetime
from unittest.mock import MagicMock

from accounts.core.errors import DuplicateEmail, Forbidden, InvalidCredentials, NotFound
from accounts.core.security import TokenService, hash_password
from accounts.models.user import User
from accounts.schemas.auth import Identity, SigninRequest, SignupRequest
from accounts.schemas.users import UpdateUserRequest
from accounts.services.auth_service import AuthService
from accounts.services.user_service import UserService

SECRET = "service-test-signing-secret-0123456789"
USER = Identity(id=1, email="user@example.com", role="user")
ADMIN = Identity(id=2, email="admin@example.com", role="admin")


def _row(user_id: int = 1, email: str = "user@example.com", role: str = "user", password: str = "hunter22") -> User:
    """Build a detached User row for the mocked repository."""
    now = datetime(2026, 1, 1, tzinfo=UTC)
    return User(
        id=user_id,
        name="Test User",
        email=email,
        password_hash=hash_password(password),
        role=role,
        created_at=now,
        updated_at=now,
    )


class TestAuthServiceSignup(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = MagicMock()
        self.tokens = TokenService(secret=SECRET)
        self.service = AuthService(self.repo, self.tokens)

    def test_duplicate_email_skips_insert(self) -> None:
        self.repo.find_by_email.return_value = _row()
        body = SignupRequest(name="Ada", email="user@example.com", password="hunter22")
        with self.assertRaises(DuplicateEmail):
            self.service.signup(body)
        self.repo.insert.assert_not_called()

    def test_signup_hashes_password_and_issues_token(self) -> None:
        self.repo.find_by_email.return_value = None
        self.repo.insert.return_value = _row(user_id=5, email="ada@example.com")
        body = SignupRequest(name="Ada", email="Ada@Example.com ", password="hunter22")

        result = self.service.signup(body)

        kwargs = self.repo.insert.call_args.kwargs
        self.assertEqual(kwargs["email"], "ada@example.com")
        self.assertEqual(kwargs["role"], "user")
        self.assertNotEqual(kwargs["password_hash"], "hunter22")
        self.assertEqual(self.tokens.verify(result.token), Identity(id=5, email="ada@example.com", role="user"))

    def test_admin_signup_needs_admin_actor_before_lookup(self) -> None:
        body = SignupRequest(name="Eve", email="eve@example.com", password="hunter22", role="admin")
        with self.assertRaises(Forbidden):
            self.service.signup(body, actor=USER)
        self.repo.find_by_email.assert_not_called()


class TestAuthServiceSignin(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = MagicMock()
        self.service = AuthService(self.repo, TokenService(secret=SECRET))

    def test_unknown_email_and_wrong_password_raise_same_error(self) -> None:
        self.repo.find_by_email.return_value = None
        with self.assertRaises(InvalidCredentials) as unknown:
            self.service.signin(SigninRequest(email="nobody@example.com", password="hunter22"))

        self.repo.find_by_email.return_value = _row()
        with self.assertRaises(InvalidCredentials) as wrong:
            self.service.signin(SigninRequest(email="user@example.com", password="wrong-pass"))

        self.assertEqual(unknown.exception.to_payload(), wrong.exception.to_payload())

    def test_valid_credentials(self) -> None:
        self.repo.find_by_email.return_value = _row()
        result = self.service.signin(SigninRequest(email="user@example.com", password="hunter22"))
        self.assertEqual(result.id, 1)
        self.assertEqual(result.email, "user@example.com")
        self.assertTrue(result.token)


class TestUserServiceOrdering(unittest.TestCase):
    """Authorization is decided before the repository is consulted."""

    def setUp(self) -> None:
        self.repo = MagicMock()
        self.service = UserService(self.repo)

    def test_forbidden_read_never_queries(self) -> None:
        with self.assertRaises(Forbidden):
            self.service.get_user(USER, 42)
        self.repo.find_by_id.assert_not_called()

    def test_forbidden_delete_never_queries(self) -> None:
        with self.assertRaises(Forbidden):
            self.service.delete_user(USER, 42)
        with self.assertRaises(Forbidden):
            self.service.delete_user(ADMIN, ADMIN.id)
        self.repo.find_by_id.assert_not_called()
        self.repo.delete.assert_not_called()

    def test_forbidden_list_never_queries(self) -> None:
        with self.assertRaises(Forbidden):
            self.service.list_users(USER)
        self.repo.list_all.assert_not_called()

    def test_role_escalation_never_updates(self) -> None:
        with self.assertRaises(Forbidden):
            self.service.update_user(USER, USER.id, UpdateUserRequest(role="admin"))
        self.repo.update.assert_not_called()

    def test_missing_row_is_not_found(self) -> None:
        self.repo.find_by_id.return_value = None
        with self.assertRaises(NotFound) as ctx:
            self.service.get_user(ADMIN, 42)
        self.assertEqual(ctx.exception.message, "User not found")

    def test_missing_row_is_logged_with_actor(self) -> None:
        self.repo.find_by_id.return_value = None
        with self.assertLogs("accounts.services.user_service", level="WARNING") as logs:
            with self.assertRaises(NotFound):
                self.service.update_user(ADMIN, 42, UpdateUserRequest(name="Ghost"))
        self.assertEqual(
            logs.output,
            ["WARNING:accounts.services.user_service:User not found: operation=update_user actor_id=2 target_id=42"],
        )
        self.repo.update.assert_not_called()


class TestUserServiceUpdate(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = MagicMock()
        self.service = UserService(self.repo)
        self.row = _row()
        self.repo.find_by_id.return_value = self.row
        self.repo.update.side_effect = lambda user, changes: user

    def test_password_is_rehashed(self) -> None:
        self.service.update_user(USER, USER.id, UpdateUserRequest(password="new-password"))
        changes = self.repo.update.call_args.args[1]
        self.assertNotIn("password", changes)
        self.assertTrue(changes["password_hash"].startswith("$2"))

    def test_only_sent_fields_change(self) -> None:
        self.service.update_user(USER, USER.id, UpdateUserRequest(name="Renamed"))
        self.assertEqual(self.repo.update.call_args.args[1], {"name": "Renamed"})

    def test_result_has_no_hash(self) -> None:
        out = self.service.update_user(USER, USER.id, UpdateUserRequest(name="Renamed"))
        self.assertNotIn("password_hash", out.model_dump())


if __name__ == "__main__":
    unittest.main()
