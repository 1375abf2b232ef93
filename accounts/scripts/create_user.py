"""
Create a user directly in the database (e.g. the first admin, since signing up
as admin requires an admin caller). Run from project root:
  python -m accounts.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m accounts.scripts.create_user "Site Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from accounts.core.config import settings
from accounts.core.database import session_scope
from accounts.core.errors import AccountsError
from accounts.core.logging_config import configure_logging
from accounts.core.security import hash_password
from accounts.repositories.user_repository import UserRepository
from accounts.schemas.auth import SignupRequest

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an account without going through signup.")
    parser.add_argument("name", help="Display name (2-255 chars)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    configure_logging(settings.LOG_LEVEL)
    try:
        body = SignupRequest(
            name=args.name, email=args.email, password=args.password, role=args.role
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    try:
        with session_scope() as db:
            repo = UserRepository(db)
            if repo.find_by_email(body.email) is not None:
                print(f"User '{body.email}' already exists.", file=sys.stderr)
                return 1
            user = repo.insert(
                name=body.name,
                email=body.email,
                password_hash=hash_password(body.password),
                role=body.role,
            )
            print(f"Created user '{user.email}' (id={user.id}) with role '{user.role}'.")
            return 0
    except AccountsError as e:
        logger.error("Could not create user: %s", e.message)
        print(f"Could not create user: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
