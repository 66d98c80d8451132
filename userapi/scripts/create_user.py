"""
Create a user (e.g. the first admin). Run from project root:
  python -m userapi.scripts.create_user USER_NAME EMAIL PASSWORD [role]
Example:
  python -m userapi.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from userapi.core.config import settings
from userapi.core.database import SessionLocal
from userapi.core.errors import ApiError
from userapi.core.security import generate_salt
from userapi.services import users
from userapi.services.user_store import UserStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    parser = argparse.ArgumentParser(description="Create a user from the command line.")
    parser.add_argument("user_name", help="User name (3-255 chars)")
    parser.add_argument("email", help="Email address, used to log in")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        store = UserStore(db)
        if store.find_by_email(args.email) is not None:
            print(f"User with email '{args.email}' already exists.", file=sys.stderr)
            return 1
        body = {
            "user_name": args.user_name,
            "email": args.email,
            "password": args.password,
            "role": args.role,
        }
        result = users.create_user(store, body, generate_salt(settings.BCRYPT_ROUNDS))
        if isinstance(result, ApiError):
            print(result.message, file=sys.stderr)
            return 1
        created = result.value.user
        print(f"Created user '{created.user_name}' ({created.id}) with role '{args.role}'.")
        return 0
    except SQLAlchemyError as e:
        logger.exception("Could not reach the user store: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
