"""Command-line entry point for database administration.

Usage:
    python src/main.py init-db
    python src/main.py grant-role <email> <admin|teacher|student>

``grant-role`` runs with row-level security switched off, which is how the
first admin gets created when no ADMIN_TOKEN is configured.
"""

import logging
import sys
from typing import List

from core.database import SessionLocal, init_db
from core.policies import elevated
from models.user_role import AppRole
from utils.account_manager import AccountManager, AccountNotFoundError
from utils.role_manager import RoleManager

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def print_usage() -> None:
    """Print available commands."""
    print("\nUsage:")
    print("  python src/main.py init-db                     - Create missing tables")
    print("  python src/main.py grant-role <email> <role>   - Assign admin, teacher or student")
    print()


def grant_role(email: str, role: str) -> int:
    """Grant a role to the account registered under ``email``.

    Args:
        email: Account email.
        role: Role name.

    Returns:
        Process exit code.
    """
    try:
        app_role = AppRole(role.lower())
    except ValueError:
        print(f"Unknown role: {role}. Choose one of: {', '.join(r.value for r in AppRole)}")
        return 2

    init_db()
    with SessionLocal() as db:
        with elevated(db):
            try:
                account = AccountManager(db).require_account_by_email(email)
            except AccountNotFoundError as e:
                print(f"Error: {e}")
                return 1
            role_manager = RoleManager(db)
            if app_role.value in role_manager.role_names(account.id):
                print(f"{email} already has role {app_role.value}.")
                return 0
            role_manager.grant_role(account.id, app_role)

    print(f"Granted role {app_role.value} to {email}.")
    return 0


def main(argv: List[str] = None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print_usage()
        return 2

    command = args[0]
    if command == "init-db":
        init_db()
        print("Database schema ready.")
        return 0
    if command == "grant-role" and len(args) == 3:
        return grant_role(args[1], args[2])

    print_usage()
    return 2


if __name__ == "__main__":
    sys.exit(main())
