"""Account management utilities.

This module provides account storage, password hashing and credential
checks. Creating an account provisions its profile through the storage
trigger in ``core.triggers``.
"""

import logging
from typing import Any, Dict, Iterable, Optional

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.account import AccountModel
from models.user_role import AppRole, UserRoleModel

logger = logging.getLogger(__name__)

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class AccountNotFoundError(Exception):
    """Exception raised when an account is not found."""

    pass


class AccountAlreadyExistsError(Exception):
    """Exception raised when trying to create an account that already exists."""

    pass


class InvalidCredentialsError(Exception):
    """Exception raised when an email/password pair does not match."""

    pass


class AccountManager:
    """Manages account persistence and authentication using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize AccountManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    @staticmethod
    def _password_bytes(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(self._password_bytes(password), salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        try:
            return bcrypt.checkpw(
                self._password_bytes(plain_password), hashed_password.encode("utf-8")
            )
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False

    def create_account(
        self,
        email: str,
        password: str,
        metadata: Optional[Dict[str, Any]] = None,
        roles: Iterable = (),
    ) -> AccountModel:
        """Create a new account.

        The matching profile row is inserted by the provisioning trigger in
        the same transaction.

        Args:
            email: Login email for the new account.
            password: Plain text password.
            metadata: Sign-up metadata (username, first_name, last_name).
            roles: Roles granted in the same transaction. Writing them needs
                an admin caller or an elevated session.

        Returns:
            Created AccountModel instance.

        Raises:
            AccountAlreadyExistsError: If the email is already registered.
            sqlalchemy.exc.IntegrityError: If the derived username is taken.
            PolicyViolationError: If the caller may not grant ``roles``; the
                account is not created either.
        """
        email = email.strip().lower()
        if self.get_account_by_email(email) is not None:
            raise AccountAlreadyExistsError(f"Account '{email}' already exists")

        account = AccountModel(
            email=email,
            password_hash=self.hash_password(password),
            raw_user_meta_data={k: v for k, v in (metadata or {}).items() if v},
        )
        self.db.add(account)
        try:
            # The account row must exist before role rows can reference it
            self.db.flush()
            for role in roles:
                self.db.add(UserRoleModel(user_id=account.id, role=AppRole(role)))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # Two sign-ups racing past the check above
            if "email" in str(e.orig).lower():
                raise AccountAlreadyExistsError(f"Account '{email}' already exists") from e
            raise
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(account)

        logger.info("Created account: %s", email)
        return account

    def get_account(self, account_id: str) -> Optional[AccountModel]:
        return self.db.query(AccountModel).filter(AccountModel.id == account_id).first()

    def get_account_by_email(self, email: str) -> Optional[AccountModel]:
        return (
            self.db.query(AccountModel)
            .filter(AccountModel.email == email.strip().lower())
            .first()
        )

    def require_account_by_email(self, email: str) -> AccountModel:
        account = self.get_account_by_email(email)
        if account is None:
            raise AccountNotFoundError(f"Account '{email}' not found")
        return account

    def authenticate(self, email: str, password: str) -> AccountModel:
        """Check an email/password pair.

        Args:
            email: Login email.
            password: Plain text password.

        Returns:
            The matching AccountModel.

        Raises:
            InvalidCredentialsError: If no account matches.
        """
        account = self.get_account_by_email(email)
        if account is None or not self.verify_password(password, account.password_hash):
            raise InvalidCredentialsError("Invalid email or password")
        return account
