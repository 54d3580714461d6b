"""Account domain service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from doublebook.domain import errors
from doublebook.domain.entities import Account as AccountEntity, AccountType, Side
from doublebook.domain.errors import ConflictError, NotFoundError, ValidationError

if TYPE_CHECKING:
    from doublebook.database.base import Database

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def register_account(
        self,
        code: str,
        name: str,
        description: str,
        account_type: AccountType | str,
        parent_code: Optional[str] = None,
        normally: Optional[Side | str] = None,
    ) -> AccountEntity:
        """Register a new account.

        Args:
            code: Unique account code
            name: Account name
            description: Account description
            account_type: Account type
            parent_code: Optional code of the parent account
            normally: Normal balance side; defaults to the side implied by the type

        Returns:
            The registered account

        Raises:
            ValidationError: If any field is invalid
            ConflictError: If the code is already registered
            NotFoundError: If the parent account does not exist
        """
        if isinstance(code, str):
            code = code.strip()
        parent_code = parent_code.strip() if isinstance(parent_code, str) else parent_code
        if not parent_code:
            parent_code = None

        if normally is None:
            try:
                normally = AccountType(account_type).normal_side
            except ValueError:
                # Let entity validation report the bad type
                normally = Side.DEBIT

        account = AccountEntity(
            code=code,
            name=name,
            description=description,
            account_type=account_type,
            normally=normally,
            parent_code=parent_code,
        )

        if self.db.get_account(account.code) is not None:
            raise ConflictError(errors.duplicate_account_code(account.code))
        if account.parent_code is not None:
            if account.parent_code == account.code:
                raise ValidationError(f"Account '{account.code}' cannot be its own parent")
            if self.db.get_account(account.parent_code) is None:
                raise NotFoundError(errors.account_not_found(account.parent_code))

        self.db.create_account(
            code=account.code,
            name=account.name,
            description=account.description,
            account_type=account.account_type,
            normally=account.normally,
            parent_code=account.parent_code,
        )
        logger.info("Registered account %s (%s)", account.code, account.account_type)
        return account

    def get_account(self, code: str) -> Optional[AccountEntity]:
        """Get account by code.

        Args:
            code: Account code

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(code)

    def require_account(self, code: str) -> AccountEntity:
        """Get account by code, failing if it does not exist.

        Raises:
            NotFoundError: If the account is not registered
        """
        account = self.db.get_account(code)
        if account is None:
            raise NotFoundError(errors.account_not_found(code))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts ordered by code.

        Returns:
            List of account entities
        """
        return self.db.list_accounts()

    def get_accounts_by_type(self, account_type: AccountType | str) -> list[AccountEntity]:
        """List accounts of a single type ordered by code."""
        try:
            account_type = AccountType(account_type)
        except ValueError:
            raise ValidationError(f"Unknown account type: {account_type!r}")
        return self.db.list_accounts(account_type=account_type)
