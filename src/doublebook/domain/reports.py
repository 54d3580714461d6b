"""Report domain service.

Derives ledger, trial balance, balance sheet and profit and loss snapshots
from a stored journal and the registered chart of accounts. Nothing derived
here is written back to the store.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from doublebook.domain.account import AccountService
from doublebook.domain.balance import build_balance_sheet
from doublebook.domain.entities import (
    Balance,
    IdFactory,
    Journal,
    Ledger,
    ProfitAndLossStatement,
    TrialBalance,
)
from doublebook.domain.journal import JournalService
from doublebook.domain.ledger import build_ledger
from doublebook.domain.profit_and_loss import build_profit_and_loss
from doublebook.domain.trial_balance import build_trial_balance

if TYPE_CHECKING:
    from doublebook.database.base import Database


class ReportService:
    """Service for deriving financial reports from stored journals."""

    def __init__(self, db: Database, id_factory: IdFactory = uuid4):
        """Initialize report service.

        Args:
            db: Database instance
            id_factory: Callable producing identifiers for derived snapshots
        """
        self.db = db
        self.id_factory = id_factory
        self.account_service = AccountService(db)
        self.journal_service = JournalService(db)

    def _ledger_for(self, journal: Journal) -> Ledger:
        return build_ledger(
            name=f"{journal.name} ledger",
            description=journal.description,
            journal=journal,
            accounts=self.account_service.list_accounts(),
            id_factory=self.id_factory,
        )

    def ledger(self, journal_id: UUID) -> Ledger:
        """Build the ledger of a journal over all registered accounts.

        Raises:
            NotFoundError: If the journal does not exist
        """
        journal = self.journal_service.require_journal(journal_id)
        return self._ledger_for(journal)

    def trial_balance(self, journal_id: UUID, as_of: Optional[date] = None) -> TrialBalance:
        """Build an open trial balance of a journal.

        Args:
            journal_id: Journal ID
            as_of: Inclusive cutoff date (defaults to today)

        Returns:
            Open trial balance

        Raises:
            NotFoundError: If the journal does not exist
            ValidationError: If the journal has no postings
        """
        if as_of is None:
            as_of = date.today()
        journal = self.journal_service.require_journal(journal_id)
        return build_trial_balance(
            name=f"{journal.name} trial balance",
            description=f"Trial balance of {journal.name} as of {as_of:%Y-%m-%d}",
            up_to_date=as_of,
            ledger=self._ledger_for(journal),
            id_factory=self.id_factory,
        )

    def closed_trial_balance(
        self,
        journal_id: UUID,
        as_of: Optional[date],
        closing_account_code: str,
    ) -> TrialBalance:
        """Build a trial balance and close income and expense into an equity account.

        Raises:
            NotFoundError: If the journal or closing account does not exist
            ValidationError: If the closing account is not an equity account
        """
        closing_account = self.account_service.require_account(closing_account_code)
        trial_balance = self.trial_balance(journal_id, as_of)
        return trial_balance.close_accounts(closing_account)

    def balance_sheet(
        self,
        journal_id: UUID,
        as_of: Optional[date],
        closing_account_code: str,
    ) -> Balance:
        """Build a balance sheet from the closed trial balance of a journal.

        Raises:
            NotFoundError: If the journal or closing account does not exist
            StateError: If the closed trial balance does not balance
            ValidationError: If an account carries a negative balance
        """
        journal = self.journal_service.require_journal(journal_id)
        trial_balance = self.closed_trial_balance(journal_id, as_of, closing_account_code)
        return build_balance_sheet(
            name=f"{journal.name} balance sheet",
            description=f"Balance sheet as of {trial_balance.date:%Y-%m-%d}",
            date=trial_balance.date,
            trial_balance=trial_balance,
            id_factory=self.id_factory,
        )

    def profit_and_loss(
        self, journal_id: UUID, start_date: date, end_date: date
    ) -> ProfitAndLossStatement:
        """Build a profit and loss statement for an inclusive date window.

        Raises:
            NotFoundError: If the journal does not exist
            ValidationError: If the window is reversed
        """
        journal = self.journal_service.require_journal(journal_id)
        return build_profit_and_loss(
            name=f"{journal.name} profit and loss",
            description=(
                f"Profit and loss of {journal.name} "
                f"from {start_date:%Y-%m-%d} to {end_date:%Y-%m-%d}"
            ),
            start_date=start_date,
            end_date=end_date,
            ledger=self._ledger_for(journal),
            id_factory=self.id_factory,
        )
