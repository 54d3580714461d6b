"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

# Import entities directly to avoid circular import through domain/__init__.py
from doublebook.domain.entities import (
    Account,
    AccountType,
    Journal,
    JournalEntry,
    Side,
)


class Database(ABC):
    """Abstract store for the chart of accounts and append-only journals."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        code: str,
        name: str,
        description: str,
        account_type: AccountType,
        normally: Side,
        parent_code: Optional[str] = None,
    ) -> str:
        """Create a new account. Returns account code."""
        pass

    @abstractmethod
    def get_account(self, code: str) -> Optional[Account]:
        """Get account by code."""
        pass

    @abstractmethod
    def list_accounts(self, account_type: Optional[AccountType] = None) -> list[Account]:
        """List accounts ordered by code, optionally filtered by type."""
        pass

    # Journal operations
    @abstractmethod
    def create_journal(self, journal_id: UUID, name: str, description: str) -> UUID:
        """Create an empty journal. Returns journal ID."""
        pass

    @abstractmethod
    def get_journal(self, journal_id: UUID) -> Optional[Journal]:
        """Get journal by ID, with all its entries."""
        pass

    @abstractmethod
    def get_journal_by_name(self, name: str) -> Optional[Journal]:
        """Get journal by name, with all its entries."""
        pass

    @abstractmethod
    def list_journals(self) -> list[Journal]:
        """List all journals ordered by name."""
        pass

    # Journal entry operations
    @abstractmethod
    def entry_exists(self, journal_id: UUID, entry_id: str) -> bool:
        """Check if an entry with given entry_id exists in a journal."""
        pass

    @abstractmethod
    def add_journal_entry(self, journal_id: UUID, entry: JournalEntry) -> None:
        """Append a validated entry to the end of a journal."""
        pass
