"""Journal domain service."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional
from uuid import UUID, uuid4

from doublebook.domain import errors
from doublebook.domain.entities import (
    IdFactory,
    Journal as JournalEntity,
    JournalEntry,
    JournalLine,
    Side,
    is_storable_amount,
)
from doublebook.domain.errors import ConflictError, NotFoundError, ValidationError

if TYPE_CHECKING:
    from doublebook.database.base import Database

logger = logging.getLogger(__name__)


class JournalService:
    """Service for managing journals and posting entries to them."""

    def __init__(self, db: Database, id_factory: IdFactory = uuid4):
        """Initialize journal service.

        Args:
            db: Database instance
            id_factory: Callable producing journal and line identifiers
        """
        self.db = db
        self.id_factory = id_factory

    def create_journal(self, name: str, description: str) -> JournalEntity:
        """Create an empty journal.

        Args:
            name: Unique journal name
            description: Journal description

        Returns:
            The new, empty journal

        Raises:
            ValidationError: If name or description is blank
            ConflictError: If a journal with the same name exists
        """
        journal = JournalEntity(id=self.id_factory(), name=name, description=description)
        if self.db.get_journal_by_name(journal.name) is not None:
            raise ConflictError(errors.duplicate_journal_name(journal.name))

        self.db.create_journal(
            journal_id=journal.id, name=journal.name, description=journal.description
        )
        logger.info("Created journal '%s' (%s)", journal.name, journal.id)
        return journal

    def get_journal(self, journal_id: UUID) -> Optional[JournalEntity]:
        """Get journal by ID.

        Returns:
            Journal entity with all entries, or None if not found
        """
        return self.db.get_journal(journal_id)

    def require_journal(self, journal_id: UUID) -> JournalEntity:
        """Get journal by ID, failing if it does not exist.

        Raises:
            NotFoundError: If the journal does not exist
        """
        journal = self.db.get_journal(journal_id)
        if journal is None:
            raise NotFoundError(errors.journal_not_found(str(journal_id)))
        return journal

    def get_journal_by_name(self, name: str) -> Optional[JournalEntity]:
        """Get journal by name, or None if not found."""
        return self.db.get_journal_by_name(name)

    def list_journals(self) -> list[JournalEntity]:
        """List all journals ordered by name."""
        return self.db.list_journals()

    def make_line(
        self,
        account_id: str,
        side: Side | str,
        amount: Decimal,
        description: str,
    ) -> JournalLine:
        """Build a journal line for one side of an entry.

        Args:
            account_id: Code of the account the line posts to
            side: Debit or Credit
            amount: Positive amount
            description: Line description

        Returns:
            New journal line with a fresh identifier

        Raises:
            ValidationError: If the side is unknown or the line is invalid
        """
        try:
            side = Side(side)
        except ValueError:
            raise ValidationError(f"Unknown side: {side!r}")
        if side == Side.DEBIT:
            return JournalLine(
                id=self.id_factory(), description=description, account_id=account_id, debit=amount
            )
        return JournalLine(
            id=self.id_factory(), description=description, account_id=account_id, credit=amount
        )

    def post_entry(
        self,
        journal_id: UUID,
        entry_id: str,
        description: str,
        date: date,
        reference: str,
        lines: Iterable[JournalLine],
    ) -> JournalEntry:
        """Validate an entry and append it to a journal.

        Args:
            journal_id: Journal ID
            entry_id: Entry identifier, unique within the journal
            description: Entry description
            date: Entry date
            reference: Source document reference
            lines: Journal lines of the entry

        Returns:
            The posted entry

        Raises:
            ValidationError: If the entry is invalid, not balanced or has an
                amount with more than two decimal places
            NotFoundError: If the journal or an account does not exist
            ConflictError: If the entry ID is already used in the journal
        """
        journal = self.require_journal(journal_id)
        entry = JournalEntry(
            entry_id=entry_id,
            description=description,
            date=date,
            reference=reference,
            lines=tuple(lines),
        )

        for line in entry.lines:
            if not is_storable_amount(line.amount):
                raise ValidationError(errors.unstorable_amount(line.side.value.lower(), line.amount))

        for account_code in dict.fromkeys(line.account_id for line in entry.lines):
            if self.db.get_account(account_code) is None:
                raise NotFoundError(errors.account_not_found(account_code))

        if self.db.entry_exists(journal.id, entry.entry_id):
            raise ConflictError(errors.duplicate_entry_id(entry.entry_id, journal.name))

        self.db.add_journal_entry(journal.id, entry)
        logger.info(
            "Posted entry '%s' to journal '%s' (%s)",
            entry.entry_id,
            journal.name,
            entry.total_debit,
        )
        return entry
