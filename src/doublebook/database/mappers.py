"""Mapper functions to convert between domain models and SQLAlchemy models.

Loading a journal goes through the domain constructors, so data read from the
store is validated exactly like data built in memory.
"""

from uuid import UUID

from doublebook.domain import entities as domain
from doublebook.database.models import (
    Account as ORMAccount,
    Journal as ORMJournal,
    JournalEntry as ORMJournalEntry,
    JournalLine as ORMJournalLine,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        code=orm_account.code,
        name=orm_account.name,
        description=orm_account.description,
        account_type=domain.AccountType(orm_account.account_type),
        normally=domain.Side(orm_account.normally),
        parent_code=orm_account.parent_code,
    )


def journal_line_to_domain(orm_line: ORMJournalLine) -> domain.JournalLine:
    """Convert SQLAlchemy JournalLine model to domain JournalLine entity."""
    return domain.JournalLine(
        id=UUID(orm_line.id),
        description=orm_line.description,
        account_id=orm_line.account_code,
        debit=orm_line.debit,
        credit=orm_line.credit,
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model to domain JournalEntry entity."""
    return domain.JournalEntry(
        entry_id=orm_entry.entry_id,
        description=orm_entry.description,
        date=orm_entry.date,
        reference=orm_entry.reference,
        lines=tuple(journal_line_to_domain(line) for line in orm_entry.lines),
    )


def journal_to_domain(orm_journal: ORMJournal) -> domain.Journal:
    """Convert SQLAlchemy Journal model, with its entries, to a domain Journal."""
    return domain.Journal(
        id=UUID(orm_journal.id),
        name=orm_journal.name,
        description=orm_journal.description,
        entries=tuple(journal_entry_to_domain(entry) for entry in orm_journal.entries),
    )


def journal_entry_to_orm(
    entry: domain.JournalEntry, journal_id: UUID, position: int
) -> ORMJournalEntry:
    """Convert a domain JournalEntry to a new SQLAlchemy row with its lines."""
    return ORMJournalEntry(
        journal_id=str(journal_id),
        entry_id=entry.entry_id,
        position=position,
        description=entry.description,
        date=entry.date,
        reference=entry.reference,
        lines=[
            ORMJournalLine(
                id=str(line.id),
                position=index,
                description=line.description,
                account_code=line.account_id,
                debit=line.debit,
                credit=line.credit,
            )
            for index, line in enumerate(entry.lines)
        ],
    )
