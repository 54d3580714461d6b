"""Ledger builder: projects a journal onto the chart of accounts."""

import logging
from typing import Iterable
from uuid import uuid4

from doublebook.domain import errors
from doublebook.domain.entities import (
    Account,
    IdFactory,
    Journal,
    Ledger,
    LedgerAccount,
    LedgerEntry,
)
from doublebook.domain.errors import ValidationError

logger = logging.getLogger(__name__)


def build_ledger_entries(
    journal: Journal, account_code: str, id_factory: IdFactory = uuid4
) -> list[LedgerEntry]:
    """Collect the postings of one account, in journal order.

    Each matching journal line becomes one ledger entry that inherits the
    date, reference, description and ID of the journal entry it belongs to.
    """
    ledger_entries = []
    for entry in journal.entries:
        for line in entry.lines:
            if line.account_id != account_code:
                continue
            ledger_entries.append(
                LedgerEntry(
                    id=id_factory(),
                    description=entry.description,
                    ledger_id=line.account_id,
                    journal_entry_id=entry.entry_id,
                    debit=line.debit,
                    credit=line.credit,
                    date=entry.date,
                    reference=entry.reference,
                )
            )
    return ledger_entries


def build_ledger(
    name: str,
    description: str,
    journal: Journal,
    accounts: Iterable[Account],
    id_factory: IdFactory = uuid4,
) -> Ledger:
    """Build a ledger from a journal.

    Entries keep journal order; they are not re-sorted by date. Accounts
    without any matching journal line are left out of the result.

    Args:
        name: Ledger name
        description: Ledger description
        journal: Journal to project
        accounts: Accounts to project the journal onto
        id_factory: Callable producing identifiers for the new snapshots

    Returns:
        New Ledger snapshot

    Raises:
        ValidationError: If the journal or accounts are missing, or name or
            description are blank
    """
    if journal is None:
        raise ValidationError("'journal' cannot be None")
    if accounts is None:
        raise ValidationError("'accounts' cannot be None")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(errors.blank_field("name"))
    if not isinstance(description, str) or not description.strip():
        raise ValidationError(errors.blank_field("description"))

    ledger_accounts = []
    for account in accounts:
        entries = build_ledger_entries(journal, account.code, id_factory=id_factory)
        if not entries:
            continue
        ledger_accounts.append(
            LedgerAccount(
                code=account.code,
                name=account.name,
                account_type=account.account_type,
                description=account.description,
                normally=account.normally,
                parent_code=account.parent_code,
                entries=tuple(entries),
            )
        )

    logger.debug(
        "Built ledger '%s' from journal '%s': %d account(s) with postings",
        name,
        journal.name,
        len(ledger_accounts),
    )
    return Ledger(
        id=id_factory(),
        name=name,
        description=description,
        accounts=tuple(ledger_accounts),
    )
