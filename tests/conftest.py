"""Shared pytest fixtures for doublebook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from doublebook.database.factories import create_sqlite_database
from doublebook.domain.account import AccountService
from doublebook.domain.entities import (
    Account,
    AccountType,
    Journal,
    JournalEntry,
    JournalLine,
    Side,
)
from doublebook.domain.journal import JournalService
from doublebook.domain.reports import ReportService


CHART_OF_ACCOUNTS = [
    ("1000", "Cash", AccountType.ASSET, Side.DEBIT),
    ("2000", "Accounts Payable", AccountType.LIABILITY, Side.CREDIT),
    ("3000", "Capital", AccountType.EQUITY, Side.CREDIT),
    ("3100", "Retained Earnings", AccountType.EQUITY, Side.CREDIT),
    ("4000", "Revenue", AccountType.INCOME, Side.CREDIT),
    ("5000", "Expense", AccountType.EXPENSE, Side.DEBIT),
]

# (entry_id, date, reference, description, debit account, credit account, amount)
EXAMPLE_POSTINGS = [
    ("INV-001", date(2024, 1, 15), "INV-001", "Sale of services", "1000", "4000", "1000"),
    ("EXP-001", date(2024, 1, 20), "EXP-001", "Office supplies", "5000", "1000", "200"),
    ("CAP-001", date(2024, 1, 1), "CAP-001", "Owner investment", "1000", "3000", "5000"),
    ("EXP-002", date(2024, 2, 1), "EXP-002", "Consulting on credit", "5000", "2000", "300"),
]

DATED_POSTINGS = [
    ("REV-2023", date(2023, 12, 31), "R-1", "Year end sale", "1000", "4000", "500"),
    ("REV-2024A", date(2024, 1, 1), "R-2", "New year sale", "1000", "4000", "100"),
    ("EXP-2024", date(2024, 6, 1), "E-1", "Midyear expense", "5000", "1000", "50"),
    ("REV-2025", date(2025, 5, 17), "R-3", "Late sale", "1000", "4000", "200"),
]


def make_entry(entry_id, entry_date, reference, description, debit_code, credit_code, amount):
    """Build a balanced two-line journal entry."""
    amount = Decimal(amount)
    return JournalEntry(
        entry_id=entry_id,
        description=description,
        date=entry_date,
        reference=reference,
        lines=(
            JournalLine(id=uuid4(), description=description, account_id=debit_code, debit=amount),
            JournalLine(id=uuid4(), description=description, account_id=credit_code, credit=amount),
        ),
    )


@pytest.fixture
def accounts():
    """Return the example chart of accounts."""
    return [
        Account(code=code, name=name, description=name, account_type=account_type, normally=side)
        for code, name, account_type, side in CHART_OF_ACCOUNTS
    ]


@pytest.fixture
def accounts_by_code(accounts):
    """Return the example chart of accounts keyed by code."""
    return {account.code: account for account in accounts}


@pytest.fixture
def example_journal():
    """Create the four-entry example journal."""
    return Journal(
        id=uuid4(),
        name="General",
        description="General journal",
        entries=tuple(make_entry(*posting) for posting in EXAMPLE_POSTINGS),
    )


@pytest.fixture
def dated_journal():
    """Create a journal whose entries straddle several years."""
    return Journal(
        id=uuid4(),
        name="Dated",
        description="Entries across years",
        entries=tuple(make_entry(*posting) for posting in DATED_POSTINGS),
    )


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def journal_service(temp_db):
    """Create a JournalService with a temporary database."""
    return JournalService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def registered_accounts(account_service):
    """Register the example chart of accounts."""
    return [
        account_service.register_account(
            code=code, name=name, description=name, account_type=account_type
        )
        for code, name, account_type, _ in CHART_OF_ACCOUNTS
    ]


def _post_all(journal_service, journal_id, postings):
    for entry_id, entry_date, reference, description, debit_code, credit_code, amount in postings:
        journal_service.post_entry(
            journal_id=journal_id,
            entry_id=entry_id,
            description=description,
            date=entry_date,
            reference=reference,
            lines=[
                journal_service.make_line(debit_code, Side.DEBIT, Decimal(amount), description),
                journal_service.make_line(credit_code, Side.CREDIT, Decimal(amount), description),
            ],
        )


@pytest.fixture
def stored_journal(registered_accounts, journal_service):
    """Create the example journal in the database and return its ID."""
    journal = journal_service.create_journal(name="General", description="General journal")
    _post_all(journal_service, journal.id, EXAMPLE_POSTINGS)
    return journal.id


@pytest.fixture
def stored_dated_journal(registered_accounts, journal_service):
    """Create the multi-year journal in the database and return its ID."""
    journal = journal_service.create_journal(name="Dated", description="Entries across years")
    _post_all(journal_service, journal.id, DATED_POSTINGS)
    return journal.id


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def entry_factory():
    """Return a builder for balanced two-line journal entries."""
    return make_entry
