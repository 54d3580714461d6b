"""Tests for journal service and commands."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from doublebook.cli.main import cli
from doublebook.domain.entities import Side
from doublebook.domain.errors import ConflictError, NotFoundError, ValidationError
from doublebook.utils.journal_resolver import resolve_journal


def _lines(journal_service, debit_code, credit_code, amount, description="Line"):
    return [
        journal_service.make_line(debit_code, Side.DEBIT, Decimal(amount), description),
        journal_service.make_line(credit_code, Side.CREDIT, Decimal(amount), description),
    ]


class TestJournalService:
    """Tests for JournalService."""

    def test_create_journal(self, journal_service):
        journal = journal_service.create_journal("General", "General journal")

        assert journal.entries == ()
        assert journal_service.get_journal(journal.id) == journal
        assert journal_service.get_journal_by_name("General").id == journal.id

    def test_duplicate_name_rejected(self, journal_service):
        journal_service.create_journal("General", "General journal")
        with pytest.raises(ConflictError, match="already exists"):
            journal_service.create_journal("General", "Again")

    def test_blank_description_rejected(self, journal_service):
        with pytest.raises(ValidationError, match="description"):
            journal_service.create_journal("General", "")

    def test_require_journal(self, journal_service):
        with pytest.raises(NotFoundError):
            journal_service.require_journal(uuid4())

    def test_make_line_sides(self, journal_service):
        debit = journal_service.make_line("1000", "debit", Decimal("5"), "Cash")
        credit = journal_service.make_line("4000", Side.CREDIT, Decimal("5"), "Sale")

        assert debit.debit == Decimal("5") and debit.credit == Decimal("0")
        assert credit.credit == Decimal("5") and credit.debit == Decimal("0")
        assert debit.id != credit.id

        with pytest.raises(ValidationError, match="Unknown side"):
            journal_service.make_line("1000", "Sideways", Decimal("5"), "Cash")

    def test_post_entry(self, journal_service, registered_accounts):
        journal = journal_service.create_journal("General", "General journal")

        entry = journal_service.post_entry(
            journal_id=journal.id,
            entry_id="INV-001",
            description="Sale",
            date=date(2024, 1, 15),
            reference="INV-001",
            lines=_lines(journal_service, "1000", "4000", "1000"),
        )

        stored = journal_service.require_journal(journal.id)
        assert stored.entries == (entry,)

    def test_post_unbalanced_entry_rejected(self, journal_service, registered_accounts):
        journal = journal_service.create_journal("General", "General journal")
        lines = [
            journal_service.make_line("1000", Side.DEBIT, Decimal("100"), "Cash"),
            journal_service.make_line("4000", Side.CREDIT, Decimal("90"), "Sale"),
        ]

        with pytest.raises(ValidationError, match="not balanced"):
            journal_service.post_entry(journal.id, "E1", "Sale", date(2024, 1, 1), "R1", lines)
        assert journal_service.require_journal(journal.id).entries == ()

    def test_post_to_unknown_account_rejected(self, journal_service, registered_accounts):
        journal = journal_service.create_journal("General", "General journal")

        with pytest.raises(NotFoundError, match="'9999' not found"):
            journal_service.post_entry(
                journal.id, "E1", "Sale", date(2024, 1, 1), "R1",
                _lines(journal_service, "1000", "9999", "10"),
            )

    def test_post_duplicate_entry_id_rejected(self, journal_service, stored_journal):
        with pytest.raises(ConflictError, match="'INV-001' already exists"):
            journal_service.post_entry(
                stored_journal, "INV-001", "Sale", date(2024, 3, 1), "INV-009",
                _lines(journal_service, "1000", "4000", "10"),
            )

    def test_post_to_unknown_journal_rejected(self, journal_service, registered_accounts):
        with pytest.raises(NotFoundError):
            journal_service.post_entry(
                uuid4(), "E1", "Sale", date(2024, 1, 1), "R1",
                _lines(journal_service, "1000", "4000", "10"),
            )

    def test_sub_cent_entry_rejected(self, journal_service, registered_accounts, temp_db):
        journal = journal_service.create_journal("General", "General journal")
        lines = [
            journal_service.make_line("1000", Side.DEBIT, Decimal("0.335"), "Cash"),
            journal_service.make_line("1000", Side.DEBIT, Decimal("0.335"), "Cash"),
            journal_service.make_line("4000", Side.CREDIT, Decimal("0.67"), "Sale"),
        ]

        with pytest.raises(ValidationError, match="two decimal places"):
            journal_service.post_entry(journal.id, "E1", "Sale", date(2024, 1, 1), "R1", lines)

        temp_db.disconnect()
        assert journal_service.require_journal(journal.id).entries == ()

    def test_oversized_amount_rejected(self, journal_service, registered_accounts):
        journal = journal_service.create_journal("General", "General journal")

        with pytest.raises(ValidationError, match="13 integer digits"):
            journal_service.post_entry(
                journal.id, "E1", "Sale", date(2024, 1, 1), "R1",
                _lines(journal_service, "1000", "4000", "10000000000000"),
            )
        assert journal_service.require_journal(journal.id).entries == ()

    def test_trailing_zero_decimals_accepted(self, journal_service, registered_accounts, temp_db):
        journal = journal_service.create_journal("General", "General journal")

        journal_service.post_entry(
            journal.id, "E1", "Sale", date(2024, 1, 1), "R1",
            _lines(journal_service, "1000", "4000", "9999999999999.990"),
        )

        temp_db.disconnect()
        stored = journal_service.require_journal(journal.id)
        assert stored.entries[0].total_debit == Decimal("9999999999999.99")

    def test_entries_are_appended_in_posting_order(self, journal_service, stored_journal):
        journal = journal_service.require_journal(stored_journal)
        assert [e.entry_id for e in journal.entries] == ["INV-001", "EXP-001", "CAP-001", "EXP-002"]


class TestResolveJournal:
    """Tests for resolving journals by name or ID."""

    def test_resolve_by_name(self, journal_service):
        journal = journal_service.create_journal("General", "General journal")
        assert resolve_journal(journal_service, "General") == journal.id

    def test_resolve_by_id(self, journal_service):
        journal = journal_service.create_journal("General", "General journal")
        assert resolve_journal(journal_service, str(journal.id)) == journal.id
        assert resolve_journal(journal_service, journal.id) == journal.id

    def test_unknown_journal(self, journal_service):
        with pytest.raises(NotFoundError, match="'Missing' not found"):
            resolve_journal(journal_service, "Missing")
        with pytest.raises(NotFoundError):
            resolve_journal(journal_service, str(uuid4()))


def test_journal_create_and_list(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "journal", "create", "General"])
    assert result.exit_code == 0
    assert "Created journal 'General'" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "journal", "list"])
    assert result.exit_code == 0
    assert "General" in result.output
    assert "0 entries" in result.output


def test_journal_list_empty(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "journal", "list"])
    assert result.exit_code == 0
    assert "No journals found" in result.output


def test_journal_post(cli_runner, temp_db, journal_service, registered_accounts):
    journal_service.create_journal("General", "General journal")

    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "journal", "post", "General",
            "--date", "2024-01-15",
            "--reference", "INV-001",
            "--description", "Sale of services",
            "--entry-id", "INV-001",
            "--debit", "1000=$1,000.00",
            "--credit", "4000=600",
            "--credit", "4000=400",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Posted entry 'INV-001' (1,000.00) on 2024-01-15" in result.output
    journal = journal_service.get_journal_by_name("General")
    assert len(journal.entries[0].lines) == 3


def test_journal_post_unbalanced(cli_runner, temp_db, journal_service, registered_accounts):
    journal_service.create_journal("General", "General journal")

    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "journal", "post", "General",
            "--date", "2024-01-15", "--reference", "R1", "--description", "Sale",
            "--debit", "1000=100", "--credit", "4000=90",
        ],
    )

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "not balanced" in result.output


def test_journal_post_requires_both_sides(cli_runner, temp_db, journal_service, registered_accounts):
    journal_service.create_journal("General", "General journal")

    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "journal", "post", "General",
            "--date", "2024-01-15", "--reference", "R1", "--description", "Sale",
            "--debit", "1000=100",
        ],
    )

    assert result.exit_code == 1
    assert "At least one --debit and one --credit" in result.output


def test_journal_post_bad_amount(cli_runner, temp_db, journal_service, registered_accounts):
    journal_service.create_journal("General", "General journal")

    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "journal", "post", "General",
            "--date", "2024-01-15", "--reference", "R1", "--description", "Sale",
            "--debit", "1000=-100", "--credit", "4000=100",
        ],
    )

    assert result.exit_code == 1
    assert "Amount must be positive" in result.output


def test_journal_post_sub_cent_amount(cli_runner, temp_db, journal_service, registered_accounts):
    journal_service.create_journal("General", "General journal")

    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "journal", "post", "General",
            "--date", "2024-01-15", "--reference", "R1", "--description", "Sale",
            "--debit", "1000=0.335", "--debit", "1000=0.335", "--credit", "4000=0.67",
        ],
    )

    assert result.exit_code == 1
    assert "at most two decimal places" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "journal", "show", "General"])
    assert result.exit_code == 0


def test_journal_post_unknown_journal(cli_runner, temp_db, registered_accounts):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "journal", "post", "Missing",
            "--date", "2024-01-15", "--reference", "R1", "--description", "Sale",
            "--debit", "1000=100", "--credit", "4000=100",
        ],
    )

    assert result.exit_code == 1
    assert "Journal 'Missing' not found" in result.output


def test_journal_show(cli_runner, temp_db, stored_journal):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "journal", "show", "General"])

    assert result.exit_code == 0
    assert "INV-001" in result.output
    assert "5,000.00" in result.output
    assert result.output.index("INV-001") < result.output.index("CAP-001")
