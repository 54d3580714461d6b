"""Tests for the balance sheet builder."""

from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

import pytest

from doublebook.domain.balance import build_balance_sheet, natural_balance
from doublebook.domain.entities import (
    AccountType,
    Balance,
    Side,
    TrialBalance,
    TrialBalanceEntry,
)
from doublebook.domain.errors import StateError, ValidationError
from doublebook.domain.ledger import build_ledger
from doublebook.domain.trial_balance import build_trial_balance


@pytest.fixture
def open_trial_balance(example_journal, accounts):
    ledger = build_ledger("Ledger", "Example ledger", example_journal, accounts)
    return build_trial_balance("TB", "Example", date(2024, 12, 31), ledger)


@pytest.fixture
def closed_trial_balance(open_trial_balance, accounts_by_code):
    return open_trial_balance.close_accounts(accounts_by_code["3100"])


def test_example_balance_sheet(closed_trial_balance):
    balance = Balance.from_trial_balance("BS", "Year end", date(2024, 12, 31), closed_trial_balance)

    assert balance.total_assets == Decimal("5800")
    assert balance.total_liabilities == Decimal("300")
    assert balance.total_equity == Decimal("5500")
    assert balance.get_entry("3000").balance == Decimal("5000")
    assert balance.get_entry("3100").balance == Decimal("500")
    assert balance.is_balanced


def test_only_balance_sheet_accounts_are_kept(closed_trial_balance):
    balance = build_balance_sheet("BS", "Year end", date(2024, 12, 31), closed_trial_balance)

    assert {e.account_type for e in balance.entries} <= {
        AccountType.ASSET, AccountType.LIABILITY, AccountType.EQUITY,
    }
    assert balance.get_entry("4000") is None
    assert balance.get_entry("5000") is None


def test_open_trial_balance_rejected(open_trial_balance):
    with pytest.raises(StateError, match="not closed"):
        build_balance_sheet("BS", "Year end", date(2024, 12, 31), open_trial_balance)


def test_unbalanced_trial_balance_rejected():
    trial_balance = TrialBalance(
        id=uuid4(), name="TB", description="TB", date=date(2024, 12, 31),
        entries=(
            TrialBalanceEntry("1000", "Cash", AccountType.ASSET, Side.DEBIT, debit=Decimal("10")),
        ),
        is_closed=True,
    )
    with pytest.raises(StateError, match="not balanced at 2024-12-31"):
        build_balance_sheet("BS", "Year end", date(2024, 12, 31), trial_balance)


def test_state_checked_before_arguments(open_trial_balance):
    with pytest.raises(StateError):
        build_balance_sheet("", "", date(2024, 12, 31), open_trial_balance)


def test_open_trial_balance_rejected_for_text_date(open_trial_balance):
    with pytest.raises(StateError, match="not closed at 2024-12-31"):
        build_balance_sheet("BS", "Year end", "2024-12-31", open_trial_balance)


def test_blank_name_rejected(closed_trial_balance):
    with pytest.raises(ValidationError, match="name"):
        build_balance_sheet("", "Year end", date(2024, 12, 31), closed_trial_balance)


def test_negative_natural_balance_rejected():
    trial_balance = TrialBalance(
        id=uuid4(), name="TB", description="TB", date=date(2024, 12, 31),
        entries=(
            TrialBalanceEntry("1000", "Cash", AccountType.ASSET, Side.DEBIT, credit=Decimal("50")),
            TrialBalanceEntry("2000", "Payable", AccountType.LIABILITY, Side.CREDIT, debit=Decimal("50")),
        ),
        is_closed=True,
    )
    with pytest.raises(ValidationError, match="Balance cannot be negative"):
        build_balance_sheet("BS", "Year end", date(2024, 12, 31), trial_balance)


def test_datetime_date_is_truncated(closed_trial_balance):
    balance = build_balance_sheet("BS", "Year end", datetime(2024, 12, 31, 18, 0), closed_trial_balance)
    assert balance.date == date(2024, 12, 31)


@pytest.mark.parametrize(
    "normally,debit,credit,expected",
    [
        (Side.DEBIT, "700", "200", "500"),
        (Side.CREDIT, "200", "700", "500"),
    ],
)
def test_natural_balance(normally, debit, credit, expected):
    entry = TrialBalanceEntry(
        "X", "X", AccountType.EQUITY, normally, debit=Decimal(debit), credit=Decimal(credit)
    )
    assert natural_balance(entry) == Decimal(expected)
