"""Balance sheet builder."""

import logging
from datetime import date, datetime
from uuid import uuid4

from doublebook.domain import errors
from doublebook.domain.entities import (
    BALANCE_SHEET_TYPES,
    Balance,
    BalanceEntry,
    IdFactory,
    Side,
    TrialBalance,
    TrialBalanceEntry,
)
from doublebook.domain.errors import StateError, ValidationError

logger = logging.getLogger(__name__)


def natural_balance(entry: TrialBalanceEntry):
    """Return the balance of an entry measured on its normal side."""
    if entry.normally == Side.CREDIT:
        return entry.credit - entry.debit
    return entry.debit - entry.credit


def build_balance_sheet(
    name: str,
    description: str,
    date: date,
    trial_balance: TrialBalance,
    id_factory: IdFactory = uuid4,
) -> Balance:
    """Build a balance sheet from a closed, balanced trial balance.

    Only asset, liability and equity entries are carried over. An account
    whose natural-side balance is negative is rejected by BalanceEntry rather
    than clamped.

    Raises:
        StateError: If the trial balance is open or does not balance
        ValidationError: If inputs are missing or an account balance is negative
    """
    if trial_balance is None:
        raise ValidationError("'trial_balance' cannot be None")
    if isinstance(date, datetime):
        date = date.date()
    if not trial_balance.is_closed:
        raise StateError(errors.trial_balance_not_closed(trial_balance.date))
    if not trial_balance.is_balanced:
        raise StateError(errors.trial_balance_not_balanced(trial_balance.date))
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(errors.blank_field("name"))
    if not isinstance(description, str) or not description.strip():
        raise ValidationError(errors.blank_field("description"))
    if date is None:
        raise ValidationError("'date' cannot be empty")

    entries = tuple(
        BalanceEntry(
            account_id=entry.account_id,
            account_name=entry.account_name,
            account_type=entry.account_type,
            normally=entry.normally,
            balance=natural_balance(entry),
            parent_code=entry.parent_code,
        )
        for entry in trial_balance.entries
        if entry.account_type in BALANCE_SHEET_TYPES
    )

    balance = Balance(
        id=id_factory(), name=name, description=description, date=date, entries=entries
    )
    logger.debug(
        "Built balance sheet '%s' as of %s: assets %s, liabilities %s, equity %s",
        name,
        date,
        balance.total_assets,
        balance.total_liabilities,
        balance.total_equity,
    )
    return balance
