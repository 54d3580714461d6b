"""Trial balance builder and closing engine."""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from doublebook.domain import errors
from doublebook.domain.entities import (
    ZERO,
    Account,
    AccountType,
    IdFactory,
    Ledger,
    LedgerAccount,
    TrialBalance,
    TrialBalanceEntry,
)
from doublebook.domain.errors import StateError, ValidationError

logger = logging.getLogger(__name__)


def aggregate_account(account: LedgerAccount, up_to_date: date) -> TrialBalanceEntry:
    """Sum an account's postings dated on or before ``up_to_date``.

    Debits and credits are summed separately, not netted. An account whose
    postings all fall after the cutoff yields a zero entry.
    """
    debit = ZERO
    credit = ZERO
    for entry in account.entries:
        if entry.date <= up_to_date:
            debit += entry.debit
            credit += entry.credit
    return TrialBalanceEntry(
        account_id=account.code,
        account_name=account.name,
        account_type=account.account_type,
        normally=account.normally,
        parent_code=account.parent_code,
        debit=debit,
        credit=credit,
    )


def build_trial_balance(
    name: str,
    description: str,
    up_to_date: date,
    ledger: Ledger,
    id_factory: IdFactory = uuid4,
) -> TrialBalance:
    """Build an open trial balance from a ledger as of ``up_to_date``.

    The cutoff is inclusive and there is no lower bound. Every ledger
    account is listed, including accounts with no activity up to the cutoff.

    Raises:
        ValidationError: If the ledger is missing or has no accounts, or name
            or description are blank
    """
    if ledger is None:
        raise ValidationError("'ledger' cannot be None")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(errors.blank_field("name"))
    if not isinstance(description, str) or not description.strip():
        raise ValidationError(errors.blank_field("description"))
    if isinstance(up_to_date, datetime):
        up_to_date = up_to_date.date()
    if not isinstance(up_to_date, date):
        raise ValidationError("'up_to_date' cannot be empty")
    if not ledger.accounts:
        raise ValidationError("No ledger accounts found")

    entries = [aggregate_account(account, up_to_date) for account in ledger.accounts]
    if not entries:
        raise ValidationError("No account entries found")

    trial_balance = TrialBalance(
        id=id_factory(),
        name=name,
        description=description,
        date=up_to_date,
        entries=tuple(entries),
    )
    logger.debug(
        "Built trial balance '%s' as of %s: debit %s, credit %s",
        name,
        up_to_date,
        trial_balance.total_debit,
        trial_balance.total_credit,
    )
    return trial_balance


def _close_income(entry: TrialBalanceEntry) -> TrialBalanceEntry:
    # Both sides stay visible; the net position becomes zero.
    return entry.evolve(debit=entry.credit)


def _close_expense(entry: TrialBalanceEntry) -> TrialBalanceEntry:
    return entry.evolve(credit=entry.debit)


def _post_net_income(
    entry: TrialBalanceEntry, net_income: Decimal
) -> TrialBalanceEntry:
    if net_income > 0:
        return entry.evolve(credit=entry.credit + net_income)
    return entry.evolve(debit=entry.debit + abs(net_income))


def close_accounts(
    trial_balance: TrialBalance, closing_equity_account: Account
) -> TrialBalance:
    """Close income and expense accounts into an equity account.

    Income entries are zeroed by setting debit to credit and expense entries
    by setting credit to debit, so gross figures survive in the closed trial
    balance. Net income is added to the credit of the closing account and a
    net loss to its debit; the account's existing figures are kept. When the
    closing account has no entry yet, a zero entry is created for it. When net
    income is zero nothing is posted.

    The closing account is always found or created here, so there is no
    separate not-found failure for it; a missing account is reported as
    a ValidationError before any entry is touched.

    Args:
        trial_balance: Open trial balance
        closing_equity_account: Equity account receiving net income or loss

    Returns:
        New closed TrialBalance with the same id, name, description and date

    Raises:
        StateError: If the trial balance is already closed
        ValidationError: If the closing account is missing or not an equity account
    """
    if trial_balance.is_closed:
        raise StateError(errors.already_closed())
    if closing_equity_account is None:
        raise ValidationError("'closing_equity_account' cannot be None")
    if closing_equity_account.account_type != AccountType.EQUITY:
        raise ValidationError(
            f"Closing account '{closing_equity_account.code}' must be an equity account, "
            f"got {closing_equity_account.account_type.value}"
        )

    income_entries = []
    expense_entries = []
    equity_entries = []
    other_entries = []
    for entry in trial_balance.entries:
        if entry.account_type == AccountType.INCOME:
            income_entries.append(entry)
        elif entry.account_type == AccountType.EXPENSE:
            expense_entries.append(entry)
        elif entry.account_type == AccountType.EQUITY:
            equity_entries.append(entry)
        else:
            other_entries.append(entry)

    total_income = sum((e.credit - e.debit for e in income_entries), ZERO)
    total_expense = sum((e.debit - e.credit for e in expense_entries), ZERO)
    net_income = total_income - total_expense

    permanent_entries = other_entries + equity_entries
    if net_income != 0:
        target: Optional[TrialBalanceEntry] = next(
            (e for e in equity_entries if e.account_id == closing_equity_account.code),
            None,
        )
        if target is None:
            target = TrialBalanceEntry(
                account_id=closing_equity_account.code,
                account_name=closing_equity_account.name,
                account_type=closing_equity_account.account_type,
                normally=closing_equity_account.normally,
                parent_code=closing_equity_account.parent_code,
            )
        for index, entry in enumerate(permanent_entries):
            if entry.account_id == target.account_id:
                permanent_entries[index] = _post_net_income(entry, net_income)
                break
        else:
            permanent_entries.append(_post_net_income(target, net_income))

        logger.debug(
            "Posted net %s of %s to '%s'",
            "income" if net_income > 0 else "loss",
            abs(net_income),
            target.account_id,
        )

    closed_entries = (
        permanent_entries
        + [_close_income(e) for e in income_entries]
        + [_close_expense(e) for e in expense_entries]
    )
    return trial_balance.evolve(entries=tuple(closed_entries), is_closed=True)
