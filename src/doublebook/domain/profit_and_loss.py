"""Profit and loss statement builder."""

import logging
from datetime import date, datetime
from uuid import uuid4

from doublebook.domain import errors
from doublebook.domain.entities import (
    PROFIT_AND_LOSS_TYPES,
    AccountType,
    IdFactory,
    Ledger,
    ProfitAndLossEntry,
    ProfitAndLossStatement,
)
from doublebook.domain.errors import ValidationError

logger = logging.getLogger(__name__)


def _as_date(value, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise ValidationError(f"'{field_name}' cannot be empty")
    return value


def build_profit_and_loss(
    name: str,
    description: str,
    start_date: date,
    end_date: date,
    ledger: Ledger,
    id_factory: IdFactory = uuid4,
) -> ProfitAndLossStatement:
    """Build a profit and loss statement for ``start_date``..``end_date``.

    Both boundaries are inclusive. Every qualifying ledger entry becomes its
    own statement entry: income accounts contribute the entry's credit,
    expense accounts its debit.

    Raises:
        ValidationError: If inputs are missing, blank, or the window is reversed
    """
    if ledger is None:
        raise ValidationError("'ledger' cannot be None")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(errors.blank_field("name"))
    if not isinstance(description, str) or not description.strip():
        raise ValidationError(errors.blank_field("description"))
    start_date = _as_date(start_date, "start_date")
    end_date = _as_date(end_date, "end_date")
    if start_date > end_date:
        raise ValidationError(
            f"'start_date' {start_date} must not be after 'end_date' {end_date}"
        )

    entries = []
    for account in ledger.accounts:
        if account.account_type not in PROFIT_AND_LOSS_TYPES:
            continue
        for entry in account.entries:
            if not start_date <= entry.date <= end_date:
                continue
            amount = (
                entry.credit
                if account.account_type == AccountType.INCOME
                else entry.debit
            )
            entries.append(
                ProfitAndLossEntry(
                    account_id=account.code,
                    account_name=account.name,
                    account_type=account.account_type,
                    amount=amount,
                )
            )

    statement = ProfitAndLossStatement(
        id=id_factory(),
        name=name,
        description=description,
        start_date=start_date,
        end_date=end_date,
        entries=tuple(entries),
    )
    logger.debug(
        "Built profit and loss '%s' for %s..%s: %d entries, net profit %s",
        name,
        start_date,
        end_date,
        len(entries),
        statement.net_profit,
    )
    return statement
