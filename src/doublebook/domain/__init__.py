"""Domain layer for doublebook application."""

from doublebook.domain.account import AccountService
from doublebook.domain.journal import JournalService
from doublebook.domain.reports import ReportService
from doublebook.domain.ledger import build_ledger
from doublebook.domain.trial_balance import build_trial_balance, close_accounts
from doublebook.domain.balance import build_balance_sheet
from doublebook.domain.profit_and_loss import build_profit_and_loss

__all__ = [
    "AccountService",
    "JournalService",
    "ReportService",
    "build_ledger",
    "build_trial_balance",
    "close_accounts",
    "build_balance_sheet",
    "build_profit_and_loss",
]
