"""Shared domain error messages and error types."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation while constructing a snapshot."""


class StateError(DomainError):
    """Operation not allowed in the current workflow state."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def blank_field(field_name: str) -> str:
    """Return message for a required string field that is empty."""
    return f"'{field_name}' cannot be null or empty"


def negative_amount(field_name: str) -> str:
    """Return message for a monetary field that must not be negative."""
    return f"'{field_name}' cannot be negative"


def unstorable_amount(field_name: str, amount) -> str:
    """Return message for an amount with more than two decimals or too many digits."""
    return f"'{field_name}' must have at most two decimal places and 13 integer digits, got {amount}"


def account_not_found(code: str) -> str:
    """Return message for missing account."""
    return f"Account '{code}' not found"


def journal_not_found(journal: str) -> str:
    """Return message for missing journal by ID or name."""
    return f"Journal '{journal}' not found"


def duplicate_account_code(code: str) -> str:
    """Return message for an account code that is already registered."""
    return f"Account with code '{code}' already exists"


def duplicate_journal_name(name: str) -> str:
    """Return message for a journal name that is already taken."""
    return f"Journal with name '{name}' already exists"


def duplicate_entry_id(entry_id: str, journal_name: str) -> str:
    """Return message for duplicate journal entry ID."""
    return f"Journal entry '{entry_id}' already exists in journal '{journal_name}'"


def unbalanced_entry(entry_id: str, debit, credit) -> str:
    """Return message for a journal entry whose sides differ."""
    return (
        f"Journal entry '{entry_id}' is not balanced: "
        f"debit {debit} != credit {credit}"
    )


def already_closed() -> str:
    """Return message when closing a trial balance twice."""
    return "Accounts are already closed for this trial balance"


def trial_balance_not_closed(as_of: date) -> str:
    """Return message when a balance sheet is requested from an open trial balance."""
    return f"Trial balance is not closed at {as_of:%Y-%m-%d}"


def trial_balance_not_balanced(as_of: date) -> str:
    """Return message when a balance sheet is requested from an unbalanced trial balance."""
    return f"Trial balance is not balanced at {as_of:%Y-%m-%d}"
