"""Domain model entities for doublebook.

Every entity is an immutable snapshot: a frozen dataclass that validates itself
on construction. Changing a snapshot always produces a new one through
``evolve`` or one of the ``add_*`` helpers, which run the same validation, so
an invalid snapshot can never be observed.
"""

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Iterable, Optional
from uuid import UUID, uuid4

from doublebook.domain import errors
from doublebook.domain.errors import ValidationError

ZERO = Decimal("0")
NIL_UUID = UUID(int=0)

# Stored precision of journal line amounts. SQLite keeps numerics as floats,
# so the total stays within 15 significant digits.
AMOUNT_PLACES = 2
CENT = Decimal(1).scaleb(-AMOUNT_PLACES)
MAX_AMOUNT = Decimal("9999999999999.99")

IdFactory = Callable[[], UUID]


class _LenientEnum(str, Enum):
    """String enum that also accepts member names and values in any case."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value.lower(), member.name.lower()):
                    return member
        return None

    def __str__(self) -> str:
        return self.value


class Side(_LenientEnum):
    """Side of a double-entry posting."""

    DEBIT = "Debit"
    CREDIT = "Credit"


class AccountType(_LenientEnum):
    """Account categories of the chart of accounts."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSE = "Expense"

    @property
    def normal_side(self) -> Side:
        """Side on which accounts of this type carry a positive balance."""
        if self in (AccountType.ASSET, AccountType.EXPENSE):
            return Side.DEBIT
        return Side.CREDIT

    @property
    def is_temporary(self) -> bool:
        """True for accounts that are zeroed when the books are closed."""
        return self in (AccountType.INCOME, AccountType.EXPENSE)


BALANCE_SHEET_TYPES = (AccountType.ASSET, AccountType.LIABILITY, AccountType.EQUITY)
PROFIT_AND_LOSS_TYPES = (AccountType.INCOME, AccountType.EXPENSE)


# Validation helpers shared by all records


def _require_text(value: Any, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(errors.blank_field(field_name))


def _optional_text(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value


def _coerce_id(value: Any, field_name: str) -> UUID:
    if isinstance(value, str):
        try:
            value = UUID(value)
        except ValueError:
            raise ValidationError(f"'{field_name}' is not a valid UUID: {value!r}")
    if not isinstance(value, UUID) or value == NIL_UUID:
        raise ValidationError(f"'{field_name}' cannot be empty")
    return value


def _to_decimal(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"'{field_name}' must be a number")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"'{field_name}' must be a number, got {value!r}")
    if not amount.is_finite():
        raise ValidationError(f"'{field_name}' must be a finite number")
    return amount


def _coerce_amount(value: Any, field_name: str) -> Decimal:
    amount = _to_decimal(value, field_name)
    if amount < 0:
        raise ValidationError(errors.negative_amount(field_name))
    return amount


def _coerce_date(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise ValidationError(f"'{field_name}' cannot be empty")
    return value


def _coerce_enum(enum_cls: type[Enum], value: Any, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"'{field_name}' must be one of {allowed}, got {value!r}")


def _coerce_items(items: Any, item_type: type, field_name: str) -> tuple:
    if items is None:
        raise ValidationError(f"'{field_name}' cannot be None")
    result = tuple(items)
    for item in result:
        if not isinstance(item, item_type):
            raise ValidationError(
                f"'{field_name}' must contain only {item_type.__name__} instances"
            )
    return result


def _require_unique(keys: Iterable[Any], field_name: str) -> None:
    seen = set()
    for key in keys:
        if key in seen:
            raise ValidationError(f"'{field_name}' contains duplicate key {key!r}")
        seen.add(key)


class Record:
    """Behaviour shared by all validated snapshot records.

    Subclasses are frozen dataclasses. ``__post_init__`` normalises and
    validates fields; ``evolve`` is the single functional-update builder.
    """

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Normalise and validate fields. Raises ValidationError."""

    def _set(self, name: str, value: Any) -> None:
        object.__setattr__(self, name, value)

    def evolve(self, **changes: Any):
        """Return a new, re-validated copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class Account(Record):
    """Chart-of-accounts entry supplied by the account registry."""

    code: str
    name: str
    description: str
    account_type: AccountType
    normally: Side
    parent_code: Optional[str] = None

    def validate(self) -> None:
        _require_text(self.name, "name")
        if not isinstance(self.description, str) or not self.description.strip():
            raise ValidationError(
                f"'description' cannot be null or empty for account {self.name}"
            )
        _require_text(self.code, "code")
        self._set("account_type", _coerce_enum(AccountType, self.account_type, "account_type"))
        _require_text(self.normally, "normally")
        self._set("normally", _coerce_enum(Side, self.normally, "normally"))
        self._set("parent_code", _optional_text(self.parent_code))


@dataclass(frozen=True)
class JournalLine(Record):
    """One side of a journal entry posted to a single account."""

    id: UUID
    description: str
    account_id: str
    debit: Decimal = ZERO
    credit: Decimal = ZERO

    def validate(self) -> None:
        self._set("id", _coerce_id(self.id, "id"))
        _require_text(self.description, "description")
        _require_text(self.account_id, "account_id")
        debit = _coerce_amount(self.debit, "debit")
        credit = _coerce_amount(self.credit, "credit")
        if debit == 0 and credit == 0:
            raise ValidationError("Either debit or credit must be non-zero")
        if debit != 0 and credit != 0:
            raise ValidationError("Either debit or credit must be zero")
        self._set("debit", debit)
        self._set("credit", credit)

    @property
    def side(self) -> Side:
        return Side.DEBIT if self.debit > 0 else Side.CREDIT

    @property
    def amount(self) -> Decimal:
        return self.debit if self.debit > 0 else self.credit


@dataclass(frozen=True)
class JournalEntry(Record):
    """Balanced business transaction made of two or more journal lines."""

    entry_id: str
    description: str
    date: date
    reference: str
    lines: tuple[JournalLine, ...]

    def validate(self) -> None:
        _require_text(self.entry_id, "entry_id")
        _require_text(self.description, "description")
        _require_text(self.reference, "reference")
        self._set("date", _coerce_date(self.date, "date"))
        lines = _coerce_items(self.lines, JournalLine, "lines")
        if not lines:
            raise ValidationError(
                f"Journal entry '{self.entry_id}' must contain at least one line"
            )
        _require_unique((line.id for line in lines), "lines")
        self._set("lines", lines)
        if not self.is_balanced:
            raise ValidationError(
                errors.unbalanced_entry(self.entry_id, self.total_debit, self.total_credit)
            )

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), ZERO)

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit

    def add_lines(self, lines: Iterable[JournalLine]) -> "JournalEntry":
        """Return a new entry with ``lines`` appended.

        The appended lines must balance among themselves, otherwise the new
        entry is rejected.
        """
        if lines is None:
            raise ValidationError("'lines' cannot be None")
        return self.evolve(lines=self.lines + tuple(lines))


@dataclass(frozen=True)
class Journal(Record):
    """Append-only book of original entry."""

    id: UUID
    name: str
    description: str
    entries: tuple[JournalEntry, ...] = ()

    def validate(self) -> None:
        self._set("id", _coerce_id(self.id, "id"))
        _require_text(self.name, "name")
        _require_text(self.description, "description")
        entries = _coerce_items(self.entries, JournalEntry, "entries")
        if any(not entry.is_balanced for entry in entries):
            raise ValidationError("'entries' contains unbalanced journal entries")
        _require_unique((entry.entry_id for entry in entries), "entries")
        self._set("entries", entries)

    @property
    def are_all_entries_balanced(self) -> bool:
        return all(entry.is_balanced for entry in self.entries)

    def add_entry(self, entry: JournalEntry) -> "Journal":
        """Return a new journal with ``entry`` appended.

        Raises:
            ValidationError: If the entry is missing or not balanced
        """
        if entry is None:
            raise ValidationError("'entry' cannot be None")
        if not entry.is_balanced:
            raise ValidationError(
                errors.unbalanced_entry(entry.entry_id, entry.total_debit, entry.total_credit)
            )
        return self.evolve(entries=self.entries + (entry,))


@dataclass(frozen=True)
class LedgerEntry(Record):
    """Journal line as posted to a ledger account."""

    id: UUID
    description: str
    ledger_id: str
    journal_entry_id: str
    debit: Decimal
    credit: Decimal
    date: date
    reference: str

    def validate(self) -> None:
        self._set("id", _coerce_id(self.id, "id"))
        _require_text(self.description, "description")
        _require_text(self.ledger_id, "ledger_id")
        _require_text(self.journal_entry_id, "journal_entry_id")
        debit = _coerce_amount(self.debit, "debit")
        credit = _coerce_amount(self.credit, "credit")
        if debit == 0 and credit == 0:
            raise ValidationError("Either 'debit' or 'credit' must be positive")
        if debit != 0 and credit != 0:
            raise ValidationError("Either 'debit' or 'credit' must be zero")
        self._set("debit", debit)
        self._set("credit", credit)
        self._set("date", _coerce_date(self.date, "date"))
        _require_text(self.reference, "reference")


@dataclass(frozen=True)
class LedgerAccount(Record):
    """All postings to one account, in journal order."""

    code: str
    name: str
    account_type: AccountType
    description: str
    normally: Side
    parent_code: Optional[str] = None
    entries: tuple[LedgerEntry, ...] = ()

    def validate(self) -> None:
        _require_text(self.code, "code")
        _require_text(self.name, "name")
        _require_text(self.description, "description")
        self._set("account_type", _coerce_enum(AccountType, self.account_type, "account_type"))
        _require_text(self.normally, "normally")
        self._set("normally", _coerce_enum(Side, self.normally, "normally"))
        self._set("parent_code", _optional_text(self.parent_code))
        self._set("entries", _coerce_items(self.entries, LedgerEntry, "entries"))

    @property
    def debit(self) -> Decimal:
        return sum((entry.debit for entry in self.entries), ZERO)

    @property
    def credit(self) -> Decimal:
        return sum((entry.credit for entry in self.entries), ZERO)

    @property
    def balance(self) -> Decimal:
        return self.credit - self.debit


@dataclass(frozen=True)
class Ledger(Record):
    """Journal projected per account. Accounts without postings are omitted."""

    id: UUID
    name: str
    description: str
    accounts: tuple[LedgerAccount, ...] = ()

    def validate(self) -> None:
        self._set("id", _coerce_id(self.id, "id"))
        _require_text(self.name, "name")
        _require_text(self.description, "description")
        accounts = _coerce_items(self.accounts, LedgerAccount, "accounts")
        _require_unique((account.code for account in accounts), "accounts")
        self._set("accounts", accounts)

    def get_account(self, code: str) -> Optional[LedgerAccount]:
        """Get ledger account by code, or None if it has no postings."""
        for account in self.accounts:
            if account.code == code:
                return account
        return None

    def add_account(self, account: LedgerAccount) -> "Ledger":
        """Return a new ledger with ``account`` appended."""
        if account is None:
            raise ValidationError("'account' cannot be None")
        return self.evolve(accounts=self.accounts + (account,))

    @classmethod
    def from_journal(
        cls,
        name: str,
        description: str,
        journal: Journal,
        accounts: Iterable[Account],
        id_factory: IdFactory = uuid4,
    ) -> "Ledger":
        """Project ``journal`` onto ``accounts``. See ``build_ledger``."""
        from doublebook.domain.ledger import build_ledger

        return build_ledger(name, description, journal, accounts, id_factory=id_factory)


@dataclass(frozen=True)
class TrialBalanceEntry(Record):
    """Debit and credit totals of one account as of a date."""

    account_id: str
    account_name: str
    account_type: AccountType
    normally: Side
    parent_code: Optional[str] = None
    debit: Decimal = ZERO
    credit: Decimal = ZERO

    def validate(self) -> None:
        _require_text(self.normally, "normally")
        self._set("normally", _coerce_enum(Side, self.normally, "normally"))
        _require_text(self.account_id, "account_id")
        _require_text(self.account_name, "account_name")
        self._set("account_type", _coerce_enum(AccountType, self.account_type, "account_type"))
        self._set("parent_code", _optional_text(self.parent_code))
        self._set("debit", _coerce_amount(self.debit, "debit"))
        self._set("credit", _coerce_amount(self.credit, "credit"))


@dataclass(frozen=True)
class TrialBalance(Record):
    """Per-account totals as of ``date``; open until ``close_accounts`` runs."""

    id: UUID
    name: str
    description: str
    date: date
    entries: tuple[TrialBalanceEntry, ...] = ()
    is_closed: bool = False

    def validate(self) -> None:
        self._set("id", _coerce_id(self.id, "id"))
        _require_text(self.name, "name")
        _require_text(self.description, "description")
        self._set("date", _coerce_date(self.date, "date"))
        entries = _coerce_items(self.entries, TrialBalanceEntry, "entries")
        _require_unique((entry.account_id for entry in entries), "entries")
        self._set("entries", entries)
        self._set("is_closed", bool(self.is_closed))

    @property
    def total_debit(self) -> Decimal:
        return sum((entry.debit for entry in self.entries), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((entry.credit for entry in self.entries), ZERO)

    @property
    def balance(self) -> Decimal:
        return self.total_credit - self.total_debit

    @property
    def is_balanced(self) -> bool:
        return self.balance == 0

    def get_entry(self, account_id: str) -> Optional[TrialBalanceEntry]:
        """Get the entry for an account code, or None."""
        for entry in self.entries:
            if entry.account_id == account_id:
                return entry
        return None

    def add_entry(self, entry: TrialBalanceEntry) -> "TrialBalance":
        """Return a new trial balance with ``entry`` appended."""
        if entry is None:
            raise ValidationError("'entry' cannot be None")
        return self.evolve(entries=self.entries + (entry,))

    @classmethod
    def from_ledger(
        cls,
        name: str,
        description: str,
        up_to_date: date,
        ledger: Ledger,
        id_factory: IdFactory = uuid4,
    ) -> "TrialBalance":
        """Aggregate ``ledger`` up to ``up_to_date``. See ``build_trial_balance``."""
        from doublebook.domain.trial_balance import build_trial_balance

        return build_trial_balance(
            name, description, up_to_date, ledger, id_factory=id_factory
        )

    def close_accounts(self, closing_equity_account: Account) -> "TrialBalance":
        """Close income and expense accounts. See ``trial_balance.close_accounts``."""
        from doublebook.domain.trial_balance import close_accounts

        return close_accounts(self, closing_equity_account)


@dataclass(frozen=True)
class BalanceEntry(Record):
    """Natural-side balance of one balance-sheet account."""

    account_id: str
    account_name: str
    account_type: AccountType
    normally: Side
    balance: Decimal
    parent_code: Optional[str] = None

    def validate(self) -> None:
        _require_text(self.normally, "normally")
        self._set("normally", _coerce_enum(Side, self.normally, "normally"))
        _require_text(self.account_id, "account_id")
        _require_text(self.account_name, "account_name")
        account_type = _coerce_enum(AccountType, self.account_type, "account_type")
        if account_type not in BALANCE_SHEET_TYPES:
            raise ValidationError(
                f"Account '{self.account_id}' of type {account_type.value} cannot appear on a balance sheet"
            )
        self._set("account_type", account_type)
        self._set("parent_code", _optional_text(self.parent_code))
        balance = _to_decimal(self.balance, "balance")
        if balance < 0:
            raise ValidationError(
                f"Balance cannot be negative for account '{self.account_id}': {balance}"
            )
        self._set("balance", balance)


@dataclass(frozen=True)
class Balance(Record):
    """Balance sheet derived from a closed trial balance."""

    id: UUID
    name: str
    description: str
    date: date
    entries: tuple[BalanceEntry, ...] = ()

    def validate(self) -> None:
        self._set("id", _coerce_id(self.id, "id"))
        _require_text(self.name, "name")
        _require_text(self.description, "description")
        self._set("date", _coerce_date(self.date, "date"))
        self._set("entries", _coerce_items(self.entries, BalanceEntry, "entries"))

    def _total(self, account_type: AccountType) -> Decimal:
        return sum(
            (entry.balance for entry in self.entries if entry.account_type == account_type),
            ZERO,
        )

    @property
    def total_assets(self) -> Decimal:
        return self._total(AccountType.ASSET)

    @property
    def total_liabilities(self) -> Decimal:
        return self._total(AccountType.LIABILITY)

    @property
    def total_equity(self) -> Decimal:
        return self._total(AccountType.EQUITY)

    @property
    def balance_amount(self) -> Decimal:
        return self.total_assets - (self.total_liabilities + self.total_equity)

    @property
    def is_balanced(self) -> bool:
        return self.balance_amount == 0

    def get_entry(self, account_id: str) -> Optional[BalanceEntry]:
        """Get the entry for an account code, or None."""
        for entry in self.entries:
            if entry.account_id == account_id:
                return entry
        return None

    def add_entry(self, entry: BalanceEntry) -> "Balance":
        """Return a new balance sheet with ``entry`` appended."""
        if entry is None:
            raise ValidationError("'entry' cannot be None")
        return self.evolve(entries=self.entries + (entry,))

    @classmethod
    def from_trial_balance(
        cls,
        name: str,
        description: str,
        date: date,
        trial_balance: TrialBalance,
        id_factory: IdFactory = uuid4,
    ) -> "Balance":
        """Build a balance sheet. See ``build_balance_sheet``."""
        from doublebook.domain.balance import build_balance_sheet

        return build_balance_sheet(
            name, description, date, trial_balance, id_factory=id_factory
        )


@dataclass(frozen=True)
class ProfitAndLossEntry(Record):
    """One income or expense posting inside a reporting window."""

    account_id: str
    account_name: str
    account_type: AccountType
    amount: Decimal

    def validate(self) -> None:
        _require_text(self.account_id, "account_id")
        _require_text(self.account_name, "account_name")
        account_type = _coerce_enum(AccountType, self.account_type, "account_type")
        if account_type not in PROFIT_AND_LOSS_TYPES:
            raise ValidationError(
                f"Account '{self.account_id}' of type {account_type.value} cannot appear on a profit and loss statement"
            )
        self._set("account_type", account_type)
        self._set("amount", _coerce_amount(self.amount, "amount"))


@dataclass(frozen=True)
class ProfitAndLossStatement(Record):
    """Income and expense activity between two dates, both inclusive."""

    id: UUID
    name: str
    description: str
    start_date: date
    end_date: date
    entries: tuple[ProfitAndLossEntry, ...] = ()

    def validate(self) -> None:
        self._set("id", _coerce_id(self.id, "id"))
        _require_text(self.name, "name")
        _require_text(self.description, "description")
        self._set("start_date", _coerce_date(self.start_date, "start_date"))
        self._set("end_date", _coerce_date(self.end_date, "end_date"))
        self._set("entries", _coerce_items(self.entries, ProfitAndLossEntry, "entries"))

    @property
    def total_revenue(self) -> Decimal:
        return sum(
            (e.amount for e in self.entries if e.account_type == AccountType.INCOME), ZERO
        )

    @property
    def total_expense(self) -> Decimal:
        return sum(
            (e.amount for e in self.entries if e.account_type == AccountType.EXPENSE), ZERO
        )

    @property
    def net_profit(self) -> Decimal:
        return self.total_revenue - self.total_expense

    def add_entry(self, entry: ProfitAndLossEntry) -> "ProfitAndLossStatement":
        """Return a new statement with ``entry`` appended."""
        if entry is None:
            raise ValidationError("'entry' cannot be None")
        return self.evolve(entries=self.entries + (entry,))

    @classmethod
    def from_ledger(
        cls,
        name: str,
        description: str,
        start_date: date,
        end_date: date,
        ledger: Ledger,
        id_factory: IdFactory = uuid4,
    ) -> "ProfitAndLossStatement":
        """Build a statement for a date window. See ``build_profit_and_loss``."""
        from doublebook.domain.profit_and_loss import build_profit_and_loss

        return build_profit_and_loss(
            name, description, start_date, end_date, ledger, id_factory=id_factory
        )


def is_storable_amount(amount: Decimal) -> bool:
    """Return whether an amount fits the stored precision of a journal line."""
    return abs(amount) <= MAX_AMOUNT and amount == amount.quantize(CENT)
