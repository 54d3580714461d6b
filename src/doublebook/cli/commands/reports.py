"""Report commands: ledger, trial balance, balance sheet and profit and loss."""

from datetime import date
from decimal import Decimal

import click

from doublebook.cli.date_filters import parse_cli_date, resolve_cli_date_range
from doublebook.cli.error_handling import handle_domain_error
from doublebook.cli.journal_resolution import resolve_journal_or_exit
from doublebook.domain.entities import ZERO, AccountType
from doublebook.domain.errors import DomainError
from doublebook.domain.journal import JournalService
from doublebook.domain.reports import ReportService

AMOUNT_WIDTH = 14


def _money(amount) -> str:
    return f"{amount:,.2f}"


def _row(label: str, *amounts) -> str:
    cells = "".join(f"{_money(a):>{AMOUNT_WIDTH}}" for a in amounts)
    return f"{label:40s}{cells}"


@click.command("ledger")
@click.argument("journal", metavar="JOURNAL")
@click.pass_context
def ledger(ctx, journal: str):
    """Show the ledger of a journal, one section per account.

    JOURNAL can be a journal name or ID.
    """
    db = ctx.obj["db"]
    journal_id = resolve_journal_or_exit(ctx, JournalService(db), journal)

    try:
        result = ReportService(db).ledger(journal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not result.accounts:
        click.echo("No postings found.")
        return

    for account in result.accounts:
        click.echo(f"\n{account.code} {account.name} ({account.account_type.value})")
        click.echo("-" * 96)
        for entry in account.entries:
            click.echo(
                f"{entry.date} {entry.reference:12s} {entry.description[:20]:20s}"
                f"{_money(entry.debit):>{AMOUNT_WIDTH}}{_money(entry.credit):>{AMOUNT_WIDTH}}"
            )
        click.echo(_row("Total", account.debit, account.credit))


def _echo_trial_balance(trial_balance) -> None:
    state = "closed" if trial_balance.is_closed else "open"
    click.echo(f"\nTrial balance as of {trial_balance.date} ({state})")
    click.echo("-" * 68)
    click.echo(f"{'Account':40s}{'Debit':>{AMOUNT_WIDTH}}{'Credit':>{AMOUNT_WIDTH}}")
    for entry in trial_balance.entries:
        click.echo(_row(f"{entry.account_id} {entry.account_name}", entry.debit, entry.credit))
    click.echo("-" * 68)
    click.echo(_row("Total", trial_balance.total_debit, trial_balance.total_credit))
    if not trial_balance.is_balanced:
        click.echo(f"Out of balance by {_money(trial_balance.balance)}")


@click.command("trial-balance")
@click.argument("journal", metavar="JOURNAL")
@click.option("--as-of", help="Cutoff date, inclusive (defaults to today)")
@click.option("--close", "closing_account", metavar="CODE", help="Close income and expense into this equity account")
@click.pass_context
def trial_balance(ctx, journal: str, as_of: str | None, closing_account: str | None):
    """Show the trial balance of a journal.

    JOURNAL can be a journal name or ID.

    Examples:
        doublebook trial-balance General --as-of 2024-12-31
        doublebook trial-balance General --as-of "end of last year" --close 3100
    """
    db = ctx.obj["db"]
    journal_id = resolve_journal_or_exit(ctx, JournalService(db), journal)
    cutoff = parse_cli_date(ctx, as_of, "as-of date", default=date.today())

    service = ReportService(db)
    try:
        if closing_account is None:
            result = service.trial_balance(journal_id, cutoff)
        else:
            result = service.closed_trial_balance(journal_id, cutoff, closing_account)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _echo_trial_balance(result)


@click.command("balance-sheet")
@click.argument("journal", metavar="JOURNAL")
@click.option("--closing-account", required=True, metavar="CODE", help="Equity account receiving net income")
@click.option("--as-of", help="Balance sheet date, inclusive (defaults to today)")
@click.pass_context
def balance_sheet(ctx, journal: str, closing_account: str, as_of: str | None):
    """Show the balance sheet of a journal.

    Income and expense are closed into the closing account before the
    balance sheet is drawn up.

    Examples:
        doublebook balance-sheet General --closing-account 3100 --as-of 2024-12-31
    """
    db = ctx.obj["db"]
    journal_id = resolve_journal_or_exit(ctx, JournalService(db), journal)
    cutoff = parse_cli_date(ctx, as_of, "as-of date", default=date.today())

    try:
        result = ReportService(db).balance_sheet(journal_id, cutoff, closing_account)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nBalance sheet as of {result.date}")
    sections = (
        (AccountType.ASSET, "Assets", result.total_assets),
        (AccountType.LIABILITY, "Liabilities", result.total_liabilities),
        (AccountType.EQUITY, "Equity", result.total_equity),
    )
    for account_type, title, total in sections:
        click.echo(f"\n{title}")
        click.echo("-" * 54)
        for entry in result.entries:
            if entry.account_type == account_type:
                click.echo(_row(f"  {entry.account_id} {entry.account_name}", entry.balance))
        click.echo(_row(f"Total {title.lower()}", total))

    click.echo("")
    click.echo(_row("Liabilities and equity", result.total_liabilities + result.total_equity))
    if not result.is_balanced:
        click.echo(f"Out of balance by {_money(result.balance_amount)}")


@click.command("pnl")
@click.argument("journal", metavar="JOURNAL")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'start of this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--this-month", is_flag=True, help="Current month to date")
@click.option("--this-quarter", is_flag=True, help="Current quarter to date")
@click.option("--this-year", is_flag=True, help="Current year to date")
@click.option("--last-month", is_flag=True, help="Previous month")
@click.option("--last-quarter", is_flag=True, help="Previous quarter")
@click.option("--last-year", is_flag=True, help="Previous year")
@click.pass_context
def profit_and_loss(
    ctx,
    journal: str,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_quarter: bool,
    this_year: bool,
    last_month: bool,
    last_quarter: bool,
    last_year: bool,
):
    """Show the profit and loss statement of a journal.

    JOURNAL can be a journal name or ID. Without any date option the
    current year to date is reported. A missing start date defaults to
    the start of the end date's year, a missing end date to today.

    Examples:
        doublebook pnl General --last-year
        doublebook pnl General --start-date 2024-01-01 --end-date 2024-06-30
    """
    db = ctx.obj["db"]
    journal_id = resolve_journal_or_exit(ctx, JournalService(db), journal)

    today = date.today()
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-quarter": this_quarter,
            "this-year": this_year,
            "last-month": last_month,
            "last-quarter": last_quarter,
            "last-year": last_year,
        },
        default_range=(today.replace(month=1, day=1), today),
    )
    if end is None:
        end = today
    if start is None:
        start = end.replace(month=1, day=1)

    try:
        result = ReportService(db).profit_and_loss(journal_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nProfit and loss from {result.start_date} to {result.end_date}")
    sections = (
        (AccountType.INCOME, "Revenue", result.total_revenue),
        (AccountType.EXPENSE, "Expenses", result.total_expense),
    )
    for account_type, title, total in sections:
        click.echo(f"\n{title}")
        click.echo("-" * 54)
        totals: dict[tuple[str, str], Decimal] = {}
        for entry in result.entries:
            if entry.account_type == account_type:
                key = (entry.account_id, entry.account_name)
                totals[key] = totals.get(key, ZERO) + entry.amount
        for (code, name), amount in totals.items():
            click.echo(_row(f"  {code} {name}", amount))
        click.echo(_row(f"Total {title.lower()}", total))

    click.echo("")
    click.echo(_row("Net profit", result.net_profit))


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(ledger, name="ledger")
    cli.add_command(trial_balance, name="trial-balance")
    cli.add_command(balance_sheet, name="balance-sheet")
    cli.add_command(profit_and_loss, name="pnl")
