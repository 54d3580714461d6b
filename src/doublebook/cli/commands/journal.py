"""Journal commands."""

from datetime import date
from uuid import uuid4

import click

from doublebook.cli.date_filters import parse_cli_date
from doublebook.cli.error_handling import handle_domain_error
from doublebook.cli.journal_resolution import resolve_journal_or_exit
from doublebook.domain.entities import Side
from doublebook.domain.errors import DomainError
from doublebook.domain.journal import JournalService
from doublebook.utils.amount_parser import parse_posting


@click.group()
def journal_group():
    """Manage journals and post entries."""
    pass


@journal_group.command("create")
@click.argument("name", metavar="JOURNAL_NAME")
@click.option("--description", help="Journal description (defaults to the journal name)")
@click.pass_context
def create_journal(ctx, name: str, description: str | None):
    """Create a new, empty journal.

    Examples:
        doublebook journal create "General"
        doublebook journal create "FY2024" --description "Fiscal year 2024"
    """
    db = ctx.obj["db"]
    service = JournalService(db)

    try:
        journal = service.create_journal(
            name=name, description=description if description is not None else name
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created journal '{journal.name}' (ID: {journal.id})")


@journal_group.command("list")
@click.pass_context
def list_journals(ctx):
    """List all journals."""
    db = ctx.obj["db"]
    service = JournalService(db)

    journals = service.list_journals()
    if not journals:
        click.echo("No journals found.")
        return

    click.echo("\nJournals:")
    click.echo("-" * 72)
    for jrn in journals:
        click.echo(f"{jrn.name:20s} | {len(jrn.entries):5d} entries | ID: {jrn.id}")


@journal_group.command("show")
@click.argument("journal", metavar="JOURNAL")
@click.pass_context
def show_journal(ctx, journal: str):
    """Show all entries of a journal, in posting order.

    JOURNAL can be a journal name or ID.
    """
    db = ctx.obj["db"]
    service = JournalService(db)
    journal_id = resolve_journal_or_exit(ctx, service, journal)
    jrn = service.require_journal(journal_id)

    click.echo(f"\nJournal: {jrn.name} - {jrn.description}")
    if not jrn.entries:
        click.echo("No entries posted.")
        return

    for entry in jrn.entries:
        click.echo("-" * 72)
        click.echo(f"{entry.date} | {entry.entry_id} | {entry.reference} | {entry.description}")
        for line in entry.lines:
            debit = f"{line.debit:,.2f}" if line.debit else ""
            credit = f"{line.credit:,.2f}" if line.credit else ""
            click.echo(f"    {line.account_id:10s} {debit:>14s} {credit:>14s}")


@journal_group.command("post")
@click.argument("journal", metavar="JOURNAL")
@click.option("--date", "date_str", required=True, help="Entry date (YYYY-MM-DD or relative like 'today')")
@click.option("--reference", required=True, help="Source document reference (e.g. invoice number)")
@click.option("--description", required=True, help="Entry description")
@click.option("--entry-id", help="Entry ID, unique within the journal (generated if omitted)")
@click.option("--debit", "debits", multiple=True, metavar="CODE=AMOUNT", help="Debit posting (repeatable)")
@click.option("--credit", "credits", multiple=True, metavar="CODE=AMOUNT", help="Credit posting (repeatable)")
@click.pass_context
def post_entry(
    ctx,
    journal: str,
    date_str: str,
    reference: str,
    description: str,
    entry_id: str | None,
    debits: tuple[str, ...],
    credits: tuple[str, ...],
):
    """Post a balanced entry to a journal.

    JOURNAL can be a journal name or ID. Debit and credit totals must match.

    Examples:
        doublebook journal post General --date 2024-01-15 --reference INV-001 \\
            --description "Sale" --debit 1000=1000 --credit 4000=1000
    """
    db = ctx.obj["db"]
    service = JournalService(db)
    journal_id = resolve_journal_or_exit(ctx, service, journal)
    entry_date: date = parse_cli_date(ctx, date_str, "date")

    if not debits or not credits:
        click.echo("Error: At least one --debit and one --credit posting are required.", err=True)
        ctx.exit(1)

    postings = [(Side.DEBIT, p) for p in debits] + [(Side.CREDIT, p) for p in credits]
    try:
        lines = []
        for side, posting in postings:
            code, amount = parse_posting(posting)
            lines.append(service.make_line(code, side, amount, description))
        entry = service.post_entry(
            journal_id=journal_id,
            entry_id=entry_id or str(uuid4()),
            description=description,
            date=entry_date,
            reference=reference,
            lines=lines,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Posted entry '{entry.entry_id}' ({entry.total_debit:,.2f}) on {entry.date}"
    )


def register_commands(cli):
    """Register journal commands with main CLI."""
    cli.add_command(journal_group, name="journal")
