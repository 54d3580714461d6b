"""Chart of accounts commands."""

import click

from doublebook.cli.error_handling import handle_domain_error
from doublebook.domain.account import AccountService
from doublebook.domain.entities import AccountType, Side
from doublebook.domain.errors import DomainError

ACCOUNT_TYPES = [member.value for member in AccountType]
SIDES = [member.value for member in Side]


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    required=True,
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Account type",
)
@click.option("--description", help="Account description (defaults to the account name)")
@click.option("--parent", "parent_code", help="Code of the parent account")
@click.option(
    "--normally",
    type=click.Choice(SIDES, case_sensitive=False),
    help="Normal balance side (defaults to the side implied by the type)",
)
@click.pass_context
def create_account(
    ctx,
    code: str,
    name: str,
    account_type: str,
    description: str | None,
    parent_code: str | None,
    normally: str | None,
):
    """Register a new account.

    Examples:
        doublebook account create 1000 Cash --type Asset
        doublebook account create 3100 "Retained Earnings" --type Equity
        doublebook account create 1010 "Petty Cash" --type Asset --parent 1000
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        account = service.register_account(
            code=code,
            name=name,
            description=description if description is not None else name,
            account_type=account_type,
            parent_code=parent_code,
            normally=normally,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Created account {account.code} '{account.name}' "
        f"({account.account_type.value}, normally {account.normally.value})"
    )


@account_group.command("list")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Only list accounts of this type",
)
@click.pass_context
def list_accounts(ctx, account_type: str | None):
    """List the chart of accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    if account_type is None:
        accounts = service.list_accounts()
    else:
        accounts = service.get_accounts_by_type(account_type)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        parent = f" | Parent: {acc.parent_code}" if acc.parent_code else ""
        click.echo(
            f"{acc.code:8s} | {acc.name:24s} | {acc.account_type.value:9s} | "
            f"{acc.normally.value:6s}{parent}"
        )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
