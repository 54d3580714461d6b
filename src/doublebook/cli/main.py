"""Main CLI entry point."""

import logging

import click
from doublebook.database.factories import create_sqlite_database

# Import and register all commands at module level
from doublebook.cli.commands import account, journal, reports

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides DOUBLEBOOK_DB_PATH environment variable)",
    envvar="DOUBLEBOOK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level (overrides DOUBLEBOOK_LOG_LEVEL environment variable)",
    envvar="DOUBLEBOOK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Doublebook - Double-entry bookkeeping.

    Register a chart of accounts, post balanced entries to journals, and
    derive ledgers, trial balances, balance sheets and profit and loss
    statements from them.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
journal.register_commands(cli)
reports.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
