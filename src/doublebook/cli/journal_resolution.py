"""CLI helpers for journal resolution and error handling."""

from __future__ import annotations

from uuid import UUID

import click

from doublebook.cli.error_handling import handle_domain_error
from doublebook.domain.errors import DomainError
from doublebook.domain.journal import JournalService
from doublebook.utils.journal_resolver import resolve_journal


def resolve_journal_or_exit(
    ctx: click.Context, journal_service: JournalService, journal: str
) -> UUID:
    """Resolve journal name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_journal(journal_service, journal)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
