"""Utility for resolving journal names to IDs."""

from uuid import UUID

from doublebook.domain import errors
from doublebook.domain.errors import NotFoundError
from doublebook.domain.journal import JournalService


def resolve_journal(journal_service: JournalService, journal: str | UUID) -> UUID:
    """Resolve journal name or ID to journal ID.

    Args:
        journal_service: JournalService instance
        journal: Journal name, or ID (UUID or its string form)

    Returns:
        Journal ID

    Raises:
        NotFoundError: If journal is not found
    """
    if isinstance(journal, UUID):
        return journal_service.require_journal(journal).id

    # Names take precedence, so a journal may be named like a UUID
    by_name = journal_service.get_journal_by_name(journal)
    if by_name is not None:
        return by_name.id

    try:
        journal_id = UUID(journal)
    except ValueError:
        raise NotFoundError(errors.journal_not_found(journal))

    found = journal_service.get_journal(journal_id)
    if found is None:
        raise NotFoundError(errors.journal_not_found(journal))
    return found.id
