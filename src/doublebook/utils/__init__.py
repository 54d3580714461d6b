"""Utility functions for doublebook."""

from doublebook.utils.date_parser import parse_date, get_date_range
from doublebook.utils.amount_parser import parse_amount, parse_posting
from doublebook.utils.journal_resolver import resolve_journal

__all__ = ["parse_date", "get_date_range", "parse_amount", "parse_posting", "resolve_journal"]
