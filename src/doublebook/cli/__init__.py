"""Command line interface for doublebook."""
