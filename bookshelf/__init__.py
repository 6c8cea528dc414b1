"""Bookshelf client: session, book search and personal library state for the books API."""

__version__ = "1.0.0"
