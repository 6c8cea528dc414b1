"""Book management module."""

from bookshelf.core.books.library import LibraryClient

__all__ = ["LibraryClient"]
