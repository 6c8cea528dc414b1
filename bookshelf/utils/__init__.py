"""Shared utilities."""

from bookshelf.utils.logging import setup_logging

__all__ = ["setup_logging"]
